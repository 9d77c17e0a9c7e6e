"""Utility modules for the kernel."""

from .config import Config, DEFAULT_CONFIG
from .model_analysis import ModelAnalyzer

__all__ = ['Config', 'DEFAULT_CONFIG', 'ModelAnalyzer']
