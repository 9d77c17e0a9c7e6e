"""Data handling module."""

from .preprocessor import Preprocessor

__all__ = ["Preprocessor"]
