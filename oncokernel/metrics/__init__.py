"""Evaluation metrics."""

from .evaluation import ConfusionMatrix, EvaluationMetrics, EvaluationReport

__all__ = ['ConfusionMatrix', 'EvaluationMetrics', 'EvaluationReport']
