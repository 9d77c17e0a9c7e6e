"""Binary classification kernel for mutation-score based cancer risk."""

from .data import Preprocessor
from .exceptions import (
    AlreadyTrainedError,
    InvalidInputError,
    NotFittedError,
    NotTrainedError,
    OncoKernelError,
)
from .metrics import ConfusionMatrix, EvaluationMetrics, EvaluationReport
from .models import KNN, DecisionTree, LogisticRegression, ModelFactory, NaiveBayes
from .pipeline import ModelSuite
from .utils import Config, ModelAnalyzer

__version__ = '1.0.0'

__all__ = [
    'Preprocessor',
    'DecisionTree',
    'LogisticRegression',
    'KNN',
    'NaiveBayes',
    'ModelFactory',
    'ConfusionMatrix',
    'EvaluationMetrics',
    'EvaluationReport',
    'ModelSuite',
    'Config',
    'ModelAnalyzer',
    'OncoKernelError',
    'InvalidInputError',
    'NotTrainedError',
    'NotFittedError',
    'AlreadyTrainedError',
]
