"""Models module.

Importing this package registers every classifier with ``ModelFactory``:
- decision_tree: Gini-split binary decision tree
- logistic_regression: gradient-descent logistic regression
- knn: k-nearest-neighbours
- naive_bayes: Gaussian naive Bayes
"""

# Base classes and factories
from .base import (
    BaseModel,
    ModelFactory,
    EarlyStopping,
    coerce_int,
    coerce_float,
)

# Classifiers
from .decision_tree import DecisionTree, Leaf, Split, gini_impurity
from .logistic_regression import LogisticRegression, sigmoid
from .knn import KNN, euclidean_distance
from .naive_bayes import NaiveBayes, gaussian_pdf

# Public API
__all__ = [
    # Base classes
    'BaseModel',
    'ModelFactory',

    # Utilities
    'EarlyStopping',
    'coerce_int',
    'coerce_float',

    # Classifiers
    'DecisionTree',
    'Leaf',
    'Split',
    'gini_impurity',
    'LogisticRegression',
    'sigmoid',
    'KNN',
    'euclidean_distance',
    'NaiveBayes',
    'gaussian_pdf',
]
