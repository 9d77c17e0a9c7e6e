"""K-nearest-neighbours classifier under Euclidean distance."""

from typing import Any, Tuple

import numpy as np

from ..data.validation import as_sample
from ..exceptions import InvalidInputError
from .base import BaseModel, ModelFactory, coerce_int, majority_class, require_positive_int


def euclidean_distance(a: Any, b: Any) -> float:
    """``sqrt(sum((a_i - b_i) ** 2))`` of two equal-length vectors."""
    a = as_sample(a)
    b = as_sample(b)
    if a.shape != b.shape:
        raise InvalidInputError(
            f"Feature vectors must have the same size ({a.shape[0]} != {b.shape[0]})"
        )
    return float(np.sqrt(np.sum((a - b) ** 2)))


class KNN(BaseModel):
    """
    Lazy learner voting among the ``k`` closest stored samples.

    Every query scans the full training set. Equal distances keep training
    order, and vote ties resolve to the smaller label.
    """

    supports_probability = True

    PARAMS = {'k': coerce_int}

    def __init__(self, k: int = 5):
        super().__init__()
        self.k = require_positive_int(k, 'k')
        self._clear_state()

    def set_k(self, k: int) -> None:
        self.k = require_positive_int(k, 'k')

    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        self._X_train = X
        self._y_train = y

    @property
    def n_train(self) -> int:
        """Number of stored training samples."""
        return self._y_train.size

    def _neighbours(self, x: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        distances = np.sqrt(np.sum((self._X_train - x) ** 2, axis=1))
        order = np.argsort(distances, kind='stable')[:min(self.k, distances.size)]
        return distances[order], self._y_train[order]

    def kneighbors(self, x: Any) -> Tuple[np.ndarray, np.ndarray]:
        """
        Distances and labels of the nearest stored samples.

        Returns:
            (distances, labels), each of length ``min(k, n_train)``, nearest first
        """
        self._check_trained()
        distances, labels = self._neighbours(as_sample(x, self.n_features))
        return distances.copy(), labels.copy()

    def _predict_sample(self, x: np.ndarray) -> int:
        _, labels = self._neighbours(x)
        return majority_class(labels)

    def _predict_probability_sample(self, x: np.ndarray) -> float:
        _, labels = self._neighbours(x)
        return float(np.count_nonzero(labels == 1) / labels.size)

    def _clear_state(self) -> None:
        self._X_train = np.empty((0, 0))
        self._y_train = np.empty(0, dtype=np.int64)


ModelFactory.register_model('knn', KNN)
