"""Gaussian naive Bayes classifier."""

import math
from typing import Any, Dict, List

import numpy as np
from loguru import logger

from ..data.validation import as_sample
from ..exceptions import InvalidInputError
from .base import BaseModel, ModelFactory

SMOOTHING = 1e-10
MIN_STD = 1e-10


def gaussian_pdf(x: Any, mean: Any, std: Any) -> Any:
    """Normal density of ``x`` given ``mean`` and ``std`` (element-wise)."""
    exponent = -0.5 * ((x - mean) / std) ** 2
    return np.exp(exponent) / (std * math.sqrt(2.0 * math.pi))


class NaiveBayes(BaseModel):
    """
    Gaussian naive Bayes.

    Each feature is modelled as normally distributed within each class and
    class scores are accumulated in log space. Classes are kept in ascending
    label order, which decides ties between equal scores.
    """

    supports_probability = True

    def __init__(self):
        super().__init__()
        self._clear_state()

    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        self._classes = [int(c) for c in np.unique(y)]
        n_samples, n_features = X.shape

        for cls in self._classes:
            members = X[y == cls]
            count = members.shape[0]
            self._class_prior[cls] = count / n_samples
            self._class_mean[cls] = members.mean(axis=0)

            std = np.ones(n_features)
            if count > 1:
                std = members.std(axis=0, ddof=1)
                degenerate = std < MIN_STD
                if degenerate.any():
                    logger.warning(
                        f"{self.model_name}: class {cls} has zero variance in "
                        f"{int(degenerate.sum())} feature(s), using std 1.0"
                    )
                std[degenerate] = 1.0
            self._class_std[cls] = std

        if 1 not in self._class_prior:
            logger.warning(f"{self.model_name}: class 1 never observed, probability output is 0.0")

        logger.debug(f"{self.model_name} priors: {self._class_prior}")

    def calculate_class_probability(self, x: Any, cls: int) -> float:
        """
        Log-score of ``x`` under class ``cls``.

        ``log(prior + 1e-10) + sum(log(pdf(x_i) + 1e-10))``
        """
        self._check_trained()
        if cls not in self._class_prior:
            raise InvalidInputError(f"Class {cls} was not observed during training")
        return self._log_score(as_sample(x, self.n_features), cls)

    def _log_score(self, x: np.ndarray, cls: int) -> float:
        densities = gaussian_pdf(x, self._class_mean[cls], self._class_std[cls])
        return math.log(self._class_prior[cls] + SMOOTHING) + float(np.sum(np.log(densities + SMOOTHING)))

    def _predict_sample(self, x: np.ndarray) -> int:
        best_class = self._classes[0]
        best_score = self._log_score(x, best_class)
        for cls in self._classes[1:]:
            score = self._log_score(x, cls)
            if score > best_score:
                best_score = score
                best_class = cls
        return best_class

    def _class_probabilities(self, x: np.ndarray) -> Dict[int, float]:
        scores = np.array([self._log_score(x, cls) for cls in self._classes])
        weights = np.exp(scores - scores.max())
        weights /= weights.sum()
        return {cls: float(w) for cls, w in zip(self._classes, weights)}

    def _predict_probability_sample(self, x: np.ndarray) -> float:
        return self._class_probabilities(x).get(1, 0.0)

    def predict_class_probabilities(self, x: Any) -> Dict[int, float]:
        """Softmax-normalized probability of every observed class."""
        self._check_trained()
        return self._class_probabilities(as_sample(x, self.n_features))

    @property
    def classes(self) -> List[int]:
        return list(self._classes)

    @property
    def class_prior(self) -> Dict[int, float]:
        return dict(self._class_prior)

    @property
    def class_mean(self) -> Dict[int, np.ndarray]:
        return {cls: mean.copy() for cls, mean in self._class_mean.items()}

    @property
    def class_std(self) -> Dict[int, np.ndarray]:
        return {cls: std.copy() for cls, std in self._class_std.items()}

    def _clear_state(self) -> None:
        self._classes: List[int] = []
        self._class_prior: Dict[int, float] = {}
        self._class_mean: Dict[int, np.ndarray] = {}
        self._class_std: Dict[int, np.ndarray] = {}


ModelFactory.register_model('naive_bayes', NaiveBayes)
