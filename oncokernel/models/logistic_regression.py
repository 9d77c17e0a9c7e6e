"""Logistic regression trained by full-batch gradient descent."""

from typing import Any, List, Optional

import numpy as np
from loguru import logger

from ..data.validation import as_feature_matrix, check_training_data
from ..exceptions import InvalidInputError
from .base import (
    BaseModel,
    EarlyStopping,
    ModelFactory,
    coerce_float,
    coerce_int,
    require_positive,
    require_positive_int,
)

SIGMOID_CLIP = 500.0
LOG_EPSILON = 1e-15
LOSS_LOG_INTERVAL = 100


def sigmoid(z: Any) -> Any:
    """Logistic function with ``z`` clipped to [-500, 500] against overflow."""
    z = np.clip(z, -SIGMOID_CLIP, SIGMOID_CLIP)
    return 1.0 / (1.0 + np.exp(-z))


def log_loss(y: np.ndarray, probabilities: np.ndarray) -> float:
    """Mean binary cross-entropy with 1e-15 added inside each logarithm."""
    return float(-np.mean(
        y * np.log(probabilities + LOG_EPSILON)
        + (1.0 - y) * np.log(1.0 - probabilities + LOG_EPSILON)
    ))


class LogisticRegression(BaseModel):
    """
    Binary logistic regression.

    By default exactly ``max_iterations`` gradient steps are taken. Setting
    ``tolerance`` stops training once the log-loss improves by no more than
    ``tolerance`` for ``patience`` consecutive iterations.
    """

    supports_probability = True

    PARAMS = {
        'learning_rate': coerce_float,
        'max_iterations': coerce_int,
        'tolerance': coerce_float,
        'patience': coerce_int,
    }

    def __init__(self, learning_rate: float = 0.01, max_iterations: int = 1000,
                 tolerance: Optional[float] = None, patience: int = 1):
        super().__init__()
        self.learning_rate = require_positive(learning_rate, 'learning_rate')
        self.max_iterations = require_positive_int(max_iterations, 'max_iterations')
        if tolerance is not None:
            tolerance = coerce_float(tolerance, 'tolerance')
            if tolerance < 0:
                raise InvalidInputError(f"tolerance must be non-negative, got {tolerance}")
        self.tolerance = tolerance
        self.patience = require_positive_int(patience, 'patience')
        self._clear_state()

    def set_learning_rate(self, rate: float) -> None:
        self.learning_rate = require_positive(rate, 'learning_rate')

    def set_max_iterations(self, iterations: int) -> None:
        self.max_iterations = require_positive_int(iterations, 'max_iterations')

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    @property
    def bias(self) -> float:
        return self._bias

    @property
    def loss_history(self) -> List[float]:
        """Log-loss every 100 iterations of the last ``fit``, or every iteration with early stopping."""
        return list(self._loss_history)

    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        n_samples, n_features = X.shape
        self._weights = np.zeros(n_features)
        self._bias = 0.0
        self._loss_history = []
        targets = y.astype(np.float64)

        stopper = None
        if self.tolerance is not None:
            stopper = EarlyStopping(patience=self.patience, min_delta=self.tolerance, mode='min')

        iteration = 0
        for iteration in range(1, self.max_iterations + 1):
            error = sigmoid(self._linear(X)) - targets
            self._weights -= self.learning_rate * (X.T @ error) / n_samples
            self._bias -= self.learning_rate * float(np.mean(error))

            if stopper is None and iteration % LOSS_LOG_INTERVAL != 0:
                continue

            loss = log_loss(targets, sigmoid(self._linear(X)))
            self._loss_history.append(loss)
            if iteration % LOSS_LOG_INTERVAL == 0:
                logger.debug(f"{self.model_name} iteration {iteration}: loss {loss:.6f}")

            if stopper is not None and stopper(loss, iteration):
                logger.info(
                    f"{self.model_name} stopped early at iteration {iteration} "
                    f"(best loss {stopper.best_value:.6f} at {stopper.best_iteration})"
                )
                break

        self.n_iterations = iteration

    def _linear(self, X: np.ndarray) -> Any:
        """``bias + X @ weights`` for a matrix or a single sample."""
        return self._bias + X @ self._weights

    def _predict_probability_sample(self, x: np.ndarray) -> float:
        return float(sigmoid(self._linear(x)))

    def _predict_sample(self, x: np.ndarray) -> int:
        return 1 if self._predict_probability_sample(x) >= 0.5 else 0

    def predict_probability(self, X: Any) -> np.ndarray:
        self._check_trained()
        X = as_feature_matrix(X, self.n_features)
        return sigmoid(self._linear(X))

    def predict(self, X: Any) -> np.ndarray:
        return (self.predict_probability(X) >= 0.5).astype(np.int64)

    def loss(self, X: Any, y: Any) -> float:
        """Log-loss of the trained model on (X, y)."""
        self._check_trained()
        X, y = check_training_data(X, y)
        X = as_feature_matrix(X, self.n_features)
        return log_loss(y.astype(np.float64), sigmoid(self._linear(X)))

    def _clear_state(self) -> None:
        self._weights = np.zeros(0)
        self._bias = 0.0
        self._loss_history: List[float] = []
        self.n_iterations = 0


ModelFactory.register_model('logistic_regression', LogisticRegression)
