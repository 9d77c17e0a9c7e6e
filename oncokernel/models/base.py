"""Base model interface and factory classes.

This module provides the foundation for all classifiers in the kernel.
It includes the abstract base class with its training state machine, the
factory used to create models by name, and helpers for converting
configuration values.

Key Components:
    - BaseModel: Abstract base class for all classifiers
    - ModelFactory: Factory for model creation and registration
    - EarlyStopping: Plateau detection for iterative optimizers
"""

import numbers
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

import numpy as np
from loguru import logger

from ..data.validation import as_feature_matrix, as_sample, check_training_data
from ..exceptions import AlreadyTrainedError, InvalidInputError, NotTrainedError


def coerce_int(value: Any, name: str = 'value') -> int:
    """
    Convert a configuration value to an integer.

    Handles strings with scientific notation ("1e3") and integral floats.

    Args:
        value: Value to convert
        name: Parameter name used in the error message

    Returns:
        Converted integer value

    Raises:
        InvalidInputError: If the value is missing or not integral
    """
    try:
        number = float(str(value))
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be an integer, got {value!r}") from exc
    if not number.is_integer():
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    return int(number)


def coerce_float(value: Any, name: str = 'value') -> float:
    """
    Convert a configuration value to a float.

    Args:
        value: Value to convert
        name: Parameter name used in the error message

    Returns:
        Converted float value

    Raises:
        InvalidInputError: If the value is missing or not numeric
    """
    try:
        return float(str(value))
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from exc


def require_positive(value: Any, name: str) -> Any:
    """Return ``value`` unchanged if it is a number > 0."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or value <= 0:
        raise InvalidInputError(f"{name} must be positive, got {value!r}")
    return value


def require_positive_int(value: Any, name: str) -> int:
    """Return ``value`` as an int if it is an integer > 0."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    return int(require_positive(value, name))


def majority_class(labels: np.ndarray) -> int:
    """
    Most frequent label.

    Count ties resolve to the smallest label: classes are visited in
    ascending order and only a strictly larger count replaces the leader.
    """
    if labels.size == 0:
        return 0
    classes, counts = np.unique(labels, return_counts=True)
    return int(classes[np.argmax(counts)])


class BaseModel(ABC):
    """
    Abstract base class for all binary classifiers.

    Every model is a two-state machine. ``fit`` is the only transition from
    Untrained to Trained; calling it again on a trained model raises
    ``AlreadyTrainedError`` until ``reset`` returns the model to Untrained.

    Subclasses implement ``_fit``, ``_predict_sample`` and ``_clear_state``;
    probabilistic models also set ``supports_probability`` and implement
    ``_predict_probability_sample``.

    Attributes:
        fitted: Whether the model has been trained
        n_features: Feature count fixed by the last ``fit``
        model_name: Name of the model class
    """

    supports_probability = False

    # Hyperparameter name -> converter used by ``from_config``
    PARAMS: Dict[str, Callable[[Any, str], Any]] = {}

    def __init__(self):
        self.fitted = False
        self.n_features: Optional[int] = None
        self.model_name = self.__class__.__name__

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, **kwargs) -> 'BaseModel':
        """
        Create a model from a configuration mapping.

        Keys the model does not accept are ignored with a warning.

        Args:
            config: Hyperparameters, typically loaded from YAML
            **kwargs: Additional values merged over ``config``
        """
        full_config = {**(config or {}), **kwargs}
        params = {}
        for key, value in full_config.items():
            if key not in cls.PARAMS:
                logger.warning(f"{cls.__name__} ignores unknown parameter '{key}'")
                continue
            params[key] = None if value is None else cls.PARAMS[key](value, key)
        return cls(**params)

    @property
    def config(self) -> Dict[str, Any]:
        return self.get_params()

    def get_params(self) -> Dict[str, Any]:
        """Current hyperparameters."""
        return {name: getattr(self, name) for name in self.PARAMS}

    def fit(self, X: Any, y: Any) -> 'BaseModel':
        """
        Train the model.

        Args:
            X: Training features of shape (n_samples, n_features)
            y: Binary training labels of shape (n_samples,)

        Returns:
            The trained model

        Raises:
            AlreadyTrainedError: If the model is already trained
            InvalidInputError: If the data is empty, ragged or misaligned
        """
        if self.fitted:
            raise AlreadyTrainedError(
                f"{self.model_name} is already trained. Call reset() before refitting."
            )
        X, y = check_training_data(X, y)
        self._fit(X, y)
        self.n_features = X.shape[1]
        self.fitted = True
        logger.info(f"{self.model_name} trained on {X.shape[0]} samples, {X.shape[1]} features")
        return self

    def reset(self) -> None:
        """Discard learned state and return to Untrained."""
        self._clear_state()
        self.fitted = False
        self.n_features = None

    def _check_trained(self) -> None:
        if not self.fitted:
            raise NotTrainedError(f"{self.model_name} not trained. Call fit() first.")

    def predict(self, X: Any) -> np.ndarray:
        """
        Predict binary labels.

        Args:
            X: Features of shape (n_samples, n_features)

        Returns:
            Predicted labels of shape (n_samples,)
        """
        self._check_trained()
        X = as_feature_matrix(X, self.n_features)
        return np.array([self._predict_sample(row) for row in X], dtype=np.int64)

    def predict_single(self, x: Any) -> int:
        """Predict the label of one feature vector."""
        self._check_trained()
        return int(self._predict_sample(as_sample(x, self.n_features)))

    def predict_probability(self, X: Any) -> Optional[np.ndarray]:
        """
        Predict the probability of class 1 if supported by the model.

        Args:
            X: Features of shape (n_samples, n_features)

        Returns:
            Risk scores of shape (n_samples,), or None for models without
            probability output
        """
        if not self.supports_probability:
            return None
        self._check_trained()
        X = as_feature_matrix(X, self.n_features)
        return np.array([self._predict_probability_sample(row) for row in X], dtype=np.float64)

    def predict_probability_single(self, x: Any) -> Optional[float]:
        """Probability of class 1 for one feature vector, or None if unsupported."""
        if not self.supports_probability:
            return None
        self._check_trained()
        return float(self._predict_probability_sample(as_sample(x, self.n_features)))

    @abstractmethod
    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        """Learn from validated, copied training data."""

    @abstractmethod
    def _predict_sample(self, x: np.ndarray) -> int:
        """Label of one validated sample."""

    def _predict_probability_sample(self, x: np.ndarray) -> float:
        raise NotImplementedError(f"{self.model_name} does not predict probabilities")

    @abstractmethod
    def _clear_state(self) -> None:
        """Drop everything learned by ``_fit``."""


# ============================================================================
# FACTORY CLASSES
# ============================================================================

class ModelFactory:
    """
    Factory class for creating and managing model instances.

    Models register themselves under a name at import time and are then
    created by name from configuration mappings.
    """

    _models: Dict[str, type] = {}

    @classmethod
    def register_model(cls, name: str, model_class: type) -> None:
        """
        Register a model class with the factory.

        Args:
            name: Name to register the model under
            model_class: Class inheriting from BaseModel
        """
        cls._models[name] = model_class

    @classmethod
    def create_model(cls, name: str, config: Optional[Dict[str, Any]] = None, **kwargs) -> BaseModel:
        """
        Create a model instance by name.

        Args:
            name: Registered name of the model
            config: Configuration dictionary for the model
            **kwargs: Additional keyword arguments merged into config

        Returns:
            Untrained model

        Raises:
            InvalidInputError: If the model name is not registered
        """
        resolved = cls.resolve_model_name(name)
        if resolved is None:
            raise InvalidInputError(f"Unknown model: {name}. Registered: {cls.list_models()}")
        return cls._models[resolved].from_config(config, **kwargs)

    @classmethod
    def list_models(cls) -> List[str]:
        """Registered model names in registration order."""
        return list(cls._models.keys())

    @classmethod
    def resolve_model_name(cls, model_name: str) -> Optional[str]:
        """
        Resolve model name to registered name.

        Accepts exact names, case-insensitively, and dash/space separated
        variants ("Decision Tree", "decision-tree").

        Returns:
            Registered model name or None if no match found
        """
        if model_name in cls._models:
            return model_name

        normalized = str(model_name).strip().lower().replace('-', '_').replace(' ', '_')
        if normalized in cls._models:
            return normalized

        return None


class EarlyStopping:
    """
    Stops an iterative optimizer once a monitored value stops improving.

    Attributes:
        patience: Checks without improvement before stopping
        min_delta: Minimum change to consider as improvement
        mode: 'min' for loss-like values, 'max' for score-like values
    """

    def __init__(self, patience: int = 1, min_delta: float = 0.0, mode: str = 'min'):
        if mode not in ('min', 'max'):
            raise InvalidInputError(f"mode must be 'min' or 'max', got {mode!r}")
        self.patience = require_positive_int(patience, 'patience')
        self.min_delta = min_delta
        self.mode = mode

        self.counter = 0
        self.best_value: Optional[float] = None
        self.best_iteration: Optional[int] = None

    def __call__(self, value: float, iteration: int) -> bool:
        """
        Record a new value.

        Returns:
            True if the optimizer should stop
        """
        if self.best_value is None:
            self._update_best(value, iteration)
            return False

        improved = (self.best_value - value > self.min_delta if self.mode == 'min'
                    else value - self.best_value > self.min_delta)

        if improved:
            self.counter = 0
            self._update_best(value, iteration)
            return False

        self.counter += 1
        return self.counter >= self.patience

    def _update_best(self, value: float, iteration: int) -> None:
        self.best_value = value
        self.best_iteration = iteration
