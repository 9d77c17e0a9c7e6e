"""
Feature Preprocessor
====================

Scalar statistics and rescaling for a single numeric feature.

"""

from typing import Any, Dict

import numpy as np
from loguru import logger

from ..exceptions import InvalidInputError, NotFittedError


def _as_values(data: Any) -> np.ndarray:
    try:
        values = np.array(data, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Data must be a numeric sequence: {exc}") from exc
    if values.ndim != 1:
        values = values.reshape(-1)
    return values


class Preprocessor:
    """Fits mean, standard deviation, min and max and rescales new values."""

    SCALINGS = ('standard', 'minmax')

    def __init__(self, scaling: str = 'standard'):
        """
        Initialize preprocessor.

        Args:
            scaling: Transform applied by ``transform`` ('standard' or 'minmax')
        """
        if scaling not in self.SCALINGS:
            raise InvalidInputError(
                f"Unknown scaling '{scaling}'. Available: {list(self.SCALINGS)}"
            )
        self.scaling = scaling
        self.reset()

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def std_dev(self) -> float:
        return self._std_dev

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def fitted(self) -> bool:
        return self._fitted

    def fit(self, sample: Any) -> 'Preprocessor':
        """
        Compute statistics over a reference sample.

        The standard deviation is the population one (divisor n).

        Raises:
            InvalidInputError: If ``sample`` is empty
        """
        values = _as_values(sample)
        if values.size == 0:
            raise InvalidInputError("Cannot fit preprocessor on empty data")

        self._mean = float(values.mean())
        self._std_dev = float(np.sqrt(np.mean((values - self._mean) ** 2)))
        self._min = float(values.min())
        self._max = float(values.max())
        self._fitted = True

        logger.debug(
            f"Preprocessor fitted on {values.size} values: mean={self._mean:.4f}, "
            f"std={self._std_dev:.4f}, min={self._min:.4f}, max={self._max:.4f}"
        )
        return self

    def _check_fitted(self) -> None:
        if not self._fitted:
            raise NotFittedError("Preprocessor not fitted. Call fit() first.")

    def standardize(self, data: Any) -> np.ndarray:
        """Return ``(x - mean) / std_dev``, or zeros when the deviation is 0."""
        self._check_fitted()
        values = _as_values(data)
        if self._std_dev == 0.0:
            logger.warning("Zero standard deviation, standardizing to constant 0.0")
            return np.zeros_like(values)
        return (values - self._mean) / self._std_dev

    def normalize(self, data: Any) -> np.ndarray:
        """Alias of ``standardize``."""
        return self.standardize(data)

    def min_max_scale(self, data: Any) -> np.ndarray:
        """Return ``(x - min) / (max - min)``, or 0.5 when max equals min."""
        self._check_fitted()
        values = _as_values(data)
        if self._max == self._min:
            logger.warning("Constant reference sample, min-max scaling to constant 0.5")
            return np.full_like(values, 0.5)
        return (values - self._min) / (self._max - self._min)

    def transform(self, data: Any) -> np.ndarray:
        """Apply the configured scaling."""
        if self.scaling == 'minmax':
            return self.min_max_scale(data)
        return self.standardize(data)

    def fit_transform(self, sample: Any) -> np.ndarray:
        """Fit on ``sample`` and return it standardized."""
        return self.fit(sample).standardize(sample)

    def reset(self) -> None:
        """Forget fitted statistics."""
        self._mean = 0.0
        self._std_dev = 0.0
        self._min = 0.0
        self._max = 0.0
        self._fitted = False

    def get_params(self) -> Dict[str, Any]:
        """Fitted statistics as a plain dict."""
        return {
            'scaling': self.scaling,
            'mean': self._mean,
            'std_dev': self._std_dev,
            'min': self._min,
            'max': self._max,
            'fitted': self._fitted,
        }
