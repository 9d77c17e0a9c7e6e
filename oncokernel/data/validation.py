"""Coercion and validation of feature matrices, label vectors and samples.

Every public entry point of the kernel funnels its arguments through these
helpers so that malformed data is rejected eagerly with ``InvalidInputError``
and internal state never aliases caller-owned buffers.
"""

from typing import Any, Optional, Tuple

import numpy as np

from ..exceptions import InvalidInputError

BINARY_LABELS = (0, 1)


def as_feature_matrix(X: Any, n_features: Optional[int] = None) -> np.ndarray:
    """
    Convert ``X`` to a fresh 2-D float64 array.

    Args:
        X: Nested sequence or array of shape (n_samples, n_features)
        n_features: Expected feature count, checked when given

    Returns:
        Copy of ``X`` as a float array. An empty input yields an array of
        shape (0, n_features or 0).

    Raises:
        InvalidInputError: If ``X`` is ragged, non-numeric or not 2-D, or if
            its feature count differs from ``n_features``
    """
    try:
        matrix = np.array(X, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            f"Feature matrix must be a rectangular numeric array: {exc}"
        ) from exc

    if matrix.size == 0 and matrix.ndim <= 1:
        return np.empty((0, n_features or 0), dtype=np.float64)

    if matrix.ndim != 2:
        raise InvalidInputError(
            f"Feature matrix must be 2-D (n_samples, n_features), got {matrix.ndim}-D"
        )

    if n_features is not None and matrix.shape[1] != n_features:
        raise InvalidInputError(
            f"Expected {n_features} features, got {matrix.shape[1]}"
        )

    return matrix


def as_sample(x: Any, n_features: Optional[int] = None) -> np.ndarray:
    """Convert a single feature vector to a 1-D float64 array."""
    try:
        sample = np.array(x, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Sample must be a numeric vector: {exc}") from exc

    if sample.ndim != 1:
        raise InvalidInputError(f"Sample must be 1-D, got {sample.ndim}-D")

    if n_features is not None and sample.shape[0] != n_features:
        raise InvalidInputError(
            f"Expected {n_features} features, got {sample.shape[0]}"
        )

    return sample


def as_labels(y: Any) -> np.ndarray:
    """
    Convert ``y`` to a fresh 1-D int array of binary labels.

    Raises:
        InvalidInputError: If ``y`` is not 1-D or holds values outside {0, 1}
    """
    try:
        labels = np.array(y, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Labels must be numeric: {exc}") from exc

    if labels.size == 0:
        return np.empty(0, dtype=np.int64)

    if labels.ndim != 1:
        raise InvalidInputError(f"Labels must be 1-D, got {labels.ndim}-D")

    if not np.isin(labels, BINARY_LABELS).all():
        bad = sorted(set(labels[~np.isin(labels, BINARY_LABELS)].tolist()))
        raise InvalidInputError(f"Labels must be 0 or 1, found {bad}")

    return labels.astype(np.int64)


def check_training_data(X: Any, y: Any) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate a training set.

    Returns:
        (X, y) as independent copies

    Raises:
        InvalidInputError: If either side is empty or their lengths differ
    """
    matrix = as_feature_matrix(X)
    labels = as_labels(y)

    if matrix.shape[0] == 0 or labels.shape[0] == 0:
        raise InvalidInputError("Training data is empty")

    if matrix.shape[0] != labels.shape[0]:
        raise InvalidInputError(
            f"X and y must have the same length ({matrix.shape[0]} != {labels.shape[0]})"
        )

    if matrix.shape[1] == 0:
        raise InvalidInputError("Training samples must have at least one feature")

    return matrix, labels


def check_label_pair(y_true: Any, y_pred: Any) -> Tuple[np.ndarray, np.ndarray]:
    """Validate two aligned label vectors for comparison."""
    truth = as_labels(y_true)
    predicted = as_labels(y_pred)

    if truth.shape[0] != predicted.shape[0]:
        raise InvalidInputError(
            f"y_true and y_pred must have the same length ({truth.shape[0]} != {predicted.shape[0]})"
        )

    return truth, predicted
