"""Decision tree classifier grown by Gini impurity minimization."""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger

from .base import BaseModel, ModelFactory, coerce_int, majority_class, require_positive_int


@dataclass(frozen=True)
class Leaf:
    """Terminal node holding a class prediction."""
    prediction: int


@dataclass(frozen=True)
class Split:
    """
    Internal node.

    Samples with ``x[feature_index] <= threshold`` continue at the node
    stored at arena index ``left``, all others at ``right``.
    """
    feature_index: int
    threshold: float
    left: int
    right: int


Node = Union[Leaf, Split]


def gini_impurity(labels: Any) -> float:
    """
    Gini impurity ``1 - sum(p_c ** 2)`` of a label set.

    An empty set has impurity 1.0.
    """
    labels = np.asarray(labels)
    if labels.size == 0:
        return 1.0
    _, counts = np.unique(labels, return_counts=True)
    proportions = counts / labels.size
    return float(1.0 - np.sum(proportions ** 2))


def _binary_gini(positives: np.ndarray, totals: np.ndarray) -> np.ndarray:
    """Vectorized Gini of binary label sets given their sizes and count of 1s."""
    with np.errstate(divide='ignore', invalid='ignore'):
        p1 = positives / totals
    p0 = 1.0 - p1
    return 1.0 - p0 * p0 - p1 * p1


class DecisionTree(BaseModel):
    """
    Binary decision tree.

    Nodes live in a flat arena (``self._nodes``) with the root at index 0;
    split nodes reference their children by arena index.
    """

    PARAMS = {
        'max_depth': coerce_int,
        'min_samples_split': coerce_int,
    }

    def __init__(self, max_depth: int = 10, min_samples_split: int = 2):
        super().__init__()
        self.max_depth = require_positive_int(max_depth, 'max_depth')
        self.min_samples_split = require_positive_int(min_samples_split, 'min_samples_split')
        self._nodes: List[Node] = []

    def set_max_depth(self, depth: int) -> None:
        self.max_depth = require_positive_int(depth, 'max_depth')

    def set_min_samples_split(self, samples: int) -> None:
        self.min_samples_split = require_positive_int(samples, 'min_samples_split')

    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        self._nodes = []
        self._grow(X, y, depth=0)
        logger.debug(f"{self.model_name} grown: {len(self._nodes)} nodes, depth {self.depth}")

    def _grow(self, X: np.ndarray, y: np.ndarray, depth: int) -> int:
        """Append the subtree for (X, y) to the arena and return its root index."""
        index = len(self._nodes)
        self._nodes.append(Leaf(0))  # placeholder until children exist

        if depth >= self.max_depth or y.size < self.min_samples_split:
            self._nodes[index] = Leaf(majority_class(y))
            return index

        if np.all(y == y[0]):
            self._nodes[index] = Leaf(int(y[0]))
            return index

        split = self._best_split(X, y)
        if split is None:
            self._nodes[index] = Leaf(majority_class(y))
            return index

        feature, threshold = split
        mask = X[:, feature] <= threshold
        if mask.all() or not mask.any():
            self._nodes[index] = Leaf(majority_class(y))
            return index

        left = self._grow(X[mask], y[mask], depth + 1)
        right = self._grow(X[~mask], y[~mask], depth + 1)
        self._nodes[index] = Split(feature, float(threshold), left, right)
        return index

    def _best_split(self, X: np.ndarray, y: np.ndarray) -> Optional[Tuple[int, float]]:
        """
        Find the (feature, threshold) pair with the lowest weighted Gini.

        Candidate thresholds are midpoints between consecutive sorted unique
        values. Features and thresholds are scanned in ascending order and
        only a strictly lower impurity replaces the current best, so the
        first pair found wins ties. Any split leaving both sides non-empty
        is a candidate; returns None when there is none.
        """
        n = y.size
        best_gini = 1.0
        best: Optional[Tuple[int, float]] = None

        for feature in range(X.shape[1]):
            order = np.argsort(X[:, feature], kind='stable')
            values = X[order, feature]
            unique = np.unique(values)
            if unique.size < 2:
                continue

            thresholds = (unique[:-1] + unique[1:]) / 2.0
            n_left = np.searchsorted(values, thresholds, side='right')
            n_right = n - n_left

            cumulative = np.concatenate(([0], np.cumsum(y[order])))
            pos_left = cumulative[n_left]
            pos_right = cumulative[-1] - pos_left

            weighted = (n_left / n) * _binary_gini(pos_left, n_left) \
                + (n_right / n) * _binary_gini(pos_right, n_right)
            weighted[(n_left == 0) | (n_right == 0)] = np.inf

            candidate = int(np.argmin(weighted))
            if weighted[candidate] < best_gini:
                best_gini = float(weighted[candidate])
                best = (feature, float(thresholds[candidate]))

        if best is not None:
            logger.debug(f"Best split feature[{best[0]}] <= {best[1]:.4f} (weighted gini {best_gini:.4f})")
        return best

    def _predict_sample(self, x: np.ndarray) -> int:
        node = self._nodes[0]
        while isinstance(node, Split):
            node = self._nodes[node.left if x[node.feature_index] <= node.threshold else node.right]
        return node.prediction

    def _clear_state(self) -> None:
        self._nodes = []

    @property
    def nodes(self) -> List[Node]:
        """Copy of the node arena; index 0 is the root."""
        return list(self._nodes)

    @property
    def n_leaves(self) -> int:
        return sum(isinstance(node, Leaf) for node in self._nodes)

    @property
    def depth(self) -> int:
        """Number of edges on the longest root-to-leaf path (0 for a lone leaf)."""
        if not self._nodes:
            return 0
        deepest = 0
        stack = [(0, 0)]
        while stack:
            index, level = stack.pop()
            node = self._nodes[index]
            if isinstance(node, Split):
                stack.append((node.left, level + 1))
                stack.append((node.right, level + 1))
            else:
                deepest = max(deepest, level)
        return deepest

    def export_text(self, feature_names: Optional[Sequence[str]] = None) -> str:
        """Render the trained tree as indented text."""
        self._check_trained()
        lines = []
        stack = [(0, 0, '')]
        while stack:
            index, level, prefix = stack.pop()
            node = self._nodes[index]
            indent = '  ' * level
            if isinstance(node, Leaf):
                lines.append(f"{indent}{prefix}Leaf: prediction = {node.prediction}")
                continue
            name = (feature_names[node.feature_index] if feature_names
                    else f"feature[{node.feature_index}]")
            lines.append(f"{indent}{prefix}{name} <= {node.threshold:.4f}")
            # right pushed first so the left branch prints first
            stack.append((node.right, level + 1, 'right: '))
            stack.append((node.left, level + 1, 'left: '))
        return '\n'.join(lines)


ModelFactory.register_model('decision_tree', DecisionTree)
