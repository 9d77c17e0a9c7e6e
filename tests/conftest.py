import numpy as np
import pytest


@pytest.fixture
def two_cluster_data():
    X = [[0.0], [0.0], [10.0], [10.0]]
    y = [0, 0, 1, 1]
    return X, y


@pytest.fixture
def separable_data():
    rng = np.random.default_rng(7)
    negatives = rng.normal(-2.0, 0.5, size=(40, 2))
    positives = rng.normal(2.0, 0.5, size=(40, 2))
    X = np.vstack([negatives, positives])
    y = np.array([0] * 40 + [1] * 40)
    return X, y


@pytest.fixture
def mutation_scores():
    low = [0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.35, 0.4]
    high = [0.6, 0.65, 0.7, 0.75, 0.8, 0.85, 0.9, 0.95]
    return low + high, [0] * len(low) + [1] * len(high)
