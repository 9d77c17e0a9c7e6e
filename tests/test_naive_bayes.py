import math

import numpy as np
import pytest

from oncokernel.exceptions import InvalidInputError, NotTrainedError
from oncokernel.models import NaiveBayes, gaussian_pdf


def test_two_clusters(two_cluster_data):
    model = NaiveBayes().fit(*two_cluster_data)

    assert model.predict_single([0.0]) == 0
    assert model.predict_single([10.0]) == 1
    # zero within-class variance falls back to unit std
    assert model.class_std[0].tolist() == [1.0]
    assert model.class_std[1].tolist() == [1.0]


def test_class_statistics():
    X = [[1.0, 5.0], [3.0, 5.0], [2.0, 7.0], [10.0, 0.0]]
    y = [0, 0, 0, 1]
    model = NaiveBayes().fit(X, y)

    assert model.classes == [0, 1]
    assert model.class_prior == pytest.approx({0: 0.75, 1: 0.25})
    assert model.class_mean[0] == pytest.approx([2.0, 17.0 / 3.0])
    # sample standard deviation (divisor n - 1)
    assert model.class_std[0][0] == pytest.approx(1.0)
    assert model.class_std[0][1] == pytest.approx(np.std([5.0, 5.0, 7.0], ddof=1))
    # a single member leaves the default std
    assert model.class_std[1].tolist() == [1.0, 1.0]


def test_class_log_score_formula():
    model = NaiveBayes().fit([[1.0], [3.0], [8.0], [12.0]], [0, 0, 1, 1])
    std = math.sqrt(2.0)
    expected = math.log(0.5 + 1e-10) + math.log(gaussian_pdf(2.5, 2.0, std) + 1e-10)

    assert model.calculate_class_probability([2.5], 0) == pytest.approx(expected)


def test_probabilities_sum_to_one(separable_data):
    X, y = separable_data
    model = NaiveBayes().fit(X, y)

    for x in X[::9]:
        probabilities = model.predict_class_probabilities(x)
        assert sum(probabilities.values()) == pytest.approx(1.0)
        assert model.predict_probability_single(x) == pytest.approx(probabilities[1])


def test_separable_data_classified(separable_data):
    X, y = separable_data
    model = NaiveBayes().fit(X, y)
    assert (model.predict(X) == y).all()
    assert model.predict_probability(X[y == 1]).min() > 0.5


def test_extreme_queries_stay_finite(two_cluster_data):
    model = NaiveBayes().fit(*two_cluster_data)
    probability = model.predict_probability_single([1e6])
    assert 0.0 <= probability <= 1.0


def test_unseen_positive_class():
    model = NaiveBayes().fit([[0.0], [1.0]], [0, 0])
    assert model.predict_single([5.0]) == 0
    assert model.predict_probability_single([5.0]) == 0.0


def test_score_tie_resolves_to_first_class():
    model = NaiveBayes().fit([[0.0], [2.0], [0.0], [2.0]], [0, 0, 1, 1])
    assert model.predict_single([1.0]) == 0
    assert model.predict_probability_single([1.0]) == pytest.approx(0.5)


def test_unknown_class_rejected(two_cluster_data):
    model = NaiveBayes().fit(*two_cluster_data)
    with pytest.raises(InvalidInputError):
        model.calculate_class_probability([0.0], 3)


def test_prediction_before_fit():
    model = NaiveBayes()
    with pytest.raises(NotTrainedError):
        model.predict_single([0.0])
    with pytest.raises(NotTrainedError):
        model.predict_probability([[0.0]])
    with pytest.raises(NotTrainedError):
        model.calculate_class_probability([0.0], 0)


@pytest.mark.parametrize("X, y", [([], []), ([[0.0], [1.0]], [1])])
def test_invalid_training_data(X, y):
    with pytest.raises(InvalidInputError):
        NaiveBayes().fit(X, y)


def test_statistics_are_copied(two_cluster_data):
    model = NaiveBayes().fit(*two_cluster_data)
    model.class_mean[0][0] = 99.0
    model.class_prior[0] = 0.0
    assert model.class_mean[0].tolist() == [0.0]
    assert model.class_prior[0] == 0.5
