import numpy as np
import pytest

from oncokernel.exceptions import AlreadyTrainedError, InvalidInputError, NotTrainedError
from oncokernel.models import DecisionTree, Leaf, Split, gini_impurity


def test_two_clusters_split_at_midpoint(two_cluster_data):
    X, y = two_cluster_data
    tree = DecisionTree().fit(X, y)

    assert tree.predict_single([0.0]) == 0
    assert tree.predict_single([10.0]) == 1
    assert tree.nodes[0] == Split(feature_index=0, threshold=5.0, left=1, right=2)
    assert tree.nodes[1] == Leaf(0)
    assert tree.nodes[2] == Leaf(1)


def test_gini_impurity():
    assert gini_impurity([1, 1, 1]) == 0.0
    assert gini_impurity([0, 1, 0, 1]) == pytest.approx(0.5)
    assert gini_impurity([0, 0, 0, 1]) == pytest.approx(0.375)
    assert gini_impurity([]) == 1.0


def test_fits_separable_training_set_exactly(separable_data):
    X, y = separable_data
    tree = DecisionTree().fit(X, y)
    assert (tree.predict(X) == y).all()


def test_pure_labels_make_a_single_leaf():
    tree = DecisionTree().fit([[1.0], [2.0], [3.0]], [1, 1, 1])
    assert tree.nodes == [Leaf(1)]
    assert tree.depth == 0
    assert tree.predict([[100.0], [-100.0]]).tolist() == [1, 1]


def test_majority_tie_resolves_to_smaller_class():
    # identical features leave no threshold to split on
    assert DecisionTree().fit([[1.0], [1.0]], [1, 0]).predict_single([1.0]) == 0
    assert DecisionTree().fit([[1.0], [1.0]], [0, 1]).predict_single([1.0]) == 0


def test_xor_is_separated_by_nested_splits():
    X = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    tree = DecisionTree().fit(X, [0, 1, 1, 0])

    assert tree.predict(X).tolist() == [0, 1, 1, 0]
    assert tree.nodes == [
        Split(feature_index=0, threshold=0.5, left=1, right=4),
        Split(feature_index=1, threshold=0.5, left=2, right=3),
        Leaf(0),
        Leaf(1),
        Split(feature_index=1, threshold=0.5, left=5, right=6),
        Leaf(1),
        Leaf(0),
    ]


def test_split_is_taken_even_without_impurity_gain():
    tree = DecisionTree().fit([[1.0], [1.0], [2.0], [2.0]], [0, 1, 0, 1])
    assert tree.nodes == [Split(feature_index=0, threshold=1.5, left=1, right=2), Leaf(0), Leaf(0)]


def test_min_samples_split_stops_growth():
    tree = DecisionTree(min_samples_split=5).fit([[0.0], [1.0], [2.0], [3.0]], [1, 0, 1, 1])
    assert tree.nodes == [Leaf(1)]


def test_max_depth_bounds_the_tree():
    X = [[float(i)] for i in range(8)]
    y = [0, 1, 0, 1, 0, 1, 0, 1]
    assert DecisionTree(max_depth=1).fit(X, y).depth <= 1
    assert DecisionTree(max_depth=2).fit(X, y).depth <= 2
    assert DecisionTree(max_depth=10).fit(X, y).predict(X).tolist() == y


def test_first_feature_wins_equal_splits():
    X = [[0.0, 0.0], [0.0, 0.0], [1.0, 1.0], [1.0, 1.0]]
    tree = DecisionTree().fit(X, [0, 0, 1, 1])
    assert tree.nodes[0].feature_index == 0
    assert tree.nodes[0].threshold == 0.5


def test_first_threshold_wins_equal_splits():
    # splitting at 0.5 and at 2.5 leaves the same weighted impurity
    X = [[0.0], [1.0], [2.0], [3.0]]
    tree = DecisionTree(max_depth=1).fit(X, [0, 1, 1, 0])
    assert tree.nodes[0].threshold == 0.5


def test_prediction_before_fit():
    tree = DecisionTree()
    with pytest.raises(NotTrainedError):
        tree.predict([[0.0]])
    with pytest.raises(NotTrainedError):
        tree.predict_single([0.0])


@pytest.mark.parametrize("X, y", [
    ([], []),
    ([[0.0], [1.0]], [0]),
    ([[0.0], [1.0, 2.0]], [0, 1]),
    ([[0.0], [1.0]], [0, 2]),
])
def test_invalid_training_data(X, y):
    with pytest.raises(InvalidInputError):
        DecisionTree().fit(X, y)


def test_feature_count_must_match(two_cluster_data):
    tree = DecisionTree().fit(*two_cluster_data)
    with pytest.raises(InvalidInputError):
        tree.predict_single([0.0, 1.0])


@pytest.mark.parametrize("params", [
    {'max_depth': 0},
    {'min_samples_split': -1},
    {'max_depth': 2.5},
    {'min_samples_split': '2'},
])
def test_hyperparameters_must_be_positive_integers(params):
    with pytest.raises(InvalidInputError):
        DecisionTree(**params)


def test_setters_validate():
    tree = DecisionTree()
    tree.set_max_depth(3)
    assert tree.max_depth == 3
    with pytest.raises(InvalidInputError):
        tree.set_min_samples_split(0)
    with pytest.raises(InvalidInputError):
        tree.set_max_depth(1.5)


def test_refit_requires_reset(two_cluster_data):
    tree = DecisionTree().fit(*two_cluster_data)
    with pytest.raises(AlreadyTrainedError):
        tree.fit(*two_cluster_data)

    tree.reset()
    assert not tree.fitted
    tree.fit([[0.0], [1.0]], [1, 0])
    assert tree.predict_single([0.0]) == 1


def test_no_probability_output(two_cluster_data):
    tree = DecisionTree().fit(*two_cluster_data)
    assert tree.predict_probability([[0.0]]) is None
    assert tree.predict_probability_single([0.0]) is None


def test_nodes_are_copied(two_cluster_data):
    tree = DecisionTree().fit(*two_cluster_data)
    tree.nodes.clear()
    assert tree.predict_single([10.0]) == 1


def test_input_is_copied():
    X = np.array([[0.0], [10.0]])
    tree = DecisionTree().fit(X, [0, 1])
    X[:] = 99.0
    assert tree.nodes[0].threshold == 5.0


def test_export_text(two_cluster_data):
    text = DecisionTree().fit(*two_cluster_data).export_text(feature_names=['mutation_score'])
    assert text.splitlines() == [
        "mutation_score <= 5.0000",
        "  left: Leaf: prediction = 0",
        "  right: Leaf: prediction = 1",
    ]
