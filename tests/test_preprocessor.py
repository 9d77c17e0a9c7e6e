import numpy as np
import pytest

from oncokernel.data import Preprocessor
from oncokernel.exceptions import InvalidInputError, NotFittedError


def test_fit_computes_population_statistics():
    prep = Preprocessor().fit([1, 2, 3, 4, 5])

    assert prep.fitted
    assert prep.mean == pytest.approx(3.0)
    assert prep.std_dev == pytest.approx(1.4142, abs=1e-4)
    assert prep.min == 1.0
    assert prep.max == 5.0


def test_standardize_centres_on_mean():
    prep = Preprocessor().fit([1, 2, 3, 4, 5])
    assert prep.standardize([3.0]) == pytest.approx([0.0])
    assert prep.normalize([5.0]) == pytest.approx([2.0 / np.sqrt(2.0)])


def test_fit_on_empty_sample_rejected():
    with pytest.raises(InvalidInputError):
        Preprocessor().fit([])


@pytest.mark.parametrize("method", ["standardize", "min_max_scale", "transform"])
def test_transforms_require_fit(method):
    with pytest.raises(NotFittedError):
        getattr(Preprocessor(), method)([1.0])


def test_constant_sample_fallbacks():
    prep = Preprocessor().fit([4.0, 4.0, 4.0])
    assert prep.standardize([1.0, 4.0, 9.0]).tolist() == [0.0, 0.0, 0.0]
    assert prep.min_max_scale([1.0, 4.0]).tolist() == [0.5, 0.5]


def test_min_max_scale():
    prep = Preprocessor().fit([1.0, 3.0, 5.0])
    assert prep.min_max_scale([1.0, 3.0, 5.0, 7.0]) == pytest.approx([0.0, 0.5, 1.0, 1.5])


def test_fit_transform_yields_zero_mean_unit_std():
    scaled = Preprocessor().fit_transform([2.0, 4.0, 6.0, 8.0])
    assert scaled.mean() == pytest.approx(0.0)
    assert scaled.std() == pytest.approx(1.0)


def test_reset_returns_to_unfitted():
    prep = Preprocessor().fit([1.0, 2.0])
    prep.reset()

    assert not prep.fitted
    assert prep.mean == 0.0
    with pytest.raises(NotFittedError):
        prep.standardize([1.0])


def test_transform_follows_configured_scaling():
    prep = Preprocessor(scaling='minmax').fit([0.0, 10.0])
    assert prep.transform([5.0]) == pytest.approx([0.5])


def test_unknown_scaling_rejected():
    with pytest.raises(InvalidInputError):
        Preprocessor(scaling='robust')


def test_transform_does_not_alias_input():
    data = np.array([1.0, 2.0, 3.0])
    prep = Preprocessor().fit(data)
    prep.standardize(data)
    assert data.tolist() == [1.0, 2.0, 3.0]
