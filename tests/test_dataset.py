import copy
import pickle
import numpy as np
import pytest

from local_smooth import Dataset, Observation, as_dataset, InvalidInputError

def test_dataset_copies_and_is_read_only():
    x = np.array([0.0, 1.0, 2.0])
    y = np.array([1.0, 2.0, 4.0])
    data = Dataset(x, y)

    x[0] = 10.0
    assert data.x[0] == 0.0
    with pytest.raises(ValueError):
        data.y[0] = 5.0
    with pytest.raises(AttributeError):
        data.x = x
    np.testing.assert_array_equal(data.w, np.ones(3))

def test_dataset_observations():
    data = Dataset.from_observations([(0, 1), Observation(2, 3)])
    assert len(data) == 2
    assert data[1] == Observation(2.0, 3.0)
    assert list(data) == [Observation(0.0, 1.0), Observation(2.0, 3.0)]

def test_as_dataset():
    data = Dataset([0, 1], [2, 3])
    assert as_dataset(data) is data

    from_array = as_dataset(np.array([[0.0, 2.0], [1.0, 3.0]]))
    np.testing.assert_array_equal(from_array.x, data.x)
    np.testing.assert_array_equal(from_array.y, data.y)

    from_pairs = as_dataset([(0, 2), (1, 3)])
    np.testing.assert_array_equal(from_pairs.y, data.y)

@pytest.mark.parametrize("x, y, w", [([], [], None),
                                     ([0, 1], [1], None),
                                     ([0, np.nan], [1, 2], None),
                                     ([0, 1], [1, np.inf], None),
                                     ([[0, 1]], [[1, 2]], None),
                                     ([0, 1], [1, 2], [1, -1]),
                                     ([0, 1], [1, 2], [1]),
                                     (['a', 'b'], [1, 2], None)])
def test_dataset_invalid(x, y, w):
    with pytest.raises(InvalidInputError):
        Dataset(x, y, w=w)

def test_as_dataset_invalid():
    with pytest.raises(InvalidInputError):
        as_dataset([])
    with pytest.raises(InvalidInputError):
        as_dataset([(0, 1, 2)])
    with pytest.raises(InvalidInputError):
        as_dataset(np.zeros((3, 3)))
    with pytest.raises(InvalidInputError):
        as_dataset(5)

def test_dataset_pickle_and_deepcopy():
    data = Dataset([0.0, 1.0, 2.0], [1.0, 2.0, 3.0], w=[1.0, 0.5, 2.0])

    for restored in [pickle.loads(pickle.dumps(data)), copy.deepcopy(data)]:
        assert isinstance(restored, Dataset)
        np.testing.assert_array_equal(restored.x, data.x)
        np.testing.assert_array_equal(restored.y, data.y)
        np.testing.assert_array_equal(restored.w, data.w)
        assert not restored.x.flags.writeable
        with pytest.raises(AttributeError):
            restored.x = data.x
