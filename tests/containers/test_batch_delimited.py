"""Tests for BatchDelimitedArray."""
import numpy as np
import pytest

from imudev.containers import BatchDelimitedArray, batch_delimited_array
from imudev.errors import ConfigurationError, DimensionError, IndexOutOfRange


@pytest.fixture
def bda():
    """3 x 10 array in batches of 3."""
    return BatchDelimitedArray(np.arange(30, dtype=np.float64).reshape(3, 10), batchsize=3)


class TestBatching:
    def test_counts(self, bda):
        """10 samples in batches of 3 give 4 batches."""
        assert bda.num_samples == 10
        assert bda.num_batches == len(bda) == 4

    def test_last_batch_is_short(self, bda):
        """Batch 4 holds the single remaining sample."""
        assert bda.get_batch(4).shape == (3, 1)
        np.testing.assert_array_equal(bda.get_batch(4), bda.data[:, 9:10])

    def test_batches_cover_samples_in_order(self, bda):
        """Concatenating all batches gives back the data."""
        np.testing.assert_array_equal(np.concatenate(list(bda), axis=-1), bda.data)

    @pytest.mark.parametrize("i", [0, 5, -1, 1.0, True])
    def test_out_of_range(self, bda, i):
        """Batch numbers outside [1, num_batches] are rejected."""
        with pytest.raises(IndexOutOfRange):
            bda.get_batch(i)

    def test_numpy_integer_batch_numbers(self, bda):
        """Batch numbers taken from numpy arrays are accepted."""
        for i in np.arange(1, bda.num_batches + 1):
            assert bda.get_batch(i).shape[-1] in (1, 3)
        np.testing.assert_array_equal(bda.get_batch(np.int64(2)), bda.data[:, 3:6])

    def test_invalid_batchsize(self):
        """batchsize must be positive."""
        with pytest.raises(ConfigurationError):
            BatchDelimitedArray(np.zeros((2, 5)), batchsize=0)

    def test_scalar_rejected(self):
        """A sample axis is required."""
        with pytest.raises(DimensionError):
            BatchDelimitedArray(np.float64(1.0), batchsize=1)


class TestViewsAndCopies:
    def test_view_aliases(self, bda):
        """Writing through a view changes the backing array."""
        bda.view_batch(2)[...] = -1.0
        assert (bda.data[:, 3:6] == -1.0).all()

    def test_get_copies(self, bda):
        """get_batch and indexing return copies."""
        bda.get_batch(1)[...] = -1.0
        bda[1][...] = -1.0
        assert (bda.data[:, :3] != -1.0).all()

    def test_set_broadcasts(self, bda):
        """Scalars and column vectors broadcast into the batch."""
        bda.set_batch(1, 0.0)
        np.testing.assert_array_equal(bda.data[:, :3], 0.0)
        bda[4] = np.array([[7.0], [8.0], [9.0]])
        np.testing.assert_array_equal(bda.data[:, 9], [7.0, 8.0, 9.0])

    def test_set_rejects_wrong_shape(self, bda):
        """Values that do not broadcast raise numpy's ValueError."""
        with pytest.raises(ValueError):
            bda.set_batch(1, np.zeros((3, 2)))


class TestFactory:
    def test_wrap(self):
        """Two arguments wrap an existing array without copying."""
        data = np.zeros((2, 7))
        arr = batch_delimited_array(data, 2)
        assert arr.data is data
        assert arr.num_batches == 4

    def test_allocate(self):
        """Three arguments allocate a zero-filled array."""
        arr = batch_delimited_array(np.float32, (4, 5), 2)
        assert arr.shape == (4, 5)
        assert arr.dtype == np.float32
        assert not arr.data.any()

    def test_memmap_backing(self, tmp_path):
        """A memory map can be wrapped as-is."""
        mm = np.memmap(tmp_path / "buf.bin", dtype=np.float32, mode="w+", shape=(2, 5))
        arr = BatchDelimitedArray(mm, batchsize=2)
        arr[3] = 1.0
        mm.flush()
        assert mm[0, 4] == 1.0
        assert "num_batches=3" in repr(arr)
