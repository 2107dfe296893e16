"""Tests for layout conversions."""
import numpy as np
import pytest

from imudev.containers import BatchDelimitedArray
from imudev.errors import ConfigurationError, ShapeMismatch
from imudev.layouts import DataLayout, dims_of_reshape, reshape


class TestStackedTimeseriesRoundTrip:
    def test_stacked_to_timeseries(self, stacked):
        """Each element is one time slice."""
        series = reshape(stacked, DataLayout.STACKED_ARRAY, DataLayout.TIMESERIES)

        assert len(series) == 5
        for t, element in enumerate(series):
            assert element.shape == (3, 2, 4)
            np.testing.assert_array_equal(element, stacked[..., t, :])

    def test_slices_are_copies(self, stacked):
        """Writing to a slice leaves the source untouched."""
        series = reshape(stacked, DataLayout.STACKED_ARRAY, DataLayout.TIMESERIES)
        original = stacked.copy()
        series[0][...] = 0.0
        np.testing.assert_array_equal(stacked, original)

    def test_round_trip_is_exact(self, stacked):
        """STACKED -> TIMESERIES -> STACKED reproduces the bytes."""
        series = reshape(stacked, DataLayout.STACKED_ARRAY, DataLayout.TIMESERIES)
        back = reshape(series, DataLayout.TIMESERIES, DataLayout.STACKED_ARRAY)

        assert back.dtype == stacked.dtype
        assert back.tobytes() == stacked.tobytes()

    def test_timeseries_shape_mismatch(self):
        """All timepoints must share a shape."""
        with pytest.raises(ShapeMismatch):
            reshape([np.zeros((3, 2)), np.zeros((3, 3))],
                    DataLayout.TIMESERIES, DataLayout.STACKED_ARRAY)

    def test_out_argument(self, stacked):
        """A preallocated destination is filled in place."""
        series = reshape(stacked, DataLayout.STACKED_ARRAY, DataLayout.TIMESERIES)
        out = np.empty(dims_of_reshape(series))
        result = reshape(series, DataLayout.TIMESERIES, DataLayout.STACKED_ARRAY, out=out)

        assert result is out
        np.testing.assert_array_equal(out, stacked)

    def test_mismatch_leaves_out_untouched(self):
        """A bad timepoint is detected before anything is written to ``out``."""
        series = [np.ones((2, 4)), np.ones((2, 4)), np.ones((2, 5))]
        out = np.full((2, 3, 4), -1.0)
        with pytest.raises(ShapeMismatch):
            reshape(series, DataLayout.TIMESERIES, DataLayout.STACKED_ARRAY, out=out)
        np.testing.assert_array_equal(out, -1.0)

    def test_out_wrong_shape(self, stacked):
        """A destination of the wrong shape is rejected."""
        series = reshape(stacked, DataLayout.STACKED_ARRAY, DataLayout.TIMESERIES)
        with pytest.raises(ShapeMismatch):
            reshape(series, DataLayout.TIMESERIES, DataLayout.STACKED_ARRAY,
                    out=np.empty((1, 2, 3)))


class TestBatchDelimitedElements:
    def test_stack_batch_delimited(self):
        """Sequences of BatchDelimitedArray are stacked from their data."""
        data = [np.full((2, 5), t, dtype=np.float32) for t in range(3)]
        series = [BatchDelimitedArray(d, batchsize=2) for d in data]

        assert dims_of_reshape(series) == (2, 3, 5)
        out = reshape(series, DataLayout.TIMESERIES, DataLayout.STACKED_ARRAY)
        assert out.shape == (2, 3, 5)
        for t in range(3):
            np.testing.assert_array_equal(out[:, t, :], data[t])


class TestSingleLayouts:
    def test_single_obs_to_stacked(self):
        """A single observation gains a time axis of length 1."""
        obs = np.random.rand(3, 4)
        out = reshape(obs, DataLayout.SINGLE_OBS_TIMESERIES, DataLayout.STACKED_ARRAY)
        assert out.shape == (3, 1, 4)
        np.testing.assert_array_equal(out[:, 0, :], obs)

    def test_single_obs_to_timeseries(self):
        """A single observation is a one-element series."""
        obs = np.random.rand(3, 4)
        out = reshape(obs, DataLayout.SINGLE_OBS_TIMESERIES, DataLayout.TIMESERIES)
        assert len(out) == 1
        np.testing.assert_array_equal(out[0], obs)

    def test_single_timeseries_to_stacked(self, recording):
        """A single recording gains a sample axis of length 1."""
        out = reshape(recording, DataLayout.SINGLE_TIMESERIES, DataLayout.STACKED_ARRAY)
        assert out.shape == (3, 50, 1)
        np.testing.assert_array_equal(out[..., 0], recording)


class TestUnsupported:
    def test_unsupported_pair(self):
        """Conversions outside the table raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            reshape(np.zeros((3, 5, 2)), DataLayout.STACKED_ARRAY, DataLayout.SINGLE_TIMESERIES)

    def test_dims_of_reshape_pair(self):
        """dims_of_reshape only describes TIMESERIES -> STACKED_ARRAY."""
        with pytest.raises(ConfigurationError):
            dims_of_reshape([np.zeros((3, 2))], DataLayout.STACKED_ARRAY, DataLayout.TIMESERIES)
