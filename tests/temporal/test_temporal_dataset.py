"""Tests for the torch Dataset view over TemporalData."""
import numpy as np
import pytest
import torch
from torch.utils.data import DataLoader

from imudev.temporal import TemporalDataset, temporal_data


@pytest.fixture
def dataset(state_obs_arrays):
    a, b = state_obs_arrays
    return TemporalDataset(temporal_data(a, b, skip_first=True, dtype=np.float32))


def test_length_is_number_of_samples(dataset):
    """One item per sample."""
    assert len(dataset) == 4


def test_item_matches_get_observations(dataset, state_obs_arrays):
    """Items are (x0, y0, xx, yy) as tensors."""
    a, _ = state_obs_arrays
    x0, y0, xx, yy = dataset[2]

    assert isinstance(x0, torch.Tensor)
    assert x0.dtype == torch.float32
    assert x0.shape == (3,)
    assert len(xx) == len(yy) == 4
    torch.testing.assert_close(xx[1], torch.as_tensor(a[:, 2, 2], dtype=torch.float32))


def test_out_of_range(dataset):
    """Indices outside [0, len) raise IndexError."""
    with pytest.raises(IndexError):
        dataset[4]
    with pytest.raises(IndexError):
        dataset[-1]


def test_dataloader_batches(dataset):
    """A DataLoader stacks samples along a new leading axis."""
    loader = DataLoader(dataset, batch_size=2, shuffle=False)
    batches = list(loader)

    assert len(batches) == 2
    x0, y0, xx, yy = batches[0]
    assert x0.shape == (2, 3)
    assert len(xx) == 4
    assert xx[0].shape == (2, 3)
