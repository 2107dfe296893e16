"""PyTorch Dataset view over TemporalData."""
from __future__ import annotations

import numpy as np
import torch
from torch.utils.data import Dataset

from imudev.temporal.data import TemporalData, get_observations, num_samples_total


def _to_tensor(value):
    if isinstance(value, list):
        return [_to_tensor(v) for v in value]
    return torch.as_tensor(np.ascontiguousarray(value))


class TemporalDataset(Dataset):
    """Expose a :class:`TemporalData` to ``torch.utils.data.DataLoader``.

    ``len(ds)`` is the number of samples and ``ds[i]`` is
    ``get_observations(td, i)`` with every array converted to a tensor:
    ``(xx, yy)`` or ``(x0, y0, xx, yy)``.

    Args:
        td: The temporal data to serve
    """

    def __init__(self, td: TemporalData):
        self.td = td

    def __len__(self) -> int:  # type: ignore[override]
        return num_samples_total(self.td)

    def __getitem__(self, idx: int):  # type: ignore[override]
        if idx < 0 or idx >= len(self):
            raise IndexError(f"Sample {idx} outside [0, {len(self) - 1}]")
        return tuple(_to_tensor(v) for v in get_observations(self.td, idx))
