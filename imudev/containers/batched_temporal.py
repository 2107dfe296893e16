"""Output container for results computed over TemporalData batches."""
from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np

from imudev.containers.batching import batch_slice, count_batches, is_integer
from imudev.errors import DimensionError, IndexOutOfRange


class BatchedTemporalContainer:
    """Zero-filled N-tensor (N >= 2) written batch by batch.

    The last two axes are the sample and time axes respectively. Batch
    numbers and timepoint numbers are 1-based.

    - ``view_batch(i)`` / ``get_batch(i)``: the whole time series of batch ``i``,
      shape ``(*dim, n_i, num_timepoints)``
    - ``view_batch(i, t)`` / ``get_batch(i, t)``: timepoint ``t`` of batch ``i``,
      shape ``(*dim, n_i)``

    ``view_*`` alias the backing array, ``get_*`` return copies.

    Args:
        dtype: Element type of the backing array
        shape: Full shape, ending with ``(num_samples, num_timepoints)``
        batchsize: Maximum number of samples per batch
    """

    def __init__(self, dtype, shape: Tuple[int, ...], batchsize: int):
        shape = tuple(int(s) for s in shape)
        if len(shape) < 2:
            raise DimensionError(
                f"BatchedTemporalContainer needs sample and time axes, got shape {shape}"
            )
        self.num_samples, self.num_timepoints = shape[-2:]
        self.num_batches = count_batches(self.num_samples, batchsize)
        self.batchsize = batchsize
        self._container = np.zeros(shape, dtype=dtype)

    @property
    def data(self) -> np.ndarray:
        """The backing array (not a copy)."""
        return self._container

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._container.shape

    @property
    def dtype(self) -> np.dtype:
        return self._container.dtype

    def _time_index(self, t: int) -> int:
        if not is_integer(t):
            raise IndexOutOfRange(f"Timepoint number must be an int, got {t!r}")
        t = int(t)
        if t < 1 or t > self.num_timepoints:
            raise IndexOutOfRange(
                f"Timepoint number {t} outside [1, {self.num_timepoints}]"
            )
        return t - 1

    def view_batch(self, i: int, t=None) -> np.ndarray:
        """View of batch ``i`` (optionally only timepoint ``t``)."""
        s = batch_slice(i, self.batchsize, self.num_samples, self.num_batches)
        view = self._container[..., s, :]
        if t is None:
            return view
        return view[..., self._time_index(t)]

    def get_batch(self, i: int, t=None) -> np.ndarray:
        """Copy of batch ``i`` (optionally only timepoint ``t``)."""
        return self.view_batch(i, t).copy()

    def set_batch(self, i: int, value, t=None) -> np.ndarray:
        """Broadcast ``value`` into batch ``i`` (or timepoint ``t`` of it)."""
        v = self.view_batch(i, t)
        v[...] = value
        return v

    def __len__(self) -> int:
        return self.num_batches

    def __getitem__(self, key) -> np.ndarray:
        if isinstance(key, tuple):
            return self.get_batch(*key)
        return self.get_batch(key)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            i, t = key
            self.set_batch(i, value, t)
        else:
            self.set_batch(key, value)

    def __iter__(self) -> Iterator[np.ndarray]:
        for i in range(1, self.num_batches + 1):
            yield self.get_batch(i)

    def __repr__(self) -> str:
        return (
            f"BatchedTemporalContainer(shape={self.shape}, batchsize={self.batchsize}, "
            f"num_batches={self.num_batches}, num_timepoints={self.num_timepoints})"
        )
