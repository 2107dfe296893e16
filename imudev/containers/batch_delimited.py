"""Dense arrays addressed by batch number."""
from __future__ import annotations

from typing import Iterator, Optional, Tuple, Union

import numpy as np

from imudev.containers.batching import batch_slice, count_batches
from imudev.errors import DimensionError
from imudev.utils.axes import select_along_trailing_axis


class BatchDelimitedArray:
    """An array ``data`` split along its last (sample) axis into batches.

    Indexing behaves like indexing a list of sub-arrays, one per batch, with
    the last batch possibly shorter than ``batchsize``. Batch numbers are
    1-based. The backing array is never copied or resized, which makes it
    convenient to wrap a ``numpy.memmap``.

    Args:
        data: Backing array; its last axis indexes samples
        batchsize: Maximum number of samples per batch

    Example:
        >>> a = BatchDelimitedArray(np.zeros((3, 10)), batchsize=3)
        >>> a.num_batches, a.get_batch(4).shape
        (4, (3, 1))
    """

    def __init__(self, data: np.ndarray, batchsize: int):
        data = np.asanyarray(data)
        if data.ndim < 1:
            raise DimensionError("BatchDelimitedArray needs an array with a sample axis")
        self._data = data
        self.batchsize = batchsize
        self.num_samples = data.shape[-1]
        self.num_batches = count_batches(self.num_samples, batchsize)

    @property
    def data(self) -> np.ndarray:
        """The backing array (not a copy)."""
        return self._data

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._data.shape

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def view_batch(self, i: int) -> np.ndarray:
        """View of batch ``i``; writes go to the backing array."""
        s = batch_slice(i, self.batchsize, self.num_samples, self.num_batches)
        return select_along_trailing_axis(self._data, s)

    def get_batch(self, i: int) -> np.ndarray:
        """Copy of batch ``i``."""
        return self.view_batch(i).copy()

    def set_batch(self, i: int, value) -> np.ndarray:
        """Broadcast ``value`` into batch ``i`` and return the written view."""
        v = self.view_batch(i)
        v[...] = value
        return v

    def __len__(self) -> int:
        return self.num_batches

    def __getitem__(self, i: int) -> np.ndarray:
        return self.get_batch(i)

    def __setitem__(self, i: int, value) -> None:
        self.set_batch(i, value)

    def __iter__(self) -> Iterator[np.ndarray]:
        for i in range(1, self.num_batches + 1):
            yield self.get_batch(i)

    def __repr__(self) -> str:
        return (
            f"BatchDelimitedArray(shape={self.shape}, batchsize={self.batchsize}, "
            f"num_batches={self.num_batches})"
        )


def batch_delimited_array(
    data_or_dtype: Union[np.ndarray, np.dtype, type],
    shape_or_batchsize: Union[Tuple[int, ...], int],
    batchsize: Optional[int] = None,
) -> BatchDelimitedArray:
    """Build a :class:`BatchDelimitedArray`.

    ``batch_delimited_array(data, batchsize)`` wraps an existing array;
    ``batch_delimited_array(dtype, shape, batchsize)`` allocates a
    zero-filled one.
    """
    if batchsize is None:
        return BatchDelimitedArray(data_or_dtype, shape_or_batchsize)
    return BatchDelimitedArray(np.zeros(shape_or_batchsize, dtype=data_or_dtype), batchsize)
