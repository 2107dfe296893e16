"""Axis helpers for time-indexed and sample-indexed arrays.

All functions return numpy views where numpy can express the result as a
view; ``merge_along_trailing_axis`` and ``flatten_for_batch`` (for
non-contiguous input) are the exceptions.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from imudev.errors import DimensionError, ShapeMismatch


def _time_index(data: np.ndarray, time_axis: int, selector) -> Tuple:
    """Build an index tuple applying ``selector`` along ``time_axis``."""
    if data.ndim == 0:
        raise DimensionError("Cannot index the time axis of a 0-dimensional array")
    axis = time_axis % data.ndim
    if data.shape[axis] == 0:
        raise DimensionError(
            f"Time axis {time_axis} of array with shape {data.shape} is empty"
        )
    index = [slice(None)] * data.ndim
    index[axis] = selector
    return tuple(index)


def skip_first_timestep(data: np.ndarray, time_axis: int = -1) -> np.ndarray:
    """Return a view of ``data`` without its first timepoint."""
    data = np.asarray(data)
    return data[_time_index(data, time_axis, slice(1, None))]


def select_first_timestep(data: np.ndarray, time_axis: int = -1) -> np.ndarray:
    """Return a view of the first timepoint of ``data`` (time axis dropped)."""
    data = np.asarray(data)
    return data[_time_index(data, time_axis, 0)]


def peel_first_timestep(
    data: np.ndarray, time_axis: int = -1
) -> Tuple[np.ndarray, np.ndarray]:
    """Split ``data`` into ``(first, rest)`` along the time axis."""
    return select_first_timestep(data, time_axis), skip_first_timestep(data, time_axis)


def select_along_trailing_axis(data: np.ndarray, index) -> np.ndarray:
    """Index the last axis of ``data`` with an int, slice, range or index list."""
    data = np.asarray(data)
    if isinstance(index, range):
        index = slice(index.start, index.stop, index.step)
    return data[..., index]


def each_slice_trailing_axis(data: np.ndarray) -> List[np.ndarray]:
    """Return views of every slice along the last axis of ``data``."""
    data = np.asarray(data)
    return [data[..., i] for i in range(data.shape[-1])]


def merge_along_trailing_axis(arrays: Sequence[np.ndarray]) -> np.ndarray:
    """Concatenate arrays along their last axis.

    The output is allocated once and every input is copied into its slot,
    so peak memory is the output plus the inputs (no intermediate copies).

    Raises:
        DimensionError: If ``arrays`` is empty
        ShapeMismatch: If the inputs disagree on any axis but the last
    """
    arrays = [np.asarray(a) for a in arrays]
    if not arrays:
        raise DimensionError("merge_along_trailing_axis requires at least one array")

    leading = arrays[0].shape[:-1]
    for i, a in enumerate(arrays):
        if a.ndim == 0 or a.shape[:-1] != leading:
            raise ShapeMismatch(
                f"Array {i} has shape {a.shape}; expected leading axes {leading}"
            )

    total = sum(a.shape[-1] for a in arrays)
    out = np.empty(leading + (total,), dtype=np.result_type(*arrays))
    offset = 0
    for a in arrays:
        n = a.shape[-1]
        out[..., offset:offset + n] = a
        offset += n
    return out


def flatten_for_batch(data: np.ndarray) -> np.ndarray:
    """Collapse all leading axes into one, keeping the trailing (sample) axis."""
    data = np.asarray(data)
    if data.ndim == 0:
        raise DimensionError("Cannot flatten a 0-dimensional array for batching")
    return data.reshape(int(np.prod(data.shape[:-1])), data.shape[-1])
