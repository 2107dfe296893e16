"""Explicit conversions between data layouts."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from imudev.containers.batch_delimited import BatchDelimitedArray
from imudev.errors import ConfigurationError, DimensionError, ShapeMismatch
from imudev.layouts.types import DataLayout
from imudev.utils.logging import get_logger

logger = get_logger(__name__)


def _unwrap(element: Any) -> np.ndarray:
    if isinstance(element, BatchDelimitedArray):
        return element.data
    return np.asarray(element)


def _stacked_dims(first: np.ndarray, num_timepoints: int) -> Tuple[int, ...]:
    if first.ndim < 1:
        raise DimensionError("TIMESERIES elements need a sample axis")
    return first.shape[:-1] + (num_timepoints, first.shape[-1])


def dims_of_reshape(
    data: Sequence[Any],
    from_layout: DataLayout = DataLayout.TIMESERIES,
    to_layout: DataLayout = DataLayout.STACKED_ARRAY,
) -> Tuple[int, ...]:
    """Shape that ``reshape(data, TIMESERIES, STACKED_ARRAY)`` would produce.

    Useful to allocate the destination yourself (e.g. a ``numpy.memmap``)
    when the stacked array does not fit in memory; pass it as ``out=``.
    """
    if (DataLayout(from_layout), DataLayout(to_layout)) != (
        DataLayout.TIMESERIES, DataLayout.STACKED_ARRAY
    ):
        raise ConfigurationError(
            f"dims_of_reshape supports TIMESERIES -> STACKED_ARRAY only, "
            f"got {from_layout} -> {to_layout}"
        )
    if len(data) == 0:
        raise DimensionError("TIMESERIES data contains no timepoints")
    return _stacked_dims(_unwrap(data[0]), len(data))


def stacked_to_timeseries(data: np.ndarray) -> List[np.ndarray]:
    """Slice a ``(*state, time, samples)`` array into one copy per timepoint."""
    data = np.asarray(data)
    if data.ndim < 2:
        raise DimensionError(
            f"STACKED_ARRAY needs time and sample axes, got shape {data.shape}"
        )
    return [data[..., t, :].copy() for t in range(data.shape[-2])]


def timeseries_to_stacked(
    data: Sequence[Any], out: Optional[np.ndarray] = None
) -> np.ndarray:
    """Copy a sequence of ``(*state, samples)`` arrays into one stacked array.

    Elements may be plain arrays or :class:`BatchDelimitedArray` objects.
    The output is allocated once (or supplied via ``out``) and filled slice
    by slice.
    """
    dims = dims_of_reshape(data)
    elements = [_unwrap(element) for element in data]
    first = elements[0]
    for t, element in enumerate(elements):
        if element.shape != first.shape:
            raise ShapeMismatch(
                f"Timepoint {t} has shape {element.shape}; expected {first.shape}"
            )
    if out is None:
        out = np.empty(dims, dtype=first.dtype)
    elif tuple(out.shape) != dims:
        raise ShapeMismatch(f"Output has shape {out.shape}; expected {dims}")

    for t, element in enumerate(elements):
        out[..., t, :] = element
    logger.debug("Stacked %d timepoints into array of shape %s", len(data), dims)
    return out


def _single_obs_to_stacked(data: np.ndarray) -> np.ndarray:
    data = np.asarray(data)
    if data.ndim < 1:
        raise DimensionError("SINGLE_OBS_TIMESERIES data needs a sample axis")
    return data.reshape(data.shape[:-1] + (1, data.shape[-1]))


def _single_obs_to_timeseries(data: np.ndarray) -> List[np.ndarray]:
    return [np.asarray(data)]


def _single_timeseries_to_stacked(data: np.ndarray) -> np.ndarray:
    data = np.asarray(data)
    if data.ndim < 1:
        raise DimensionError("SINGLE_TIMESERIES data needs a time axis")
    return data.reshape(data.shape + (1,))


_CONVERSIONS: Dict[Tuple[DataLayout, DataLayout], Callable[..., Any]] = {
    (DataLayout.STACKED_ARRAY, DataLayout.TIMESERIES): stacked_to_timeseries,
    (DataLayout.TIMESERIES, DataLayout.STACKED_ARRAY): timeseries_to_stacked,
    (DataLayout.SINGLE_OBS_TIMESERIES, DataLayout.STACKED_ARRAY): _single_obs_to_stacked,
    (DataLayout.SINGLE_OBS_TIMESERIES, DataLayout.TIMESERIES): _single_obs_to_timeseries,
    (DataLayout.SINGLE_TIMESERIES, DataLayout.STACKED_ARRAY): _single_timeseries_to_stacked,
}


def reshape(data: Any, from_layout: DataLayout, to_layout: DataLayout, **kwargs) -> Any:
    """Transform ``data`` stored in ``from_layout`` into ``to_layout``.

    Supported conversions:
        STACKED_ARRAY -> TIMESERIES (copies every time slice)
        TIMESERIES -> STACKED_ARRAY (accepts ``out=``)
        SINGLE_OBS_TIMESERIES -> STACKED_ARRAY (time axis of length 1)
        SINGLE_OBS_TIMESERIES -> TIMESERIES (one-element list)
        SINGLE_TIMESERIES -> STACKED_ARRAY (sample axis of length 1)

    Raises:
        ConfigurationError: For any other pair of layouts
    """
    key = (DataLayout(from_layout), DataLayout(to_layout))
    try:
        convert = _CONVERSIONS[key]
    except KeyError:
        raise ConfigurationError(
            f"No conversion from {key[0].name} to {key[1].name}"
        ) from None
    return convert(data, **kwargs)
