"""Layout-aware shape queries."""
from __future__ import annotations

from typing import Any, Callable, Dict, Sequence, Tuple

import numpy as np

from imudev.errors import DimensionError
from imudev.layouts.types import DataLayout


def _first_element(data: Sequence[Any]) -> np.ndarray:
    """First array of a TIMESERIES sequence."""
    if len(data) == 0:
        raise DimensionError("TIMESERIES data contains no timepoints")
    return np.asarray(data[0])


def _is_collection(data: Any) -> bool:
    return isinstance(data, (list, tuple))


def _state_dim_trailing(data: Any) -> Tuple[int, ...]:
    data = np.asarray(data)
    if data.ndim < 1:
        raise DimensionError(f"Expected at least 1 axis, got shape {data.shape}")
    return data.shape[:-1]


def _state_dim_timeseries(data: Any) -> Tuple[int, ...]:
    if _is_collection(data):
        return _state_dim_trailing(_first_element(data))
    return _state_dim_trailing(data)


def _state_dim_stacked(data: Any) -> Tuple[int, ...]:
    data = np.asarray(data)
    if data.ndim < 2:
        raise DimensionError(
            f"STACKED_ARRAY needs time and sample axes, got shape {data.shape}"
        )
    return data.shape[:-2]


def _num_samples_trailing(data: Any) -> int:
    data = np.asarray(data)
    if data.ndim < 1:
        raise DimensionError(f"Expected at least 1 axis, got shape {data.shape}")
    return data.shape[-1]


def _num_samples_timeseries(data: Any) -> int:
    if _is_collection(data):
        return _num_samples_trailing(_first_element(data))
    return _num_samples_trailing(data)


def _num_timepoints_single(data: Any) -> int:
    data = np.asarray(data)
    if data.ndim < 1:
        raise DimensionError(f"Expected at least 1 axis, got shape {data.shape}")
    return data.shape[-1]


def _num_timepoints_timeseries(data: Any) -> int:
    return len(data)


def _num_timepoints_stacked(data: Any) -> int:
    data = np.asarray(data)
    if data.ndim < 2:
        raise DimensionError(
            f"STACKED_ARRAY needs time and sample axes, got shape {data.shape}"
        )
    return data.shape[-2]


def _no_time_axis(data: Any) -> int:
    raise DimensionError("SINGLE_OBS_TIMESERIES data has no time axis")


_STATE_DIM: Dict[DataLayout, Callable[[Any], Tuple[int, ...]]] = {
    DataLayout.SINGLE_TIMESERIES: _state_dim_trailing,
    DataLayout.TIMESERIES: _state_dim_timeseries,
    DataLayout.SINGLE_OBS_TIMESERIES: _state_dim_trailing,
    DataLayout.STACKED_ARRAY: _state_dim_stacked,
}

_NUM_SAMPLES: Dict[DataLayout, Callable[[Any], int]] = {
    DataLayout.SINGLE_TIMESERIES: lambda data: 1,
    DataLayout.TIMESERIES: _num_samples_timeseries,
    DataLayout.SINGLE_OBS_TIMESERIES: _num_samples_trailing,
    DataLayout.STACKED_ARRAY: _num_samples_trailing,
}

_NUM_TIMEPOINTS: Dict[DataLayout, Callable[[Any], int]] = {
    DataLayout.SINGLE_TIMESERIES: _num_timepoints_single,
    DataLayout.TIMESERIES: _num_timepoints_timeseries,
    DataLayout.SINGLE_OBS_TIMESERIES: _no_time_axis,
    DataLayout.STACKED_ARRAY: _num_timepoints_stacked,
}


def state_dim(layout: DataLayout, data: Any) -> Tuple[int, ...]:
    """Shape of the state space: every axis that is neither time nor sample.

    A TIMESERIES sequence delegates to its first element.
    """
    return _STATE_DIM[DataLayout(layout)](data)


def num_samples(layout: DataLayout, data: Any) -> int:
    """Number of samples in ``data``; SINGLE_TIMESERIES always has exactly one."""
    return _NUM_SAMPLES[DataLayout(layout)](data)


def num_timepoints(layout: DataLayout, data: Any) -> int:
    """Number of timepoints in ``data``."""
    return _NUM_TIMEPOINTS[DataLayout(layout)](data)
