"""Time-indexed state/observation containers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import numpy as np

from imudev.containers.batched_temporal import BatchedTemporalContainer
from imudev.errors import ConfigurationError, DimensionError
from imudev.utils.axes import (
    each_slice_trailing_axis,
    peel_first_timestep,
    select_along_trailing_axis,
)

_STATE_KEYS = {"state", "xx"}
_OBS_KEYS = {"obs", "observation", "observations", "yy"}


@dataclass(frozen=True, eq=False)
class TemporalData:
    """Temporal data: per-timepoint "state" and "observation" sequences.

    ``xx`` and ``yy`` are lists with one array per timepoint, each in
    SINGLE_OBS_TIMESERIES layout ``(*dim, batch)``. ``x0``/``y0`` hold the
    initial state and initial observation when the first timepoint was split
    off; otherwise they are empty placeholders of shape ``(0, ..., 0, batch)``.

    Use :func:`temporal_data` to build one from arrays.

    Attributes:
        xx: State at each timepoint
        yy: Observation at each timepoint
        x0: Initial state (possibly empty)
        y0: Initial observation (possibly empty)
    """
    xx: List[np.ndarray]
    yy: List[np.ndarray]
    x0: np.ndarray
    y0: np.ndarray

    @property
    def dtype(self) -> np.dtype:
        """Element type of the stored arrays."""
        return self.x0.dtype

    @property
    def is_skip_first(self) -> bool:
        """Whether an initial state/observation is stored separately."""
        return self.x0.size > 0 or self.y0.size > 0


def _empty_initial(data: np.ndarray) -> np.ndarray:
    """Placeholder for an initial state that is not needed: ``(0, ..., 0, batch)``."""
    batch_size = data.shape[-2]
    return np.zeros((0,) * (data.ndim - 2) + (batch_size,), dtype=data.dtype)


def _as_series(data: Any, name: str, dtype) -> np.ndarray:
    data = np.asarray(data, dtype=dtype)
    if data.ndim < 2:
        raise DimensionError(
            f"`{name}` must have batch and time as its last two axes, got shape {data.shape}"
        )
    return data


def temporal_data(
    xx: Optional[np.ndarray] = None,
    yy: Optional[np.ndarray] = None,
    *,
    x0: Optional[np.ndarray] = None,
    y0: Optional[np.ndarray] = None,
    skip_first: bool = False,
    dtype: Any = None,
) -> TemporalData:
    """Build :class:`TemporalData` from arrays laid out as ``(*dim, batch, time)``.

    Args:
        xx: States; if omitted, an empty-state array matching ``yy`` is used
        yy: Observations; if omitted, an empty-state array matching ``xx`` is used
        x0: Explicit initial state; overrides the one split off by ``skip_first``
        y0: Explicit initial observation; overrides the one split off by ``skip_first``
        skip_first: Split the first timepoint off into ``x0``/``y0``
        dtype: Optional element type every array is converted to

    Returns:
        TemporalData holding copies of the input
    """
    if xx is None and yy is None:
        raise ConfigurationError("At least one of `xx` or `yy` must be provided")
    if xx is not None:
        xx = _as_series(xx, "xx", dtype)
    if yy is not None:
        yy = _as_series(yy, "yy", dtype)
    if xx is None:
        xx = np.empty((0,) + yy.shape[-2:], dtype=yy.dtype)
    if yy is None:
        yy = np.empty((0,) + xx.shape[-2:], dtype=xx.dtype)

    if skip_first:
        peeled_x0, xx = peel_first_timestep(xx)
        peeled_y0, yy = peel_first_timestep(yy)
    else:
        peeled_x0, peeled_y0 = _empty_initial(xx), _empty_initial(yy)

    # An explicitly supplied initial value always wins over the peeled one
    x0 = peeled_x0 if x0 is None else np.asarray(x0, dtype=dtype)
    y0 = peeled_y0 if y0 is None else np.asarray(y0, dtype=dtype)

    return TemporalData(
        xx=[x.copy() for x in each_slice_trailing_axis(xx)],
        yy=[y.copy() for y in each_slice_trailing_axis(yy)],
        x0=x0.copy(),
        y0=y0.copy(),
    )


def num_samples_total(td: TemporalData) -> int:
    """Number of samples (the batch size) of ``td``, read from its observations."""
    if not td.yy:
        raise DimensionError("TemporalData object contains no observations")
    return td.yy[0].shape[-1]


def num_samples(td: TemporalData) -> int:
    """Number of samples of ``td``, read from its states."""
    if not td.xx:
        raise DimensionError("TemporalData object contains no states")
    return td.xx[0].shape[-1]


def num_timepoints(td: TemporalData) -> int:
    """Number of per-timepoint entries (initial timepoint excluded)."""
    return len(td.xx)


def _dim(series: List[np.ndarray], initial: np.ndarray, what: str) -> Tuple[int, ...]:
    x = series[0] if series and series[0].size > 0 else initial
    if x.size == 0:
        raise DimensionError(f"{what} dimension cannot be determined")
    return x.shape[:-1]


def state_dim(td: TemporalData) -> Tuple[int, ...]:
    """Shape of the state space."""
    return _dim(td.xx, td.x0, "State")


def obs_dim(td: TemporalData) -> Tuple[int, ...]:
    """Shape of the observation space."""
    return _dim(td.yy, td.y0, "Observation")


def get_observations(td: TemporalData, index) -> tuple:
    """Return the time series of sample(s) ``index`` (0-based int, slice or list).

    Returns ``(xx, yy)`` if no initial timepoint is stored, otherwise
    ``(x0, y0, xx, yy)``; ``xx``/``yy`` are lists with one entry per timepoint.
    The returned arrays are views into ``td``.
    """
    xx = [select_along_trailing_axis(x, index) for x in td.xx]
    yy = [select_along_trailing_axis(y, index) for y in td.yy]
    if not td.is_skip_first:
        return xx, yy
    return (
        select_along_trailing_axis(td.x0, index),
        select_along_trailing_axis(td.y0, index),
        xx,
        yy,
    )


def output_size(
    td: TemporalData,
    of_what: str,
    *,
    state_size: Optional[Tuple[int, ...]] = None,
    obs_size: Optional[Tuple[int, ...]] = None,
) -> Tuple[int, ...]:
    """Shape of an output container for states or observations of ``td``.

    The container is ``(*dim, num_samples, num_timepoints)`` where the time
    axis includes the initial timepoint when ``td`` stores one. ``state_size``
    and ``obs_size`` are used only when the dimension cannot be read off
    the data.

    Args:
        of_what: ``"state"``/``"xx"`` or ``"obs"``/``"observation"``/``"observations"``/``"yy"``
    """
    if of_what in _STATE_KEYS:
        dim_fn, fallback = state_dim, state_size
    elif of_what in _OBS_KEYS:
        dim_fn, fallback = obs_dim, obs_size
    else:
        raise ConfigurationError(
            f"of_what must be one of {sorted(_STATE_KEYS | _OBS_KEYS)}, got {of_what!r}"
        )
    try:
        dim = dim_fn(td)
    except DimensionError:
        if fallback is None:
            raise
        dim = tuple(fallback)
    return dim + (num_samples(td), num_timepoints(td) + int(td.is_skip_first))


def out_container(
    td: TemporalData, of_what: str, *, batchsize: int, **kwargs
) -> BatchedTemporalContainer:
    """Allocate a :class:`BatchedTemporalContainer` sized for ``td``'s outputs."""
    return BatchedTemporalContainer(td.dtype, output_size(td, of_what, **kwargs), batchsize)
