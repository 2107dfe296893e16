"""Data layout descriptors."""
from enum import Enum


class DataLayout(Enum):
    """Conventions for arranging state, time and sample axes.

    Layouts are pure metadata: they never change implicitly, and every
    conversion between two of them is an explicit call to
    :func:`imudev.layouts.reshape`. The set is closed on purpose; the
    dispatch tables in ``queries`` and ``reshape`` enumerate it exhaustively.

    Members:
        SINGLE_TIMESERIES: One long recording in one array. The leading axes
            are the state space and the last axis is time. There is a single
            sample, so no sample axis. Example: a 1 Hz, one-day recording of
            3D acceleration is a ``(3, 86_400)`` array.
        TIMESERIES: A sequence of arrays, one per timepoint. In each array
            the leading axes are the state space and the last axis indexes
            samples. Example: two synchronised devices give a list of
            86_400 arrays, each ``(3, 2)``.
        SINGLE_OBS_TIMESERIES: One element of a ``TIMESERIES`` sequence,
            i.e. a ``(*state, samples)`` array with no time axis.
        STACKED_ARRAY: One array whose last axis indexes samples. For time
            series the second-to-last axis is time and the leading axes are
            the state space: ``(*state, time, samples)``.
    """
    SINGLE_TIMESERIES = "single_timeseries"
    TIMESERIES = "timeseries"
    SINGLE_OBS_TIMESERIES = "single_obs_timeseries"
    STACKED_ARRAY = "stacked_array"
