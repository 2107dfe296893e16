"""imudev.temporal: Temporal data containers and joint iteration."""
from imudev.temporal.data import (
    TemporalData,
    temporal_data,
    num_samples_total,
    num_samples,
    num_timepoints,
    state_dim,
    obs_dim,
    get_observations,
    output_size,
    out_container,
)
from imudev.temporal.dataset import TemporalDataset
from imudev.temporal.policies import (
    IterationPolicy,
    ZipIterPolicy,
    TakeInitialStatePolicy,
    TakeInitialStateNoMatchingObsPolicy,
)
from imudev.temporal.iterator import TimeseriesIterator, timeseries_iterator

__all__ = [
    "TemporalData",
    "temporal_data",
    "num_samples_total",
    "num_samples",
    "num_timepoints",
    "state_dim",
    "obs_dim",
    "get_observations",
    "output_size",
    "out_container",
    "TemporalDataset",
    "IterationPolicy",
    "ZipIterPolicy",
    "TakeInitialStatePolicy",
    "TakeInitialStateNoMatchingObsPolicy",
    "TimeseriesIterator",
    "timeseries_iterator",
]
