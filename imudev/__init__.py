"""imudev: Layouts, windowing and batching for sequential-model training data."""
from imudev.errors import (
    ImuDevError,
    ConfigurationError,
    ShapeMismatch,
    PolicyError,
    IndexOutOfRange,
    DimensionError,
)
from imudev.layouts import (
    DataLayout,
    state_dim,
    num_samples,
    num_timepoints,
    reshape,
    dims_of_reshape,
)
from imudev.arrangers import SlidingWindow, sliding_window
from imudev.containers import BatchDelimitedArray, BatchedTemporalContainer, batch_delimited_array
from imudev.temporal import (
    TemporalData,
    temporal_data,
    num_samples_total,
    get_observations,
    TimeseriesIterator,
    timeseries_iterator,
    ZipIterPolicy,
    TakeInitialStatePolicy,
    TakeInitialStateNoMatchingObsPolicy,
)

__version__ = "0.1.0"

__all__ = [
    "ImuDevError",
    "ConfigurationError",
    "ShapeMismatch",
    "PolicyError",
    "IndexOutOfRange",
    "DimensionError",
    "DataLayout",
    "state_dim",
    "num_samples",
    "num_timepoints",
    "reshape",
    "dims_of_reshape",
    "SlidingWindow",
    "sliding_window",
    "BatchDelimitedArray",
    "BatchedTemporalContainer",
    "batch_delimited_array",
    "TemporalData",
    "temporal_data",
    "num_samples_total",
    "get_observations",
    "TimeseriesIterator",
    "timeseries_iterator",
    "ZipIterPolicy",
    "TakeInitialStatePolicy",
    "TakeInitialStateNoMatchingObsPolicy",
]
