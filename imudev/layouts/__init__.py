"""imudev.layouts: Layout descriptors, shape queries and conversions."""
from imudev.layouts.types import DataLayout
from imudev.layouts.queries import state_dim, num_samples, num_timepoints
from imudev.layouts.reshape import (
    reshape,
    dims_of_reshape,
    stacked_to_timeseries,
    timeseries_to_stacked,
)
from imudev.layouts.header import write_header, read_header, header_nbytes

__all__ = [
    "DataLayout",
    "state_dim",
    "num_samples",
    "num_timepoints",
    "reshape",
    "dims_of_reshape",
    "stacked_to_timeseries",
    "timeseries_to_stacked",
    "write_header",
    "read_header",
    "header_nbytes",
]
