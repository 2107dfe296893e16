"""imudev.containers: Dense arrays addressed by batch number."""
from imudev.containers.batch_delimited import BatchDelimitedArray, batch_delimited_array
from imudev.containers.batched_temporal import BatchedTemporalContainer

__all__ = [
    "BatchDelimitedArray",
    "batch_delimited_array",
    "BatchedTemporalContainer",
]
