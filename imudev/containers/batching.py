"""Batch-number arithmetic shared by the batched containers."""
from __future__ import annotations

import math
from numbers import Integral

from imudev.errors import ConfigurationError, IndexOutOfRange


def is_integer(value) -> bool:
    """True for Python and numpy integers, False for bools."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def count_batches(num_samples: int, batchsize: int) -> int:
    """Number of batches needed to cover ``num_samples`` (last may be short)."""
    if batchsize <= 0:
        raise ConfigurationError(f"batchsize ({batchsize}) must be positive")
    return math.ceil(num_samples / batchsize)


def batch_slice(i: int, batchsize: int, num_samples: int, num_batches: int) -> slice:
    """0-based sample slice covered by batch number ``i`` (1-based).

    Batch ``i`` spans samples ``(i-1)*batchsize + 1`` to
    ``min(i*batchsize, num_samples)`` in 1-based numbering.
    """
    if not is_integer(i):
        raise IndexOutOfRange(f"Batch number must be an int, got {i!r}")
    i = int(i)
    if i < 1 or i > num_batches:
        raise IndexOutOfRange(f"Batch number {i} outside [1, {num_batches}]")
    return slice((i - 1) * batchsize, min(i * batchsize, num_samples))
