"""Binary header for STACKED_ARRAY data written to a stream.

Layout (native-endian int64 throughout)::

    num_state_dims | state_dim[0] ... state_dim[n-1] | num_timepoints | num_samples

The header fully determines how to parse the payload that follows it.
"""
from __future__ import annotations

from typing import BinaryIO, Sequence, Tuple

import numpy as np

from imudev.errors import ConfigurationError, DimensionError

HEADER_DTYPE = np.dtype(np.int64)


def header_nbytes(num_state_dims: int) -> int:
    """Size in bytes of a header describing ``num_state_dims`` state axes."""
    return HEADER_DTYPE.itemsize * (num_state_dims + 3)


def write_header(stream: BinaryIO, dims: Sequence[int]) -> int:
    """Write the header for a STACKED_ARRAY of shape ``dims``.

    Returns:
        Number of bytes written
    """
    dims = [int(d) for d in dims]
    if len(dims) < 2:
        raise ConfigurationError(
            f"STACKED_ARRAY headers need time and sample dimensions, got {tuple(dims)}"
        )
    header = np.array([len(dims) - 2, *dims], dtype=HEADER_DTYPE)
    stream.write(header.tobytes())
    return header.nbytes


def _read_ints(stream: BinaryIO, count: int) -> np.ndarray:
    nbytes = HEADER_DTYPE.itemsize * count
    raw = stream.read(nbytes)
    if len(raw) != nbytes:
        raise DimensionError(
            f"Truncated header: expected {nbytes} bytes, got {len(raw)}"
        )
    return np.frombuffer(raw, dtype=HEADER_DTYPE)


def read_header(stream: BinaryIO) -> Tuple[Tuple[int, ...], int, int]:
    """Read a header written by :func:`write_header`.

    Returns:
        ``(state_dim, num_timepoints, num_samples)``
    """
    num_state_dims = int(_read_ints(stream, 1)[0])
    if num_state_dims < 0:
        raise DimensionError(f"Corrupt header: {num_state_dims} state dimensions")
    rest = _read_ints(stream, num_state_dims + 2)
    state_dim = tuple(int(d) for d in rest[:num_state_dims])
    return state_dim, int(rest[-2]), int(rest[-1])
