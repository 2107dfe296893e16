"""Tests for the STACKED_ARRAY binary header."""
import io

import numpy as np
import pytest

from imudev.errors import ConfigurationError, DimensionError
from imudev.layouts import header_nbytes, read_header, write_header


def test_header_bytes_are_native_int64():
    """The header is a flat run of native int64 values."""
    buf = io.BytesIO()
    nbytes = write_header(buf, (3, 2, 40, 7))

    assert nbytes == header_nbytes(2) == 5 * 8
    np.testing.assert_array_equal(
        np.frombuffer(buf.getvalue(), dtype=np.int64), [2, 3, 2, 40, 7]
    )


def test_read_back():
    """read_header returns (state_dim, num_timepoints, num_samples)."""
    buf = io.BytesIO()
    write_header(buf, (3, 40, 7))
    buf.seek(0)

    assert read_header(buf) == ((3,), 40, 7)
    assert buf.read() == b""


def test_no_state_dims():
    """A header may describe zero state axes."""
    buf = io.BytesIO()
    write_header(buf, (40, 7))
    buf.seek(0)
    assert read_header(buf) == ((), 40, 7)


def test_too_few_dims():
    """Time and sample dimensions are required."""
    with pytest.raises(ConfigurationError):
        write_header(io.BytesIO(), (5,))


def test_truncated_header():
    """A short stream cannot be parsed."""
    buf = io.BytesIO(np.array([2, 3], dtype=np.int64).tobytes())
    with pytest.raises(DimensionError):
        read_header(buf)
