"""Sliding-window arranger: one long recording -> stacked, padded frames."""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from pathlib import Path
from typing import Any, BinaryIO, Mapping, NamedTuple, Sequence, Union

import numpy as np
import pandas as pd
from tqdm import tqdm

from imudev.errors import ConfigurationError, DimensionError
from imudev.layouts.header import header_nbytes, read_header, write_header
from imudev.utils.config import load_yaml
from imudev.utils.logging import get_logger

logger = get_logger(__name__)


class Pad(NamedTuple):
    """Number of extra timepoints on each side of the window (may be negative)."""
    left: int
    right: int


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def normalize_pad(pad: Any) -> Pad:
    """Turn an int, a 2-sequence or a ``{left, right}`` mapping into a :class:`Pad`."""
    if isinstance(pad, Mapping):
        if set(pad) != {"left", "right"}:
            raise ConfigurationError(
                f"pad mapping must have exactly the keys 'left' and 'right', got {sorted(pad)}"
            )
        left, right = pad["left"], pad["right"]
    elif _is_int(pad):
        left = right = pad
    elif isinstance(pad, (tuple, list)):
        if len(pad) != 2:
            raise ConfigurationError(
                f"pad must be an int or a 2-length sequence, got length {len(pad)}"
            )
        left, right = pad
    else:
        raise ConfigurationError(
            f"pad must be an int, a 2-length sequence or a mapping, got {type(pad).__name__}"
        )
    if not (_is_int(left) and _is_int(right)):
        raise ConfigurationError(f"pad must be specified with integers, got ({left!r}, {right!r})")
    return Pad(int(left), int(right))


@dataclass(frozen=True)
class SlidingWindow:
    """Cut a SINGLE_TIMESERIES array into overlapping, padded frames.

    A ``window`` of fixed size slides over the time axis, moving ``stride``
    timepoints at a time, and each frame is extended by ``pad.left`` and
    ``pad.right`` extra timepoints. The result is a STACKED_ARRAY of shape
    ``(*state_dim, padded_window, num_frames)``.

    Edge policy: only the window itself is restricted to the data. When the
    padded range would leave ``[1, L]`` it is shifted back inside, keeping its
    length, so near an edge the padding moves to the opposite side of the
    window. Frames are never clipped.

    Timepoint numbers (frame starts, padded ranges) are 1-based.

    Attributes:
        stride: Hop between consecutive frame starts (> 0)
        window: Core window length (> 0)
        pad: Extra timepoints on each side; sign unrestricted
        dtype: Element type of the arranged output
    """
    stride: int = 10
    window: int = 200
    pad: Pad = Pad(0, 0)
    dtype: Any = np.float32

    def __post_init__(self):
        """Validate configuration parameters."""
        if not _is_int(self.stride) or self.stride <= 0:
            raise ConfigurationError(f"stride ({self.stride}) must be a positive integer")
        if not _is_int(self.window) or self.window <= 0:
            raise ConfigurationError(f"window ({self.window}) must be a positive integer")
        object.__setattr__(self, "pad", normalize_pad(self.pad))
        object.__setattr__(self, "dtype", np.dtype(self.dtype))
        if self.padded_window <= 0:
            raise ConfigurationError(
                f"padded window ({self.padded_window}) must be positive; "
                f"window={self.window}, pad={tuple(self.pad)}"
            )

    @property
    def padded_window(self) -> int:
        """Frame length: window plus padding on both sides."""
        return self.window + self.pad.left + self.pad.right

    def frame_starts(self, max_len: int) -> range:
        """1-based start of every window that fits in data of length ``max_len``.

        Raises:
            ConfigurationError: If ``max_len`` cannot hold one padded frame
                or one window (negative padding)
        """
        pw = self.padded_window
        if max_len < max(pw, self.window):
            raise ConfigurationError(
                f"SlidingWindow needs {max(pw, self.window)} timepoints for one frame "
                f"(window={self.window}, padded window={pw}), got {max_len}"
            )
        return range(1, max_len - self.window + 2, self.stride)

    def padded_frame_range(self, frame_id: int, max_len: int) -> range:
        """1-based timepoints of the padded frame whose window starts at ``frame_id``.

        The nominal range ``[frame_id - pad.left, frame_id - pad.left + padded_window - 1]``
        is shifted (not clipped) to stay inside ``[1, max_len]``.
        """
        pw = self.padded_window
        from_id = max(1, frame_id - self.pad.left)
        to_id = min(max_len, from_id + pw - 1)
        from_id = to_id - pw + 1
        return range(from_id, to_id + 1)

    def output_shape(self, data: np.ndarray) -> tuple:
        """Shape of :meth:`arrange`'s result for ``data``."""
        data = _check_single_timeseries(data)
        n_frames = len(self.frame_starts(data.shape[-1]))
        return data.shape[:-1] + (self.padded_window, n_frames)

    def _frames(self, data: np.ndarray):
        max_len = data.shape[-1]
        for frame_id in self.frame_starts(max_len):
            r = self.padded_frame_range(frame_id, max_len)
            yield data[..., r.start - 1:r.stop - 1]

    def arrange(self, data: np.ndarray) -> np.ndarray:
        """Arrange ``data`` into a new STACKED_ARRAY of the arranger's dtype."""
        data = _check_single_timeseries(data)
        shape = self.output_shape(data)
        out = np.empty(shape, dtype=self.dtype)
        for i, frame in enumerate(self._frames(data)):
            out[..., i] = frame
        logger.debug(
            "Arranged %d frames of length %d from %d timepoints",
            shape[-1], self.padded_window, data.shape[-1],
        )
        return out

    __call__ = arrange

    def arrange_to_stream(
        self, stream: BinaryIO, data: np.ndarray, progress: bool = False
    ) -> int:
        """Write header and frames of ``data`` to a binary ``stream``.

        Each frame is cast to the arranger's dtype and written contiguously
        with the state axes varying fastest and time slowest. A failed write
        leaves the stream truncated; discard it and start over.

        Returns:
            Number of frames written
        """
        data = _check_single_timeseries(data)
        shape = self.output_shape(data)
        write_header(stream, shape)
        frames = self._frames(data)
        if progress:
            frames = tqdm(frames, total=shape[-1], desc="frames")
        for frame in frames:
            stream.write(np.asarray(frame, dtype=self.dtype).tobytes(order="F"))
        logger.info(
            "Wrote %d frames of shape %s (%s) to stream",
            shape[-1], shape[:-1], self.dtype,
        )
        return shape[-1]

    def arrange_to_file(
        self, path: Union[str, Path], data: np.ndarray, progress: bool = False
    ) -> int:
        """Stream the arranged ``data`` into the file at ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            return self.arrange_to_stream(f, data, progress=progress)

    def frame_table(self, max_len: int) -> pd.DataFrame:
        """Describe every frame for data of length ``max_len``.

        Columns: ``frame_id``, ``start``/``stop`` (inclusive padded range),
        ``window_start``/``window_stop`` (inclusive core window) and
        ``shifted``, True where the edge policy moved the padded range away
        from its nominal position.
        """
        rows = []
        for frame_id in self.frame_starts(max_len):
            r = self.padded_frame_range(frame_id, max_len)
            rows.append({
                "frame_id": frame_id,
                "start": r[0],
                "stop": r[-1],
                "window_start": frame_id,
                "window_stop": frame_id + self.window - 1,
                "shifted": r[0] != frame_id - self.pad.left,
            })
        return pd.DataFrame(
            rows,
            columns=["frame_id", "start", "stop", "window_start", "window_stop", "shifted"],
        )


def _check_single_timeseries(data: np.ndarray) -> np.ndarray:
    data = np.asarray(data)
    if data.ndim < 1:
        raise DimensionError("SINGLE_TIMESERIES data needs a time axis")
    return data


def sliding_window(
    dtype: Any = np.float32,
    *,
    stride: int = 10,
    window: int = 200,
    pad: Any = (0, 0),
) -> SlidingWindow:
    """Recommended constructor for :class:`SlidingWindow`.

    Args:
        dtype: Element type of the arranged data
        stride: Hop between frame starts
        window: Core window length
        pad: An int (same on both sides), a ``(left, right)`` pair, or a
            mapping with ``left`` and ``right`` keys
    """
    return SlidingWindow(stride=stride, window=window, pad=pad, dtype=dtype)


def sliding_window_from_config(cfg: Mapping[str, Any]) -> SlidingWindow:
    """Build a :class:`SlidingWindow` from a config section.

    Recognised keys: ``stride``, ``window``, ``pad``, ``dtype``. Unknown keys
    are rejected so that typos do not silently fall back to defaults.
    """
    allowed = {"stride", "window", "pad", "dtype"}
    unknown = set(cfg) - allowed
    if unknown:
        raise ConfigurationError(f"Unknown arranger config keys: {sorted(unknown)}")
    kwargs = {k: cfg[k] for k in ("stride", "window", "pad") if k in cfg}
    return sliding_window(cfg.get("dtype", "float32"), **kwargs)


def sliding_window_from_yaml(
    path: Union[str, Path], section: Sequence[str] = ("arranger",)
) -> SlidingWindow:
    """Build a :class:`SlidingWindow` from the ``section`` of a YAML file."""
    return sliding_window_from_config(load_yaml(path, *section))


def read_arranged(stream: BinaryIO, dtype: Any = np.float32) -> np.ndarray:
    """Read a whole stream written by :meth:`SlidingWindow.arrange_to_stream`."""
    state_dim, num_timepoints, num_samples = read_header(stream)
    shape = state_dim + (num_timepoints, num_samples)
    dtype = np.dtype(dtype)
    count = int(np.prod(shape))
    raw = stream.read(count * dtype.itemsize)
    if len(raw) != count * dtype.itemsize:
        raise DimensionError(
            f"Truncated payload: expected {count * dtype.itemsize} bytes, got {len(raw)}"
        )
    return np.frombuffer(raw, dtype=dtype).reshape(shape, order="F").copy()


def open_arranged(path: Union[str, Path], dtype: Any = np.float32) -> np.memmap:
    """Memory-map the payload of a file written by :meth:`SlidingWindow.arrange_to_file`."""
    path = Path(path)
    with path.open("rb") as f:
        state_dim, num_timepoints, num_samples = read_header(f)
    shape = state_dim + (num_timepoints, num_samples)
    return np.memmap(
        path,
        dtype=np.dtype(dtype),
        mode="r",
        offset=header_nbytes(len(state_dim)),
        shape=shape,
        order="F",
    )

