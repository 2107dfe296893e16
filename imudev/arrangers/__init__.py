"""imudev.arrangers: Slice long recordings into training frames."""
from imudev.arrangers.sliding_window import (
    Pad,
    SlidingWindow,
    normalize_pad,
    sliding_window,
    sliding_window_from_config,
    sliding_window_from_yaml,
    read_arranged,
    open_arranged,
)

__all__ = [
    "Pad",
    "SlidingWindow",
    "normalize_pad",
    "sliding_window",
    "sliding_window_from_config",
    "sliding_window_from_yaml",
    "read_arranged",
    "open_arranged",
]
