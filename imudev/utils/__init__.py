"""imudev.utils: Axis helpers, configuration and logging."""
from imudev.utils.axes import (
    skip_first_timestep,
    select_first_timestep,
    peel_first_timestep,
    select_along_trailing_axis,
    each_slice_trailing_axis,
    merge_along_trailing_axis,
    flatten_for_batch,
)
from imudev.utils.config import load_yaml, get_section
from imudev.utils.logging import get_logger, configure_logging

__all__ = [
    "skip_first_timestep",
    "select_first_timestep",
    "peel_first_timestep",
    "select_along_trailing_axis",
    "each_slice_trailing_axis",
    "merge_along_trailing_axis",
    "flatten_for_batch",
    "load_yaml",
    "get_section",
    "get_logger",
    "configure_logging",
]
