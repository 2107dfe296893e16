"""YAML configuration files for arrangers and data preparation runs."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from imudev.errors import ConfigurationError


def get_section(cfg: Mapping[str, Any], *keys: str) -> Dict[str, Any]:
    """Descend into ``cfg`` along ``keys``.

    A missing or empty (``null``) section reads as ``{}``, so every option in
    it falls back to its default.

    Raises:
        ConfigurationError: If ``cfg`` or a section on the way is not a mapping
    """
    if not isinstance(cfg, Mapping):
        raise ConfigurationError(f"Config must be a mapping, got {type(cfg).__name__}")
    section = dict(cfg)
    for depth, key in enumerate(keys, start=1):
        value = section.get(key)
        if value is None:
            value = {}
        if not isinstance(value, Mapping):
            raise ConfigurationError(
                f"Config section '{'.'.join(keys[:depth])}' must be a mapping, "
                f"got {type(value).__name__}"
            )
        section = dict(value)
    return section


def load_yaml(path: Union[str, Path], *section: str) -> Dict[str, Any]:
    """Read the YAML file at ``path``, optionally only its nested ``section``.

    Example:
        >>> load_yaml("prepare.yaml", "arranger")   # doctest: +SKIP
        {'stride': 10, 'window': 200, 'pad': [20, 20]}
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config not found: {path}")
    cfg = yaml.safe_load(path.read_text(encoding="utf-8"))
    return get_section({} if cfg is None else cfg, *section)
