"""YAML configuration file support for url-splitter."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import yaml
except ImportError as exc:  # pragma: no cover
    raise RuntimeError("PyYAML is required for configuration files. Install it with the pinned version from pyproject.toml.") from exc

from .logging_config import get_logger
from .models import SplitOptions
from .utils import parse_delimiter


logger = get_logger(__name__)

CONFIG_ENV_VAR = "URL_SPLITTER_CONFIG"

_BOOL_KEYS = {"headers": "headers", "csv": "csv_input", "public_suffix": "public_suffix"}
_KNOWN_KEYS = frozenset({"delimiter", "column", *_BOOL_KEYS})


def resolve_config_path(explicit: Optional[Path]) -> Optional[Path]:
    if explicit is not None:
        return Path(explicit)
    from_env = os.getenv(CONFIG_ENV_VAR)
    return Path(from_env) if from_env else None


def load_config(path: Path) -> Dict[str, Any]:
    """Read and validate a configuration mapping from ``path``.

    Returns a dict of :class:`SplitOptions` field names to values. Raises
    ``ValueError`` for malformed files and ``OSError`` when unreadable.
    """

    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Configuration file is not valid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Configuration file must be a mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    if "delimiter" in data:
        if not isinstance(data["delimiter"], str):
            raise ValueError("'delimiter' must be a string")
        values["delimiter"] = parse_delimiter(data["delimiter"])
    if "column" in data:
        column = data["column"]
        if isinstance(column, bool) or not isinstance(column, (int, str)):
            raise ValueError("'column' must be an index or a column name")
        if isinstance(column, int) and column < 0:
            raise ValueError("'column' must not be negative")
        values["column"] = column
    for key, field_name in _BOOL_KEYS.items():
        if key in data:
            if not isinstance(data[key], bool):
                raise ValueError(f"'{key}' must be true or false")
            values[field_name] = data[key]

    logger.debug("Loaded configuration", extra={"config_path": str(path), "keys": sorted(values)})
    return values


def build_options(file_values: Dict[str, Any], overrides: Dict[str, Any]) -> SplitOptions:
    """Merge configuration file values with command-line overrides.

    ``None`` overrides mean "not given on the command line".
    """

    merged = dict(file_values)
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return SplitOptions(**merged)
