"""
Locating and reading jarhttp settings files.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from jarhttp.infra.paths import LOCAL_CONFIG_FILENAMES, SETTING_PATH

logger = logging.getLogger(__name__)


def _read_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


# extension -> (format name, reader, decode error)
_READERS: dict[str, tuple[str, Callable[[Path], Any], type[Exception]]] = {
    ".toml": ("TOML", _read_toml, tomllib.TOMLDecodeError),
    ".json": ("JSON", _read_json, json.JSONDecodeError),
}


def _candidates() -> Iterator[Path]:
    """Settings files tried when no explicit path is given, best first."""
    cwd = Path.cwd()
    for name in LOCAL_CONFIG_FILENAMES:
        yield cwd / name
    yield SETTING_PATH


def find_config_file(config_path: str | Path | None = None) -> Path:
    """
    Locate the settings file to use.

    An explicit ``config_path`` must exist; it never falls back to the
    working directory or the user config directory.

    Raises:
        FileNotFoundError: If no settings file is found.
    """
    if config_path:
        path = Path(config_path).expanduser()
        if not path.is_file():
            logger.warning("Config file not found: %s", path)
            raise FileNotFoundError(f"Config file not found: {path}")
        return path.resolve()

    for path in _candidates():
        if path.is_file():
            return path.resolve()

    raise FileNotFoundError(
        "No jarhttp.toml or jarhttp.json in the working directory "
        f"and no {SETTING_PATH}"
    )


def read_settings(path: Path) -> dict[str, Any]:
    """
    Parse a settings file into the mapping ``ConfigAdapter`` consumes.

    Top-level scalars are shared defaults; the optional ``session`` table
    holds session options.

    Raises:
        ValueError: On an unknown extension, a parse failure, a non-table
            root, or a ``session`` entry that is not a table.
    """
    ext = path.suffix.lower()
    if ext not in _READERS:
        raise ValueError(f"Unsupported config file extension: {ext}")
    kind, reader, decode_error = _READERS[ext]

    try:
        data = reader(path)
    except (OSError, decode_error) as e:
        raise ValueError(f"Invalid {kind} in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")

    session = data.get("session")
    if session is not None and not isinstance(session, dict):
        raise ValueError(f"'session' must be a table in {path}, got {type(session)}")

    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load jarhttp settings from TOML or JSON.

    Resolution order:
        - Explicit `config_path`
        - `jarhttp.toml`, then `jarhttp.json`, in the working directory
        - `settings.toml` in the user config directory
    """
    path = find_config_file(config_path)
    logger.debug("Loading jarhttp settings from %s", path)
    return read_settings(path)
