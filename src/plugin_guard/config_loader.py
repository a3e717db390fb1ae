from __future__ import annotations

import tomllib
from pathlib import Path

from plugin_guard._types import TomlTable, UnknownJson
from plugin_guard.config import (
    DEFAULT_DIRECTORIES,
    DEFAULT_EXCLUDE_PARTS,
    GuardConfig,
    default_config,
)

CONFIG_FILE_NAME = "plugin-guard.toml"
PYPROJECT_FILE_NAME = "pyproject.toml"


def _decode_string_tuple(data: TomlTable, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Configuration key '{key}' must be a list or tuple of strings")

    result: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"All items in '{key}' must be strings")
        result.append(item)
    return tuple(result)


def _decode_table(data: TomlTable, key: str, source: Path) -> TomlTable:
    raw = data.get(key)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"The '{key}' section in {source.name} must be a mapping.")
    return raw


def _read_toml(path: Path) -> dict[str, UnknownJson]:
    try:
        with path.open("rb") as f:
            # A TOML document is always a table at the root
            config_data: dict[str, UnknownJson] = tomllib.load(f)
    except OSError as exc:
        raise RuntimeError(f"failed to read {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    return config_data


def _read_guard_section(config_path: Path) -> TomlTable:
    config_data = _read_toml(config_path)
    if config_path.name == PYPROJECT_FILE_NAME:
        tool_section = _decode_table(config_data, "tool", config_path)
        return _decode_table(tool_section, "plugin_guard", config_path)
    return _decode_table(config_data, "guard", config_path)


def _find_config_file(root: Path) -> Path | None:
    for name in (CONFIG_FILE_NAME, PYPROJECT_FILE_NAME):
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _decode_guard_config(root: Path, guard_section: TomlTable) -> GuardConfig:
    return GuardConfig(
        root=root,
        directories=_decode_string_tuple(guard_section, "directories", DEFAULT_DIRECTORIES),
        exclude_parts=_decode_string_tuple(guard_section, "exclude_parts", DEFAULT_EXCLUDE_PARTS),
        exclude_methods=_decode_string_tuple(guard_section, "exclude_methods", ()),
    )


def load_guard_config(root: Path, config_path: Path | None = None) -> GuardConfig:
    """Load guard settings for a project.

    An explicit ``config_path`` must exist. Otherwise ``plugin-guard.toml``
    (``[guard]`` table) and then ``pyproject.toml`` (``[tool.plugin_guard]``
    table) are looked up in ``root``; with neither present the defaults apply.

    Raises:
        FileNotFoundError: If an explicit config path does not exist.
        ValueError: If the TOML is invalid or a key has the wrong type.
    """
    if config_path is not None and not config_path.is_file():
        raise FileNotFoundError(f"Plugin guard config not found at {config_path}")

    source = config_path if config_path is not None else _find_config_file(root)
    if source is None:
        return default_config(root)
    return _decode_guard_config(root, _read_guard_section(source))


__all__ = ["CONFIG_FILE_NAME", "load_guard_config"]
