from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

DEFAULT_DIRECTORIES: tuple[str, ...] = (".",)
DEFAULT_EXCLUDE_PARTS: tuple[str, ...] = ("vendor", "node_modules", ".git")


class GuardConfig(NamedTuple):
    root: Path
    directories: tuple[str, ...]
    exclude_parts: tuple[str, ...]
    exclude_methods: tuple[str, ...]


def default_config(root: Path) -> GuardConfig:
    return GuardConfig(
        root=root,
        directories=DEFAULT_DIRECTORIES,
        exclude_parts=DEFAULT_EXCLUDE_PARTS,
        exclude_methods=(),
    )


__all__ = ["DEFAULT_DIRECTORIES", "DEFAULT_EXCLUDE_PARTS", "GuardConfig", "default_config"]
