"""Utility functions for guard rules."""

from __future__ import annotations

from collections.abc import Generator, Sequence
from pathlib import Path

from plugin_guard.config import GuardConfig


def read_source(path: Path) -> str:
    """Read file contents as text.

    Uses utf-8-sig to handle optional BOM.
    """
    try:
        return path.read_text(encoding="utf-8-sig", errors="strict")
    except (OSError, UnicodeDecodeError) as exc:
        raise RuntimeError(f"failed to read {path}: {exc}") from exc


def _is_excluded(path: Path, exclude_parts: Sequence[str]) -> bool:
    return any(part in exclude_parts for part in path.parts)


def _walk_php_files(base: Path, exclude_parts: Sequence[str]) -> Generator[Path, None, None]:
    for path in base.rglob("*.php"):
        if path.is_file() and not _is_excluded(path.relative_to(base), exclude_parts):
            yield path


def iter_php_files(config: GuardConfig) -> list[Path]:
    """List PHP files under the configured directories, skipping excluded parts."""
    out: list[Path] = []
    for rel in config.directories:
        base = config.root / rel
        if base.is_dir():
            out.extend(_walk_php_files(base, config.exclude_parts))
    return sorted(set(out))


def expand_paths(config: GuardConfig, paths: Sequence[str]) -> list[Path]:
    """Resolve explicit file or directory arguments against the project root.

    Raises:
        FileNotFoundError: If an argument names neither a file nor a directory.
    """
    out: list[Path] = []
    for raw in paths:
        candidate = Path(raw)
        path = candidate if candidate.is_absolute() else config.root / candidate
        if path.is_dir():
            out.extend(_walk_php_files(path, config.exclude_parts))
        elif path.is_file():
            out.append(path)
        else:
            raise FileNotFoundError(f"No such file or directory: {raw}")
    return sorted(set(out))


__all__ = ["expand_paths", "iter_php_files", "read_source"]
