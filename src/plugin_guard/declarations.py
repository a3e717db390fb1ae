"""Read-only views of a declaration handed to guard rules."""

from __future__ import annotations

from typing import NamedTuple


class Parameter(NamedTuple):
    """One declared parameter.

    ``raw_text`` is the declaration as written (type, name and default value),
    trimmed and without comments.
    """

    raw_text: str
    name: str


class BodyRange(NamedTuple):
    """Positions of the braces around a declaration body."""

    owner: int
    opener: int
    closer: int


class Declaration(NamedTuple):
    name: str
    file_path: str
    parameters: tuple[Parameter, ...]
    position: int
    body: BodyRange | None


__all__ = ["BodyRange", "Declaration", "Parameter"]
