"""Guard rules for enforcing interceptor plugin conventions.

This module provides the records shared by every rule: the per-declaration
diagnostic a rule reports, the per-file violation the runner prints, and the
protocols rules and diagnostic sinks implement.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple, Protocol


class Diagnostic(NamedTuple):
    """A single rule violation tied to a token position."""

    message: str
    position: int
    code: str


class Violation(NamedTuple):
    """A single guard violation."""

    file: Path
    line_no: int
    kind: str
    line: str


class RuleReport(NamedTuple):
    """Summary of violations for a rule."""

    name: str
    violations: int


class DiagnosticSink(Protocol):
    """Receiver for diagnostics reported by a rule."""

    def add_error(self, message: str, position: int, code: str) -> None: ...


class Rule(Protocol):
    """Protocol for guard rules."""

    @property
    def name(self) -> str: ...

    def run(self, files: list[Path]) -> list[Violation]: ...


__all__ = ["Diagnostic", "DiagnosticSink", "Rule", "RuleReport", "Violation"]
