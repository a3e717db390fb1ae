"""Guard rule for interceptor plugin methods.

Plugin classes live in a ``Plugin`` directory and intercept public methods of
other classes through methods named after the intercepted one:
``beforeSave``, ``aroundSave``, ``afterSave``.

Violations (all reported with code ``PluginError``):
- fewer than two parameters (subject and payload/result)
- around method without a ``callable $proceed`` parameter
- around or after method whose body has no return statement of its own
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Protocol

from plugin_guard.declarations import BodyRange, Declaration
from plugin_guard.guards import Diagnostic, DiagnosticSink, Violation
from plugin_guard.php_file import PhpFile
from plugin_guard.tokens import TokenKind

PLUGIN_DIRECTORY = "/Plugin/"
MIN_PARAMS = 2
PROCEED_PARAMETER = "callable $proceed"
ERROR_CODE = "PluginError"


class MethodKind(str, Enum):
    """Interceptor kind, derived from the method name prefix."""

    BEFORE = "before"
    AROUND = "around"
    AFTER = "after"
    NOT_A_PLUGIN = ""


# Precedence order for prefix matching.
_PREFIXES: tuple[MethodKind, ...] = (MethodKind.BEFORE, MethodKind.AROUND, MethodKind.AFTER)


class ReturnQuery(Protocol):
    """Token source able to tell whether a body returns on its own behalf."""

    def has_direct_return(self, body: BodyRange) -> bool: ...


def is_plugin_path(file_path: str) -> bool:
    """Check if the file lives in a plugin directory (a match at index 0 counts)."""
    return PLUGIN_DIRECTORY in file_path.replace("\\", "/")


def classify(file_path: str, name: str | None, exclusions: Iterable[str] = ()) -> MethodKind:
    """Classify a declaration as one of the interceptor kinds.

    A name equal to a bare prefix (``before``) is not a plugin method; it
    must name the intercepted method after the prefix. Matching is
    case-sensitive.
    """
    if not is_plugin_path(file_path):
        return MethodKind.NOT_A_PLUGIN
    if not name or name in frozenset(exclusions):
        return MethodKind.NOT_A_PLUGIN
    for kind in _PREFIXES:
        prefix = kind.value
        if len(name) > len(prefix) and name.startswith(prefix):
            return kind
    return MethodKind.NOT_A_PLUGIN


def _error(declaration: Declaration, message: str) -> Diagnostic:
    return Diagnostic(message=message, position=declaration.position, code=ERROR_CODE)


def _check_params_quantity(declaration: Declaration) -> list[Diagnostic]:
    if len(declaration.parameters) >= MIN_PARAMS:
        return []
    message = f"Plugin {declaration.name} function should have at least two parameters."
    return [_error(declaration, message)]


def _check_around_for_proceed(declaration: Declaration) -> list[Diagnostic]:
    if any(param.raw_text == PROCEED_PARAMETER for param in declaration.parameters):
        return []
    message = (
        f"Plugin {declaration.name} is an around function and must call a callable $proceed"
    )
    return [_error(declaration, message)]


def _check_return(declaration: Declaration, source: ReturnQuery) -> list[Diagnostic]:
    if declaration.body is not None and source.has_direct_return(declaration.body):
        return []
    return [_error(declaration, f"Plugin {declaration.name} function must return value.")]


def report(diagnostics: Iterable[Diagnostic], sink: DiagnosticSink) -> None:
    """Forward diagnostics to ``sink`` in order."""
    for diag in diagnostics:
        sink.add_error(diag.message, diag.position, diag.code)


def validate(declaration: Declaration, kind: MethodKind, source: ReturnQuery) -> list[Diagnostic]:
    """Run the structural checks that apply to ``kind``.

    before -> arity; around -> arity, proceed, return; after -> arity, return.
    """
    if kind is MethodKind.NOT_A_PLUGIN:
        return []

    diagnostics = _check_params_quantity(declaration)
    if kind is MethodKind.AROUND:
        diagnostics.extend(_check_around_for_proceed(declaration))
    if kind is not MethodKind.BEFORE:
        diagnostics.extend(_check_return(declaration, source))
    return diagnostics


class PluginRule:
    """Validate interceptor methods declared in plugin classes."""

    name = "plugin"

    def __init__(self, exclude: Iterable[str] = ()) -> None:
        self._exclude: frozenset[str] = frozenset(exclude)

    @property
    def exclude(self) -> frozenset[str]:
        return self._exclude

    def register(self) -> tuple[TokenKind, ...]:
        return ("function",)

    def process(self, php_file: PhpFile, position: int) -> None:
        # Only target methods in the plugin directory
        if not is_plugin_path(php_file.file_path):
            return

        name = php_file.get_declaration_name(position)
        kind = classify(php_file.file_path, name, self._exclude)
        if kind is MethodKind.NOT_A_PLUGIN:
            return

        declaration = php_file.get_declaration(position)
        report(validate(declaration, kind, php_file), php_file)

    def run(self, files: list[Path]) -> list[Violation]:
        out: list[Violation] = []
        for path in files:
            php_file = PhpFile.load(path)
            php_file.process(self)
            out.extend(php_file.violations())
        return out


__all__ = [
    "ERROR_CODE",
    "MIN_PARAMS",
    "PLUGIN_DIRECTORY",
    "PROCEED_PARAMETER",
    "MethodKind",
    "PluginRule",
    "ReturnQuery",
    "classify",
    "is_plugin_path",
    "report",
    "validate",
]
