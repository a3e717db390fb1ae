"""Token stream of one PHP file together with the diagnostics reported on it.

``PhpFile`` is the handle a token rule receives: it answers declaration
queries (name, parameters, body range, directly nested returns) and collects
whatever the rule reports through ``add_error``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from plugin_guard.declarations import BodyRange, Declaration, Parameter
from plugin_guard.guards import Diagnostic, Violation
from plugin_guard.guards.util import read_source
from plugin_guard.tokens import Token, TokenKind, TokenStream, tokenize_php

_INSIGNIFICANT: frozenset[str] = frozenset({"whitespace", "comment", "doc_comment"})
_OPENERS: frozenset[str] = frozenset({"open_paren", "open_square", "open_curly"})
_CLOSERS: frozenset[str] = frozenset({"close_paren", "close_square", "close_curly"})
_DECLARATIONS: frozenset[str] = frozenset({"function", "closure"})


class TokenRule(Protocol):
    """A rule invoked once per token of the kinds it registers."""

    def register(self) -> tuple[TokenKind, ...]: ...

    def process(self, php_file: PhpFile, position: int) -> None: ...


def _build_parameter(tokens: list[Token]) -> Parameter | None:
    text = "".join(tok.content for tok in tokens if tok.kind not in ("comment", "doc_comment"))
    raw_text = text.strip()
    if raw_text == "":
        return None
    name = next((tok.content for tok in tokens if tok.kind == "variable"), "")
    return Parameter(raw_text=raw_text, name=name)


class PhpFile:
    def __init__(self, path: Path, stream: TokenStream) -> None:
        self.path = path
        self.file_path = path.absolute().as_posix()
        self.tokens = stream.tokens
        self.scopes = stream.scopes
        self.diagnostics: list[Diagnostic] = []

    @classmethod
    def load(cls, path: Path) -> PhpFile:
        """Read and lex a PHP file.

        Raises:
            RuntimeError: If the file cannot be read or decoded.
        """
        return cls(path, tokenize_php(read_source(path)))

    @classmethod
    def from_source(cls, path: Path, source: str) -> PhpFile:
        return cls(path, tokenize_php(source))

    def _next_significant(self, position: int) -> int | None:
        for following in range(position + 1, len(self.tokens)):
            token = self.tokens[following]
            if token.kind in _INSIGNIFICANT or token.content == "&":
                continue
            return following
        return None

    def line_of(self, position: int) -> int:
        return self.tokens[position].line

    def get_declaration_name(self, position: int) -> str | None:
        """Return the name of the function declared at ``position``, if any."""
        if self.tokens[position].kind != "function":
            return None
        following = self._next_significant(position)
        if following is None or self.tokens[following].kind != "identifier":
            return None
        return self.tokens[following].content

    def get_method_parameters(self, position: int) -> list[Parameter]:
        """Split the parameter list of the declaration at ``position``.

        Commas nested inside brackets (default values such as ``[1, 2]``) do
        not split parameters; a trailing comma yields no empty parameter.
        """
        scope = self.scopes.get(position)
        if scope is None or scope.parenthesis_opener is None or scope.parenthesis_closer is None:
            return []

        params: list[Parameter] = []
        current: list[Token] = []
        depth = 0
        for token in self.tokens[scope.parenthesis_opener + 1 : scope.parenthesis_closer]:
            if token.kind in _OPENERS:
                depth += 1
            elif token.kind in _CLOSERS:
                depth -= 1
            elif token.kind == "comma" and depth == 0:
                param = _build_parameter(current)
                if param is not None:
                    params.append(param)
                current = []
                continue
            current.append(token)

        param = _build_parameter(current)
        if param is not None:
            params.append(param)
        return params

    def get_body_range(self, position: int) -> BodyRange | None:
        scope = self.scopes.get(position)
        if scope is None or scope.scope_opener is None:
            return None
        # An unterminated body runs to the end of the file.
        closer = scope.scope_closer if scope.scope_closer is not None else len(self.tokens)
        return BodyRange(owner=position, opener=scope.scope_opener, closer=closer)

    def get_declaration(self, position: int) -> Declaration:
        name = self.get_declaration_name(position)
        return Declaration(
            name=name if name is not None else "",
            file_path=self.file_path,
            parameters=tuple(self.get_method_parameters(position)),
            position=position,
            body=self.get_body_range(position),
        )

    def _innermost_declaration(self, token: Token) -> int | None:
        for owner in reversed(token.conditions):
            if self.tokens[owner].kind in _DECLARATIONS:
                return owner
        return None

    def has_direct_return(self, body: BodyRange) -> bool:
        """Check for a return statement belonging to ``body.owner`` itself.

        Returns inside nested closures, functions or anonymous class methods
        belong to those declarations and are not counted.
        """
        for token in self.tokens[body.opener + 1 : body.closer]:
            if token.kind == "return" and self._innermost_declaration(token) == body.owner:
                return True
        return False

    def add_error(self, message: str, position: int, code: str) -> None:
        self.diagnostics.append(Diagnostic(message=message, position=position, code=code))

    def process(self, rule: TokenRule) -> None:
        wanted = rule.register()
        for position, token in enumerate(self.tokens):
            if token.kind in wanted:
                rule.process(self, position)

    def violations(self) -> list[Violation]:
        return [
            Violation(
                file=self.path,
                line_no=self.line_of(diag.position),
                kind=diag.code,
                line=diag.message,
            )
            for diag in self.diagnostics
        ]


__all__ = ["PhpFile", "TokenRule"]
