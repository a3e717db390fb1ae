"""Lightweight PHP lexer producing the token stream guard rules read.

Only the structure the rules need is recovered: declaration keywords, brace
scopes with their owners, and the enclosing owners of every token. This is
not a PHP parser; malformed input is lexed on a best-effort basis and never
raises.
"""

from __future__ import annotations

import re
from typing import Literal, NamedTuple

TokenKind = Literal[
    "inline_html",
    "open_tag",
    "close_tag",
    "whitespace",
    "comment",
    "doc_comment",
    "string",
    "heredoc",
    "variable",
    "number",
    "identifier",
    "function",
    "closure",
    "return",
    "class",
    "open_paren",
    "close_paren",
    "open_curly",
    "close_curly",
    "open_square",
    "close_square",
    "semicolon",
    "comma",
    "operator",
]


class Token(NamedTuple):
    """One lexed token.

    ``conditions`` holds the positions of the scope owners (functions,
    closures and class-likes) whose braces enclose the token, outermost first.
    """

    kind: TokenKind
    content: str
    line: int
    conditions: tuple[int, ...]


class Scope(NamedTuple):
    """Header and body boundaries of a scope owner, as token positions."""

    owner: int
    parenthesis_opener: int | None
    parenthesis_closer: int | None
    scope_opener: int | None
    scope_closer: int | None


class TokenStream(NamedTuple):
    tokens: list[Token]
    scopes: dict[int, Scope]


_RawToken = tuple[TokenKind, str, int]

_OPEN_TAG = re.compile(r"<\?(?:php\b|=)?", re.IGNORECASE)

_PHP_TOKEN = re.compile(
    r"""
    (?P<close_tag>\?>)
    |(?P<doc_comment>/\*\*(?!/).*?(?:\*/|\Z))
    |(?P<comment>/\*.*?(?:\*/|\Z)|(?://|\#(?!\[))(?:[^\n?]|\?(?!>))*)
    |(?P<heredoc><<<[ \t]*(?P<quote>["']?)(?P<label>[^\W\d]\w*)(?P=quote)\r?\n
        .*?^[ \t]*(?P=label)\b)
    |(?P<string>'(?:[^'\\]|\\.)*(?:'|\Z)|"(?:[^"\\]|\\.)*(?:"|\Z)|`(?:[^`\\]|\\.)*(?:`|\Z))
    |(?P<variable>\$+[^\W\d]\w*)
    |(?P<number>0[xX][0-9a-fA-F_]+|0[bB][01_]+|\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d+)?)
    |(?P<identifier>\\?[^\W\d]\w*(?:\\[^\W\d]\w*)*)
    |(?P<whitespace>\s+)
    |(?P<operator>\?->|->|::|=>|\#\[|\.\.\.|\S)
    """,
    re.VERBOSE | re.DOTALL | re.MULTILINE,
)

# Checked in pattern order; a heredoc also fills its inner quote/label groups.
_GROUPS: tuple[TokenKind, ...] = (
    "close_tag",
    "doc_comment",
    "comment",
    "heredoc",
    "string",
    "variable",
    "number",
    "identifier",
    "whitespace",
    "operator",
)

_PUNCTUATION: dict[str, TokenKind] = {
    "(": "open_paren",
    ")": "close_paren",
    "{": "open_curly",
    "}": "close_curly",
    "[": "open_square",
    "]": "close_square",
    ";": "semicolon",
    ",": "comma",
}

_KEYWORDS: dict[str, TokenKind] = {
    "return": "return",
    "class": "class",
    "interface": "class",
    "trait": "class",
}

_INSIGNIFICANT: frozenset[str] = frozenset({"whitespace", "comment", "doc_comment"})
_MEMBER_ACCESS: frozenset[str] = frozenset({"->", "?->", "::"})
_SCOPE_OWNERS: frozenset[str] = frozenset({"function", "closure", "class"})


def _lex(source: str) -> list[_RawToken]:
    raw: list[_RawToken] = []
    line = 1
    pos = 0
    length = len(source)
    in_php = False
    while pos < length:
        if not in_php:
            tag = _OPEN_TAG.search(source, pos)
            end = tag.start() if tag is not None else length
            if end > pos:
                html = source[pos:end]
                raw.append(("inline_html", html, line))
                line += html.count("\n")
            if tag is None:
                break
            raw.append(("open_tag", tag.group(0), line))
            pos = tag.end()
            in_php = True
            continue

        match = _PHP_TOKEN.match(source, pos)
        if match is None:
            # Unreachable: the operator branch accepts any non-space character.
            break
        kind = next(group for group in _GROUPS if match.group(group) is not None)
        content = match.group(0)
        raw.append((kind, content, line))
        line += content.count("\n")
        pos = match.end()
        if kind == "close_tag":
            in_php = False
    return raw


def _next_significant(
    raw: list[_RawToken], index: int, *, skip_reference: bool
) -> _RawToken | None:
    for following in range(index + 1, len(raw)):
        token = raw[following]
        if token[0] in _INSIGNIFICANT:
            continue
        if skip_reference and token[1] == "&":
            continue
        return token
    return None


def _keyword_kind(
    raw: list[_RawToken], index: int, content: str, previous: _RawToken | None
) -> TokenKind:
    """Resolve an identifier to a keyword kind using its neighbours."""
    if previous is not None and (previous[1] in _MEMBER_ACCESS or previous[0] == "function"):
        return "identifier"
    word = content.lower()
    if word == "function":
        if previous is not None and previous[1].lower() == "use":
            return "identifier"
        following = _next_significant(raw, index, skip_reference=True)
        if following is not None and following[0] == "identifier":
            return "function"
        return "closure"
    if word == "enum":
        following = _next_significant(raw, index, skip_reference=False)
        if following is not None and following[0] == "identifier":
            return "class"
        return "identifier"
    return _KEYWORDS.get(word, "identifier")


def _resolve(raw: list[_RawToken]) -> list[_RawToken]:
    resolved: list[_RawToken] = []
    previous: _RawToken | None = None
    for index, (kind, content, line) in enumerate(raw):
        if kind == "identifier":
            kind = _keyword_kind(raw, index, content, previous)
        elif kind == "operator":
            kind = _PUNCTUATION.get(content, "operator")
        token: _RawToken = (kind, content, line)
        resolved.append(token)
        if kind not in _INSIGNIFICANT:
            previous = token
    return resolved


def _build_stream(resolved: list[_RawToken]) -> TokenStream:
    tokens: list[Token] = []
    scopes: dict[int, Scope] = {}
    braces: list[tuple[int, int | None]] = []
    pending: int | None = None
    depth = 0

    for position, (kind, content, line) in enumerate(resolved):
        if kind == "close_curly" and braces:
            _, closed_owner = braces.pop()
            if closed_owner is not None:
                scopes[closed_owner] = scopes[closed_owner]._replace(scope_closer=position)

        conditions = tuple(owner for _, owner in braces if owner is not None)
        tokens.append(Token(kind=kind, content=content, line=line, conditions=conditions))

        if kind in _SCOPE_OWNERS:
            pending = position
            depth = 0
            scopes[position] = Scope(position, None, None, None, None)
        elif pending is None:
            if kind == "open_curly":
                braces.append((position, None))
        elif kind == "open_paren":
            scope = scopes[pending]
            if depth == 0 and scope.parenthesis_opener is None and tokens[pending].kind != "class":
                scopes[pending] = scope._replace(parenthesis_opener=position)
            depth += 1
        elif kind == "close_paren":
            depth = max(depth - 1, 0)
            scope = scopes[pending]
            header_open = scope.parenthesis_opener is not None and scope.parenthesis_closer is None
            if depth == 0 and header_open:
                scopes[pending] = scope._replace(parenthesis_closer=position)
        elif kind == "open_curly":
            if depth == 0:
                scopes[pending] = scopes[pending]._replace(scope_opener=position)
                braces.append((position, pending))
                pending = None
            else:
                braces.append((position, None))
        elif kind == "semicolon" and depth == 0:
            # Abstract and interface methods end their header without a body.
            pending = None

    return TokenStream(tokens=tokens, scopes=scopes)


def tokenize_php(source: str) -> TokenStream:
    """Lex PHP source into tokens plus the scopes of functions, closures and classes."""
    return _build_stream(_resolve(_lex(source)))


__all__ = ["Scope", "Token", "TokenKind", "TokenStream", "tokenize_php"]
