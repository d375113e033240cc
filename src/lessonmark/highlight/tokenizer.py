"""Heuristic syntax tokenizer for code examples.

Splits source text into a contiguous, non-overlapping sequence of classified
tokens covering the whole input.  It is not a parser: the rules are a fixed,
precedence-ordered table of independent matchers tried at each scan position.
The first matcher that consumes a non-empty run wins; anything no matcher
claims is accumulated into ``plain`` tokens.  Malformed or partial code never
raises, it just degrades to ``plain``.

The one contextual rule is constructor detection: a capitalised call-site
identifier directly after the keyword ``new`` is classified as a type name
(``new Foo()``) rather than a function call.
"""

# Pattern: Functional Core (pure functions, no I/O)

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias


class TokenKind(StrEnum):
    """Classification of a token, also used as its CSS class suffix."""

    COMMENT = "comment"
    STRING = "string"
    KEYWORD = "keyword"
    NUMBER = "number"
    IDENTIFIER_CALL = "identifier-call"
    TYPE_NAME = "type-name"
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class Token:
    """A classified ``[start, end)`` slice of the tokenized text."""

    start: int
    end: int
    kind: TokenKind
    text: str


KEYWORDS = frozenset(
    (
        "public private protected static final void class interface enum "
        "extends implements new import package return if else for while do "
        "switch case break continue try catch finally throw throws const let "
        "var function async await export default int boolean double float "
        "true false null this from of in type instanceof delete yield"
    ).split()
)

_LINE_COMMENT = re.compile(r"//[^\n]*")
# An unterminated block comment swallows the rest of the input
_BLOCK_COMMENT = re.compile(r"/\*(?:.*?\*/|.*\Z)", re.DOTALL)
_STRING = re.compile(
    r""""(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*'|`(?:[^`\\\n]|\\.)*`"""
)
_KEYWORD = re.compile(r"\b(?:" + "|".join(sorted(KEYWORDS)) + r")\b")
_NUMBER = re.compile(r"\b\d+\.?\d*\b")
_CALL_SITE = re.compile(r"\b\w+(?=\s*\()")
_CAPITALISED = re.compile(r"\b[A-Z][A-Za-z0-9_]*\b")
_OPERATOR = re.compile(r"[=+\-*/%&|<>!^~?:.]+")
_PUNCTUATION = re.compile(r"[{}()\[\],;]")
_WORD = re.compile(r"\w+")

Matcher: TypeAlias = Callable[[str, int], int | None]


def _regex_matcher(pattern: re.Pattern[str]) -> Matcher:
    """Wrap a compiled pattern as a matcher returning the match end or None."""

    def _match(text: str, pos: int) -> int | None:
        m = pattern.match(text, pos)
        if m is None or m.end() == pos:
            return None
        return m.end()

    return _match


def _comment_matcher(text: str, pos: int) -> int | None:
    for pattern in (_LINE_COMMENT, _BLOCK_COMMENT):
        m = pattern.match(text, pos)
        if m is not None and m.end() > pos:
            return m.end()
    return None


# Precedence order: earlier rules win at the same start position.
RULES: tuple[tuple[TokenKind, Matcher], ...] = (
    (TokenKind.COMMENT, _comment_matcher),
    (TokenKind.STRING, _regex_matcher(_STRING)),
    (TokenKind.KEYWORD, _regex_matcher(_KEYWORD)),
    (TokenKind.NUMBER, _regex_matcher(_NUMBER)),
    (TokenKind.IDENTIFIER_CALL, _regex_matcher(_CALL_SITE)),
    (TokenKind.TYPE_NAME, _regex_matcher(_CAPITALISED)),
    (TokenKind.OPERATOR, _regex_matcher(_OPERATOR)),
    (TokenKind.PUNCTUATION, _regex_matcher(_PUNCTUATION)),
)


def _match_rule(text: str, pos: int) -> tuple[TokenKind, int] | None:
    """Return ``(kind, end)`` for the highest-precedence rule matching at *pos*."""
    for kind, matcher in RULES:
        end = matcher(text, pos)
        if end is not None:
            return kind, end
    return None


def _follows_new(tokens: list[Token], text: str, plain_start: int, pos: int) -> bool:
    """True when the nearest non-whitespace token before *pos* is ``new``."""
    if text[plain_start:pos].strip():
        return False
    if not tokens:
        return False
    prev = tokens[-1]
    return prev.kind is TokenKind.KEYWORD and prev.text == "new"


def tokenize(text: str) -> list[Token]:
    """Classify *text* into tokens that exactly cover ``[0, len(text))``.

    Args:
        text: Source code (any string is accepted).

    Returns:
        Ordered tokens; concatenating their ``text`` reproduces *text*.
        An empty input gives an empty list.
    """
    tokens: list[Token] = []
    pos = 0
    plain_start = 0
    length = len(text)

    def _flush_plain(upto: int) -> None:
        if upto > plain_start:
            tokens.append(
                Token(plain_start, upto, TokenKind.PLAIN, text[plain_start:upto])
            )

    while pos < length:
        matched = _match_rule(text, pos)
        if matched is None:
            # Unclaimed identifiers are consumed whole so that a later rule
            # cannot match from the middle of a word.
            word = _WORD.match(text, pos)
            pos = word.end() if word is not None else pos + 1
            continue

        kind, end = matched
        if (
            kind is TokenKind.IDENTIFIER_CALL
            and text[pos].isupper()
            and _follows_new(tokens, text, plain_start, pos)
        ):
            kind = TokenKind.TYPE_NAME

        _flush_plain(pos)
        tokens.append(Token(pos, end, kind, text[pos:end]))
        pos = end
        plain_start = end

    _flush_plain(length)
    return tokens


def tokens_in_range(tokens: list[Token], start: int, end: int) -> list[Token]:
    """Restrict *tokens* to ``[start, end)``, trimming tokens that straddle it.

    Trimmed pieces keep the kind of the token they were cut from, so a
    sub-range inside a keyword is still coloured as a keyword.
    """
    result: list[Token] = []
    for tok in tokens:
        if tok.end <= start:
            continue
        if tok.start >= end:
            break
        lo = max(tok.start, start)
        hi = min(tok.end, end)
        if lo < hi:
            if lo == tok.start and hi == tok.end:
                result.append(tok)
            else:
                offset = lo - tok.start
                result.append(
                    Token(lo, hi, tok.kind, tok.text[offset : offset + hi - lo])
                )
    return result
