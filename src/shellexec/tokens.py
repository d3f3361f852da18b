"""Source positions, lexical modes, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Mode(Enum):
    BARE = auto()
    SINGLE_QUOTED = auto()  # '...': everything literal
    DOUBLE_QUOTED = auto()  # "...": escapes and $NAME active
    ESCAPED = auto()  # the character after a backslash


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based code point offset."""

    line: int
    column: int
    offset: int


# Characters a backslash may escape outside quotes
BARE_ESCAPES = frozenset("|&;<>()$`\\\"' \t\n*?[#~=%")

# Characters a backslash may escape inside double quotes; any other
# escaped character keeps its backslash
DOUBLE_QUOTE_ESCAPES = frozenset('$`"\\')

# Shell metacharacters rejected unless quoted or escaped
METACHARACTERS = frozenset("|&;<>()`")

# Glob and history characters, rejected only in strict mode
STRICT_METACHARACTERS = frozenset("*?[#~")

# $@ $* $# $? $- $$ $! $0
SPECIAL_PARAMETERS = frozenset("@*#?-$!0")

_ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_ASCII_DIGITS = frozenset("0123456789")
_POSITIONAL_DIGITS = frozenset("123456789")

# Unicode White_Space; str.isspace also accepts the separators U+001C..U+001F
WHITE_SPACE = frozenset(
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def is_ident_start(ch: str) -> bool:
    """Return True if ch may start an identifier (ASCII letter or underscore)."""
    return ch in _ASCII_LETTERS or ch == "_"


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return ch in _ASCII_LETTERS or ch in _ASCII_DIGITS or ch == "_"


def is_identifier(text: str) -> bool:
    """Return True if the whole of text is a valid identifier."""
    return bool(text) and is_ident_start(text[0]) and all(is_ident_char(c) for c in text[1:])


def is_positional_digit(ch: str) -> bool:
    return ch in _POSITIONAL_DIGITS


def is_space(ch: str) -> bool:
    """Return True for a Unicode White_Space code point."""
    return ch in WHITE_SPACE
