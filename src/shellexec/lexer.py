"""Field lexer: turns the text at the cursor into one field value.

Handles bare text, single and double quotes, backslash escapes, and
``$NAME`` expansion. Anything that would need a real shell is rejected.
"""

from __future__ import annotations

from shellexec.environ import Lookup, environ_lookup
from shellexec.errors import (
    CommandSubstitutionNotSupportedError,
    ParameterExpansionNotSupportedError,
    PositionalParametersNotSupportedError,
    ShellSyntaxError,
    SpecialParametersNotSupportedError,
    UnknownEscapeSequenceError,
    UnsupportedCharacterError,
    UnsupportedCharacterInStringError,
    UnterminatedStringError,
)
from shellexec.scanner import EOF, Scanner
from shellexec.tokens import (
    BARE_ESCAPES,
    DOUBLE_QUOTE_ESCAPES,
    METACHARACTERS,
    SPECIAL_PARAMETERS,
    STRICT_METACHARACTERS,
    Mode,
    Position,
    is_ident_char,
    is_ident_start,
    is_positional_digit,
    is_space,
)


class Lexer:
    """Scan fields from a Scanner, expanding variables through lookup."""

    def __init__(
        self,
        scanner: Scanner,
        lookup: Lookup = environ_lookup,
        strict: bool = True,
    ) -> None:
        self._scanner = scanner
        self._lookup = lookup
        self._strict = strict
        self._buf: list[str] = []
        self._mode = Mode.BARE

    def parse_field(self, prefix: str = "") -> str:
        """Scan one field, stopping before unquoted whitespace or at end of input.

        prefix is text already consumed from the field (an identifier that
        turned out not to be the left side of an assignment).
        """
        self._buf = [prefix] if prefix else []
        self._mode = Mode.BARE

        while True:
            ch = self._scanner.next()
            if ch == EOF:
                break
            if is_space(ch):
                self._scanner.backup()
                break

            if ch == "\\":
                self._parse_escape()
            elif ch == "'":
                self._parse_single_quotes()
            elif ch == '"':
                self._parse_double_quotes()
            elif ch == "$":
                self._parse_var_expr()
            elif ch in METACHARACTERS or (self._strict and ch in STRICT_METACHARACTERS):
                raise self._error(
                    UnsupportedCharacterError,
                    f"unsupported character '{ch}'",
                    self._scanner.last_position,
                )
            else:
                self._buf.append(ch)

        return "".join(self._buf)

    def scan_identifier(self) -> str:
        """Consume and return an identifier at the cursor, or '' if there is none."""
        ch = self._scanner.next()
        if not is_ident_start(ch):
            self._scanner.backup()
            return ""
        chars = [ch]
        while True:
            ch = self._scanner.next()
            if not is_ident_char(ch):
                self._scanner.backup()
                break
            chars.append(ch)
        return "".join(chars)

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    def _parse_single_quotes(self) -> None:
        start = self._scanner.last_position
        self._mode = Mode.SINGLE_QUOTED
        while True:
            ch = self._scanner.next()
            if ch == EOF:
                raise self._error(
                    UnterminatedStringError, "unterminated single-quoted string", start
                )
            if ch == "'":
                break
            self._buf.append(ch)
        self._mode = Mode.BARE

    def _parse_double_quotes(self) -> None:
        start = self._scanner.last_position
        self._mode = Mode.DOUBLE_QUOTED
        while True:
            ch = self._scanner.next()
            if ch == EOF:
                raise self._error(
                    UnterminatedStringError, "unterminated double-quoted string", start
                )
            if ch == '"':
                break
            if ch == "\\":
                self._parse_escape()
            elif ch == "$":
                self._parse_var_expr()
            elif ch == "`":
                raise self._error(
                    UnsupportedCharacterInStringError,
                    "unsupported character '`' in string",
                    self._scanner.last_position,
                )
            else:
                self._buf.append(ch)
        self._mode = Mode.BARE

    # ------------------------------------------------------------------
    # Escapes
    # ------------------------------------------------------------------

    def _parse_escape(self) -> None:
        start = self._scanner.last_position
        outer = self._mode
        self._mode = Mode.ESCAPED

        ch = self._scanner.next_escaped()
        if ch == EOF:
            raise self._error(
                UnterminatedStringError, "unexpected end of input after '\\'", start
            )

        if outer is Mode.DOUBLE_QUOTED:
            if ch in DOUBLE_QUOTE_ESCAPES:
                self._buf.append(ch)
            else:
                self._buf.append("\\" + ch)
        elif ch in BARE_ESCAPES:
            self._buf.append(ch)
        else:
            raise self._error(
                UnknownEscapeSequenceError,
                f"unknown escape sequence '\\{ch}'",
                start,
                length=2,
            )

        self._mode = outer

    # ------------------------------------------------------------------
    # Variable expansion
    # ------------------------------------------------------------------

    def _parse_var_expr(self) -> None:
        start = self._scanner.last_position
        ch = self._scanner.next()

        if ch == "(":
            raise self._error(
                CommandSubstitutionNotSupportedError,
                "command substitution and arithmetic expansion are not supported",
                start,
                length=2,
            )
        if ch == "{":
            raise self._error(
                ParameterExpansionNotSupportedError,
                "parameter expansion is not supported",
                start,
                length=2,
            )
        if ch in SPECIAL_PARAMETERS:
            raise self._error(
                SpecialParametersNotSupportedError,
                f"special parameter '${ch}' is not supported",
                start,
                length=2,
            )
        if is_positional_digit(ch):
            raise self._error(
                PositionalParametersNotSupportedError,
                f"positional parameter '${ch}' is not supported",
                start,
                length=2,
            )

        self._scanner.backup()
        name = self.scan_identifier()
        if not name:
            # A lone '$' stands for itself
            self._buf.append("$")
            return
        self._buf.append(self._lookup(name))

    def _error(
        self,
        cls: type[ShellSyntaxError],
        message: str,
        position: Position,
        length: int = 1,
    ) -> ShellSyntaxError:
        return cls(message, position, self._scanner.source, length)
