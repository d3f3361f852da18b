"""Cursor over a line of text with one step of pushback."""

from __future__ import annotations

from shellexec.errors import UnterminatedStringError
from shellexec.tokens import Position

EOF = ""


class Scanner:
    """Read code points one at a time, eliding backslash-newline continuations.

    The scanner may cover a slice ``[start, end)`` of a larger source so that
    positions stay meaningful when a line is taken from a multi-line file.
    """

    def __init__(
        self,
        source: str,
        start: int = 0,
        end: int | None = None,
        line: int = 1,
        column: int = 1,
    ) -> None:
        self._source = source
        self._end = len(source) if end is None else end
        self._pos = start
        self._line = line
        self._col = column
        self._saved: tuple[int, int, int] | None = None
        self._last = Position(line, column, start)

    @property
    def source(self) -> str:
        return self._source

    @property
    def position(self) -> Position:
        """Position of the next code point to be read."""
        return Position(self._line, self._col, self._pos)

    @property
    def last_position(self) -> Position:
        """Position of the code point most recently returned."""
        return self._last

    def next(self) -> str:
        """Return the next code point, or EOF at the end of input."""
        self._save()
        self._skip_continuations()
        return self._take()

    def next_escaped(self) -> str:
        """Return the next code point verbatim, without continuation handling.

        Used for the character following an escaping backslash, so that an
        escaped backslash is never mistaken for the start of a continuation.
        """
        self._save()
        return self._take()

    def backup(self) -> None:
        """Step back over the code point returned by the last read."""
        if self._saved is None:
            raise RuntimeError("backup() called twice without an intervening read")
        self._pos, self._line, self._col = self._saved
        self._saved = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _save(self) -> None:
        self._saved = (self._pos, self._line, self._col)

    def _skip_continuations(self) -> None:
        backslash: Position | None = None
        while (
            self._pos + 1 < self._end
            and self._source[self._pos] == "\\"
            and self._source[self._pos + 1] == "\n"
        ):
            backslash = self.position
            self._pos += 2
            self._line += 1
            self._col = 1
        # A continuation must be followed by more input
        if backslash is not None and self._pos >= self._end:
            raise UnterminatedStringError(
                "unexpected end of input after '\\'", backslash, self._source
            )

    def _take(self) -> str:
        if self._pos >= self._end:
            self._last = self.position
            return EOF
        ch = self._source[self._pos]
        self._last = self.position
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch
