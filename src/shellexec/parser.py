"""Line assembler; sequences fields into environment, command, and arguments."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from shellexec.environ import Lookup, environ_lookup
from shellexec.errors import EmptyCommandError
from shellexec.invocation import Invocation
from shellexec.lexer import Lexer
from shellexec.scanner import EOF, Scanner
from shellexec.tokens import WHITE_SPACE, is_space


class Parser:
    """Parse one line (or one slice of a larger source) into an Invocation."""

    def __init__(
        self,
        source: str,
        lookup: Lookup | None = None,
        strict: bool = True,
        start: int = 0,
        end: int | None = None,
        line: int = 1,
    ) -> None:
        self._source = source
        self._scanner = Scanner(source, start, end, line)
        self._lexer = Lexer(self._scanner, lookup or environ_lookup, strict)

    def parse_line(self) -> Invocation:
        """Parse the whole input and return the Invocation it describes."""
        environment: list[str] = []
        command: str | None = None
        arguments: list[str] = []

        while self._skip_space():
            field_start = self._scanner.position

            if command is not None:
                arguments.append(self._lexer.parse_field())
                continue

            name = self._lexer.scan_identifier()
            ch = self._scanner.next()
            if name and ch == "=":
                value = self._lexer.parse_field()
                environment.append(f"{name}={value}")
                continue
            self._scanner.backup()

            command = self._lexer.parse_field(prefix=name)
            if not command:
                raise EmptyCommandError(
                    "command expands to an empty string", field_start, self._source
                )

        if command is None:
            raise EmptyCommandError("empty command", self._scanner.position, self._source)

        return Invocation(command, tuple(arguments), tuple(environment))

    def split(self) -> list[str]:
        """Return every field in order, without classifying assignments."""
        fields = []
        while self._skip_space():
            fields.append(self._lexer.parse_field())
        return fields

    def _skip_space(self) -> bool:
        """Advance past whitespace; return False at end of input."""
        while True:
            ch = self._scanner.next()
            if ch == EOF:
                return False
            if not is_space(ch):
                self._scanner.backup()
                return True


_BLANKS = "".join(WHITE_SPACE)


@dataclass(frozen=True, slots=True)
class LogicalLine:
    """A command line within a larger source: [start, end) offsets and first line number."""

    start: int
    end: int
    line: int


def split_lines(source: str) -> Iterator[LogicalLine]:
    """Yield the command lines of a multi-line source.

    Physical lines joined by backslash-newline form one logical line. Blank
    lines and lines whose first non-blank character is '#' are skipped.
    """
    i = 0
    line_no = 1
    n = len(source)

    while i < n:
        start = i
        start_line = line_no
        while i < n:
            ch = source[i]
            if ch == "\\" and i + 1 < n:
                if source[i + 1] == "\n":
                    line_no += 1
                i += 2
                continue
            if ch == "\n":
                break
            i += 1

        text = source[start:i].strip(_BLANKS)
        if text and not text.startswith("#"):
            yield LogicalLine(start, i, start_line)

        if i < n:
            i += 1  # newline
            line_no += 1


def parse(line: str, lookup: Lookup | None = None, *, strict: bool = True) -> Invocation:
    """Parse a single line into an Invocation."""
    return Parser(line, lookup, strict).parse_line()


def split(line: str, lookup: Lookup | None = None, *, strict: bool = True) -> list[str]:
    """Split a line into fields, applying quoting, escaping, and expansion."""
    return Parser(line, lookup, strict).split()


def parse_lines(
    source: str, lookup: Lookup | None = None, *, strict: bool = True
) -> list[Invocation]:
    """Parse every command line of a multi-line source.

    Errors carry positions within the whole source.
    """
    return [
        Parser(source, lookup, strict, ll.start, ll.end, ll.line).parse_line()
        for ll in split_lines(source)
    ]
