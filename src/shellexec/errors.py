"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum

from shellexec.tokens import Position


class ErrorKind(Enum):
    EMPTY_COMMAND = "EmptyCommand"
    UNKNOWN_ESCAPE_SEQUENCE = "UnknownEscapeSequence"
    UNTERMINATED_STRING = "UnterminatedString"
    UNSUPPORTED_CHARACTER = "UnsupportedCharacter"
    UNSUPPORTED_CHARACTER_IN_STRING = "UnsupportedCharacterInString"
    COMMAND_SUBSTITUTION = "CommandSubstitutionOrArithmeticExpansionNotSupported"
    PARAMETER_EXPANSION = "ParameterExpansionNotSupported"
    SPECIAL_PARAMETERS = "SpecialParametersNotSupported"
    POSITIONAL_PARAMETERS = "PositionalParametersNotSupported"


class ShellSyntaxError(Exception):
    """Raised on the first syntax error in a line, with position and source context."""

    kind: ErrorKind

    def __init__(
        self, message: str, position: Position, source: str, length: int = 1
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.length = length
        super().__init__(self.format())

    def format(self, filename: str = "<line>") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the offending construct, clipped to the end of the line
        underline_len = max(1, min(self.length, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class EmptyCommandError(ShellSyntaxError):
    kind = ErrorKind.EMPTY_COMMAND


class UnknownEscapeSequenceError(ShellSyntaxError):
    kind = ErrorKind.UNKNOWN_ESCAPE_SEQUENCE


class UnterminatedStringError(ShellSyntaxError):
    kind = ErrorKind.UNTERMINATED_STRING


class UnsupportedCharacterError(ShellSyntaxError):
    kind = ErrorKind.UNSUPPORTED_CHARACTER


class UnsupportedCharacterInStringError(ShellSyntaxError):
    kind = ErrorKind.UNSUPPORTED_CHARACTER_IN_STRING


class CommandSubstitutionNotSupportedError(ShellSyntaxError):
    """$(...) and $((...)) forms."""

    kind = ErrorKind.COMMAND_SUBSTITUTION


class ParameterExpansionNotSupportedError(ShellSyntaxError):
    kind = ErrorKind.PARAMETER_EXPANSION


class SpecialParametersNotSupportedError(ShellSyntaxError):
    kind = ErrorKind.SPECIAL_PARAMETERS


class PositionalParametersNotSupportedError(ShellSyntaxError):
    kind = ErrorKind.POSITIONAL_PARAMETERS


class CommandError(Exception):
    """Raised when a parsed command cannot be started or does not finish in time."""

    def __init__(self, message: str, argv: tuple[str, ...]) -> None:
        self.message = message
        self.argv = argv
        super().__init__(message)
