"""Test rejected characters, error kinds, positions, and context snippets."""

import pytest

from shellexec.errors import (
    EmptyCommandError,
    ErrorKind,
    ShellSyntaxError,
    UnknownEscapeSequenceError,
    UnsupportedCharacterError,
    UnsupportedCharacterInStringError,
    UnterminatedStringError,
)
from shellexec.parser import parse, parse_lines


class TestUnsupportedCharacters:
    @pytest.mark.parametrize("ch", list("|&;<>()`*?[#~"))
    def test_bare_metacharacter(self, ch):
        with pytest.raises(UnsupportedCharacterError):
            parse(f"echo a{ch}b")

    @pytest.mark.parametrize("ch", list("|&;<>()`"))
    def test_rejected_even_when_lenient(self, ch):
        with pytest.raises(UnsupportedCharacterError):
            parse(ch, strict=False)

    def test_as_command(self):
        with pytest.raises(UnsupportedCharacterError, match="unsupported character ';'"):
            parse(";")

    def test_control_operators(self):
        for line in ("a && b", "a || b", "a; b", "a > f", "(a)"):
            with pytest.raises(UnsupportedCharacterError):
                parse(line)

    def test_backtick_in_double_quotes(self):
        with pytest.raises(UnsupportedCharacterInStringError):
            parse('echo "`date`"')

    def test_escaped_backtick_in_double_quotes(self):
        assert parse('echo "\\`"').arguments == ("`",)


class TestErrorKinds:
    def test_kind_on_each_error(self):
        cases = {
            "": ErrorKind.EMPTY_COMMAND,
            "echo \\e": ErrorKind.UNKNOWN_ESCAPE_SEQUENCE,
            "echo 'abc": ErrorKind.UNTERMINATED_STRING,
            "echo |": ErrorKind.UNSUPPORTED_CHARACTER,
            'echo "`"': ErrorKind.UNSUPPORTED_CHARACTER_IN_STRING,
        }
        for line, kind in cases.items():
            with pytest.raises(ShellSyntaxError) as exc_info:
                parse(line)
            assert exc_info.value.kind is kind, line

    def test_kind_names(self):
        assert ErrorKind.EMPTY_COMMAND.value == "EmptyCommand"
        assert (
            ErrorKind.COMMAND_SUBSTITUTION.value
            == "CommandSubstitutionOrArithmeticExpansionNotSupported"
        )

    def test_all_syntax_errors_share_base(self):
        for cls in (EmptyCommandError, UnknownEscapeSequenceError, UnterminatedStringError):
            assert issubclass(cls, ShellSyntaxError)


class TestErrorPositions:
    def test_unknown_escape_position(self):
        with pytest.raises(UnknownEscapeSequenceError) as exc_info:
            parse("abc \\q rest")
        assert exc_info.value.position.column == 5

    def test_unterminated_points_at_opening_quote(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            parse("echo x 'abc")
        assert exc_info.value.position.column == 8

    def test_unsupported_character_position(self):
        with pytest.raises(UnsupportedCharacterError) as exc_info:
            parse("ls -l | wc")
        assert exc_info.value.position.column == 7
        assert exc_info.value.position.offset == 6

    def test_position_after_continuation(self):
        with pytest.raises(UnsupportedCharacterError) as exc_info:
            parse("echo \\\n  ;")
        err = exc_info.value
        assert err.position.line == 2
        assert err.position.column == 3

    def test_position_in_file(self):
        with pytest.raises(UnsupportedCharacterError) as exc_info:
            parse_lines("echo ok\n\necho <in\n")
        err = exc_info.value
        assert err.position.line == 3
        assert err.position.column == 6


class TestErrorFormatting:
    def test_format_contains_line(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("some cmd \\q more")
        assert "some cmd \\q more" in exc_info.value.format()

    def test_format_contains_carets(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("\\q")
        assert "^" in exc_info.value.format()

    def test_single_character_gets_one_caret(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("ls |x")
        assert exc_info.value.format().splitlines()[-1] == "  |    ^"

    def test_escape_sequence_gets_two_carets(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("\\q")
        assert exc_info.value.format().splitlines()[-1] == "  | ^^"

    def test_dollar_form_gets_two_carets(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("echo $(x)")
        assert exc_info.value.format().splitlines()[-1] == "  |      ^^"

    def test_format_contains_error_prefix(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("\\q")
        assert exc_info.value.format().startswith("error: unknown escape sequence")

    def test_format_contains_position(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("ls ;")
        assert "<line>:1:4" in exc_info.value.format()

    def test_format_with_custom_filename(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse_lines("ok\nls ;\n")
        formatted = exc_info.value.format("jobs.sh")
        assert "jobs.sh:2:4" in formatted
        assert "ls ;" in formatted

    def test_str_is_formatted(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("ls ;")
        assert str(exc_info.value) == exc_info.value.format()

    def test_message_attribute(self):
        with pytest.raises(ShellSyntaxError) as exc_info:
            parse("echo 'abc")
        assert exc_info.value.message == "unterminated single-quoted string"
