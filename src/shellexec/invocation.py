"""Invocation descriptor produced by the parser, and quoting for reconstruction."""

from __future__ import annotations

from dataclasses import dataclass

from shellexec.tokens import BARE_ESCAPES, is_identifier, is_space


@dataclass(frozen=True, slots=True)
class Invocation:
    """A parsed line: leading NAME=value assignments, a command, and its arguments."""

    command: str
    arguments: tuple[str, ...] = ()
    environment: tuple[str, ...] = ()

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.command, *self.arguments)

    def environment_dict(self) -> dict[str, str]:
        """Assignments as a mapping; later assignments to a name win."""
        env: dict[str, str] = {}
        for assignment in self.environment:
            name, _, value = assignment.partition("=")
            env[name] = value
        return env

    def to_line(self) -> str:
        """Reconstruct a line that parses back to this invocation."""
        parts = []
        for assignment in self.environment:
            name, _, value = assignment.partition("=")
            parts.append(f"{name}={quote(value)}")
        command = quote(self.command)
        if _starts_with_assignment(command):
            # Escaping the first '=' keeps the field from classifying as an assignment
            command = command.replace("=", "\\=", 1)
        parts.append(command)
        parts.extend(quote(arg) for arg in self.arguments)
        return " ".join(parts)


# '=' and '%' are escapable but never special on their own
_SPECIAL = BARE_ESCAPES - {"=", "%"}


def quote(text: str) -> str:
    """Return text written so that it lexes back to exactly one field equal to text."""
    if not text:
        return "''"
    if not any(ch in _SPECIAL or is_space(ch) for ch in text):
        return text
    if "'" not in text and "\\\n" not in text:
        return f"'{text}'"
    escaped = "".join(f"\\{ch}" if ch in '$`"\\' else ch for ch in text)
    return f'"{escaped}"'


def _starts_with_assignment(field: str) -> bool:
    name, eq, _ = field.partition("=")
    return bool(eq) and is_identifier(name)
