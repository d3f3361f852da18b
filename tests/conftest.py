"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from shellexec.environ import mapping_lookup
from shellexec.invocation import Invocation
from shellexec.parser import parse, split

ENV = {"PATH": "/bin", "HOME": "/home/user", "EMPTY": "", "SPACED": "a  b"}


@pytest.fixture
def parse_line():
    """Return a helper that parses a line against a fixed environment."""

    def _parse(line: str, strict: bool = True) -> Invocation:
        return parse(line, mapping_lookup(ENV), strict=strict)

    return _parse


@pytest.fixture
def fields():
    """Return a helper that splits a line into fields against a fixed environment."""

    def _split(line: str, strict: bool = True) -> list[str]:
        return split(line, mapping_lookup(ENV), strict=strict)

    return _split


def assert_invocation(
    inv: Invocation,
    command: str,
    arguments: list[str] | None = None,
    environment: list[str] | None = None,
) -> None:
    """Assert the three parts of an Invocation."""
    assert inv.command == command, f"Expected command {command!r}, got {inv.command!r}"
    expected_args = tuple(arguments or [])
    assert inv.arguments == expected_args, f"Expected {expected_args}, got {inv.arguments}"
    expected_env = tuple(environment or [])
    assert inv.environment == expected_env, f"Expected {expected_env}, got {inv.environment}"
