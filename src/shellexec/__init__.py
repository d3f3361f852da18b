"""Parse shell-like one-liners into commands without running a shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shellexec.environ import Lookup
    from shellexec.invocation import Invocation

__version__ = "0.1.0"


def parse(line: str, lookup: Lookup | None = None, *, strict: bool = True) -> Invocation:
    """Parse a line into its environment assignments, command, and arguments."""
    from shellexec.parser import parse as _parse

    return _parse(line, lookup, strict=strict)
