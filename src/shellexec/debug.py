"""--debug invocation dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from shellexec.invocation import Invocation


def dump_invocation(inv: Invocation, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable tree of an Invocation to *file*."""
    file.write("Invocation\n")
    for assignment in inv.environment:
        name, _, value = assignment.partition("=")
        file.write(f"{_indent(1)}Env {name}={value!r}\n")
    file.write(f"{_indent(1)}Command({inv.command!r})\n")
    for i, arg in enumerate(inv.arguments, 1):
        file.write(f"{_indent(2)}Arg[{i}]({arg!r})\n")


def _indent(depth: int) -> str:
    return "  " * depth
