"""Turn a parsed line into a runnable process (subprocess argv + environment)."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field

from shellexec.environ import Lookup, mapping_lookup, merge_environment
from shellexec.errors import CommandError
from shellexec.invocation import Invocation
from shellexec.parser import parse

LOGGER = logging.getLogger("shellexec.command")


@dataclass
class Command:
    """A process ready to be started: argument vector and full environment."""

    argv: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_invocation(
        cls, invocation: Invocation, environ: Mapping[str, str] | None = None
    ) -> Command:
        base = os.environ if environ is None else environ
        return cls(invocation.argv, merge_environment(base, invocation.environment))

    def run(
        self,
        timeout: float | None = None,
        capture_output: bool = False,
        input: str | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Start the process and wait for it to finish."""
        LOGGER.debug("running %r", self.argv)
        try:
            result = subprocess.run(
                list(self.argv),
                env=self.env,
                input=input,
                capture_output=capture_output,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            raise CommandError(
                f"command '{self.argv[0]}' timed out after {timeout}s", self.argv
            ) from None
        except OSError as exc:
            raise CommandError(
                f"cannot run '{self.argv[0]}': {exc.strerror or exc}", self.argv
            ) from exc

        LOGGER.debug("%s exited with status %d", self.argv[0], result.returncode)
        return result


def command(
    line: str,
    environ: Mapping[str, str] | None = None,
    lookup: Lookup | None = None,
    *,
    strict: bool = True,
) -> Command:
    """Parse line and return the Command that runs it.

    Assignments at the start of the line are layered over environ (the process
    environment by default). Unless lookup is given, $NAME reads environ too.
    """
    base = os.environ if environ is None else environ
    if lookup is None:
        lookup = mapping_lookup(base)
    invocation = parse(line, lookup, strict=strict)
    return Command.from_invocation(invocation, base)
