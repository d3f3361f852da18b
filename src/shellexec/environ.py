"""Environment lookups used for $NAME expansion, and environment merging."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping

Lookup = Callable[[str], str]


def environ_lookup(name: str) -> str:
    """Resolve name from the process environment; unset names resolve to ''."""
    return os.environ.get(name, "")


def mapping_lookup(mapping: Mapping[str, str]) -> Lookup:
    """Return a lookup reading from a fixed mapping instead of the process environment."""

    def _lookup(name: str) -> str:
        return mapping.get(name, "")

    return _lookup


def merge_environment(base: Mapping[str, str], assignments: Iterable[str]) -> dict[str, str]:
    """Return a copy of base with NAME=value assignments applied in order.

    Later assignments to the same name win. base is never modified.
    """
    env = dict(base)
    for assignment in assignments:
        name, _, value = assignment.partition("=")
        env[name] = value
    return env
