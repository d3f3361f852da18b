"""Command-line interface for shellexec."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from shellexec.errors import CommandError, ShellSyntaxError

LOG = logging.getLogger("shellexec.cli")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    lines: list[str]
    input_file: Path | None
    env: dict[str, str]
    strict: bool
    timeout: float | None
    check: bool
    debug: bool


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="shellexec",
        description="Run a shell-like command line without a shell",
    )
    p.add_argument(
        "lines",
        nargs="*",
        metavar="LINE",
        help="Command line to run (quote each one); several run in order",
    )
    p.add_argument("-f", "--file", metavar="FILE", help="Run each command line in FILE")
    p.add_argument(
        "-e",
        "--env",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set environment variable (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover shellexec.toml)",
    )
    p.add_argument(
        "--lenient",
        action="store_true",
        help="Accept unquoted * ? [ # ~ as literal characters",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECS",
        help="Kill a command that runs longer than SECS",
    )
    p.add_argument("--check", action="store_true", help="Parse only, print result as JSON")
    p.add_argument("--debug", action="store_true", help="Dump parsed lines to stderr")
    p.add_argument(
        "--log-level",
        default=os.environ.get("SHELLEXEC_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    return p


def parse_env_arg(s: str) -> tuple[str, str]:
    """Parse a NAME=VALUE string into (name, value)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid env format (expected NAME=VALUE): {s}")
    name, _, value = s.partition("=")
    return name, value


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "shellexec.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    if bool(args.lines) == (args.file is not None):
        raise argparse.ArgumentTypeError("give exactly one of LINE or --file")

    input_file = Path(args.file) if args.file else None
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    # Environment variables: config < CLI
    env: dict[str, str] = {}
    cfg_env = config.get("env")
    if isinstance(cfg_env, dict):
        for k, v in cfg_env.items():
            env[str(k)] = str(v)
    for raw in args.env:
        name, value = parse_env_arg(raw)
        env[name] = value

    # Strictness: config < CLI
    strict = True
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        cfg_strict = cfg_parser.get("strict")
        if isinstance(cfg_strict, bool):
            strict = cfg_strict
    if args.lenient:
        strict = False

    # Timeout: config < CLI
    timeout: float | None = None
    cfg_run = config.get("run")
    if isinstance(cfg_run, dict):
        cfg_timeout = cfg_run.get("timeout")
        if isinstance(cfg_timeout, (int, float)) and not isinstance(cfg_timeout, bool):
            timeout = float(cfg_timeout)
    if args.timeout is not None:
        timeout = args.timeout

    return CliOptions(
        lines=list(args.lines),
        input_file=input_file,
        env=env,
        strict=strict,
        timeout=timeout,
        check=args.check,
        debug=args.debug,
    )


def run_options(options: CliOptions) -> int:
    """Parse the configured line(s) and run them in order.

    Returns the exit status of the last command run; stops at the first
    command that fails.
    """
    from shellexec.command import Command
    from shellexec.debug import dump_invocation
    from shellexec.environ import mapping_lookup
    from shellexec.parser import parse, parse_lines

    base = dict(os.environ)
    base.update(options.env)
    lookup = mapping_lookup(base)

    if options.input_file is not None:
        source = options.input_file.read_text(encoding="utf-8")
        invocations = parse_lines(source, lookup, strict=options.strict)
    else:
        invocations = [parse(line, lookup, strict=options.strict) for line in options.lines]

    status = 0
    for inv in invocations:
        if options.debug:
            dump_invocation(inv, file=sys.stderr)
        if options.check:
            sys.stdout.write(json.dumps(dataclasses.asdict(inv)) + "\n")
            continue
        result = Command.from_invocation(inv, base).run(timeout=options.timeout)
        status = result.returncode
        if status != 0:
            LOG.info("%s exited with status %d, stopping", inv.command, status)
            break
    return status


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code. Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    _configure_logging(args.log_level)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: cannot load config: {exc}", file=sys.stderr)
        return 2

    filename = str(options.input_file) if options.input_file else "<line>"
    try:
        return run_options(options)
    except ShellSyntaxError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except CommandError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: cannot read {filename}: {exc}", file=sys.stderr)
        return 2
