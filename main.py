# main.py
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NoReturn, TextIO

from debug import Debug
from errors import EnigmaError, MalformedConfig, MissingSettingLine
from machine import Machine
from utilities import apply_setting_line, group_blocks, is_setting_line, load_config

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()

VERBOSE_COMPONENTS = ("stepping", "encipher", "config", "driver")


@dataclass(slots=True)
class Config:
    """Runtime switches for one run of the driver."""

    verbose: bool = False           # trace every key-press on stderr
    block: int = 5                  # display block size
    log_to: Path | None = None      # also write the trace to this file


# ────────────────────────────────────────────────────────────────────────
#  1. Message processing
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config) -> None:
    """Apply setting lines to *machine* and write every converted message to *out*."""
    configured = False
    for lineno, raw in enumerate(lines, 1):
        line = raw.rstrip("\r\n")

        if is_setting_line(line):
            apply_setting_line(machine, line)
            configured = True
            debug.log("driver", "line %d: settings -> %r", lineno, machine)
            continue

        if not configured:
            if line.strip():
                raise MissingSettingLine(
                    f"line {lineno}: message found before any setting line"
                )
            out.write("\n")
            continue

        out.write(group_blocks(machine.convert(line), cfg.block) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


USAGE = "Usage: enigma [--verbose] [--log-to FILE] CONFIG [INPUT [OUTPUT]]"


class _Parser(argparse.ArgumentParser):
    """Reports usage errors as MalformedConfig instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise MalformedConfig(f"{message}. {USAGE}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = _Parser(
        prog="enigma",
        description="Encrypt or decrypt messages with a configurable rotor machine",
    )
    p.add_argument("--verbose", action="store_true", help="Trace every key-press on stderr.")
    p.add_argument("--log-to", dest="log_to", metavar="FILE", type=Path, help="Also write the trace to FILE.")
    p.add_argument("config", metavar="CONFIG", help="Machine configuration file.")
    p.add_argument("input", metavar="INPUT", nargs="?", help="Messages to process (default: stdin).")
    p.add_argument("output", metavar="OUTPUT", nargs="?", help="Where to write results (default: stdout).")
    return p.parse_args(argv)


def _open(name: str, mode: str) -> TextIO:
    try:
        return open(name, mode, encoding="utf-8")
    except OSError:
        raise MalformedConfig(f"could not open {name}") from None


def _lines(stream: TextIO, name: str) -> Iterator[str]:
    try:
        yield from stream
    except UnicodeDecodeError as excp:
        raise MalformedConfig(f"{name} is not valid UTF-8 (byte {excp.start})") from None


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    try:
        args = parse_args(argv)
    except EnigmaError as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1
    cfg = Config(verbose=args.verbose, log_to=args.log_to)

    if cfg.verbose:
        debug.enable(*VERBOSE_COMPONENTS)
    if cfg.log_to:
        debug.log_to(cfg.log_to)

    try:
        machine = load_config(args.config)
        with ExitStack() as stack:
            src = stack.enter_context(_open(args.input, "r")) if args.input else sys.stdin
            dst = stack.enter_context(_open(args.output, "w")) if args.output else sys.stdout
            process(machine, _lines(src, args.input or "standard input"), dst, cfg)
    except EnigmaError as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1
    finally:
        if cfg.log_to:
            debug.close_log(cfg.log_to)
    return 0


if __name__ == "__main__":
    sys.exit(main())
