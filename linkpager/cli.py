"""Command-line front door for linkpager.

Parses CLI options, resolves configuration, and reads all of stdin.
Then dispatches into the interactive pager runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from .controller import PagerConfig
from .runtime import run_pager
from .runtime.config import (
    GOTO_LAST_ENV,
    OPEN_FIRST_ENV,
    OPENER_ENV,
    apply_environment,
    load_pager_config,
    save_opener,
)
from .runtime.logging_setup import setup_logging

STDIN_IS_TTY_MESSAGE = "linkpager displays data from stdin: pipe or redirect into it."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkpager",
        description="Page piped text and navigate, search, and open its terminal hyperlinks.",
    )
    parser.add_argument(
        "--opener",
        metavar="PROGRAM",
        default=None,
        help=f"Program run with the selected link target (overrides ${OPENER_ENV}).",
    )
    parser.add_argument(
        "--open-first",
        action="store_true",
        help=f"Open the first link immediately on startup (also ${OPEN_FIRST_ENV}).",
    )
    parser.add_argument(
        "--goto-last",
        action="store_true",
        help=f"Start with the last link selected (also ${GOTO_LAST_ENV}).",
    )
    parser.add_argument("--ignore-case", action="store_true", help="Match link searches case-insensitively.")
    parser.add_argument("--nopager", action="store_true", help="Print input directly without interactive paging.")
    parser.add_argument("--set-opener", metavar="PROGRAM", help="Save PROGRAM as the default opener and exit.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write the debug log to this file.")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    return parser


def resolve_config(args: argparse.Namespace, environ: Mapping[str, str]) -> PagerConfig:
    """Merge config file, environment, and CLI flags, later sources winning."""
    config = apply_environment(load_pager_config(), environ)
    if args.opener:
        config = replace(config, opener=args.opener)
    if args.open_first:
        config = replace(config, open_first=True)
    if args.goto_last:
        config = replace(config, goto_last=True)
    if args.ignore_case:
        config = replace(config, ignore_case=True)
    return config


def _read_input(stream: TextIO) -> bytes | str:
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        return buffer.read()
    return stream.read()


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Parse CLI arguments and page everything read from stdin.

    ``stdin`` and ``environ`` exist for tests; they default to the process
    streams and environment.
    """
    args = build_parser().parse_args(argv)

    if args.set_opener is not None:
        save_opener(args.set_opener)
        return

    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)

    stream = sys.stdin if stdin is None else stdin
    if stream.isatty():
        raise SystemExit(STDIN_IS_TTY_MESSAGE)

    config = resolve_config(args, os.environ if environ is None else environ)
    run_pager(_read_input(stream), config, nopager=args.nopager)


if __name__ == "__main__":
    main()
