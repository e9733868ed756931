#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
msrepl/__main__.py
==================

Entry point for the mixed value set console.

Usage
-----
    python -m msrepl [options]
    mixedset-repl [options]

Options
-------
    -c LINE         Apply LINE (repeatable) instead of reading stdin
    --prompt TEXT   Prompt string (default: $MIXEDSET_PROMPT or "> ")
    -q, --quiet     Do not print the set after add/remove lines
    --[no-]color    Colour error messages (default: only on a terminal)
    --echo-input    Echo every line read (useful with piped input)
    -v, --verbose   Increase log verbosity (-v info, -vv debug)
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from typing import Optional, Sequence

from mixedset import __version__
from msrepl.console import ConsoleConfig, SetConsole, _configure_logging

_log = logging.getLogger("msrepl")

EXIT_OK: int = 0
EXIT_INTERRUPTED: int = 130


def build_parser() -> argparse.ArgumentParser:
    """Construct the console's argument parser."""
    parser = argparse.ArgumentParser(
        prog="mixedset-repl",
        description="Interactive console over a canonical mixed-domain value set.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              mixedset-repl
              mixedset-repl -c '[1,10]' -c '~[3,5]'
              printf '[1,5]\\n?3\\n' | mixedset-repl --echo-input
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "-c", "--command",
        action="append",
        default=None,
        metavar="LINE",
        help="Apply LINE and exit; may be given several times.",
    )
    parser.add_argument(
        "--prompt",
        default=None,
        help='Prompt string (default: $MIXEDSET_PROMPT or "> ").',
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=None,
        help="Do not print the set after add and remove lines.",
    )
    parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Colour error messages (default: only on a terminal).",
    )
    parser.add_argument(
        "--echo-input",
        action="store_true",
        default=None,
        help="Echo each input line after the prompt.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the console.

    Parameters
    ----------
    argv : sequence of str, optional
        Command-line arguments. Defaults to sys.argv[1:].

    Returns
    -------
    int
        Exit code (0 = success, 130 = interrupted).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    config = ConsoleConfig.from_env(
        prompt=args.prompt,
        quiet=args.quiet,
        color=args.color,
        echo_input=args.echo_input,
        verbosity=args.verbose,
    )
    console = SetConsole(config)

    try:
        if args.command:
            for line in args.command:
                if not console.execute(line):
                    break
            return EXIT_OK
        return console.run()
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted.\n")
        _log.info("Interrupted by user.")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
