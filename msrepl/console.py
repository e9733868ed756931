"""msrepl/console.py — interactive set console.

A session owns one :class:`~mixedset.CanonicalValueSet` and applies each
input line to it::

    > [1,5] (5.5,6.5) [7,10] [11.0,15.0)
    9: 1, 2, 3, 4, 5, (5.5, 6.5), 7, 8, 9, 10, [11.0, 15.0)

    > ?[1, 15]
    False

Lines without a directive add their items, ``~`` removes them and ``?``
prints ``True``/``False`` per item.  ``clear`` empties the set and
``exit`` (or end of input) ends the session.

Input and output streams are injectable so a whole session can be
driven from a string.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO

from termcolor import colored

from mixedset import CanonicalValueSet, LiteralSyntaxError, MixedSetError
from msrepl.grammar import Action, parse_line

_log = logging.getLogger(__name__)

PROMPT_ENV_VAR = "MIXEDSET_PROMPT"
DEFAULT_PROMPT = "> "

EXIT_COMMAND = "exit"
CLEAR_COMMAND = "clear"


@dataclass
class ConsoleConfig:
    """Console options, filled from the command line and the environment."""
    prompt: str = DEFAULT_PROMPT
    quiet: bool = False
    color: Optional[bool] = None
    echo_input: bool = False
    verbosity: int = 0

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: object,
    ) -> ConsoleConfig:
        """Build a config, taking the prompt from ``MIXEDSET_PROMPT`` if set.

        Keyword *overrides* that are ``None`` are ignored.
        """
        env = os.environ if environ is None else environ
        config = cls(prompt=env.get(PROMPT_ENV_VAR, DEFAULT_PROMPT))
        for name, value in overrides.items():
            if value is not None:
                setattr(config, name, value)
        return config


def _configure_logging(verbosity: int) -> None:
    """Set up the ``mixedset`` and ``msrepl`` loggers.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    for name in ("mixedset", "msrepl"):
        root = logging.getLogger(name)
        root.setLevel(level)
        root.addHandler(handler)


class SetConsole:
    """Line-oriented console over a single mixed value set."""

    def __init__(
        self,
        config: Optional[ConsoleConfig] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.config = config or ConsoleConfig()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.values = CanonicalValueSet()
        self.use_color = (
            self.config.color
            if self.config.color is not None
            else hasattr(self.stdout, "isatty") and self.stdout.isatty()
        )

    def _write(self, text: str) -> None:
        self.stdout.write(text)

    def _error(self, text: str) -> None:
        if self.use_color:
            text = colored(text, "red", attrs=["bold"], force_color=True)
        self._write(f"{text}\n")

    def _report(self) -> None:
        if not self.config.quiet:
            self._write(f"{self.values.size}: {self.values}\n\n")

    def execute(self, line: str) -> bool:
        """Apply one input line.  Returns ``False`` once the session should end."""
        text = line.strip()
        if text == EXIT_COMMAND:
            return False
        if text == CLEAR_COMMAND:
            self.values.clear()
            _log.info("set cleared")
            return True

        try:
            command = parse_line(line)
        except LiteralSyntaxError as exc:
            self._error(exc.message)
            return True
        except MixedSetError as exc:
            self._error(exc.format())
            return True

        _log.debug("%s %d item(s)", command.action.value, len(command.items))
        if command.action is Action.QUERY:
            for item in command.items:
                self._apply_query(item)
            return True

        for item in command.items:
            try:
                if command.action is Action.REMOVE:
                    self.values.remove(item)
                else:
                    self.values.add(item)
            except MixedSetError as exc:
                self._error(exc.format())
        self._report()
        return True

    def _apply_query(self, item: object) -> None:
        try:
            self._write(f"{self.values.contains(item)}\n")
        except MixedSetError as exc:
            self._error(exc.format())

    def run(self) -> int:
        """Read and apply lines until ``exit`` or end of input."""
        _log.info("console session started")
        while True:
            self._write(self.config.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                self._write("\n")
                break
            line = line.rstrip("\r\n")
            if self.config.echo_input:
                self._write(f"{line}\n")
            if not self.execute(line):
                break
        _log.info("console session ended with %d countable member(s)", self.values.size)
        return 0


__all__ = [
    "ConsoleConfig",
    "SetConsole",
    "DEFAULT_PROMPT",
    "PROMPT_ENV_VAR",
]
