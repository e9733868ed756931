# tests/conftest.py
"""Shared fixtures for the mixedset and msrepl test-suite."""

import io

import pytest

from mixedset import M, IntegerRange, open_range, right_open_range
from msrepl.console import ConsoleConfig, SetConsole


@pytest.fixture
def mixed_ranges():
    """``1..5, (5.5, 6.5), 7..10, [11.0, 15.0)``"""
    return M(
        IntegerRange(1, 5),
        open_range(5.5, 6.5),
        IntegerRange(7, 10),
        right_open_range(11.0, 15.0),
    )


@pytest.fixture
def make_console():
    """Build a console over string streams; returns ``(console, stdout)``."""

    def _make(text="", **options):
        stdout = io.StringIO()
        config = ConsoleConfig(**options)
        console = SetConsole(config, stdin=io.StringIO(text), stdout=stdout)
        return console, stdout

    return _make
