"""
msrepl — console for mixed value sets
=====================================

Parses console lines with a Parsimonious grammar and applies them to a
``mixedset.CanonicalValueSet``.

    msrepl/
    ├── __init__.py
    ├── __main__.py        ← ``python -m msrepl`` / ``mixedset-repl``
    ├── console.py         ← session loop and configuration
    └── grammar.py         ← line grammar and visitor
"""

from __future__ import annotations

from msrepl.console import ConsoleConfig, SetConsole
from msrepl.grammar import Action, Command, parse_line

__all__ = ["Action", "Command", "ConsoleConfig", "SetConsole", "parse_line"]
