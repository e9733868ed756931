"""
msrepl/grammar.py — console line grammar
========================================

One console line is an optional directive followed by whitespace
separated items::

    [1,5] (5.5,6.5) [7,10] [11.0,15.0)      add four ranges
    ~3 [8, 9]                               remove 3 and 8..9
    ?[1, 15] abc                            query two items

Items are interval literals ``[a, b]``, ``(a, b)``, ``[a, b)``,
``(a, b]`` with an optional exclusion list ``-{x, y}``, numbers, or
words (which become string members).

An interval whose bounds and exclusions are all integer literals is an
``ExclusiveIntegerRange``; any real literal makes it a ``RealInterval``.

Depends on:
    - parsimonious (PEG parser)
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Union

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from mixedset.errors import LiteralSyntaxError, MixedSetError
from mixedset.intervals import ExclusiveIntegerRange, RealInterval

_log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  PART 1 — GRAMMAR (Parsimonious PEG)
# ═══════════════════════════════════════════════════════════════════

LINE_GRAMMAR = Grammar(r'''
    line            = _ directive? _ item_list? _
    directive       = "~" / "?"
    item_list       = item more_items
    more_items      = (__ item)*
    item            = interval / number / word

    interval        = open_bracket _ number _ "," _ number _ close_bracket exclusions?
    exclusions      = "-{" _ number more_numbers _ "}"
    more_numbers    = (_ "," _ number)*
    open_bracket    = "[" / "("
    close_bracket   = "]" / ")"

    number          = ~r"[+-]?(?:\d*\.)?\d+"
    word            = ~r"\w+"
    _               = ~r"\s*"
    __              = ~r"\s+"
''')

_INTEGER_TEXT = re.compile(r"[+-]?\d+")


class Action(enum.Enum):
    ADD = "add"
    REMOVE = "remove"
    QUERY = "query"


_DIRECTIVES = {"": Action.ADD, "~": Action.REMOVE, "?": Action.QUERY}


@dataclass
class Command:
    """A parsed console line."""
    action: Action
    items: List[Any] = field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════
#  PART 2 — VISITOR (Parse Tree → Command)
# ═══════════════════════════════════════════════════════════════════

class LineVisitor(NodeVisitor):
    """Turns a parse tree of ``LINE_GRAMMAR`` into a :class:`Command`."""

    grammar = LINE_GRAMMAR
    # Contract errors (e.g. an exclusion outside the bounds) surface as-is.
    unwrapped_exceptions = (MixedSetError,)

    def generic_visit(self, node: Node, visited_children: List[Any]) -> Any:
        return visited_children or node

    def visit_line(self, node: Node, visited_children: List[Any]) -> Command:
        _, _, _, items, _ = visited_children
        directive = node.children[1].text
        items = items[0] if isinstance(items, list) else []
        return Command(action=_DIRECTIVES[directive], items=items)

    def visit_item_list(self, node: Node, visited_children: List[Any]) -> List[Any]:
        first, rest = visited_children
        return [first, *rest]

    def visit_more_items(self, node: Node, visited_children: List[Any]) -> List[Any]:
        return [child[1] for child in visited_children]

    def visit_item(self, node: Node, visited_children: List[Any]) -> Any:
        return visited_children[0]

    def visit_interval(
        self, node: Node, visited_children: List[Any]
    ) -> Union[ExclusiveIntegerRange, RealInterval]:
        opening, _, lo, _, _, _, hi, _, closing, exclusions = visited_children
        points = exclusions[0] if isinstance(exclusions, list) else []
        if all(isinstance(v, int) for v in (lo, hi, *points)):
            literal: Union[ExclusiveIntegerRange, RealInterval] = ExclusiveIntegerRange(lo, hi)
        else:
            literal = RealInterval(lo, hi)
        if opening == "(":
            literal.exclude(lo)
        if closing == ")":
            literal.exclude(hi)
        literal.exclude(*points)
        return literal

    def visit_exclusions(self, node: Node, visited_children: List[Any]) -> List[Any]:
        _, _, first, rest, _, _ = visited_children
        return [first, *rest]

    def visit_more_numbers(self, node: Node, visited_children: List[Any]) -> List[Any]:
        return [child[3] for child in visited_children]

    def visit_open_bracket(self, node: Node, visited_children: List[Any]) -> str:
        return node.text

    def visit_close_bracket(self, node: Node, visited_children: List[Any]) -> str:
        return node.text

    def visit_number(self, node: Node, visited_children: List[Any]) -> Union[int, float]:
        if _INTEGER_TEXT.fullmatch(node.text):
            return int(node.text)
        return float(node.text)

    def visit_word(self, node: Node, visited_children: List[Any]) -> str:
        return node.text


def parse_line(text: str) -> Command:
    """
    Parse one console line.

    Raises ``LiteralSyntaxError`` for text outside the grammar and lets
    contract errors from building a literal propagate.
    """
    try:
        tree = LINE_GRAMMAR.parse(text)
    except ParseError as exc:
        _log.debug("parse failure at column %d: %r", exc.pos, text)
        raise LiteralSyntaxError(text.strip(), column=exc.pos) from exc
    return LineVisitor().visit(tree)


__all__ = ["LINE_GRAMMAR", "Action", "Command", "LineVisitor", "parse_line"]
