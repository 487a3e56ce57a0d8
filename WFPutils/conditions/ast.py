"""Syntax tree for condition expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple, Union

Literal = Union[str, int, float, bool]

COMPARISON_OPERATORS = ("==", "!=", "<=", ">=", "<", ">")


@dataclass(frozen=True)
class Comparison:
    """``name OP literal``"""

    name: str
    operator: str
    literal: Literal


@dataclass(frozen=True)
class Membership:
    """``name in [literal, ...]``"""

    name: str
    literals: Tuple[Literal, ...]


@dataclass(frozen=True)
class Contains:
    """``name contains literal``"""

    name: str
    literal: Literal


@dataclass(frozen=True)
class Logical:
    """``left && right`` or ``left || right``"""

    operator: str
    left: "Node"
    right: "Node"


Node = Union[Comparison, Membership, Contains, Logical]


def referenced_names(node: Node) -> FrozenSet[str]:
    """Return every parameter name the expression reads."""
    if isinstance(node, Logical):
        return referenced_names(node.left) | referenced_names(node.right)
    return frozenset((node.name,))


def render(node: Node) -> str:
    """Render a tree back to canonical expression text."""
    if isinstance(node, Logical):
        left, right = render(node.left), render(node.right)
        if isinstance(node.left, Logical) and node.left.operator != node.operator:
            left = f"({left})"
        if isinstance(node.right, Logical):
            right = f"({right})"
        return f"{left} {node.operator} {right}"
    if isinstance(node, Comparison):
        return f"{node.name} {node.operator} {_render_literal(node.literal)}"
    if isinstance(node, Membership):
        values = ", ".join(_render_literal(value) for value in node.literals)
        return f"{node.name} in [{values}]"
    return f"{node.name} contains {_render_literal(node.literal)}"


def _render_literal(value: Literal) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return repr(value)
