"""Three-valued evaluation of condition trees against a partial context."""

from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Any, Mapping, Optional

from ..exceptions import ConditionEvaluationError
from .ast import Comparison, Contains, Logical, Membership, Node, render
from .parser import parse_condition


class Outcome(Enum):
    """Result of evaluating a condition against a partial context."""

    TRUE = "true"
    FALSE = "false"
    UNDECIDABLE = "undecidable"

    @classmethod
    def of(cls, value: bool) -> "Outcome":
        return cls.TRUE if value else cls.FALSE


def _kind(value: Any) -> str:
    """Classify a resolved value for type checking."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "selection"
    return type(value).__name__


class ConditionEvaluator:
    """Evaluate condition trees.

    ``context`` maps names to resolved values. Names in ``absent`` are
    settled without a value: every predicate over them is false. Any other
    missing name makes the predicate undecidable.
    """

    def __init__(self, context: Mapping[str, Any], absent: AbstractSet[str] = frozenset(),
                 parameter: Optional[str] = None):
        self.context = context
        self.absent = absent
        self.parameter = parameter

    def evaluate(self, node: Node) -> Outcome:
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            if node.operator == "&&":
                if Outcome.FALSE in (left, right):
                    return Outcome.FALSE
                if left is Outcome.TRUE and right is Outcome.TRUE:
                    return Outcome.TRUE
                return Outcome.UNDECIDABLE
            if Outcome.TRUE in (left, right):
                return Outcome.TRUE
            if left is Outcome.FALSE and right is Outcome.FALSE:
                return Outcome.FALSE
            return Outcome.UNDECIDABLE

        if node.name not in self.context:
            if node.name in self.absent:
                return Outcome.FALSE
            return Outcome.UNDECIDABLE

        value = self.context[node.name]
        if isinstance(node, Comparison):
            return Outcome.of(self._compare(node, value))
        if isinstance(node, Membership):
            return Outcome.of(self._member(node, value))
        if isinstance(node, Contains):
            return Outcome.of(self._contains(node, value))
        raise TypeError(f"Unsupported condition node: {type(node).__name__}")

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------
    def _compare(self, node: Comparison, value: Any) -> bool:
        actual, expected = _kind(value), _kind(node.literal)
        if actual == "selection":
            self._fail(node, f"'{node.name}' holds a multiple selection; use 'in' or 'contains'")
        if actual != expected:
            self._fail(node, f"cannot compare {actual} value of '{node.name}' with {expected} literal")

        if node.operator == "==":
            return value == node.literal
        if node.operator == "!=":
            return value != node.literal

        if actual != "number":
            self._fail(node, f"operator '{node.operator}' requires numbers, got {actual}")
        if node.operator == "<":
            return value < node.literal
        if node.operator == ">":
            return value > node.literal
        if node.operator == "<=":
            return value <= node.literal
        return value >= node.literal

    def _member(self, node: Membership, value: Any) -> bool:
        actual = _kind(value)
        if actual == "selection":
            return any(item in node.literals for item in value)
        if actual != "string":
            self._fail(node, f"'in' requires a string or choice value, '{node.name}' is {actual}")
        return value in node.literals

    def _contains(self, node: Contains, value: Any) -> bool:
        actual = _kind(value)
        if actual == "selection":
            return node.literal in value
        if actual != "string":
            self._fail(node, f"'contains' requires a string or choice value, '{node.name}' is {actual}")
        if not isinstance(node.literal, str):
            self._fail(node, "'contains' on a string requires a string literal")
        return node.literal in value

    def _fail(self, node: Node, details: str):
        raise ConditionEvaluationError(render(node), details, self.parameter)


def evaluate(node: Node, context: Mapping[str, Any], absent: AbstractSet[str] = frozenset(),
             parameter: Optional[str] = None) -> Outcome:
    """Evaluate a parsed condition; see ConditionEvaluator."""
    return ConditionEvaluator(context, absent, parameter).evaluate(node)


def evaluate_condition(expression: str, context: Mapping[str, Any],
                       absent: AbstractSet[str] = frozenset(),
                       parameter: Optional[str] = None) -> Outcome:
    """Parse and evaluate an expression string."""
    return evaluate(parse_condition(expression, parameter), context, absent, parameter)
