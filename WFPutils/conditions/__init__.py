"""Condition expression language."""

from .ast import Comparison, Contains, Logical, Membership, Node, referenced_names, render
from .evaluator import ConditionEvaluator, Outcome, evaluate, evaluate_condition
from .parser import parse_condition, tokenize

__all__ = [
    "Comparison",
    "Contains",
    "Logical",
    "Membership",
    "Node",
    "referenced_names",
    "render",
    "ConditionEvaluator",
    "Outcome",
    "evaluate",
    "evaluate_condition",
    "parse_condition",
    "tokenize",
]
