"""Load-time self checks for parameter definitions.

These run once when a command or workflow is loaded. Any problem blocks the
command from running at all, so every problem is collected and reported in
a single SchemaError.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from ..conditions import parse_condition, referenced_names
from ..exceptions import InvalidConditionError, SchemaError, ValidationError
from ..params.sources import has_env_placeholder
from ..params.validator import validate_value
from ..schemas.parameter import Parameter, ParameterGroup, ParameterType


def _raise_if(problems: List[str]) -> None:
    if problems:
        raise SchemaError(
            "Invalid parameter definitions:\n" + "\n".join(f"  - {p}" for p in problems),
            problems,
        )


def _rule_problems(param: Parameter) -> List[str]:
    problems: List[str] = []
    rules = param.rules
    name = param.name

    if param.type.is_choice:
        if not param.choices:
            problems.append(f"{name}: {param.type.value} parameter requires a non-empty choices list")
    elif param.choices and param.type is not ParameterType.STRING:
        problems.append(f"{name}: choices are not supported for {param.type.value} parameters")
    if param.choices and len(set(param.choices)) != len(param.choices):
        problems.append(f"{name}: choices must be unique")

    if rules.pattern is not None:
        try:
            re.compile(rules.pattern)
        except re.error as exc:
            problems.append(f"{name}: invalid pattern '{rules.pattern}': {exc}")
    if rules.min_length is not None and rules.max_length is not None and rules.min_length > rules.max_length:
        problems.append(f"{name}: min_length {rules.min_length} exceeds max_length {rules.max_length}")
    if rules.min is not None and rules.max is not None and rules.min > rules.max:
        problems.append(f"{name}: min {rules.min} exceeds max {rules.max}")

    low, high = rules.min_selections, rules.max_selections
    if low is not None and high is not None and low > high:
        problems.append(f"{name}: min_selections {low} exceeds max_selections {high}")
    if param.type is ParameterType.MULTI_CHOICE and param.choices:
        if low is not None and low > len(param.choices):
            problems.append(f"{name}: min_selections {low} exceeds the number of choices")
    return problems


def _default_problem(param: Parameter):
    if not param.has_default:
        return None
    if param.type is ParameterType.STRING and has_env_placeholder(param.default):
        # Checked once the placeholder has been substituted.
        return None
    try:
        validate_value(param, param.default)
    except ValidationError as exc:
        return f"{param.name}: invalid default {param.default!r}: {exc.reason}"
    return None


def validate_default_values(parameters: Iterable[Parameter]) -> None:
    """Check choices, rules and defaults of every parameter.

    Raises SchemaError listing every problem found.
    """
    problems: List[str] = []
    for param in parameters:
        rule_problems = _rule_problems(param)
        problems.extend(rule_problems)
        if not rule_problems:
            problem = _default_problem(param)
            if problem:
                problems.append(problem)
    _raise_if(problems)


def _condition_problems(parameters: Sequence[Parameter]) -> List[str]:
    names = {param.name for param in parameters}
    problems: List[str] = []
    for param in parameters:
        if param.condition is None:
            continue
        try:
            tree = parse_condition(param.condition.expression, param.name)
        except InvalidConditionError as exc:
            problems.append(str(exc))
            continue
        refs = referenced_names(tree)
        for ref in sorted(refs - names):
            problems.append(
                f"{param.name}: condition '{param.condition.expression}' references unknown parameter '{ref}'"
            )
        if param.name in refs:
            problems.append(f"{param.name}: condition '{param.condition.expression}' references itself")
    return problems


def _group_problems(groups: Sequence[ParameterGroup], parameters: Sequence[Parameter]) -> List[str]:
    names = {param.name for param in parameters}
    problems: List[str] = []
    seen = set()
    for group in groups:
        if group.name in seen:
            problems.append(f"duplicate group name '{group.name}'")
        seen.add(group.name)
        for member in group.member_names:
            if member not in names:
                problems.append(f"group '{group.name}' references unknown parameter '{member}'")
    return problems


def check_definitions(parameters: Iterable[Parameter], groups: Iterable[ParameterGroup] = ()) -> None:
    """Run every load-time check: names, rules, defaults, conditions, groups."""
    parameters = list(parameters)
    groups = list(groups)
    problems: List[str] = []

    seen = set()
    for param in parameters:
        if param.name in seen:
            problems.append(f"duplicate parameter name '{param.name}'")
        seen.add(param.name)

    try:
        validate_default_values(parameters)
    except SchemaError as exc:
        problems.extend(exc.problems)
    problems.extend(_condition_problems(parameters))
    problems.extend(_group_problems(groups, parameters))
    _raise_if(problems)
