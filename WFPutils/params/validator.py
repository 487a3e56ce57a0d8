"""Type coercion and rule checks for candidate parameter values.

Every value that enters a resolved map goes through ``validate_value``
regardless of its source (flag, legacy variable, prompt answer or default).
A value is either returned fully coerced or rejected with a ValidationError;
nothing is partially applied.
"""

from __future__ import annotations

import difflib
import math
import re
from functools import lru_cache
from typing import Any, Callable, Dict, List

from ..exceptions import ValidationError
from ..schemas.parameter import Parameter, ParameterType

_TRUE_FORMS = ("true",)
_FALSE_FORMS = ("false",)
_STEP_TOLERANCE = 1e-9


@lru_cache(maxsize=256)
def compile_pattern(pattern: str):
    """Compile and cache a validation regex."""
    return re.compile(pattern)


def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Validator:
    """Check candidate values against a parameter's type and rules."""

    def __init__(self):
        self._checks: Dict[ParameterType, Callable[[Parameter, Any], Any]] = {
            ParameterType.STRING: self._validate_string,
            ParameterType.BOOLEAN: self._validate_boolean,
            ParameterType.NUMBER: self._validate_number,
            ParameterType.CHOICE: self._validate_choice,
            ParameterType.MULTI_CHOICE: self._validate_multi_choice,
        }

    def validate(self, param: Parameter, value: Any) -> Any:
        """Return ``value`` coerced to the parameter's type or raise ValidationError."""
        if value is None:
            raise ValidationError(param.name, "a value is required")
        return self._checks[param.type](param, value)

    # ------------------------------------------------------------------
    # Per-type checks
    # ------------------------------------------------------------------
    def _validate_string(self, param: Parameter, value: Any) -> str:
        if not isinstance(value, str):
            raise ValidationError(param.name, f"expected string, got {_type_name(value)}")
        rules = param.rules

        if rules.pattern is not None and not compile_pattern(rules.pattern).fullmatch(value):
            raise ValidationError(
                param.name, f"value '{value}' does not match required pattern '{rules.pattern}'"
            )

        length = len(value)
        if rules.min_length is not None and length < rules.min_length:
            raise ValidationError(
                param.name, f"must be at least {rules.min_length} characters long (got: {length})"
            )
        if rules.max_length is not None and length > rules.max_length:
            raise ValidationError(
                param.name, f"must be at most {rules.max_length} characters long (got: {length})"
            )

        if param.choices and value not in param.choices:
            raise ValidationError(param.name, _invalid_choice(value, param.choices))
        return value

    def _validate_boolean(self, param: Parameter, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_FORMS:
                return True
            if lowered in _FALSE_FORMS:
                return False
            raise ValidationError(param.name, f"expected true or false, got '{value}'")
        raise ValidationError(param.name, f"expected boolean, got {_type_name(value)}")

    def _validate_number(self, param: Parameter, value: Any):
        if isinstance(value, bool):
            raise ValidationError(param.name, "expected number, got boolean")
        if isinstance(value, str):
            number = _parse_number(value)
            if number is None:
                raise ValidationError(param.name, f"expected number, got '{value}'")
        elif isinstance(value, (int, float)):
            number = value
        else:
            raise ValidationError(param.name, f"expected number, got {_type_name(value)}")

        if isinstance(number, float) and not math.isfinite(number):
            raise ValidationError(param.name, f"expected a finite number, got {value}")
        try:
            float(number)
        except OverflowError as exc:
            raise ValidationError(param.name, "number is too large to represent") from exc

        rules = param.rules
        low, high = rules.min, rules.max
        if (low is not None and number < low) or (high is not None and number > high):
            bounds = f"[{_bound(low, '-inf')}, {_bound(high, 'inf')}]"
            raise ValidationError(param.name, f"value {_format_number(number)} is out of range {bounds}")

        if rules.step:
            ratio = number / rules.step
            if abs(ratio - round(ratio)) > _STEP_TOLERANCE:
                raise ValidationError(
                    param.name,
                    f"value {_format_number(number)} must be a multiple of {_format_number(rules.step)}",
                )
        return number

    def _validate_choice(self, param: Parameter, value: Any) -> str:
        if not isinstance(value, str):
            raise ValidationError(param.name, f"expected one of the choices, got {_type_name(value)}")
        if value not in (param.choices or ()):
            raise ValidationError(param.name, _invalid_choice(value, param.choices or ()))
        return value

    def _validate_multi_choice(self, param: Parameter, value: Any) -> List[str]:
        if isinstance(value, str):
            selected = [item.strip() for item in value.split(",") if item.strip()]
        elif isinstance(value, (list, tuple)):
            selected = list(value)
        else:
            raise ValidationError(param.name, f"expected a list of choices, got {_type_name(value)}")

        choices = param.choices or ()
        for item in selected:
            if not isinstance(item, str):
                raise ValidationError(param.name, f"selections must be strings, got {_type_name(item)}")
            if item not in choices:
                raise ValidationError(param.name, _invalid_choice(item, choices))
        duplicates = sorted({item for item in selected if selected.count(item) > 1})
        if duplicates:
            raise ValidationError(param.name, f"duplicate selections: {', '.join(duplicates)}")

        rules = param.rules
        low = rules.min_selections if rules.min_selections is not None else 0
        high = rules.max_selections if rules.max_selections is not None else len(choices)
        count = len(selected)
        if count < low or count > high:
            raise ValidationError(
                param.name, f"requires between {low} and {high} selections (got: {count})"
            )
        return selected


def _parse_number(text: str):
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def _bound(value, missing: str) -> str:
    return missing if value is None else _format_number(value)


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (list, tuple)):
        return "list"
    return type(value).__name__


def _invalid_choice(value: str, choices) -> str:
    message = f"value '{value}' is not in allowed choices: {', '.join(choices)}"
    close = difflib.get_close_matches(value, list(choices), n=1)
    if close:
        message += f" (did you mean '{close[0]}'?)"
    return message


_DEFAULT_VALIDATOR = Validator()


def validate_value(param: Parameter, value: Any) -> Any:
    """Validate with the shared stateless Validator."""
    return _DEFAULT_VALIDATOR.validate(param, value)
