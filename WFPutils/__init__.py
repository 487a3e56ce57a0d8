"""Typed, conditional parameter resolution for command-line workflows."""

from .exceptions import (
    ConfigurationError,
    ConditionEvaluationError,
    InvalidConditionError,
    PromptAttemptsExceeded,
    RequiredParameterMissing,
    ResolutionErrors,
    SchemaError,
    UnresolvableDependencyError,
    ValidationError,
    WFPError,
)
from .params import merge_provided, parse_var_assignments, validate_value
from .resolution import (
    ParameterResolver,
    PromptAdapter,
    PromptRequest,
    ScriptedPromptAdapter,
    check_definitions,
    group_order,
    resolve,
    validate_default_values,
)
from .schemas import (
    Parameter,
    ParameterCondition,
    ParameterDocument,
    ParameterGroup,
    ParameterType,
    ValidationRules,
    load_definitions,
    parse_definitions,
)

__version__ = "1.0"

__all__ = [
    "ConfigurationError",
    "ConditionEvaluationError",
    "InvalidConditionError",
    "PromptAttemptsExceeded",
    "RequiredParameterMissing",
    "ResolutionErrors",
    "SchemaError",
    "UnresolvableDependencyError",
    "ValidationError",
    "WFPError",
    "merge_provided",
    "parse_var_assignments",
    "validate_value",
    "ParameterResolver",
    "PromptAdapter",
    "PromptRequest",
    "ScriptedPromptAdapter",
    "check_definitions",
    "group_order",
    "resolve",
    "validate_default_values",
    "Parameter",
    "ParameterCondition",
    "ParameterDocument",
    "ParameterGroup",
    "ParameterType",
    "ValidationRules",
    "load_definitions",
    "parse_definitions",
]
