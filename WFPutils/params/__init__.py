"""Value validation and value sources."""

from .patterns import hint_for_pattern
from .sources import merge_provided, parse_var_assignments, substitute_env
from .validator import Validator, validate_value

__all__ = [
    "hint_for_pattern",
    "merge_provided",
    "parse_var_assignments",
    "substitute_env",
    "Validator",
    "validate_value",
]
