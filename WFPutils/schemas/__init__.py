"""Parameter definition models and their loader."""

from .loader import ParameterDocument, load_definitions, parse_definitions, split_front_matter
from .parameter import Parameter, ParameterCondition, ParameterGroup, ParameterType, ValidationRules

__all__ = [
    "ParameterDocument",
    "load_definitions",
    "parse_definitions",
    "split_front_matter",
    "Parameter",
    "ParameterCondition",
    "ParameterGroup",
    "ParameterType",
    "ValidationRules",
]
