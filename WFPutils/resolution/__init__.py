"""Fixed-point parameter resolution."""

from .checks import check_definitions, validate_default_values
from .context import ResolutionContext, ResolutionOutcome
from .groups import GENERAL_GROUP, group_order
from .prompting import InputShape, PromptAdapter, PromptRequest, ScriptedPromptAdapter, build_prompt_request
from .resolver import ParameterResolver, resolve

__all__ = [
    "check_definitions",
    "validate_default_values",
    "ResolutionContext",
    "ResolutionOutcome",
    "GENERAL_GROUP",
    "group_order",
    "InputShape",
    "PromptAdapter",
    "PromptRequest",
    "ScriptedPromptAdapter",
    "build_prompt_request",
    "ParameterResolver",
    "resolve",
]
