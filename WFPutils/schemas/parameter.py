"""Pydantic models for parameter definitions.

Definitions are frozen once loaded so one instance can be shared by any
number of concurrent resolution calls.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ParameterType(str, Enum):
    """Closed set of parameter types."""

    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    CHOICE = "choice"
    MULTI_CHOICE = "multi_choice"

    @classmethod
    def parse(cls, value) -> "ParameterType":
        """Map a type name or one of its aliases to a ParameterType."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key not in _TYPE_ALIASES:
            known = ", ".join(sorted(_TYPE_ALIASES))
            raise ValueError(f"unknown parameter type '{value}' (known: {known})")
        return _TYPE_ALIASES[key]

    @property
    def is_choice(self) -> bool:
        return self in (ParameterType.CHOICE, ParameterType.MULTI_CHOICE)


_TYPE_ALIASES = {
    "string": ParameterType.STRING,
    "str": ParameterType.STRING,
    "boolean": ParameterType.BOOLEAN,
    "bool": ParameterType.BOOLEAN,
    "number": ParameterType.NUMBER,
    "numeric": ParameterType.NUMBER,
    "int": ParameterType.NUMBER,
    "integer": ParameterType.NUMBER,
    "float": ParameterType.NUMBER,
    "choice": ParameterType.CHOICE,
    "select": ParameterType.CHOICE,
    "multi_choice": ParameterType.MULTI_CHOICE,
    "multichoice": ParameterType.MULTI_CHOICE,
    "multiselect": ParameterType.MULTI_CHOICE,
}


class ValidationRules(BaseModel):
    """Type-specific constraints; only the subset matching the type applies."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern: Optional[str] = None
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    step: Optional[Union[int, float]] = Field(default=None, gt=0)
    min_selections: Optional[int] = Field(default=None, ge=0)
    max_selections: Optional[int] = Field(default=None, ge=0)


class ParameterCondition(BaseModel):
    """Expression gating whether a parameter is active."""

    model_config = ConfigDict(frozen=True)

    expression: str
    description: Optional[str] = None

    def explain(self) -> str:
        """Human explanation of why a gated parameter is being asked for."""
        if self.description:
            return self.description
        return f"condition '{self.expression}' is met"


class Parameter(BaseModel):
    """One declared input."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(min_length=1)
    description: str = ""
    type: ParameterType = Field(
        default=ParameterType.STRING,
        validation_alias=AliasChoices("type", "parameter_type"),
    )
    required: bool = False
    default: Any = None
    validation: Optional[ValidationRules] = None
    choices: Optional[Tuple[str, ...]] = None
    condition: Optional[ParameterCondition] = None

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value):
        return ParameterType.parse(value)

    @field_validator("condition", mode="before")
    @classmethod
    def _bare_condition(cls, value):
        if isinstance(value, str):
            return {"expression": value}
        return value

    @field_validator("default", mode="before")
    @classmethod
    def _freeze_default(cls, value):
        if isinstance(value, list):
            return tuple(value)
        return value

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def cli_switch(self) -> str:
        """Long option derived from the name (deploy_env -> --deploy-env)."""
        return "--" + self.name.replace("_", "-")

    @property
    def label(self) -> str:
        return self.description or self.name

    @property
    def rules(self) -> ValidationRules:
        return self.validation or _NO_RULES


_NO_RULES = ValidationRules()


class ParameterGroup(BaseModel):
    """Organizational grouping of parameters by name."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(min_length=1)
    description: str = ""
    member_names: Tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("member_names", "parameters"),
    )
