"""Load parameter definitions from YAML files or Markdown front matter."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from ..exceptions import SchemaError
from .parameter import Parameter, ParameterGroup

_FRONT_MATTER = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)


class ParameterDocument(BaseModel):
    """Parameters and groups declared by one command or workflow."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = None
    description: str = ""
    parameters: Tuple[Parameter, ...] = ()
    parameter_groups: Tuple[ParameterGroup, ...] = Field(default=())


def split_front_matter(text: str) -> Tuple[Optional[str], str]:
    """Return ``(front matter, body)``; front matter is None when absent."""
    match = _FRONT_MATTER.match(text)
    if not match:
        return None, text
    return match.group(1), text[match.end():]


def parse_definitions(text: str, source: str = "<string>", check: bool = True) -> ParameterDocument:
    """Parse a YAML document (or Markdown with YAML front matter).

    With ``check`` the load-time checks run as well, so a malformed
    condition or an invalid default is reported before anything resolves.
    """
    front_matter, _ = split_front_matter(text)
    payload = front_matter if front_matter is not None else text
    try:
        data = yaml.safe_load(payload) or {}
    except yaml.YAMLError as exc:
        raise SchemaError(f"{source}: invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaError(f"{source}: expected a mapping at the top level")

    try:
        document = ParameterDocument.model_validate(data)
    except PydanticValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        raise SchemaError(f"{source}: invalid parameter definitions:\n  - " + "\n  - ".join(problems),
                          problems) from exc

    if check:
        from ..resolution.checks import check_definitions
        try:
            check_definitions(document.parameters, document.parameter_groups)
        except SchemaError as exc:
            raise SchemaError(f"{source}: {exc}", exc.problems) from exc
    return document


def load_definitions(path, check: bool = True) -> ParameterDocument:
    """Read definitions from ``path`` (.yaml, .yml or Markdown)."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Cannot read parameter definitions from {path}: {exc}") from exc
    return parse_definitions(text, source=str(path), check=check)
