"""Render help text and error reports from templates."""

from __future__ import annotations

from typing import Dict, Iterable, Sequence

from jinja2 import TemplateError as JinjaTemplateError

from ..exceptions import RequiredParameterMissing, TemplateError
from ..resolution.groups import group_order
from ..schemas.parameter import Parameter, ParameterGroup


class TemplateRenderer:
    """Render package templates to strings."""

    def __init__(self, loader):
        self.loader = loader

    def render(self, template_name: str, context: Dict) -> str:
        """Render a template to a string."""
        template = self.loader.load(template_name)
        try:
            return template.render(**context)
        except JinjaTemplateError as exc:
            raise TemplateError(f"{template_name}: {exc}") from exc

    def parameter_help(self, parameters: Sequence[Parameter],
                       groups: Iterable[ParameterGroup] = (), title: str = "") -> str:
        """Grouped description of every parameter, as shown by --help."""
        return self.render(
            "help/parameters.j2",
            {"title": title, "sections": group_order(groups, parameters)},
        )

    def error_report(self, errors: Sequence[Exception]) -> str:
        """Batch report listing every resolution error."""
        missing = [error.parameter for error in errors if isinstance(error, RequiredParameterMissing)]
        example = " ".join(f"--var {name}=<value>" for name in missing)
        return self.render(
            "report/errors.j2",
            {"errors": list(errors), "missing": missing, "example": example},
        )
