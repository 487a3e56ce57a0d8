"""Locate the help and error-report templates."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from ..exceptions import TemplateError


class TemplateLoader:
    """Jinja2 environment over ``help/`` and ``report/`` templates; undefined variables raise."""

    def __init__(self, template_dir: str | None = None):
        root = Path(template_dir) if template_dir else Path(__file__).parent
        self.env = Environment(
            loader=FileSystemLoader(str(root)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def load(self, template_name: str):
        try:
            return self.env.get_template(template_name)
        except TemplateNotFound as exc:
            known = ", ".join(
                name for name in self.env.list_templates() if name.endswith(".j2")
            )
            raise TemplateError(
                f"No template '{template_name}' for help or error output (available: {known})"
            ) from exc
