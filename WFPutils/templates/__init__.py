"""Jinja2 templates for help text and error reports."""

from .loader import TemplateLoader
from .renderer import TemplateRenderer


def default_renderer() -> TemplateRenderer:
    return TemplateRenderer(TemplateLoader())


__all__ = ["TemplateLoader", "TemplateRenderer", "default_renderer"]
