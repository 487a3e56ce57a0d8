"""Reusable argparse argument helpers."""

from __future__ import annotations

import argparse

from ..exceptions import SchemaError
from ..resolution.groups import group_order
from ..schemas.parameter import ParameterType

PARAM_DEST_PREFIX = "param__"


def add_definitions_arg(parser):
    parser.add_argument(
        "definitions",
        help="Parameter definitions: a YAML file or Markdown with YAML front matter",
    )


def add_var_arg(parser, suppress=False):
    parser.add_argument(
        "--var",
        action="append",
        default=argparse.SUPPRESS if suppress else [],
        metavar="NAME=VALUE",
        help="Legacy variable assignment (repeatable, e.g. --var env=dev)",
    )


def add_interactive_args(parser, suppress=False):
    parser.add_argument(
        "--interactive",
        action=argparse.BooleanOptionalAction,
        default=argparse.SUPPRESS if suppress else None,
        help="Prompt for missing values (default: WFP_NON_INTERACTIVE, else only when stdin is a terminal)",
    )


def add_format_arg(parser, suppress=False):
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default=argparse.SUPPRESS if suppress else "yaml",
        help="Output format for resolved values",
    )


def add_source_args(parser, suppress=False):
    """Options shared by both parsing phases of ``resolve``."""
    add_var_arg(parser, suppress)
    add_interactive_args(parser, suppress)
    add_format_arg(parser, suppress)


def param_dest(name: str) -> str:
    return PARAM_DEST_PREFIX + name


def add_parameter_args(parser, parameters, groups=()):
    """Add one switch per parameter, in argument groups matching the definitions.

    Values are left as strings (lists for multi_choice); the resolver validates
    them, so argparse does not restrict choices itself.
    """
    for group, members in group_order(groups, parameters):
        section = parser.add_argument_group(group.description or group.name)
        for param in members:
            flags = [param.cli_switch]
            if "_" in param.name:
                flags.append("--" + param.name)
            help_text = param.description or param.name
            if param.choices:
                help_text += f" [choices: {', '.join(param.choices)}]"
            # argparse %-formats help strings
            help_text = help_text.replace("%", "%%")
            kwargs = {"dest": param_dest(param.name), "default": None, "help": help_text}

            if param.type is ParameterType.BOOLEAN:
                kwargs["action"] = argparse.BooleanOptionalAction
            elif param.type is ParameterType.MULTI_CHOICE:
                kwargs["nargs"] = "+"
                kwargs["metavar"] = "CHOICE"
            else:
                kwargs["metavar"] = param.name.upper()
            section.add_argument(*flags, **kwargs)


def build_parameter_parser(document, prog):
    """Parser for the switches following the definitions file of ``resolve``."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description=document.description or None,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_source_args(parser, suppress=True)
    try:
        add_parameter_args(parser, document.parameters, document.parameter_groups)
    except argparse.ArgumentError as exc:
        raise SchemaError(f"parameter switch conflicts with a built-in option: {exc}") from exc
    return parser
