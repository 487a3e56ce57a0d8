"""Resolve parameter values from switches, variables, prompts and defaults."""

import argparse
import json
import sys

import yaml

from ...resolution.resolver import ParameterResolver
from ..args import add_source_args, build_parameter_parser
from ..command import BaseCommand, default_interactive, prompt_attempts
from ..components import ParameterManager
from ..prompts import TerminalPromptAdapter


def format_values(values, fmt="yaml"):
    if fmt == "json":
        return json.dumps(values, indent=2) + "\n"
    return yaml.safe_dump(values, sort_keys=False, default_flow_style=False)


class ResolveCommand(BaseCommand):
    name = "resolve"
    help = "Resolve parameter values and print them"

    def add_custom_args(self, parser):
        add_source_args(parser)
        parser.add_argument(
            "parameter_args",
            nargs=argparse.REMAINDER,
            metavar="--<parameter> VALUE",
            help="Switches derived from the definitions (see 'wfp describe FILE')",
        )

    def run(self, args, document):
        parser = build_parameter_parser(document, f"wfp resolve {args.definitions}")
        extra = parser.parse_args(args.parameter_args)

        assignments = list(args.var) + list(getattr(extra, "var", []))
        interactive = getattr(extra, "interactive", args.interactive)
        if interactive is None:
            interactive = default_interactive()
        fmt = getattr(extra, "format", args.format)

        provided = ParameterManager(document.parameters).collect(extra, assignments)
        prompter = None
        if interactive:
            prompter = TerminalPromptAdapter(max_attempts=prompt_attempts())
        resolver = ParameterResolver(document.parameters, document.parameter_groups, prompter=prompter)
        values = resolver.resolve(provided, interactive=interactive)

        sys.stdout.write(format_values(values, fmt))
        return 0


def register(subparsers):
    ResolveCommand().register(subparsers)
