"""Base CLI command scaffolding."""

from __future__ import annotations

import os
import sys
from typing import Optional

from ..exceptions import ConfigurationError, ResolutionErrors, WFPError
from ..schemas.loader import ParameterDocument, load_definitions
from ..templates import default_renderer
from .args import add_definitions_arg

_TRUTHY = ("1", "true", "yes", "on")


def default_interactive() -> bool:
    """Interactive unless WFP_NON_INTERACTIVE is set or stdin is not a terminal."""
    if os.getenv("WFP_NON_INTERACTIVE", "").strip().lower() in _TRUTHY:
        return False
    return sys.stdin.isatty()


def prompt_attempts() -> Optional[int]:
    """Maximum prompt attempts from WFP_PROMPT_ATTEMPTS (unset means unlimited)."""
    raw = os.getenv("WFP_PROMPT_ATTEMPTS", "").strip()
    if not raw:
        return None
    try:
        attempts = int(raw)
    except ValueError:
        attempts = 0
    if attempts < 1:
        raise ConfigurationError(f"WFP_PROMPT_ATTEMPTS must be a positive integer, got '{raw}'")
    return attempts


class BaseCommand:
    """Template method implementation for CLI commands.

    ``execute`` loads the definitions file and hands the document to
    ``run``; every WFPError is reported as ``ERROR: ...`` with exit code 1.
    """

    name: Optional[str] = None
    help: Optional[str] = None

    def __init__(self, renderer=None):
        self.renderer = renderer or default_renderer()

    # ------------------------------------------------------------------
    # Argparse registration helpers
    # ------------------------------------------------------------------
    def register(self, subparsers):
        import argparse

        parser = subparsers.add_parser(
            self.name,
            help=self.help,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.help,
        )
        self._add_arguments(parser)
        parser.set_defaults(func=self.execute)
        return parser

    def _add_arguments(self, parser):
        add_definitions_arg(parser)
        self.add_custom_args(parser)

    # ------------------------------------------------------------------
    # Execution workflow
    # ------------------------------------------------------------------
    def execute(self, args):
        try:
            document = load_definitions(args.definitions)
            return self.run(args, document)
        except ResolutionErrors as exc:
            print("ERROR: parameter resolution failed", file=sys.stderr)
            print(self.renderer.error_report(exc.errors), file=sys.stderr, end="")
            return 1
        except WFPError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def add_custom_args(self, parser):
        """Override to add command-specific arguments."""

    def run(self, args, document: ParameterDocument) -> int:
        raise NotImplementedError
