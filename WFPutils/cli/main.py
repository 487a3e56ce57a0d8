#!/usr/bin/env python3
import argparse
import importlib
import logging
import os
import pkgutil
import sys


def get_log_level(verbose=False):
    """Level from -v, else WFP_LOG_LEVEL (default WARNING)."""
    if verbose:
        return logging.DEBUG
    name = os.getenv("WFP_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose=False):
    logging.basicConfig(
        level=get_log_level(verbose),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _generate_command_help(subparsers):
    """Auto-generate command list from registered subparsers."""
    commands = []

    for name in sorted(subparsers.choices.keys()):
        parser = subparsers.choices[name]
        help_text = parser.description or ''
        commands.append(f"  {name:<12} {help_text}")

    lines = ["Available commands:", ""]
    lines.extend(commands)
    return "\n".join(lines)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="wfp",
        description="Resolve typed, conditional workflow parameters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subs = parser.add_subparsers(dest='cmd')

    # Dynamically import every module in cli/commands and call its register()
    pkg = importlib.import_module('WFPutils.cli.commands')
    for finder, name, ispkg in pkgutil.iter_modules(pkg.__path__):
        mod = importlib.import_module(f"WFPutils.cli.commands.{name}")
        if hasattr(mod, 'register'):
            mod.register(subs)

    command_help = _generate_command_help(subs)
    parser.epilog = f"""
{command_help}

PARAMETER VALUES (highest precedence first):
  --<parameter> VALUE     Switch derived from the name (deploy_env -> --deploy-env)
  --var name=value        Legacy variable
  interactive prompt      When --interactive or stdin is a terminal
  declared default        ${{VAR}} placeholders are taken from the environment

ENVIRONMENT:
  WFP_LOG_LEVEL           Logging level (default WARNING)
  WFP_NON_INTERACTIVE=1   Never prompt
  WFP_PROMPT_ATTEMPTS     Maximum answers per prompt (default unlimited)

For detailed help: wfp <command> --help
"""
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if not args.cmd:
        parser.print_help()
        return 1

    # every module sets args.func to its handler in register()
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
