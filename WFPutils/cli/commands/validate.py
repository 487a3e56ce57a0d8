"""Check a definitions file without resolving anything."""

from ..command import BaseCommand


class ValidateCommand(BaseCommand):
    name = "validate"
    help = "Check parameter definitions, conditions, defaults and groups"

    def run(self, args, document):
        groups = len(document.parameter_groups)
        print(f"{args.definitions}: {len(document.parameters)} parameters, {groups} groups OK")
        return 0


def register(subparsers):
    ValidateCommand().register(subparsers)
