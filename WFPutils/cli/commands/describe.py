"""Print grouped help for the parameters of a definitions file."""

from ..command import BaseCommand


class DescribeCommand(BaseCommand):
    name = "describe"
    help = "Show the switches, defaults and conditions of every parameter"

    def run(self, args, document):
        title = document.name or args.definitions
        if document.description:
            title += f" - {document.description}"
        print(self.renderer.parameter_help(document.parameters, document.parameter_groups, title), end="")
        return 0


def register(subparsers):
    DescribeCommand().register(subparsers)
