"""CLI subcommands; every module defines ``register(subparsers)``."""
