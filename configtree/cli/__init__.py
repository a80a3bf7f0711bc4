"""Command-line interface."""

from configtree.cli.arguments import parse_arguments

__all__ = ["parse_arguments"]
