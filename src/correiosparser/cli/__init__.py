"""`correiosparser.cli` package provides a command line program that parses
saved Correios pages and prints their contents.
"""

import sys

from ._cli import get_arg_parser, parse_contents, run


def main() -> None:
    sys.exit(run())


__all__ = [
    'get_arg_parser',
    'main',
    'parse_contents',
    'run',
]
