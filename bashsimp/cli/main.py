"""Main CLI entry point for bashsimp."""

import argparse
import sys
from typing import Optional

from .commands import simplify_command


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the bashsimp CLI."""
    parser = argparse.ArgumentParser(
        prog='bashsimp',
        description='Static simplifier for parsed bash scripts'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    simplify_parser = subparsers.add_parser('simplify', help='Simplify a script document')
    simplify_parser.add_argument(
        'script',
        type=str,
        help='Path to script AST document (YAML or JSON)'
    )
    simplify_parser.add_argument(
        '--var',
        action='append',
        metavar='NAME=VALUE',
        help='Initial variable binding (can be specified multiple times)'
    )
    simplify_parser.add_argument(
        '--vars-file',
        type=str,
        help='Path to JSON file containing initial variable bindings'
    )
    simplify_parser.add_argument(
        '--format',
        choices=['bash', 'yaml'],
        default='bash',
        help='Output format for the simplified script'
    )
    simplify_parser.add_argument(
        '--output',
        type=str,
        metavar='PATH',
        help='Write the simplified script here instead of stdout'
    )
    simplify_parser.add_argument(
        '--namespace-out',
        type=str,
        metavar='PATH',
        help='Write the final namespace as JSON'
    )
    simplify_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Validate the document without simplifying'
    )
    simplify_parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    simplify_parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    simplify_parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    simplify_parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'simplify':
        return simplify_command(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
