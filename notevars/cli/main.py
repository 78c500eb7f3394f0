"""Main CLI entry point for notevars."""

import argparse
import sys
from typing import Optional

from .commands import expand_document, export_variables, show_declarations


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--store',
        type=str,
        metavar='JSON',
        help='Saved global variables: loaded first if present, written back on success'
    )
    parser.add_argument(
        '--variables',
        action='append',
        metavar='YAML',
        help='YAML file of global variables (can be specified multiple times)'
    )
    parser.add_argument(
        '--var',
        action='append',
        metavar='KEY=VALUE',
        help='Global variable (can be specified multiple times)'
    )
    parser.add_argument(
        '--out',
        type=str,
        metavar='PATH',
        help='Write output to PATH instead of stdout'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the notevars CLI."""
    parser = argparse.ArgumentParser(
        prog='notevars',
        description='Expand {{variables}} in Markdown notes'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Expand command
    expand_parser = subparsers.add_parser('expand', help='Expand variables in a document')
    expand_parser.add_argument(
        'file',
        type=str,
        help='Path to Markdown document'
    )
    _add_source_arguments(expand_parser)
    expand_parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on variable declarations without a colon'
    )
    expand_parser.add_argument(
        '--no-persist-overrides',
        action='store_true',
        help='Apply --var values to this expansion only instead of the global store'
    )
    _add_logging_arguments(expand_parser)

    # Export command
    export_parser = subparsers.add_parser('export', help='Export merged global variables as YAML')
    _add_source_arguments(export_parser)
    _add_logging_arguments(export_parser)

    # Parse command
    parse_parser = subparsers.add_parser('parse', help='List variables declared in a document')
    parse_parser.add_argument(
        'file',
        type=str,
        help='Path to Markdown document'
    )
    parse_parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on variable declarations without a colon'
    )
    _add_logging_arguments(parse_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'expand':
        return expand_document(parsed_args)
    elif parsed_args.command == 'export':
        return export_variables(parsed_args)
    elif parsed_args.command == 'parse':
        return show_declarations(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
