#!/usr/bin/env python3
"""
CLI for the duocalc calculator.

Usage:
    python -m duocalc [repl]
    python -m duocalc eval EXPR [EXPR ...] [--no-save]
    python -m duocalc history

Examples:
    # Interactive session, state kept in ./calculator_state.json
    python -m duocalc

    # One-shot evaluation against the stored variables
    python -m duocalc eval "x = 5" "x * 2"

    # Use a different state file
    python -m duocalc --state ~/.duocalc.json eval "x + 1"
"""

import argparse
import logging
import sys

from . import __version__
from .config import load_config
from .console import ConsoleUI, format_value, load_session, run_repl, save_session
from .lang import CalcError, EvalError
from .storage import FileStorage

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def cmd_repl(args, config):
    """Run the interactive loop."""
    return run_repl(config)


def cmd_eval(args, config):
    """Evaluate expressions in order against the stored state."""
    storage = FileStorage(config.state_file)
    session = load_session(storage)

    status = 0
    evaluated = False
    for expr in args.expressions:
        try:
            value = session.execute(expr)
            evaluated = True
            print(format_value(value))
        except EvalError as e:
            evaluated = True
            print(f"Error: {e}", file=sys.stderr)
            status = 1
            break
        except CalcError as e:
            print(f"Error: {e}", file=sys.stderr)
            status = 1
            break

    if evaluated and config.autosave and not args.no_save:
        save_session(storage, session)
    return status


def cmd_history(args, config):
    """Print the stored command history."""
    session = load_session(FileStorage(config.state_file))
    ConsoleUI().print_history(session.history)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='duocalc',
        description='Calculator with numeric and text variables',
    )
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='YAML configuration file')
    parser.add_argument('-s', '--state', metavar='FILE',
                        help='State file (default: calculator_state.json)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='action')

    subparsers.add_parser('repl', help='Interactive session (default)')

    eval_parser = subparsers.add_parser('eval', help='Evaluate expressions and exit')
    eval_parser.add_argument('expressions', nargs='+', metavar='EXPR',
                             help='Expression or assignment')
    eval_parser.add_argument('--no-save', action='store_true',
                             help='Do not write the state file')

    subparsers.add_parser('history', help='Show the stored command history')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    try:
        config = load_config(args.config, state_file=args.state)
    except CalcError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.action == 'eval':
        return cmd_eval(args, config)
    elif args.action == 'history':
        return cmd_history(args, config)
    else:
        return cmd_repl(args, config)


if __name__ == '__main__':
    sys.exit(main())
