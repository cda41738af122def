import argparse
import logging
import os
import sys

import yaml

from . import (
    PathTracker,
    StateViolation,
    STDIN_LABEL,
)
from .events import search
from .logger import get_logger
from .matchers import (
    Disciplines,
    Matcher,
)

PROG = 'yaml-grep'

###############################################################################
# Helpers
###############################################################################

def split_args(args):
    # Split the positional arguments into the search pattern and the input
    # filenames. The pattern is made of all leading arguments that do not name
    # an existing file, joined with single spaces.
    i = 0
    while i < len(args) and not os.path.exists(args[i]):
        i += 1
    return ' '.join(args[:i]), args[i:]

def get_discipline(args):
    if args.search_path:
        return Disciplines.PATH
    if args.ignore_case:
        return Disciplines.IGNORE_CASE
    return Disciplines.EXACT

def use_color(choice, stream):
    if choice == 'auto':
        return stream.isatty()
    return choice == 'always'

def fail(message):
    # Make sure that everything reported so far is written before the error.
    sys.stdout.flush()
    sys.stderr.write('{}: {}\n'.format(PROG, message))
    return 1

###############################################################################
# Grep
###############################################################################

def grep(stream, filename, matcher, logger):
    # Print a line for each leaf in stream that the matcher accepts.
    def on_leaf(path, value, line, column):
        result = matcher(path, value, line, column)
        if result is not None:
            print(result)
    search(stream, PathTracker(on_leaf, filename, logger))

###############################################################################
# CLI
###############################################################################

def build_arg_parser():
    arg_parser = argparse.ArgumentParser(
        prog=PROG,
        description='Search YAML mappings for leaf values or key paths.',
    )

    g = arg_parser.add_mutually_exclusive_group()
    g.add_argument('-i', '--ignore-case', action='store_true',
                   help='Match leaf values ignoring case')
    g.add_argument('-p', '--search-path', action='store_true',
                   help='Match the dot-delimited key path instead of the value')

    arg_parser.add_argument('--color', choices=('always', 'never', 'auto'),
                            default='always',
                            help='Highlight the matched text')
    arg_parser.add_argument('-d', '--debug', action='store_true',
                            help='Log parser state transitions to stderr')
    arg_parser.add_argument('args', nargs='*', metavar='PATTERN|FILE',
                            help='Search pattern words followed by input files')
    return arg_parser

def main(argv=None):
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    if not args.args:
        arg_parser.error('a search pattern is required')

    pattern, filenames = split_args(args.args)
    matcher = Matcher(
        pattern,
        discipline=get_discipline(args),
        highlight=use_color(args.color, sys.stdout),
    )
    logger = get_logger(
        'yaml_grep', level=logging.DEBUG if args.debug else logging.WARNING)

    if not filenames:
        try:
            grep(sys.stdin.buffer, STDIN_LABEL, matcher, logger)
        except StateViolation as e:
            return fail(e)
        except yaml.YAMLError as e:
            return fail('{}: {}'.format(STDIN_LABEL, e))
        return 0

    for filename in filenames:
        try:
            with open(filename, 'rb') as fh:
                grep(fh, filename, matcher, logger)
        except StateViolation as e:
            return fail(e)
        except yaml.YAMLError as e:
            return fail('{}: {}'.format(filename, e))
        except OSError as e:
            return fail('{}: {}'.format(filename, e.strerror or e))
    return 0

if __name__ == '__main__':
    sys.exit(main())
