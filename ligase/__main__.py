#! /usr/bin/env python
# -*- coding: utf-8 -*-

# This file is part of Ligase.
#
# Licensed under MIT License.

""" Main functionality of Ligase

"""
import sys
import argparse
import logging as lg

from ligase import __version__
from .core.errors import LigaseError
from .cli import coords as cli_coords
from .cli import query as cli_query


USAGE = ''' %(prog)s <command> [<args>]

The most commonly used commands are:
   locate         Translate flattened columns into contig positions
   next           Report the next contig boundary after a column
   samples        Resolve sample rows to names
   contigs        Report the contig layout
   query          Query variants from a workspace array

'''


def main():
    if len(sys.argv) == 1:
        empty_parser = argparse.ArgumentParser(
            description='Flattened genome coordinates for variant arrays',
            usage=USAGE,
        )
        empty_parser.print_help(sys.stderr)
        sys.exit(1)

    parser = argparse.ArgumentParser(
        description='Flattened genome coordinates for variant arrays',
    )
    parser.add_argument('--version',
        action='version',
        version=__version__,
        default=__version__,
    )

    subparser = parser.add_subparsers(help='Sub-command help', dest='subcommand')

    ''' Parser for locate '''
    locate_parser = subparser.add_parser('locate',
        description='''Translate flattened columns into contig positions''',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_coords.LocateOptions.add_arguments(locate_parser)
    locate_parser.set_defaults(func=cli_coords.run_locate)

    ''' Parser for next '''
    next_parser = subparser.add_parser('next',
        description='''Report the first contig starting after each column''',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_coords.NextOptions.add_arguments(next_parser)
    next_parser.set_defaults(func=cli_coords.run_next)

    ''' Parser for samples '''
    samples_parser = subparser.add_parser('samples',
        description='''Resolve sample rows to names''',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_coords.SamplesOptions.add_arguments(samples_parser)
    samples_parser.set_defaults(func=cli_coords.run_samples)

    ''' Parser for contigs '''
    contigs_parser = subparser.add_parser('contigs',
        description='''Report the contig layout''',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_coords.ContigsOptions.add_arguments(contigs_parser)
    contigs_parser.set_defaults(func=cli_coords.run_contigs)

    ''' Parser for query '''
    query_parser = subparser.add_parser('query',
        description='''Query variants from a workspace array''',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_query.QueryOptions.add_arguments(query_parser)
    query_parser.set_defaults(func=cli_query.run)

    args = parser.parse_args()
    try:
        args.func(args)
    except LigaseError as exc:
        lg.error(str(exc))
        sys.exit(1)

if __name__ == '__main__':
    main()
