# -*- coding: utf-8 -*-

# This file is part of Ligase.
#
# Licensed under MIT License.

""" Ligase coordinate lookups: locate, next, samples, contigs

"""
import logging as lg
import sys

import pandas as pd

from ligase import __version__

from ..core.errors import ConfigurationError
from . import METADATA_OPTS, REPORTING_OPTS, SubcommandOptions, configure_logging, load_config


class GenomeOptions(SubcommandOptions):

    def genome(self):
        cfg = load_config(self)
        if not cfg.metadata:
            raise ConfigurationError('No metadata source: use --config, --sqlite or --contigs')
        return cfg.load_genome()


class LocateOptions(GenomeOptions):
    OPTS = """
    - Input Options:
        - columns:
            positional: True
            nargs: "+"
            type: int
            help: Flattened column(s) to translate into contig positions.
    """ + METADATA_OPTS + REPORTING_OPTS


class NextOptions(GenomeOptions):
    OPTS = """
    - Input Options:
        - columns:
            positional: True
            nargs: "+"
            type: int
            help: Flattened column(s); reports the first contig starting after each.
    """ + METADATA_OPTS + REPORTING_OPTS


class SamplesOptions(GenomeOptions):
    OPTS = """
    - Input Options:
        - rows:
            positional: True
            nargs: "*"
            type: int
            help: Sample row indices to resolve. Default lists all samples.
    """ + METADATA_OPTS + REPORTING_OPTS


class ContigsOptions(GenomeOptions):
    OPTS = """
    - Output Options:
        - outfile:
            type: argparse.FileType('w')
            help: Write the contig report here instead of stdout.
    """ + METADATA_OPTS + REPORTING_OPTS


def _start(opts):
    console = configure_logging(opts)
    console.banner(__version__)
    lg.info('\n{}\n'.format(opts))
    return console


def run_locate(args):
    opts = LocateOptions(args)
    console = _start(opts)
    genome = opts.genome()
    for column, loc in zip(opts.columns, genome.translator.locate_many(opts.columns)):
        if loc is None:
            console.row(column, '.', '.')
        else:
            console.row(column, loc.contig, loc.position)


def run_next(args):
    opts = NextOptions(args)
    console = _start(opts)
    genome = opts.genome()
    for column in opts.columns:
        nxt = genome.next_contig_after(column)
        console.row(column, nxt.name or '.', nxt.offset if nxt.name else '.')


def run_samples(args):
    opts = SamplesOptions(args)
    console = _start(opts)
    genome = opts.genome()
    rows = opts.rows if opts.rows else range(len(genome.samples))
    for row in rows:
        if not 0 <= row < len(genome.samples):
            raise ConfigurationError(
                f'Sample row {row} out of range; {len(genome.samples)} samples loaded'
            )
        console.row(row, genome.get_sample_name(row))


def contig_report(registry):
    """DataFrame with one row per contig, ordered by offset."""
    order = registry.by_begin
    report = pd.DataFrame({
        'contig': [registry.contig(i).name for i in order],
        'offset': registry.offsets[order],
        'length': registry.lengths[order],
    })
    report['end'] = report['offset'] + report['length']
    overlapping = {n for pair in registry.overlaps() for n in pair}
    report['overlaps'] = report['contig'].isin(overlapping)
    return report


def run_contigs(args):
    opts = ContigsOptions(args)
    console = _start(opts)
    genome = opts.genome()
    report = contig_report(genome.registry)
    span = genome.registry.span()
    if span is not None:
        console.item('Span', '{}-{}'.format(*span))
    report.to_csv(opts.outfile or sys.stdout, sep='\t', index=False)
