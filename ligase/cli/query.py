# -*- coding: utf-8 -*-

# This file is part of Ligase.
#
# Licensed under MIT License.

""" Ligase query

"""
import logging as lg
import re

from ligase import __version__

from ..adapter.vcf import VCFAdapter
from ..core.errors import ConfigurationError
from ..engine import PagingInfo, VariantDB, VariantQueryConfig
from . import METADATA_OPTS, REPORTING_OPTS, SubcommandOptions, configure_logging, load_config

_REGION_RE = re.compile(r'^(?P<contig>[^:]+)(:(?P<start>[\d,]+)(-(?P<end>[\d,]+))?)?$')


class QueryOptions(SubcommandOptions):
    OPTS = """
    - Input Options:
        - regions:
            positional: True
            nargs: "*"
            help: Regions to query as contig[:start[-end]] (1-based, inclusive).
                  Default queries every column covered by a contig.
        - rows:
            nargs: "+"
            type: int
            help: Restrict results to these sample rows.
        - page_size:
            type: int
            default: 0
            help: Fetch at most this many variants per engine call (0 = no limit).
    - Output Options:
        - format:
            default: tsv
            choices:
                - tsv
                - vcf
            help: Output tab separated calls, or VCF/BCF using vcf_header,
                  output and output_format from the configuration.
    """ + METADATA_OPTS + REPORTING_OPTS


def region_to_columns(genome, region):
    """Inclusive ``(begin, end)`` columns for a ``contig[:start[-end]]`` region."""
    m = _REGION_RE.match(region)
    if m is None:
        raise ConfigurationError(f'Cannot parse region "{region}"')
    idx = genome.registry.index_of(m.group('contig'))
    if idx is None:
        raise ConfigurationError(f'Unknown contig in region "{region}"')
    contig = genome.registry.contig(idx)

    start = int(m.group('start').replace(',', '')) - 1 if m.group('start') else 0
    end = int(m.group('end').replace(',', '')) - 1 if m.group('end') else contig.length - 1
    if m.group('start') and not m.group('end'):
        end = start
    end = min(end, contig.length - 1)
    if not 0 <= start <= end:
        raise ConfigurationError(f'Empty or invalid region "{region}"')
    return genome.to_global(contig.name, start), genome.to_global(contig.name, end)


def query_intervals(genome, regions):
    if regions:
        return [region_to_columns(genome, r) for r in regions]
    span = genome.registry.span()
    return [] if span is None else [(span[0], span[1] - 1)]


def run(args):
    opts = QueryOptions(args)
    console = configure_logging(opts)
    console.banner(__version__)
    lg.info('\n{}\n'.format(opts))

    cfg = load_config(opts)
    cfg.require('workspace', 'array')
    genome = cfg.load_genome()
    qconfig = VariantQueryConfig(query_intervals=query_intervals(genome, opts.regions), rows=opts.rows)

    writer = None
    if opts.format == 'vcf':
        cfg.require('vcf_header')
        writer = VCFAdapter(genome, cfg.vcf_header, cfg.output, cfg.output_format, cfg.reference)

    num_variants = 0
    try:
        with VariantDB(cfg.engine) as db:
            for i in range(len(qconfig.query_intervals)):
                paging = PagingInfo(page_size=opts.page_size)
                while not paging.is_done:
                    variants = []
                    db.query_column_range(cfg.workspace, cfg.array, i, variants, qconfig, paging)
                    for variant in variants:
                        num_variants += 1
                        if writer is not None:
                            writer.write_variant(variant)
                        else:
                            _print_variant(console, genome, variant)
    finally:
        if writer is not None:
            writer.close()
    console.item('Variants', num_variants)
    lg.info(f'Queried {len(qconfig.query_intervals)} interval(s), {num_variants} variant(s)')


def _print_variant(console, genome, variant):
    loc = genome.locate(variant.column)
    if loc is None:
        lg.warning(f'Column {variant.column} is not inside any contig, skipping')
        return
    for call in variant.calls:
        console.row(
            loc.contig, loc.position, genome.get_sample_name(call.row),
            call.ref or '.', call.alt or '.', call.genotype or '.',
        )
