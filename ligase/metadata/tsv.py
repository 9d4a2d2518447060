# This file is part of Ligase.
#
# Licensed under MIT License.

"""Contig and sample definitions from plain text files.

The contig file is tab separated, one contig per line: ``name offset
length``. The sample file has one sample name per line, in row order.
Lines starting with ``#`` and blank lines are ignored in both.
"""

import logging as lg
from collections import namedtuple

from ..core.errors import ConfigurationError, ResourceUnavailable
from .loader import Metadata, MetadataLoader

ContigRow = namedtuple('ContigRow', ['name', 'offset', 'length'])


def _open(path):
    try:
        return open(path)  # noqa: SIM115
    except OSError as exc:
        raise ResourceUnavailable(f'Cannot open {path}: {exc}') from exc


class TsvMetadataLoader(MetadataLoader):

    def __init__(self, contig_file, sample_file=None):
        self.contig_file = contig_file
        self.sample_file = sample_file

    @property
    def source(self):
        if self.sample_file:
            return f'{self.contig_file},{self.sample_file}'
        return self.contig_file

    def read_contigs(self):
        contigs = []
        with _open(self.contig_file) as fh:
            for rownum, line in enumerate(fh, 1):
                if line.startswith('#') or not line.strip():
                    continue
                fields = line.rstrip('\n').split('\t')
                if len(fields) < 3:
                    raise ConfigurationError(
                        f'{self.contig_file}:{rownum}: expected name, offset and length'
                    )
                try:
                    row = ContigRow(fields[0], int(fields[1]), int(fields[2]))
                except ValueError as exc:
                    raise ConfigurationError(f'{self.contig_file}:{rownum}: {exc}') from exc
                contigs.append(tuple(row))
        return contigs

    def read_samples(self):
        if self.sample_file is None:
            return []
        with _open(self.sample_file) as fh:
            return [line.strip() for line in fh if line.strip() and not line.startswith('#')]

    def load(self):
        contigs = self.read_contigs()
        samples = self.read_samples()
        lg.info(f'Loaded {len(contigs)} contigs and {len(samples)} samples from {self.source}')
        return Metadata(contigs=tuple(contigs), samples=tuple(samples))
