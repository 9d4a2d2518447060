# This file is part of Ligase.
#
# Licensed under MIT License.

"""Reference genome base lookup backed by an indexed FASTA file."""

import logging as lg

import pysam

from ..core.errors import ResourceUnavailable


class ReferenceGenome:
    """Single-base lookups in contig-local, 0-based coordinates.

    Positions outside a contig (or on an unknown contig) yield ``'N'``.
    """

    def __init__(self, fasta_path):
        self.path = fasta_path
        try:
            self._fasta = pysam.FastaFile(fasta_path)
        except (OSError, ValueError) as exc:
            raise ResourceUnavailable(f'Cannot open reference {fasta_path}: {exc}') from exc
        self._lengths = dict(zip(self._fasta.references, self._fasta.lengths))
        lg.debug(f'Opened reference {fasta_path} ({len(self._lengths)} sequences)')

    @property
    def references(self):
        return list(self._lengths)

    def get_base(self, contig, position):
        length = self._lengths.get(contig)
        if length is None or not 0 <= position < length:
            return 'N'
        return self._fasta.fetch(contig, position, position + 1).upper()

    def close(self):
        self._fasta.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
