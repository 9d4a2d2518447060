# This file is part of Ligase.
#
# Licensed under MIT License.

"""Contig and sample definitions from a sqlite mapping database.

Expected schema::

    CREATE TABLE contigs (name TEXT, column_offset INTEGER, length INTEGER);
    CREATE TABLE samples (sample_idx INTEGER, name TEXT);
"""

import logging as lg
import os
import sqlite3
from contextlib import closing

from ..core.errors import ConfigurationError, ResourceUnavailable
from .loader import Metadata, MetadataLoader

CONTIG_QUERY = 'SELECT name, column_offset, length FROM contigs ORDER BY rowid'
SAMPLE_QUERY = 'SELECT sample_idx, name FROM samples ORDER BY sample_idx'


class SqliteMetadataLoader(MetadataLoader):

    def __init__(self, path):
        self.path = path

    @property
    def source(self):
        return f'sqlite:{self.path}'

    def _connect(self):
        if not os.path.exists(self.path):
            raise ResourceUnavailable(f'Metadata database not found: {self.path}')
        try:
            return sqlite3.connect(f'file:{self.path}?mode=ro', uri=True)
        except sqlite3.Error as exc:
            raise ResourceUnavailable(f'Cannot open metadata database {self.path}: {exc}') from exc

    def load(self):
        with closing(self._connect()) as conn:
            try:
                contigs = [(str(n), int(o), int(l)) for n, o, l in conn.execute(CONTIG_QUERY)]
                sample_rows = list(conn.execute(SAMPLE_QUERY))
            except sqlite3.Error as exc:
                raise ResourceUnavailable(f'Cannot read metadata from {self.path}: {exc}') from exc

        samples = []
        for expected, (idx, name) in enumerate(sample_rows):
            if idx != expected:
                raise ConfigurationError(
                    f'Sample indices in {self.path} must run 0..{len(sample_rows) - 1}; '
                    f'found {idx} at position {expected}'
                )
            samples.append(str(name))

        lg.info(f'Loaded {len(contigs)} contigs and {len(samples)} samples from {self.path}')
        return Metadata(contigs=tuple(contigs), samples=tuple(samples))
