# This file is part of Ligase.
#
# Licensed under MIT License.

"""Translation between flattened columns and contig-local positions.

All lookups are binary searches over the registry's by-begin view and never
modify shared state, so one translator can serve many reader threads.
"""

from collections import namedtuple

import numpy as np

from .errors import ContractViolation

# Largest representable column; used as the "no further contig" offset
MAX_OFFSET = int(np.iinfo(np.int64).max)

ContigLocation = namedtuple('ContigLocation', ['contig', 'position'])
ContigBoundary = namedtuple('ContigBoundary', ['name', 'offset'])

END_OF_GENOME = ContigBoundary('', MAX_OFFSET)


class CoordinateTranslator:
    """Read-only coordinate queries over a built :class:`ContigRegistry`."""

    def __init__(self, registry):
        self.registry = registry

    def _candidate(self, column):
        """Backing index of the contig that may contain ``column``."""
        begins = self.registry.sorted_begins
        by_begin = self.registry.by_begin
        i = int(np.searchsorted(begins, column, side='left'))
        if i == begins.size:
            return int(by_begin[-1])
        if begins[i] == column:
            return int(by_begin[i])
        if i == 0:
            raise ContractViolation(
                f'Column {column} precedes the first contig offset {int(begins[0])}'
            )
        return int(by_begin[i - 1])

    def locate(self, column):
        """Find the contig holding ``column``.

        Args:
            column (int): Position in the flattened column space.

        Returns:
            ContigLocation ``(contig, position)`` with a 0-based local
            position, or None when ``column`` falls in a gap or past the end
            of the last contig.

        Raises:
            ContractViolation: ``column`` lies before the lowest contig offset.
        """
        if len(self.registry) == 0:
            return None
        column = int(column)
        contig = self.registry.contig(self._candidate(column))
        if contig.offset <= column < contig.offset + contig.length:
            return ContigLocation(contig.name, column - contig.offset)
        return None

    def locate_many(self, columns):
        """Vectorised :meth:`locate`; returns a list parallel to ``columns``."""
        columns = np.asarray(columns, dtype=np.int64).ravel()
        n = len(self.registry)
        if n == 0:
            return [None] * columns.size

        begins = self.registry.sorted_begins
        i = np.searchsorted(begins, columns, side='left')
        at_end = i == n
        exact = ~at_end & (begins[np.minimum(i, n - 1)] == columns)
        step_back = ~at_end & ~exact
        if np.any(step_back & (i == 0)):
            bad = int(columns[step_back & (i == 0)][0])
            raise ContractViolation(
                f'Column {bad} precedes the first contig offset {int(begins[0])}'
            )

        slot = np.where(at_end, n - 1, np.where(exact, i, i - 1))
        idx = self.registry.by_begin[slot]
        offsets = self.registry.offsets[idx]
        inside = (columns >= offsets) & (columns < offsets + self.registry.lengths[idx])
        local = columns - offsets

        contigs = self.registry.contigs
        return [
            ContigLocation(contigs[k].name, int(p)) if ok else None
            for k, p, ok in zip(idx.tolist(), local.tolist(), inside.tolist())
        ]

    def next_contig_after(self, column):
        """First contig boundary strictly after ``column``.

        Returns:
            ContigBoundary ``(name, offset)`` with ``offset > column``, or
            :data:`END_OF_GENOME` (``('', MAX_OFFSET)``) when no contig starts
            after ``column``.
        """
        begins = self.registry.sorted_begins
        i = int(np.searchsorted(begins, int(column), side='right'))
        if i == begins.size:
            return END_OF_GENOME
        contig = self.registry.contig(int(self.registry.by_begin[i]))
        return ContigBoundary(contig.name, contig.offset)

    def to_global(self, contig_name, position):
        """Flattened column of ``position`` on ``contig_name``, or None."""
        idx = self.registry.index_of(contig_name)
        if idx is None:
            return None
        contig = self.registry.contig(idx)
        if not 0 <= position < contig.length:
            return None
        return contig.offset + int(position)
