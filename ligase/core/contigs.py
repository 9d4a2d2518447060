# This file is part of Ligase.
#
# Licensed under MIT License.

"""Contig registry: the canonical list of contigs laid out in the flattened
column space, plus two sorted index views over it.

The registry keeps contigs in the order they were supplied. The *by-begin*
view lists backing indices ordered by global offset, the *by-end* view lists
them ordered by the last column each contig occupies (``offset + length - 1``).
Both views are rebuilt from scratch on every :meth:`ContigRegistry.build` and
are read-only numpy arrays afterwards, so a built registry can be shared
between reader threads.
"""

import logging as lg
from collections import namedtuple

import numpy as np
from intervaltree import IntervalTree

from .errors import ConfigurationError, ContractViolation

OVERLAP_POLICIES = ('ignore', 'warn', 'error')


class Contig(namedtuple('Contig', ['name', 'offset', 'length'])):
    """A contig placed at ``offset`` in the flattened column space."""
    __slots__ = ()

    @property
    def end(self):
        """First column past the contig."""
        return self.offset + self.length

    @property
    def last(self):
        """Last column occupied by the contig (inclusive)."""
        return self.offset + self.length - 1


def _frozen(arr):
    arr.flags.writeable = False
    return arr


def _sort_order(keys):
    """Stable ordering of ``keys``; identity when already non-decreasing."""
    if keys.size < 2 or bool(np.all(keys[1:] >= keys[:-1])):
        return np.arange(keys.size, dtype=np.int64), False
    return np.argsort(keys, kind='stable').astype(np.int64), True


def _overlaps(contigs, by_begin):
    """Name pairs of contigs sharing a column, visited in ``by_begin`` order."""
    tree = IntervalTree()
    pairs = []
    for idx in by_begin:
        c = contigs[idx]
        if c.length <= 0:
            continue
        for iv in sorted(tree.overlap(c.offset, c.end)):
            pairs.append((contigs[iv.data].name, c.name))
        tree.addi(c.offset, c.end, int(idx))
    return pairs


class ContigRegistry:
    """Owns the contig records and the begin/end ordered views.

    Args:
        records: Optional iterable of :class:`Contig` or ``(name, offset,
            length)`` tuples. When given, the registry is built immediately.
        on_overlap: What to do when two contigs share columns: ``'ignore'``,
            ``'warn'`` (log a warning) or ``'error'`` (raise
            :class:`ConfigurationError`).
    """

    def __init__(self, records=None, on_overlap='warn'):
        if on_overlap not in OVERLAP_POLICIES:
            raise ConfigurationError(
                f'Unknown overlap policy "{on_overlap}". Expected one of {OVERLAP_POLICIES}'
            )
        self.on_overlap = on_overlap
        self._reset()
        if records is not None:
            self.build(records)

    def _reset(self):
        self._contigs = ()
        self._name_idx = {}
        empty = np.empty(0, dtype=np.int64)
        self._offsets = _frozen(empty.copy())
        self._lengths = _frozen(empty.copy())
        self._by_begin = _frozen(empty.copy())
        self._by_end = _frozen(empty.copy())
        self._sorted_begins = _frozen(empty.copy())
        self._sorted_ends = _frozen(empty.copy())

    # -- Construction --------------------------------------------------------

    def build(self, records):
        """(Re)build the registry from unordered contig records.

        Malformed records (non-positive lengths, duplicate offsets) are not
        rejected here. Overlapping contigs are handled according to
        :attr:`on_overlap`. If the overlap check raises, the registry keeps
        its previous layout.
        """
        contigs = tuple(Contig(str(n), int(o), int(l)) for n, o, l in records)

        offsets = np.fromiter((c.offset for c in contigs), dtype=np.int64, count=len(contigs))
        lengths = np.fromiter((c.length for c in contigs), dtype=np.int64, count=len(contigs))
        ends = offsets + lengths - 1

        by_begin, begin_sorted = _sort_order(offsets)
        by_end, end_sorted = _sort_order(ends)

        if self.on_overlap != 'ignore':
            self._check_overlaps(_overlaps(contigs, by_begin))

        name_idx = {}
        for i, c in enumerate(contigs):
            name_idx.setdefault(c.name, i)

        self._contigs = contigs
        self._name_idx = name_idx
        self._offsets = _frozen(offsets)
        self._lengths = _frozen(lengths)
        self._by_begin = _frozen(by_begin)
        self._by_end = _frozen(by_end)
        self._sorted_begins = _frozen(offsets[by_begin])
        self._sorted_ends = _frozen(ends[by_end])
        lg.debug(
            f'Built contig registry: {len(contigs)} contigs '
            f'(begin view sorted={begin_sorted}, end view sorted={end_sorted})'
        )
        return self

    def _check_overlaps(self, pairs):
        if not pairs:
            return
        shown = ', '.join(f'{a}/{b}' for a, b in pairs[:5])
        more = f' (+{len(pairs) - 5} more)' if len(pairs) > 5 else ''
        msg = f'{len(pairs)} overlapping contig pair(s): {shown}{more}'
        if self.on_overlap == 'error':
            raise ConfigurationError(msg)
        lg.warning(msg)

    # -- Read-only views -----------------------------------------------------

    def __len__(self):
        return len(self._contigs)

    def __iter__(self):
        return iter(self._contigs)

    def __repr__(self):
        return f'{type(self).__name__}({len(self)} contigs)'

    def contig(self, idx):
        """Contig at backing index ``idx`` (input order)."""
        if not 0 <= idx < len(self._contigs):
            raise ContractViolation(f'Contig index {idx} out of range [0, {len(self._contigs)})')
        return self._contigs[idx]

    def index_of(self, name):
        """Backing index of the first contig called ``name``, or None."""
        return self._name_idx.get(name)

    @property
    def contigs(self):
        return self._contigs

    @property
    def names(self):
        return [c.name for c in self._contigs]

    @property
    def offsets(self):
        """Offsets in backing order."""
        return self._offsets

    @property
    def lengths(self):
        """Lengths in backing order."""
        return self._lengths

    @property
    def by_begin(self):
        """Backing indices ordered by ascending offset."""
        return self._by_begin

    @property
    def by_end(self):
        """Backing indices ordered by ascending last column."""
        return self._by_end

    @property
    def sorted_begins(self):
        """Offsets in by-begin order."""
        return self._sorted_begins

    @property
    def sorted_ends(self):
        """Last columns in by-end order."""
        return self._sorted_ends

    def span(self):
        """``(first column, one past the last column)`` covered by any contig.

        Returns None for an empty registry.
        """
        if not self._contigs:
            return None
        return int(self._sorted_begins[0]), int(self._sorted_ends[-1]) + 1

    def overlaps(self):
        """List of ``(name_a, name_b)`` pairs of contigs sharing any column.

        ``name_a`` is the contig with the lower (or equal) offset.
        """
        return _overlaps(self._contigs, self._by_begin)
