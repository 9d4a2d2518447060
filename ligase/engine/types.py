# This file is part of Ligase.
#
# Licensed under MIT License.

"""Plain containers passed across the storage engine boundary."""

from dataclasses import dataclass, field

from ..core.errors import ContractViolation


@dataclass
class Call:
    """One cell of a variant array: a sample row spanning columns [begin, end]."""
    row: int
    begin: int
    end: int
    ref: str = ''
    alt: str = ''
    genotype: str = ''


@dataclass
class Variant:
    """Calls sharing a column. Filled in place by query processors."""
    column: int = -1
    end: int = -1
    calls: list = field(default_factory=list)

    def clear(self):
        self.column = -1
        self.end = -1
        self.calls = []

    @property
    def is_empty(self):
        return not self.calls


@dataclass
class VariantQueryConfig:
    """Which columns and rows a query touches.

    ``query_intervals`` is a list of inclusive ``(begin, end)`` column pairs;
    queries refer to them by position. ``rows`` restricts results to the
    given sample rows (None for all).
    """
    query_intervals: list = field(default_factory=list)
    rows: list = None

    def interval(self, idx):
        if not 0 <= idx < len(self.query_intervals):
            raise ContractViolation(
                f'Query interval {idx} out of range [0, {len(self.query_intervals)})'
            )
        begin, end = self.query_intervals[idx]
        return int(begin), int(end)


@dataclass
class PagingInfo:
    """Resumable state for ranged queries. ``page_size == 0`` means no limit."""
    page_size: int = 0
    last_column: int = -1
    is_done: bool = False

    def reset(self):
        self.last_column = -1
        self.is_done = False
