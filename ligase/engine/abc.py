# This file is part of Ligase.
#
# Licensed under MIT License.

"""Abstract base classes for storage engines.

An engine provides a :class:`StorageManager` constructed from a workspace
path; the manager hands out one :class:`QueryProcessor` per array.
"""

from abc import ABC, abstractmethod


class QueryProcessor(ABC):
    """Answers column queries against a single array."""

    @abstractmethod
    def query_column(self, interval_index, variant, config) -> None:
        """Fill ``variant`` with the calls at the begin column of
        ``config.query_intervals[interval_index]``."""

    @abstractmethod
    def query_column_range(self, interval_index, variants, config, paging_info=None) -> None:
        """Append one Variant per column of the interval to ``variants``."""

    def close(self) -> None:
        """Release engine resources."""

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class StorageManager(ABC):
    """Handle on a workspace holding one or more arrays."""

    def __init__(self, workspace):
        self.workspace = workspace

    @abstractmethod
    def query_processor(self, array_name) -> QueryProcessor:
        """Open a query processor for ``array_name``."""

    def list_arrays(self) -> list:
        return []

    def close(self) -> None:
        """Release engine resources."""

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
