# This file is part of Ligase.
#
# Licensed under MIT License.

"""Thin query facade over a cached storage engine."""

from .cache import EngineCache
from .registry import get_engine_factory


class VariantDB:
    """Runs column queries against ``workspace``/``array_name`` pairs.

    Handles are opened lazily and kept in an :class:`EngineCache` owned by
    this object. Call :meth:`cleanup` (or use as a context manager) to
    release them.
    """

    def __init__(self, engine='npz', cache=None):
        self.cache = cache if cache is not None else EngineCache(get_engine_factory(engine))

    def query_column(self, workspace, array_name, interval_index, variant, config):
        """Fill ``variant`` with the calls at one query interval's begin column."""
        qp = self.cache.query_processor(workspace, array_name)
        qp.query_column(interval_index, variant, config)
        return variant

    def query_column_range(self, workspace, array_name, interval_index, variants, config,
                           paging_info=None):
        """Append the variants of one query interval to ``variants``.

        Pass the same ``paging_info`` back in to fetch the next page.
        """
        qp = self.cache.query_processor(workspace, array_name)
        qp.query_column_range(interval_index, variants, config, paging_info)
        return variants

    def cleanup(self):
        self.cache.cleanup()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.cleanup()
