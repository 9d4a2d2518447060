# This file is part of Ligase.
#
# Licensed under MIT License.

"""Built-in storage engine keeping each array as a numpy ``.npz`` file.

A workspace is a directory; array ``name`` lives in ``<workspace>/name.npz``
with one entry per cell: ``row``, ``begin``, ``end`` (int64) and ``ref``,
``alt``, ``genotype`` (unicode). Cells are kept sorted by begin column, then
row, so column ranges are found by binary search.
"""

import logging as lg
import os

import numpy as np

from ..core.errors import ResourceUnavailable
from .abc import QueryProcessor, StorageManager
from .types import Call, Variant

SUFFIX = '.npz'
INT_FIELDS = ('row', 'begin', 'end')
STR_FIELDS = ('ref', 'alt', 'genotype')


def _sorted_cells(cells):
    data = {
        f: np.array([getattr(c, f) for c in cells], dtype=np.int64) for f in INT_FIELDS
    }
    data.update({
        f: np.array([getattr(c, f) for c in cells], dtype=str) for f in STR_FIELDS
    })
    order = np.lexsort((data['row'], data['begin']))
    return {k: v[order] for k, v in data.items()}


class NpzQueryProcessor(QueryProcessor):

    def __init__(self, path):
        self.path = path
        try:
            with np.load(path, allow_pickle=False) as npz:
                self._cells = {f: npz[f] for f in INT_FIELDS + STR_FIELDS}
        except (OSError, KeyError, ValueError) as exc:
            raise ResourceUnavailable(f'Cannot open array {path}: {exc}') from exc
        lg.debug(f'Loaded {self.num_cells} cells from {path}')

    @property
    def num_cells(self):
        return int(self._cells['row'].size)

    def _calls(self, mask):
        c = self._cells
        return [
            Call(int(r), int(b), int(e), str(ref), str(alt), str(gt))
            for r, b, e, ref, alt, gt in zip(
                c['row'][mask], c['begin'][mask], c['end'][mask],
                c['ref'][mask], c['alt'][mask], c['genotype'][mask],
            )
        ]

    def _row_mask(self, rows):
        if rows is None:
            return np.ones(self.num_cells, dtype=bool)
        return np.isin(self._cells['row'], np.asarray(rows, dtype=np.int64))

    def query_column(self, interval_index, variant, config):
        column, _ = config.interval(interval_index)
        c = self._cells
        mask = (c['begin'] <= column) & (c['end'] >= column) & self._row_mask(config.rows)
        variant.clear()
        variant.column = column
        variant.end = column
        variant.calls = sorted(self._calls(mask), key=lambda call: call.row)

    def query_column_range(self, interval_index, variants, config, paging_info=None):
        begin, end = config.interval(interval_index)
        if paging_info is not None:
            if paging_info.is_done:
                return
            begin = max(begin, paging_info.last_column + 1)

        begins = self._cells['begin']
        lo = int(np.searchsorted(begins, begin, side='left'))
        hi = int(np.searchsorted(begins, end, side='right'))
        row_mask = self._row_mask(config.rows)

        columns = np.unique(begins[lo:hi][row_mask[lo:hi]])
        limit = paging_info.page_size if paging_info is not None else 0
        if limit > 0:
            emitted = columns[:limit]
        else:
            emitted = columns

        for column in emitted.tolist():
            mask = np.zeros(self.num_cells, dtype=bool)
            mask[lo:hi] = (begins[lo:hi] == column) & row_mask[lo:hi]
            calls = self._calls(mask)
            variants.append(Variant(
                column=column,
                end=max(call.end for call in calls),
                calls=calls,
            ))

        if paging_info is not None:
            if emitted.size:
                paging_info.last_column = int(emitted[-1])
            paging_info.is_done = emitted.size == columns.size


class NpzStorageManager(StorageManager):
    """Workspace directory of ``.npz`` arrays.

    Args:
        workspace: Directory path.
        create: Create the directory if it does not exist.
    """

    def __init__(self, workspace, create=False):
        super().__init__(workspace)
        if create:
            os.makedirs(workspace, exist_ok=True)
        if not os.path.isdir(workspace):
            raise ResourceUnavailable(f'Workspace not found: {workspace}')

    def array_path(self, array_name):
        return os.path.join(self.workspace, array_name + SUFFIX)

    def list_arrays(self):
        return sorted(
            f[:-len(SUFFIX)] for f in os.listdir(self.workspace) if f.endswith(SUFFIX)
        )

    def write_array(self, array_name, cells):
        """Write (or overwrite) ``array_name`` from an iterable of :class:`Call`."""
        cells = list(cells)
        path = self.array_path(array_name)
        try:
            with open(path, 'wb') as outh:
                np.savez(outh, **_sorted_cells(cells))
        except OSError as exc:
            raise ResourceUnavailable(f'Cannot write array {path}: {exc}') from exc
        lg.info(f'Wrote {len(cells)} cells to {path}')
        return path

    def query_processor(self, array_name):
        path = self.array_path(array_name)
        if not os.path.exists(path):
            raise ResourceUnavailable(f'Array "{array_name}" not found in workspace {self.workspace}')
        return NpzQueryProcessor(path)
