# This file is part of Ligase.
#
# Licensed under MIT License.

"""Row index to sample name lookup."""

from .errors import ContractViolation


class SampleIndex:
    """Immutable sample table; row ``i`` of the array belongs to sample ``i``."""

    def __init__(self, names=()):
        self._names = tuple(str(n) for n in names)
        self._idx = {}
        for i, name in enumerate(self._names):
            self._idx.setdefault(name, i)

    def __len__(self):
        return len(self._names)

    def __iter__(self):
        return iter(self._names)

    def __repr__(self):
        return f'{type(self).__name__}({len(self)} samples)'

    def get_name(self, idx):
        """Name of sample ``idx``.

        Callers are expected to check ``idx`` against ``len(self)`` first; an
        out-of-range index is a programming error, not a missed lookup.
        """
        if not 0 <= idx < len(self._names):
            raise ContractViolation(f'Sample index {idx} out of range [0, {len(self._names)})')
        return self._names[idx]

    def index_of(self, name):
        return self._idx.get(name)

    @property
    def names(self):
        return self._names
