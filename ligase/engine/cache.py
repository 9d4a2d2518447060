# This file is part of Ligase.
#
# Licensed under MIT License.

"""Caller-owned cache of storage engine handles.

Engine handles are expensive to open, so the most recently used one is kept
per key family: one storage manager (keyed by workspace) and one query
processor (keyed by ``(workspace, array_name)``). Asking for a different key
closes the cached handle and opens a new one.

Not thread safe: calls that may replace a handle must be serialised by the
caller.
"""

import logging as lg


def _release(handle):
    close = getattr(handle, 'close', None)
    if close is not None:
        close()


class HandleSlot:
    """Holds at most one handle together with the key it was built for."""

    def __init__(self, factory, label='handle'):
        self._factory = factory
        self.label = label
        self._key = None
        self._handle = None

    @property
    def key(self):
        return self._key

    @property
    def handle(self):
        return self._handle

    def get_or_create(self, key):
        """Return the cached handle for ``key``, replacing any other one."""
        if self._handle is not None and self._key == key:
            return self._handle
        self.invalidate()
        lg.debug(f'Opening {self.label} for {key!r}')
        self._handle = self._factory(key)
        self._key = key
        return self._handle

    def invalidate(self, key=None):
        """Release the cached handle.

        When ``key`` is given, only a handle cached under that key is
        released. Returns True if a handle was released.
        """
        if self._handle is None:
            return False
        if key is not None and key != self._key:
            return False
        handle, old_key = self._handle, self._key
        self._handle = None
        self._key = None
        lg.debug(f'Releasing {self.label} for {old_key!r}')
        _release(handle)
        return True


class EngineCache:
    """Storage manager and query processor slots for one storage engine.

    Args:
        storage_factory: Callable ``factory(workspace)`` returning a
            :class:`ligase.engine.abc.StorageManager`.
    """

    def __init__(self, storage_factory):
        self._storage = HandleSlot(storage_factory, 'storage manager')
        self._query = HandleSlot(self._open_query_processor, 'query processor')

    def _open_query_processor(self, key):
        workspace, array_name = key
        return self.storage_manager(workspace).query_processor(array_name)

    def storage_manager(self, workspace, reset=False):
        """Storage manager for ``workspace``; ``reset`` forces a new one."""
        if reset or (self._storage.handle is not None and self._storage.key != workspace):
            # query processors belong to the manager that opened them
            self._query.invalidate()
            self._storage.invalidate()
        return self._storage.get_or_create(workspace)

    def query_processor(self, workspace, array_name, reset=False):
        """Query processor for ``array_name`` in ``workspace``."""
        if reset:
            self._query.invalidate()
        return self._query.get_or_create((workspace, array_name))

    def invalidate(self, workspace, array_name=None):
        """Drop cached handles for ``workspace`` (or just one of its arrays)."""
        if array_name is not None:
            return self._query.invalidate((workspace, array_name))
        if self._storage.key != workspace:
            return False
        self._query.invalidate()
        return self._storage.invalidate(workspace)

    def cleanup(self):
        """Release every cached handle. Safe to call repeatedly."""
        self._query.invalidate()
        self._storage.invalidate()

    @property
    def cached_keys(self):
        return {'storage': self._storage.key, 'query': self._query.key}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.cleanup()
