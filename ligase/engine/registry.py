# This file is part of Ligase.
#
# Licensed under MIT License.

"""Storage engine discovery.

Engines are registered as ``importlib.metadata`` entry points in the
``ligase.engines`` group, each pointing at a :class:`StorageManager`
subclass. The built-in ``npz`` engine is always available.
"""

import logging as lg
from importlib.metadata import entry_points

from ..core.errors import ConfigurationError
from .abc import StorageManager
from .npz import NpzStorageManager

ENTRY_POINT_GROUP = 'ligase.engines'
BUILTIN_ENGINES = {'npz': NpzStorageManager}


def available_engines():
    """Map of engine name to ``'builtin'`` or the entry point target."""
    engines = {name: 'builtin' for name in BUILTIN_ENGINES}
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        engines.setdefault(ep.name, ep.value)
    return engines


def get_engine_factory(name):
    """Return the StorageManager class registered as ``name``."""
    if name in BUILTIN_ENGINES:
        return BUILTIN_ENGINES[name]

    eps = {ep.name: ep for ep in entry_points(group=ENTRY_POINT_GROUP)}
    if name not in eps:
        raise ConfigurationError(
            f'Unknown storage engine "{name}". Available: {sorted(available_engines())}'
        )
    try:
        cls = eps[name].load()
    except Exception as exc:
        raise ConfigurationError(f'Failed to load storage engine "{name}": {exc}') from exc
    if not (isinstance(cls, type) and issubclass(cls, StorageManager)):
        raise ConfigurationError(f'"{name}" is not a StorageManager subclass')
    lg.info(f'Loaded storage engine: {name} ({eps[name].value})')
    return cls
