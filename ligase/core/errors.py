# This file is part of Ligase.
#
# Licensed under MIT License.

"""Exception hierarchy shared across Ligase.

A position that falls outside every contig is not an error: lookups return
``None`` for it. The exceptions below are reserved for broken invariants,
bad configuration and resources that cannot be opened.
"""


class LigaseError(Exception):
    """Base class for all errors raised by Ligase."""


class ContractViolation(LigaseError, AssertionError):
    """A caller or construction bug: registry invariants do not hold."""


class ConfigurationError(LigaseError, ValueError):
    """Configuration or metadata that cannot be used as given."""


class ResourceUnavailable(LigaseError, OSError):
    """An external resource (file, database, workspace) could not be opened."""
