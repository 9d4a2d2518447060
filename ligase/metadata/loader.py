# This file is part of Ligase.
#
# Licensed under MIT License.

"""Abstract base class for metadata loaders."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Metadata:
    """Contig and sample definitions as read from a metadata store.

    ``contigs`` holds ``(name, offset, length)`` tuples in store order;
    ``samples`` holds names, position ``i`` being sample ``i``.
    """
    contigs: tuple = field(default_factory=tuple)
    samples: tuple = field(default_factory=tuple)


class MetadataLoader(ABC):

    @property
    @abstractmethod
    def source(self) -> str:
        """Human readable description of where metadata comes from."""

    @abstractmethod
    def load(self) -> Metadata:
        """Read all contig and sample definitions."""
