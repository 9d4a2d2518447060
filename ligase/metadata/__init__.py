# This file is part of Ligase.
#
# Licensed under MIT License.

"""Loaders that supply contig and sample definitions."""

from ..core.errors import ConfigurationError
from .loader import Metadata, MetadataLoader  # noqa: F401
from .sqlite import SqliteMetadataLoader  # noqa: F401
from .tsv import TsvMetadataLoader  # noqa: F401


def get_loader(spec):
    """Return a loader for a metadata spec mapping.

    ``spec`` is either ``{'sqlite': path}`` or ``{'contigs': path,
    'samples': path}`` (samples optional).
    """
    if 'sqlite' in spec:
        return SqliteMetadataLoader(spec['sqlite'])
    elif 'contigs' in spec:
        return TsvMetadataLoader(spec['contigs'], spec.get('samples'))
    else:
        raise ConfigurationError(
            f'Unknown metadata source {sorted(spec)}. Use "sqlite" or "contigs"/"samples".'
        )
