# This file is part of Ligase.
#
# Licensed under MIT License.

"""Flattened coordinate core: contig registry, translator and sample index."""

from .contigs import Contig, ContigRegistry  # noqa: F401
from .errors import ConfigurationError, ContractViolation, LigaseError, ResourceUnavailable  # noqa: F401
from .genome import FlattenedGenome  # noqa: F401
from .samples import SampleIndex  # noqa: F401
from .translator import (  # noqa: F401
    END_OF_GENOME,
    MAX_OFFSET,
    ContigBoundary,
    ContigLocation,
    CoordinateTranslator,
)
