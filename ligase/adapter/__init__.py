# This file is part of Ligase.
#
# Licensed under MIT License.

"""Adapters between the flattened genome and file formats."""

from .reference import ReferenceGenome  # noqa: F401
from .vcf import VCFAdapter, resolve_output_format  # noqa: F401
