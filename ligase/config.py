# This file is part of Ligase.
#
# Licensed under MIT License.

"""Run configuration read from YAML.

Example::

    workspace: ws
    array: variants
    engine: npz
    metadata:
      sqlite: mappings.sqlite
    reference: hg38.fa
    vcf_header: template.vcf
    output: out.vcf.gz
    output_format: z
    on_overlap: warn

Relative paths are resolved against the directory holding the YAML file.
"""

import logging as lg
import os
from dataclasses import dataclass, field, fields

import yaml

from .core.contigs import OVERLAP_POLICIES
from .core.errors import ConfigurationError, ResourceUnavailable

PATH_KEYS = ('workspace', 'reference', 'vcf_header', 'output')
METADATA_PATH_KEYS = ('sqlite', 'contigs', 'samples')


@dataclass
class LigaseConfig:
    workspace: str = None
    array: str = None
    engine: str = 'npz'
    metadata: dict = field(default_factory=dict)
    reference: str = None
    vcf_header: str = None
    output: str = '-'
    output_format: str = 'z'
    on_overlap: str = 'warn'

    def __post_init__(self):
        if self.on_overlap not in OVERLAP_POLICIES:
            raise ConfigurationError(
                f'on_overlap must be one of {OVERLAP_POLICIES}, got "{self.on_overlap}"'
            )
        if not isinstance(self.metadata, dict):
            raise ConfigurationError('metadata must be a mapping')

    @classmethod
    def from_dict(cls, d, basedir=None):
        d = dict(d or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigurationError(f'Unknown configuration key(s): {", ".join(unknown)}')

        if basedir:
            for key in PATH_KEYS:
                if d.get(key) and d[key] != '-':
                    d[key] = os.path.join(basedir, d[key])
            meta = dict(d.get('metadata') or {})
            for key in METADATA_PATH_KEYS:
                if meta.get(key):
                    meta[key] = os.path.join(basedir, meta[key])
            d['metadata'] = meta
        return cls(**d)

    @classmethod
    def from_yaml(cls, path):
        try:
            with open(path) as fh:
                d = yaml.load(fh, Loader=yaml.SafeLoader)
        except OSError as exc:
            raise ResourceUnavailable(f'Cannot open configuration {path}: {exc}') from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(f'Invalid YAML in {path}: {exc}') from exc
        if d is not None and not isinstance(d, dict):
            raise ConfigurationError(f'{path}: expected a mapping at top level')
        lg.debug(f'Read configuration from {path}')
        return cls.from_dict(d, basedir=os.path.dirname(os.path.abspath(path)))

    def require(self, *names):
        missing = [n for n in names if not getattr(self, n)]
        if missing:
            raise ConfigurationError(f'Missing required configuration: {", ".join(missing)}')

    def load_genome(self):
        """Build the :class:`FlattenedGenome` described by ``metadata``."""
        from .core.genome import FlattenedGenome
        from .metadata import get_loader

        self.require('metadata')
        return FlattenedGenome.from_loader(get_loader(self.metadata), on_overlap=self.on_overlap)
