# This file is part of Ligase.
#
# Licensed under MIT License.

"""The flattened genome: a contig registry together with the translator and
sample index that read from it.

Everything here is built once from loader metadata and is read-only
afterwards. The translator and the sample index live and die with the
:class:`FlattenedGenome` that owns them.
"""

import logging as lg

from .contigs import ContigRegistry
from .samples import SampleIndex
from .translator import CoordinateTranslator


class FlattenedGenome:
    def __init__(self, contigs=(), samples=(), on_overlap='warn'):
        self.registry = ContigRegistry(contigs, on_overlap=on_overlap)
        self.translator = CoordinateTranslator(self.registry)
        self.samples = SampleIndex(samples)
        lg.info(f'Flattened genome: {len(self.registry)} contigs, {len(self.samples)} samples')

    @classmethod
    def from_loader(cls, loader, on_overlap='warn'):
        """Build from a :class:`ligase.metadata.MetadataLoader`."""
        meta = loader.load()
        return cls(meta.contigs, meta.samples, on_overlap=on_overlap)

    def locate(self, column):
        return self.translator.locate(column)

    def next_contig_after(self, column):
        return self.translator.next_contig_after(column)

    def to_global(self, contig_name, position):
        return self.translator.to_global(contig_name, position)

    def get_sample_name(self, idx):
        return self.samples.get_name(idx)
