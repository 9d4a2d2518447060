# This file is part of Ligase.
#
# Licensed under MIT License.

"""Tests for ligase.core.samples and the FlattenedGenome that owns it."""

import pytest

from ligase.core.errors import ContractViolation
from ligase.core.genome import FlattenedGenome
from ligase.core.samples import SampleIndex
from ligase.metadata import Metadata, MetadataLoader


class TestSampleIndex:
    def test_get_name(self):
        idx = SampleIndex(['NA12878', 'NA12891', 'NA12892'])
        assert len(idx) == 3
        assert idx.get_name(0) == 'NA12878'
        assert idx.get_name(2) == 'NA12892'

    @pytest.mark.parametrize('bad', [3, 100, -1])
    def test_out_of_range_is_contract_violation(self, bad):
        idx = SampleIndex(['a', 'b', 'c'])
        with pytest.raises(ContractViolation):
            idx.get_name(bad)

    def test_contract_violation_is_assertion(self):
        with pytest.raises(AssertionError):
            SampleIndex([]).get_name(0)

    def test_index_of(self):
        idx = SampleIndex(['a', 'b'])
        assert idx.index_of('b') == 1
        assert idx.index_of('z') is None

    def test_immutable_names(self):
        names = ['a', 'b']
        idx = SampleIndex(names)
        names.append('c')
        assert len(idx) == 2
        assert isinstance(idx.names, tuple)


class _StaticLoader(MetadataLoader):
    source = 'static'

    def load(self):
        return Metadata(
            contigs=(('chr2', 100, 50), ('chr1', 0, 100)),
            samples=('s0', 's1'),
        )


class TestFlattenedGenome:
    def test_from_loader(self):
        genome = FlattenedGenome.from_loader(_StaticLoader())
        assert len(genome.registry) == 2
        assert genome.locate(120) == ('chr2', 20)
        assert genome.next_contig_after(0) == ('chr2', 100)
        assert genome.to_global('chr1', 5) == 5
        assert genome.get_sample_name(1) == 's1'

    def test_components_share_registry(self):
        genome = FlattenedGenome([('chr1', 0, 10)], ['s0'])
        assert genome.translator.registry is genome.registry
