# This file is part of Ligase.
#
# Licensed under MIT License.

"""Tests for ligase.adapter — reference lookups and VCF output."""

import logging

import pysam
import pytest

from ligase.adapter.reference import ReferenceGenome
from ligase.adapter.vcf import VCFAdapter, parse_genotype, resolve_output_format
from ligase.core.errors import ConfigurationError, ResourceUnavailable
from ligase.core.genome import FlattenedGenome
from ligase.engine import Call, Variant

HEADER = (
    '##fileformat=VCFv4.2\n'
    '#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n'
)


@pytest.fixture
def genome():
    return FlattenedGenome([('chr1', 0, 12), ('chr2', 100, 8)], ['s0', 's1'])


@pytest.fixture
def fasta(tmp_path):
    path = tmp_path / 'ref.fa'
    path.write_text('>chr1\nACGTACGTACGT\n>chr2\nttggccaa\n')
    pysam.faidx(str(path))
    return str(path)


@pytest.fixture
def header(tmp_path):
    path = tmp_path / 'template.vcf'
    path.write_text(HEADER)
    return str(path)


class TestOutputFormat:
    @pytest.mark.parametrize('fmt,is_bcf', [('b', True), ('bu', True), ('z', False), ('', False)])
    def test_valid(self, fmt, is_bcf):
        assert resolve_output_format(fmt) == (fmt, is_bcf)

    def test_fallback_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolve_output_format('vcf.gz') == ('z', False)
        assert 'Invalid BCF/VCF output format' in caplog.text


class TestParseGenotype:
    def test_unphased(self):
        assert parse_genotype('0/1', ['T'], ['A', 'T']) == ((0, 1), False)

    def test_phased(self):
        assert parse_genotype('1|1', ['T'], ['A', 'T']) == ((1, 1), True)

    def test_missing(self):
        assert parse_genotype('./.', ['T'], ['A', 'T']) == ((None, None), False)
        assert parse_genotype('', [''], ['A']) == ((None,), False)

    def test_remaps_alt_index(self):
        # call's own first ALT is the second ALT of the merged record
        assert parse_genotype('0/1', ['G'], ['A', 'T', 'G']) == ((0, 2), False)

    def test_alt_not_on_call_is_missing(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_genotype('0/1', [''], ['A']) == ((0, None), False)
            assert parse_genotype('1/2', ['T'], ['A', 'T']) == ((1, None), False)
        assert 'writing missing' in caplog.text


class TestReferenceGenome:
    def test_get_base(self, fasta):
        with ReferenceGenome(fasta) as ref:
            assert ref.get_base('chr1', 0) == 'A'
            assert ref.get_base('chr1', 2) == 'G'
            assert ref.get_base('chr2', 1) == 'T'
            assert set(ref.references) == {'chr1', 'chr2'}

    def test_out_of_range_is_n(self, fasta):
        with ReferenceGenome(fasta) as ref:
            assert ref.get_base('chr1', 12) == 'N'
            assert ref.get_base('chr1', -1) == 'N'
            assert ref.get_base('chrZ', 0) == 'N'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceUnavailable):
            ReferenceGenome(str(tmp_path / 'missing.fa'))


class TestVCFAdapter:
    def test_lookups(self, genome, header, tmp_path, fasta):
        with VCFAdapter(genome, header, str(tmp_path / 'out.vcf'), '', reference=fasta) as adapter:
            assert adapter.get_contig_location(103) == ('chr2', 3)
            assert adapter.get_contig_location(50) is None
            assert adapter.get_next_contig_location(5) == ('chr2', 100)
            assert adapter.get_sample_name(1) == 's1'
            assert adapter.get_reference_base('chr2', 3) == 'G'

    def test_no_reference(self, genome, header, tmp_path):
        with VCFAdapter(genome, header, str(tmp_path / 'out.vcf'), '') as adapter:
            with pytest.raises(ConfigurationError):
                adapter.get_reference_base('chr1', 0)

    def test_write_vcf(self, genome, header, tmp_path, fasta):
        out = str(tmp_path / 'out.vcf')
        with VCFAdapter(genome, header, out, '', reference=fasta) as adapter:
            assert not adapter.is_bcf
            written = adapter.write_variant(Variant(column=104, end=104, calls=[
                Call(0, 104, 104, 'C', 'T', '0/1'),
                Call(1, 104, 104, 'C', 'T', '1|1'),
            ]))
            assert written
            # no REF on the calls: taken from the reference
            adapter.write_variant(Variant(column=2, end=2, calls=[Call(1, 2, 2, '', 'A', '0/1')]))
            assert adapter.num_written == 2

        with pysam.VariantFile(out) as vf:
            assert list(vf.header.samples) == ['s0', 's1']
            recs = list(vf)
        assert [(r.chrom, r.pos, r.ref, r.alts) for r in recs] == [
            ('chr2', 5, 'C', ('T',)),
            ('chr1', 3, 'G', ('A',)),
        ]
        assert recs[0].samples['s0']['GT'] == (0, 1)
        assert recs[0].samples['s1']['GT'] == (1, 1)
        assert recs[0].samples['s1'].phased

    def test_write_bcf(self, genome, header, tmp_path):
        out = str(tmp_path / 'out.bcf')
        with VCFAdapter(genome, header, out, 'b') as adapter:
            assert adapter.is_bcf
            adapter.write_variant(Variant(column=0, calls=[Call(0, 0, 0, 'A', 'C', '0/1')]))
        with pysam.VariantFile(out) as vf:
            assert [(r.chrom, r.pos) for r in vf] == [('chr1', 1)]

    def test_skips_unmapped_column(self, genome, header, tmp_path):
        with VCFAdapter(genome, header, str(tmp_path / 'out.vcf'), '') as adapter:
            assert adapter.write_variant(Variant(column=50, calls=[Call(0, 50, 50, 'A', 'C', '0/1')])) is False
            assert adapter.num_written == 0

    def test_unwritable_output(self, genome, header, tmp_path):
        with pytest.raises(ResourceUnavailable):
            VCFAdapter(genome, header, str(tmp_path / 'no' / 'such' / 'dir.vcf'), '')

    def test_missing_header(self, genome, tmp_path):
        with pytest.raises(ResourceUnavailable):
            VCFAdapter(genome, str(tmp_path / 'missing.vcf'), str(tmp_path / 'out.vcf'), '')

    def test_write_genotype_without_alt(self, genome, header, tmp_path):
        out = str(tmp_path / 'out.vcf')
        with VCFAdapter(genome, header, out, '') as adapter:
            assert adapter.write_variant(Variant(column=0, calls=[
                Call(0, 0, 0, 'A', 'C', '0/1'),
                Call(1, 0, 0, 'A', '', '0/1'),
            ]))
        with pysam.VariantFile(out) as vf:
            rec = next(iter(vf))
        assert rec.samples['s1']['GT'] == (0, None)

    def test_reference_opened_after_header_and_output(self, genome, header, tmp_path, fasta,
                                                        monkeypatch):
        opened = []
        monkeypatch.setattr('ligase.adapter.vcf.ReferenceGenome', lambda path: opened.append(path))
        with pytest.raises(ResourceUnavailable):
            VCFAdapter(genome, str(tmp_path / 'missing.vcf'), str(tmp_path / 'out.vcf'), '',
                       reference=fasta)
        with pytest.raises(ResourceUnavailable):
            VCFAdapter(genome, header, str(tmp_path / 'no' / 'dir.vcf'), '',
                       reference=fasta)
        assert opened == []

    def test_missing_reference(self, genome, header, tmp_path):
        with pytest.raises(ResourceUnavailable):
            VCFAdapter(genome, header, str(tmp_path / 'out.vcf'), '',
                       reference=str(tmp_path / 'missing.fa'))
