# This file is part of Ligase.
#
# Licensed under MIT License.

"""VCF/BCF output for variants read from a flattened column array.

The adapter owns the flattened genome used to turn columns back into contig
positions and rows into sample names, an optional reference for filling in
missing REF bases, a template header and the output sink.
"""

import logging as lg

import pysam

from ..core.errors import ConfigurationError, ResourceUnavailable
from .reference import ReferenceGenome

# output format -> is BCF
VALID_OUTPUT_FORMATS = {'b': True, 'bu': True, 'z': False, '': False}
DEFAULT_OUTPUT_FORMAT = 'z'


def resolve_output_format(output_format):
    """Validate an output format, falling back to compressed VCF.

    Returns:
        (str, bool): The format actually used and whether it is BCF.
    """
    if output_format not in VALID_OUTPUT_FORMATS:
        lg.warning(
            f'Invalid BCF/VCF output format: {output_format!r}, will output compressed VCF'
        )
        output_format = DEFAULT_OUTPUT_FORMAT
    return output_format, VALID_OUTPUT_FORMATS[output_format]


def parse_genotype(genotype, alt_alleles, alleles):
    """Convert a ``0/1`` style genotype to allele indices into ``alleles``.

    ``alt_alleles`` are the call's own ALT alleles; their indices are remapped
    onto the merged ``alleles`` list of the record. An index naming an ALT the
    call does not carry is written as missing, with a warning.
    """
    if not genotype:
        return (None,), False
    phased = '|' in genotype
    ret = []
    for tok in genotype.replace('|', '/').split('/'):
        if tok in ('', '.'):
            ret.append(None)
            continue
        try:
            k = int(tok)
        except ValueError:
            lg.warning(f'Malformed allele "{tok}" in genotype {genotype!r}, writing missing')
            ret.append(None)
            continue
        if k == 0:
            ret.append(0)
        elif 0 < k <= len(alt_alleles) and alt_alleles[k - 1] in alleles:
            ret.append(alleles.index(alt_alleles[k - 1]))
        else:
            lg.warning(
                f'Genotype {genotype!r} refers to ALT {k} but the call has {alt_alleles!r}, '
                'writing missing'
            )
            ret.append(None)
    return tuple(ret), phased


class VCFAdapter:
    """Writes :class:`ligase.engine.Variant` objects as VCF/BCF records.

    Args:
        genome: :class:`ligase.core.FlattenedGenome`.
        vcf_header: Path of a VCF whose header is used as a template. Missing
            contigs, samples and the GT format field are added to it.
        output: Output path, ``'-'`` for stdout.
        output_format: ``'b'`` (BCF), ``'bu'`` (uncompressed BCF), ``'z'``
            (compressed VCF) or ``''`` (VCF). Unknown values fall back to
            ``'z'`` with a warning.
        reference: Optional FASTA path or :class:`ReferenceGenome`.

    Raises:
        ResourceUnavailable: The header, output or reference cannot be opened.
    """

    def __init__(self, genome, vcf_header, output='-', output_format=DEFAULT_OUTPUT_FORMAT,
                 reference=None):
        self.genome = genome
        self.output = output
        self.output_format, self.is_bcf = resolve_output_format(output_format)
        self.reference = None

        try:
            with pysam.VariantFile(vcf_header) as template:
                self.header = template.header.copy()
        except (OSError, ValueError) as exc:
            raise ResourceUnavailable(f'Cannot read VCF header {vcf_header}: {exc}') from exc
        self._complete_header()

        try:
            self._out = pysam.VariantFile(output, 'w' + self.output_format, header=self.header)
        except (OSError, ValueError) as exc:
            raise ResourceUnavailable(f'Cannot write to output file {output}: {exc}') from exc

        if isinstance(reference, str):
            try:
                reference = ReferenceGenome(reference)
            except ResourceUnavailable:
                self._out.close()
                raise
        self.reference = reference
        self.num_written = 0

    def _complete_header(self):
        for contig in self.genome.registry:
            if contig.name not in self.header.contigs:
                self.header.contigs.add(contig.name, length=contig.length)
        for name in self.genome.samples:
            if name not in self.header.samples:
                self.header.add_sample(name)
        if 'GT' not in self.header.formats:
            self.header.formats.add('GT', 1, 'String', 'Genotype')

    # -- Lookups -------------------------------------------------------------

    def get_contig_location(self, column):
        return self.genome.locate(column)

    def get_next_contig_location(self, column):
        return self.genome.next_contig_after(column)

    def get_sample_name(self, row):
        return self.genome.get_sample_name(row)

    def get_reference_base(self, contig, position):
        if self.reference is None:
            raise ConfigurationError('No reference genome configured')
        return self.reference.get_base(contig, position)

    # -- Output --------------------------------------------------------------

    def _ref_allele(self, variant, loc):
        for call in variant.calls:
            if call.ref:
                return call.ref
        if self.reference is not None:
            return self.get_reference_base(loc.contig, loc.position)
        return 'N'

    def write_variant(self, variant):
        """Write one variant; returns False if its column maps to no contig."""
        loc = self.get_contig_location(variant.column)
        if loc is None:
            lg.warning(f'Column {variant.column} is not inside any contig, skipping')
            return False

        ref = self._ref_allele(variant, loc)
        alleles = [ref]
        for call in variant.calls:
            for alt in filter(None, call.alt.split(',')):
                if alt not in alleles:
                    alleles.append(alt)

        rec = self._out.new_record(
            contig=loc.contig,
            start=loc.position,
            stop=loc.position + len(ref),
            alleles=alleles,
        )
        for call in variant.calls:
            gt, phased = parse_genotype(call.genotype, call.alt.split(','), alleles)
            sample = rec.samples[self.get_sample_name(call.row)]
            sample['GT'] = gt
            sample.phased = phased
        self._out.write(rec)
        self.num_written += 1
        return True

    def close(self):
        self._out.close()
        if self.reference is not None:
            self.reference.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
