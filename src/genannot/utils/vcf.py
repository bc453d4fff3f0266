"""VCF reading for the command line host.

Records are read with ``pysam.VariantFile`` (plain, gzip or bgzip VCF and
BCF). Only the fixed columns the annotators need are extracted.
"""

from pathlib import Path
from typing import Any, Iterator

import pysam

from genannot.constants import ALLELE_SEPARATOR, ALTERNATE_ALLELES, CHROMOSOME, POSITION, REFERENCE_ALLELE
from genannot.exceptions import FormatError
from genannot.models.schema import FieldType

MISSING_VALUE = "."

VCF_SCHEMA: dict[str, FieldType] = {
    CHROMOSOME: FieldType.STRING,
    POSITION: FieldType.LONG,
    "ID": FieldType.STRING,
    REFERENCE_ALLELE: FieldType.TEXT,
    ALTERNATE_ALLELES: FieldType.TEXT,
    "QUAL": FieldType.STRING,
    "FILTER": FieldType.STRING,
}


def to_record(rec: pysam.VariantRecord) -> dict[str, Any]:
    """Flatten a pysam record into the field layout of ``VCF_SCHEMA``."""
    filters = list(rec.filter.keys())
    return {
        CHROMOSOME: rec.chrom,
        POSITION: rec.pos,
        "ID": rec.id or MISSING_VALUE,
        REFERENCE_ALLELE: rec.ref,
        ALTERNATE_ALLELES: ALLELE_SEPARATOR.join(rec.alts or ()),
        "QUAL": MISSING_VALUE if rec.qual is None else str(rec.qual),
        "FILTER": ";".join(filters) if filters else MISSING_VALUE,
    }


def read_vcf_records(path: str | Path) -> Iterator[dict[str, Any]]:
    """Yield one record per VCF data line.

    Raises:
        FormatError: If the file has no valid VCF header or a record cannot be parsed
    """
    path = Path(path)
    try:
        vcf = pysam.VariantFile(str(path))
    except (OSError, ValueError) as e:
        raise FormatError(f"not a readable VCF file: {e}", dataset=str(path)) from e

    with vcf:
        try:
            for rec in vcf:
                yield to_record(rec)
        except (OSError, ValueError) as e:
            raise FormatError(f"malformed VCF record: {e}", dataset=str(path)) from e
