"""CADD deleteriousness score annotation.

ARCHITECTURE:
    Variant record → split ALT on "," → exact (chrom, pos, ref, alt) lookups → rejoin

Multi-allelic records get one score per matching alternate allele, in ALT
order. Alleles missing from the score table are skipped, so the joined output
may hold fewer values than the record has alleles.
"""

from pathlib import Path
from typing import Any, ClassVar, Mapping

from genannot.annotators.base import LOCUS_FIELDS, STRING_TYPES, Annotator
from genannot.constants import (
    ALTERNATE_ALLELES,
    CADD_ABS,
    CADD_SCALED,
    REFERENCE_ALLELE,
)
from genannot.models.schema import FieldType
from genannot.scores.matcher import AlleleScoreMatcher
from genannot.scores.table import ScoreTable, open_score_table
from genannot.utils.logging_config import AnnotationLogger


class CaddAnnotator(Annotator):
    """Annotate variant records with CADD absolute and PHRED-scaled scores."""

    name: ClassVar[str] = "CADD"
    required_fields: ClassVar[tuple[tuple[str, frozenset[FieldType]], ...]] = LOCUS_FIELDS + (
        (REFERENCE_ALLELE, STRING_TYPES),
        (ALTERNATE_ALLELES, STRING_TYPES),
    )

    def __init__(self, table: ScoreTable, run_logger: AnnotationLogger | None = None) -> None:
        self.table = table
        self.matcher = AlleleScoreMatcher(table)
        self.run_logger = run_logger

    @classmethod
    def from_path(cls, path: str | Path, run_logger: AnnotationLogger | None = None) -> "CaddAnnotator":
        """Open a CADD score file (tabix indexed or plain TSV)."""
        return cls(open_score_table(path), run_logger=run_logger)

    def output_fields(self) -> list[tuple[str, FieldType]]:
        return [(CADD_ABS, FieldType.STRING), (CADD_SCALED, FieldType.STRING)]

    def annotate(self, record: Mapping[str, Any]) -> list[dict[str, Any]]:
        """Return a copy of the record with CADD fields set when any allele matched."""
        locus = self.locus_of(record)
        abs_scores, scaled_scores = self.matcher.match(
            locus.chromosome,
            locus.position,
            str(record[REFERENCE_ALLELE]),
            str(record[ALTERNATE_ALLELES]),
        )

        annotated = dict(record)
        if abs_scores is not None:
            annotated[CADD_ABS] = abs_scores
            annotated[CADD_SCALED] = scaled_scores

        if self.run_logger:
            self.run_logger.log_annotation(self.name, str(locus), 1 if abs_scores is not None else 0)
        return [annotated]

    def close(self) -> None:
        self.table.close()
