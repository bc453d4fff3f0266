"""Split multi-allelic records, look up each allele, rejoin the scores."""

from genannot.constants import ALLELE_SEPARATOR
from genannot.models.scores import AlleleScore
from genannot.scores.table import ScoreTable


class AlleleScoreMatcher:
    """Match each alternate allele of a record against a score table."""

    def __init__(self, table: ScoreTable) -> None:
        self.table = table

    def lookup_alleles(
        self, chromosome: str, position: int, reference_allele: str, alternate_alleles: str
    ) -> list[AlleleScore | None]:
        """Per-allele lookup results, one per alternate allele, in input order."""
        return [
            self.table.lookup(chromosome, position, reference_allele, allele)
            for allele in alternate_alleles.split(ALLELE_SEPARATOR)
        ]

    def match(
        self, chromosome: str, position: int, reference_allele: str, alternate_alleles: str
    ) -> tuple[str | None, str | None]:
        """Return comma joined (absolute, scaled) scores for the matching alleles.

        Alleles without a score are left out rather than replaced by a
        placeholder. When no allele matches both values are None.
        """
        hits = [
            score
            for score in self.lookup_alleles(chromosome, position, reference_allele, alternate_alleles)
            if score is not None
        ]
        if not hits:
            return None, None

        return (
            ALLELE_SEPARATOR.join(score.absolute_score for score in hits),
            ALLELE_SEPARATOR.join(score.scaled_score for score in hits),
        )
