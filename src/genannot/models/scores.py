"""Per-allele score models."""

from pydantic import BaseModel, ConfigDict, Field


class AlleleScore(BaseModel):
    """Precomputed CADD scores for one exact substitution.

    Scores are kept as the strings found in the source file so that the
    values written to output match the source byte for byte.
    """

    model_config = ConfigDict(frozen=True)

    chromosome: str
    position: int = Field(..., ge=0)
    reference_allele: str
    alternate_allele: str
    absolute_score: str = Field(..., description="Raw CADD score")
    scaled_score: str = Field(..., description="PHRED-scaled CADD score")

    def key(self) -> tuple[str, int, str, str]:
        """Exact lookup key for this score."""
        return (self.chromosome, self.position, self.reference_allele, self.alternate_allele)
