"""Genomic coordinate models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Locus(BaseModel):
    """A point in the genome."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"chromosome": "7", "position": 140453136}},
    )

    chromosome: str = Field(..., description="Chromosome name as used in the input (e.g., 7, X)")
    position: int = Field(..., ge=0, description="1-based position on the chromosome")

    def __str__(self) -> str:
        return f"{self.chromosome}:{self.position}"


class GeneInterval(BaseModel):
    """Genomic extent of a gene."""

    model_config = ConfigDict(frozen=True)

    gene_symbol: str = Field(..., description="HGNC gene symbol")
    chromosome: str
    start: int
    end: int

    @model_validator(mode="after")
    def check_bounds(self) -> "GeneInterval":
        if self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end} for {self.gene_symbol}")
        return self

    def contains(self, locus: Locus, tolerance: int = 0) -> bool:
        """Check whether the locus falls inside the interval padded by ``tolerance``."""
        return (
            self.chromosome == locus.chromosome
            and self.start - tolerance <= locus.position <= self.end + tolerance
        )
