"""Reference term models for the OMIM and HPO catalogs."""

from pydantic import BaseModel, ConfigDict, Field


class HpoTerm(BaseModel):
    """One disease-gene-phenotype association from the HPO annotation table.

    ``OMIM:614887  PEX14  5195  HP:0002240  Hepatomegaly`` becomes
    ``HpoTerm(hpo_id="HP:0002240", description="Hepatomegaly", disease_db="OMIM",
    disease_db_entry=614887, gene_name="PEX14", gene_entrez_id=5195)``.
    """

    model_config = ConfigDict(frozen=True)

    hpo_id: str = Field(..., description="HPO term identifier (e.g., HP:0002240)")
    description: str = Field(..., description="HPO term label")
    disease_db: str = Field(..., description="Source disease database (OMIM, ORPHA, ...)")
    disease_db_entry: int = Field(..., description="Entry number in the disease database")
    gene_name: str = Field(..., description="Gene symbol")
    gene_entrez_id: int = Field(..., description="NCBI Entrez gene identifier")


class OmimTerm(BaseModel):
    """One phenotype entry of the OMIM morbid map.

    Only entries carrying a numeric phenotype MIM number are modelled.
    """

    model_config = ConfigDict(frozen=True)

    entry: int = Field(..., description="Phenotype MIM number")
    name: str = Field(..., description="Disorder name")
    type: int = Field(..., description="Phenotype mapping key (1-4)")
    caused_by_entry: int = Field(..., description="MIM number of the causal gene/locus")
    cytogenetic_location: str = Field(..., description="Cytogenetic location (e.g., 3q25.31)")
    gene_symbols: tuple[str, ...] = Field(default=(), description="Gene symbols, in catalog order")
