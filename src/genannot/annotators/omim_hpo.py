"""OMIM and HPO disease/phenotype annotation by gene.

ARCHITECTURE:
    Locus → GeneLocationIndex → gene symbol → OMIM + HPO indexes → merged record

Uses three flat files, fetched once through the ReferenceCache:
- HGNC gene locations (GRCh37)
- HPO ALL_SOURCES_ALL_FREQUENCIES_diseases_to_genes_to_phenotypes
- OMIM morbidmap

Key Design:
- All reference data is loaded at construction; the annotator is read-only after
- A record is produced only for genes present in BOTH the OMIM and HPO indexes
- Field values are deduplicated sets
"""

import logging
from typing import Any, Callable, ClassVar, Mapping, Sized, TypeVar

from genannot.annotators.base import Annotator
from genannot.api.reference_cache import ReferenceCache
from genannot.constants import (
    CHROMOSOME,
    GENE_LOCATIONS_CACHE_KEY,
    GENE_LOCATIONS_URL,
    HPO_CACHE_KEY,
    HPO_DESCRIPTIONS,
    HPO_DISEASE_DATABASE,
    HPO_DISEASE_DATABASE_ENTRY,
    HPO_DISEASES_TO_GENES_TO_PHENOTYPES_URL,
    HPO_ENTREZ_ID,
    HPO_GENE_NAME,
    HPO_IDENTIFIERS,
    OMIM_CACHE_KEY,
    OMIM_CAUSAL_IDENTIFIER,
    OMIM_CYTOGENIC_LOCATION,
    OMIM_DISORDERS,
    OMIM_ENTRY,
    OMIM_HGNC_IDENTIFIERS,
    OMIM_MORBIDMAP_URL,
    OMIM_TYPE,
    POSITION,
)
from genannot.exceptions import AnnotationError
from genannot.index.gene_locations import GeneLocationIndex
from genannot.index.terms import GeneTermIndex, build_hpo_index, build_omim_index
from genannot.models.locus import Locus
from genannot.models.schema import FieldType
from genannot.models.terms import HpoTerm, OmimTerm
from genannot.parsers.gene_locations import parse_gene_location_lines
from genannot.parsers.hpo import parse_hpo_lines
from genannot.parsers.omim import parse_omim_lines
from genannot.utils.logging_config import AnnotationLogger

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Sized)


class OmimHpoAnnotator(Annotator):
    """Annotate loci with the OMIM disorders and HPO phenotypes of the overlapping gene."""

    name: ClassVar[str] = "OmimHpo"

    OUTPUT_FIELDS: ClassVar[tuple[str, ...]] = (
        OMIM_CAUSAL_IDENTIFIER,
        OMIM_DISORDERS,
        OMIM_TYPE,
        OMIM_HGNC_IDENTIFIERS,
        OMIM_CYTOGENIC_LOCATION,
        OMIM_ENTRY,
        HPO_IDENTIFIERS,
        HPO_GENE_NAME,
        HPO_DESCRIPTIONS,
        HPO_DISEASE_DATABASE,
        HPO_DISEASE_DATABASE_ENTRY,
        HPO_ENTREZ_ID,
    )

    def __init__(
        self,
        gene_locations: GeneLocationIndex,
        omim_index: GeneTermIndex[OmimTerm],
        hpo_index: GeneTermIndex[HpoTerm],
        run_logger: AnnotationLogger | None = None,
    ) -> None:
        self.gene_locations = gene_locations
        self.omim_index = omim_index
        self.hpo_index = hpo_index
        self.run_logger = run_logger

    @classmethod
    def from_cache(
        cls,
        cache: ReferenceCache,
        gene_locations_url: str = GENE_LOCATIONS_URL,
        hpo_url: str = HPO_DISEASES_TO_GENES_TO_PHENOTYPES_URL,
        omim_url: str = OMIM_MORBIDMAP_URL,
        run_logger: AnnotationLogger | None = None,
    ) -> "OmimHpoAnnotator":
        """Fetch, parse and index the three reference datasets.

        Raises:
            IOFailure: If a dataset is neither cached nor reachable
            FormatError: If a dataset contains a malformed record
        """
        hpo_terms = _load(cache, hpo_url, HPO_CACHE_KEY, "HPO", parse_hpo_lines, run_logger)
        omim_terms = _load(cache, omim_url, OMIM_CACHE_KEY, "OMIM", parse_omim_lines, run_logger)
        intervals = _load(
            cache,
            gene_locations_url,
            GENE_LOCATIONS_CACHE_KEY,
            "gene locations",
            parse_gene_location_lines,
            run_logger,
        )

        return cls(
            gene_locations=GeneLocationIndex(intervals),
            omim_index=build_omim_index(omim_terms),
            hpo_index=build_hpo_index(hpo_terms),
            run_logger=run_logger,
        )

    def output_fields(self) -> list[tuple[str, FieldType]]:
        return [(field, FieldType.TEXT) for field in self.OUTPUT_FIELDS]

    def genes_at(self, locus: Locus) -> list[str]:
        """Gene symbols considered for a locus (at most one, the first overlapping gene)."""
        symbol = self.gene_locations.resolve(locus)
        return [symbol] if symbol is not None else []

    def annotate_locus(self, locus: Locus) -> list[dict[str, Any]]:
        """Build one merged OMIM/HPO record per annotated gene at the locus."""
        results = []
        for symbol in self.genes_at(locus):
            if symbol in self.omim_index and symbol in self.hpo_index:
                results.append(self._merge(locus, symbol))
        return results

    def annotate(self, record: Mapping[str, Any]) -> list[dict[str, Any]]:
        locus = self.locus_of(record)
        results = self.annotate_locus(locus)
        if self.run_logger:
            self.run_logger.log_annotation(self.name, str(locus), len(results))
        return results

    def _merge(self, locus: Locus, symbol: str) -> dict[str, Any]:
        omim_terms = self.omim_index.get(symbol)
        hpo_terms = self.hpo_index.get(symbol)

        return {
            CHROMOSOME: locus.chromosome,
            POSITION: locus.position,
            OMIM_DISORDERS: {term.name for term in omim_terms},
            OMIM_ENTRY: {term.entry for term in omim_terms},
            OMIM_TYPE: {term.type for term in omim_terms},
            OMIM_CAUSAL_IDENTIFIER: {term.caused_by_entry for term in omim_terms},
            OMIM_CYTOGENIC_LOCATION: {term.cytogenetic_location for term in omim_terms},
            OMIM_HGNC_IDENTIFIERS: {gene for term in omim_terms for gene in term.gene_symbols},
            HPO_DESCRIPTIONS: {term.description for term in hpo_terms},
            HPO_IDENTIFIERS: {term.hpo_id for term in hpo_terms},
            HPO_GENE_NAME: {term.gene_name for term in hpo_terms},
            HPO_ENTREZ_ID: {term.gene_entrez_id for term in hpo_terms},
            HPO_DISEASE_DATABASE: {term.disease_db for term in hpo_terms},
            HPO_DISEASE_DATABASE_ENTRY: {term.disease_db_entry for term in hpo_terms},
        }


def _load(
    cache: ReferenceCache,
    url: str,
    cache_key: str,
    dataset: str,
    parse: Callable[[list[str]], T],
    run_logger: AnnotationLogger | None,
) -> T:
    try:
        lines = cache.fetch(url, cache_key)
        parsed = parse(lines)
    except AnnotationError as e:
        if run_logger:
            run_logger.log_load_error(dataset, e)
        raise

    count = len(parsed)
    if run_logger:
        run_logger.log_dataset_loaded(dataset, cache_key, len(lines), count)
    else:
        logger.info("Loaded %d %s records from %s", count, dataset, cache_key)
    return parsed
