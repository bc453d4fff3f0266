"""In-memory indexes over parsed reference data."""

from genannot.index.gene_locations import GeneLocationIndex
from genannot.index.terms import GeneTermIndex, build_hpo_index, build_omim_index

__all__ = [
    "GeneLocationIndex",
    "GeneTermIndex",
    "build_hpo_index",
    "build_omim_index",
]
