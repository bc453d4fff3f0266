"""Gene symbol to reference term indexes."""

from types import MappingProxyType
from typing import Callable, Generic, Iterable, Iterator, TypeVar

from genannot.models.terms import HpoTerm, OmimTerm

T = TypeVar("T")


class GeneTermIndex(Generic[T]):
    """Read-only multimap from gene symbol to the terms that mention it.

    Terms keep source order within each gene.
    """

    def __init__(self, terms: Iterable[T], symbols_of: Callable[[T], Iterable[str]]) -> None:
        grouped: dict[str, list[T]] = {}
        for term in terms:
            for symbol in symbols_of(term):
                grouped.setdefault(symbol, []).append(term)

        self._terms = MappingProxyType({symbol: tuple(items) for symbol, items in grouped.items()})

    def __contains__(self, gene_symbol: object) -> bool:
        return gene_symbol in self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def get(self, gene_symbol: str) -> tuple[T, ...]:
        """Terms for a gene symbol; empty when the gene is not indexed."""
        return self._terms.get(gene_symbol, ())


def build_hpo_index(terms: Iterable[HpoTerm]) -> GeneTermIndex[HpoTerm]:
    """Index HPO terms by their gene symbol."""
    return GeneTermIndex(terms, lambda term: (term.gene_name,))


def build_omim_index(terms: Iterable[OmimTerm]) -> GeneTermIndex[OmimTerm]:
    """Index OMIM terms under every gene symbol they list."""
    return GeneTermIndex(terms, lambda term: term.gene_symbols)
