"""Interval index from genomic position to gene symbol.

ARCHITECTURE:
    Locus → per-chromosome interval list (sorted) → first overlapping gene

Key Design:
- Built once from parsed GeneIntervals, immutable afterwards
- Intervals sorted by (start, end, gene symbol) within each chromosome, so the
  "first" overlapping gene is well defined and independent of input order
- Each interval is padded by a fixed tolerance on both ends
"""

from bisect import bisect_right
from types import MappingProxyType
from typing import Iterable, Mapping

from genannot.constants import GENE_WINDOW_TOLERANCE
from genannot.models.locus import GeneInterval, Locus


class GeneLocationIndex:
    """Resolve loci to the genes whose (padded) extent covers them."""

    def __init__(
        self,
        intervals: Mapping[str, GeneInterval] | Iterable[GeneInterval],
        tolerance: int = GENE_WINDOW_TOLERANCE,
    ) -> None:
        """Build the index.

        Args:
            intervals: Gene intervals, either keyed by symbol or as a plain iterable
            tolerance: Bases of padding applied to each end of every interval
        """
        if isinstance(intervals, Mapping):
            intervals = intervals.values()

        self.tolerance = tolerance
        by_symbol: dict[str, GeneInterval] = {}
        for interval in intervals:
            by_symbol[interval.gene_symbol] = interval
        self._by_symbol = MappingProxyType(by_symbol)

        grouped: dict[str, list[GeneInterval]] = {}
        for interval in by_symbol.values():
            grouped.setdefault(interval.chromosome, []).append(interval)

        self._by_chromosome: dict[str, tuple[GeneInterval, ...]] = {}
        self._starts: dict[str, tuple[int, ...]] = {}
        for chromosome, chrom_intervals in grouped.items():
            ordered = tuple(sorted(chrom_intervals, key=lambda iv: (iv.start, iv.end, iv.gene_symbol)))
            self._by_chromosome[chromosome] = ordered
            self._starts[chromosome] = tuple(iv.start for iv in ordered)

    def __len__(self) -> int:
        return len(self._by_symbol)

    def __contains__(self, gene_symbol: object) -> bool:
        return gene_symbol in self._by_symbol

    def get(self, gene_symbol: str) -> GeneInterval | None:
        """Return the interval for a gene symbol, if indexed."""
        return self._by_symbol.get(gene_symbol)

    @property
    def chromosomes(self) -> list[str]:
        return sorted(self._by_chromosome)

    def overlapping(self, locus: Locus) -> list[str]:
        """All gene symbols whose padded interval contains the locus, in index order."""
        intervals = self._by_chromosome.get(locus.chromosome)
        if not intervals:
            return []

        # Intervals starting after position + tolerance cannot contain the locus
        upper = bisect_right(self._starts[locus.chromosome], locus.position + self.tolerance)
        return [
            interval.gene_symbol
            for interval in intervals[:upper]
            if interval.contains(locus, self.tolerance)
        ]

    def resolve(self, locus: Locus) -> str | None:
        """Return the first gene overlapping the locus, or None.

        "First" means lowest start coordinate, then lowest end, then gene symbol.
        """
        intervals = self._by_chromosome.get(locus.chromosome)
        if not intervals:
            return None

        upper = bisect_right(self._starts[locus.chromosome], locus.position + self.tolerance)
        for interval in intervals[:upper]:
            if interval.contains(locus, self.tolerance):
                return interval.gene_symbol
        return None
