"""Keyed stores of precomputed CADD scores.

CADD distributes scores as a tab separated file, usually bgzipped and tabix
indexed::

    ## CADD GRCh37-v1.6 (c) University of Washington ...
    #Chrom	Pos	Ref	Alt	RawScore	PHRED
    1	10001	T	A	0.702541	8.478

Two stores share the same ``lookup`` interface:
- InMemoryScoreTable: dict keyed by (chrom, pos, ref, alt), for small tables
- TabixScoreTable: random access into an indexed file via pysam
"""

import gzip
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator

import pysam

from genannot.models.scores import AlleleScore
from genannot.parsers.common import build_record, parse_int, require_fields

logger = logging.getLogger(__name__)

DATASET = "CADD scores"


def parse_score_line(line: str, line_number: int = 0) -> AlleleScore:
    """Parse one CADD data row."""
    parts = line.rstrip("\n").split("\t")
    require_fields(parts, 6, DATASET, line_number)
    return build_record(
        AlleleScore,
        DATASET,
        line_number,
        chromosome=parts[0],
        position=parse_int(parts[1], "position", DATASET, line_number),
        reference_allele=parts[2],
        alternate_allele=parts[3],
        absolute_score=parts[4],
        scaled_score=parts[5],
    )


class ScoreTable(ABC):
    """Exact-match lookup of allele scores."""

    @abstractmethod
    def lookup(
        self, chromosome: str, position: int, reference_allele: str, alternate_allele: str
    ) -> AlleleScore | None:
        """Return the score for an exact substitution, or None if absent."""

    def close(self) -> None:
        """Release any underlying resources."""


class InMemoryScoreTable(ScoreTable):
    """Dictionary-backed score table."""

    def __init__(self, scores: Iterable[AlleleScore] = ()) -> None:
        self._scores: dict[tuple[str, int, str, str], AlleleScore] = {}
        for score in scores:
            self._scores[score.key()] = score

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[AlleleScore]:
        return iter(self._scores.values())

    def lookup(
        self, chromosome: str, position: int, reference_allele: str, alternate_allele: str
    ) -> AlleleScore | None:
        return self._scores.get((chromosome, position, reference_allele, alternate_allele))

    @classmethod
    def from_tsv(cls, path: str | Path) -> "InMemoryScoreTable":
        """Load every row of a CADD TSV file (plain or gzip compressed).

        Raises:
            FormatError: If a data row is malformed
        """
        path = Path(path)
        opener = gzip.open if path.suffix == ".gz" else open
        scores = []
        with opener(path, "rt", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                if line.startswith("#") or not line.strip():
                    continue
                scores.append(parse_score_line(line, line_number))

        logger.info("Loaded %d CADD scores from %s", len(scores), path)
        return cls(scores)


class TabixScoreTable(ScoreTable):
    """Score table backed by a bgzipped, tabix-indexed CADD file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._tabix: pysam.TabixFile | None = pysam.TabixFile(str(self.path))
        self._contigs = set(self._tabix.contigs)
        logger.info("Opened CADD tabix file %s (%d contigs)", self.path, len(self._contigs))

    def lookup(
        self, chromosome: str, position: int, reference_allele: str, alternate_allele: str
    ) -> AlleleScore | None:
        if self._tabix is None:
            raise ValueError(f"Score table {self.path} is closed")
        if chromosome not in self._contigs or position < 1:
            return None

        # Tabix regions are 0-based half open; CADD positions are 1-based
        for row in self._tabix.fetch(chromosome, position - 1, position):
            score = parse_score_line(row)
            if (
                score.position == position
                and score.reference_allele == reference_allele
                and score.alternate_allele == alternate_allele
            ):
                return score
        return None

    def close(self) -> None:
        if self._tabix is not None:
            self._tabix.close()
            self._tabix = None


def open_score_table(path: str | Path) -> ScoreTable:
    """Open a CADD file, using the tabix index when one sits next to it."""
    path = Path(path)
    if Path(f"{path}.tbi").exists():
        return TabixScoreTable(path)
    return InMemoryScoreTable.from_tsv(path)
