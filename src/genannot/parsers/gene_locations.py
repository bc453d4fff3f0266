"""Parser for the HGNC gene location table.

Tab separated ``gene symbol, start, end, chromosome``. Only rows on numbered
chromosomes or X are kept, which also drops the header row.
"""

import logging
import re
from typing import Iterable

from genannot.constants import GENE_LOCATION_CHROMOSOME_PATTERN
from genannot.models.locus import GeneInterval
from genannot.parsers.common import build_record, parse_int, require_fields

logger = logging.getLogger(__name__)

DATASET = "HGNC gene locations"

_CHROMOSOME_PATTERN = re.compile(GENE_LOCATION_CHROMOSOME_PATTERN)


def parse_gene_location_lines(lines: Iterable[str]) -> dict[str, GeneInterval]:
    """Parse gene intervals keyed by gene symbol.

    A symbol listed more than once keeps its last row.

    Raises:
        FormatError: If a kept row has non-numeric or inverted coordinates
    """
    intervals: dict[str, GeneInterval] = {}
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        parts = line.split("\t")
        require_fields(parts, 4, DATASET, line_number)
        chromosome = parts[3]
        if not _CHROMOSOME_PATTERN.fullmatch(chromosome):
            continue

        symbol = parts[0]
        intervals[symbol] = build_record(
            GeneInterval,
            DATASET,
            line_number,
            gene_symbol=symbol,
            chromosome=chromosome,
            start=parse_int(parts[1], "start", DATASET, line_number),
            end=parse_int(parts[2], "end", DATASET, line_number),
        )

    logger.debug("Parsed %d gene intervals", len(intervals))
    return intervals
