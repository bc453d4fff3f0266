"""Parser for the OMIM morbid map.

Each line is pipe delimited::

    Leukemia, acute myelogenous, 601626 (3)|GMPS|600358|3q25.31

The first field ends with the six digit phenotype MIM number and the mapping
key in parentheses. Entries without a phenotype MIM number, e.g.::

    Leukemia, acute myelogenous (3)|KRAS, KRAS2, RASK2, NS, CFC2|190070|12p12.1

are not confirmed OMIM phenotypes and are dropped.
"""

import logging
import re
from typing import Iterable

from genannot.models.terms import OmimTerm
from genannot.parsers.common import build_record, parse_int, require_fields

logger = logging.getLogger(__name__)

DATASET = "OMIM morbidmap"

_ENTRY_PATTERN = re.compile(r"[0-9]+")
GENE_SEPARATOR = ", "


def extract_entry(description: str) -> str:
    """Return the substring holding the phenotype MIM number.

    The number sits at a fixed offset from the end: ``<name>, NNNNNN (T)``.
    Fields too short to hold that suffix yield an empty string.
    """
    if len(description) < 10:
        return ""
    return description[-10:-4]


def parse_omim_line(line: str, line_number: int = 0) -> OmimTerm | None:
    """Parse one morbid map line; returns None for entries without a MIM number."""
    parts = line.split("|")
    entry = extract_entry(parts[0])
    if not _ENTRY_PATTERN.fullmatch(entry):
        return None

    require_fields(parts, 4, DATASET, line_number)
    description = parts[0]

    return build_record(
        OmimTerm,
        DATASET,
        line_number,
        entry=int(entry),
        name=description[:-12],
        type=parse_int(description[-2], "phenotype mapping key", DATASET, line_number),
        caused_by_entry=parse_int(parts[2], "causal MIM number", DATASET, line_number),
        cytogenetic_location=parts[3],
        gene_symbols=tuple(parts[1].split(GENE_SEPARATOR)),
    )


def parse_omim_lines(lines: Iterable[str]) -> list[OmimTerm]:
    """Parse all morbid map lines that carry a phenotype MIM number.

    Raises:
        FormatError: If a kept line has a malformed numeric field
    """
    terms = []
    dropped = 0
    for line_number, line in enumerate(lines, start=1):
        term = parse_omim_line(line, line_number)
        if term is None:
            dropped += 1
            continue
        terms.append(term)

    logger.debug("Parsed %d OMIM terms, dropped %d lines without MIM number", len(terms), dropped)
    return terms
