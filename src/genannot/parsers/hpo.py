"""Parser for the HPO diseases-to-genes-to-phenotypes table.

Each data line is tab separated::

    OMIM:614887	PEX14	5195	HP:0002240	Hepatomegaly

i.e. ``diseaseDb:diseaseId, gene symbol, Entrez id, HPO id, HPO label``.
Any further columns are ignored. Lines starting with ``#`` are comments.
"""

import logging
from typing import Iterable

from genannot.exceptions import FormatError
from genannot.models.terms import HpoTerm
from genannot.parsers.common import build_record, parse_int, require_fields

logger = logging.getLogger(__name__)

DATASET = "HPO diseases_to_genes_to_phenotypes"


def parse_hpo_line(line: str, line_number: int = 0) -> HpoTerm:
    """Parse a single non-comment HPO line."""
    parts = line.split("\t")
    require_fields(parts, 5, DATASET, line_number)

    disease_db, separator, disease_id = parts[0].partition(":")
    if not separator:
        raise FormatError(
            f"disease identifier has no database prefix: {parts[0]!r}",
            dataset=DATASET,
            line_number=line_number,
        )

    return build_record(
        HpoTerm,
        DATASET,
        line_number,
        hpo_id=parts[3],
        description=parts[4],
        disease_db=disease_db,
        disease_db_entry=parse_int(disease_id, "disease entry", DATASET, line_number),
        gene_name=parts[1],
        gene_entrez_id=parse_int(parts[2], "Entrez gene id", DATASET, line_number),
    )


def parse_hpo_lines(lines: Iterable[str]) -> list[HpoTerm]:
    """Parse all HPO terms, in source order.

    Raises:
        FormatError: If any data line has a malformed numeric field
    """
    terms = []
    for line_number, line in enumerate(lines, start=1):
        if line.startswith("#") or not line.strip():
            continue
        terms.append(parse_hpo_line(line, line_number))

    logger.debug("Parsed %d HPO terms", len(terms))
    return terms
