"""Parsers for the flat-file reference datasets."""

from genannot.parsers.gene_locations import parse_gene_location_lines
from genannot.parsers.hpo import parse_hpo_line, parse_hpo_lines
from genannot.parsers.omim import parse_omim_line, parse_omim_lines

__all__ = [
    "parse_gene_location_lines",
    "parse_hpo_line",
    "parse_hpo_lines",
    "parse_omim_line",
    "parse_omim_lines",
]
