"""Per-allele pathogenicity score lookup."""

from genannot.scores.matcher import AlleleScoreMatcher
from genannot.scores.table import (
    InMemoryScoreTable,
    ScoreTable,
    TabixScoreTable,
    open_score_table,
    parse_score_line,
)

__all__ = [
    "AlleleScoreMatcher",
    "ScoreTable",
    "InMemoryScoreTable",
    "TabixScoreTable",
    "open_score_table",
    "parse_score_line",
]
