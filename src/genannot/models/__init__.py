"""Data models for genannot."""

from genannot.models.locus import GeneInterval, Locus
from genannot.models.schema import FieldType, RecordSchema
from genannot.models.scores import AlleleScore
from genannot.models.terms import HpoTerm, OmimTerm

__all__ = [
    "Locus",
    "GeneInterval",
    "HpoTerm",
    "OmimTerm",
    "AlleleScore",
    "FieldType",
    "RecordSchema",
]
