"""Genomic variant annotation with OMIM/HPO phenotypes and CADD scores."""

from genannot.annotators import Annotator, CaddAnnotator, OmimHpoAnnotator
from genannot.api import ReferenceCache
from genannot.engine import AnnotationEngine
from genannot.exceptions import AnnotationError, FormatError, IOFailure
from genannot.models import FieldType, Locus

__version__ = "0.1.0"

__all__ = [
    "AnnotationEngine",
    "Annotator",
    "OmimHpoAnnotator",
    "CaddAnnotator",
    "ReferenceCache",
    "AnnotationError",
    "IOFailure",
    "FormatError",
    "FieldType",
    "Locus",
    "__version__",
]
