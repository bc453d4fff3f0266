"""Annotators implementing the shared annotation contract."""

from genannot.annotators.base import Annotator
from genannot.annotators.cadd import CaddAnnotator
from genannot.annotators.omim_hpo import OmimHpoAnnotator

__all__ = ["Annotator", "CaddAnnotator", "OmimHpoAnnotator"]
