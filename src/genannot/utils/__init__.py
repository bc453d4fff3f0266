"""Utility functions."""

from genannot.utils.logging_config import AnnotationLogger, get_logger, reset_logger
from genannot.utils.vcf import VCF_SCHEMA, read_vcf_records

__all__ = [
    'AnnotationLogger',
    'get_logger',
    'reset_logger',
    'VCF_SCHEMA',
    'read_vcf_records',
]
