"""Clients for external reference data."""

from genannot.api.reference_cache import ReferenceCache

__all__ = ["ReferenceCache"]
