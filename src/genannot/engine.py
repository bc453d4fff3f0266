"""Core annotation engine holding the registered annotators.

ARCHITECTURE:
    Variant record + schema → applicable annotators (registration order) → output records

Key Design:
- Reference data is loaded when annotators are built, before any record is seen
- Annotators are registered explicitly into an ordered list the host can iterate
- Capability mismatches skip the annotator instead of raising
- Context manager closes annotators holding file handles (tabix score tables)
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from genannot.annotators.base import Annotator
from genannot.annotators.cadd import CaddAnnotator
from genannot.annotators.omim_hpo import OmimHpoAnnotator
from genannot.api.reference_cache import ReferenceCache
from genannot.models.schema import FieldType, RecordSchema
from genannot.utils.logging_config import get_logger

logger = logging.getLogger(__name__)


class AnnotationEngine:
    """
    Engine for variant annotation.

    Holds an ordered list of annotators and runs every annotator that can
    handle the input schema on each record.
    """

    def __init__(self, annotators: Iterable[Annotator] = (), enable_logging: bool = False):
        self._annotators: list[Annotator] = []
        # Applicable annotators per schema, reset whenever an annotator is registered
        self._applicable_by_schema: dict[frozenset, list[Annotator]] = {}
        self.run_logger = get_logger() if enable_logging else None
        for annotator in annotators:
            self.register(annotator)

    @classmethod
    def from_sources(
        cls,
        cache: ReferenceCache | None = None,
        cadd_path: str | Path | None = None,
        enable_omim_hpo: bool = True,
        enable_logging: bool = False,
    ) -> "AnnotationEngine":
        """Build an engine with the standard annotators.

        The OMIM/HPO annotator loads its reference datasets through ``cache``;
        the CADD annotator is added only when a score file is given.
        """
        engine = cls(enable_logging=enable_logging)
        if enable_omim_hpo:
            engine.register(
                OmimHpoAnnotator.from_cache(cache or ReferenceCache(), run_logger=engine.run_logger)
            )
        if cadd_path is not None:
            engine.register(CaddAnnotator.from_path(cadd_path, run_logger=engine.run_logger))
        return engine

    def __enter__(self) -> "AnnotationEngine":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release resources held by the annotators."""
        for annotator in self._annotators:
            annotator.close()

    @property
    def annotators(self) -> list[Annotator]:
        return list(self._annotators)

    def register(self, annotator: Annotator) -> None:
        """Append an annotator; names must be unique."""
        if any(existing.name == annotator.name for existing in self._annotators):
            raise ValueError(f"Annotator '{annotator.name}' is already registered")
        self._annotators.append(annotator)
        self._applicable_by_schema.clear()
        logger.debug("Registered annotator %s", annotator.name)

    def applicable(self, schema: RecordSchema) -> list[Annotator]:
        """Annotators that accept the schema, in registration order."""
        accepted = []
        for annotator in self._annotators:
            verdict = annotator.can_annotate(schema)
            if verdict is True:
                accepted.append(annotator)
            else:
                logger.warning("Skipping annotator %s: %s", annotator.name, verdict)
        return accepted

    def _applicable_for(self, schema: RecordSchema) -> list[Annotator]:
        """Capability check run once per distinct schema."""
        key = frozenset(schema.items())
        if key not in self._applicable_by_schema:
            self._applicable_by_schema[key] = self.applicable(schema)
        return self._applicable_by_schema[key]

    def output_fields(self, schema: RecordSchema) -> dict[str, list[tuple[str, FieldType]]]:
        """Declared output fields of each applicable annotator."""
        return {annotator.name: annotator.output_fields() for annotator in self._applicable_for(schema)}

    def annotate(
        self, record: Mapping[str, Any], schema: RecordSchema
    ) -> dict[str, list[dict[str, Any]]]:
        """Annotate a single record with every applicable annotator."""
        return {annotator.name: annotator.annotate(record) for annotator in self._applicable_for(schema)}

    def annotate_records(
        self, records: Iterable[Mapping[str, Any]], schema: RecordSchema
    ) -> list[dict[str, list[dict[str, Any]]]]:
        """Annotate many records of the same schema."""
        annotators = self._applicable_for(schema)
        results = []
        totals = {annotator.name: 0 for annotator in annotators}

        for record in records:
            outputs = {annotator.name: annotator.annotate(record) for annotator in annotators}
            for name, annotated in outputs.items():
                totals[name] += len(annotated)
            results.append(outputs)

        if self.run_logger:
            self.run_logger.log_run_summary(len(results), totals)
        return results
