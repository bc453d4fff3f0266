"""Base interface shared by all annotators."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping

from genannot.constants import (
    CHROMOSOME,
    MISSING_ATTRIBUTE_REASON,
    POSITION,
    WRONG_DATATYPE_REASON,
)
from genannot.models.locus import Locus
from genannot.models.schema import FieldType, RecordSchema

STRING_TYPES = frozenset({FieldType.STRING, FieldType.TEXT})
INTEGER_TYPES = frozenset({FieldType.LONG, FieldType.INT})

LOCUS_FIELDS: tuple[tuple[str, frozenset[FieldType]], ...] = (
    (CHROMOSOME, STRING_TYPES),
    (POSITION, INTEGER_TYPES),
)


class Annotator(ABC):
    """Adds reference knowledge to variant records.

    Hosts check ``can_annotate`` once per input schema and only call
    ``annotate`` on records of a conforming schema.
    """

    name: ClassVar[str]
    required_fields: ClassVar[tuple[tuple[str, frozenset[FieldType]], ...]] = LOCUS_FIELDS

    def can_annotate(self, schema: RecordSchema) -> bool | str:
        """Return True if the schema has every required field with an accepted type.

        Otherwise returns a human readable reason describing the mismatch.
        """
        for field, accepted in self.required_fields:
            field_type = schema.get(field)
            if field_type is None:
                return MISSING_ATTRIBUTE_REASON
            if field_type not in accepted:
                return WRONG_DATATYPE_REASON
        return True

    @abstractmethod
    def annotate(self, record: Mapping[str, Any]) -> list[dict[str, Any]]:
        """Return zero or more output records for one input record.

        Must not modify ``record``.
        """

    @abstractmethod
    def output_fields(self) -> list[tuple[str, FieldType]]:
        """Fields written by this annotator, in declaration order."""

    def close(self) -> None:
        """Release resources held by the annotator."""

    @staticmethod
    def locus_of(record: Mapping[str, Any]) -> Locus:
        """Build the locus of an input record."""
        return Locus(chromosome=str(record[CHROMOSOME]), position=int(record[POSITION]))
