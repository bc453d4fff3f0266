"""Field types used to describe host input records."""

from enum import Enum
from typing import Mapping


class FieldType(str, Enum):
    """Semantic datatype of a record attribute."""

    STRING = "string"
    TEXT = "text"
    INT = "int"
    LONG = "long"
    DECIMAL = "decimal"
    BOOL = "bool"


# Field name -> declared type, as supplied by the host alongside its records
RecordSchema = Mapping[str, FieldType]
