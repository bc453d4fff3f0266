"""Shared helpers for flat-file dataset parsers."""

import re
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from genannot.exceptions import FormatError

T = TypeVar("T")


_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int(value: str, field: str, dataset: str, line_number: int) -> int:
    """Parse a required integer field or fail the load.

    Surrounding whitespace and digit separators are rejected.
    """
    if not _INTEGER_PATTERN.fullmatch(value):
        raise FormatError(
            f"{field} is not an integer: {value!r}", dataset=dataset, line_number=line_number
        )
    return int(value)


def build_record(factory: Callable[..., T], dataset: str, line_number: int, **fields: Any) -> T:
    """Construct a model, converting validation failures into FormatError."""
    try:
        return factory(**fields)
    except ValidationError as e:
        raise FormatError(str(e), dataset=dataset, line_number=line_number) from e


def require_fields(parts: list[str], count: int, dataset: str, line_number: int) -> None:
    """Fail the load when a row has fewer columns than required."""
    if len(parts) < count:
        raise FormatError(
            f"expected at least {count} fields, found {len(parts)}",
            dataset=dataset,
            line_number=line_number,
        )
