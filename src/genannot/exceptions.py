"""Exceptions raised while loading reference data."""


class AnnotationError(Exception):
    """Base exception for genannot."""

    pass


class IOFailure(AnnotationError):
    """Raised when a reference resource is unreachable and no cache exists."""

    def __init__(self, message: str, source: str | None = None, cache_key: str | None = None):
        super().__init__(message)
        self.source = source
        self.cache_key = cache_key


class FormatError(AnnotationError):
    """Raised when a kept dataset record cannot be parsed.

    A single bad record aborts the whole dataset load; downstream indexes
    assume every structured record is well formed.
    """

    def __init__(self, message: str, dataset: str | None = None, line_number: int | None = None):
        if dataset and line_number is not None:
            message = f"{dataset} line {line_number}: {message}"
        elif dataset:
            message = f"{dataset}: {message}"
        super().__init__(message)
        self.dataset = dataset
        self.line_number = line_number
