from __future__ import annotations

"""Error taxonomy for grade statistics ingestion.

Every error is fatal to the single parse call that raised it; nothing is
retried internally. ``error_type`` is the UPPER_SNAKE code written to the
JSON Lines error log by the orchestrator.
"""

__all__ = [
    "GradeFileError",
    "EmptyInputError",
    "MissingColumnsError",
    "EmptyDatasetError",
    "InvalidDatasetError",
    "MalformedInputError",
]


class GradeFileError(Exception):
    """Base class for errors raised while parsing one export file."""

    error_type = "GRADE_FILE_ERROR"


class EmptyInputError(GradeFileError):
    """No content, or no data lines left after preprocessing."""

    error_type = "EMPTY_INPUT"

    def __init__(self, message: str = "file is empty or has no data lines") -> None:
        super().__init__(message)


class MissingColumnsError(GradeFileError):
    """Required identity columns are absent from the header."""

    error_type = "MISSING_COLUMNS"

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"missing columns: {', '.join(self.missing)}")


class EmptyDatasetError(GradeFileError):
    """Header is valid but no row survived classification."""

    error_type = "EMPTY_DATASET"

    def __init__(self, message: str = "no usable rows after classification") -> None:
        super().__init__(message)


class InvalidDatasetError(GradeFileError):
    """A serialized dataset could not be rebuilt."""

    error_type = "INVALID_DATASET"


class MalformedInputError(GradeFileError):
    """The delimited text could not be tokenized, even without quote handling."""

    error_type = "MALFORMED_INPUT"
