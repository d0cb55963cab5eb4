from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record per failed file. ``line`` is the 1-based source line when the error
can be tied to one, or -1 for file-level errors (empty input, missing columns,
empty dataset, unreadable file).
"""

__all__ = [
    "ErrorRecord",
    "FILE_LEVEL",
]

FILE_LEVEL = -1


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: export file name
        line: 1-based line number, or -1 for file-level errors
        error_type: UPPER_SNAKE classification (e.g. MISSING_COLUMNS)
        message: human-readable description
    """
    timestamp: str
    file: str
    line: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, line: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            line=line,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize with exactly the dataclass keys, non-ASCII kept readable."""
        return json.dumps(asdict(self), ensure_ascii=False)
