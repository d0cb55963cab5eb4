from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""SourceFile: processing context for one export file in a batch run."""


class FileStatus(Enum):
    """Lifecycle of a file in a batch run.

    State transitions: pending → processing → (success | failed)
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceFile:
    path: Path
    name: str
    start_time: datetime | None = None  # UTC
    end_time: datetime | None = None  # UTC
    status: FileStatus = FileStatus.PENDING
    total_rows: int = 0  # rows in the resulting dataset
    skipped_rows: int = 0  # rows dropped for missing kind / dimension
    output_path: Path | None = None  # JSON written for this file, if any
    error: str | None = None  # failure summary
    error_type: str | None = None  # UPPER_SNAKE code, as in the error log
    delimiter: str | None = None  # detected field delimiter
