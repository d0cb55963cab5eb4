from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch run result models: per-file stats and the aggregate for SUMMARY."""


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics."""
    file_name: str
    status: str  # success/failed
    parsed_rows: int
    elapsed_seconds: float
    delimiter: str | None = None
    error_type: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for a batch run (feeds the SUMMARY line)."""
    success_files: int
    failed_files: int
    total_rows: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float
    file_stats: list[FileStat] | None = None
