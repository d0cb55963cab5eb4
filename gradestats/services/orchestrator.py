from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from ..errors import GradeFileError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ParseConfig
from ..models.error_record import FILE_LEVEL
from ..models.processing_result import FileStat, ProcessingResult
from ..models.source_file import FileStatus, SourceFile
from .pipeline import decode_bytes, parse_detailed
from .progress import ProgressTracker

"""Batch orchestration over a directory of grade exports.

Each file is parsed independently: a failure is recorded in the JSON Lines
error log and the run continues with the next file. Only configuration-level
problems (missing or unreadable source directory) abort the run.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents the batch from running."""
    pass


def scan_export_files(directory: Path, pattern: str = "*.csv") -> list[Path]:
    """Export files matching ``pattern`` (non-recursive), sorted by name.

    Raises:
        ProcessingError: directory missing, not a directory, or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(p for p in directory.glob(pattern) if p.is_file())
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def today_in(timezone: str) -> date:
    return datetime.now(ZoneInfo(timezone)).date()


def process_file(
    file_path: Path,
    config: ParseConfig,
    error_log: ErrorLogBuffer,
    *,
    today: date | None = None,
) -> SourceFile:
    """Parse one file and write its JSON when an output directory is configured.

    Never raises for per-file problems; they end up in ``error_log`` and in the
    returned SourceFile's status.
    """
    source = SourceFile(
        path=file_path,
        name=file_path.name,
        start_time=datetime.now(UTC),
        status=FileStatus.PROCESSING,
    )

    def _fail(error_type: str, message: str) -> SourceFile:
        error_log.append(ErrorRecord.create(file_path.name, FILE_LEVEL, error_type, message))
        logger.error(f"{file_path.name}: {message}")
        return replace(
            source,
            end_time=datetime.now(UTC),
            status=FileStatus.FAILED,
            error=message,
            error_type=error_type,
        )

    try:
        raw = file_path.read_bytes()
    except OSError as e:
        return _fail("READ_ERROR", str(e))

    try:
        outcome = parse_detailed(
            decode_bytes(raw, config.encoding),
            today=today or today_in(config.timezone),
        )
    except GradeFileError as e:
        return _fail(e.error_type, str(e))

    output_path: Path | None = None
    if config.output_directory:
        output_dir = Path(config.output_directory)
        output_path = output_dir / f"{file_path.stem}.json"
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            output_path.write_text(outcome.dataset.to_json(), encoding="utf-8")
        except OSError as e:
            return _fail("WRITE_ERROR", str(e))

    logger.info(
        f"{file_path.name}: rows={len(outcome.dataset)} skipped={outcome.skipped_rows} "
        f"delimiter={outcome.delimiter!r} profesor={outcome.dataset.profesor!r}"
    )
    return replace(
        source,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        total_rows=len(outcome.dataset),
        skipped_rows=outcome.skipped_rows,
        output_path=output_path,
        delimiter=outcome.delimiter,
    )


def process_all(config: ParseConfig, *, today: date | None = None) -> ProcessingResult:
    """Parse every export in the configured directory.

    Raises:
        ProcessingError: the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(Path(config.logs_directory))

    file_paths = scan_export_files(Path(config.source_directory), config.file_pattern)

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_rows = 0
    total_skipped = 0

    with ProgressTracker(len(file_paths), description="Parsing files") as progress:
        for file_path in file_paths:
            progress.start_file(file_path)

            result = process_file(file_path, config, error_log, today=today)

            if result.status == FileStatus.SUCCESS:
                success_count += 1
                total_rows += result.total_rows
                total_skipped += result.skipped_rows
            else:
                failed_count += 1

            progress.finish_file(success=(result.status == FileStatus.SUCCESS), rows=result.total_rows)

            elapsed = 0.0
            if result.start_time and result.end_time:
                elapsed = (result.end_time - result.start_time).total_seconds()
            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=result.status.value,
                    parsed_rows=result.total_rows,
                    elapsed_seconds=elapsed,
                    delimiter=result.delimiter,
                    error_type=result.error_type,
                )
            )

    try:
        log_path = error_log.flush()
        if log_path is not None and failed_count:
            logger.info(f"error log: {log_path}")
    except OSError as e:
        # the summary is still worth printing
        logger.warning(f"failed to write error log: {e}")

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_rows=total_rows,
        skipped_rows=total_skipped,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        file_stats=file_stats,
    )
