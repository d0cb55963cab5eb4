"""Domain models for grade statistics ingestion.

Row families and the dataset are the parsing core's output; the remaining
models describe batch runs (configuration, per-file context, results, error
records).
"""

from .columns import AggregationKind, CanonicalHeader
from .config_models import ParseConfig
from .dataset import ParsedDataset
from .error_record import ErrorRecord
from .processing_result import FileStat, ProcessingResult
from .rows import AggregationRow, AnovaRow, Row
from .source_file import FileStatus, SourceFile

__all__ = [
    # Core models
    "AggregationKind",
    "AggregationRow",
    "AnovaRow",
    "CanonicalHeader",
    "ParsedDataset",
    "Row",
    # Batch models
    "ErrorRecord",
    "FileStat",
    "FileStatus",
    "ParseConfig",
    "ProcessingResult",
    "SourceFile",
]
