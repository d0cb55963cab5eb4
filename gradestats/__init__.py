"""Ingestion and normalization of grade statistics exports.

Turns semi-structured delimited exports (variable delimiters, preamble and
footer noise, mis-decoded accents, locale decimals, ANOVA rows multiplexed
with aggregation rows) into an immutable ``ParsedDataset``.

Modules:
    - tabular: preprocessing, header normalization, cell parsing, tokenizing
    - services: classification, dataset building, queries, batch orchestration
    - models: canonical columns, row families, dataset, result records
    - config / logging / cli: batch tool plumbing
"""

from .errors import (
    EmptyDatasetError,
    EmptyInputError,
    GradeFileError,
    InvalidDatasetError,
    MalformedInputError,
    MissingColumnsError,
)
from .models.columns import AggregationKind, CanonicalHeader
from .models.dataset import ParsedDataset
from .models.rows import AggregationRow, AnovaRow, Row
from .services.pipeline import parse_bytes, parse_file, parse_text

__version__ = "1.0.0"

__all__ = [
    "AggregationKind",
    "AggregationRow",
    "AnovaRow",
    "CanonicalHeader",
    "EmptyDatasetError",
    "EmptyInputError",
    "GradeFileError",
    "InvalidDatasetError",
    "MalformedInputError",
    "MissingColumnsError",
    "ParsedDataset",
    "Row",
    "parse_bytes",
    "parse_file",
    "parse_text",
]
