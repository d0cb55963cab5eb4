from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from ..models.dataset import ParsedDataset
from ..tabular.preprocess import count_data_lines, detect_delimiter, preprocess
from ..tabular.reader import TableData, read_table
from .builder import build, validate_headers
from .classifier import classify_rows

"""Single-file parse pipeline: preprocess -> tokenize -> classify -> build.

Synchronous and stateless: independent calls share nothing, so several files
can be parsed concurrently by the caller. Acquiring the bytes (disk, network)
is the caller's job; ``parse_file`` is a thin convenience for local paths.
"""

__all__ = [
    "ParseOutcome",
    "decode_bytes",
    "load_table",
    "parse_detailed",
    "parse_text",
    "parse_bytes",
    "parse_file",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOutcome:
    dataset: ParsedDataset
    delimiter: str
    skipped_rows: int
    unrecognized_columns: tuple[str, ...]


def decode_bytes(data: bytes | None, encoding: str = "utf-8") -> str:
    """Undecodable bytes are replaced, matching a browser text read."""
    return data.decode(encoding, errors="replace") if data else ""


def load_table(raw_text: str | None) -> TableData:
    """Preprocess and tokenize without classifying (used by ``--inspect-data``)."""
    text = preprocess(raw_text)
    delimiter = detect_delimiter(text)
    logger.debug("delimiter detected: %r (%d data lines)", delimiter, count_data_lines(text))
    return read_table(text, delimiter)


def parse_detailed(raw_text: str | None, *, today: date | None = None) -> ParseOutcome:
    """Parse one export's text, keeping diagnostics next to the dataset.

    Raises:
        EmptyInputError: no content or no data lines
        MalformedInputError: text cannot be tokenized
        MissingColumnsError: Tipo_Agregacion / Profesor / Etapa absent
        EmptyDatasetError: no row survived classification
    """
    table = load_table(raw_text)
    validate_headers(table.columns)
    classified = classify_rows(table.columns, table.rows)
    dataset = build(classified, today=today)
    return ParseOutcome(
        dataset=dataset,
        delimiter=table.delimiter,
        skipped_rows=classified.skipped,
        unrecognized_columns=tuple(table.unrecognized_columns),
    )


def parse_text(raw_text: str | None, *, today: date | None = None) -> ParsedDataset:
    """Parse one export's text into a ParsedDataset (see ``parse_detailed``)."""
    return parse_detailed(raw_text, today=today).dataset


def parse_bytes(data: bytes | None, encoding: str = "utf-8", *, today: date | None = None) -> ParsedDataset:
    """Decode raw export bytes and parse them.

    Args:
        data: File content as read from disk or an upload
        encoding: Byte encoding; undecodable bytes become U+FFFD
        today: Date used when the export carries no generation date

    Returns:
        The parsed dataset
    """
    return parse_text(decode_bytes(data, encoding), today=today)


def parse_file(path: Path, encoding: str = "utf-8", *, today: date | None = None) -> ParsedDataset:
    """Read a local export file and parse it (see ``parse_bytes``)."""
    return parse_bytes(Path(path).read_bytes(), encoding, today=today)
