from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from io import StringIO

import pandas as pd

from ..errors import EmptyInputError, MalformedInputError
from ..models.columns import CanonicalHeader
from .headers import is_canonical, normalize_headers

"""Tokenizer for preprocessed export text (pandas based).

Every cell is read as ``str`` with pandas' NA coercion disabled, so ``N/A`` or
``-`` reach the field parser untouched. Cells missing from a short line come
back as None; fields beyond the header width (trailing delimiters) are
dropped. ``index_col=False`` keeps pandas from turning a trailing delimiter
into an implicit index column.

A stray or unbalanced double quote makes the quote-aware parse fail; the text
is then read again with quoting disabled, so the quote stays in the cell and
the rest of the file is still usable.
"""

__all__ = [
    "TableData",
    "read_table",
]

logger = logging.getLogger(__name__)


@dataclass
class TableData:
    delimiter: str
    raw_columns: list[str]
    columns: list[CanonicalHeader | str]  # normalized, same order as raw_columns
    rows: list[list[str | None]]
    unrecognized_columns: list[str] = field(default_factory=list)
    quoting_disabled: bool = False  # True when the quote-less fallback was used


def _read_csv(text: str, delimiter: str, quoting: int) -> pd.DataFrame:
    return pd.read_csv(
        StringIO(text),
        sep=delimiter,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        quoting=quoting,
        engine="python",
    )


def read_table(text: str, delimiter: str) -> TableData:
    """Parse preprocessed text into header + raw cell rows.

    Args:
        text: Output of ``preprocess`` (header line first)
        delimiter: ``;`` or ``,`` as returned by ``detect_delimiter``

    Returns:
        TableData with normalized headers and one list of cells per data line

    Raises:
        EmptyInputError: no header line or no data lines
        MalformedInputError: the text cannot be tokenized even without quoting
    """
    quoting_disabled = False
    try:
        try:
            df = _read_csv(text, delimiter, csv.QUOTE_MINIMAL)
        except pd.errors.ParserError as e:
            logger.warning(f"unbalanced quotes ({e}); re-reading with quoting disabled")
            quoting_disabled = True
            df = _read_csv(text, delimiter, csv.QUOTE_NONE)
    except pd.errors.EmptyDataError as e:
        raise EmptyInputError("file has no header line") from e
    except pd.errors.ParserError as e:
        raise MalformedInputError(f"cannot tokenize file: {e}") from e
    if df.empty:
        raise EmptyInputError("file has a header but no data lines")

    # trailing delimiter on the header line: pandas names the empty column "Unnamed: N"
    blank = [c for c in df.columns if str(c).startswith("Unnamed: ") and (df[c].fillna("") == "").all()]
    if blank:
        df = df.drop(columns=blank)

    raw_columns = [str(c) for c in df.columns]
    columns = normalize_headers(raw_columns)
    rows: list[list[str | None]] = []
    for raw in df.itertuples(index=False, name=None):
        rows.append([None if pd.isna(v) else str(v) for v in raw])

    unrecognized = [str(c) for c in columns if not is_canonical(c)]
    if unrecognized:
        logger.debug("unrecognized columns passed through: %s", unrecognized)

    return TableData(
        delimiter=delimiter,
        raw_columns=raw_columns,
        columns=columns,
        rows=rows,
        unrecognized_columns=unrecognized,
        quoting_disabled=quoting_disabled,
    )
