from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..models.columns import IDENTITY_COLUMNS, NUMERIC_COLUMNS, CanonicalHeader
from ..models.rows import AggregationRow, AnovaRow, Row, is_anova_kind
from ..tabular.fields import clean_string, parse_numeric

"""Row classification: split parsed rows into the ordinary and ANOVA families.

A row is skipped only when an identity field is missing: empty
``Tipo_Agregacion``, or a dimension that is empty or the literal ``"0"``
(footer/summary artifacts keep a valid kind label but carry no dimension).
Malformed numeric cells never skip a row; they become None.
"""

__all__ = [
    "ClassifiedRows",
    "build_row_map",
    "classify",
    "classify_rows",
]

logger = logging.getLogger(__name__)

_H = CanonicalHeader


@dataclass
class ClassifiedRows:
    """Classifier output, each family in source order."""
    ordinary: list[AggregationRow] = field(default_factory=list)
    anova: list[AnovaRow] = field(default_factory=list)
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.ordinary) + len(self.anova)


def build_row_map(
    header_row: Sequence[CanonicalHeader | str], data_row: Sequence[str | None]
) -> dict[str, str | None]:
    """Pair normalized headers with raw cells.

    When two source columns normalize to the same header (``Dimension1`` and
    ``Asignatura``), the first non-empty cell wins.
    """
    row_map: dict[str, str | None] = {}
    for idx, header in enumerate(header_row):
        value = data_row[idx] if idx < len(data_row) else None
        key = str(header)
        if row_map.get(key):
            continue
        row_map[key] = value
    return row_map


def _pick(row_map: dict[str, str | None], preferred: CanonicalHeader, fallback: CanonicalHeader) -> str | None:
    # empty preferred cell falls back, "0" does not
    return row_map.get(preferred) or row_map.get(fallback)


def _identity(row_map: dict[str, str | None]) -> dict[str, str]:
    return {h.attribute: clean_string(row_map.get(h)) for h in IDENTITY_COLUMNS}


def _reshape_anova(row_map: dict[str, str | None]) -> AnovaRow:
    return AnovaRow(
        **_identity(row_map),
        n=parse_numeric(_pick(row_map, _H.GRUPOS_CON_DATOS, _H.N)),
        sin_evaluar=clean_string(_pick(row_map, _H.CALCULABLE, _H.SIN_EVALUAR)),
        media=parse_numeric(_pick(row_map, _H.DIFERENCIA_MEDIAS, _H.MEDIA)),
        desv_tipica=clean_string(_pick(row_map, _H.INTERPRETACION, _H.DESV_TIPICA)),
    )


def _reshape_ordinary(row_map: dict[str, str | None]) -> AggregationRow:
    typed: dict[str, float | None] = {}
    extra: dict[str, str] = {}
    for key, value in row_map.items():
        try:
            header = CanonicalHeader(key)
        except ValueError:
            header = None
        if header is not None and header in NUMERIC_COLUMNS:
            typed[header.attribute] = parse_numeric(value)
        elif header is None or header in (_H.CALCULABLE, _H.INTERPRETACION):
            if key:
                extra[key] = clean_string(value)
    return AggregationRow(**_identity(row_map), **typed, extra=extra)


def classify(
    header_row: Sequence[CanonicalHeader | str], data_row: Sequence[str | None]
) -> Row | None:
    """Classify one data row. Returns None when the row must be skipped."""
    row_map = build_row_map(header_row, data_row)

    tipo = clean_string(row_map.get(_H.TIPO_AGREGACION))
    if not tipo:
        return None

    dimension = clean_string(row_map.get(_H.DIMENSION1))
    if not dimension or dimension == "0":
        return None

    if is_anova_kind(tipo):
        return _reshape_anova(row_map)
    return _reshape_ordinary(row_map)


def classify_rows(
    header_row: Sequence[CanonicalHeader | str], data_rows: Iterable[Sequence[str | None]]
) -> ClassifiedRows:
    """Classify every data row of one file.

    Args:
        header_row: Normalized headers
        data_rows: Raw cell rows in source order

    Returns:
        ClassifiedRows with both families in source order and the skip count
    """
    result = ClassifiedRows()
    for line_no, data_row in enumerate(data_rows, start=2):
        row = classify(header_row, data_row)
        if row is None:
            result.skipped += 1
            logger.debug("line %d skipped: missing aggregation type or dimension", line_no)
        elif isinstance(row, AnovaRow):
            result.anova.append(row)
        else:
            result.ordinary.append(row)
    return result
