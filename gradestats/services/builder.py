from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime

from ..errors import EmptyDatasetError, MissingColumnsError
from ..models.columns import REQUIRED_COLUMNS, CanonicalHeader
from ..models.dataset import ParsedDataset
from ..models.rows import RowIdentity
from .classifier import ClassifiedRows

"""Dataset assembly: header gate before classification, dataset after."""

__all__ = [
    "validate_headers",
    "build",
]

logger = logging.getLogger(__name__)


def validate_headers(headers: Iterable[CanonicalHeader | str]) -> None:
    """Check the identity columns every export must carry.

    Raises:
        MissingColumnsError: lists the missing canonical names in fixed order
    """
    present = {str(h) for h in headers}
    missing = [h.value for h in REQUIRED_COLUMNS if h.value not in present]
    if missing:
        raise MissingColumnsError(missing)


def build(classified: ClassifiedRows, *, today: date | None = None) -> ParsedDataset:
    """Assemble the dataset: ordinary rows first, then ANOVA rows.

    Metadata comes from the first ordinary row, or the first ANOVA row when
    the file has no ordinary rows. A missing generation date defaults to
    ``today``; without one, the current UTC date is used (the CLI passes the date
    in its configured timezone).

    Raises:
        EmptyDatasetError: no row of either family survived classification
    """
    if not classified.ordinary and not classified.anova:
        raise EmptyDatasetError()

    first: RowIdentity = classified.ordinary[0] if classified.ordinary else classified.anova[0]
    fecha = first.fecha_generacion or (today or datetime.now(UTC).date()).isoformat()

    datos = (*classified.ordinary, *classified.anova)
    logger.debug(
        "built dataset: %d ordinary, %d anova, %d skipped",
        len(classified.ordinary), len(classified.anova), classified.skipped,
    )
    return ParsedDataset(
        profesor=first.profesor,
        etapa=first.etapa,
        ano=first.ano_academico,
        centro=first.centro,
        fecha=fecha,
        datos=datos,
    )
