from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, ClassVar, TypeAlias

from ..tabular.fields import clean_string, parse_numeric
from .columns import ANOVA_PREFIX, AggregationKind, CanonicalHeader

"""Typed row model for grade statistics exports.

A file multiplexes two row families behind the same columns:

- ``AggregationRow``: one aggregation unit (global, per subject, per course...)
  with every statistic typed as ``float | None``.
- ``AnovaRow``: a statistical-test summary whose payload columns are
  repurposed by the export format (``N`` = groups with data, ``Sin_Evaluar`` =
  calculability flag, ``Media`` = mean difference, ``Desv_Tipica`` =
  interpretation label).

Both share ``RowIdentity``; ``Row`` is the tagged union, discriminated by the
``ANOVA`` prefix of ``Tipo_Agregacion``.
"""

__all__ = [
    "RowIdentity",
    "AggregationRow",
    "AnovaRow",
    "Row",
    "row_from_dict",
    "is_anova_kind",
]

CALCULABLE_FLAG = "Sí"
NOTABLE_MARKER = "notable"


def is_anova_kind(tipo: str) -> bool:
    return tipo.startswith(ANOVA_PREFIX)


@dataclass(frozen=True)
class RowIdentity:
    """Identity columns common to both row families."""
    tipo_agregacion: str
    profesor: str
    etapa: str
    ano_academico: str
    centro: str
    fecha_generacion: str
    dimension1: str
    dimension2: str

    # Columns typed as float | None in this family (everything else is text)
    _numeric_headers: ClassVar[frozenset[CanonicalHeader]] = frozenset()

    @property
    def kind(self) -> AggregationKind | None:
        """Known aggregation kind, or None for kinds this package does not list."""
        try:
            return AggregationKind(self.tipo_agregacion)
        except ValueError:
            return None

    @property
    def is_anova(self) -> bool:
        return is_anova_kind(self.tipo_agregacion)

    @classmethod
    def _headers(cls) -> list[CanonicalHeader]:
        names = {f.name for f in fields(cls)}
        return [h for h in CanonicalHeader if h.attribute in names]

    @classmethod
    def _coerce(cls, payload: dict[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for header in cls._headers():
            raw = payload.get(header.value)
            if header in cls._numeric_headers:
                if isinstance(raw, (int, float)) and not isinstance(raw, bool):
                    values[header.attribute] = float(raw)
                else:
                    values[header.attribute] = parse_numeric(raw)
            else:
                values[header.attribute] = clean_string(raw)
        return values

    def to_dict(self) -> dict[str, Any]:
        """Serialize using canonical column names as keys."""
        return {h.value: getattr(self, h.attribute) for h in self._headers()}


@dataclass(frozen=True)
class AggregationRow(RowIdentity):
    """Ordinary aggregation row."""
    n: float | None = None
    sin_evaluar: float | None = None
    media: float | None = None
    desv_tipica: float | None = None
    coef_variacion: float | None = None
    moda: float | None = None
    mediana: float | None = None
    p25: float | None = None
    p75: float | None = None
    min: float | None = None
    max: float | None = None
    notas_1: float | None = None
    notas_2: float | None = None
    notas_3: float | None = None
    notas_4: float | None = None
    notas_5: float | None = None
    notas_6: float | None = None
    notas_7: float | None = None
    notas_8: float | None = None
    notas_9: float | None = None
    notas_10: float | None = None
    aprobados: float | None = None
    suspensos: float | None = None
    pct_aprobados: float | None = None
    pct_suspensos: float | None = None
    grupos_con_datos: float | None = None
    diferencia_medias: float | None = None
    # Source columns with no typed field, kept as cleaned text (read-only view)
    extra: Mapping[str, str] = field(default_factory=dict, hash=False)

    _numeric_headers: ClassVar[frozenset[CanonicalHeader]] = frozenset(
        h for h in CanonicalHeader if h.attribute in {
            "n", "sin_evaluar", "media", "desv_tipica", "coef_variacion", "moda",
            "mediana", "p25", "p75", "min", "max", "aprobados", "suspensos",
            "pct_aprobados", "pct_suspensos", "grupos_con_datos", "diferencia_medias",
        } or h.name.startswith("NOTAS_")
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def notas(self) -> tuple[float | None, ...]:
        """Grade bucket counters Notas_1..Notas_10 in order."""
        return tuple(getattr(self, f"notas_{i}") for i in range(1, 11))

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> AggregationRow:
        values = cls._coerce(payload)
        known = {h.value for h in cls._headers()}
        extra = {str(k): clean_string(v) for k, v in payload.items() if k not in known}
        return cls(**values, extra=extra)


@dataclass(frozen=True)
class AnovaRow(RowIdentity):
    """ANOVA summary row; payload fields keep the export's column names."""
    n: float | None = None  # groups with data
    sin_evaluar: str = ""  # calculability flag ("Sí" when calculable)
    media: float | None = None  # mean difference
    desv_tipica: str = ""  # interpretation label

    _numeric_headers: ClassVar[frozenset[CanonicalHeader]] = frozenset(
        {CanonicalHeader.N, CanonicalHeader.MEDIA}
    )

    @property
    def grupos_con_datos(self) -> float | None:
        return self.n

    @property
    def diferencia_medias(self) -> float | None:
        return self.media

    @property
    def interpretacion(self) -> str:
        return self.desv_tipica

    @property
    def calculable(self) -> bool:
        return self.sin_evaluar == CALCULABLE_FLAG

    @property
    def has_notable_difference(self) -> bool:
        return NOTABLE_MARKER in self.desv_tipica.lower()

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> AnovaRow:
        return cls(**cls._coerce(payload))


Row: TypeAlias = AggregationRow | AnovaRow


def row_from_dict(payload: dict[str, Any]) -> Row:
    """Rebuild a row serialized with ``to_dict``, routing on the ANOVA prefix."""
    tipo = clean_string(payload.get(CanonicalHeader.TIPO_AGREGACION.value))
    if is_anova_kind(tipo):
        return AnovaRow.from_dict(payload)
    return AggregationRow.from_dict(payload)
