from __future__ import annotations

from enum import Enum, StrEnum

"""Canonical column names and aggregation kinds.

The export tools that produce grade statistics files spell some columns in
several ways (alternate names, UTF-8 read as Latin-1). Internally every column
is addressed through ``CanonicalHeader``; ``COLUMN_VARIANTS`` is the static
table that maps accepted spellings onto it.
"""

__all__ = [
    "CanonicalHeader",
    "AggregationKind",
    "COLUMN_VARIANTS",
    "IDENTITY_COLUMNS",
    "NUMERIC_COLUMNS",
    "REQUIRED_COLUMNS",
    "GRADE_BUCKETS",
]


class CanonicalHeader(StrEnum):
    """Logical column names. ``member.name.lower()`` is the row attribute name."""

    # identity
    TIPO_AGREGACION = "Tipo_Agregacion"
    PROFESOR = "Profesor"
    ETAPA = "Etapa"
    ANO_ACADEMICO = "Año_Academico"
    CENTRO = "Centro"
    FECHA_GENERACION = "Fecha_Generacion"
    DIMENSION1 = "Dimension1"
    DIMENSION2 = "Dimension2"
    # statistics
    N = "N"
    SIN_EVALUAR = "Sin_Evaluar"
    MEDIA = "Media"
    DESV_TIPICA = "Desv_Tipica"
    COEF_VARIACION = "Coef_Variacion"
    MODA = "Moda"
    MEDIANA = "Mediana"
    P25 = "P25"
    P75 = "P75"
    MIN = "Min"
    MAX = "Max"
    NOTAS_1 = "Notas_1"
    NOTAS_2 = "Notas_2"
    NOTAS_3 = "Notas_3"
    NOTAS_4 = "Notas_4"
    NOTAS_5 = "Notas_5"
    NOTAS_6 = "Notas_6"
    NOTAS_7 = "Notas_7"
    NOTAS_8 = "Notas_8"
    NOTAS_9 = "Notas_9"
    NOTAS_10 = "Notas_10"
    APROBADOS = "Aprobados"
    SUSPENSOS = "Suspensos"
    PCT_APROBADOS = "Pct_Aprobados"
    PCT_SUSPENSOS = "Pct_Suspensos"
    # ANOVA sources
    GRUPOS_CON_DATOS = "Grupos_Con_Datos"
    DIFERENCIA_MEDIAS = "Diferencia_Medias"
    CALCULABLE = "Calculable"
    INTERPRETACION = "Interpretacion"

    @property
    def attribute(self) -> str:
        return self.name.lower()


class AggregationKind(Enum):
    """Known values of ``Tipo_Agregacion``.

    Rows store the raw string, so a kind missing here is still accepted into
    the ordinary family.
    """
    GLOBAL = "Global"
    POR_ASIGNATURA = "Por_Asignatura"
    POR_CURSO = "Por_Curso"
    POR_ESPECIALIDAD = "Por_Especialidad"
    POR_CURSO_ESPECIALIDAD = "Por_Curso_Especialidad"
    ANOVA_CURSOS = "ANOVA_Cursos"
    ANOVA_ESPECIALIDADES = "ANOVA_Especialidades"

    @property
    def is_anova(self) -> bool:
        return self.value.startswith(ANOVA_PREFIX)


ANOVA_PREFIX = "ANOVA"

COLUMN_VARIANTS: dict[CanonicalHeader, tuple[str, ...]] = {
    CanonicalHeader.TIPO_AGREGACION: ("Tipo_Agregacion", "Tipo_Analisis"),
    CanonicalHeader.PROFESOR: ("Profesor",),
    CanonicalHeader.ETAPA: ("Etapa",),
    CanonicalHeader.ANO_ACADEMICO: ("Año_Academico", "AÃ±o_Academico", "Ano_Academico"),
    CanonicalHeader.CENTRO: ("Centro",),
    CanonicalHeader.FECHA_GENERACION: ("Fecha_Generacion", "Fecha_Generación"),
    CanonicalHeader.DIMENSION1: ("Dimension1", "Asignatura"),
    CanonicalHeader.DIMENSION2: ("Dimension2", "Dimension_Analizada"),
}

IDENTITY_COLUMNS: tuple[CanonicalHeader, ...] = (
    CanonicalHeader.TIPO_AGREGACION,
    CanonicalHeader.PROFESOR,
    CanonicalHeader.ETAPA,
    CanonicalHeader.ANO_ACADEMICO,
    CanonicalHeader.CENTRO,
    CanonicalHeader.FECHA_GENERACION,
    CanonicalHeader.DIMENSION1,
    CanonicalHeader.DIMENSION2,
)

GRADE_BUCKETS: tuple[CanonicalHeader, ...] = tuple(
    CanonicalHeader[f"NOTAS_{i}"] for i in range(1, 11)
)

# Columns parsed with parse_numeric; everything else is text.
NUMERIC_COLUMNS: frozenset[CanonicalHeader] = frozenset(
    {
        CanonicalHeader.N,
        CanonicalHeader.SIN_EVALUAR,
        CanonicalHeader.MEDIA,
        CanonicalHeader.DESV_TIPICA,
        CanonicalHeader.COEF_VARIACION,
        CanonicalHeader.MODA,
        CanonicalHeader.MEDIANA,
        CanonicalHeader.P25,
        CanonicalHeader.P75,
        CanonicalHeader.MIN,
        CanonicalHeader.MAX,
        *GRADE_BUCKETS,
        CanonicalHeader.APROBADOS,
        CanonicalHeader.SUSPENSOS,
        CanonicalHeader.PCT_APROBADOS,
        CanonicalHeader.PCT_SUSPENSOS,
        CanonicalHeader.GRUPOS_CON_DATOS,
        CanonicalHeader.DIFERENCIA_MEDIAS,
    }
)

REQUIRED_COLUMNS: tuple[CanonicalHeader, ...] = (
    CanonicalHeader.TIPO_AGREGACION,
    CanonicalHeader.PROFESOR,
    CanonicalHeader.ETAPA,
)
