from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from ..models.columns import AggregationKind
from ..models.dataset import ParsedDataset
from ..models.rows import AggregationRow, AnovaRow, Row

"""Read-only accessors over ``ParsedDataset.datos``.

All functions are pure: they take the row collection (or datasets) explicitly
and return new lists; nothing here mutates rows or keeps state between calls.
``kind`` arguments accept an ``AggregationKind`` or the raw string, so unknown
kinds can still be queried.

Besides the per-family accessors this module builds the two derived views
downstream reports need: the course x specialty grid of means
(``build_matrix``) and the per-period series across several exports
(``build_evolution``).
"""

__all__ = [
    "AnovaGroups",
    "MatrixGrid",
    "EvolutionPoint",
    "ALL_MARKER",
    "filter_by_type",
    "get_aggregation_types",
    "get_unique_dimension1",
    "get_unique_dimension2",
    "get_global_data",
    "get_asignaturas",
    "get_cursos",
    "get_especialidades",
    "get_matriz",
    "get_anova",
    "find_matrix_cell",
    "build_matrix",
    "has_notable_difference",
    "calculable_anova",
    "count_notable",
    "sort_anova_rows",
    "sort_datasets",
    "get_asignaturas_across",
    "build_evolution",
]

# Dimension value meaning "all groups"; never listed as a distinct value
ALL_MARKER = "TODOS"

# Course labels containing this marker sort before every numbered course
_LEADING_STAGE_MARKER = "EEM"
_LEADING_INT_RE = re.compile(r"^\s*[+-]?\d+")


class AnovaGroups(NamedTuple):
    cursos: list[AnovaRow]
    especialidades: list[AnovaRow]


class MatrixGrid(NamedTuple):
    """Course x specialty grid; ``values[i][j]`` is the mean of cursos[i] x especialidades[j]."""
    cursos: list[str]
    especialidades: list[str]
    values: list[list[float | None]]


class EvolutionPoint(NamedTuple):
    """One period of an evolution series (one export)."""
    ano: str
    fecha: str
    media: float | None
    n: float | None
    pct_aprobados: float | None
    tendencia: float | None  # media minus the previous period's media


def _kind_value(kind: AggregationKind | str) -> str:
    return kind.value if isinstance(kind, AggregationKind) else kind


def filter_by_type(datos: Iterable[Row], kind: AggregationKind | str) -> list[Row]:
    """Rows whose ``Tipo_Agregacion`` equals ``kind``, in dataset order.

    Args:
        datos: Rows of a ParsedDataset
        kind: Known kind or raw kind string

    Returns:
        Matching rows (empty list when none match)
    """
    value = _kind_value(kind)
    return [row for row in datos if row.tipo_agregacion == value]


def get_aggregation_types(datos: Iterable[Row]) -> list[str]:
    """Distinct aggregation kinds (first-seen order, callers must not rely on it)."""
    return list(dict.fromkeys(row.tipo_agregacion for row in datos))


def _unique(values: Iterable[str]) -> list[str]:
    return sorted({v for v in values if v and v != ALL_MARKER})


def get_unique_dimension1(datos: Sequence[Row], kind: AggregationKind | str | None = None) -> list[str]:
    """Sorted distinct ``Dimension1`` values, without empties and ``TODOS``.

    Args:
        datos: Rows of a ParsedDataset
        kind: Restrict to one aggregation kind (all rows when None)
    """
    rows = filter_by_type(datos, kind) if kind else datos
    return _unique(row.dimension1 for row in rows)


def get_unique_dimension2(datos: Sequence[Row], kind: AggregationKind | str | None = None) -> list[str]:
    """Same as ``get_unique_dimension1`` for ``Dimension2``."""
    rows = filter_by_type(datos, kind) if kind else datos
    return _unique(row.dimension2 for row in rows)


def get_global_data(datos: Iterable[Row]) -> Row | None:
    """First ``Global`` row, or None when the export has none."""
    return next((row for row in datos if row.tipo_agregacion == AggregationKind.GLOBAL.value), None)


def get_asignaturas(datos: Iterable[Row]) -> list[Row]:
    return filter_by_type(datos, AggregationKind.POR_ASIGNATURA)


def get_cursos(datos: Iterable[Row]) -> list[Row]:
    return filter_by_type(datos, AggregationKind.POR_CURSO)


def get_especialidades(datos: Iterable[Row]) -> list[Row]:
    return filter_by_type(datos, AggregationKind.POR_ESPECIALIDAD)


def get_matriz(datos: Iterable[Row]) -> list[Row]:
    return filter_by_type(datos, AggregationKind.POR_CURSO_ESPECIALIDAD)


def get_anova(datos: Sequence[Row]) -> AnovaGroups:
    """ANOVA rows split by kind, each list in dataset order."""
    return AnovaGroups(
        cursos=[r for r in filter_by_type(datos, AggregationKind.ANOVA_CURSOS) if isinstance(r, AnovaRow)],
        especialidades=[
            r for r in filter_by_type(datos, AggregationKind.ANOVA_ESPECIALIDADES) if isinstance(r, AnovaRow)
        ],
    )


def find_matrix_cell(datos: Iterable[Row], dimension1: str, dimension2: str) -> AggregationRow | None:
    """Course x specialty cell; duplicate pairs resolve to the first row."""
    for row in get_matriz(datos):
        if row.dimension1 == dimension1 and row.dimension2 == dimension2 and isinstance(row, AggregationRow):
            return row
    return None


def _leading_int(label: str) -> int:
    match = _LEADING_INT_RE.match(label)
    return int(match.group(0)) if match else 0


def _course_sort_key(curso: str) -> tuple[int, int]:
    return (0 if _LEADING_STAGE_MARKER in curso else 1, _leading_int(curso))


def build_matrix(datos: Iterable[Row], *, hide_empty: bool = False) -> MatrixGrid:
    """Build the grid of ``Media`` values for the course x specialty family.

    Courses are ordered with ``EEM`` courses first, then by their leading
    number (``"2º ESO"`` -> 2, no number -> 0); ties keep first-seen order.
    Specialties are sorted alphabetically. Duplicate pairs resolve to the
    first row, as in ``find_matrix_cell``.

    Args:
        datos: Rows of a ParsedDataset
        hide_empty: Drop courses and specialties whose cells are all None

    Returns:
        MatrixGrid with one row of values per course
    """
    rows = [r for r in get_matriz(datos) if isinstance(r, AggregationRow)]
    cursos = sorted(dict.fromkeys(r.dimension1 for r in rows if r.dimension1), key=_course_sort_key)
    especialidades = sorted({r.dimension2 for r in rows if r.dimension2})

    cells: dict[tuple[str, str], float | None] = {}
    for row in rows:
        cells.setdefault((row.dimension1, row.dimension2), row.media)
    values = [[cells.get((c, e)) for e in especialidades] for c in cursos]

    if hide_empty:
        keep_cols = [j for j in range(len(especialidades)) if any(line[j] is not None for line in values)]
        keep_rows = [i for i, line in enumerate(values) if any(v is not None for v in line)]
        cursos = [cursos[i] for i in keep_rows]
        especialidades = [especialidades[j] for j in keep_cols]
        values = [[values[i][j] for j in keep_cols] for i in keep_rows]

    return MatrixGrid(cursos=cursos, especialidades=especialidades, values=values)


def has_notable_difference(row: Row) -> bool:
    return isinstance(row, AnovaRow) and row.has_notable_difference


def calculable_anova(rows: Iterable[AnovaRow]) -> list[AnovaRow]:
    return [row for row in rows if row.calculable]


def count_notable(rows: Iterable[AnovaRow]) -> tuple[int, int]:
    """(notable, calculable) counts, both over calculable rows only."""
    calculable = calculable_anova(rows)
    return sum(1 for row in calculable if row.has_notable_difference), len(calculable)


def sort_anova_rows(rows: Iterable[AnovaRow]) -> list[AnovaRow]:
    """Calculable rows first, notable differences first within each group."""
    return sorted(rows, key=lambda r: (not r.calculable, not r.has_notable_difference))


def sort_datasets(datasets: Iterable[ParsedDataset]) -> list[ParsedDataset]:
    """Chronological order: academic year, then generation date."""
    return sorted(datasets, key=lambda d: (d.ano, d.fecha))


def get_asignaturas_across(datasets: Iterable[ParsedDataset]) -> list[str]:
    """Sorted subjects appearing in any dataset's per-subject rows (``TODOS`` excluded)."""
    return _unique(row.dimension1 for ds in datasets for row in get_asignaturas(ds.datos))


def build_evolution(datasets: Iterable[ParsedDataset], asignatura: str | None = None) -> list[EvolutionPoint]:
    """Per-period series of one subject (or the global row) across exports.

    Args:
        datasets: Exports of one profesor, in any order
        asignatura: Subject (``Dimension1`` of ``Por_Asignatura`` rows);
            None follows the ``Global`` row

    Returns:
        One EvolutionPoint per dataset in ``sort_datasets`` order. A period
        without the subject has None values; ``tendencia`` is None unless both
        this and the previous period have a mean.
    """
    points: list[EvolutionPoint] = []
    previous: float | None = None
    for ds in sort_datasets(datasets):
        if asignatura is None:
            found = get_global_data(ds.datos)
        else:
            found = next((r for r in get_asignaturas(ds.datos) if r.dimension1 == asignatura), None)
        row = found if isinstance(found, AggregationRow) else None

        media = row.media if row else None
        tendencia = media - previous if media is not None and previous is not None else None
        points.append(
            EvolutionPoint(
                ano=ds.ano,
                fecha=ds.fecha,
                media=media,
                n=row.n if row else None,
                pct_aprobados=row.pct_aprobados if row else None,
                tendencia=tendencia,
            )
        )
        previous = media
    return points
