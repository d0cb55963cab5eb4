from __future__ import annotations

import pytest

from conftest import HEADER, anova, ordinary
from gradestats.models.rows import AggregationRow, AnovaRow
from gradestats.services.classifier import build_row_map, classify, classify_rows
from gradestats.tabular.headers import normalize_headers

COLUMNS = normalize_headers(HEADER)


def test_ordinary_row_is_typed():
    row = classify(COLUMNS, ordinary("Por_Asignatura", "Matemáticas", media="5,9"))
    assert isinstance(row, AggregationRow)
    assert row.tipo_agregacion == "Por_Asignatura"
    assert row.dimension1 == "Matemáticas"
    assert row.media == pytest.approx(5.9)
    assert row.n == 20.0
    assert row.pct_aprobados == 75.0
    assert row.profesor == "Ana Pérez"


def test_ordinary_row_keeps_unused_anova_columns_as_extra():
    row = classify(COLUMNS, ordinary("Global", "TODOS"))
    assert row.extra == {"Calculable": "", "Interpretacion": ""}
    assert row.grupos_con_datos is None


def test_malformed_numeric_becomes_none():
    row = classify(COLUMNS, ordinary("Por_Curso", "1º ESO A", n="abc", media="N/A"))
    assert row is not None
    assert row.n is None
    assert row.media is None


def test_anova_row_is_remapped():
    row = classify(COLUMNS, anova("ANOVA_Cursos", "Matemáticas"))
    assert isinstance(row, AnovaRow)
    assert row.n == 3.0
    assert row.sin_evaluar == "Sí"
    assert row.media == pytest.approx(0.8)
    assert row.desv_tipica == "Diferencia notable"
    assert row.calculable
    assert row.has_notable_difference


def test_anova_row_falls_back_to_payload_columns():
    header = ["Tipo_Agregacion", "Profesor", "Etapa", "Dimension1", "N", "Sin_Evaluar", "Media", "Desv_Tipica"]
    row = classify(
        normalize_headers(header),
        ["ANOVA_Especialidades", "Ana", "ESO", "Lengua", "2", "No", "0,3", "Diferencia pequeña"],
    )
    assert isinstance(row, AnovaRow)
    assert row.n == 2.0
    assert row.sin_evaluar == "No"
    assert not row.calculable
    assert row.media == pytest.approx(0.3)
    assert row.interpretacion == "Diferencia pequeña"
    assert not row.has_notable_difference


def test_anova_zero_is_not_replaced_by_fallback():
    header = ["Tipo_Agregacion", "Profesor", "Etapa", "Dimension1", "N", "Grupos_Con_Datos"]
    row = classify(normalize_headers(header), ["ANOVA_Cursos", "Ana", "ESO", "Lengua", "5", "0"])
    assert row.n == 0.0


@pytest.mark.parametrize("kind,dim1", [
    ("", "Matemáticas"),
    ("Por_Asignatura", ""),
    ("Por_Asignatura", "0"),
    ("  ", "Lengua"),
])
def test_rows_without_identity_are_skipped(kind, dim1):
    assert classify(COLUMNS, ordinary(kind, dim1)) is None


def test_unknown_kind_is_ordinary():
    row = classify(COLUMNS, ordinary("Por_Trimestre", "1T"))
    assert isinstance(row, AggregationRow)
    assert row.kind is None


def test_asignatura_column_feeds_dimension1():
    header = ["Tipo_Agregacion", "Profesor", "Etapa", "Asignatura"]
    row = classify(normalize_headers(header), ["Por_Asignatura", "Ana", "ESO", "Historia"])
    assert row.dimension1 == "Historia"


def test_duplicate_canonical_columns_first_non_empty_wins():
    header = normalize_headers(["Dimension1", "Asignatura", "Dimension1"])
    assert build_row_map(header, ["", "Historia", "Geografía"]) == {"Dimension1": "Historia"}
    assert build_row_map(header, ["Arte", "Historia", ""]) == {"Dimension1": "Arte"}


def test_unknown_columns_are_passed_through():
    header = ["Tipo_Agregacion", "Profesor", "Etapa", "Dimension1", "Observaciones"]
    row = classify(normalize_headers(header), ["Global", "Ana", "ESO", "TODOS", " revisar "])
    assert row.extra == {"Observaciones": "revisar"}


def test_short_row_missing_cells_are_empty():
    row = classify(COLUMNS, ["Por_Curso", "Ana", "ESO", "2024-2025", "IES", "", "2º ESO B"])
    assert row.dimension2 == ""
    assert row.fecha_generacion == ""
    assert row.media is None


def test_classify_rows_keeps_families_in_order(sample_rows):
    result = classify_rows(COLUMNS, [*sample_rows, ordinary("Global", "0"), ordinary("", "x")])
    assert [r.tipo_agregacion for r in result.ordinary] == [
        "Global", "Por_Asignatura", "Por_Curso", "Por_Curso_Especialidad", "Por_Especialidad",
    ]
    assert [r.dimension1 for r in result.anova] == ["Matemáticas", "Lengua"]
    assert result.skipped == 2
    assert len(result) == 7
