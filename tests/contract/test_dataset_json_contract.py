from __future__ import annotations

import json
from datetime import date

import pytest

from gradestats import InvalidDatasetError, ParsedDataset, parse_text

"""Serialized dataset shape: fixed top-level keys and canonical row keys."""

TODAY = date(2025, 2, 1)


def test_top_level_keys(sample_export):
    payload = json.loads(parse_text(sample_export, today=TODAY).to_json())
    assert list(payload) == ["profesor", "etapa", "año", "centro", "fecha", "datos"]
    assert payload["año"] == "2024-2025"


def test_row_keys(sample_export):
    payload = json.loads(parse_text(sample_export, today=TODAY).to_json())
    first = payload["datos"][0]
    assert first["Tipo_Agregacion"] == "Global"
    assert first["Media"] == 6.5
    assert first["Notas_1"] is None
    anova = payload["datos"][-2]
    assert anova["Tipo_Agregacion"] == "ANOVA_Cursos"
    assert set(anova) == {
        "Tipo_Agregacion", "Profesor", "Etapa", "Año_Academico", "Centro", "Fecha_Generacion",
        "Dimension1", "Dimension2", "N", "Sin_Evaluar", "Media", "Desv_Tipica",
    }
    assert anova["Desv_Tipica"] == "Diferencia notable"


def test_json_round_trip(sample_export):
    dataset = parse_text(sample_export, today=TODAY)
    assert ParsedDataset.from_json(dataset.to_json()) == dataset


def test_non_ascii_written_as_is(sample_export):
    assert "Ana Pérez" in parse_text(sample_export, today=TODAY).to_json()


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    '{"profesor": "A"}',
    '{"profesor": "A", "etapa": "", "año": "", "centro": "", "fecha": "", "datos": [1]}',
])
def test_invalid_payloads(text):
    with pytest.raises(InvalidDatasetError):
        ParsedDataset.from_json(text)
