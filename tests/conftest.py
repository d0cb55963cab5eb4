# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

HEADER = [
    "Tipo_Agregacion", "Profesor", "Etapa", "Año_Academico", "Centro",
    "Fecha_Generacion", "Dimension1", "Dimension2", "N", "Media", "Desv_Tipica",
    "Aprobados", "Suspensos", "Pct_Aprobados",
    "Grupos_Con_Datos", "Diferencia_Medias", "Calculable", "Interpretacion",
]

IDENTITY = ["Ana Pérez", "ESO", "2024-2025", "IES Ejemplo", "2025-01-20"]


def ordinary(kind: str, dim1: str, dim2: str = "", n: str = "20", media: str = "6,5") -> list[str]:
    return [kind, *IDENTITY, dim1, dim2, n, media, "1,2", "15", "5", "75", "", "", "", ""]


def anova(kind: str, dim1: str, groups: str = "3", diff: str = "0,8",
          calculable: str = "Sí", interp: str = "Diferencia notable") -> list[str]:
    return [kind, *IDENTITY, dim1, "Curso", "", "", "", "", "", "", groups, diff, calculable, interp]


def make_export(rows: list[list[str]], delimiter: str = ";", preamble: list[str] | None = None,
                header: list[str] | None = None) -> str:
    lines = list(preamble or [])
    lines.append(delimiter.join(header or HEADER))
    lines.extend(delimiter.join(r) for r in rows)
    return "\r\n".join(lines) + "\r\n"


@pytest.fixture()
def sample_rows() -> list[list[str]]:
    return [
        ordinary("Global", "TODOS"),
        ordinary("Por_Asignatura", "Matemáticas", media="5,9"),
        anova("ANOVA_Cursos", "Matemáticas"),
        ordinary("Por_Curso", "1º ESO A", media="7,1"),
        ordinary("Por_Curso_Especialidad", "1º ESO A", "Ciencias", media="7,4"),
        anova("ANOVA_Especialidades", "Lengua", diff="0,1", interp="Diferencia pequeña"),
        ordinary("Por_Especialidad", "Ciencias", media="6,8"),
    ]


@pytest.fixture()
def sample_export(sample_rows) -> str:
    preamble = [
        "EXPORTACIÓN DE ESTADÍSTICAS;;;",
        "Generado por el cuaderno del profesor;;;",
    ]
    return make_export(sample_rows, preamble=preamble) + "Esta hoja contiene datos agregados;;;\r\n"


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
file_pattern: "*.csv"
encoding: utf-8
timezone: UTC
logs_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "gradestats.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(autouse=True)
def _clean_logging():
    # the CLI logger binds sys.stdout at setup; rebind per test for capsys
    from gradestats.logging.init import reset_logging
    reset_logging()
    yield
    reset_logging()
