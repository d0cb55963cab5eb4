from __future__ import annotations

import json
import re
from datetime import date
from pathlib import Path

from conftest import make_export, ordinary
from gradestats.cli import main as cli_main
from gradestats.config.loader import load_config
from gradestats.models.dataset import ParsedDataset
from gradestats.services.orchestrator import process_all

"""End-to-end batch run over two valid exports."""


def _write_exports(data_dir: Path, sample_export: str) -> None:
    (data_dir / "ana.csv").write_text(sample_export, encoding="utf-8")
    second = make_export(
        [[c.replace(",", ".") for c in ordinary("Por_Curso", "2º ESO B")]],
        delimiter=",",
    )
    (data_dir / "luis.csv").write_text(second, encoding="utf-8")
    (data_dir / "notes.txt").write_text("ignored", encoding="utf-8")


def test_process_all_writes_json(temp_workdir: Path, write_config: Path, sample_export: str):
    _write_exports(temp_workdir / "data", sample_export)
    result = process_all(load_config(write_config), today=date(2025, 2, 1))

    assert result.success_files == 2
    assert result.failed_files == 0
    assert result.total_rows == 8
    assert [s.file_name for s in result.file_stats] == ["ana.csv", "luis.csv"]
    assert [s.delimiter for s in result.file_stats] == [";", ","]

    out = temp_workdir / "out" / "ana.json"
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert list(payload) == ["profesor", "etapa", "año", "centro", "fecha", "datos"]
    assert payload["profesor"] == "Ana Pérez"
    assert len(payload["datos"]) == 7
    assert ParsedDataset.from_json(out.read_text(encoding="utf-8")).datos[0].tipo_agregacion == "Global"

    assert not list((temp_workdir / "logs").glob("errors-*.log"))


def test_cli_success_exit_code_and_summary(temp_workdir: Path, write_config: Path, sample_export: str, capsys):
    _write_exports(temp_workdir / "data", sample_export)
    code = cli_main([])
    out = capsys.readouterr().out

    assert code == 0
    assert "INFO Processing files from: data" in out
    assert "INFO ana.csv: rows=7 skipped=0 delimiter=';' profesor='Ana Pérez'" in out
    summary = [line for line in out.splitlines() if line.startswith("SUMMARY ")]
    assert len(summary) == 1
    assert re.match(r"SUMMARY files=2/2 success=2 failed=0 rows=8 skipped_rows=0 elapsed_sec=\S+ throughput_rps=\S+$",
                    summary[0])
    assert (temp_workdir / "out" / "luis.json").exists()


def test_cli_inspect_data(temp_workdir: Path, write_config: Path, sample_export: str, capsys):
    _write_exports(temp_workdir / "data", sample_export)
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out

    assert code == 0
    assert "FILE: ana.csv" in out
    assert "delimiter=';'" in out
    assert "sample_rows=" in out
    assert not (temp_workdir / "out").exists()


def test_cli_config_from_env(temp_workdir: Path, sample_config_yaml: str, sample_export: str, monkeypatch, capsys):
    alt = temp_workdir / "alt.yml"
    alt.write_text(sample_config_yaml, encoding="utf-8")
    monkeypatch.setenv("GRADESTATS_CONFIG", str(alt))
    _write_exports(temp_workdir / "data", sample_export)

    assert cli_main([]) == 0
    assert "SUMMARY files=2/2" in capsys.readouterr().out
