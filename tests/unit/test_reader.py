from __future__ import annotations

import pandas as pd
import pytest

from gradestats.errors import EmptyInputError, MalformedInputError
from gradestats.models.columns import CanonicalHeader
from gradestats.tabular.fields import clean_string
from gradestats.tabular.reader import read_table


def test_read_table_normalizes_headers():
    table = read_table("Tipo_Agregacion;Asignatura;Extra\nGlobal;TODOS;x", ";")
    assert table.raw_columns == ["Tipo_Agregacion", "Asignatura", "Extra"]
    assert table.columns == [CanonicalHeader.TIPO_AGREGACION, CanonicalHeader.DIMENSION1, "Extra"]
    assert table.unrecognized_columns == ["Extra"]
    assert table.rows == [["Global", "TODOS", "x"]]


def test_read_table_keeps_na_strings():
    table = read_table("a,b,c\nN/A,-,", ",")
    assert table.rows[0][0] == "N/A"
    assert table.rows[0][1] == "-"
    assert clean_string(table.rows[0][2]) == ""


def test_read_table_short_line_padded():
    table = read_table("a;b;c\n1;2", ";")
    assert len(table.rows[0]) == 3
    assert table.rows[0][:2] == ["1", "2"]
    assert clean_string(table.rows[0][2]) == ""


def test_read_table_trailing_delimiter_is_not_an_index():
    table = read_table("a;b\n1;2;", ";")
    assert table.raw_columns == ["a", "b"]
    assert table.rows == [["1", "2"]]


def test_read_table_quoted_cells():
    table = read_table('a,b\n"Lengua, Literatura",7', ",")
    assert table.rows == [["Lengua, Literatura", "7"]]


def test_read_table_header_only_raises():
    with pytest.raises(EmptyInputError):
        read_table("a;b;c\n", ";")


def test_read_table_drops_empty_trailing_column():
    table = read_table("a;b;\n1;2;\n3;4;", ";")
    assert table.raw_columns == ["a", "b"]
    assert table.rows == [["1", "2"], ["3", "4"]]


def test_read_table_tolerates_unbalanced_quote():
    text = 'Tipo_Agregacion;Profesor;Etapa;Dimension1;Media\nGlobal;Ana;ESO;TODOS;6,5\nPor_Curso;Ana;ESO;"1A;7'
    table = read_table(text, ";")
    assert table.quoting_disabled
    assert table.rows[0] == ["Global", "Ana", "ESO", "TODOS", "6,5"]
    assert table.rows[1] == ["Por_Curso", "Ana", "ESO", '"1A', "7"]


def test_read_table_balanced_quotes_keep_quoting():
    assert not read_table('a;b\n"x;y";1', ";").quoting_disabled


def test_read_table_untokenizable_raises_malformed(monkeypatch):
    def _fail(*args, **kwargs):
        raise pd.errors.ParserError("boom")

    monkeypatch.setattr("gradestats.tabular.reader.pd.read_csv", _fail)
    with pytest.raises(MalformedInputError) as exc:
        read_table("a;b\n1;2", ";")
    assert exc.value.error_type == "MALFORMED_INPUT"
