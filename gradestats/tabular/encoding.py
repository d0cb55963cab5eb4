from __future__ import annotations

"""Repairs for UTF-8 text that was decoded as Latin-1/cp1252 by the exporter.

Only the Spanish accented letters and Ñ that show up in grade exports are
covered. Replacements run in table order; the lone ``Ã`` rule in
``VALUE_REPAIRS`` must stay last.
"""

__all__ = [
    "HEADER_REPAIRS",
    "VALUE_REPAIRS",
    "repair_mojibake",
]

HEADER_REPAIRS: tuple[tuple[str, str], ...] = (
    ("Ã±", "ñ"),
    ("Ã³", "ó"),
    ("Ã­", "í"),
    ("Ã¡", "á"),
    ("Ã©", "é"),
    ("Ãº", "ú"),
    ("Ã‘", "Ñ"),
    ("Ã'", "Ñ"),
    ("ï»¿", ""),
)

VALUE_REPAIRS: tuple[tuple[str, str], ...] = (
    ("Ã±", "ñ"),
    ("Ã³", "ó"),
    ("Ã­", "í"),
    ("Ã¡", "á"),
    ("Ã©", "é"),
    ("Ãº", "ú"),
    ("Ã‘", "Ñ"),
    ("Ã'", "Ñ"),
    ("Ã“", "Ó"),
    ('Ã"', "Ó"),
    ("Ã", "Í"),
)


def repair_mojibake(text: str, table: tuple[tuple[str, str], ...] = VALUE_REPAIRS) -> str:
    for broken, fixed in table:
        if broken in text:
            text = text.replace(broken, fixed)
    return text
