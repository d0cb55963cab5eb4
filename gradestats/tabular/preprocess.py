from __future__ import annotations

import logging
import re

from ..errors import EmptyInputError

"""Text preprocessing for delimited grade exports.

Steps (in order):
1. Strip a leading byte-order mark
2. Split on ``\\r?\\n``
3. Locate the real header among the first ``HEADER_SCAN_LINES`` lines and drop
   the preamble above it
4. Drop blank lines, delimiter-only lines and known banner/footnote lines

``detect_delimiter`` then picks ``;`` or ``,`` for the tabular parse.
"""

__all__ = [
    "HEADER_MARKERS",
    "HEADER_SCAN_LINES",
    "NOISE_PREFIXES",
    "strip_bom",
    "find_header_index",
    "is_noise_line",
    "preprocess",
    "detect_delimiter",
    "count_data_lines",
]

logger = logging.getLogger(__name__)

BOM = "\ufeff"
HEADER_SCAN_LINES = 10
HEADER_MARKERS: tuple[str, ...] = ("Tipo_Agregacion", "Tipo_Analisis")
# Separator banners, export-tool metadata banners, explanatory footnotes
NOISE_PREFIXES: tuple[str, ...] = ("---", "EXPORTACI", "Esta hoja")

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_DELIMITER_ONLY_RE = re.compile(r"^[;,\s]+$")


def strip_bom(text: str) -> str:
    return text[1:] if text.startswith(BOM) else text


def find_header_index(lines: list[str], scan_lines: int = HEADER_SCAN_LINES) -> int:
    """Index of the first line carrying a header marker, or -1."""
    for idx, line in enumerate(lines[:scan_lines]):
        if any(marker in line for marker in HEADER_MARKERS):
            return idx
    return -1


def is_noise_line(line: str) -> bool:
    trimmed = line.strip()
    if not trimmed:
        return True
    if _DELIMITER_ONLY_RE.match(trimmed):
        return True
    return trimmed.startswith(NOISE_PREFIXES)


def preprocess(raw_text: str | None) -> str:
    """Return the export text reduced to header + data lines.

    Raises:
        EmptyInputError: no content at all, or nothing left after filtering
    """
    if not raw_text:
        raise EmptyInputError("no file content")

    lines = _LINE_SPLIT_RE.split(strip_bom(raw_text))

    header_idx = find_header_index(lines)
    if header_idx > 0:
        logger.debug("header found at line %d; dropping preamble", header_idx + 1)
        lines = lines[header_idx:]

    kept = [line for line in lines if not is_noise_line(line)]
    if len(kept) < len(lines):
        logger.debug("dropped %d noise lines", len(lines) - len(kept))
    if not kept:
        raise EmptyInputError("file has no header or data lines after preprocessing")
    return "\n".join(kept)


def detect_delimiter(text: str, scan_lines: int = HEADER_SCAN_LINES) -> str:
    """``;`` when it strictly outnumbers ``,`` in the first lines, else ``,``."""
    head = "\n".join(text.split("\n")[:scan_lines])
    return ";" if head.count(";") > head.count(",") else ","


def count_data_lines(text: str) -> int:
    """Lines after the header line in preprocessed text."""
    return max(0, len(text.split("\n")) - 1)
