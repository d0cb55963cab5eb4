from __future__ import annotations

import math
import re
from typing import Any

from .encoding import VALUE_REPAIRS, repair_mojibake

"""Cell-level parsing.

``parse_numeric`` never raises: anything that is not a number degrades to
None. Grade exports use either ``7,5`` or ``7.5`` and never carry thousands
separators, so every comma is read as a decimal point.
"""

__all__ = [
    "NULL_SENTINELS",
    "parse_numeric",
    "clean_string",
]

NULL_SENTINELS = frozenset({"", "-", "N/A"})

# Leading float prefix, same leniency as a JavaScript parseFloat
_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_numeric(raw: Any) -> float | None:
    """Convert a raw cell to float, or None when it carries no number.

    Examples:
        >>> parse_numeric("7,5")
        7.5
        >>> parse_numeric("N/A") is None
        True
    """
    if raw is None:
        return None
    if isinstance(raw, float) and math.isnan(raw):
        return None
    text = str(raw)
    if text in NULL_SENTINELS:
        return None
    cleaned = text.replace(",", ".").strip()
    match = _FLOAT_PREFIX_RE.match(cleaned)
    if match is None:
        return None
    value = float(match.group(0))
    if math.isnan(value):
        return None
    return value


def clean_string(raw: Any) -> str:
    """Stringify, trim and repair mis-decoded accents. None becomes ''."""
    if raw is None:
        return ""
    if isinstance(raw, float) and math.isnan(raw):
        return ""
    return repair_mojibake(str(raw).strip(), VALUE_REPAIRS)
