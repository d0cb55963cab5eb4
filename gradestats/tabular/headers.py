from __future__ import annotations

from ..models.columns import COLUMN_VARIANTS, CanonicalHeader
from .encoding import HEADER_REPAIRS, repair_mojibake

"""Header normalization: repair encoding artifacts, then map variants."""

__all__ = [
    "normalize_header",
    "normalize_headers",
    "is_canonical",
]

# Built once from the static table; read-only afterwards.
_VARIANT_LOOKUP: dict[str, CanonicalHeader] = {
    variant: canonical
    for canonical, variants in COLUMN_VARIANTS.items()
    for variant in variants
}


def normalize_header(raw: str | None) -> CanonicalHeader | str:
    """Return the canonical header for ``raw``.

    Names without an entry in the variant table are returned cleaned but
    otherwise unchanged; if the cleaned text equals a canonical value (for
    example ``Media``) the enum member is returned.
    """
    if raw is None:
        return ""
    cleaned = repair_mojibake(str(raw).strip(), HEADER_REPAIRS)
    if cleaned in _VARIANT_LOOKUP:
        return _VARIANT_LOOKUP[cleaned]
    try:
        return CanonicalHeader(cleaned)
    except ValueError:
        return cleaned


def normalize_headers(raw_headers: list[str]) -> list[CanonicalHeader | str]:
    return [normalize_header(h) for h in raw_headers]


def is_canonical(header: CanonicalHeader | str) -> bool:
    return isinstance(header, CanonicalHeader)
