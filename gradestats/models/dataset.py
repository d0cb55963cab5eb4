from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..errors import InvalidDatasetError
from .rows import Row, row_from_dict

"""ParsedDataset: the value object produced by one successful parse.

Serialized field names are fixed (``profesor, etapa, año, centro, fecha,
datos``) and ``datos`` keeps its order (ordinary rows before ANOVA rows), so a
caller can persist the JSON form and reload it unchanged.
"""

__all__ = [
    "ParsedDataset",
]

_METADATA_KEYS = ("profesor", "etapa", "año", "centro", "fecha")


@dataclass(frozen=True)
class ParsedDataset:
    profesor: str
    etapa: str
    ano: str  # "año" in serialized form
    centro: str
    fecha: str  # ISO date
    datos: tuple[Row, ...]

    def __len__(self) -> int:
        return len(self.datos)

    def to_dict(self) -> dict[str, Any]:
        return {
            "profesor": self.profesor,
            "etapa": self.etapa,
            "año": self.ano,
            "centro": self.centro,
            "fecha": self.fecha,
            "datos": [row.to_dict() for row in self.datos],
        }

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, payload: Any) -> ParsedDataset:
        """Rebuild a dataset from its ``to_dict`` form.

        Raises:
            InvalidDatasetError: payload is not a mapping, lacks a metadata
                key, or ``datos`` is not a list of objects
        """
        if not isinstance(payload, dict):
            raise InvalidDatasetError("dataset payload must be an object")
        missing = [k for k in _METADATA_KEYS if k not in payload]
        if missing:
            raise InvalidDatasetError(f"dataset payload missing keys: {', '.join(missing)}")
        datos = payload.get("datos")
        if not isinstance(datos, list) or not all(isinstance(r, dict) for r in datos):
            raise InvalidDatasetError("'datos' must be a list of row objects")
        return cls(
            profesor=str(payload["profesor"]),
            etapa=str(payload["etapa"]),
            ano=str(payload["año"]),
            centro=str(payload["centro"]),
            fecha=str(payload["fecha"]),
            datos=tuple(row_from_dict(r) for r in datos),
        )

    @classmethod
    def from_json(cls, text: str) -> ParsedDataset:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidDatasetError(f"invalid dataset json: {e}") from e
        return cls.from_dict(payload)
