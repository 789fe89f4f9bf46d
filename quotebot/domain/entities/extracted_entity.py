from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EntityKind(str, Enum):
    CATEGORY = "category"
    PRODUCT = "product"
    MATERIAL = "material"
    FINISH = "finish"
    QUANTITY = "quantity"
    DIMENSION = "dimension"


@dataclass(frozen=True)
class ExtractedEntity:
    kind: EntityKind
    value: str | float
    confidence: float

    @staticmethod
    def from_payload(kind: Any, value: Any, confidence: Any) -> "ExtractedEntity":
        """
        Build an entity from a loosely shaped extraction payload.

        Raises ValueError for unknown kinds, empty values or a confidence
        outside [0, 1].
        """
        entity_kind = kind if isinstance(kind, EntityKind) else EntityKind(str(kind).strip().lower())

        if isinstance(value, bool) or value is None:
            raise ValueError(f"{entity_kind.value}: missing value")
        if isinstance(value, (int, float)):
            normalized_value: str | float = float(value)
        else:
            normalized_value = str(value).strip()
            if not normalized_value:
                raise ValueError(f"{entity_kind.value}: empty value")

        score = float(confidence)
        if not 0.0 <= score <= 1.0:
            raise ValueError(f"{entity_kind.value}: confidence {score} outside [0, 1]")

        return ExtractedEntity(kind=entity_kind, value=normalized_value, confidence=score)
