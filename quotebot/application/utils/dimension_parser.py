from __future__ import annotations

import re
from typing import Sequence

from quotebot.domain.entities.catalog_entry import DimensionField
from quotebot.domain.entities.collected_data import Dimension

MAX_DIMENSIONS_PER_MESSAGE = 3

NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")
# "W:5", "height = 4", "gusset: 2.5"
LABELLED_PATTERN = re.compile(r"(?P<label>[a-z][a-z ]*?)\s*[:=]\s*(?P<value>\d+(?:\.\d+)?)", re.IGNORECASE)


def parse_dimensions(
    text: str,
    fields: Sequence[DimensionField],
    start_index: int = 0,
) -> list[Dimension]:
    """
    Map the numbers in a message onto a product's dimension fields.

    "5x4", "5 x 4", "5 by 4", "5, 4" and "5 4" fill fields in order starting
    at start_index; labelled input ("W:5, H:4") is matched by field name
    instead. At most three numbers are read. A value outside a field's range
    stops the positional mapping at that field, so the caller asks for it again.
    """
    if not text or not fields:
        return []

    labelled = _parse_labelled(text, fields)
    if labelled:
        return labelled

    values = [float(raw) for raw in NUMBER_PATTERN.findall(text)][:MAX_DIMENSIONS_PER_MESSAGE]
    parsed: list[Dimension] = []
    for field, value in zip(fields[start_index:], values):
        if not field.accepts(value):
            break
        parsed.append(Dimension(name=field.name, value=value, unit=field.unit))
    return parsed


def merge_dimensions(
    existing: Sequence[Dimension],
    parsed: Sequence[Dimension],
    fields: Sequence[DimensionField],
) -> tuple[tuple[Dimension, ...], int]:
    """Combine new values with earlier ones. Returns (dimensions in field order, next missing index)."""
    by_name = {dimension.name: dimension for dimension in existing}
    for dimension in parsed:
        by_name[dimension.name] = dimension

    ordered = tuple(by_name[field.name] for field in fields if field.name in by_name)
    next_index = next((i for i, field in enumerate(fields) if field.name not in by_name), len(fields))
    return ordered, next_index


def _parse_labelled(text: str, fields: Sequence[DimensionField]) -> list[Dimension]:
    parsed: list[Dimension] = []
    seen: set[str] = set()
    for match in LABELLED_PATTERN.finditer(text):
        field = _field_for_label(match.group("label"), fields)
        if field is None or field.name in seen:
            continue
        value = float(match.group("value"))
        if not field.accepts(value):
            continue
        seen.add(field.name)
        parsed.append(Dimension(name=field.name, value=value, unit=field.unit))
    return parsed


def _field_for_label(label: str, fields: Sequence[DimensionField]) -> DimensionField | None:
    # "size width: 5" arrives as "size width"; the last word names the field
    words = label.strip().lower().split()
    if not words:
        return None
    candidate = words[-1]
    for field in fields:
        if field.name.lower() == candidate:
            return field
    for field in fields:
        if field.name.lower().startswith(candidate):
            return field
    return None
