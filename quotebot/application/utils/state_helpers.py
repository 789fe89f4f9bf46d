from __future__ import annotations

import re
from dataclasses import replace

from quotebot.domain.entities.collected_data import CollectedData
from quotebot.domain.entities.conversation_state import ConversationState

CHANGE_PATTERN = re.compile(
    r"\b(?:change|edit|update|modify|fix)\s+(?:the\s+|my\s+)?"
    r"(?P<field>category|type|product|size|dimensions?|materials?|finish(?:es)?|quantit(?:y|ies)|qty)\b",
    re.IGNORECASE,
)

_FIELD_ALIASES = {
    "category": "category",
    "type": "category",
    "product": "product",
    "size": "dimensions",
    "dimension": "dimensions",
    "dimensions": "dimensions",
    "material": "materials",
    "materials": "materials",
    "finish": "finishes",
    "finishes": "finishes",
    "quantity": "quantities",
    "quantities": "quantities",
    "qty": "quantities",
}


def parse_change_request(text: str) -> str | None:
    """Return the CollectedData field named in "change <field>", or None."""
    match = CHANGE_PATTERN.search(text or "")
    if not match:
        return None
    return _FIELD_ALIASES.get(match.group("field").lower())


def reset_state(state: ConversationState, now: float | None = None) -> ConversationState:
    """Start over: back to the first step with nothing collected."""
    return ConversationState(last_message_at=now if now is not None else state.last_message_at)


def clear_field(data: CollectedData, field: str) -> CollectedData:
    """Clear one answer together with the answers that depend on it."""
    if field == "category":
        # products, materials and finishes are all scoped to the category
        return CollectedData(wants_quote=data.wants_quote, sku_count=data.sku_count)
    if field == "product":
        return replace(data, product=None, dimensions=(), current_dimension_index=0)
    if field == "dimensions":
        return replace(data, dimensions=(), current_dimension_index=0)
    if field == "materials":
        return replace(data, materials=())
    if field == "finishes":
        return replace(data, finishes=(), finishes_confirmed=False)
    if field == "quantities":
        return replace(data, quantities=())
    raise ValueError(f"Unknown field: {field}")
