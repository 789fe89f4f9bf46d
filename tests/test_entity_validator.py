"""
Tests for extraction gating and confidence thresholds.
"""

from __future__ import annotations

import pytest

from quotebot.application.use_cases.entity_validator import EntityValidator
from quotebot.domain.entities.conversation_step import ConversationStep
from quotebot.domain.entities.extracted_entity import EntityKind, ExtractedEntity


def _entity(kind: EntityKind, confidence: float) -> ExtractedEntity:
    return ExtractedEntity(kind=kind, value="x", confidence=confidence)


def test_narrow_steps_block_extraction():
    validator = EntityValidator()
    for step in (
        ConversationStep.DIMENSION_INPUT,
        ConversationStep.MATERIAL_SELECTION,
        ConversationStep.FINISH_SELECTION,
        ConversationStep.QUANTITY_INPUT,
        ConversationStep.QUOTE_GENERATION,
    ):
        assert validator.should_extract(step, "stand up pouch 5000") is False
        assert validator.validate(step, "stand up pouch", [_entity(EntityKind.PRODUCT, 0.99)]) == []


def test_greeting_yes_no_is_not_extracted():
    validator = EntityValidator()
    assert validator.should_extract(ConversationStep.GREETING_RESPONSE, "yes") is False
    assert validator.should_extract(ConversationStep.GREETING_RESPONSE, "No thanks") is False
    assert validator.should_extract(ConversationStep.GREETING_RESPONSE, "I need stand up pouches") is True
    assert validator.should_extract(ConversationStep.START, "hi") is True


def test_material_needs_high_confidence():
    validator = EntityValidator()
    assert validator.validate(ConversationStep.START, "", [_entity(EntityKind.MATERIAL, 0.7)]) == []
    kept = validator.validate(ConversationStep.START, "", [_entity(EntityKind.MATERIAL, 0.8)])
    assert len(kept) == 1


def test_product_threshold_is_lower():
    validator = EntityValidator()
    assert len(validator.validate(ConversationStep.START, "", [_entity(EntityKind.PRODUCT, 0.4)])) == 1
    assert validator.validate(ConversationStep.START, "", [_entity(EntityKind.PRODUCT, 0.39)]) == []


def test_default_threshold():
    validator = EntityValidator()
    entities = [
        _entity(EntityKind.CATEGORY, 0.49),
        _entity(EntityKind.QUANTITY, 0.5),
        _entity(EntityKind.FINISH, 0.6),
    ]
    kept = validator.validate(ConversationStep.PRODUCT_SELECTION, "", entities)
    assert [e.kind for e in kept] == [EntityKind.QUANTITY, EntityKind.FINISH]


def test_from_payload_rejects_bad_values():
    entity = ExtractedEntity.from_payload("Quantity", 5000, 0.9)
    assert entity.kind == EntityKind.QUANTITY
    assert entity.value == 5000.0

    for kind, value, confidence in (("colour", "red", 0.9), ("product", "", 0.9), ("product", "bag", 1.5)):
        with pytest.raises(ValueError):
            ExtractedEntity.from_payload(kind, value, confidence)
