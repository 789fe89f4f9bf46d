from __future__ import annotations

import logging
from typing import Iterable

from quotebot.application.utils.message_rules import is_yes_no_answer
from quotebot.domain.entities.conversation_step import EXTRACTION_BLOCKED_STEPS, ConversationStep
from quotebot.domain.entities.extracted_entity import EntityKind, ExtractedEntity

MATERIAL_MIN_CONFIDENCE = 0.8
PRODUCT_MIN_CONFIDENCE = 0.4
DEFAULT_MIN_CONFIDENCE = 0.5

CONFIDENCE_THRESHOLDS = {
    EntityKind.MATERIAL: MATERIAL_MIN_CONFIDENCE,
    EntityKind.PRODUCT: PRODUCT_MIN_CONFIDENCE,
}


class EntityValidator:
    """Decide whether extraction may run for a turn and which extracted entities to trust."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def should_extract(self, step: ConversationStep, text: str) -> bool:
        if step in EXTRACTION_BLOCKED_STEPS:
            return False
        if step == ConversationStep.GREETING_RESPONSE and is_yes_no_answer(text):
            return False
        return True

    def validate(
        self,
        step: ConversationStep,
        text: str,
        entities: Iterable[ExtractedEntity],
    ) -> list[ExtractedEntity]:
        entities = list(entities)
        if not self.should_extract(step, text):
            if entities:
                self._logger.info(
                    "Extraction blocked for step",
                    extra={"step": step.value, "reason": "step_gated", "dropped": len(entities)},
                )
            return []

        accepted: list[ExtractedEntity] = []
        for entity in entities:
            threshold = CONFIDENCE_THRESHOLDS.get(entity.kind, DEFAULT_MIN_CONFIDENCE)
            if entity.confidence < threshold:
                self._logger.info(
                    "Low confidence entity dropped",
                    extra={
                        "step": step.value,
                        "kind": entity.kind.value,
                        "confidence": entity.confidence,
                        "reason": f"below_{threshold}",
                    },
                )
                continue
            accepted.append(entity)
        return accepted
