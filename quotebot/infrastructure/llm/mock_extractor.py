from __future__ import annotations

import re

from quotebot.application.ports.entity_extractor import EntityExtractorPort
from quotebot.application.utils.message_rules import normalize_text
from quotebot.application.utils.quantity_parser import parse_quantities
from quotebot.domain.entities.extracted_entity import EntityKind, ExtractedEntity

DIMENSION_EXPRESSION = re.compile(r"\d+(?:\.\d+)?(?:\s*[x×*]\s*\d+(?:\.\d+)?){1,2}", re.IGNORECASE)


class MockEntityExtractor(EntityExtractorPort):
    """Keyword extractor for local runs without an OpenAI key."""

    PRODUCTS = {
        "stand up pouch": "Stand Up Pouch",
        "standup pouch": "Stand Up Pouch",
        "flat pouch": "Flat Pouch",
        "roll label": "Roll Label",
        "sheet label": "Sheet Label",
        "tuck end box": "Tuck End Box",
    }
    CATEGORIES = {
        "mylar": "Mylor Bag",
        "mylor": "Mylor Bag",
        "label": "Label",
        "carton": "Folding Carton",
    }
    FINISHES = {
        "matte": "Matte Finish",
        "matt": "Matte Finish",
        "gloss": "Gloss Finish",
        "soft touch": "Softtouch Finish",
        "foil": "Hot Foil",
        "spot uv": "Spot UV",
    }

    def extract(self, text: str) -> list[ExtractedEntity]:
        normalized = f" {normalize_text(text or '')} "
        entities: list[ExtractedEntity] = []

        for keyword, product in self.PRODUCTS.items():
            if f" {keyword} " in normalized:
                entities.append(ExtractedEntity(EntityKind.PRODUCT, product, 0.9))
                break
        for keyword, category in self.CATEGORIES.items():
            if f" {keyword}" in normalized:
                entities.append(ExtractedEntity(EntityKind.CATEGORY, category, 0.7))
                break
        for keyword, finish in self.FINISHES.items():
            if f" {keyword} " in normalized:
                entities.append(ExtractedEntity(EntityKind.FINISH, finish, 0.7))

        dimension = DIMENSION_EXPRESSION.search(text or "")
        if dimension:
            entities.append(ExtractedEntity(EntityKind.DIMENSION, dimension.group(0), 0.8))
        for quantity in parse_quantities(text or ""):
            entities.append(ExtractedEntity(EntityKind.QUANTITY, float(quantity), 0.6))

        return entities
