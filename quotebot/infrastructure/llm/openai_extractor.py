from __future__ import annotations

import json
import logging
from typing import Any

from openai import OpenAI

from quotebot.application.exceptions import ExtractionContractError, ExtractionUpstreamError
from quotebot.application.ports.entity_extractor import EntityExtractorPort
from quotebot.core.config import settings
from quotebot.domain.entities.extracted_entity import EntityKind, ExtractedEntity
from quotebot.infrastructure.llm.prompts import SYSTEM_PROMPT, build_extract_prompt

# payload key -> (entity kind, confidence key)
_SCALAR_FIELDS = {
    "category": (EntityKind.CATEGORY, "category"),
    "product_type": (EntityKind.PRODUCT, "product_type"),
}
_LIST_FIELDS = {
    "quantities": (EntityKind.QUANTITY, "quantities"),
    "materials": (EntityKind.MATERIAL, "materials"),
    "finishes": (EntityKind.FINISH, "finishes"),
}
_DIMENSION_ORDER = ("width", "height", "gusset", "depth")


class OpenAIEntityExtractor(EntityExtractorPort):
    """
    OpenAI-backed adapter implementing EntityExtractorPort.

    Contract guarantees:
    - extract returns list[ExtractedEntity], possibly empty
    - Raises:
        ExtractionUpstreamError: networking/provider failures and timeouts
        ExtractionContractError: invalid JSON or wrong schema/shape
    """

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.OPENAI_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    def extract(self, text: str) -> list[ExtractedEntity]:
        if not text or not text.strip():
            return []

        content = self._call_text(
            model=settings.OPENAI_MODEL_EXTRACT,
            prompt=build_extract_prompt(text),
            temperature=settings.OPENAI_TEMPERATURE_EXTRACT,
        )
        data = _parse_json(content)
        if not isinstance(data, dict):
            raise ExtractionContractError("Extract: expected a JSON object.")

        entities = _to_entities(data)
        self._logger.debug("Entities extracted", extra={"count": len(entities)})
        return entities

    def _call_text(self, model: str, prompt: str, temperature: float) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                max_tokens=600,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            raise ExtractionUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise ExtractionContractError("LLM returned empty response text.")
        return content


def _to_entities(data: dict[str, Any]) -> list[ExtractedEntity]:
    confidence = data.get("confidence")
    if confidence is None:
        confidence = {}
    if not isinstance(confidence, (dict, int, float)) or isinstance(confidence, bool):
        raise ExtractionContractError("Extract: 'confidence' must be an object or a number.")

    def score(key: str) -> Any:
        if isinstance(confidence, dict):
            return confidence.get(key, 0.0)
        return confidence

    entities: list[ExtractedEntity] = []
    try:
        for field, (kind, confidence_key) in _SCALAR_FIELDS.items():
            value = data.get(field)
            if value in (None, ""):
                continue
            entities.append(ExtractedEntity.from_payload(kind, value, score(confidence_key)))

        for field, (kind, confidence_key) in _LIST_FIELDS.items():
            values = data.get(field)
            if values is None:
                continue
            if not isinstance(values, list):
                raise ExtractionContractError(f"Extract: '{field}' must be a list.")
            for value in values:
                if value in (None, ""):
                    continue
                entities.append(ExtractedEntity.from_payload(kind, value, score(confidence_key)))

        dimensions = data.get("dimensions")
        if dimensions:
            if not isinstance(dimensions, dict):
                raise ExtractionContractError("Extract: 'dimensions' must be an object.")
            values = [dimensions[key] for key in _DIMENSION_ORDER if dimensions.get(key) not in (None, "", 0)]
            if values:
                joined = "x".join(str(v) for v in values)
                entities.append(ExtractedEntity.from_payload(EntityKind.DIMENSION, joined, score("dimensions")))
    except (ValueError, TypeError) as e:
        raise ExtractionContractError(f"Extract: invalid entity: {e}") from e

    return entities


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except Exception:
        snippet = text[:200].replace("\n", " ")
        raise ExtractionContractError(f"Extract: invalid JSON. Snippet: {snippet!r}")
