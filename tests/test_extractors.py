"""
Tests for the OpenAI and keyword entity extractors.
"""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from quotebot.application.exceptions import ExtractionContractError, ExtractionUpstreamError
from quotebot.domain.entities.extracted_entity import EntityKind
from quotebot.infrastructure.llm.mock_extractor import MockEntityExtractor
from quotebot.infrastructure.llm.openai_extractor import OpenAIEntityExtractor


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self._content = content
        self._error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self._content))])


def _extractor(content: str | None = None, error: Exception | None = None) -> tuple[OpenAIEntityExtractor, FakeCompletions]:
    completions = FakeCompletions(content, error)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIEntityExtractor(client=client), completions


def test_payload_maps_to_entities():
    payload = {
        "category": "Mylor Bag",
        "product_type": "stand up pouch",
        "quantities": [5000, 10000],
        "dimensions": {"width": 5, "height": 7, "gusset": 2},
        "materials": [],
        "finishes": ["matte"],
        "confidence": {"category": 0.9, "product_type": 0.95, "quantities": 0.9, "dimensions": 0.85, "finishes": 0.6},
    }
    extractor, completions = _extractor(json.dumps(payload))

    entities = extractor.extract("5000 and 10000 stand up pouches 5x7x2 matte")

    assert [(e.kind, e.value, e.confidence) for e in entities] == [
        (EntityKind.CATEGORY, "Mylor Bag", 0.9),
        (EntityKind.PRODUCT, "stand up pouch", 0.95),
        (EntityKind.QUANTITY, 5000.0, 0.9),
        (EntityKind.QUANTITY, 10000.0, 0.9),
        (EntityKind.FINISH, "matte", 0.6),
        (EntityKind.DIMENSION, "5x7x2", 0.85),
    ]
    assert completions.calls[0]["response_format"] == {"type": "json_object"}


def test_empty_text_skips_the_call():
    extractor, completions = _extractor("{}")
    assert extractor.extract("   ") == []
    assert completions.calls == []


def test_provider_failure_is_upstream_error():
    extractor, _ = _extractor(error=TimeoutError("read timeout"))
    with pytest.raises(ExtractionUpstreamError):
        extractor.extract("stand up pouch")


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        json.dumps({"product_type": "pouch", "confidence": {"product_type": 1.4}}),
        json.dumps({"materials": "PET"}),
        "",
    ],
)
def test_bad_payload_is_contract_error(content):
    extractor, _ = _extractor(content)
    with pytest.raises(ExtractionContractError):
        extractor.extract("stand up pouch")


def test_keyword_extractor():
    entities = MockEntityExtractor().extract("I need 5000 stand up pouch 5x7x2 with matte finish")
    found = {(e.kind, e.value) for e in entities}

    assert (EntityKind.PRODUCT, "Stand Up Pouch") in found
    assert (EntityKind.DIMENSION, "5x7x2") in found
    assert (EntityKind.QUANTITY, 5000.0) in found
    assert (EntityKind.FINISH, "Matte Finish") in found
