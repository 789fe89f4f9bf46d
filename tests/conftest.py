from __future__ import annotations

import pytest

from quotebot.application.ports.quote_document import QuoteDocumentPort
from quotebot.application.use_cases.catalog_lookup import CatalogLookup
from quotebot.application.use_cases.conversation_flow import ConversationFlow
from quotebot.application.use_cases.entity_validator import EntityValidator
from quotebot.application.use_cases.pricing import PricingEngine
from quotebot.domain.entities.quote import Quote
from quotebot.infrastructure.catalog.json_catalog_store import JsonCatalogStore

FIXED_NOW = 1_700_000_000.0


class RecordingDocument(QuoteDocumentPort):
    def __init__(self) -> None:
        self.rendered: list[Quote] = []

    def render(self, quote: Quote) -> str:
        self.rendered.append(quote)
        return f"memory://{quote.quote_number}"


@pytest.fixture
def catalog() -> JsonCatalogStore:
    return JsonCatalogStore()


@pytest.fixture
def lookup(catalog: JsonCatalogStore) -> CatalogLookup:
    return CatalogLookup(catalog)


@pytest.fixture
def pricing() -> PricingEngine:
    return PricingEngine(clock=lambda: FIXED_NOW)


@pytest.fixture
def document() -> RecordingDocument:
    return RecordingDocument()


@pytest.fixture
def flow(catalog, lookup, pricing, document) -> ConversationFlow:
    return ConversationFlow(
        catalog=catalog,
        lookup=lookup,
        validator=EntityValidator(),
        pricing=pricing,
        document=document,
        clock=lambda: FIXED_NOW,
    )
