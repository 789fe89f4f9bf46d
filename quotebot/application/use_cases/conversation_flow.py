from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Iterable

from quotebot.application.ports.catalog_store import CatalogStorePort
from quotebot.application.ports.quote_document import QuoteDocumentPort
from quotebot.application.use_cases import reply_composer
from quotebot.application.use_cases.catalog_lookup import CatalogLookup
from quotebot.application.use_cases.entity_validator import EntityValidator
from quotebot.application.use_cases.pricing import PricingEngine
from quotebot.application.utils.dimension_parser import merge_dimensions, parse_dimensions
from quotebot.application.utils.message_rules import (
    has_quote_intent,
    is_affirmative,
    is_negative,
    is_no_finish_answer,
    is_reset_request,
    split_selection_list,
)
from quotebot.application.utils.quantity_parser import parse_quantities, parse_sku_count
from quotebot.application.utils.state_helpers import clear_field, parse_change_request, reset_state
from quotebot.domain.entities.catalog_entry import CatalogEntry
from quotebot.domain.entities.collected_data import CollectedData
from quotebot.domain.entities.conversation_state import ConversationState
from quotebot.domain.entities.conversation_step import ACTIVE_DATA_ENTRY_STEPS, ConversationStep
from quotebot.domain.entities.extracted_entity import EntityKind, ExtractedEntity
from quotebot.domain.entities.quote import QuoteIncompleteError, QuoteRequest

# Entities are applied in this order so a product can fill in its category
# before materials and finishes (which are category scoped) are resolved.
_APPLY_ORDER = {
    EntityKind.CATEGORY: 0,
    EntityKind.PRODUCT: 1,
    EntityKind.DIMENSION: 2,
    EntityKind.MATERIAL: 3,
    EntityKind.FINISH: 4,
    EntityKind.QUANTITY: 5,
}


@dataclass(frozen=True)
class FlowResult:
    state: ConversationState
    reply: str | None


@dataclass(frozen=True)
class _Turn:
    """Outcome of one step handler. next_step set means: move there and run its handler on empty text."""

    state: ConversationState
    reply: str | None = None
    next_step: ConversationStep | None = None


class ConversationFlow:
    """
    Step sequencer for the quote conversation.

    One inbound message is consumed by exactly one step handler. When a handler
    resolves its field, the flow moves to the first step whose field is still
    missing and runs that handler with empty text, so "5x4" typed for the size
    can never be read again as a material name.
    """

    def __init__(
        self,
        catalog: CatalogStorePort,
        lookup: CatalogLookup,
        validator: EntityValidator,
        pricing: PricingEngine,
        document: QuoteDocumentPort | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._catalog = catalog
        self._lookup = lookup
        self._validator = validator
        self._pricing = pricing
        self._document = document
        self._clock = clock
        self._logger = logging.getLogger(__name__)
        self._handlers: dict[ConversationStep, Callable[[str, ConversationState, str], _Turn]] = {
            ConversationStep.START: self._handle_start,
            ConversationStep.GREETING_RESPONSE: self._handle_greeting_response,
            ConversationStep.PRODUCT_CATEGORY_SELECTION: self._handle_category,
            ConversationStep.PRODUCT_SELECTION: self._handle_product,
            ConversationStep.DIMENSION_INPUT: self._handle_dimensions,
            ConversationStep.MATERIAL_SELECTION: self._handle_materials,
            ConversationStep.FINISH_SELECTION: self._handle_finishes,
            ConversationStep.QUANTITY_INPUT: self._handle_quantity,
            ConversationStep.QUOTE_REVIEW: self._handle_review,
            ConversationStep.QUOTE_GENERATION: self._handle_generation,
            ConversationStep.COMPLETED: self._handle_completed,
        }

    def session_for(self, stored: ConversationState | None) -> ConversationState:
        """The state a new message runs against: a completed session is never reopened."""
        if stored is None or stored.step == ConversationStep.COMPLETED or not stored.is_active:
            return ConversationState()
        return stored

    def should_extract(self, state: ConversationState, text: str) -> bool:
        return self._validator.should_extract(state.step, text)

    @staticmethod
    def next_unresolved_step(data: CollectedData) -> ConversationStep:
        if data.category is None:
            return ConversationStep.PRODUCT_CATEGORY_SELECTION
        if data.product is None:
            return ConversationStep.PRODUCT_SELECTION
        if not data.dimensions_complete:
            return ConversationStep.DIMENSION_INPUT
        if not data.materials:
            return ConversationStep.MATERIAL_SELECTION
        if not data.finishes_confirmed:
            return ConversationStep.FINISH_SELECTION
        if not data.quantities:
            return ConversationStep.QUANTITY_INPUT
        return ConversationStep.QUOTE_REVIEW

    def process(
        self,
        user_key: str,
        state: ConversationState,
        text: str,
        entities: Iterable[ExtractedEntity] = (),
    ) -> FlowResult:
        text = (text or "").strip()
        state = replace(self.session_for(state), last_message_at=self._clock())
        accepted = self._validator.validate(state.step, text, entities)

        if is_reset_request(text) and state.step not in ACTIVE_DATA_ENTRY_STEPS:
            self._logger.info(
                "Conversation reset",
                extra={"user_key": user_key, "step": state.step.value, "reason": "reset_phrase"},
            )
            state = reset_state(state)
            text = ""
            accepted = []

        if accepted:
            state = replace(state, data=self._apply_entities(state.data, accepted, user_key))

        replies: list[str] = []
        step_text = text
        for _ in range(len(ConversationStep)):
            turn = self._handlers[state.step](user_key, state, step_text)
            state = turn.state
            if turn.reply:
                replies.append(turn.reply)
            if turn.next_step is None:
                break
            self._logger.info(
                "Step transition",
                extra={"user_key": user_key, "step": state.step.value, "next_step": turn.next_step.value},
            )
            state = replace(state, step=turn.next_step)
            step_text = ""
        else:
            self._logger.warning("Step loop limit reached", extra={"user_key": user_key, "step": state.step.value})

        return FlowResult(state=state, reply="\n\n".join(replies) if replies else None)

    def _advance(self, state: ConversationState, data: CollectedData, reply: str | None = None) -> _Turn:
        return _Turn(state=replace(state, data=data), reply=reply, next_step=self.next_unresolved_step(data))

    def _apply_entities(
        self,
        data: CollectedData,
        entities: list[ExtractedEntity],
        user_key: str,
    ) -> CollectedData:
        """Fill only fields that are still empty; an answer already given is never overwritten."""
        materials: list[CatalogEntry] = []
        finishes: list[CatalogEntry] = []
        quantities: list[int] = []
        dimension_values: list[str] = []

        for entity in sorted(entities, key=lambda e: _APPLY_ORDER[e.kind]):
            value = entity.value
            if entity.kind == EntityKind.CATEGORY and data.category is None:
                category = self._lookup.find_category(str(value))
                if category is not None:
                    data = replace(data, category=category)
            elif entity.kind == EntityKind.PRODUCT and data.product is None:
                category_id = data.category.id if data.category else None
                product = self._lookup.find_product(str(value), category_id)
                if product is not None:
                    data = replace(data, product=product, category=data.category or self._parent_category(product))
            elif entity.kind == EntityKind.DIMENSION:
                dimension_values.append(_as_text(value))
            elif entity.kind == EntityKind.MATERIAL and not data.materials and data.category is not None:
                material = self._lookup.find_material(str(value), data.category.id)
                if material is not None and material not in materials:
                    materials.append(material)
            elif entity.kind == EntityKind.FINISH and not data.finishes_confirmed and data.category is not None:
                finish = self._lookup.find_finish(str(value), data.category.id)
                if finish is not None and finish not in finishes:
                    finishes.append(finish)
            elif entity.kind == EntityKind.QUANTITY and not data.quantities:
                for quantity in parse_quantities(_as_text(value)):
                    if quantity not in quantities:
                        quantities.append(quantity)
            else:
                continue
            self._logger.debug(
                "Entity applied",
                extra={"user_key": user_key, "kind": entity.kind.value, "confidence": entity.confidence},
            )

        if dimension_values and data.product is not None and not data.dimensions_complete:
            fields = data.product.dimension_fields
            parsed = parse_dimensions(" x ".join(dimension_values), fields, data.current_dimension_index)
            if parsed:
                dimensions, cursor = merge_dimensions(data.dimensions, parsed, fields)
                data = replace(data, dimensions=dimensions, current_dimension_index=cursor)
        if materials:
            data = replace(data, materials=tuple(materials))
        if finishes:
            data = replace(data, finishes=tuple(finishes), finishes_confirmed=True)
        if quantities:
            data = replace(data, quantities=tuple(quantities))
        return data

    def _parent_category(self, product: CatalogEntry) -> CatalogEntry | None:
        if product.parent_category_id is None:
            return None
        return self._catalog.get_category(product.parent_category_id)

    def _resolve_mentioned(self, data: CollectedData, text: str) -> CollectedData:
        """Manual fallback for free-text openers: look for a product, then a category, named in the sentence."""
        if not text:
            return data
        if data.product is None:
            product = self._lookup.find_mentioned(text, self._catalog.list_all_products())
            if product is not None:
                return replace(data, product=product, category=data.category or self._parent_category(product))
        if data.category is None:
            category = self._lookup.find_mentioned(text, self._catalog.list_categories())
            if category is not None:
                return replace(data, category=category)
        return data

    def _handle_start(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        data = self._resolve_mentioned(state.data, text)
        if data.category is not None or data.product is not None:
            return self._advance(state, replace(data, wants_quote=True))
        if text and has_quote_intent(text):
            return self._advance(state, replace(data, wants_quote=True))
        return _Turn(
            state=replace(state, data=data, step=ConversationStep.GREETING_RESPONSE),
            reply=reply_composer.GREETING,
        )

    def _handle_greeting_response(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        if not text:
            return _Turn(state=state, reply=reply_composer.GREETING)
        if is_affirmative(text):
            return self._advance(state, replace(state.data, wants_quote=True))
        if is_negative(text):
            self._logger.info("Quote declined at greeting", extra={"user_key": user_key})
            return _Turn(state=reset_state(state), reply=reply_composer.POLITE_CLOSE)

        data = self._resolve_mentioned(state.data, text)
        if data.category is not None or data.product is not None or has_quote_intent(text):
            return self._advance(state, replace(data, wants_quote=True))
        return _Turn(state=state, reply=reply_composer.GREETING)

    def _handle_category(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        data = state.data
        if data.category is not None:
            return self._advance(state, data)

        categories = self._catalog.list_categories()
        if not text:
            return _Turn(state=state, reply=reply_composer.category_prompt(categories))

        category = self._lookup.find_category(text)
        if category is not None:
            return self._advance(state, replace(data, category=category))

        # a product name answers the category question too
        product = self._lookup.find_product(text)
        parent = self._parent_category(product) if product is not None else None
        if product is not None and parent is not None:
            return self._advance(state, replace(data, category=parent, product=product))

        self._logger.info("No catalog match", extra={"user_key": user_key, "step": state.step.value, "kind": "category"})
        return _Turn(state=state, reply=reply_composer.not_found("category", text, categories))

    def _handle_product(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        data = state.data
        if data.product is not None or data.category is None:
            return self._advance(state, data)

        products = self._catalog.list_products(data.category.id)
        if not text:
            return _Turn(state=state, reply=reply_composer.product_prompt(data.category, products))

        product = self._lookup.match(text, products)
        if product is not None:
            return self._advance(state, replace(data, product=product))

        self._logger.info("No catalog match", extra={"user_key": user_key, "step": state.step.value, "kind": "product"})
        return _Turn(state=state, reply=reply_composer.not_found("product", text, products))

    def _handle_dimensions(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        data = state.data
        if data.product is None or data.dimensions_complete:
            return self._advance(state, data)

        product = data.product
        fields = product.dimension_fields
        if not text:
            return _Turn(
                state=state,
                reply=reply_composer.dimension_prompt(product, data.missing_dimension_names, partial=bool(data.dimensions)),
            )

        parsed = parse_dimensions(text, fields, data.current_dimension_index)
        if not parsed:
            self._logger.info("Dimensions not parsed", extra={"user_key": user_key, "step": state.step.value})
            return _Turn(state=state, reply=reply_composer.dimension_not_found(product, data.missing_dimension_names))

        dimensions, cursor = merge_dimensions(data.dimensions, parsed, fields)
        data = replace(data, dimensions=dimensions, current_dimension_index=cursor)
        if data.dimensions_complete:
            return self._advance(state, data)
        return _Turn(
            state=replace(state, data=data),
            reply=reply_composer.dimension_prompt(product, data.missing_dimension_names, partial=True),
        )

    def _handle_materials(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        data = state.data
        if data.materials or data.category is None:
            return self._advance(state, data)

        materials = self._catalog.list_materials(data.category.id)
        if not materials:
            self._logger.warning("Category has no materials", extra={"user_key": user_key, "step": state.step.value})
            return self._advance(
                state, clear_field(data, "category"), reply=reply_composer.no_materials(data.category)
            )
        if not text:
            return _Turn(state=state, reply=reply_composer.material_prompt(data.category, materials))

        selected = self._resolve_selection(text, materials)
        if isinstance(selected, str):
            self._logger.info("No catalog match", extra={"user_key": user_key, "step": state.step.value, "kind": "material"})
            return _Turn(state=state, reply=reply_composer.not_found("material", selected, materials))
        return self._advance(state, replace(data, materials=selected))

    def _handle_finishes(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        data = state.data
        if data.finishes_confirmed or data.category is None:
            return self._advance(state, data)

        finishes = self._catalog.list_finishes(data.category.id)
        if not finishes:
            return self._advance(state, replace(data, finishes=(), finishes_confirmed=True))
        if not text:
            return _Turn(state=state, reply=reply_composer.finish_prompt(finishes))
        if is_no_finish_answer(text):
            return self._advance(state, replace(data, finishes=(), finishes_confirmed=True))

        selected = self._resolve_selection(text, finishes)
        if isinstance(selected, str):
            self._logger.info("No catalog match", extra={"user_key": user_key, "step": state.step.value, "kind": "finish"})
            return _Turn(state=state, reply=reply_composer.not_found("finish", selected, finishes))
        return self._advance(state, replace(data, finishes=selected, finishes_confirmed=True))

    def _handle_quantity(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        data = state.data
        if data.quantities:
            return self._advance(state, data)
        if not text:
            return _Turn(state=state, reply=reply_composer.QUANTITY_PROMPT)

        sku_count = parse_sku_count(text)
        if sku_count is not None:
            data = replace(data, sku_count=sku_count)
        tiers = parse_quantities(text)
        if not tiers:
            return _Turn(state=replace(state, data=data), reply=reply_composer.QUANTITY_NOT_FOUND)
        return self._advance(state, replace(data, quantities=tuple(tiers)))

    def _handle_review(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        data = state.data
        if self.next_unresolved_step(data) != ConversationStep.QUOTE_REVIEW:
            return self._advance(state, data)
        if not text:
            return _Turn(state=state, reply=reply_composer.review_summary(data))
        if is_affirmative(text):
            return _Turn(state=state, next_step=ConversationStep.QUOTE_GENERATION)

        field = parse_change_request(text)
        if field is not None:
            self._logger.info("Change requested", extra={"user_key": user_key, "step": state.step.value, "kind": field})
            return self._advance(replace(state, quote=None), clear_field(data, field))

        sku_count = parse_sku_count(text)
        if sku_count is not None:
            data = replace(data, sku_count=sku_count)
            return _Turn(state=replace(state, data=data), reply=reply_composer.review_summary(data))

        return _Turn(state=state, reply=reply_composer.REVIEW_HELP)

    def _handle_generation(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        if not text or state.quote is None:
            try:
                request = QuoteRequest.from_collected(state.data)
            except QuoteIncompleteError:
                self._logger.warning("Quote requested with missing fields", extra={"user_key": user_key}, exc_info=True)
                return self._advance(state, state.data)
            quote = self._pricing.build_quote(user_key, request)
            self._logger.info(
                "Quote generated",
                extra={"user_key": user_key, "quote_number": quote.quote_number, "tiers": len(quote.tiers)},
            )
            return _Turn(state=replace(state, quote=quote), reply=reply_composer.quote_presentation(quote))

        if is_affirmative(text):
            document_ref = self._document.render(state.quote) if self._document is not None else None
            completed = replace(
                state,
                step=ConversationStep.COMPLETED,
                is_active=False,
                completed_at=self._clock(),
            )
            self._logger.info(
                "Quote accepted",
                extra={"user_key": user_key, "quote_number": state.quote.quote_number},
            )
            return _Turn(state=completed, reply=reply_composer.completed_message(state.quote, document_ref))
        if is_negative(text):
            return _Turn(state=replace(state, quote=None), next_step=ConversationStep.QUOTE_REVIEW)
        return _Turn(state=state, reply=reply_composer.GENERATION_HELP)

    def _handle_completed(self, user_key: str, state: ConversationState, text: str) -> _Turn:
        return _Turn(state=state)

    def _resolve_selection(self, text: str, options: list[CatalogEntry]) -> tuple[CatalogEntry, ...] | str:
        """Every listed name must resolve; returns the first unknown name otherwise."""
        selected: list[CatalogEntry] = []
        for name in split_selection_list(text):
            entry = self._lookup.match(name, options)
            if entry is None:
                return name
            if entry not in selected:
                selected.append(entry)
        if not selected:
            return text
        return tuple(selected)


def _as_text(value: str | float) -> str:
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value
