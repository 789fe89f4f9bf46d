from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from quotebot.domain.entities.catalog_entry import CatalogEntry
from quotebot.domain.entities.collected_data import CollectedData, Dimension
from quotebot.domain.entities.quote import Quote

GENERIC_RETRY = "Sorry, something went wrong on our side. Please send your last message again."

VOICE_NOT_UNDERSTOOD = "Sorry, I couldn't process your voice message. Could you type it instead?"

GREETING = (
    "Hi! 👋 Welcome to our packaging quote assistant.\n"
    "Would you like to get a price quote for custom packaging? (yes/no)"
)

POLITE_CLOSE = "No problem! Whenever you need a packaging quote, just send us a message. 👋"

QUANTITY_PROMPT = (
    "How many pieces do you need? You can send one or more quantities to compare, "
    "e.g. \"5000\", \"2.5k\" or \"1000, 5000, 10000\"."
)

QUANTITY_NOT_FOUND = "I couldn't find a quantity in your message. Please type a number, e.g. \"5000\" or \"10k\"."

REVIEW_HELP = (
    "Reply *yes* to see your prices, *change <category|product|size|material|finish|quantity>* "
    "to edit an answer, *sku <number>* to set the number of designs, or *start over*."
)

GENERATION_HELP = "Reply *yes* to accept this quote or *no* to go back and make changes."


def _bullets(entries: Sequence[CatalogEntry]) -> str:
    # names only; selecting by position is not supported
    return "\n".join(f"• {entry.name}" for entry in entries)


def _join_blocks(blocks: Sequence[str]) -> str:
    return "\n\n".join(block for block in blocks if block)


def _format_number(value: float) -> str:
    return f"{value:g}"


def _format_money(value: float) -> str:
    return f"${value:,.2f}"


def _format_date(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")


def format_dimensions(dimensions: Sequence[Dimension]) -> str:
    return ", ".join(f"{d.name}: {_format_number(d.value)} {d.unit}" for d in dimensions)


def category_prompt(categories: Sequence[CatalogEntry]) -> str:
    return _join_blocks(["Which type of packaging are you looking for?", _bullets(categories)])


def product_prompt(category: CatalogEntry, products: Sequence[CatalogEntry]) -> str:
    return _join_blocks([f"Which {category.name} product do you need?", _bullets(products)])


def dimension_prompt(product: CatalogEntry, missing_names: Sequence[str], partial: bool = False) -> str:
    fields = {field.name: field for field in product.dimension_fields}
    unit = fields[missing_names[0]].unit if missing_names and missing_names[0] in fields else "inches"
    names = " x ".join(missing_names)
    if partial:
        return f"Thanks! I still need the {names} ({unit}) for your {product.name}."
    example = "x".join(str(n) for n in range(5, 5 - len(missing_names), -1))
    return f"What size do you need for your {product.name}? Please send {names} in {unit}, e.g. \"{example}\"."


def dimension_not_found(product: CatalogEntry, missing_names: Sequence[str]) -> str:
    names = " x ".join(missing_names)
    limits = [
        f"{field.name} up to {_format_number(field.max_value)} {field.unit}"
        for field in product.dimension_fields
        if field.name in missing_names and field.max_value is not None
    ]
    hint = f" ({'; '.join(limits)})" if limits else ""
    return f"I couldn't read that size. Please type the {names} as numbers, e.g. \"5x4\"{hint}."


def material_prompt(category: CatalogEntry, materials: Sequence[CatalogEntry]) -> str:
    return _join_blocks(
        [
            f"Which material would you like for your {category.name}? You can pick more than one, separated by commas.",
            _bullets(materials),
        ]
    )


def no_materials(category: CatalogEntry) -> str:
    return f"Sorry, we have no materials available for {category.name} right now. Please choose another type of packaging."


def finish_prompt(finishes: Sequence[CatalogEntry]) -> str:
    return _join_blocks(
        [
            "Which finishes would you like? Separate several with commas, or reply *none* for no finish.",
            _bullets(finishes),
        ]
    )


def not_found(kind: str, name: str, options: Sequence[CatalogEntry]) -> str:
    return _join_blocks(
        [
            f"Sorry, I couldn't find a {kind} called \"{name}\". Please type the exact name from the list:",
            _bullets(options),
        ]
    )


def review_summary(data: CollectedData) -> str:
    lines = ["📋 *Your request*"]
    if data.category:
        lines.append(f"• Category: {data.category.name}")
    if data.product:
        lines.append(f"• Product: {data.product.name}")
    if data.dimensions:
        lines.append(f"• Size: {format_dimensions(data.dimensions)}")
    if data.materials:
        lines.append(f"• Material: {', '.join(m.name for m in data.materials)}")
    lines.append(f"• Finish: {', '.join(f.name for f in data.finishes) if data.finishes else 'None'}")
    if data.quantities:
        lines.append(f"• Quantity: {', '.join(f'{q:,}' for q in data.quantities)} pcs")
    lines.append(f"• SKUs: {data.sku_count}")
    return _join_blocks(["\n".join(lines), REVIEW_HELP])


def quote_presentation(quote: Quote) -> str:
    request = quote.request
    header = [
        "🎯 *QUOTE* 🎯",
        f"Quote #: {quote.quote_number}",
        f"• Product: {request.product.name}",
        f"• Material: {', '.join(m.name for m in request.materials)}",
        f"• Finish: {', '.join(f.name for f in request.finishes) if request.finishes else 'None'}",
        f"• Size: {format_dimensions(request.dimensions) or 'n/a'}",
        f"• SKUs: {request.sku_count}",
    ]
    blocks = ["\n".join(header)]
    for tier in quote.tiers:
        lines = [
            f"💰 *{tier.quantity:,} pcs*",
            f"• Base: {_format_money(tier.base_price)}",
            f"• Material: {_format_money(tier.material_cost)}",
            f"• Finish: {_format_money(tier.finish_cost)}",
        ]
        if tier.discount_amount > 0:
            lines.append(f"• Quantity discount ({tier.discount_rate:.0%}): -{_format_money(tier.discount_amount)}")
        lines.append(f"• Subtotal: {_format_money(tier.discounted_subtotal)}")
        lines.append(f"• Tax: {_format_money(tier.tax)}")
        lines.append(f"• Shipping: {_format_money(tier.shipping) if tier.shipping > 0 else 'FREE'}")
        lines.append(f"*Total: {_format_money(tier.total_price)}* ({_format_money(tier.unit_price)}/pc)")
        blocks.append("\n".join(lines))
    blocks.append(f"📅 Valid until: {_format_date(quote.valid_until)}")
    blocks.append(GENERATION_HELP)
    return _join_blocks(blocks)


def completed_message(quote: Quote, document_ref: str | None) -> str:
    lines = [f"✅ Quote {quote.quote_number} accepted. Our team will contact you shortly."]
    if document_ref:
        lines.append(f"Your quote document: {document_ref}")
    lines.append("Send *new quote* any time to start another one.")
    return "\n".join(lines)
