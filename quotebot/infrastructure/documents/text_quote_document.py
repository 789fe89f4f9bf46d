from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from quotebot.application.ports.quote_document import QuoteDocumentPort
from quotebot.domain.entities.quote import Quote

DISCLAIMER = (
    "This estimate covers all standard operations and materials. Pricing may be adjusted after "
    "final artwork inspection. Duties and taxes on arrival, if applicable, are paid by the receiver."
)


class TextQuoteDocument(QuoteDocumentPort):
    """Writes accepted quotes as plain-text documents, one file per quote number."""

    def __init__(self, output_dir: str = "./data/quotes") -> None:
        self._output_dir = Path(output_dir)
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger(__name__)

    def render(self, quote: Quote) -> str:
        path = self._output_dir / f"{quote.quote_number}.txt"
        path.write_text(render_text(quote), encoding="utf-8")
        self._logger.info("Quote document written", extra={"quote_number": quote.quote_number, "path": str(path)})
        return str(path)


def render_text(quote: Quote) -> str:
    request = quote.request
    lines = [
        f"QUOTE {quote.quote_number}",
        f"Customer: {quote.user_key}",
        f"Date: {_date(quote.created_at)}    Valid until: {_date(quote.valid_until)}",
        "",
        f"Product:    {request.product.name}",
        f"Size:       {' x '.join(f'{d.value:g} {d.unit}' for d in request.dimensions) or 'n/a'}",
        f"Material:   {', '.join(m.name for m in request.materials)}",
        f"Finish:     {', '.join(f.name for f in request.finishes) or 'None'}",
        f"SKUs:       {request.sku_count}",
        "",
        f"{'Quantity':>10} {'Subtotal':>12} {'Discount':>10} {'Tax':>10} {'Shipping':>10} {'Total':>12} {'Unit':>10}",
    ]
    for tier in quote.tiers:
        lines.append(
            f"{tier.quantity:>10,} {tier.subtotal:>12,.2f} {tier.discount_amount:>10,.2f} {tier.tax:>10,.2f} "
            f"{tier.shipping:>10,.2f} {tier.total_price:>12,.2f} {tier.unit_price:>10,.4f}"
        )
    lines += ["", DISCLAIMER, ""]
    return "\n".join(lines)


def _date(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")
