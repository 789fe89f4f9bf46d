from __future__ import annotations

import re

# "2.5k", "10K", "5 k"
_K_NOTATION = r"(?P<k>\d+(?:\.\d+)?)\s*k\b"
# "50,000", "5000", "2.0"; never a side of a dimension expression like "5x4"
_PLAIN_NUMBER = (
    r"(?<![\d.])(?<!\d[x×*])(?<!\d\s[x×*])(?<!\d[x×*]\s)(?<!\d\s[x×*]\s)"
    r"(?P<n>\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
    r"(?!\.?\d)(?!\s*[x×*]\s*\d)"
)
QUANTITY_PATTERN = re.compile(f"{_K_NOTATION}|{_PLAIN_NUMBER}", re.IGNORECASE)

SKU_PATTERN = re.compile(
    r"\bskus?\s*(?:is\s*|are\s*|:|=)?\s*(?P<a>\d+)\b"
    r"|\b(?P<b>\d+)\s*(?:skus?|designs?|versions?|artworks?)\b",
    re.IGNORECASE,
)


def parse_sku_count(text: str) -> int | None:
    match = SKU_PATTERN.search(text or "")
    if not match:
        return None
    value = int(match.group("a") or match.group("b"))
    return value if value > 0 else None


def strip_sku_phrases(text: str) -> str:
    return SKU_PATTERN.sub(" ", text or "")


def parse_quantities(text: str) -> list[int]:
    """
    Parse every quantity tier mentioned in a message, in order.

    K-notation is multiplied by 1000 and rounded half-up; plain numbers may use
    thousands separators. SKU phrases and dimension expressions are ignored.
    Returns an empty list when nothing parses; there is no default quantity.
    """
    tiers: list[int] = []
    for match in QUANTITY_PATTERN.finditer(strip_sku_phrases(text)):
        if match.group("k") is not None:
            value = int(float(match.group("k")) * 1000 + 0.5)
        else:
            raw = float(match.group("n").replace(",", ""))
            if not raw.is_integer():
                continue
            value = int(raw)
        if value > 0 and value not in tiers:
            tiers.append(value)
    return tiers


def parse_quantity(text: str) -> int | None:
    tiers = parse_quantities(text)
    return tiers[0] if tiers else None
