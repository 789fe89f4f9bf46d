from __future__ import annotations

import re

AFFIRMATIVE_ANSWERS = {
    "yes",
    "y",
    "yeah",
    "yep",
    "yup",
    "sure",
    "ok",
    "okay",
    "please",
    "yes please",
    "of course",
    "confirm",
    "accept",
    "go ahead",
    "sounds good",
    "👍",
}

NEGATIVE_ANSWERS = {
    "no",
    "n",
    "nope",
    "nah",
    "no thanks",
    "no thank you",
    "not now",
    "decline",
}

RESET_PHRASES = (
    "start over",
    "new quote",
    "reset",
    "restart",
    "begin again",
    "cancel quote",
)

QUOTE_INTENT_TERMS = (
    "quote",
    "price",
    "pricing",
    "cost",
    "how much",
    "need",
    "want",
    "order",
)

NO_FINISH_ANSWERS = {"none", "no finish", "no finishes", "skip", "standard", "nothing", "no"}


def normalize_text(text: str) -> str:
    normalized = text.lower().replace("+", " ")
    normalized = re.sub(r"[^a-z0-9\s]", " ", normalized)
    normalized = re.sub(r"\s+", " ", normalized).strip()
    return normalized


def _answer_form(text: str) -> str:
    stripped = text.strip()
    if stripped in AFFIRMATIVE_ANSWERS:
        return stripped
    return normalize_text(stripped)


def is_affirmative(text: str) -> bool:
    return _answer_form(text) in AFFIRMATIVE_ANSWERS


def is_negative(text: str) -> bool:
    return _answer_form(text) in NEGATIVE_ANSWERS


def is_yes_no_answer(text: str) -> bool:
    return is_affirmative(text) or is_negative(text)


def is_reset_request(text: str) -> bool:
    normalized = normalize_text(text)
    if not normalized:
        return False
    padded = f" {normalized} "
    return any(f" {phrase} " in padded for phrase in RESET_PHRASES)


def has_quote_intent(text: str) -> bool:
    padded = f" {normalize_text(text)} "
    return any(f" {term} " in padded for term in QUOTE_INTENT_TERMS)


def is_no_finish_answer(text: str) -> bool:
    return normalize_text(text) in NO_FINISH_ANSWERS


def split_selection_list(text: str) -> list[str]:
    """
    Split a multi-selection answer ("PET + White PE, Kraft + PE") into names.

    Only commas, semicolons, newlines and a standalone "and" separate items:
    "+" belongs to composite material names.
    """
    parts = re.split(r"[,;\n]|\s+and\s+", text, flags=re.IGNORECASE)
    return [part.strip() for part in parts if part and part.strip()]
