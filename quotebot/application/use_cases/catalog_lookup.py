from __future__ import annotations

import logging
import math
import re
from typing import Callable, Sequence

from quotebot.application.ports.catalog_store import CatalogStorePort
from quotebot.domain.entities.catalog_entry import CatalogEntry

# Known misspelling -> catalog spelling.
SPELLING_CORRECTIONS = {
    "mylar": "mylor",
    "polyethylene": "pe",
    "polypropylene": "pp",
    "polyamide": "pa",
    "kraft paper": "kraft",
}

# Contains-style levels ignore fragments shorter than this ("pe" would hit every film).
MIN_CONTAINED_LENGTH = 3

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")
_NUMERIC_PATTERN = re.compile(r"\d+")


def compact(text: str) -> str:
    """Lowercase and drop separators so "Stand-up Pouch" == "standup pouch" == "stand up pouch"."""
    return "".join(_TOKEN_PATTERN.findall(text.lower()))


def tokens(text: str) -> list[str]:
    return _TOKEN_PATTERN.findall(text.lower())


def token_windows(text: str) -> set[str]:
    """Every run of whole adjacent words, compacted: "stand up pouch" -> {"stand", "standup", "standuppouch", ...}."""
    words = tokens(text)
    return {"".join(words[start:end]) for start in range(len(words)) for end in range(start + 1, len(words) + 1)}


def spelling_variants(text: str) -> list[str]:
    """The text as typed first, then the corrected form (when a correction applies)."""
    original = " ".join(text.split())
    corrected = original.lower()
    for wrong, right in SPELLING_CORRECTIONS.items():
        corrected = re.sub(rf"\b{re.escape(wrong)}\b", right, corrected)
    if corrected == original.lower():
        return [original]
    return [original, corrected]


def _sort_key(entry: CatalogEntry) -> tuple[int, str]:
    return entry.sort_order, entry.name.lower()


class CatalogLookup:
    """
    Resolve free text to a single catalog entry, or None.

    Levels run in order and the first one with any hit wins; ties inside a
    level go to the lowest (sort_order, name). Nothing here ever asks the user
    to pick between candidates, and a bare number is only compared against the
    ERP id (never treated as a position in a displayed list).
    """

    def __init__(self, catalog: CatalogStorePort) -> None:
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)
        self._levels: list[tuple[str, Callable[[str, Sequence[CatalogEntry]], list[CatalogEntry]]]] = [
            ("exact", self._exact),
            ("name_contains_input", self._name_contains_input),
            ("input_contains_name", self._input_contains_name),
            ("token_set", self._token_set),
            ("description", self._description),
        ]

    def match(self, name: str, candidates: Sequence[CatalogEntry]) -> CatalogEntry | None:
        if not name or not name.strip() or not candidates:
            return None

        stripped = name.strip()
        if _NUMERIC_PATTERN.fullmatch(stripped):
            return self._external_id(int(stripped), candidates)

        variants = spelling_variants(stripped)
        for level_name, level in self._levels:
            for variant in variants:
                hits = level(variant, candidates)
                if hits:
                    best = min(hits, key=_sort_key)
                    self._logger.debug(
                        "Catalog match",
                        extra={"kind": best.kind.value, "reason": level_name, "entry_id": best.id},
                    )
                    return best

        fallback = self._token_plurality(variants, candidates)
        if fallback is not None:
            self._logger.debug(
                "Catalog match",
                extra={"kind": fallback.kind.value, "reason": "token_plurality", "entry_id": fallback.id},
            )
        return fallback

    def find_mentioned(self, text: str, candidates: Sequence[CatalogEntry]) -> CatalogEntry | None:
        """
        Find a catalog name embedded in a longer sentence ("I need quote on flat pouch").

        Only exact and input-contains-name matches count; the longest mentioned
        name wins so "stand up pouch" beats a bare "pouch".
        """
        if not text or not candidates:
            return None
        for variant in spelling_variants(text):
            hits = self._exact(variant, candidates) or self._input_contains_name(variant, candidates)
            if hits:
                return min(hits, key=lambda entry: (-self._longest_contained(variant, entry), *_sort_key(entry)))
        return None

    def find_category(self, name: str) -> CatalogEntry | None:
        return self.match(name, self._catalog.list_categories())

    def find_product(self, name: str, category_id: str | None = None) -> CatalogEntry | None:
        if category_id is None:
            return self.match(name, self._catalog.list_all_products())
        return self.match(name, self._catalog.list_products(category_id))

    def find_material(self, name: str, category_id: str) -> CatalogEntry | None:
        return self.match(name, self._catalog.list_materials(category_id))

    def find_finish(self, name: str, category_id: str) -> CatalogEntry | None:
        return self.match(name, self._catalog.list_finishes(category_id))

    def _exact(self, text: str, candidates: Sequence[CatalogEntry]) -> list[CatalogEntry]:
        needle = compact(text)
        if not needle:
            return []
        return [entry for entry in candidates if any(compact(n) == needle for n in entry.searchable_names)]

    def _name_contains_input(self, text: str, candidates: Sequence[CatalogEntry]) -> list[CatalogEntry]:
        needle = compact(text)
        if len(needle) < MIN_CONTAINED_LENGTH:
            return []
        return [entry for entry in candidates if any(needle in token_windows(n) for n in entry.searchable_names)]

    def _input_contains_name(self, text: str, candidates: Sequence[CatalogEntry]) -> list[CatalogEntry]:
        haystack = token_windows(text)
        hits = []
        for entry in candidates:
            for candidate_name in entry.searchable_names:
                needle = compact(candidate_name)
                if len(needle) >= MIN_CONTAINED_LENGTH and needle in haystack:
                    hits.append(entry)
                    break
        return hits

    def _token_set(self, text: str, candidates: Sequence[CatalogEntry]) -> list[CatalogEntry]:
        input_tokens = set(tokens(text))
        if not input_tokens:
            return []
        hits = []
        for entry in candidates:
            for candidate_name in entry.searchable_names:
                name_tokens = set(tokens(candidate_name))
                if not name_tokens:
                    continue
                shorter, longer = sorted((input_tokens, name_tokens), key=len)
                if shorter <= longer:
                    hits.append(entry)
                    break
        return hits

    def _description(self, text: str, candidates: Sequence[CatalogEntry]) -> list[CatalogEntry]:
        needle = " ".join(tokens(text))
        if len(needle) < MIN_CONTAINED_LENGTH:
            return []
        return [
            entry
            for entry in candidates
            if entry.description and f" {needle} " in f" {' '.join(tokens(entry.description))} "
        ]

    def _external_id(self, value: int, candidates: Sequence[CatalogEntry]) -> CatalogEntry | None:
        hits = [entry for entry in candidates if entry.external_id is not None and entry.external_id == value]
        return min(hits, key=_sort_key) if hits else None

    def _token_plurality(self, variants: Sequence[str], candidates: Sequence[CatalogEntry]) -> CatalogEntry | None:
        for variant in variants:
            input_tokens = list(dict.fromkeys(tokens(variant)))
            if not input_tokens:
                continue
            required = math.ceil(len(input_tokens) / 2)
            best: CatalogEntry | None = None
            best_score = 0
            for entry in sorted(candidates, key=_sort_key):
                score = max(
                    (sum(1 for t in input_tokens if t in set(tokens(n))) for n in entry.searchable_names),
                    default=0,
                )
                if score > best_score:
                    best, best_score = entry, score
            if best is not None and best_score >= required:
                return best
        return None

    @staticmethod
    def _longest_contained(text: str, entry: CatalogEntry) -> int:
        haystack = token_windows(text)
        lengths = [len(compact(n)) for n in entry.searchable_names if compact(n) in haystack]
        return max(lengths, default=0)
