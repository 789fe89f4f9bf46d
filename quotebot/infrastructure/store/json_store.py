from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any

from quotebot.application.ports.conversation_store import ConversationStorePort
from quotebot.domain.entities.catalog_entry import CatalogEntry
from quotebot.domain.entities.collected_data import CollectedData, Dimension
from quotebot.domain.entities.conversation_state import ConversationState
from quotebot.domain.entities.conversation_step import ConversationStep
from quotebot.domain.entities.quote import PriceBreakdown, Quote, QuoteRequest
from quotebot.infrastructure.catalog.entry_codec import entry_from_dict, entry_to_dict

PROCESSED_ID_LIMIT = 1000
FORMAT_VERSION = 1


class JsonConversationStore(ConversationStorePort):
    """
    One JSON file per user under data_dir.

    Catalog entries are stored as snapshots inside the state, so a session
    survives catalog edits. Writes go to a temp file and are renamed into place.
    """

    def __init__(self, data_dir: str = "./data/conversations") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # guards the locks dict
        self._processed_cache: set[str] = set()
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, user_key: str) -> threading.Lock:
        with self._lock_lock:
            if user_key not in self._locks:
                self._locks[user_key] = threading.Lock()
            return self._locks[user_key]

    def _get_file_path(self, user_key: str) -> Path:
        safe_key = re.sub(r"[^A-Za-z0-9_.-]", "_", user_key)
        return self._data_dir / f"{safe_key}.json"

    def _load_user_data(self, user_key: str) -> dict[str, Any]:
        file_path = self._get_file_path(user_key)
        default = {"user_key": user_key, "state": None, "processed_message_ids": [], "version": FORMAT_VERSION}
        if not file_path.exists():
            return default

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            self._logger.warning("Corrupted conversation file ignored", extra={"user_key": user_key})
            return default
        data.setdefault("processed_message_ids", [])
        data.setdefault("version", FORMAT_VERSION)
        return data

    def _save_user_data(self, user_key: str, data: dict[str, Any]) -> None:
        file_path = self._get_file_path(user_key)
        temp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def get_state(self, user_key: str) -> ConversationState | None:
        with self._get_lock(user_key):
            raw = self._load_user_data(user_key).get("state")
        if not raw:
            return None
        try:
            return self._deserialize_state(raw)
        except (KeyError, ValueError, TypeError):
            self._logger.warning("Unreadable conversation state ignored", extra={"user_key": user_key}, exc_info=True)
            return None

    def set_state(self, user_key: str, state: ConversationState) -> None:
        with self._get_lock(user_key):
            data = self._load_user_data(user_key)
            data["state"] = self._serialize_state(state)
            self._save_user_data(user_key, data)

    def has_processed(self, message_id: str) -> bool:
        if message_id in self._processed_cache:
            return True
        # ids are stored per user file; scan once and remember
        for file_path in self._data_dir.glob("*.json"):
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    processed = json.load(f).get("processed_message_ids", [])
            except (json.JSONDecodeError, IOError):
                continue
            if message_id in processed:
                self._processed_cache.add(message_id)
                return True
        return False

    def mark_processed(self, user_key: str, message_id: str) -> None:
        with self._get_lock(user_key):
            data = self._load_user_data(user_key)
            processed = data["processed_message_ids"]
            if message_id not in processed:
                processed.append(message_id)
            data["processed_message_ids"] = processed[-PROCESSED_ID_LIMIT:]
            self._save_user_data(user_key, data)
        self._processed_cache.add(message_id)

    def _serialize_state(self, state: ConversationState) -> dict[str, Any]:
        return {
            "step": state.step.value,
            "data": self._serialize_data(state.data),
            "quote": self._serialize_quote(state.quote) if state.quote else None,
            "last_message_at": state.last_message_at,
            "is_active": state.is_active,
            "completed_at": state.completed_at,
        }

    def _deserialize_state(self, data: dict[str, Any]) -> ConversationState:
        quote = data.get("quote")
        return ConversationState(
            step=ConversationStep(data.get("step", ConversationStep.START.value)),
            data=self._deserialize_data(data.get("data") or {}),
            quote=self._deserialize_quote(quote) if quote else None,
            last_message_at=data.get("last_message_at"),
            is_active=data.get("is_active", True),
            completed_at=data.get("completed_at"),
        )

    def _serialize_data(self, data: CollectedData) -> dict[str, Any]:
        return {
            "wants_quote": data.wants_quote,
            "category": _entry_to_dict(data.category),
            "product": _entry_to_dict(data.product),
            "dimensions": [_dimension_to_dict(d) for d in data.dimensions],
            "current_dimension_index": data.current_dimension_index,
            "materials": [_entry_to_dict(m) for m in data.materials],
            "finishes": [_entry_to_dict(f) for f in data.finishes],
            "finishes_confirmed": data.finishes_confirmed,
            "quantities": list(data.quantities),
            "sku_count": data.sku_count,
        }

    def _deserialize_data(self, data: dict[str, Any]) -> CollectedData:
        return CollectedData(
            wants_quote=data.get("wants_quote", False),
            category=_entry_from_dict(data.get("category")),
            product=_entry_from_dict(data.get("product")),
            dimensions=tuple(_dimension_from_dict(d) for d in data.get("dimensions", [])),
            current_dimension_index=data.get("current_dimension_index", 0),
            materials=tuple(_entry_from_dict(m) for m in data.get("materials", [])),
            finishes=tuple(_entry_from_dict(f) for f in data.get("finishes", [])),
            finishes_confirmed=data.get("finishes_confirmed", False),
            quantities=tuple(int(q) for q in data.get("quantities", [])),
            sku_count=data.get("sku_count", 1),
        )

    def _serialize_quote(self, quote: Quote) -> dict[str, Any]:
        request = quote.request
        return {
            "quote_number": quote.quote_number,
            "user_key": quote.user_key,
            "request": {
                "product": _entry_to_dict(request.product),
                "materials": [_entry_to_dict(m) for m in request.materials],
                "finishes": [_entry_to_dict(f) for f in request.finishes],
                "dimensions": [_dimension_to_dict(d) for d in request.dimensions],
                "quantities": list(request.quantities),
                "sku_count": request.sku_count,
            },
            "tiers": [vars(tier).copy() for tier in quote.tiers],
            "created_at": quote.created_at,
            "valid_until": quote.valid_until,
        }

    def _deserialize_quote(self, data: dict[str, Any]) -> Quote:
        request = data["request"]
        return Quote(
            quote_number=data["quote_number"],
            user_key=data["user_key"],
            request=QuoteRequest(
                product=_entry_from_dict(request["product"]),
                materials=tuple(_entry_from_dict(m) for m in request.get("materials", [])),
                finishes=tuple(_entry_from_dict(f) for f in request.get("finishes", [])),
                dimensions=tuple(_dimension_from_dict(d) for d in request.get("dimensions", [])),
                quantities=tuple(int(q) for q in request.get("quantities", [])),
                sku_count=request.get("sku_count", 1),
            ),
            tiers=tuple(PriceBreakdown(**tier) for tier in data.get("tiers", [])),
            created_at=data["created_at"],
            valid_until=data["valid_until"],
        )


def _dimension_to_dict(dimension: Dimension) -> dict[str, Any]:
    return {"name": dimension.name, "value": dimension.value, "unit": dimension.unit}


def _dimension_from_dict(data: dict[str, Any]) -> Dimension:
    return Dimension(name=data["name"], value=float(data["value"]), unit=data.get("unit", "inches"))


def _entry_to_dict(entry: CatalogEntry | None) -> dict[str, Any] | None:
    return entry_to_dict(entry) if entry is not None else None


def _entry_from_dict(data: dict[str, Any] | None) -> CatalogEntry | None:
    return entry_from_dict(data) if data else None
