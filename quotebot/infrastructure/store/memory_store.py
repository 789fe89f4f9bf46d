from __future__ import annotations

import threading

from quotebot.application.ports.conversation_store import ConversationStorePort
from quotebot.domain.entities.conversation_state import ConversationState


class MemoryConversationStore(ConversationStorePort):
    def __init__(self, processed_limit: int = 10000) -> None:
        self._states: dict[str, ConversationState] = {}
        self._processed: dict[str, str] = {}  # message_id -> user_key, insertion ordered
        self._processed_limit = processed_limit
        self._lock = threading.Lock()

    def get_state(self, user_key: str) -> ConversationState | None:
        with self._lock:
            return self._states.get(user_key)

    def set_state(self, user_key: str, state: ConversationState) -> None:
        with self._lock:
            self._states[user_key] = state

    def has_processed(self, message_id: str) -> bool:
        with self._lock:
            return message_id in self._processed

    def mark_processed(self, user_key: str, message_id: str) -> None:
        with self._lock:
            self._processed[message_id] = user_key
            while len(self._processed) > self._processed_limit:
                # oldest first
                self._processed.pop(next(iter(self._processed)))
