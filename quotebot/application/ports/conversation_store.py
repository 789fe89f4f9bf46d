from abc import ABC, abstractmethod

from quotebot.domain.entities.conversation_state import ConversationState


class ConversationStorePort(ABC):
    @abstractmethod
    def get_state(self, user_key: str) -> ConversationState | None:
        """Return the stored session for a user, or None if there is none yet."""
        raise NotImplementedError

    @abstractmethod
    def set_state(self, user_key: str, state: ConversationState) -> None:
        """Persist a session. Must be atomic per user_key."""
        raise NotImplementedError

    @abstractmethod
    def has_processed(self, message_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def mark_processed(self, user_key: str, message_id: str) -> None:
        raise NotImplementedError
