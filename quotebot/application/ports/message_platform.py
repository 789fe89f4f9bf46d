from abc import ABC, abstractmethod


class MessagePlatformPort(ABC):
    @abstractmethod
    def send_text(self, recipient_id: str, text: str) -> None:
        """Deliver a plain-text reply. Channel formatting is the adapter's concern."""
        raise NotImplementedError
