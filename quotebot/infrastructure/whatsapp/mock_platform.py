from __future__ import annotations

import logging

from quotebot.application.ports.message_platform import MessagePlatformPort


class MockWhatsAppPlatform(MessagePlatformPort):
    """Records replies instead of sending them (dev runs, local chat and tests)."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self._logger = logging.getLogger(__name__)

    def send_text(self, recipient_id: str, text: str) -> None:
        self.sent.append((recipient_id, text))
        self._logger.info("Mock send to WhatsApp", extra={"user_key": recipient_id, "text_length": len(text)})
