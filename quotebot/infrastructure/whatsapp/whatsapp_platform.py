from __future__ import annotations

from quotebot.application.ports.message_platform import MessagePlatformPort
from quotebot.infrastructure.whatsapp.whatsapp_client import WhatsAppClient


class WhatsAppPlatform(MessagePlatformPort):
    """Sends replies as WhatsApp text messages; the recipient id is the user's phone number."""

    def __init__(self, client: WhatsAppClient) -> None:
        self._client = client

    def send_text(self, recipient_id: str, text: str) -> None:
        self._client.send_text(recipient_id=recipient_id, text=text)
