from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from quotebot.domain.entities.message import Message


class WebhookEventDTO(BaseModel):
    """WhatsApp Cloud API webhook body: entry[].changes[].value.messages[]."""

    object: str | None = None
    entry: list[dict[str, Any]] = Field(default_factory=list)

    def extract_messages(self) -> list[Message]:
        messages: list[Message] = []
        for entry in self.entry or []:
            for change in entry.get("changes", []) or []:
                if change.get("field", "messages") != "messages":
                    continue
                value = change.get("value") or {}
                for msg in value.get("messages", []) or []:
                    message = _to_message(msg)
                    if message is not None:
                        messages.append(message)
        return messages


def _to_message(msg: dict[str, Any]) -> Message | None:
    message_id = msg.get("id")
    sender = msg.get("from")
    timestamp = msg.get("timestamp")
    if not (message_id and sender and timestamp):
        return None

    msg_type = msg.get("type")
    text = ""
    media_id = None
    if msg_type == "text":
        text = (msg.get("text") or {}).get("body") or ""
    elif msg_type == "audio":
        media_id = (msg.get("audio") or {}).get("id")
    elif msg_type == "interactive":
        interactive = msg.get("interactive") or {}
        reply = interactive.get("button_reply") or interactive.get("list_reply") or {}
        text = reply.get("title") or ""
    elif msg_type == "button":
        text = (msg.get("button") or {}).get("text") or ""

    if not text.strip() and not media_id:
        return None

    try:
        ts = int(timestamp)
    except (TypeError, ValueError):
        return None

    return Message(
        id=str(message_id),
        user_key=str(sender),
        text=str(text),
        timestamp=ts,
        platform="whatsapp",
        media_id=str(media_id) if media_id else None,
    )
