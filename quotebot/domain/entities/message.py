from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    id: str
    user_key: str  # sender phone number
    text: str
    timestamp: int
    platform: str
    media_id: str | None = None  # voice notes arrive without text
