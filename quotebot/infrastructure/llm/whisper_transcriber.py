from __future__ import annotations

import logging

from openai import OpenAI

from quotebot.application.exceptions import TranscriptionUnavailable
from quotebot.application.ports.transcriber import TranscriberPort
from quotebot.core.config import settings
from quotebot.infrastructure.whatsapp.whatsapp_client import WhatsAppClient

_EXTENSIONS = {
    "audio/ogg": "ogg",
    "audio/mpeg": "mp3",
    "audio/mp4": "m4a",
    "audio/aac": "aac",
    "audio/amr": "amr",
}


class WhisperTranscriber(TranscriberPort):
    """Downloads a WhatsApp voice note and transcribes it with the OpenAI audio API."""

    def __init__(self, media_client: WhatsAppClient, client: OpenAI | None = None) -> None:
        self._media_client = media_client
        self.client = client or OpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.OPENAI_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    def transcribe(self, media_id: str) -> str:
        try:
            content, mime_type = self._media_client.download_media(media_id)
        except Exception as e:
            raise TranscriptionUnavailable(f"Media download failed: {e}") from e

        extension = _EXTENSIONS.get(mime_type.split(";")[0].strip(), "ogg")
        try:
            result = self.client.audio.transcriptions.create(
                model=settings.OPENAI_MODEL_TRANSCRIBE,
                file=(f"voice.{extension}", content, mime_type),
            )
        except Exception as e:
            raise TranscriptionUnavailable(f"OpenAI transcription error: {e}") from e

        text = (getattr(result, "text", "") or "").strip()
        if not text:
            raise TranscriptionUnavailable("Transcription returned no text.")
        self._logger.info("Voice note transcribed", extra={"media_id": media_id, "text_length": len(text)})
        return text
