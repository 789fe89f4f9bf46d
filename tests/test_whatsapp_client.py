"""
Tests for the WhatsApp Cloud API client and the voice note transcriber.
"""

from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import pytest

from quotebot.application.exceptions import TranscriptionUnavailable
from quotebot.infrastructure.llm.whisper_transcriber import WhisperTranscriber
from quotebot.infrastructure.whatsapp.whatsapp_client import MAX_TEXT_LENGTH, WhatsAppClient


def _client(handler) -> WhatsAppClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return WhatsAppClient(access_token="token", phone_number_id="12345", api_version="v20.0", http_client=http_client)


def test_send_text_posts_message():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"messages": [{"id": "wamid.out"}]})

    _client(handler).send_text("15551234567", "x" * (MAX_TEXT_LENGTH + 10))

    [request] = requests
    body = json.loads(request.content)
    assert str(request.url) == "https://graph.facebook.com/v20.0/12345/messages"
    assert request.headers["Authorization"] == "Bearer token"
    assert body["to"] == "15551234567"
    assert len(body["text"]["body"]) == MAX_TEXT_LENGTH


def test_send_text_raises_on_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 131030, "message": "Recipient not allowed"}})

    with pytest.raises(httpx.HTTPStatusError):
        _client(handler).send_text("15551234567", "hello")


def test_download_media_follows_url():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v20.0/media-1":
            return httpx.Response(200, json={"url": "https://lookaside.example/media-1", "mime_type": "audio/ogg; codecs=opus"})
        return httpx.Response(200, content=b"OggS")

    content, mime_type = _client(handler).download_media("media-1")
    assert content == b"OggS"
    assert mime_type == "audio/ogg; codecs=opus"


class FakeMediaClient:
    def __init__(self, error: Exception | None = None) -> None:
        self._error = error

    def download_media(self, media_id: str) -> tuple[bytes, str]:
        if self._error is not None:
            raise self._error
        return b"OggS", "audio/ogg; codecs=opus"


def _openai(text: str = "", error: Exception | None = None):
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        if error is not None:
            raise error
        return SimpleNamespace(text=text)

    return SimpleNamespace(audio=SimpleNamespace(transcriptions=SimpleNamespace(create=create))), calls


def test_transcriber_returns_text():
    client, calls = _openai(" I need stand up pouches ")
    transcriber = WhisperTranscriber(media_client=FakeMediaClient(), client=client)

    assert transcriber.transcribe("media-1") == "I need stand up pouches"
    assert calls[0]["file"][0] == "voice.ogg"


@pytest.mark.parametrize(
    "media_error, openai_error, text",
    [
        (httpx.ConnectError("offline"), None, "hi"),
        (None, RuntimeError("quota"), "hi"),
        (None, None, "   "),
    ],
)
def test_transcriber_failures(media_error, openai_error, text):
    client, _ = _openai(text, openai_error)
    transcriber = WhisperTranscriber(media_client=FakeMediaClient(media_error), client=client)
    with pytest.raises(TranscriptionUnavailable):
        transcriber.transcribe("media-1")
