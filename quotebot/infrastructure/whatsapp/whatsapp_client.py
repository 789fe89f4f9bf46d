from __future__ import annotations

import logging

import httpx

GRAPH_API_BASE = "https://graph.facebook.com"
# WhatsApp rejects text bodies longer than this
MAX_TEXT_LENGTH = 4096


class WhatsAppClient:
    """Thin httpx wrapper over the WhatsApp Cloud API."""

    def __init__(
        self,
        access_token: str,
        phone_number_id: str,
        api_version: str = "v20.0",
        http_client: httpx.Client | None = None,
    ) -> None:
        self._access_token = access_token
        self._messages_endpoint = f"{GRAPH_API_BASE}/{api_version}/{phone_number_id}/messages"
        self._media_base = f"{GRAPH_API_BASE}/{api_version}"
        self._client = http_client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._access_token}"}

    def send_text(self, recipient_id: str, text: str) -> None:
        payload = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": recipient_id,
            "type": "text",
            "text": {"preview_url": False, "body": text[:MAX_TEXT_LENGTH]},
        }
        resp = self._client.post(self._messages_endpoint, headers=self._headers, json=payload)
        if resp.status_code >= 400:
            self._log_error("WhatsApp send failed", resp, recipient_id=recipient_id, text_length=len(text))
            resp.raise_for_status()

    def download_media(self, media_id: str) -> tuple[bytes, str]:
        """Resolve a media id to its temporary URL and fetch it. Returns (content, mime type)."""
        meta = self._client.get(f"{self._media_base}/{media_id}", headers=self._headers)
        if meta.status_code >= 400:
            self._log_error("WhatsApp media lookup failed", meta, media_id=media_id)
            meta.raise_for_status()
        info = meta.json()
        url = info.get("url")
        if not url:
            raise ValueError(f"Media {media_id} has no download URL")

        media = self._client.get(url, headers=self._headers)
        if media.status_code >= 400:
            self._log_error("WhatsApp media download failed", media, media_id=media_id)
            media.raise_for_status()
        return media.content, info.get("mime_type") or "audio/ogg"

    def _log_error(self, event: str, resp: httpx.Response, **context: object) -> None:
        try:
            error = resp.json().get("error", {})
            error_code = error.get("code")
            error_message = error.get("message")
        except Exception:
            error_code = None
            error_message = resp.text
        self._logger.error(
            event,
            extra={"status": resp.status_code, "error_code": error_code, "error_message": error_message, **context},
        )
