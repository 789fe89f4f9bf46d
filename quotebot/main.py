import logging

from fastapi import FastAPI

from quotebot.api.webhooks import router as webhooks_router
from quotebot.core.config import settings

# extra= fields appended to every log line when present
LOG_CONTEXT_KEYS = ("message_id", "user_key", "step", "next_step", "kind", "confidence", "reason", "quote_number")


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in LOG_CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(context)}" if context else base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="WhatsApp Packaging Quote Bot", version="1.0.0")
app.include_router(webhooks_router, tags=["webhooks"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.ENV}
