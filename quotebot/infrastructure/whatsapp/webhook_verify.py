from __future__ import annotations

import hmac
import logging

logger = logging.getLogger(__name__)

DEV_ENVIRONMENTS = {"dev", "local", "test"}


def verify_subscription(mode: str | None, token: str | None, challenge: str | None, expected_token: str) -> str | None:
    """Meta hub handshake: echo the challenge only for a matching verify token."""
    if mode != "subscribe" or not expected_token or not token:
        return None
    if not hmac.compare_digest(token, expected_token):
        return None
    return challenge or ""


def verify_post_signature(body: bytes, signature_header: str | None, app_secret: str | None, env: str) -> bool:
    """Check X-Hub-Signature-256 ("sha256=<hex>") against the raw request body."""
    if not signature_header:
        if env.lower() in DEV_ENVIRONMENTS:
            logger.warning("Missing signature header; accepting in dev mode", extra={"reason": "unsigned_dev"})
            return True
        logger.warning("Missing signature header", extra={"reason": "unsigned"})
        return False

    if not app_secret:
        logger.error("Missing app secret for signature verification")
        return False

    algo, _, signature = signature_header.partition("=")
    if algo.lower() != "sha256" or not signature:
        logger.warning("Malformed signature header", extra={"reason": "bad_signature_format"})
        return False

    expected = hmac.new(app_secret.encode("utf-8"), body, "sha256").hexdigest()
    if not hmac.compare_digest(expected, signature):
        logger.warning("Signature mismatch", extra={"reason": "bad_signature"})
        return False
    return True
