from __future__ import annotations

import hashlib
import re
from typing import Any


_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b")
_PHONE_RE = re.compile(r"(?<!\d)(?:\+?\d{1,3}[-.\s]?)?(?:\d{2,4}[-.\s]?\d{3,4}[-.\s]?\d{4})(?!\d)")
_KR_RRN_RE = re.compile(r"\b\d{6}-?[1-4]\d{6}\b")

_BEARER_RE = re.compile(r"(?i)\bBearer\s+[A-Za-z0-9\-._~+/]+=*")
_JWT_RE = re.compile(r"\b[A-Za-z0-9\-_]{20,}\.[A-Za-z0-9\-_]{20,}\.[A-Za-z0-9\-_]{20,}\b")
# Firebase web/server keys share the Google API key shape.
_GOOGLE_API_KEY_RE = re.compile(r"\bAIza[0-9A-Za-z\-_]{35}\b")
_FCM_SERVER_KEY_RE = re.compile(r"\bAAAA[A-Za-z0-9_\-]{7}:[A-Za-z0-9_\-]{100,}\b")

MAX_LOG_CHARS = 1200


def mask_pii_text(text: str) -> str:
    if not text:
        return text
    out = _EMAIL_RE.sub("[REDACTED_EMAIL]", text)
    out = _PHONE_RE.sub("[REDACTED_PHONE]", out)
    return _KR_RRN_RE.sub("[REDACTED_RRN]", out)


def redact_secrets_text(text: str) -> str:
    if not text:
        return text
    out = _BEARER_RE.sub("Bearer [REDACTED_TOKEN]", text)
    out = _JWT_RE.sub("[REDACTED_JWT]", out)
    out = _GOOGLE_API_KEY_RE.sub("[REDACTED_GOOGLE_API_KEY]", out)
    return _FCM_SERVER_KEY_RE.sub("[REDACTED_FCM_KEY]", out)


def sanitize_for_log(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return redact_secrets_text(mask_pii_text(value))[:MAX_LOG_CHARS]
    if isinstance(value, list):
        return [sanitize_for_log(v) for v in value]
    if isinstance(value, dict):
        return {str(k)[:128]: sanitize_for_log(v) for k, v in value.items()}
    if isinstance(value, (int, float, bool)):
        return value
    return str(value)[:MAX_LOG_CHARS]


def text_digest(text: str) -> str:
    """Stable short fingerprint of user-entered schedule text, safe to log."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]
