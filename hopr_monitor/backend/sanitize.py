"""Sanitisation helpers for log output."""

from __future__ import annotations

import re

_AUTH_RE = re.compile(r"(Basic|Bearer)\s+[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)
_TOKEN_QUERY_RE = re.compile(r"(?i)(apiToken|token|access_token)=([^&\s]+)")


def redact_text(value: str | None) -> str:
    """Return ``value`` with authorization tokens and query tokens removed."""

    if not value:
        return ""
    text = str(value)
    redacted = _AUTH_RE.sub(lambda match: f"{match.group(1)} ***", text)
    redacted = _TOKEN_QUERY_RE.sub(lambda match: f"{match.group(1)}=***", redacted)
    return redacted.replace("authorization", "auth").replace("Authorization", "Auth")


def mask_identifier(value: str | None) -> str:
    """Return a masked identifier (address, peer id) suitable for log output."""

    if value is None:
        return ""
    trimmed = str(value).strip()
    if not trimmed:
        return ""
    if len(trimmed) <= 4:
        return "***"
    if len(trimmed) <= 8:
        return f"{trimmed[:2]}...{trimmed[-2:]}"
    prefix = trimmed[:6]
    suffix = trimmed[-4:]
    return f"{prefix}...{suffix}"
