"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+|access_token\"\s*:\s*\"[^\"]+\")",
    re.IGNORECASE,
)
# Pickup/dropoff coordinates pin down a customer's address.
_COORDINATE_PATTERN = re.compile(
    r"(\"?(?:lat|lng|latitude|longitude)\"?\s*[:=]\s*)-?\d+(?:\.\d+)?",
    re.IGNORECASE,
)


def scrub(message: str) -> str:
    message = _SENSITIVE_PATTERN.sub("**REDACTED**", message)
    return _COORDINATE_PATTERN.sub(r"\1**REDACTED**", message)


class SensitiveFilter(logging.Filter):
    """Replace sensitive tokens in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub(record.msg)
        return True


__all__ = ["SensitiveFilter", "scrub"]
