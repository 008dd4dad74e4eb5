"""Sanitization helpers for user-facing error surfaces."""

from __future__ import annotations

import re
from typing import Any

from common.errors.error_codes import ErrorCode, parse_error_code

MAX_PUBLIC_ERROR_LENGTH = 2048

_SAFE_ERROR_TEMPLATES: dict[ErrorCode, str] = {
    ErrorCode.NO_DOCUMENTS: "No documents found in collection",
    ErrorCode.DB_CONNECTION_ERROR: "Database connection failed.",
    ErrorCode.GENERATION_FAILED: "Form generation failed.",
    ErrorCode.INTERNAL_ERROR: "An internal error occurred.",
}

_MONGO_URI_CREDENTIALS_RE = re.compile(r"(mongodb(?:\+srv)?://)[^@/\s]+@", re.IGNORECASE)
_SECRET_PARAM_RE = re.compile(r"(?i)\b(password|pwd|api[_-]?key|token)=([^&\s]+)")
_MULTI_SPACE_RE = re.compile(r"\s+")


def redact_connection_strings(message: str) -> str:
    """Strip credentials from Mongo URIs and secret-like query parameters."""
    sanitized = _MONGO_URI_CREDENTIALS_RE.sub(r"\1<redacted>@", message)
    sanitized = _SECRET_PARAM_RE.sub(r"\1=<redacted>", sanitized)
    return _MULTI_SPACE_RE.sub(" ", sanitized).strip()


def sanitize_error_message(
    message: Any,
    *,
    error_code: Any = None,
    fallback: str = "Request failed.",
) -> str:
    """Return safe user-facing error text without leaking connection secrets."""
    code = parse_error_code(error_code, fallback=ErrorCode.VALIDATION_ERROR)
    template = _SAFE_ERROR_TEMPLATES.get(code)
    if template:
        return template

    raw_text = "" if message is None else str(message)
    bounded_fallback = (fallback or "Request failed.").strip()[:MAX_PUBLIC_ERROR_LENGTH]
    safe_text = redact_connection_strings(raw_text)
    if not safe_text:
        safe_text = bounded_fallback
    return safe_text[:MAX_PUBLIC_ERROR_LENGTH]


def sanitize_exception(
    exc: Exception,
    *,
    error_code: Any = None,
    fallback: str = "Request failed.",
) -> str:
    """Sanitize an exception for the dialog-level error message."""
    if error_code is None:
        error_code = getattr(exc, "code", ErrorCode.INTERNAL_ERROR)
    return sanitize_error_message(
        str(exc),
        error_code=error_code,
        fallback=fallback,
    )
