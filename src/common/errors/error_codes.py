"""Canonical error-code taxonomy for sampling and generation flows."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Bounded canonical error codes surfaced to the generation dialog."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    SAMPLING_FAILED = "SAMPLING_FAILED"
    NO_DOCUMENTS = "NO_DOCUMENTS"
    DB_CONNECTION_ERROR = "DB_CONNECTION_ERROR"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    GENERATION_FAILED = "GENERATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_CODE_GROUPS: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_ERROR: "VALIDATION",
    ErrorCode.SAMPLING_FAILED: "DB",
    ErrorCode.NO_DOCUMENTS: "DB",
    ErrorCode.DB_CONNECTION_ERROR: "DB",
    ErrorCode.INVALID_TRANSITION: "WIZARD",
    ErrorCode.GENERATION_FAILED: "LLM",
    ErrorCode.INTERNAL_ERROR: "INTERNAL",
}


def parse_error_code(
    value: Any,
    *,
    fallback: ErrorCode = ErrorCode.INTERNAL_ERROR,
) -> ErrorCode:
    """Parse string-like values to `ErrorCode` with safe fallback."""
    if isinstance(value, ErrorCode):
        return value
    if value is None:
        return fallback
    try:
        return ErrorCode(str(value).strip())
    except ValueError:
        return fallback


def error_code_group(value: Any) -> str:
    """Return a stable coarse grouping for telemetry dimensions."""
    parsed = parse_error_code(value)
    return _CODE_GROUPS.get(parsed, "INTERNAL")
