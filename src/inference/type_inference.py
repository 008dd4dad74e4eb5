"""Best-effort type tagging for sampled document values."""

import re
from collections.abc import Mapping
from datetime import date, datetime
from numbers import Number
from typing import Any

from bson import ObjectId

from schema.field_schema import (
    TYPE_ARRAY,
    TYPE_BOOLEAN,
    TYPE_DATE,
    TYPE_EMAIL,
    TYPE_NULL,
    TYPE_NUMBER,
    TYPE_OBJECT,
    TYPE_OBJECT_ID,
    TYPE_PHONE,
    TYPE_STRING,
    TYPE_URL,
)

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE_RE = re.compile(r"\+?[0-9\s\-()]{10,}")
_URL_RE = re.compile(r"https?://")
_ISO_DATE_PREFIX_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _is_object_id(value: Mapping) -> bool:
    return value.get("_bsontype") == "ObjectId" or bool(value.get("$oid"))


def infer_type(value: Any) -> str:
    """Return the type tag for a single sampled value.

    Checks run in a fixed precedence order and the first match wins, so a
    string like "2024-01-01T10:00" is a date but "a@b.co" is an email even though
    both are strings. Never raises.
    """
    if value is None:
        return TYPE_NULL
    if isinstance(value, (list, tuple)):
        return TYPE_ARRAY
    if isinstance(value, (datetime, date)):
        return TYPE_DATE
    if isinstance(value, ObjectId):
        return TYPE_OBJECT_ID
    if isinstance(value, Mapping):
        if _is_object_id(value):
            return TYPE_OBJECT_ID
        if value.get("$date"):
            return TYPE_DATE
        return TYPE_OBJECT
    if isinstance(value, str):
        if _EMAIL_RE.fullmatch(value):
            return TYPE_EMAIL
        if _PHONE_RE.fullmatch(value):
            return TYPE_PHONE
        if _URL_RE.match(value):
            return TYPE_URL
        if _ISO_DATE_PREFIX_RE.match(value):
            return TYPE_DATE
        return TYPE_STRING
    # bool is a Number subclass; check it first.
    if isinstance(value, bool):
        return TYPE_BOOLEAN
    if isinstance(value, Number):
        return TYPE_NUMBER
    return type(value).__name__.lower()
