"""Normalize raw generation payloads into GeneratedForm models."""

import logging
import re
from typing import Any, Dict, List, Mapping

from formgen.field_ordering import sort_fields_by_priority
from schema import FieldConfig, GeneratedForm

logger = logging.getLogger(__name__)

VALID_FIELD_TYPES = frozenset(
    {
        "short_text",
        "long_text",
        "number",
        "email",
        "phone",
        "url",
        "multiple_choice",
        "checkboxes",
        "dropdown",
        "yes_no",
        "rating",
        "scale",
        "slider",
        "nps",
        "date",
        "time",
        "datetime",
        "file_upload",
        "image_upload",
        "signature",
        "matrix",
        "ranking",
        "address",
        "tags",
        "color_picker",
        "payment",
        "opinion_scale",
        "lookup",
    }
)

# Common model-produced type names mapped onto builder types.
TYPE_ALIASES: Dict[str, str] = {
    "text": "short_text",
    "string": "short_text",
    "textarea": "long_text",
    "paragraph": "long_text",
    "int": "number",
    "integer": "number",
    "float": "number",
    "decimal": "number",
    "boolean": "yes_no",
    "bool": "yes_no",
    "radio": "multiple_choice",
    "select": "dropdown",
    "multi_select": "checkboxes",
    "multiselect": "checkboxes",
    "star_rating": "rating",
    "stars": "rating",
    "likert": "scale",
    "file": "file_upload",
    "upload": "file_upload",
    "image": "image_upload",
    "photo": "image_upload",
}

# Substring hints used when a type is missing or unknown; first match wins.
FIELD_TYPE_HINTS: Dict[str, str] = {
    "email": "email",
    "phone": "phone",
    "name": "short_text",
    "address": "address",
    "date": "date",
    "time": "time",
    "birthday": "date",
    "age": "number",
    "rating": "rating",
    "feedback": "long_text",
    "comment": "long_text",
    "description": "long_text",
    "price": "number",
    "quantity": "number",
    "amount": "number",
    "choice": "multiple_choice",
    "select": "dropdown",
    "agree": "yes_no",
    "consent": "yes_no",
    "file": "file_upload",
    "image": "image_upload",
    "signature": "signature",
    "url": "url",
    "website": "url",
    "satisfaction": "nps",
}

_VALIDATION_KEYS = ("min", "max", "minLength", "maxLength", "pattern")


def suggest_field_type(field_name: str) -> str:
    """Suggest a builder type from a field name or label."""
    normalized = field_name.lower()
    for hint, field_type in FIELD_TYPE_HINTS.items():
        if hint in normalized:
            return field_type
    return "short_text"


def generate_field_path(label: str) -> str:
    """Derive a snake_case path from a label, e.g. "First Name!" -> "first_name"."""
    path = re.sub(r"[^a-z0-9\s]", "", label.lower())
    path = re.sub(r"\s+", "_", path)
    return path.strip("_")


def normalize_field_config(field: Mapping[str, Any]) -> FieldConfig:
    """Map one raw field dict onto a FieldConfig with a valid builder type."""
    field_type = (field.get("type") or "short_text").lower()
    field_type = TYPE_ALIASES.get(field_type, field_type)
    if field_type not in VALID_FIELD_TYPES:
        field_type = suggest_field_type(field.get("label") or field.get("path") or "")

    label = field.get("label") or field.get("name") or "Untitled Field"
    path = field.get("path") or field.get("name") or generate_field_path(label)

    validation = None
    raw_validation = field.get("validation")
    if isinstance(raw_validation, Mapping):
        validation = {k: raw_validation[k] for k in _VALIDATION_KEYS if k in raw_validation}

    return FieldConfig(
        path=path,
        label=label,
        type=field_type,
        required=bool(field.get("required", False)),
        placeholder=field.get("placeholder"),
        default_value=field.get("defaultValue"),
        validation=validation,
        conditional_logic=field.get("conditionalLogic"),
    )


def normalize_generated_form(payload: Mapping[str, Any]) -> GeneratedForm:
    """Normalize a parsed generation payload.

    Accepts either `fieldConfigs` or the alternate `fields` key, fills in
    default form metadata and orders fields by priority.
    """
    raw_fields = payload.get("fieldConfigs")
    if not isinstance(raw_fields, list):
        raw_fields = payload.get("fields")
    if not isinstance(raw_fields, list):
        logger.warning("Generated form payload has no field list")
        raw_fields = []

    fields: List[FieldConfig] = [
        normalize_field_config(f) for f in raw_fields if isinstance(f, Mapping)
    ]

    return GeneratedForm(
        name=payload.get("name") or "Generated Form",
        description=payload.get("description") or "",
        collection=payload.get("collection") or "submissions",
        database=payload.get("database") or "formbuilder",
        field_configs=sort_fields_by_priority(fields),
    )
