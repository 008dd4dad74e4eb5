"""Choose which target-collection field a lookup dropdown should display."""

from typing import Any, Iterable, List, Mapping, Sequence

from schema import FieldSchema
from schema.field_schema import TYPE_ARRAY, TYPE_OBJECT, TYPE_STRING

# Order in which eligible fields are offered to the user.
OPTION_PRIORITY = ("name", "title", "label", "displayName", "display_name", "email", "username")

# Order in which the default display field is picked from the offered options.
SELECTION_PRIORITY = ("title", "name", "label", "displayName", "display_name", "email", "username")

DEFAULT_DISPLAY_FIELD = "name"

_ID_FIELD = "_id"


def find_display_field_options(schema: Mapping[str, FieldSchema]) -> List[str]:
    """List fields eligible as display field.

    Priority fields typed as string come first, then the remaining string
    fields in schema order. Without any string field, every field that is not
    an object, an array or `_id` is offered instead.
    """
    options: List[str] = []
    for field in OPTION_PRIORITY:
        info = schema.get(field)
        if info is not None and info.type == TYPE_STRING:
            options.append(field)

    for field_name, info in schema.items():
        if info.type == TYPE_STRING and field_name not in options and field_name != _ID_FIELD:
            options.append(field_name)

    if not options:
        options = [
            field_name
            for field_name, info in schema.items()
            if info.type not in (TYPE_OBJECT, TYPE_ARRAY) and field_name != _ID_FIELD
        ]
    return options


def select_best_display_field(options: Sequence[str]) -> str:
    """Pick the default display field from the eligible options."""
    for field in SELECTION_PRIORITY:
        if field in options:
            return field
    return options[0] if options else DEFAULT_DISPLAY_FIELD


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def preview_values(
    documents: Iterable[Mapping[str, Any]],
    display_field: str,
    limit: int = 3,
    max_chars: int = 50,
) -> List[str]:
    """Display-field values of the first `limit` documents, truncated for preview."""
    values: List[str] = []
    for index, doc in enumerate(documents):
        if index >= limit:
            break
        value = doc.get(display_field)
        if value is None:
            continue
        values.append(_stringify(value)[:max_chars])
    return values
