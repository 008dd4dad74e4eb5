"""Order generated form fields so contact details lead and system fields trail."""

import re
from enum import IntEnum
from typing import Dict, List, Sequence, Tuple

from schema import FieldConfig


class FieldPriority(IntEnum):
    """Priority tiers, lower sorts first."""

    IDENTITY = 0
    CONTACT_PRIMARY = 1
    CONTACT_SECONDARY = 2
    DEMOGRAPHICS = 3
    ORGANIZATION = 4
    MAIN_CONTENT = 5
    CATEGORIZATION = 6
    DETAILS = 7
    PREFERENCES = 8
    DATES = 9
    NUMBERS = 10
    LONG_TEXT = 11
    METADATA = 12
    UNKNOWN = 50


def _patterns(*sources: str) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(source, re.IGNORECASE) for source in sources)


_FIELD_PATTERNS: Tuple[Tuple[Tuple[re.Pattern, ...], FieldPriority], ...] = (
    (
        _patterns(
            r"^(full[_\s]?)?name$",
            r"^(first[_\s]?)?name$",
            r"^(last[_\s]?)?name$",
            r"^(given[_\s]?)?name$",
            r"^surname$",
            r"^family[_\s]?name$",
            r"^user[_\s]?name$",
            r"^display[_\s]?name$",
            r"^contact[_\s]?name$",
            r"^customer[_\s]?name$",
            r"^client[_\s]?name$",
        ),
        FieldPriority.IDENTITY,
    ),
    (
        _patterns(
            r"^e?mail$",
            r"^email[_\s]?address$",
            r"^contact[_\s]?email$",
            r"^work[_\s]?email$",
            r"^personal[_\s]?email$",
            r"^phone[_\s]?(number)?$",
            r"^mobile$",
            r"^cell$",
            r"^telephone$",
            r"^contact[_\s]?phone$",
            r"^work[_\s]?phone$",
            r"^home[_\s]?phone$",
        ),
        FieldPriority.CONTACT_PRIMARY,
    ),
    (
        _patterns(
            r"^address$",
            r"^street$",
            r"^city$",
            r"^state$",
            r"^province$",
            r"^country$",
            r"^zip$",
            r"^postal[_\s]?code$",
            r"^region$",
            r"^location$",
            r"^mailing[_\s]?address$",
            r"^shipping[_\s]?address$",
            r"^billing[_\s]?address$",
        ),
        FieldPriority.CONTACT_SECONDARY,
    ),
    (
        _patterns(
            r"^age$",
            r"^gender$",
            r"^sex$",
            r"^date[_\s]?of[_\s]?birth$",
            r"^dob$",
            r"^birth[_\s]?date$",
            r"^nationality$",
            r"^ethnicity$",
            r"^language$",
            r"^preferred[_\s]?language$",
        ),
        FieldPriority.DEMOGRAPHICS,
    ),
    (
        _patterns(
            r"^company$",
            r"^organization$",
            r"^employer$",
            r"^business$",
            r"^job[_\s]?title$",
            r"^title$",
            r"^position$",
            r"^role$",
            r"^department$",
            r"^team$",
            r"^division$",
            r"^industry$",
            r"^occupation$",
            r"^profession$",
        ),
        FieldPriority.ORGANIZATION,
    ),
    (
        _patterns(
            r"^subject$",
            r"^topic$",
            r"^headline$",
            r"^summary$",
            r"^overview$",
            r"^purpose$",
            r"^reason$",
            r"^inquiry$",
            r"^request$",
            r"^question$",
        ),
        FieldPriority.MAIN_CONTENT,
    ),
    (
        _patterns(
            r"^type$",
            r"^category$",
            r"^status$",
            r"^priority$",
            r"^severity$",
            r"^urgency$",
            r"^level$",
            r"^tier$",
            r"^classification$",
            r"^tag(s)?$",
            r"^label(s)?$",
        ),
        FieldPriority.CATEGORIZATION,
    ),
    (
        _patterns(
            r"^prefer",
            r"^subscri",
            r"^newsletter$",
            r"^opt[_\s]?(in|out)$",
            r"^consent$",
            r"^notification",
            r"^communication",
            r"^marketing$",
            r"^terms$",
            r"^agree",
        ),
        FieldPriority.PREFERENCES,
    ),
    (
        _patterns(
            r"date$",
            r"^deadline$",
            r"^due$",
            r"^scheduled$",
            r"^appointment$",
            r"^start[_\s]?(date|time)?$",
            r"^end[_\s]?(date|time)?$",
            r"^expir",
            r"^valid",
        ),
        FieldPriority.DATES,
    ),
    (
        _patterns(
            r"^amount$",
            r"^quantity$",
            r"^count$",
            r"^total$",
            r"^price$",
            r"^cost$",
            r"^budget$",
            r"^salary$",
            r"^rate$",
            r"^score$",
            r"^rating$",
            r"^number[_\s]?of",
            r"^size$",
            r"^weight$",
            r"^height$",
            r"^width$",
            r"^length$",
        ),
        FieldPriority.NUMBERS,
    ),
    (
        _patterns(
            r"^comment(s)?$",
            r"^note(s)?$",
            r"^description$",
            r"^detail(s)?$",
            r"^message$",
            r"^feedback$",
            r"^remarks?$",
            r"^additional[_\s]?info",
            r"^other$",
            r"^body$",
            r"^content$",
            r"^text$",
            r"^bio$",
            r"^about$",
        ),
        FieldPriority.LONG_TEXT,
    ),
    (
        _patterns(
            r"^_id$",
            r"^id$",
            r"^uuid$",
            r"^guid$",
            r"^created",
            r"^updated",
            r"^modified",
            r"^timestamp$",
            r"^version$",
            r"^__v$",
            r"^deleted",
            r"^archived$",
            r"^active$",
            r"^enabled$",
            r"^is[_\s]?active$",
            r"^is[_\s]?deleted$",
            r"^source$",
            r"^origin$",
            r"^ref(erence)?[_\s]?(id|number)?$",
            r"^internal",
            r"^system",
            r"^meta",
        ),
        FieldPriority.METADATA,
    ),
)

_TYPE_PRIORITIES: Dict[str, FieldPriority] = {
    "email": FieldPriority.CONTACT_PRIMARY,
    "phone": FieldPriority.CONTACT_PRIMARY,
    "address": FieldPriority.CONTACT_SECONDARY,
    "date": FieldPriority.DATES,
    "datetime": FieldPriority.DATES,
    "number": FieldPriority.NUMBERS,
    "slider": FieldPriority.NUMBERS,
    "rating": FieldPriority.NUMBERS,
    "long_text": FieldPriority.LONG_TEXT,
}

_CATEGORY_NAMES: Dict[FieldPriority, str] = {
    FieldPriority.IDENTITY: "Personal Information",
    FieldPriority.CONTACT_PRIMARY: "Contact Information",
    FieldPriority.CONTACT_SECONDARY: "Address",
    FieldPriority.DEMOGRAPHICS: "Demographics",
    FieldPriority.ORGANIZATION: "Organization",
    FieldPriority.MAIN_CONTENT: "Details",
    FieldPriority.CATEGORIZATION: "Classification",
    FieldPriority.DETAILS: "Additional Details",
    FieldPriority.PREFERENCES: "Preferences",
    FieldPriority.DATES: "Dates",
    FieldPriority.NUMBERS: "Quantities",
    FieldPriority.LONG_TEXT: "Additional Information",
    FieldPriority.METADATA: "System Fields",
    FieldPriority.UNKNOWN: "Other",
}


def get_field_priority(field: FieldConfig) -> FieldPriority:
    """Classify a field by its path, label or last path segment, then by type."""
    identifiers = [i for i in (field.path, field.label, field.path.split(".")[-1]) if i]

    for patterns, priority in _FIELD_PATTERNS:
        for pattern in patterns:
            if any(pattern.search(identifier) for identifier in identifiers):
                return priority

    return _TYPE_PRIORITIES.get(field.type, FieldPriority.UNKNOWN)


def _secondary_sort_key(field: FieldConfig, priority: FieldPriority) -> str:
    path = field.path.lower()
    if priority is FieldPriority.IDENTITY:
        if re.match(r"^(full[_\s]?)?name$", path):
            return "0"
        if path.startswith(("first", "given")):
            return "1"
        if path.startswith(("last", "surname", "family")):
            return "2"
        return "3"

    if priority is FieldPriority.CONTACT_PRIMARY:
        if "email" in path:
            return "0"
        if "phone" in path:
            return "1"
        if "mobile" in path or "cell" in path:
            return "2"
        return "3"

    if priority is FieldPriority.CONTACT_SECONDARY:
        if path == "address" or "street" in path:
            return "0"
        if "city" in path:
            return "1"
        if "state" in path or "province" in path:
            return "2"
        if "zip" in path or "postal" in path:
            return "3"
        if "country" in path:
            return "4"
        return "5"

    return field.label.lower()


def sort_fields_by_priority(fields: Sequence[FieldConfig]) -> List[FieldConfig]:
    """Return fields ordered by priority tier, then by a tier-specific secondary key."""

    def sort_key(field: FieldConfig) -> Tuple[int, str]:
        priority = get_field_priority(field)
        return (priority.value, _secondary_sort_key(field, priority))

    return sorted(fields, key=sort_key)


def is_primary_field(field: FieldConfig) -> bool:
    """True for identity and contact fields."""
    return get_field_priority(field) <= FieldPriority.CONTACT_SECONDARY


def is_metadata_field(field: FieldConfig) -> bool:
    """True for internal/system fields."""
    return get_field_priority(field) is FieldPriority.METADATA


def group_fields_by_category(fields: Sequence[FieldConfig]) -> Dict[str, List[FieldConfig]]:
    """Group fields under human-readable section names, preserving input order."""
    groups: Dict[str, List[FieldConfig]] = {}
    for field in fields:
        category = _CATEGORY_NAMES[get_field_priority(field)]
        groups.setdefault(category, []).append(field)
    return groups
