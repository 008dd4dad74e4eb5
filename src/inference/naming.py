"""Naming heuristics that map reference-like field names to collections.

English pluralization by suffix is lossy: irregular plurals ("person" and
"people") and unrelated naming are expected misses.
"""

import re
from typing import List, Optional, Sequence

from schema import FieldSchema
from schema.field_schema import TYPE_OBJECT_ID

DOCUMENT_ID_FIELD = "_id"

_REFERENCE_SUFFIX_RE = re.compile(r"(_id|Id|_ref|Ref)$", re.IGNORECASE)


def is_likely_reference_field(field_name: str) -> bool:
    """Return True when the name ends in id/_id/ref/_ref, case-insensitively."""
    lower_name = field_name.lower()
    return lower_name.endswith("id") or lower_name.endswith("ref")


def is_relationship_candidate(field_name: str, field_schema: FieldSchema) -> bool:
    """Return True for ObjectId-typed or reference-named fields other than `_id`."""
    if field_name == DOCUMENT_ID_FIELD:
        return False
    return field_schema.type == TYPE_OBJECT_ID or is_likely_reference_field(field_name)


def reference_base_name(field_name: str) -> str:
    """Strip one reference suffix and lower-case, e.g. "authorId" -> "author"."""
    return _REFERENCE_SUFFIX_RE.sub("", field_name, count=1).lower()


def collection_name_variants(base_name: str) -> List[str]:
    """Candidate collection names for a base name, in match-priority order."""
    variants = [base_name, base_name + "s"]
    if base_name.endswith("s"):
        variants.append(base_name[:-1])
    variants.append(base_name + "es")
    if base_name.endswith("y"):
        variants.append(base_name[:-1] + "ies")

    ordered: List[str] = []
    for variant in variants:
        if variant and variant not in ordered:
            ordered.append(variant)
    return ordered


def infer_target_collection(
    field_name: str, available_collections: Sequence[str]
) -> Optional[str]:
    """Resolve a reference field to one of the available collections, or None.

    Matching is case-insensitive; the collection name is returned exactly as
    supplied by the caller.
    """
    by_lower_name = {}
    for name in available_collections:
        by_lower_name.setdefault(name.lower(), name)

    for variant in collection_name_variants(reference_base_name(field_name)):
        match = by_lower_name.get(variant)
        if match is not None:
            return match
    return None
