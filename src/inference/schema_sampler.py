"""Infer a per-field schema from a small sample of documents."""

from collections import Counter
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Union

from inference.type_inference import infer_type
from schema import FieldSchema
from schema.field_schema import TYPE_NULL


class MergePolicy(str, Enum):
    """How observations of the same field across documents are reconciled.

    FIRST_OBSERVED keeps the type and sample of the first document containing
    the field; a leading null therefore pins the field to "null".
    MOST_SPECIFIC_NON_NULL lets the first non-null observation replace a
    recorded null.
    MOST_COMMON picks the most frequent type, ties going to the type seen first.
    """

    FIRST_OBSERVED = "first_observed"
    MOST_SPECIFIC_NON_NULL = "most_specific_non_null"
    MOST_COMMON = "most_common"


def infer_schema_from_documents(
    documents: Iterable[Mapping[str, Any]],
    policy: Union[MergePolicy, str] = MergePolicy.FIRST_OBSERVED,
) -> Dict[str, FieldSchema]:
    """Build a field-name to FieldSchema mapping from sampled documents.

    Documents are processed in the order given and keys in document order, so
    the resulting mapping preserves first-appearance order. occurrence_count
    counts the documents that contain each key regardless of policy.
    """
    policy = MergePolicy(policy)
    if policy is MergePolicy.MOST_COMMON:
        return _infer_most_common(documents)

    schema: Dict[str, FieldSchema] = {}
    for doc in documents:
        for key, value in doc.items():
            existing = schema.get(key)
            if existing is None:
                schema[key] = FieldSchema(type=infer_type(value), sample_value=value)
                continue

            existing.occurrence_count += 1
            if (
                policy is MergePolicy.MOST_SPECIFIC_NON_NULL
                and existing.type == TYPE_NULL
                and value is not None
            ):
                existing.type = infer_type(value)
                existing.sample_value = value
    return schema


def _infer_most_common(documents: Iterable[Mapping[str, Any]]) -> Dict[str, FieldSchema]:
    type_counts: Dict[str, Counter] = {}
    first_values: Dict[str, Dict[str, Any]] = {}

    for doc in documents:
        for key, value in doc.items():
            tag = infer_type(value)
            type_counts.setdefault(key, Counter())[tag] += 1
            first_values.setdefault(key, {}).setdefault(tag, value)

    schema: Dict[str, FieldSchema] = {}
    for key, counts in type_counts.items():
        # Counter preserves insertion order, and max() returns the first maximal item.
        winner = max(counts, key=lambda tag: counts[tag])
        schema[key] = FieldSchema(
            type=winner,
            sample_value=first_values[key][winner],
            occurrence_count=sum(counts.values()),
        )
    return schema
