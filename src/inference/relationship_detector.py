"""Detect foreign-key-like fields and resolve them to lookup targets."""

import logging
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence, Union

from opentelemetry import trace

from inference.display_field import (
    find_display_field_options,
    preview_values,
    select_best_display_field,
)
from inference.naming import infer_target_collection, is_relationship_candidate
from inference.schema_sampler import MergePolicy, infer_schema_from_documents
from schema import DetectedRelationship, FieldSchema

logger = logging.getLogger(__name__)

SampleFn = Callable[[str], Awaitable[Sequence[Mapping[str, Any]]]]


async def detect_relationships(
    schema: Mapping[str, FieldSchema],
    available_collections: Sequence[str],
    sample_fn: SampleFn,
    *,
    preview_limit: int = 3,
    preview_max_chars: int = 50,
    policy: Union[MergePolicy, str] = MergePolicy.FIRST_OBSERVED,
) -> List[DetectedRelationship]:
    """Detect relationships from an inferred schema.

    Each candidate field with a resolvable target collection costs one
    `sample_fn` round trip, awaited sequentially in schema order. A failed or
    empty target sample drops that candidate only.

    Args:
        schema: Inferred schema of the sampled collection.
        available_collections: Collection names of the same database.
        sample_fn: Coroutine returning a small sample of a named collection.
        preview_limit: Max preview values per relationship.
        preview_max_chars: Truncation length of each preview value.
        policy: Merge policy used to infer each target collection's schema.

    Returns:
        Detected relationships in schema order, all confirmed by default.
    """
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span("inference.detect_relationships") as span:
        relationships: List[DetectedRelationship] = []
        candidates = 0
        for field_name, field_schema in schema.items():
            if not is_relationship_candidate(field_name, field_schema):
                continue
            candidates += 1

            target_collection = infer_target_collection(field_name, available_collections)
            if target_collection is None:
                logger.debug("relationship_unresolved field=%s", field_name)
                continue

            relationship = await _resolve_relationship(
                field_name,
                field_schema,
                target_collection,
                sample_fn,
                preview_limit=preview_limit,
                preview_max_chars=preview_max_chars,
                policy=policy,
            )
            if relationship is not None:
                relationships.append(relationship)

        span.set_attribute("formgen.relationship.candidates", candidates)
        span.set_attribute("formgen.relationship.detected", len(relationships))
        logger.info(
            "relationships_detected candidates=%d detected=%d",
            candidates,
            len(relationships),
        )
        return relationships


async def _resolve_relationship(
    field_name: str,
    field_schema: FieldSchema,
    target_collection: str,
    sample_fn: SampleFn,
    *,
    preview_limit: int,
    preview_max_chars: int,
    policy: Union[MergePolicy, str],
) -> Optional[DetectedRelationship]:
    try:
        documents = list(await sample_fn(target_collection))
    except Exception as e:
        logger.warning(
            "Failed to sample target collection %s for field %s: %s",
            target_collection,
            field_name,
            e,
        )
        return None

    if not documents:
        logger.debug("relationship_target_empty field=%s target=%s", field_name, target_collection)
        return None

    target_schema = infer_schema_from_documents(documents, policy)
    options = find_display_field_options(target_schema)
    display_field = select_best_display_field(options)

    return DetectedRelationship(
        field_name=field_name,
        field_type=field_schema.type,
        target_collection=target_collection,
        display_field=display_field,
        display_field_options=options,
        confirmed=True,
        sample_values=preview_values(
            documents, display_field, limit=preview_limit, max_chars=preview_max_chars
        ),
    )
