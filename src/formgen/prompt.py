"""Compose the schema-mode generation prompt."""

import json
from typing import Any, List, Mapping, Optional, Sequence

from formgen.lookup import confirmed_relationships
from schema import DetectedRelationship, FieldSchema

SAMPLE_PREVIEW_CHARS = 50


def _sample_preview(value: Any) -> str:
    return json.dumps(value, default=str)[:SAMPLE_PREVIEW_CHARS]


def required_field_candidates(
    schema: Mapping[str, FieldSchema], sampled_documents: int
) -> List[str]:
    """Fields present in every sampled document, excluding `_id`."""
    if sampled_documents <= 0:
        return []
    return [
        name
        for name, info in schema.items()
        if name != "_id" and info.occurrence_count >= sampled_documents
    ]


def build_relationship_instructions(relationships: Sequence[DetectedRelationship]) -> str:
    """Lookup instructions for confirmed relationships, or an empty string."""
    confirmed = confirmed_relationships(relationships)
    if not confirmed:
        return ""

    lines = ["", "", "IMPORTANT - Reference Fields (create as lookup/dropdown fields):"]
    for rel in confirmed:
        lines.extend(
            [
                f'- Field "{rel.field_name}" references the "{rel.target_collection}" collection.',
                '   Create this as a "lookup" or "dropdown" field type.',
                f'   Configure it to display the "{rel.display_field}" field '
                f"from {rel.target_collection}.",
                f'   The field should store the _id but show "{rel.display_field}" to users.',
                f'   Set lookup.collection to "{rel.target_collection}" and '
                f'lookup.displayField to "{rel.display_field}".',
            ]
        )
    return "\n".join(lines)


def build_schema_prompt(
    collection: str,
    database: str,
    document_count: int,
    schema: Mapping[str, FieldSchema],
    relationships: Sequence[DetectedRelationship] = (),
    sampled_documents: Optional[int] = None,
) -> str:
    """Build the natural-language prompt describing a sampled collection.

    Args:
        collection: Sampled collection name.
        database: Database name.
        document_count: Collection size reported by the sampler.
        schema: Inferred schema of the sample.
        relationships: Detected relationships; only confirmed ones are embedded.
        sampled_documents: Number of documents in the sample, used for
            required-field hints. Omitted hints when None.
    """
    schema_lines = "\n".join(
        f"- {name}: {info.type} (sample: {_sample_preview(info.sample_value)})"
        for name, info in schema.items()
    )
    has_lookups = bool(confirmed_relationships(relationships))

    rules = [
        "1. Appropriate field types based on the data types and field names",
        "2. User-friendly labels (convert snake_case/camelCase to Title Case)",
        "3. Sensible validation rules",
        "4. Skip internal fields like _id, __v, createdAt, updatedAt unless they're user-editable",
        "5. Group related fields logically",
        "6. Mark fields that appear in all documents as required",
    ]
    if has_lookups:
        rules.append(
            "7. For reference fields listed above, use lookup/dropdown type "
            "with the specified configuration"
        )

    prompt = (
        "Generate a user-friendly data entry form for a MongoDB collection with this schema:\n"
        "\n"
        f"Collection: {collection}\n"
        f"Database: {database}\n"
        f"Document count: {document_count}\n"
        "\n"
        "Schema (field name → type and sample):\n"
        f"{schema_lines}"
        f"{build_relationship_instructions(relationships)}\n"
        "\n"
        "Create a form with:\n"
        + "\n".join(rules)
    )

    if sampled_documents is not None:
        required = required_field_candidates(schema, sampled_documents)
        if required:
            prompt += "\n\nFields present in every sampled document: " + ", ".join(required)
    return prompt
