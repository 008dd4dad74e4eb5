"""Schema inference and relationship detection over collection samples."""

from inference.display_field import (
    find_display_field_options,
    preview_values,
    select_best_display_field,
)
from inference.naming import (
    infer_target_collection,
    is_likely_reference_field,
    is_relationship_candidate,
)
from inference.relationship_detector import detect_relationships
from inference.schema_sampler import MergePolicy, infer_schema_from_documents
from inference.type_inference import infer_type

__all__ = [
    "MergePolicy",
    "detect_relationships",
    "find_display_field_options",
    "infer_schema_from_documents",
    "infer_target_collection",
    "infer_type",
    "is_likely_reference_field",
    "is_relationship_candidate",
    "preview_values",
    "select_best_display_field",
]
