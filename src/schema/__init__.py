"""Canonical models for collection samples, inferred schemas and generated forms."""

from .collection import CollectionInfo, SampleResult
from .field_schema import FieldSchema
from .form import FieldConfig, GeneratedForm, LookupConfig
from .relationship import DetectedRelationship

__all__ = [
    "CollectionInfo",
    "DetectedRelationship",
    "FieldConfig",
    "FieldSchema",
    "GeneratedForm",
    "LookupConfig",
    "SampleResult",
]
