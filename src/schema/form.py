from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LookupConfig(BaseModel):
    """Cross-collection reference configuration for a lookup field."""

    model_config = _CAMEL_CONFIG

    collection: str
    display_field: str
    value_field: str = "_id"
    filter_field: Optional[str] = None
    filter_source_field: Optional[str] = None
    searchable: bool = True
    multiple: bool = False
    preload_options: bool = True


class FieldConfig(BaseModel):
    """One form field as configured in the builder."""

    model_config = _CAMEL_CONFIG

    path: str
    label: str
    type: str = "short_text"
    included: bool = True
    required: bool = False
    placeholder: Optional[str] = None
    default_value: Any = None
    source: str = "custom"
    include_in_document: bool = True
    validation: Optional[Dict[str, Any]] = None
    conditional_logic: Optional[Dict[str, Any]] = None
    lookup: Optional[LookupConfig] = None


class GeneratedForm(BaseModel):
    """Normalized form configuration returned by the generation service."""

    model_config = _CAMEL_CONFIG

    name: str = "Generated Form"
    description: str = ""
    collection: str = "submissions"
    database: str = "formbuilder"
    field_configs: List[FieldConfig] = Field(default_factory=list)
