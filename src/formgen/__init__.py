"""Schema-mode form generation: prompt composition, lookup wiring and session flow."""

from formgen.field_ordering import (
    group_fields_by_category,
    is_metadata_field,
    is_primary_field,
    sort_fields_by_priority,
)
from formgen.generator import LLMFormGenerator, parse_generated_form
from formgen.lookup import apply_confirmed_relationships
from formgen.normalization import normalize_generated_form
from formgen.prompt import build_schema_prompt
from formgen.session import ConnectionTarget, GenerationSession
from formgen.wizard import WizardPhase, WizardState, reduce

__all__ = [
    "ConnectionTarget",
    "GenerationSession",
    "LLMFormGenerator",
    "WizardPhase",
    "WizardState",
    "apply_confirmed_relationships",
    "build_schema_prompt",
    "group_fields_by_category",
    "is_metadata_field",
    "is_primary_field",
    "normalize_generated_form",
    "parse_generated_form",
    "reduce",
    "sort_fields_by_priority",
]
