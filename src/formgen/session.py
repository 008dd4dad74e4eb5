"""Request-scoped orchestration of sample -> detect -> generate -> apply."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from common.config import FormGenSettings
from common.errors import (
    ErrorCode,
    FormGenError,
    GenerationError,
    InvalidTransitionError,
    SamplingError,
    error_code_group,
    sanitize_exception,
)
from common.interfaces import DocumentSampler, FormGenerator
from formgen import wizard
from formgen.field_ordering import sort_fields_by_priority
from formgen.lookup import apply_confirmed_relationships
from formgen.prompt import build_schema_prompt
from inference import MergePolicy, detect_relationships, infer_schema_from_documents
from schema import GeneratedForm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionTarget:
    """Database and collection chosen in the wizard."""

    database: str
    collection: str


class GenerationSession:
    """One schema-mode generation session.

    Collaborators and settings are passed in explicitly; every piece of state
    lives in `self.state` and is replaced through the wizard reducer.
    """

    def __init__(
        self,
        sampler: DocumentSampler,
        generator: FormGenerator,
        target: ConnectionTarget,
        settings: Optional[FormGenSettings] = None,
    ) -> None:
        self._sampler = sampler
        self._generator = generator
        self._target = target
        self._settings = settings or FormGenSettings()
        self.state = wizard.WizardState()

    @property
    def target(self) -> ConnectionTarget:
        return self._target

    def _dispatch(self, event: wizard.WizardEvent) -> wizard.WizardState:
        self.state = wizard.reduce(self.state, event)
        return self.state

    async def _sample_target(self, collection: str) -> List[Mapping[str, Any]]:
        result = await self._sampler.sample_documents(
            self._target.database, collection, self._settings.target_sample_limit
        )
        return result.documents

    async def sample_collection(self) -> wizard.WizardState:
        """Sample the chosen collection, infer its schema and detect relationships.

        Any earlier sample is discarded first. A failed or empty primary
        sample records a sanitized error on the state and raises SamplingError.
        """
        if self.state.phase is not wizard.WizardPhase.IDLE or self.state.error:
            self._dispatch(wizard.Resampled())

        database, collection = self._target.database, self._target.collection
        try:
            collections = await self._sampler.list_collections(database)
            sample = await self._sampler.sample_documents(
                database, collection, self._settings.primary_sample_limit
            )
        except Exception as e:
            if isinstance(e, FormGenError):
                message = sanitize_exception(e, fallback="Failed to sample collection")
            else:
                message = "Failed to sample collection"
            logger.warning(
                "Failed to sample collection database=%s collection=%s group=%s: %s",
                database,
                collection,
                error_code_group(getattr(e, "code", ErrorCode.INTERNAL_ERROR)),
                message,
            )
            self._dispatch(wizard.SampleFailed(message))
            if isinstance(e, SamplingError):
                raise
            raise SamplingError(message) from e

        if not sample.documents:
            message = "No documents found in collection"
            self._dispatch(wizard.SampleFailed(message))
            raise SamplingError(message, code=ErrorCode.NO_DOCUMENTS)

        policy = MergePolicy(self._settings.merge_policy)
        schema = infer_schema_from_documents(sample.documents, policy)
        self._dispatch(
            wizard.SchemaSampled(
                schema=schema,
                document_count=sample.document_count,
                sampled_documents=len(sample.documents),
            )
        )

        self._dispatch(wizard.DetectionStarted())
        try:
            relationships = await detect_relationships(
                schema,
                [c.name for c in collections],
                self._sample_target,
                preview_limit=self._settings.preview_values,
                preview_max_chars=self._settings.preview_max_chars,
                policy=policy,
            )
        except Exception as e:
            # The primary schema is still usable for generation without lookups.
            logger.warning(
                "Relationship detection failed database=%s collection=%s: %s",
                database,
                collection,
                e,
            )
            relationships = []
        return self._dispatch(wizard.RelationshipsDetected(tuple(relationships)))

    def toggle_relationship(self, field_name: str) -> wizard.WizardState:
        """Flip whether a detected relationship is folded into generation."""
        return self._dispatch(wizard.RelationshipToggled(field_name))

    def set_display_field(self, field_name: str, display_field: str) -> wizard.WizardState:
        """Choose a different display field, constrained to the detected options."""
        return self._dispatch(wizard.DisplayFieldChanged(field_name, display_field))

    def build_prompt(self) -> str:
        state = self.state
        return build_schema_prompt(
            collection=self._target.collection,
            database=self._target.database,
            document_count=state.document_count,
            schema=state.schema or {},
            relationships=state.relationships,
            sampled_documents=state.sampled_documents,
        )

    def _generation_context(self) -> Dict[str, Any]:
        state = self.state
        return {
            "schema": {
                name: info.model_dump(mode="json")
                for name, info in (state.schema or {}).items()
            },
            "relationships": [
                rel.model_dump(mode="json", by_alias=True)
                for rel in state.confirmed_relationships
            ],
        }

    async def generate(self) -> GeneratedForm:
        """Ask the generation service for a form describing the sampled collection."""
        prompt = self.build_prompt()
        self._dispatch(wizard.GenerationStarted())
        try:
            form = await self._generator.generate(prompt, self._generation_context())
        except Exception as e:
            message = sanitize_exception(e, error_code=ErrorCode.GENERATION_FAILED)
            self._dispatch(wizard.GenerationFailed(message))
            if isinstance(e, GenerationError):
                raise
            raise GenerationError(message) from e

        self._dispatch(wizard.GenerationSucceeded(form))
        return form

    def apply(self) -> GeneratedForm:
        """Return the generated form bound to the sampled collection with lookups applied."""
        form = self.state.generated_form
        if self.state.phase is not wizard.WizardPhase.GENERATED or form is None:
            raise InvalidTransitionError("Nothing has been generated to apply")

        fields = apply_confirmed_relationships(form.field_configs, self.state.relationships)
        return form.model_copy(
            update={
                "collection": self._target.collection,
                "database": self._target.database,
                "field_configs": sort_fields_by_priority(fields),
            }
        )

    def resample(self) -> wizard.WizardState:
        """Discard the sample and relationships; the caller samples again."""
        return self._dispatch(wizard.Resampled())

    def close(self) -> wizard.WizardState:
        return self._dispatch(wizard.Closed())
