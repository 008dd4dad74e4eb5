"""Pure state machine for the schema-mode generation wizard.

Phases advance idle -> sampled -> detecting -> detected -> generating ->
generated. Re-sampling and closing are the only backward transitions and
always discard the sampled schema, relationships and generated form.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from common.errors import InvalidTransitionError, ValidationError
from schema import DetectedRelationship, FieldSchema, GeneratedForm


class WizardPhase(str, Enum):
    IDLE = "idle"
    SAMPLED = "sampled"
    DETECTING = "detecting"
    DETECTED = "detected"
    GENERATING = "generating"
    GENERATED = "generated"


@dataclass(frozen=True)
class WizardState:
    phase: WizardPhase = WizardPhase.IDLE
    schema: Optional[Dict[str, FieldSchema]] = None
    document_count: int = 0
    sampled_documents: int = 0
    relationships: Tuple[DetectedRelationship, ...] = ()
    detected: bool = False
    generated_form: Optional[GeneratedForm] = None
    error: Optional[str] = None

    @property
    def can_generate(self) -> bool:
        """Generation needs a successful sample and no request in flight."""
        return self.schema is not None and self.phase in _GENERATION_READY_PHASES

    @property
    def confirmed_relationships(self) -> Tuple[DetectedRelationship, ...]:
        return tuple(r for r in self.relationships if r.confirmed)


@dataclass(frozen=True)
class SchemaSampled:
    schema: Dict[str, FieldSchema]
    document_count: int
    sampled_documents: int


@dataclass(frozen=True)
class SampleFailed:
    message: str


@dataclass(frozen=True)
class DetectionStarted:
    pass


@dataclass(frozen=True)
class RelationshipsDetected:
    relationships: Tuple[DetectedRelationship, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RelationshipToggled:
    field_name: str


@dataclass(frozen=True)
class DisplayFieldChanged:
    field_name: str
    display_field: str


@dataclass(frozen=True)
class GenerationStarted:
    pass


@dataclass(frozen=True)
class GenerationSucceeded:
    form: GeneratedForm


@dataclass(frozen=True)
class GenerationFailed:
    message: str


@dataclass(frozen=True)
class Resampled:
    pass


@dataclass(frozen=True)
class Closed:
    pass


WizardEvent = Union[
    SchemaSampled,
    SampleFailed,
    DetectionStarted,
    RelationshipsDetected,
    RelationshipToggled,
    DisplayFieldChanged,
    GenerationStarted,
    GenerationSucceeded,
    GenerationFailed,
    Resampled,
    Closed,
]

_GENERATION_READY_PHASES = frozenset(
    {WizardPhase.SAMPLED, WizardPhase.DETECTED, WizardPhase.GENERATED}
)
_EDITABLE_PHASES = frozenset({WizardPhase.DETECTED, WizardPhase.GENERATED})


def _require_phase(state: WizardState, event: WizardEvent, *allowed: WizardPhase) -> None:
    if state.phase not in allowed:
        raise InvalidTransitionError(
            f"{type(event).__name__} is not allowed in phase '{state.phase.value}'"
        )


def _update_relationship(
    state: WizardState, field_name: str, **changes
) -> Tuple[DetectedRelationship, ...]:
    updated = []
    found = False
    for rel in state.relationships:
        if rel.field_name == field_name:
            found = True
            if "display_field" in changes:
                options = rel.display_field_options
                if options and changes["display_field"] not in options:
                    raise ValidationError(
                        f"'{changes['display_field']}' is not a display field option "
                        f"for '{field_name}'"
                    )
            rel = rel.model_copy(update=changes)
        updated.append(rel)
    if not found:
        raise ValidationError(f"No detected relationship for field '{field_name}'")
    return tuple(updated)


def reduce(state: WizardState, event: WizardEvent) -> WizardState:
    """Return the state that results from applying `event`; never mutates `state`."""
    if isinstance(event, (Resampled, Closed)):
        return WizardState()

    if isinstance(event, SchemaSampled):
        _require_phase(state, event, WizardPhase.IDLE)
        return WizardState(
            phase=WizardPhase.SAMPLED,
            schema=dict(event.schema),
            document_count=event.document_count,
            sampled_documents=event.sampled_documents,
        )

    if isinstance(event, SampleFailed):
        _require_phase(state, event, WizardPhase.IDLE)
        return WizardState(error=event.message)

    if isinstance(event, DetectionStarted):
        _require_phase(state, event, WizardPhase.SAMPLED)
        return replace(state, phase=WizardPhase.DETECTING)

    if isinstance(event, RelationshipsDetected):
        _require_phase(state, event, WizardPhase.DETECTING)
        return replace(
            state,
            phase=WizardPhase.DETECTED,
            relationships=tuple(event.relationships),
            detected=True,
        )

    if isinstance(event, RelationshipToggled):
        _require_phase(state, event, *_EDITABLE_PHASES)
        current = next(
            (r for r in state.relationships if r.field_name == event.field_name), None
        )
        confirmed = not current.confirmed if current is not None else True
        return replace(
            state,
            relationships=_update_relationship(state, event.field_name, confirmed=confirmed),
        )

    if isinstance(event, DisplayFieldChanged):
        _require_phase(state, event, *_EDITABLE_PHASES)
        return replace(
            state,
            relationships=_update_relationship(
                state, event.field_name, display_field=event.display_field
            ),
        )

    if isinstance(event, GenerationStarted):
        if not state.can_generate:
            raise InvalidTransitionError(
                f"GenerationStarted is not allowed in phase '{state.phase.value}'"
            )
        return replace(state, phase=WizardPhase.GENERATING, error=None)

    if isinstance(event, GenerationSucceeded):
        _require_phase(state, event, WizardPhase.GENERATING)
        return replace(state, phase=WizardPhase.GENERATED, generated_form=event.form)

    if isinstance(event, GenerationFailed):
        _require_phase(state, event, WizardPhase.GENERATING)
        phase = WizardPhase.DETECTED if state.detected else WizardPhase.SAMPLED
        return replace(state, phase=phase, error=event.message)

    raise InvalidTransitionError(f"Unknown wizard event: {event!r}")
