"""Unit tests for the generation session orchestrator."""

from unittest.mock import AsyncMock

import pytest

from common.config import FormGenSettings
from common.errors import ErrorCode, GenerationError, InvalidTransitionError, SamplingError
from formgen.session import ConnectionTarget, GenerationSession
from formgen.wizard import WizardPhase

TARGET = ConnectionTarget(database="library", collection="loans")


def _session(sampler, generator, settings=None):
    return GenerationSession(sampler, generator, TARGET, settings=settings)


@pytest.mark.asyncio
async def test_sample_collection_detects_relationships(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    sampler = fake_sampler_factory(library_collections)
    session = _session(sampler, fake_generator_factory())

    state = await session.sample_collection()

    assert state.phase is WizardPhase.DETECTED
    assert list(state.schema) == ["_id", "bookId", "memberId", "due"]
    assert state.schema["bookId"].type == "objectId"
    assert state.schema["due"].occurrence_count == 1
    assert state.document_count == 2
    assert state.sampled_documents == 2

    by_field = {r.field_name: r for r in state.relationships}
    assert set(by_field) == {"bookId", "memberId"}
    assert by_field["bookId"].target_collection == "books"
    assert by_field["bookId"].display_field == "title"
    assert by_field["bookId"].sample_values == ["Dune", "Emma"]
    assert by_field["memberId"].target_collection == "members"
    assert by_field["memberId"].display_field == "name"

    assert sampler.sample_calls == [
        ("library", "loans", 10),
        ("library", "books", 5),
        ("library", "members", 5),
    ]


@pytest.mark.asyncio
async def test_sample_limits_come_from_settings(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    sampler = fake_sampler_factory(library_collections)
    settings = FormGenSettings(primary_sample_limit=1, target_sample_limit=2)
    session = _session(sampler, fake_generator_factory(), settings=settings)

    state = await session.sample_collection()

    assert state.sampled_documents == 1
    assert sampler.sample_calls[0] == ("library", "loans", 1)
    assert {call[2] for call in sampler.sample_calls[1:]} == {2}


@pytest.mark.asyncio
async def test_empty_collection_blocks_generation(fake_sampler_factory, fake_generator_factory):
    session = _session(fake_sampler_factory({"loans": []}), fake_generator_factory())

    with pytest.raises(SamplingError) as exc_info:
        await session.sample_collection()

    assert exc_info.value.code is ErrorCode.NO_DOCUMENTS
    assert session.state.phase is WizardPhase.IDLE
    assert session.state.error == "No documents found in collection"
    assert not session.state.can_generate
    with pytest.raises(InvalidTransitionError):
        await session.generate()


@pytest.mark.asyncio
async def test_primary_sample_failure_is_surfaced(fake_sampler_factory, fake_generator_factory):
    sampler = fake_sampler_factory({"loans": RuntimeError("mongodb://admin:s3cret@db boom")})
    session = _session(sampler, fake_generator_factory())

    with pytest.raises(SamplingError):
        await session.sample_collection()

    assert session.state.error == "Failed to sample collection"
    assert "s3cret" not in session.state.error


@pytest.mark.asyncio
async def test_target_failure_degrades_gracefully(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    library_collections["books"] = ConnectionError("unreachable")
    session = _session(fake_sampler_factory(library_collections), fake_generator_factory())

    state = await session.sample_collection()

    assert state.phase is WizardPhase.DETECTED
    assert [r.field_name for r in state.relationships] == ["memberId"]


@pytest.mark.asyncio
async def test_merge_policy_applies_to_target_collections(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    library_collections["members"] = [
        {"_id": "m-1", "name": None, "code": "x"},
        {"_id": "m-2", "name": "Jane", "code": "y"},
    ]
    settings = FormGenSettings(merge_policy="most_specific_non_null")
    session = _session(
        fake_sampler_factory(library_collections), fake_generator_factory(), settings=settings
    )

    state = await session.sample_collection()

    member = next(r for r in state.relationships if r.field_name == "memberId")
    assert member.display_field == "name"
    assert member.display_field_options == ["name", "code"]


@pytest.mark.asyncio
async def test_detection_error_leaves_session_ready_to_generate(
    library_collections, fake_sampler_factory, fake_generator_factory, monkeypatch
):
    monkeypatch.setattr(
        "formgen.session.detect_relationships", AsyncMock(side_effect=TypeError("bad sample"))
    )
    session = _session(fake_sampler_factory(library_collections), fake_generator_factory())

    state = await session.sample_collection()

    assert state.phase is WizardPhase.DETECTED
    assert state.relationships == ()
    assert state.can_generate


@pytest.mark.asyncio
async def test_generate_and_apply_force_lookup_fields(
    library_collections, fake_sampler_factory, fake_generator_factory, generated_form
):
    generator = fake_generator_factory(form=generated_form)
    session = _session(fake_sampler_factory(library_collections), generator)
    await session.sample_collection()

    await session.generate()
    applied = session.apply()

    prompt, context = generator.calls[0]
    assert 'Field "bookId" references the "books" collection.' in prompt
    assert [r["field_name"] for r in context["relationships"]] == ["bookId", "memberId"]
    assert context["schema"]["bookId"]["type"] == "objectId"

    assert applied.collection == "loans"
    assert applied.database == "library"
    fields = {f.path: f for f in applied.field_configs}
    assert fields["bookId"].type == "lookup"
    assert fields["bookId"].lookup.collection == "books"
    assert fields["bookId"].lookup.display_field == "title"
    assert fields["bookId"].lookup.value_field == "_id"
    assert fields["bookId"].lookup.searchable is True
    assert fields["bookId"].lookup.preload_options is True
    assert fields["loan.memberId"].type == "lookup"
    assert fields["loan.memberId"].lookup.collection == "members"
    assert fields["due"].type == "date"
    assert [f.path for f in applied.field_configs] == ["due", "bookId", "loan.memberId"]


@pytest.mark.asyncio
async def test_unconfirmed_relationship_is_left_alone(
    library_collections, fake_sampler_factory, fake_generator_factory, generated_form
):
    generator = fake_generator_factory(form=generated_form)
    session = _session(fake_sampler_factory(library_collections), generator)
    await session.sample_collection()
    session.toggle_relationship("bookId")
    session.set_display_field("memberId", "name")

    await session.generate()
    applied = session.apply()

    prompt, context = generator.calls[0]
    assert '"bookId"' not in prompt
    assert [r["field_name"] for r in context["relationships"]] == ["memberId"]
    fields = {f.path: f for f in applied.field_configs}
    assert fields["bookId"].type == "short_text"
    assert fields["bookId"].lookup is None


@pytest.mark.asyncio
async def test_generation_failure_keeps_sample(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    generator = fake_generator_factory(error=ValueError("model exploded"))
    session = _session(fake_sampler_factory(library_collections), generator)
    await session.sample_collection()

    with pytest.raises(GenerationError):
        await session.generate()

    assert session.state.phase is WizardPhase.DETECTED
    assert session.state.error == "Form generation failed."
    assert session.state.schema is not None


@pytest.mark.asyncio
async def test_apply_requires_generated_form(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    session = _session(fake_sampler_factory(library_collections), fake_generator_factory())
    await session.sample_collection()

    with pytest.raises(InvalidTransitionError):
        session.apply()


@pytest.mark.asyncio
async def test_resample_discards_state(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    sampler = fake_sampler_factory(library_collections)
    session = _session(sampler, fake_generator_factory())
    await session.sample_collection()

    state = session.resample()
    assert state.phase is WizardPhase.IDLE
    assert state.schema is None
    assert state.relationships == ()

    state = await session.sample_collection()
    assert state.phase is WizardPhase.DETECTED
    assert len(sampler.sample_calls) == 6


@pytest.mark.asyncio
async def test_sampling_twice_starts_over(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    session = _session(fake_sampler_factory(library_collections), fake_generator_factory())
    await session.sample_collection()
    session.toggle_relationship("bookId")

    state = await session.sample_collection()

    assert all(r.confirmed for r in state.relationships)


@pytest.mark.asyncio
async def test_close_resets_session(
    library_collections, fake_sampler_factory, fake_generator_factory
):
    session = _session(fake_sampler_factory(library_collections), fake_generator_factory())
    await session.sample_collection()

    state = session.close()

    assert state.phase is WizardPhase.IDLE
    assert state.error is None
