"""Unit tests for relationship detection."""

import logging
from unittest.mock import AsyncMock

import pytest

from inference.relationship_detector import detect_relationships
from inference.schema_sampler import MergePolicy
from schema import FieldSchema


def _sampler(samples):
    """AsyncMock sample_fn serving fixed documents per collection."""

    def _sample(collection):
        value = samples[collection]
        if isinstance(value, Exception):
            raise value
        return value

    return AsyncMock(side_effect=_sample)


@pytest.mark.asyncio
async def test_object_id_reference_end_to_end():
    """An ObjectId author reference resolves to authors with name as display field."""
    sample_fn = _sampler({"authors": [{"_id": 1, "name": "Jane"}, {"_id": 2, "name": "Amir"}]})

    relationships = await detect_relationships(
        {"authorId": FieldSchema(type="objectId")}, ["authors"], sample_fn
    )

    assert len(relationships) == 1
    rel = relationships[0]
    assert rel.field_name == "authorId"
    assert rel.field_type == "objectId"
    assert rel.target_collection == "authors"
    assert rel.display_field == "name"
    assert rel.display_field_options == ["name"]
    assert rel.sample_values == ["Jane", "Amir"]
    assert rel.confirmed is True
    sample_fn.assert_awaited_once_with("authors")


@pytest.mark.asyncio
async def test_string_reference_by_name_suffix():
    sample_fn = _sampler({"books": [{"_id": 1, "title": "Dune", "isbn": "x"}]})

    relationships = await detect_relationships(
        {"bookId": FieldSchema(type="string")}, ["books", "authors"], sample_fn
    )

    assert [r.target_collection for r in relationships] == ["books"]
    assert relationships[0].display_field == "title"


@pytest.mark.asyncio
async def test_field_without_reference_suffix_is_never_detected():
    sample_fn = _sampler({"category": [{"name": "x"}], "categories": [{"name": "x"}]})

    relationships = await detect_relationships(
        {"category": FieldSchema(type="string")}, ["category", "categories"], sample_fn
    )

    assert relationships == []
    sample_fn.assert_not_awaited()


@pytest.mark.asyncio
async def test_document_id_is_excluded():
    sample_fn = _sampler({"ids": [{"name": "x"}]})

    relationships = await detect_relationships(
        {"_id": FieldSchema(type="objectId")}, ["ids", "_"], sample_fn
    )

    assert relationships == []
    sample_fn.assert_not_awaited()


@pytest.mark.asyncio
async def test_unresolved_target_does_not_sample():
    sample_fn = _sampler({})

    relationships = await detect_relationships(
        {"warehouseId": FieldSchema(type="objectId")}, ["books"], sample_fn
    )

    assert relationships == []
    sample_fn.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_target_sample_is_skipped_and_logged(caplog):
    """A failing target sample drops only that candidate."""
    sample_fn = _sampler(
        {
            "authors": ConnectionError("auth failed"),
            "publishers": [{"_id": 1, "name": "Penguin"}],
        }
    )
    schema = {
        "authorId": FieldSchema(type="objectId"),
        "publisherId": FieldSchema(type="objectId"),
    }

    with caplog.at_level(logging.WARNING, logger="inference.relationship_detector"):
        relationships = await detect_relationships(
            schema, ["authors", "publishers"], sample_fn
        )

    assert [r.field_name for r in relationships] == ["publisherId"]
    assert "authors" in caplog.text


@pytest.mark.asyncio
async def test_empty_target_sample_is_skipped():
    sample_fn = _sampler({"authors": []})

    relationships = await detect_relationships(
        {"authorId": FieldSchema(type="objectId")}, ["authors"], sample_fn
    )

    assert relationships == []


@pytest.mark.asyncio
async def test_candidates_are_sampled_sequentially_in_schema_order():
    calls = []

    async def sample_fn(collection):
        calls.append(collection)
        return [{"name": collection}]

    schema = {
        "zoneId": FieldSchema(type="string"),
        "title": FieldSchema(type="string"),
        "authorRef": FieldSchema(type="string"),
        "boxId": FieldSchema(type="string"),
    }

    relationships = await detect_relationships(
        schema, ["boxes", "authors", "zones"], sample_fn
    )

    assert calls == ["zones", "authors", "boxes"]
    assert [r.field_name for r in relationships] == ["zoneId", "authorRef", "boxId"]


@pytest.mark.asyncio
async def test_preview_limits_are_configurable():
    docs = [{"name": f"author-{i}-" + "x" * 20} for i in range(5)]
    sample_fn = _sampler({"authors": docs})

    relationships = await detect_relationships(
        {"authorId": FieldSchema(type="objectId")},
        ["authors"],
        sample_fn,
        preview_limit=2,
        preview_max_chars=8,
    )

    assert relationships[0].sample_values == ["author-0", "author-1"]


@pytest.mark.asyncio
async def test_target_schema_follows_merge_policy():
    """A leading null display value is only recovered under a non-null merge policy."""
    authors = [{"_id": 1, "name": None, "code": "x"}, {"_id": 2, "name": "Jane", "code": "y"}]
    schema = {"authorId": FieldSchema(type="objectId")}

    first_observed = await detect_relationships(schema, ["authors"], _sampler({"authors": authors}))
    non_null = await detect_relationships(
        schema,
        ["authors"],
        _sampler({"authors": authors}),
        policy=MergePolicy.MOST_SPECIFIC_NON_NULL,
    )

    assert first_observed[0].display_field == "code"
    assert non_null[0].display_field == "name"
    assert non_null[0].display_field_options == ["name", "code"]
    assert non_null[0].sample_values == ["Jane"]
