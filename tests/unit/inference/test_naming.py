"""Unit tests for reference-field naming heuristics."""

import pytest

from inference.naming import (
    collection_name_variants,
    infer_target_collection,
    is_likely_reference_field,
    is_relationship_candidate,
    reference_base_name,
)
from schema import FieldSchema


def test_book_id_resolves_to_plural_collection():
    assert infer_target_collection("bookId", ["books", "authors"]) == "books"


@pytest.mark.parametrize(
    "field_name,collections,expected",
    [
        ("author_id", ["authors"], "authors"),
        ("status_id", ["status", "statuses"], "status"),
        ("usersId", ["user"], "user"),
        ("boxRef", ["boxes"], "boxes"),
        ("category_ref", ["categories"], "categories"),
        ("bookId", ["Books"], "Books"),
        ("OWNER_ID", ["owners"], "owners"),
        ("personId", ["people"], None),
        ("bookId", ["authors"], None),
    ],
)
def test_infer_target_collection(field_name, collections, expected):
    assert infer_target_collection(field_name, collections) == expected


def test_exact_match_beats_plural():
    assert infer_target_collection("newsId", ["newss", "news"]) == "news"


def test_base_name_strips_one_suffix():
    assert reference_base_name("authorId") == "author"
    assert reference_base_name("author_ref") == "author"
    assert reference_base_name("Category") == "category"


def test_variants_are_ordered_and_unique():
    assert collection_name_variants("category") == [
        "category",
        "categorys",
        "categoryes",
        "categories",
    ]
    assert collection_name_variants("status") == ["status", "statuss", "statu", "statuses"]


@pytest.mark.parametrize(
    "field_name,expected",
    [
        ("bookId", True),
        ("book_id", True),
        ("authorRef", True),
        ("author_ref", True),
        ("ID", True),
        ("paid", True),
        ("category", False),
        ("title", False),
    ],
)
def test_is_likely_reference_field(field_name, expected):
    assert is_likely_reference_field(field_name) is expected


def test_document_id_is_never_a_candidate():
    assert not is_relationship_candidate("_id", FieldSchema(type="objectId"))


def test_object_id_typed_field_is_candidate_without_suffix():
    assert is_relationship_candidate("owner", FieldSchema(type="objectId"))


def test_plain_string_field_without_suffix_is_not_candidate():
    assert not is_relationship_candidate("category", FieldSchema(type="string"))
