"""Fakes for the document store and generation service."""

from typing import Any, Dict, List, Optional

import pytest

from schema import CollectionInfo, FieldConfig, GeneratedForm, SampleResult


class FakeDocumentSampler:
    """In-memory DocumentSampler recording every sample request."""

    def __init__(self, collections: Dict[str, Any], total_counts: Optional[Dict[str, int]] = None):
        self.collections = collections
        self.total_counts = total_counts or {}
        self.sample_calls: List[tuple] = []

    async def list_collections(self, database: str) -> List[CollectionInfo]:
        return [CollectionInfo(name=name) for name in self.collections]

    async def sample_documents(self, database: str, collection: str, limit: int) -> SampleResult:
        self.sample_calls.append((database, collection, limit))
        documents = self.collections[collection]
        if isinstance(documents, Exception):
            raise documents
        return SampleResult(
            documents=documents[:limit], total_count=self.total_counts.get(collection)
        )


class FakeFormGenerator:
    """FormGenerator returning a fixed form, or raising a fixed error."""

    def __init__(self, form: Optional[GeneratedForm] = None, error: Optional[Exception] = None):
        self.form = form
        self.error = error
        self.calls: List[tuple] = []

    async def generate(self, prompt: str, context: Optional[Dict[str, Any]] = None):
        self.calls.append((prompt, context))
        if self.error is not None:
            raise self.error
        return self.form


@pytest.fixture
def library_collections():
    return {
        "loans": [
            {"_id": {"$oid": "a1"}, "bookId": {"$oid": "b1"}, "memberId": "m-1", "due": None},
            {"_id": {"$oid": "a2"}, "bookId": {"$oid": "b2"}, "memberId": "m-2"},
        ],
        "books": [
            {"_id": {"$oid": "b1"}, "title": "Dune", "isbn": "9780441013593"},
            {"_id": {"$oid": "b2"}, "title": "Emma", "isbn": "9780141439587"},
        ],
        "members": [{"_id": "m-1", "name": "Jane", "email": "jane@example.com"}],
    }


@pytest.fixture
def generated_form():
    return GeneratedForm(
        name="Loan Form",
        field_configs=[
            FieldConfig(path="due", label="Due", type="date"),
            FieldConfig(path="bookId", label="Book", type="short_text"),
            FieldConfig(path="loan.memberId", label="Member", type="dropdown"),
        ],
    )


@pytest.fixture
def fake_sampler_factory():
    return FakeDocumentSampler


@pytest.fixture
def fake_generator_factory():
    return FakeFormGenerator
