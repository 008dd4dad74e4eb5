from typing import List, Protocol, runtime_checkable

from schema import CollectionInfo, SampleResult


@runtime_checkable
class DocumentSampler(Protocol):
    """Protocol for sampling documents and listing collections of a document store."""

    async def list_collections(self, database: str) -> List[CollectionInfo]:
        """List the collections of a database."""
        ...

    async def sample_documents(self, database: str, collection: str, limit: int) -> SampleResult:
        """Fetch at most `limit` documents from a collection."""
        ...
