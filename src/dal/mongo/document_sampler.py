import logging
from typing import Any, List, Optional

from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from common.config import FormGenSettings
from common.errors import ErrorCode, SamplingError
from dal.tracing import trace_sample_operation
from schema import CollectionInfo, SampleResult

logger = logging.getLogger(__name__)


class MongoDocumentSampler:
    """MongoDB implementation of DocumentSampler using the pymongo async client."""

    def __init__(
        self,
        connection_string: Optional[str] = None,
        client: Optional[Any] = None,
        trace_enabled: bool = False,
    ) -> None:
        """Initialize from a connection string, or wrap an existing async client."""
        if client is None and not connection_string:
            raise ValueError("Either connection_string or client is required.")
        self._client = client if client is not None else AsyncMongoClient(connection_string)
        self._trace_enabled = trace_enabled

    @classmethod
    def from_settings(cls, settings: FormGenSettings) -> "MongoDocumentSampler":
        """Build a sampler for the configured URI and tracing flag."""
        return cls(connection_string=settings.mongodb_uri, trace_enabled=settings.trace_sampling)

    async def list_collections(self, database: str) -> List[CollectionInfo]:
        """List user collections and views, skipping `system.*` namespaces."""
        return await trace_sample_operation(
            "dal.mongo.list_collections",
            database,
            None,
            self._list_collections(database),
            enabled=self._trace_enabled,
        )

    async def _list_collections(self, database: str) -> List[CollectionInfo]:
        db = self._client[database]
        try:
            cursor = await db.list_collections()
            specs = [spec async for spec in cursor]
        except ConnectionFailure as e:
            raise SamplingError(str(e), code=ErrorCode.DB_CONNECTION_ERROR) from e
        except PyMongoError as e:
            raise SamplingError(f"Failed to list collections: {e}") from e

        collections = [
            CollectionInfo(name=spec["name"], type=spec.get("type", "collection"))
            for spec in specs
            if not spec["name"].startswith("system.")
        ]
        collections.sort(key=lambda c: c.name)
        return collections

    async def sample_documents(self, database: str, collection: str, limit: int) -> SampleResult:
        """Fetch at most `limit` documents in natural order plus an estimated total count."""
        return await trace_sample_operation(
            "dal.mongo.sample_documents",
            database,
            collection,
            self._sample_documents(database, collection, limit),
            enabled=self._trace_enabled,
        )

    async def _sample_documents(self, database: str, collection: str, limit: int) -> SampleResult:
        coll = self._client[database][collection]
        try:
            documents = await coll.find({}).limit(limit).to_list(length=limit)
            total_count = await coll.estimated_document_count()
        except ConnectionFailure as e:
            raise SamplingError(str(e), code=ErrorCode.DB_CONNECTION_ERROR) from e
        except PyMongoError as e:
            raise SamplingError(f"Failed to sample collection {collection}: {e}") from e

        logger.debug(
            "mongo_sample database=%s collection=%s returned=%d total=%d",
            database,
            collection,
            len(documents),
            total_count,
        )
        return SampleResult(documents=documents, total_count=total_count)

    async def close(self) -> None:
        """Close the underlying client."""
        await self._client.close()
