"""Data access for document-store sampling.

Exposes the MongoDB-backed DocumentSampler and the tracing helper used around
sampling round trips.
"""

from dal.mongo import MongoDocumentSampler
from dal.tracing import trace_sample_operation

__all__ = [
    "MongoDocumentSampler",
    "trace_sample_operation",
]
