from typing import Awaitable, Optional, TypeVar

from opentelemetry import trace

T = TypeVar("T")


async def trace_sample_operation(
    name: str,
    database: str,
    collection: Optional[str],
    operation: Awaitable[T],
    enabled: bool = False,
) -> T:
    """Trace a document-store sampling operation with OTEL when enabled."""
    if not enabled:
        return await operation

    tracer = trace.get_tracer("dal")
    with tracer.start_as_current_span(name) as span:
        span.set_attribute("db.system", "mongodb")
        span.set_attribute("db.name", database)
        if collection:
            span.set_attribute("db.mongodb.collection", collection)
        try:
            result = await operation
            span.set_attribute("db.status", "ok")
            return result
        except Exception:
            span.set_attribute("db.status", "error")
            raise
