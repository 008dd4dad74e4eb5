from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CollectionInfo(BaseModel):
    """A collection (or view) listed for a database."""

    name: str
    type: str = "collection"


class SampleResult(BaseModel):
    """Documents returned by a bounded collection sample."""

    documents: List[Dict[str, Any]] = Field(default_factory=list)
    total_count: Optional[int] = None

    @property
    def document_count(self) -> int:
        """Collection size when known, else the number of sampled documents."""
        return self.total_count or len(self.documents)
