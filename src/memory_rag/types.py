"""
Shared data model
=================

Plain dataclasses for documents and result envelopes, plus the
:class:`typing.Protocol` contracts that embedding and generation backends
satisfy. Backends never need to inherit from anything here; any object with
the right async methods participates.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional, Protocol, Sequence, TypedDict, Union, runtime_checkable

import numpy as np

__all__ = [
    "MetadataValue",
    "DocumentMetadata",
    "ChatMessage",
    "Document",
    "SearchResult",
    "StoreStats",
    "RAGSearchResult",
    "AddDocumentResult",
    "BulkDocument",
    "EmbeddingProvider",
    "LLMProvider",
]

MetadataValue = Union[str, int, float, bool, None]
DocumentMetadata = Dict[str, MetadataValue]


class ChatMessage(TypedDict):
    role: Literal["system", "user", "assistant"]
    content: str


@dataclass(slots=True, frozen=True, eq=False)
class Document:
    """A stored document. Never mutated; replace by remove + add."""

    id: str
    content: str
    embedding: np.ndarray
    metadata: DocumentMetadata
    created_at: datetime


@dataclass(slots=True)
class SearchResult:
    """One ranked hit. The embedding itself is not exposed."""

    id: str
    content: str
    score: float
    metadata: DocumentMetadata

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class StoreStats:
    document_count: int
    total_size: int  # UTF-8 bytes across all document contents
    oldest_document: Optional[datetime]
    newest_document: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class RAGSearchResult:
    """Envelope returned by :meth:`RAGService.search`; never raised through."""

    success: bool
    results: Optional[List[SearchResult]] = None
    answer: Optional[str] = None
    stats: Optional[StoreStats] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success}
        if self.results is not None:
            out["results"] = [r.to_dict() for r in self.results]
            out["answer"] = self.answer
        if self.stats is not None:
            out["stats"] = self.stats.to_dict()
        if self.message is not None:
            out["message"] = self.message
        return out


@dataclass(slots=True)
class AddDocumentResult:
    success: bool
    document_ids: List[str]
    message: str
    stats: StoreStats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "document_ids": list(self.document_ids),
            "message": self.message,
            "stats": self.stats.to_dict(),
        }


@dataclass(slots=True)
class BulkDocument:
    content: str
    metadata: DocumentMetadata = field(default_factory=dict)

    @classmethod
    def coerce(cls, item: "BulkDocument | Mapping[str, Any]") -> "BulkDocument":
        """Accept either a :class:`BulkDocument` or a ``{"content", "metadata"}`` mapping."""
        if isinstance(item, cls):
            return item
        return cls(content=item.get("content") or "", metadata=dict(item.get("metadata") or {}))


@runtime_checkable
class EmbeddingProvider(Protocol):
    async def create_embedding(self, text: str) -> Sequence[float]: ...

    def get_dimensions(self) -> int: ...


@runtime_checkable
class LLMProvider(Protocol):
    async def generate_text(
        self,
        messages: List[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str: ...
