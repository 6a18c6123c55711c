"""
In-memory vector store
======================

Documents live in a dict keyed by id; their embeddings live in a parallel
:class:`VectorIndex` (ids + vectors in insertion order). Search is a linear
cosine scan over the index.

Writes (``add_document``, ``remove_document``, ``clear``) run under a
per-store :class:`asyncio.Lock` and never await inside the critical section,
so the dict and the index always change together. ``search`` embeds the query
outside the lock and then scores a snapshot under it.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

import numpy as np

from ..errors import EmbeddingFailure, IndexIntegrityError, StoreFullError
from ..similarity import as_vector, cosine_scores
from ..types import Document, DocumentMetadata, EmbeddingProvider, SearchResult, StoreStats

if TYPE_CHECKING:
    from ..providers.base import EmbeddingModel
    from ..providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

__all__ = ["VectorIndex", "InMemoryVectorStore"]


class VectorIndex:
    """Ordered ``(id, embedding)`` pairs kept in lockstep with the document map."""

    def __init__(self) -> None:
        self.ids: List[str] = []
        self.embeddings: List[np.ndarray] = []

    def __len__(self) -> int:
        return len(self.ids)

    def append(self, doc_id: str, embedding: np.ndarray) -> None:
        self.ids.append(doc_id)
        self.embeddings.append(embedding)

    def remove(self, doc_id: str) -> bool:
        """Delete the slot holding ``doc_id``. Returns ``False`` if absent."""
        try:
            position = self.ids.index(doc_id)
        except ValueError:
            return False
        del self.ids[position]
        del self.embeddings[position]
        return True

    def clear(self) -> None:
        self.ids = []
        self.embeddings = []

    @property
    def dimensions(self) -> Optional[int]:
        return int(self.embeddings[0].shape[0]) if self.embeddings else None

    def snapshot(self) -> Tuple[List[str], np.ndarray]:
        """Return a copy of the ids and the embeddings stacked as ``(n, dim)``."""
        if not self.embeddings:
            return [], np.zeros((0, 0), dtype=np.float64)
        return list(self.ids), np.vstack(self.embeddings)


class InMemoryVectorStore:
    """Process-local document store with cosine-similarity search."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        *,
        max_documents: int | None = None,
    ) -> None:
        """
        :param embedding_provider: Capability used for documents and queries.
        :param max_documents: Optional cap; adds beyond it raise
            :class:`StoreFullError`. ``None`` means unbounded.
        """
        if max_documents is not None and max_documents <= 0:
            raise ValueError("max_documents must be positive or None")

        self._embedding_provider = embedding_provider
        self._max_documents = max_documents
        self._documents: Dict[str, Document] = {}
        self._index = VectorIndex()
        self._lock = asyncio.Lock()

    # --- Alternative constructors ---------------------------------------

    @classmethod
    def from_name(
        cls,
        name: str | None,
        registry: "ProviderRegistry",
        *,
        model_name: str | None = None,
        max_documents: int | None = None,
    ) -> "InMemoryVectorStore":
        """Build a store whose embedding provider is looked up in ``registry``."""
        provider = registry.create_embedding(name, model_name=model_name)
        return cls(provider, max_documents=max_documents)

    @classmethod
    def from_model(
        cls,
        model: "EmbeddingModel",
        *,
        dimensions: int = 1536,
        max_documents: int | None = None,
    ) -> "InMemoryVectorStore":
        """Build a store around a raw async embedding callable."""
        from ..providers.base import ModelBasedEmbeddingProvider

        return cls(ModelBasedEmbeddingProvider(model, dimensions=dimensions), max_documents=max_documents)

    # --- Internals --------------------------------------------------------

    @property
    def index(self) -> VectorIndex:
        return self._index

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        return self._embedding_provider

    async def _embed(self, text: str) -> np.ndarray:
        try:
            raw = await self._embedding_provider.create_embedding(text)
        except Exception as exc:
            raise EmbeddingFailure(f"Embedding failed: {exc}") from exc

        try:
            vec = as_vector(raw)
        except (TypeError, ValueError) as exc:
            raise EmbeddingFailure(f"Embedding is not numeric: {exc}") from exc
        if vec.size == 0:
            raise EmbeddingFailure("Embedding provider returned an empty vector")
        return vec

    def _check_dimensions(self, vec: np.ndarray) -> None:
        dim = self._index.dimensions
        if dim is not None and vec.shape[0] != dim:
            raise EmbeddingFailure(f"Embedding has {vec.shape[0]} dimensions, store holds {dim}")

    def _check_capacity(self) -> None:
        if self._max_documents is not None and len(self._documents) >= self._max_documents:
            raise StoreFullError(self._max_documents)

    def _new_id(self) -> str:
        while True:
            doc_id = f"doc_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
            if doc_id not in self._documents:
                return doc_id

    # --- Writes -----------------------------------------------------------

    async def add_document(self, content: str, metadata: DocumentMetadata | None = None) -> str:
        """
        Embed ``content`` and store it.

        :returns: The new document id.
        :raises EmbeddingFailure: if the embedding call fails; nothing is stored.
        :raises StoreFullError: if ``max_documents`` is already reached.
        """
        self._check_capacity()
        embedding = await self._embed(content)

        async with self._lock:
            self._check_capacity()
            self._check_dimensions(embedding)
            doc_id = self._new_id()
            self._documents[doc_id] = Document(
                id=doc_id,
                content=content,
                embedding=embedding,
                metadata=dict(metadata or {}),
                created_at=datetime.now(timezone.utc),
            )
            self._index.append(doc_id, embedding)

        logger.debug("Added document %s (%d chars)", doc_id, len(content))
        return doc_id

    async def remove_document(self, doc_id: str) -> bool:
        """Remove ``doc_id`` from the map and the index. ``False`` if unknown."""
        async with self._lock:
            if doc_id not in self._documents:
                return False
            del self._documents[doc_id]
            if not self._index.remove(doc_id):
                raise IndexIntegrityError(f"Document {doc_id} had no index entry")

        logger.debug("Removed document %s", doc_id)
        return True

    async def clear(self) -> None:
        """Drop every document and index entry."""
        async with self._lock:
            self._documents.clear()
            self._index.clear()

    # --- Reads ------------------------------------------------------------

    async def search(
        self,
        query: str,
        top_k: int = 5,
        *,
        min_score: float | None = None,
    ) -> List[SearchResult]:
        """
        Rank stored documents by cosine similarity to ``query``.

        Returns ``[]`` for an empty store without calling the embedding
        provider. Equal scores keep insertion order.

        :param min_score: Optional floor applied after ranking.
        :raises EmbeddingFailure: if the query cannot be embedded.
        :raises IndexIntegrityError: if the index references a missing document.
        """
        if top_k < 0:
            raise ValueError("top_k must be non-negative")
        if not self._documents or top_k == 0:
            return []

        query_vec = await self._embed(query)
        started = time.perf_counter()

        async with self._lock:
            ids, matrix = self._index.snapshot()
            if len(ids) != len(self._documents):
                raise IndexIntegrityError(
                    f"Index holds {len(ids)} entries for {len(self._documents)} documents"
                )
            if not ids:
                return []
            if matrix.shape[1] != query_vec.shape[0]:
                raise EmbeddingFailure(
                    f"Query embedding has {query_vec.shape[0]} dimensions, store holds {matrix.shape[1]}"
                )

            scores = cosine_scores(query_vec, matrix)
            order = np.argsort(-scores, kind="stable")[:top_k]

            results: List[SearchResult] = []
            for pos in order:
                doc_id = ids[int(pos)]
                doc = self._documents.get(doc_id)
                if doc is None:
                    raise IndexIntegrityError(f"Document not found for ID: {doc_id}")
                score = float(scores[int(pos)])
                if min_score is not None and score < min_score:
                    break
                results.append(
                    SearchResult(id=doc.id, content=doc.content, score=score, metadata=dict(doc.metadata))
                )

        logger.debug(
            "Search over %d documents returned %d results in %.2f ms",
            len(ids),
            len(results),
            (time.perf_counter() - started) * 1000,
        )
        return results

    def size(self) -> int:
        return len(self._documents)

    def __len__(self) -> int:
        return self.size()

    def has_document(self, doc_id: str) -> bool:
        return doc_id in self._documents

    def get_document(self, doc_id: str) -> Optional[Document]:
        return self._documents.get(doc_id)

    def get_stats(self) -> StoreStats:
        docs = list(self._documents.values())
        stamps = [d.created_at for d in docs]
        return StoreStats(
            document_count=len(docs),
            total_size=sum(len(d.content.encode("utf-8")) for d in docs),
            oldest_document=min(stamps) if stamps else None,
            newest_document=max(stamps) if stamps else None,
        )

    def get_provider_info(self) -> Dict[str, object]:
        """Name and dimensionality of the bound embedding provider."""
        get_name = getattr(self._embedding_provider, "get_provider_name", None)
        name = get_name() if callable(get_name) else "Unknown"
        return {"name": name or "Unknown", "dimensions": self._embedding_provider.get_dimensions()}
