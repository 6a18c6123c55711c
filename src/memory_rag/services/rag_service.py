"""
Retrieval orchestration
=======================

:class:`RAGService` sits between callers and a store: it chunks and ingests
documents, and answers queries by retrieving context and handing it to the
LLM provider.

Failure policy differs by direction:

- ``search`` never raises; embedding or generation errors come back as
  ``RAGSearchResult(success=False, message=...)``.
- ``add_document`` / ``bulk_add_documents`` let errors propagate, since a
  document that fails to embed is not stored at all.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping

from ..chunking import chunk_text
from ..errors import GenerationFailure
from ..stores.in_memory import InMemoryVectorStore
from ..types import (
    AddDocumentResult,
    BulkDocument,
    ChatMessage,
    DocumentMetadata,
    LLMProvider,
    RAGSearchResult,
    SearchResult,
)

if TYPE_CHECKING:
    from ..providers.base import LanguageModel
    from ..providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

__all__ = ["RAGService", "format_sources"]

_SYSTEM_PROMPT = (
    "Use the following context information to answer the question. "
    "Answer based on the context provided.\n\n"
    "Context:\n{context}"
)

_CONTEXT_PREAMBLE = (
    "Based on the following relevant information from the knowledge base:\n\n"
    "{context}\n\n"
    "Please answer the following question:"
)


def format_sources(results: Iterable[SearchResult]) -> str:
    """Render ranked results as ``[Source i]: ...`` blocks separated by blank lines."""
    return "\n\n".join(f"[Source {i}]: {r.content}" for i, r in enumerate(results, start=1))


class RAGService:
    """Retrieval + optional answer generation over an :class:`InMemoryVectorStore`."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        *,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> None:
        self._llm_provider = llm_provider
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_name(
        cls,
        name: str | None,
        registry: "ProviderRegistry",
        *,
        model_name: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> "RAGService":
        """Build a service whose LLM provider is looked up in ``registry``."""
        provider = registry.create_llm(name, model_name=model_name)
        return cls(provider, temperature=temperature, max_tokens=max_tokens)

    @classmethod
    def from_model(
        cls,
        model: "LanguageModel",
        *,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> "RAGService":
        """Build a service around a raw async chat callable."""
        from ..providers.base import ModelBasedLLMProvider

        return cls(ModelBasedLLMProvider(model), temperature=temperature, max_tokens=max_tokens)

    @property
    def llm_provider(self) -> LLMProvider:
        return self._llm_provider

    # --- Retrieval --------------------------------------------------------

    async def _generate_answer(self, query: str, results: List[SearchResult]) -> str:
        messages: List[ChatMessage] = [
            {"role": "system", "content": _SYSTEM_PROMPT.format(context=format_sources(results))},
            {"role": "user", "content": query},
        ]
        try:
            return await self._llm_provider.generate_text(
                messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:
            raise GenerationFailure(f"Generation failed: {exc}") from exc

    async def search(
        self,
        store: InMemoryVectorStore,
        query: str,
        top_k: int = 5,
        generate_answer: bool = True,
    ) -> RAGSearchResult:
        """
        Retrieve the ``top_k`` best matches and optionally generate an answer.

        :returns: Envelope with ``success=False`` and a message on any error.
        """
        try:
            results = await store.search(query, top_k)

            if not results:
                return RAGSearchResult(
                    success=True,
                    results=[],
                    answer=None,
                    message="No documents found",
                )

            answer = None
            if generate_answer:
                answer = await self._generate_answer(query, results)

            return RAGSearchResult(
                success=True,
                results=results,
                answer=answer,
                stats=store.get_stats(),
            )
        except Exception as exc:
            logger.warning("RAG search failed for query %r: %s", query, exc)
            return RAGSearchResult(success=False, message=f"Error during search: {exc}")

    async def create_rag_context(self, store: InMemoryVectorStore, query: str, top_k: int = 3) -> str:
        """Context preamble for a chat prompt, or ``""`` when nothing matches."""
        results = await store.search(query, top_k)
        if not results:
            return ""
        return _CONTEXT_PREAMBLE.format(context=format_sources(results))

    # --- Ingestion --------------------------------------------------------

    async def add_document(
        self,
        store: InMemoryVectorStore,
        content: str,
        metadata: DocumentMetadata | None = None,
        use_chunks: bool = False,
        chunk_size: int = 500,
        chunk_overlap: int = 0,
    ) -> AddDocumentResult:
        """
        Ingest ``content`` as one document, or as word chunks when ``use_chunks``.

        Each chunk's metadata carries ``chunk_index`` (0-based) and
        ``total_chunks`` on top of ``metadata``.
        """
        base_meta: DocumentMetadata = dict(metadata or {})
        added: List[str] = []

        if use_chunks:
            chunks = chunk_text(content, chunk_size, chunk_overlap)
            for idx, chunk in enumerate(chunks):
                chunk_meta = {**base_meta, "chunk_index": idx, "total_chunks": len(chunks)}
                added.append(await store.add_document(chunk, chunk_meta))
            logger.debug("Ingested %d chunk(s) of %d words max", len(chunks), chunk_size)
        else:
            added.append(await store.add_document(content, base_meta))

        return AddDocumentResult(
            success=True,
            document_ids=added,
            message=f"Added {len(added)} document(s)",
            stats=store.get_stats(),
        )

    async def bulk_add_documents(
        self,
        store: InMemoryVectorStore,
        documents: Iterable[BulkDocument | Mapping[str, Any]],
    ) -> AddDocumentResult:
        """Ingest each entry in order, skipping entries whose content is blank."""
        added: List[str] = []
        skipped = 0

        for item in documents:
            doc = BulkDocument.coerce(item)
            if not doc.content or not doc.content.strip():
                skipped += 1
                continue
            added.append(await store.add_document(doc.content, doc.metadata))

        if skipped:
            logger.warning("Skipped %d blank document(s) during bulk add", skipped)
        logger.info("Bulk added %d document(s)", len(added))

        return AddDocumentResult(
            success=True,
            document_ids=added,
            message=f"Added {len(added)} document(s)",
            stats=store.get_stats(),
        )
