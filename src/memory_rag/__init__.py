"""
memory-rag
==========

Retrieval-augmented generation over a process-local, in-memory knowledge
base. Import from here::

    from memory_rag import create_in_memory_rag

    rag = create_in_memory_rag()
    await rag.add_document("Cats sleep up to sixteen hours a day.")
    result = await rag.search("How long do cats sleep?")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .config import Config, get_config, reset_config, set_config
from .errors import (
    EmbeddingFailure,
    GenerationFailure,
    IndexIntegrityError,
    MemoryRagError,
    ProviderConfigError,
    StoreFullError,
)
from .types import (
    AddDocumentResult,
    BulkDocument,
    ChatMessage,
    Document,
    DocumentMetadata,
    EmbeddingProvider,
    LLMProvider,
    RAGSearchResult,
    SearchResult,
    StoreStats,
)
from .similarity import cosine_similarity
from .chunking import chunk_text
from .stores import InMemoryVectorStore, VectorIndex
from .services import GLOBAL_SESSION, RAGService, SessionStoreRegistry
from .providers import (
    ModelBasedEmbeddingProvider,
    ModelBasedLLMProvider,
    OllamaEmbeddingProvider,
    OllamaLLMProvider,
    OpenAIEmbeddingProvider,
    OpenAILLMProvider,
    ProviderRegistry,
    default_provider_registry,
)

__all__ = [
    "Config",
    "get_config",
    "set_config",
    "reset_config",
    "MemoryRagError",
    "ProviderConfigError",
    "EmbeddingFailure",
    "GenerationFailure",
    "IndexIntegrityError",
    "StoreFullError",
    "AddDocumentResult",
    "BulkDocument",
    "ChatMessage",
    "Document",
    "DocumentMetadata",
    "EmbeddingProvider",
    "LLMProvider",
    "RAGSearchResult",
    "SearchResult",
    "StoreStats",
    "cosine_similarity",
    "chunk_text",
    "InMemoryVectorStore",
    "VectorIndex",
    "GLOBAL_SESSION",
    "RAGService",
    "SessionStoreRegistry",
    "ModelBasedEmbeddingProvider",
    "ModelBasedLLMProvider",
    "OllamaEmbeddingProvider",
    "OllamaLLMProvider",
    "OpenAIEmbeddingProvider",
    "OpenAILLMProvider",
    "ProviderRegistry",
    "default_provider_registry",
    "InMemoryRAG",
    "create_in_memory_rag",
    "create_simple_rag",
]


@dataclass(slots=True)
class InMemoryRAG:
    """A store and a service wired together, with shortcuts bound to the store."""

    store: InMemoryVectorStore
    service: RAGService
    default_top_k: int = 5

    async def add_document(self, content: str, metadata: DocumentMetadata | None = None) -> str:
        return await self.store.add_document(content, metadata)

    async def search(self, query: str, top_k: int | None = None) -> RAGSearchResult:
        return await self.service.search(self.store, query, self.default_top_k if top_k is None else top_k)

    async def clear(self) -> None:
        await self.store.clear()

    def stats(self) -> StoreStats:
        return self.store.get_stats()


def create_in_memory_rag(
    *,
    llm_provider: str | None = None,
    embedding_provider: str | None = None,
    config: Dict[str, Any] | None = None,
    registry: ProviderRegistry | None = None,
) -> InMemoryRAG:
    """
    Compose a store and a service from named providers.

    :param llm_provider: Registry name of the LLM backend (config default if ``None``).
    :param embedding_provider: Registry name of the embedding backend.
    :param config: Raw config overrides merged via :func:`set_config`.
    :param registry: Provider registry; defaults to :func:`default_provider_registry`.
    :raises ProviderConfigError: if a provider name is not registered.
    """
    cfg = set_config(config) if config else get_config()
    registry = registry or default_provider_registry(cfg)

    store = InMemoryVectorStore.from_name(
        embedding_provider,
        registry,
        max_documents=cfg.vector_store.MAX_DOCUMENTS or None,
    )
    service = RAGService.from_name(
        llm_provider,
        registry,
        temperature=cfg.search.TEMPERATURE,
        max_tokens=cfg.search.MAX_TOKENS,
    )
    return InMemoryRAG(store=store, service=service, default_top_k=cfg.search.DEFAULT_TOP_K)


def create_simple_rag() -> InMemoryRAG:
    """:func:`create_in_memory_rag` with every default."""
    return create_in_memory_rag()
