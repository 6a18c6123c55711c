"""Exception hierarchy shared by stores, services and providers."""

from __future__ import annotations

__all__ = [
    "MemoryRagError",
    "ProviderConfigError",
    "EmbeddingFailure",
    "GenerationFailure",
    "IndexIntegrityError",
    "StoreFullError",
]


class MemoryRagError(RuntimeError):
    """Base class for memory-rag failures."""

    pass


class ProviderConfigError(MemoryRagError):
    """Raised when a provider name cannot be resolved to a factory."""

    pass


class EmbeddingFailure(MemoryRagError):
    """Raised when the embedding capability fails or returns an unusable vector."""

    pass


class GenerationFailure(MemoryRagError):
    """Raised when the generation capability fails."""

    pass


class IndexIntegrityError(MemoryRagError):
    """Raised when the vector index and the document map disagree."""

    pass


class StoreFullError(MemoryRagError):
    """Raised when adding to a store that already holds ``max_documents``."""

    def __init__(self, max_documents: int) -> None:
        super().__init__(f"Store is full ({max_documents} documents)")
        self.max_documents = max_documents
