"""Vector store implementations."""

from .in_memory import InMemoryVectorStore, VectorIndex

__all__ = ["InMemoryVectorStore", "VectorIndex"]
