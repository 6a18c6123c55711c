"""Session registry and retrieval orchestration."""

from .rag_service import RAGService, format_sources
from .store_manager import GLOBAL_SESSION, SessionStoreRegistry

__all__ = ["RAGService", "format_sources", "GLOBAL_SESSION", "SessionStoreRegistry"]
