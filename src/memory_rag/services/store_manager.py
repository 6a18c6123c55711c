"""
Session-scoped store registry
=============================

Maps session ids to :class:`InMemoryVectorStore` instances. ``None`` and
``"global"`` name one shared store; every other id gets its own store, created
on first access and evicted by :meth:`SessionStoreRegistry.clear_session`.

The id -> store map is guarded by a :class:`threading.Lock` so two callers
racing to create the same session converge on one instance.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional

from ..errors import ProviderConfigError
from ..stores.in_memory import InMemoryVectorStore
from ..types import EmbeddingProvider

logger = logging.getLogger(__name__)

__all__ = ["GLOBAL_SESSION", "SessionStoreRegistry"]

GLOBAL_SESSION = "global"


class SessionStoreRegistry:
    """Owns the session -> store mapping, including the reserved global slot."""

    def __init__(
        self,
        embedding_factory: Callable[[], EmbeddingProvider] | None = None,
        *,
        max_documents: int | None = None,
    ) -> None:
        """
        :param embedding_factory: Builds the embedding provider for stores whose
            creator did not pass one to :meth:`get_store`.
        :param max_documents: Cap passed to every store created here.
        """
        self._embedding_factory = embedding_factory
        self._max_documents = max_documents
        self._global: Optional[InMemoryVectorStore] = None
        self._sessions: Dict[str, InMemoryVectorStore] = {}
        self._lock = threading.Lock()

    async def __aenter__(self) -> "SessionStoreRegistry":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.clear_all_sessions()

    def _new_store(self, embedding_provider: EmbeddingProvider | None) -> InMemoryVectorStore:
        provider = embedding_provider
        if provider is None:
            if self._embedding_factory is None:
                raise ProviderConfigError(
                    "No embedding provider given and the registry has no default factory"
                )
            provider = self._embedding_factory()
        return InMemoryVectorStore(provider, max_documents=self._max_documents)

    @staticmethod
    def _is_global(session_id: str | None) -> bool:
        return not session_id or session_id == GLOBAL_SESSION

    def get_store(
        self,
        session_id: str | None = None,
        embedding_provider: EmbeddingProvider | None = None,
    ) -> InMemoryVectorStore:
        """
        Return the store for ``session_id``, creating it on first access.

        ``embedding_provider`` only matters when the store is created; later
        calls for the same session ignore it.
        """
        with self._lock:
            if self._is_global(session_id):
                if self._global is None:
                    self._global = self._new_store(embedding_provider)
                    logger.info("Created global store")
                return self._global

            store = self._sessions.get(session_id)
            if store is None:
                store = self._new_store(embedding_provider)
                self._sessions[session_id] = store
                logger.info("Created store for session %s", session_id)
            return store

    def has_session(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def session_ids(self) -> List[str]:
        """Registered non-global session ids."""
        with self._lock:
            return list(self._sessions)

    def get_session_count(self) -> int:
        """Registered sessions plus one for the permanent global slot."""
        with self._lock:
            return len(self._sessions) + 1

    async def clear_session(self, session_id: str) -> bool:
        """
        Clear a session.

        The global store is emptied in place and ``True`` is returned
        unconditionally. Any other known session is emptied and evicted, so the
        next :meth:`get_store` builds a fresh store. Unknown ids return ``False``.
        """
        if self._is_global(session_id):
            with self._lock:
                store = self._global
            if store is not None:
                await store.clear()
            return True

        with self._lock:
            store = self._sessions.pop(session_id, None)
        if store is None:
            return False

        await store.clear()
        logger.info("Cleared session %s", session_id)
        return True

    async def clear_all_sessions(self) -> None:
        """Empty and evict every store, the global one included."""
        with self._lock:
            stores = list(self._sessions.values())
            self._sessions.clear()
            global_store, self._global = self._global, None

        for store in stores:
            await store.clear()
        if global_store is not None:
            await global_store.clear()

        logger.info("Cleared %d session store(s) and the global store", len(stores))
