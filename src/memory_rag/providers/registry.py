"""
Named provider factories.

A :class:`ProviderRegistry` is an ordinary value owned by whoever composes the
application. Nothing registers itself globally; build one with
:func:`default_provider_registry` and add to it::

    registry = default_provider_registry(get_config())

    @registry.register_embedding("hash")
    def _hash_embeddings():
        return MyHashEmbedding()

Factories take no arguments and return a fresh provider each call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, Generic, List, Optional, TypeVar

from ..errors import ProviderConfigError
from ..types import EmbeddingProvider, LLMProvider

if TYPE_CHECKING:
    from ..config import Config

logger = logging.getLogger(__name__)

__all__ = ["ProviderRegistry", "default_provider_registry"]

P = TypeVar("P")


class _FactoryTable(Generic[P]):
    """Name -> factory map plus an optional ``model_name`` fallback."""

    def __init__(self, kind: str, default: str) -> None:
        self.kind = kind
        self.default = default
        self.factories: Dict[str, Callable[[], P]] = {}
        self.fallback: Optional[Callable[[str], P]] = None

    def register(self, name: str, factory: Callable[[], P], *, replace: bool) -> None:
        if name in self.factories and not replace:
            raise ValueError(f"{self.kind} provider '{name}' already registered")
        self.factories[name] = factory

    def create(self, name: str | None, model_name: str | None) -> P:
        provider_name = name or self.default
        factory = self.factories.get(provider_name)
        if factory is not None:
            return factory()

        if model_name and self.fallback is not None:
            logger.info(
                "Unknown %s provider '%s'; falling back to model %s",
                self.kind,
                provider_name,
                model_name,
            )
            return self.fallback(model_name)

        available = ", ".join(sorted(self.factories)) or "(none)"
        raise ProviderConfigError(
            f"Unsupported {self.kind} provider: {provider_name}. Available: {available}"
        )


class ProviderRegistry:
    """Explicit mapping from provider names to LLM and embedding factories."""

    def __init__(self, *, default_llm: str = "openai", default_embedding: str = "openai") -> None:
        self._llm: _FactoryTable[LLMProvider] = _FactoryTable("LLM", default_llm)
        self._embedding: _FactoryTable[EmbeddingProvider] = _FactoryTable("embedding", default_embedding)

    # Registration -------------------------------------------------------

    def register_llm(self, name: str, factory: Callable[[], LLMProvider] | None = None, *, replace: bool = False):
        """Register an LLM factory. Usable directly or as a decorator."""

        def decorator(fn: Callable[[], LLMProvider]) -> Callable[[], LLMProvider]:
            self._llm.register(name, fn, replace=replace)
            return fn

        return decorator(factory) if factory is not None else decorator

    def register_embedding(
        self,
        name: str,
        factory: Callable[[], EmbeddingProvider] | None = None,
        *,
        replace: bool = False,
    ):
        """Register an embedding factory. Usable directly or as a decorator."""

        def decorator(fn: Callable[[], EmbeddingProvider]) -> Callable[[], EmbeddingProvider]:
            self._embedding.register(name, fn, replace=replace)
            return fn

        return decorator(factory) if factory is not None else decorator

    def set_llm_fallback(self, factory: Callable[[str], LLMProvider]) -> None:
        """Factory used for unknown names when a ``model_name`` is supplied."""
        self._llm.fallback = factory

    def set_embedding_fallback(self, factory: Callable[[str], EmbeddingProvider]) -> None:
        self._embedding.fallback = factory

    # Lookup ---------------------------------------------------------------

    def create_llm(self, name: str | None = None, model_name: str | None = None) -> LLMProvider:
        """
        Build the LLM provider registered as ``name`` (or the default).

        :raises ProviderConfigError: if ``name`` is unknown and no fallback
            model applies.
        """
        return self._llm.create(name, model_name)

    def create_embedding(self, name: str | None = None, model_name: str | None = None) -> EmbeddingProvider:
        """
        Build the embedding provider registered as ``name`` (or the default).

        :raises ProviderConfigError: if ``name`` is unknown and no fallback
            model applies.
        """
        return self._embedding.create(name, model_name)

    def available(self) -> Dict[str, List[str]]:
        return {
            "llm": sorted(self._llm.factories),
            "embedding": sorted(self._embedding.factories),
        }


def default_provider_registry(config: "Config | None" = None) -> ProviderRegistry:
    """Registry with the ``openai`` and ``ollama`` backends wired from ``config``."""
    from ..config import get_config
    from .ollama import OllamaEmbeddingProvider, OllamaLLMProvider
    from .openai import OpenAIEmbeddingProvider, OpenAILLMProvider

    prov = (config or get_config()).providers
    registry = ProviderRegistry(
        default_llm=prov.DEFAULT_LLM_PROVIDER,
        default_embedding=prov.DEFAULT_EMBEDDING_PROVIDER,
    )

    registry.register_llm("openai", lambda: OpenAILLMProvider(prov.LLM_MODEL_ID))
    registry.register_embedding("openai", lambda: OpenAIEmbeddingProvider(prov.EMB_MODEL_ID))
    registry.register_llm("ollama", lambda: OllamaLLMProvider(prov.LOCAL_MODEL_ID))
    registry.register_embedding(
        "ollama",
        lambda: OllamaEmbeddingProvider(prov.LOCAL_EMB_MODEL_ID, prov.LOCAL_EMB_DIM),
    )

    registry.set_llm_fallback(OpenAILLMProvider)
    registry.set_embedding_fallback(OpenAIEmbeddingProvider)
    return registry
