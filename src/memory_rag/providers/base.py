"""Adapters that turn a raw async model callable into a provider."""

from __future__ import annotations

from typing import Awaitable, Callable, List, Sequence

from ..types import ChatMessage

__all__ = [
    "EmbeddingModel",
    "LanguageModel",
    "ModelBasedEmbeddingProvider",
    "ModelBasedLLMProvider",
]

# ``await model(text)`` -> vector
EmbeddingModel = Callable[[str], Awaitable[Sequence[float]]]
# ``await model(messages, temperature=..., max_tokens=...)`` -> text
LanguageModel = Callable[..., Awaitable[str]]


class ModelBasedEmbeddingProvider:
    """Wrap any async ``text -> vector`` callable."""

    def __init__(self, model: EmbeddingModel, dimensions: int = 1536, name: str = "model") -> None:
        self._model = model
        self._dimensions = dimensions
        self._name = name

    async def create_embedding(self, text: str) -> Sequence[float]:
        return await self._model(text)

    def get_dimensions(self) -> int:
        return self._dimensions

    def get_provider_name(self) -> str:
        return self._name


class ModelBasedLLMProvider:
    """Wrap any async ``messages -> text`` callable."""

    def __init__(self, model: LanguageModel, name: str = "model") -> None:
        self._model = model
        self._name = name

    async def generate_text(
        self,
        messages: List[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        return await self._model(messages, temperature=temperature, max_tokens=max_tokens)

    def get_provider_name(self) -> str:
        return self._name
