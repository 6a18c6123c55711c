"""OpenAI-backed providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import numpy as np

from memory_rag.clients import oai
from memory_rag.types import ChatMessage

if TYPE_CHECKING:
    from openai import AsyncOpenAI

__all__ = ["OpenAIEmbeddingProvider", "OpenAILLMProvider", "embedding_dimensions"]

_EMBEDDING_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


def embedding_dimensions(model_name: str) -> int:
    """Known output size for an OpenAI embedding model (1536 if unknown)."""
    return _EMBEDDING_DIMENSIONS.get(model_name, 1536)


class OpenAIEmbeddingProvider:
    def __init__(
        self,
        model_name: str = "text-embedding-3-small",
        *,
        client: "AsyncOpenAI | None" = None,
    ) -> None:
        self.model_name = model_name
        self._client = client
        self._dimensions = embedding_dimensions(model_name)

    async def create_embedding(self, text: str) -> np.ndarray:
        return await oai.embed_text(text, self.model_name, dim=self._dimensions, client=self._client)

    def get_dimensions(self) -> int:
        return self._dimensions

    def get_provider_name(self) -> str:
        return "openai"


class OpenAILLMProvider:
    def __init__(self, model_name: str = "gpt-4o-mini", *, client: "AsyncOpenAI | None" = None) -> None:
        self.model_name = model_name
        self._client = client

    async def generate_text(
        self,
        messages: List[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        return await oai.chat(
            list(messages),
            self.model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            client=self._client,
        )

    def get_provider_name(self) -> str:
        return "openai"
