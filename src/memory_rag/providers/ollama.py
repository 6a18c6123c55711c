"""Providers backed by a local Ollama server."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

from memory_rag.clients import ollama as ollama_client
from memory_rag.types import ChatMessage

if TYPE_CHECKING:
    from ollama import AsyncClient

__all__ = ["OllamaEmbeddingProvider", "OllamaLLMProvider"]


class OllamaEmbeddingProvider:
    def __init__(
        self,
        model_name: str = "nomic-embed-text",
        dimensions: int = 768,
        *,
        client: "AsyncClient | None" = None,
    ) -> None:
        self.model_name = model_name
        self._dimensions = dimensions
        self._client = client

    async def create_embedding(self, text: str) -> Sequence[float]:
        return await ollama_client.embed(text, self.model_name, client=self._client)

    def get_dimensions(self) -> int:
        return self._dimensions

    def get_provider_name(self) -> str:
        return "ollama"


class OllamaLLMProvider:
    def __init__(self, model_name: str = "llama3.1", *, client: "AsyncClient | None" = None) -> None:
        self.model_name = model_name
        self._client = client

    async def generate_text(
        self,
        messages: List[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        return await ollama_client.chat(
            list(messages),
            self.model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            client=self._client,
        )

    def get_provider_name(self) -> str:
        return "ollama"
