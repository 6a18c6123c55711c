"""Helpers for interacting with a local Ollama server"""

from __future__ import annotations

from ollama import AsyncClient

from memory_rag.config import get_config

_client: AsyncClient | None = None


def get_client() -> AsyncClient:
    global _client
    if _client is None:
        _client = AsyncClient(host=get_config().providers.LOCAL_SERVER_URL)
    return _client


async def chat(
        messages: list[dict],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        client: AsyncClient | None = None,
    ) -> str:
    """
    Send a prompt to the local Ollama server and return its reply.

    Example input messages list[dict]:

    .. code-block:: python
        [
            {
                "role": "system",
                "content": "You are a helpful assistant."
            },
            {
                "role": "user",
                "content": "Hello, how are you?"
            }
        ]
    """
    options = {}
    if temperature is not None:
        options["temperature"] = temperature
    if max_tokens is not None:
        options["num_predict"] = max_tokens

    resp = await (client or get_client()).chat(
        model=model,
        messages=messages,
        options=options or None,
    )

    return resp.message.content.strip()


async def embed(text: str, model: str, *, client: AsyncClient | None = None) -> list[float]:
    """Return the embedding for ``text`` from the local server."""
    resp = await (client or get_client()).embed(model=model, input=text)
    return list(resp.embeddings[0])
