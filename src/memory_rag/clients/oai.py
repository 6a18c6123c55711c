"""Helpers for interacting with OpenAI API"""
from __future__ import annotations

import numpy as np
from openai import AsyncOpenAI

from memory_rag.config import get_config

import logging
logger = logging.getLogger(__name__)

# One shared async-capable client, built on first use
_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    """Return the shared :class:`AsyncOpenAI` client, creating it if needed."""
    global _client
    if _client is None:
        providers = get_config().providers
        _client = AsyncOpenAI(api_key=providers.OPENAI_API_KEY, base_url=providers.OPENAI_BASE_URL)
    return _client


# ==============================================
# Embedding utilities
# ==============================================
async def embed_text(
    text: str,
    model: str,
    *,
    dim: int | None = None,
    client: AsyncOpenAI | None = None,
) -> np.ndarray:
    """
    Return a float32 numpy vector for the given text using OpenAI embeddings.

    Empty text short-circuits to a zero vector of ``dim`` when ``dim`` is known.
    """
    if not text and dim:
        return np.zeros(dim, dtype=np.float32)

    aoai = client or get_client()
    resp = await aoai.embeddings.create(model=model, input=text)
    vec = np.asarray(resp.data[0].embedding, dtype=np.float32)
    if dim is not None and vec.size != dim:
        raise ValueError(f"Unexpected embedding size {vec.size} != {dim} for model {model}")

    return vec

# ==============================================
# Text utilities
# ==============================================

async def chat(
    messages: list[dict],
    model: str,
    *,
    temperature: float | None = None,
    max_tokens: int | None = None,
    client: AsyncOpenAI | None = None,
) -> str:
    """
    Send a basic chat completion request to OpenAI and return the response text.

    Example message format:
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
    kwargs = {"model": model, "messages": messages}
    if temperature is not None:
        kwargs["temperature"] = temperature
    if max_tokens is not None:
        kwargs["max_tokens"] = max_tokens

    aoai = client or get_client()
    resp = await aoai.chat.completions.create(**kwargs)

    return (resp.choices[0].message.content or "").strip()
