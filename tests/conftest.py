import os, sys
import asyncio
import re
from pathlib import Path

import pytest

# Add src/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Keep provider defaults away from real backends during tests
os.environ.setdefault("OPENAI_API_KEY", "test-openai")
os.environ.setdefault("MEMORY_RAG_LLM_PROVIDER", "openai")
os.environ.setdefault("MEMORY_RAG_EMBEDDING_PROVIDER", "openai")

from memory_rag import InMemoryVectorStore, ProviderRegistry, RAGService, SessionStoreRegistry  # noqa: E402

_WORD = re.compile(r"[a-z0-9]+")


class VocabularyEmbedding:
    """Bag-of-words vectors over a vocabulary that grows as words are seen."""

    def __init__(self, dimensions: int = 64, delay: float = 0.0):
        self.dimensions = dimensions
        self.delay = delay
        self.vocab: dict[str, int] = {}
        self.calls: list[str] = []

    async def create_embedding(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        else:
            await asyncio.sleep(0)
        vec = [0.0] * self.dimensions
        for word in _WORD.findall(text.lower()):
            idx = self.vocab.setdefault(word, len(self.vocab) % self.dimensions)
            vec[idx] += 1.0
        return vec

    def get_dimensions(self) -> int:
        return self.dimensions

    def get_provider_name(self) -> str:
        return "vocab"


class EchoLLM:
    """Answers with the last message; records every call."""

    def __init__(self):
        self.calls: list[dict] = []

    async def generate_text(self, messages, *, temperature=None, max_tokens=None) -> str:
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        return f"Mock response to: {messages[-1]['content']}"

    def get_provider_name(self) -> str:
        return "echo"


class FailingEmbedding(VocabularyEmbedding):
    async def create_embedding(self, text: str) -> list[float]:
        self.calls.append(text)
        raise ConnectionError("embedding backend unreachable")


class FailingLLM(EchoLLM):
    async def generate_text(self, messages, *, temperature=None, max_tokens=None) -> str:
        self.calls.append({"messages": messages})
        raise TimeoutError("generation timed out")


@pytest.fixture
def embedder():
    return VocabularyEmbedding()


@pytest.fixture
def failing_embedder():
    return FailingEmbedding()


@pytest.fixture
def llm():
    return EchoLLM()


@pytest.fixture
def failing_llm():
    return FailingLLM()


@pytest.fixture
def store(embedder):
    return InMemoryVectorStore(embedder)


@pytest.fixture
def service(llm):
    return RAGService(llm)


@pytest.fixture
def sessions(embedder):
    return SessionStoreRegistry(lambda: embedder)


@pytest.fixture
def fake_registry():
    registry = ProviderRegistry(default_llm="echo", default_embedding="vocab")
    registry.register_llm("echo", EchoLLM)
    registry.register_embedding("vocab", VocabularyEmbedding)
    return registry
