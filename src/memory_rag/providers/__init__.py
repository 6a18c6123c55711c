"""Embedding and generation providers."""

from .base import EmbeddingModel, LanguageModel, ModelBasedEmbeddingProvider, ModelBasedLLMProvider
from .ollama import OllamaEmbeddingProvider, OllamaLLMProvider
from .openai import OpenAIEmbeddingProvider, OpenAILLMProvider, embedding_dimensions
from .registry import ProviderRegistry, default_provider_registry

__all__ = [
    "EmbeddingModel",
    "LanguageModel",
    "ModelBasedEmbeddingProvider",
    "ModelBasedLLMProvider",
    "OllamaEmbeddingProvider",
    "OllamaLLMProvider",
    "OpenAIEmbeddingProvider",
    "OpenAILLMProvider",
    "embedding_dimensions",
    "ProviderRegistry",
    "default_provider_registry",
]
