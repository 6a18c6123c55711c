import asyncio

import pytest

import memory_rag
from memory_rag import InMemoryRAG, ProviderConfigError, create_in_memory_rag, reset_config


@pytest.fixture(autouse=True)
def _restore_config():
    yield
    reset_config()


def test_public_surface_exports():
    for name in memory_rag.__all__:
        assert hasattr(memory_rag, name), name


def test_create_in_memory_rag_with_named_providers(fake_registry):
    rag = create_in_memory_rag(llm_provider="echo", embedding_provider="vocab", registry=fake_registry)

    assert isinstance(rag, InMemoryRAG)
    assert rag.store.get_provider_info()["name"] == "vocab"

    async def scenario():
        await rag.add_document("cat sat on mat")
        await rag.add_document("dog ran in park")
        return await rag.search("cat", top_k=1)

    result = asyncio.run(scenario())

    assert result.success is True
    assert [r.content for r in result.results] == ["cat sat on mat"]
    assert result.answer == "Mock response to: cat"
    assert rag.stats().document_count == 2

    asyncio.run(rag.clear())
    assert rag.stats().document_count == 0


def test_config_overrides_flow_into_store_and_service(fake_registry):
    rag = create_in_memory_rag(
        registry=fake_registry,
        config={"memory_rag": {"vector_store": {"max_documents": 1}, "search": {"temperature": 0.2, "default_top_k": 3}}},
    )

    assert rag.service.temperature == 0.2
    assert rag.default_top_k == 3
    assert rag.store._max_documents == 1


def test_zero_max_documents_means_unbounded(fake_registry):
    rag = create_in_memory_rag(registry=fake_registry, config={"memory_rag": {"vector_store": {"max_documents": 0}}})
    assert rag.store._max_documents is None


def test_unknown_provider_fails_at_construction(fake_registry):
    with pytest.raises(ProviderConfigError):
        create_in_memory_rag(embedding_provider="does-not-exist", registry=fake_registry)
