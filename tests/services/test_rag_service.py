import math

import pytest

from memory_rag import BulkDocument, EmbeddingFailure, InMemoryVectorStore, RAGService


@pytest.mark.asyncio
async def test_search_empty_store_skips_generation(service, store, llm):
    result = await service.search(store, "anything", top_k=5, generate_answer=True)

    assert result.success is True
    assert result.results == []
    assert result.answer is None
    assert result.message == "No documents found"
    assert llm.calls == []


@pytest.mark.asyncio
async def test_search_generates_answer_from_ranked_context(service, store, llm):
    await store.add_document("cat sat on mat")
    await store.add_document("dog ran in park")
    await store.add_document("cat chased mouse")

    result = await service.search(store, "cat", top_k=2)

    assert result.success is True
    assert [r.content for r in result.results] == ["cat chased mouse", "cat sat on mat"]
    assert result.answer == "Mock response to: cat"
    assert result.stats.document_count == 3

    call = llm.calls[0]
    system, user = call["messages"]
    assert system["role"] == "system"
    assert "[Source 1]: cat chased mouse\n\n[Source 2]: cat sat on mat" in system["content"]
    assert user == {"role": "user", "content": "cat"}
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 500


@pytest.mark.asyncio
async def test_search_without_generation(service, store, llm):
    await store.add_document("cat")

    result = await service.search(store, "cat", generate_answer=False)

    assert result.success is True
    assert result.answer is None
    assert len(result.results) == 1
    assert llm.calls == []


@pytest.mark.asyncio
async def test_generation_failure_becomes_failure_envelope(store, failing_llm):
    await store.add_document("cat")
    service = RAGService(failing_llm)

    result = await service.search(store, "cat")

    assert result.success is False
    assert result.message.startswith("Error during search:")
    assert "generation timed out" in result.message
    assert result.results is None


@pytest.mark.asyncio
async def test_embedding_failure_becomes_failure_envelope(service, embedder):
    store = InMemoryVectorStore(embedder)
    await store.add_document("cat")

    async def broken(text):
        raise ConnectionError("offline")

    embedder.create_embedding = broken

    result = await service.search(store, "cat")
    assert result.success is False
    assert "offline" in result.message


@pytest.mark.asyncio
async def test_add_document_single(service, store):
    result = await service.add_document(store, "one whole document", {"source": "unit"})

    assert result.success is True
    assert len(result.document_ids) == 1
    assert result.message == "Added 1 document(s)"
    assert result.stats.document_count == 1
    assert store.get_document(result.document_ids[0]).metadata == {"source": "unit"}


@pytest.mark.asyncio
@pytest.mark.parametrize("n_words,chunk_size", [(10, 3), (12, 4), (5, 500)])
async def test_add_document_chunked(service, store, n_words, chunk_size):
    text = " ".join(f"w{i}" for i in range(n_words))
    expected = math.ceil(n_words / chunk_size)

    result = await service.add_document(
        store, text, {"source": "book"}, use_chunks=True, chunk_size=chunk_size
    )

    assert len(result.document_ids) == expected
    assert result.message == f"Added {expected} document(s)"
    assert store.size() == expected
    for i, doc_id in enumerate(result.document_ids):
        meta = store.get_document(doc_id).metadata
        assert meta == {"source": "book", "chunk_index": i, "total_chunks": expected}


@pytest.mark.asyncio
async def test_add_document_propagates_embedding_failure(service, failing_embedder):
    store = InMemoryVectorStore(failing_embedder)
    with pytest.raises(EmbeddingFailure):
        await service.add_document(store, "will fail")
    assert store.size() == 0


@pytest.mark.asyncio
async def test_bulk_add_skips_blank_entries(service, store):
    docs = [
        {"content": "first", "metadata": {"n": 1}},
        {"content": ""},
        BulkDocument(content="second"),
        {"content": "   \n"},
        {"metadata": {"orphan": True}},
        {"content": "third"},
    ]

    result = await service.bulk_add_documents(store, docs)

    assert len(result.document_ids) == 3
    assert store.size() == 3
    assert result.message == "Added 3 document(s)"
    assert store.get_document(result.document_ids[0]).metadata == {"n": 1}


@pytest.mark.asyncio
async def test_create_rag_context(service, store):
    assert await service.create_rag_context(store, "cat") == ""

    await store.add_document("cat sat on mat")
    context = await service.create_rag_context(store, "cat", top_k=1)

    assert context.startswith("Based on the following relevant information")
    assert "[Source 1]: cat sat on mat" in context
    assert context.endswith("Please answer the following question:")


@pytest.mark.asyncio
async def test_result_to_dict(service, store):
    await store.add_document("cat")
    payload = (await service.search(store, "cat")).to_dict()

    assert payload["success"] is True
    assert payload["results"][0]["content"] == "cat"
    assert payload["answer"] == "Mock response to: cat"
    assert payload["stats"]["document_count"] == 1


def test_from_name_unknown_provider_raises(fake_registry):
    from memory_rag import ProviderConfigError

    with pytest.raises(ProviderConfigError):
        RAGService.from_name("missing", fake_registry)


@pytest.mark.asyncio
async def test_from_model_wraps_callable(store):
    seen = {}

    async def model(messages, *, temperature=None, max_tokens=None):
        seen["temperature"] = temperature
        return "wrapped"

    service = RAGService.from_model(model, temperature=0.1)
    await store.add_document("cat")

    result = await service.search(store, "cat")
    assert result.answer == "wrapped"
    assert seen["temperature"] == 0.1
