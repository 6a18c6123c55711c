from memory_rag import config as config_mod
from memory_rag.config import Config, get_config, reset_config, set_config
from memory_rag.config.loader import load_raw_config, merge_raw_config


def test_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("MEMORY_RAG_MODEL", "gpt-env")
    monkeypatch.delenv("MAX_DOCUMENTS", raising=False)

    cfg = Config({})

    assert cfg.providers.LLM_MODEL_ID == "gpt-env"
    assert cfg.providers.EMB_MODEL_ID == "text-embedding-3-small"
    assert cfg.vector_store.MAX_DOCUMENTS == 1000
    assert cfg.vector_store.CHUNK_SIZE == 500
    assert cfg.vector_store.CHUNK_OVERLAP == 50
    assert cfg.search.DEFAULT_TOP_K == 5
    assert cfg.search.MIN_SCORE == 0.5
    assert cfg.search.TEMPERATURE == 0.7
    assert cfg.search.MAX_TOKENS == 500


def test_file_values_override_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_TOP_K", "9")
    cfg = Config({"memory_rag": {"search": {"default_top_k": 2}}})
    assert cfg.search.DEFAULT_TOP_K == 2


def test_load_raw_config(tmp_path):
    assert load_raw_config(tmp_path / "missing.toml") == {}

    path = tmp_path / "config.toml"
    path.write_text('[memory_rag.vector_store]\nchunk_size = 128\n\n[memory_rag.providers]\nllm = "ollama"\n')

    cfg = Config.from_file(path)
    assert cfg.vector_store.CHUNK_SIZE == 128
    assert cfg.providers.DEFAULT_LLM_PROVIDER == "ollama"


def test_merge_is_section_wise():
    base = {"memory_rag": {"search": {"default_top_k": 3, "min_score": 0.1}}}
    merged = merge_raw_config(base, {"memory_rag": {"search": {"min_score": 0.9}}})

    assert merged == {"memory_rag": {"search": {"default_top_k": 3, "min_score": 0.9}}}
    assert base["memory_rag"]["search"]["min_score"] == 0.1


def test_set_and_reset_config():
    try:
        set_config({"memory_rag": {"search": {"default_top_k": 11}}})
        set_config({"memory_rag": {"vector_store": {"chunk_size": 64}}})

        active = get_config()
        assert active.search.DEFAULT_TOP_K == 11
        assert active.vector_store.CHUNK_SIZE == 64
    finally:
        reset_config()

    assert get_config().raw == config_mod._DEFAULT_RAW
