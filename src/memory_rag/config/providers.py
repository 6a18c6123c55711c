import os


class Providers:
    def __init__(self, config: dict | None = None) -> None:
        prov_cfg = (config or {}).get("memory_rag", {}).get("providers", {})

        self.DEFAULT_LLM_PROVIDER: str = str(
            prov_cfg.get("llm", os.getenv("MEMORY_RAG_LLM_PROVIDER", "openai"))
        )
        self.DEFAULT_EMBEDDING_PROVIDER: str = str(
            prov_cfg.get("embedding", os.getenv("MEMORY_RAG_EMBEDDING_PROVIDER", "openai"))
        )

        # OpenAI backend
        openai_env = str(prov_cfg.get("openai_key_env", "OPENAI_API_KEY"))
        self.OPENAI_API_KEY: str | None = os.getenv(openai_env)
        self.OPENAI_BASE_URL: str | None = prov_cfg.get("openai_base_url") or os.getenv("OPENAI_BASE_URL")
        self.LLM_MODEL_ID: str = str(prov_cfg.get("model", os.getenv("MEMORY_RAG_MODEL", "gpt-4o-mini")))
        self.EMB_MODEL_ID: str = str(
            prov_cfg.get("embedding_model", os.getenv("MEMORY_RAG_EMBEDDING_MODEL", "text-embedding-3-small"))
        )

        # Ollama backend
        self.LOCAL_SERVER_URL: str = str(
            prov_cfg.get("local_server_url", os.getenv("LOCAL_SERVER_URL", "http://localhost:11434"))
        )
        self.LOCAL_MODEL_ID: str = str(prov_cfg.get("local_model_id", os.getenv("LOCAL_MODEL_ID", "llama3.1")))
        self.LOCAL_EMB_MODEL_ID: str = str(
            prov_cfg.get("local_emb_model_id", os.getenv("LOCAL_EMB_MODEL_ID", "nomic-embed-text"))
        )
        self.LOCAL_EMB_DIM: int = int(prov_cfg.get("local_emb_dim", os.getenv("LOCAL_EMB_DIM", "768")))
