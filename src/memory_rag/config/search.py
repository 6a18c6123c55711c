import os


class Search:
    def __init__(self, config: dict | None = None) -> None:
        search_cfg = (config or {}).get("memory_rag", {}).get("search", {})
        self.DEFAULT_TOP_K: int = int(search_cfg.get("default_top_k", os.getenv("DEFAULT_TOP_K", "5")))
        self.MIN_SCORE: float = float(search_cfg.get("min_score", os.getenv("MIN_SCORE", "0.5")))

        # Sampling parameters for answer generation
        self.TEMPERATURE: float = float(search_cfg.get("temperature", os.getenv("RAG_TEMPERATURE", "0.7")))
        self.MAX_TOKENS: int = int(search_cfg.get("max_tokens", os.getenv("RAG_MAX_TOKENS", "500")))
