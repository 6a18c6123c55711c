import os


class VectorStoreSettings:
    def __init__(self, config: dict | None = None) -> None:
        vs_cfg = (config or {}).get("memory_rag", {}).get("vector_store", {})
        # 0 disables the cap
        self.MAX_DOCUMENTS: int = int(vs_cfg.get("max_documents", os.getenv("MAX_DOCUMENTS", "1000")))
        self.CHUNK_SIZE: int = int(vs_cfg.get("chunk_size", os.getenv("CHUNK_SIZE", "500")))
        self.CHUNK_OVERLAP: int = int(vs_cfg.get("chunk_overlap", os.getenv("CHUNK_OVERLAP", "50")))
