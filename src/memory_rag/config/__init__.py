"""Application configuration"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .loader import load_raw_config, merge_raw_config
from .providers import Providers
from .vector_store import VectorStoreSettings
from .search import Search

load_dotenv()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=logging.INFO)
logging.getLogger("httpx").setLevel(logging.WARNING)


class Config:
    """Resolved configuration sections built from one raw mapping."""

    def __init__(self, raw: Dict[str, Any] | None = None) -> None:
        self.raw: Dict[str, Any] = dict(raw or {})
        self.providers = Providers(self.raw)
        self.vector_store = VectorStoreSettings(self.raw)
        self.search = Search(self.raw)

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> "Config":
        return cls(load_raw_config(path))


_DEFAULT_RAW = load_raw_config()
_active = Config(_DEFAULT_RAW)


def get_config() -> Config:
    """Return the active configuration."""
    return _active


def set_config(raw: Dict[str, Any]) -> Config:
    """
    Merge ``raw`` over the active configuration and make the result active.

    ``raw`` uses the same shape as ``config.toml``, e.g.
    ``{"memory_rag": {"search": {"default_top_k": 3}}}``.
    """
    global _active
    _active = Config(merge_raw_config(_active.raw, raw))
    return _active


def reset_config() -> Config:
    """Restore the configuration loaded at import time."""
    global _active
    _active = Config(_DEFAULT_RAW)
    return _active


__all__ = [
    "Config",
    "Providers",
    "VectorStoreSettings",
    "Search",
    "get_config",
    "set_config",
    "reset_config",
    "load_raw_config",
    "LOG_FORMAT",
    "DATE_FORMAT",
]
