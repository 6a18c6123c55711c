"""Word-count chunking for ingestion."""

from __future__ import annotations

from typing import List

__all__ = ["split_words", "chunk_words", "chunk_text"]


def split_words(text: str) -> List[str]:
    """Split on runs of whitespace, dropping empties."""
    return text.split()


def chunk_words(words: List[str], chunk_size: int, overlap: int = 0) -> List[List[str]]:
    """
    Partition ``words`` into windows of ``chunk_size`` words.

    Consecutive windows share ``overlap`` words. With ``overlap == 0`` the
    result has ``ceil(len(words) / chunk_size)`` windows and only the last may
    be shorter.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError("chunk_overlap must be in [0, chunk_size)")

    step = chunk_size - overlap
    chunks: List[List[str]] = []
    for start in range(0, len(words), step):
        chunks.append(words[start : start + chunk_size])
        if start + chunk_size >= len(words):
            break
    return chunks


def chunk_text(text: str, chunk_size: int, overlap: int = 0) -> List[str]:
    """Chunk ``text`` by words and re-join each window with single spaces."""
    return [" ".join(window) for window in chunk_words(split_words(text), chunk_size, overlap)]
