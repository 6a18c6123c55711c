import math

import pytest

from memory_rag.chunking import chunk_text, chunk_words


@pytest.mark.parametrize("n_words,size", [(1, 1), (10, 3), (12, 4), (1001, 500), (7, 50)])
def test_chunk_count_is_ceiling(n_words, size):
    text = " ".join(f"w{i}" for i in range(n_words))
    chunks = chunk_text(text, size)

    assert len(chunks) == math.ceil(n_words / size)
    assert all(len(c.split()) == size for c in chunks[:-1])
    assert 0 < len(chunks[-1].split()) <= size
    assert " ".join(chunks) == text


def test_whitespace_runs_are_collapsed():
    assert chunk_text("a  b\n\tc   d", 2) == ["a b", "c d"]


def test_empty_text_has_no_chunks():
    assert chunk_text("", 5) == []
    assert chunk_text("   \n ", 5) == []


def test_overlap_windows():
    words = [str(i) for i in range(10)]
    chunks = chunk_words(words, 4, overlap=2)

    assert chunks == [
        ["0", "1", "2", "3"],
        ["2", "3", "4", "5"],
        ["4", "5", "6", "7"],
        ["6", "7", "8", "9"],
    ]


@pytest.mark.parametrize("size,overlap", [(0, 0), (-3, 0), (4, 4), (4, -1)])
def test_invalid_sizes(size, overlap):
    with pytest.raises(ValueError):
        chunk_words(["a", "b"], size, overlap)
