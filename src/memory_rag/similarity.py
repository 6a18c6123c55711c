"""Cosine similarity helpers used by the in-memory store."""

from __future__ import annotations

from typing import Sequence

import numpy as np

__all__ = ["as_vector", "cosine_similarity", "cosine_scores"]


def as_vector(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``values`` as a writable 1-D float64 array with NaNs zeroed."""

    # ``np.array`` (not ``asarray``) so buffers from SDK responses are copied
    # and never shared with the caller.
    v = np.array(values, dtype=np.float64, copy=True).reshape(-1)
    np.nan_to_num(v, copy=False)
    return v


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine of the angle between ``a`` and ``b``.

    Returns ``0.0`` when either vector has zero magnitude.

    :raises ValueError: if the vectors differ in length.
    """
    va = as_vector(a)
    vb = as_vector(b)
    if va.shape != vb.shape:
        raise ValueError(f"Vector length mismatch: {va.shape[0]} != {vb.shape[0]}")

    na = float(np.linalg.norm(va))
    nb = float(np.linalg.norm(vb))
    if na == 0.0 or nb == 0.0:
        return 0.0
    return float(np.dot(va, vb) / (na * nb))


def cosine_scores(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """
    Score ``query`` against every row of ``matrix``.

    :param query: Vector of shape ``(dim,)``.
    :param matrix: Stacked embeddings of shape ``(n, dim)``.
    :returns: Array of shape ``(n,)``; rows with zero magnitude (or a zero
        query) score ``0.0``.
    """
    if matrix.shape[0] == 0:
        return np.zeros((0,), dtype=np.float64)
    if matrix.shape[1] != query.shape[0]:
        raise ValueError(f"Vector length mismatch: {query.shape[0]} != {matrix.shape[1]}")

    qn = float(np.linalg.norm(query))
    if qn == 0.0:
        return np.zeros((matrix.shape[0],), dtype=np.float64)

    row_norms = np.linalg.norm(matrix, axis=1)
    dots = matrix @ query
    denom = row_norms * qn
    scores = np.zeros_like(dots)
    np.divide(dots, denom, out=scores, where=denom > 0)
    return scores
