"""Cobb-Douglas production with full depreciation: y = f(k) = k^α."""

from __future__ import annotations

import numpy as np


def cobb_douglas_output(k: np.ndarray | float, alpha: float) -> np.ndarray | float:
    """Output from capital stock *k* with exponent *alpha* ∈ (0, 1)."""
    if np.isscalar(k):
        return float(k) ** alpha
    return np.asarray(k, dtype=float) ** alpha


def cobb_douglas_marginal_product(k: np.ndarray | float, alpha: float) -> np.ndarray | float:
    """f'(k) = α k^(α-1)."""
    if np.isscalar(k):
        return alpha * float(k) ** (alpha - 1.0)
    return alpha * np.asarray(k, dtype=float) ** (alpha - 1.0)
