"""Log utility over consumption.

U(c) = ln(c)    for c > 0
U(c) = NEG_INF  for c ≤ 0

Properties:
- U is total: infeasible consumption maps to a large negative sentinel
  instead of raising or producing nan, so a generic optimizer is steered
  back into the feasible region.
- U(0) = NEG_INF < U(c) for every c > 0.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

NEG_INF = -1e30   # Sentinel for infeasible consumption (c ≤ 0)


def _on_positive(
    c: np.ndarray | float,
    fn: Callable[[np.ndarray], np.ndarray],
    fill: float,
) -> np.ndarray | float:
    """Apply *fn* where c > 0 and *fill* elsewhere, preserving scalar input."""
    arr = np.asarray(c, dtype=float)
    out = np.where(arr > 0, fn(np.where(arr > 0, arr, 1.0)), fill)
    return float(out) if out.ndim == 0 else out


def log_utility(c: np.ndarray | float) -> np.ndarray | float:
    """Compute log utility with the infeasibility sentinel.

    Parameters
    ----------
    c : consumption level(s), scalar or array

    Returns
    -------
    U(c), with NEG_INF wherever c ≤ 0
    """
    return _on_positive(c, np.log, NEG_INF)


def log_marginal_utility(c: np.ndarray | float) -> np.ndarray | float:
    """U'(c) = 1/c.  Returns 0 for c ≤ 0."""
    return _on_positive(c, np.reciprocal, 0.0)
