"""Forward simulation of capital under the solved VFI policy.

Starting from k_0, iterates k_{t+1} = g(k_t) where g is the linearly
interpolated policy table.  Capital is clamped to the grid at every step.
"""

from __future__ import annotations

import logging

import numpy as np
from scipy.interpolate import interp1d

from .solver import VFIResult

logger = logging.getLogger(__name__)


def policy_interpolant(result: VFIResult) -> interp1d:
    """Linear interpolant of the policy table, clamped outside the grid."""
    return interp1d(
        result.grid,
        result.policy,
        kind="linear",
        bounds_error=False,
        fill_value=(result.policy[0], result.policy[-1]),
        assume_sorted=True,
    )


def simulate_capital_path(
    result: VFIResult,
    k0: float,
    n_periods: int,
) -> np.ndarray:
    """Simulate the capital transition path under the optimal policy.

    Parameters
    ----------
    result : solved VFIResult
    k0 : initial capital stock (> 0)
    n_periods : number of transitions to simulate

    Returns
    -------
    path : (n_periods + 1,) capital array
        path[0] = k0 clamped to the grid, path[t] = capital at start of period t
    """
    if k0 <= 0:
        raise ValueError(f"k0 must be > 0, got {k0}")
    if n_periods < 0:
        raise ValueError(f"n_periods must be >= 0, got {n_periods}")

    k_lo, k_hi = float(result.grid[0]), float(result.grid[-1])
    g = policy_interpolant(result)

    path = np.empty(n_periods + 1)
    path[0] = np.clip(k0, k_lo, k_hi)
    for t in range(n_periods):
        path[t + 1] = np.clip(float(g(path[t])), k_lo, k_hi)

    logger.info(
        "Transition path: k0=%.4f -> k_T=%.4f over %d periods",
        path[0], path[-1], n_periods,
    )
    return path
