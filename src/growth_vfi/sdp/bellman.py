"""Bellman operator: core VFI step.

The value function v(k) satisfies:
    v(k) = max_{k' ∈ [k_min, f(k)]} { u(f(k) - k') + β · v(k') }
where
    f(k) = k^α          (output, full depreciation)
    u(c) = ln(c)        (NEG_INF sentinel for c ≤ 0)

Implementation:
- Capital grid: uniform, shape (n_k,)
- Continuation value: interp1d of the current guess, clamped outside the grid
- One bounded scalar optimisation per grid node; the search interval's
  upper bound is f(k), so the resource constraint holds mechanically and
  the utility sentinel only matters for the endpoint k' = f(k)
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np
from scipy.interpolate import interp1d
from scipy.optimize import minimize_scalar

from ..models.params import GrowthParams
from ..models.production import cobb_douglas_output
from .utility import log_utility

logger = logging.getLogger(__name__)


def _interp_value(
    v: np.ndarray,
    grid: np.ndarray,
    kind: str = "linear",
) -> interp1d:
    """Return an interpolant for v defined on *grid*.

    Outside the grid, clamp to the boundary values.
    """
    return interp1d(
        grid,
        v,
        kind=kind,
        bounds_error=False,
        fill_value=(v[0], v[-1]),
        assume_sorted=True,
    )


def _maximise_node(
    y: float,
    k_lo: float,
    v_interp: Callable,
    beta: float,
    xatol: float,
) -> tuple[float, float]:
    """Solve max_{k' ∈ [k_lo, y]} u(y - k') + β v(k') for one grid node.

    Returns
    -------
    (k_next, value) at the maximiser
    """
    def neg_objective(k_next: float) -> float:
        return -(log_utility(y - k_next) + beta * float(v_interp(k_next)))

    k_hi = max(y, k_lo)
    if k_hi == k_lo:
        return k_lo, -neg_objective(k_lo)

    result = minimize_scalar(
        neg_objective,
        bounds=(k_lo, k_hi),
        method="bounded",
        options={"xatol": xatol},
    )
    if not result.success:
        logger.debug("Bounded search did not converge at y=%.6f: %s", y, result.message)

    # Brent's bounded method never evaluates the endpoints themselves
    best_k, best_neg = float(result.x), float(result.fun)
    for k_edge in (k_lo, k_hi):
        f_edge = neg_objective(k_edge)
        if f_edge < best_neg:
            best_k, best_neg = k_edge, f_edge
    return best_k, -best_neg


def bellman_operator(
    v: np.ndarray,            # (n_k,) current value-function guess
    grid: np.ndarray,         # (n_k,) capital grid
    params: GrowthParams,
    interp_kind: str = "linear",
    xatol: float = 1e-6,
) -> tuple[np.ndarray, np.ndarray]:
    """Apply the Bellman operator once.

    Parameters
    ----------
    v : current guess, aligned with *grid*
    grid : strictly increasing capital grid
    params : GrowthParams (alpha, beta)
    interp_kind : interpolation kind for the continuation value
    xatol : absolute tolerance of the bounded optimiser

    Returns
    -------
    Tv : (n_k,) image of *v* under the Bellman operator
    policy : (n_k,) maximising next-period capital; grid[0] ≤ policy ≤ f(k)
    """
    v = np.asarray(v, dtype=float)
    if v.shape != grid.shape:
        raise ValueError(
            f"Guess shape {v.shape} does not match grid shape {grid.shape}"
        )

    v_interp = _interp_value(v, grid, kind=interp_kind)
    output = cobb_douglas_output(grid, params.alpha)
    k_lo = float(grid[0])

    Tv = np.empty_like(v)
    policy = np.empty_like(v)
    for i, y in enumerate(output):
        policy[i], Tv[i] = _maximise_node(float(y), k_lo, v_interp, params.beta, xatol)
    return Tv, policy
