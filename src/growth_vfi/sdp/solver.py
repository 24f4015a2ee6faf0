"""Value function iteration: fixed-point loop over the Bellman operator.

Starting from an initial guess v_0, iterate
    v_{n+1} = T v_n
until ‖v_{n+1} - v_n‖_∞ < tol (CONVERGED) or the iteration cap is hit
(MAX_ITER_REACHED).  Non-convergence is reported through the result's
status, never raised.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import NamedTuple

import numpy as np

from ..models.params import GrowthParams, SolverConfig
from ..models.production import cobb_douglas_output
from .bellman import bellman_operator
from .state_space import build_capital_grid

logger = logging.getLogger(__name__)


class SolverStatus(enum.Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    MAX_ITER_REACHED = "max_iter_reached"


class VFIResult(NamedTuple):
    """Container for the output of value function iteration."""
    grid: np.ndarray          # (n_k,) capital grid
    value: np.ndarray         # (n_k,) final value function
    policy: np.ndarray        # (n_k,) next-period capital at each node
    status: SolverStatus
    iterations: int           # Bellman applications performed
    distance: float           # sup-norm distance at the last iteration
    history: np.ndarray       # (iterations,) sup-norm distance per iteration

    @property
    def converged(self) -> bool:
        return self.status is SolverStatus.CONVERGED


def sup_norm(a: np.ndarray, b: np.ndarray) -> float:
    """Chebyshev distance max_i |a_i - b_i|."""
    return float(np.max(np.abs(np.asarray(a) - np.asarray(b))))


def value_function_iteration(
    params: GrowthParams,
    config: SolverConfig,
    v0: np.ndarray | None = None,
) -> VFIResult:
    """Solve the growth model by iterating the Bellman operator to a fixed point.

    Parameters
    ----------
    params : GrowthParams
    config : SolverConfig (grid, tolerance, iteration cap, trace frequency)
    v0 : initial guess on the grid; zeros if omitted

    Returns
    -------
    VFIResult
    """
    grid = build_capital_grid(config.k_min, config.k_max, config.n_grid)

    if v0 is None:
        v = np.zeros_like(grid)
    else:
        v = np.array(v0, dtype=float)
        if v.shape != grid.shape:
            raise ValueError(
                f"Initial guess shape {v.shape} does not match grid shape {grid.shape}"
            )

    n_infeasible = int(np.sum(cobb_douglas_output(grid, params.alpha) <= grid[0]))
    if n_infeasible:
        logger.warning(
            "%d grid node(s) produce output below k_min=%.4g; "
            "consumption there is infeasible for every choice.",
            n_infeasible,
            grid[0],
        )

    logger.info(
        "Starting VFI (n_k=%d, k=[%.4g, %.4g], tol=%.1e, max_iter=%d)...",
        config.n_grid, config.k_min, config.k_max, config.tol, config.max_iter,
    )

    status = SolverStatus.RUNNING
    history: list[float] = []
    policy = np.zeros_like(grid)
    distance = np.inf
    t0 = time.time()

    while status is SolverStatus.RUNNING:
        v_new, policy = bellman_operator(
            v, grid, params,
            interp_kind=config.interp_kind,
            xatol=config.xatol,
        )
        distance = sup_norm(v_new, v)
        history.append(distance)
        n_iter = len(history)

        level = logging.INFO if n_iter % config.report_every == 0 else logging.DEBUG
        logger.log(level, "VFI iter=%4d | sup-norm=%.3e", n_iter, distance)

        v = v_new
        if distance < config.tol:
            status = SolverStatus.CONVERGED
        elif n_iter >= config.max_iter:
            status = SolverStatus.MAX_ITER_REACHED

    elapsed = time.time() - t0
    if status is SolverStatus.CONVERGED:
        logger.info(
            "VFI converged in %d iterations (sup-norm=%.3e, %.1fs).",
            len(history), distance, elapsed,
        )
    else:
        logger.warning(
            "VFI hit max_iter=%d without converging (sup-norm=%.3e > tol=%.1e, %.1fs).",
            config.max_iter, distance, config.tol, elapsed,
        )

    return VFIResult(
        grid=grid,
        value=v,
        policy=policy,
        status=status,
        iterations=len(history),
        distance=distance,
        history=np.array(history),
    )
