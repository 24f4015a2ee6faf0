"""Accuracy diagnostics for a VFI solution.

Two checks:
1. **Analytical comparison**: numerical v and g against the closed form,
   tabulated per grid node.
2. **Euler-equation errors**: unit-free residuals
       e(k) = 1 - β u'(c') f'(k') / u'(c)
   reported as log10 |e|, which do not need a closed form.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from ..models.params import GrowthParams
from ..models.production import cobb_douglas_marginal_product, cobb_douglas_output
from ..sdp.policy import policy_interpolant
from ..sdp.solver import VFIResult
from ..sdp.state_space import nearest_grid_index
from ..sdp.utility import log_marginal_utility
from .analytical import analytical_policy, analytical_value, steady_state_capital

logger = logging.getLogger(__name__)


def compare_with_analytical(
    result: VFIResult,
    params: GrowthParams,
    k_lo: float | None = None,
    k_hi: float | None = None,
) -> pd.DataFrame:
    """Tabulate numerical vs closed-form value and policy on the grid.

    Parameters
    ----------
    result : solved VFIResult
    params : parameters the result was solved with
    k_lo, k_hi : optional capital window; nodes outside it are dropped

    Returns
    -------
    DataFrame with columns k, value, value_exact, value_error,
    policy, policy_exact, policy_error (errors are absolute)
    """
    k = np.asarray(result.grid)
    df = pd.DataFrame({
        "k": k,
        "value": result.value,
        "value_exact": analytical_value(k, params),
        "policy": result.policy,
        "policy_exact": analytical_policy(k, params),
    })
    df["value_error"] = (df["value"] - df["value_exact"]).abs()
    df["policy_error"] = (df["policy"] - df["policy_exact"]).abs()

    mask = pd.Series(True, index=df.index)
    if k_lo is not None:
        mask &= df["k"] >= k_lo
    if k_hi is not None:
        mask &= df["k"] <= k_hi
    df = df.loc[mask].reset_index(drop=True)

    return df[[
        "k", "value", "value_exact", "value_error",
        "policy", "policy_exact", "policy_error",
    ]]


def max_errors(frame: pd.DataFrame) -> dict[str, float]:
    """Sup-norm value and policy errors from a comparison table."""
    errors = {
        "value": float(frame["value_error"].max()),
        "policy": float(frame["policy_error"].max()),
    }
    logger.info(
        "Max abs error vs closed form: value=%.3e, policy=%.3e",
        errors["value"], errors["policy"],
    )
    return errors


def euler_equation_errors(result: VFIResult, params: GrowthParams) -> np.ndarray:
    """log10 Euler-equation residuals at interior grid nodes.

    Nodes where current or next-period consumption is non-positive give nan.

    Returns
    -------
    (n_k - 2,) array aligned with result.grid[1:-1]
    """
    k = np.asarray(result.grid)[1:-1]
    k_next = np.asarray(result.policy)[1:-1]
    k_next2 = policy_interpolant(result)(k_next)

    c = cobb_douglas_output(k, params.alpha) - k_next
    c_next = cobb_douglas_output(k_next, params.alpha) - k_next2

    feasible = (c > 0) & (c_next > 0)
    errors = np.full_like(k, np.nan)
    ratio = log_marginal_utility(c_next[feasible]) / log_marginal_utility(c[feasible])
    residual = 1.0 - params.beta * ratio * cobb_douglas_marginal_product(
        k_next[feasible], params.alpha
    )
    errors[feasible] = np.log10(np.maximum(np.abs(residual), np.finfo(float).tiny))

    if np.any(feasible):
        logger.info(
            "Euler errors: mean log10=%.2f, max log10=%.2f",
            np.nanmean(errors), np.nanmax(errors),
        )
    return errors


def steady_state_node(result: VFIResult, params: GrowthParams) -> dict[str, float]:
    """Numerical vs closed-form solution at the grid node nearest k*.

    Returns
    -------
    dict with k_star, k (the node), value, value_exact, policy, policy_exact
    """
    k_star = steady_state_capital(params)
    i = nearest_grid_index(result.grid, k_star)
    k = float(result.grid[i])
    return {
        "k_star": k_star,
        "k": k,
        "value": float(result.value[i]),
        "value_exact": analytical_value(k, params),
        "policy": float(result.policy[i]),
        "policy_exact": analytical_policy(k, params),
    }
