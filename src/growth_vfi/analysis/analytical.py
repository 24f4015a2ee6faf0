"""Closed-form solution of the log / Cobb-Douglas / full-depreciation model.

With u(c) = ln c, f(k) = k^α and δ = 1 the value function is log-linear:

    v(k)  = a + b ln k
    b     = α / (1 - αβ)
    a     = [ln(1 - αβ) + αβ/(1 - αβ) · ln(αβ)] / (1 - β)
    g(k)  = αβ k^α                 (savings rate αβ out of output)
    k*    = (αβ)^(1/(1-α))         (steady state)

Only valid for this exact parameterisation; used to validate VFI output.
"""

from __future__ import annotations

import numpy as np

from ..models.params import GrowthParams


def analytical_coefficients(params: GrowthParams) -> tuple[float, float]:
    """Return (a, b) in v(k) = a + b ln k."""
    ab = params.alpha * params.beta
    b = params.alpha / (1.0 - ab)
    a = (np.log(1.0 - ab) + ab / (1.0 - ab) * np.log(ab)) / (1.0 - params.beta)
    return float(a), float(b)


def analytical_value(k: np.ndarray | float, params: GrowthParams) -> np.ndarray | float:
    a, b = analytical_coefficients(params)
    if np.isscalar(k):
        return a + b * float(np.log(k))
    return a + b * np.log(np.asarray(k, dtype=float))


def analytical_policy(k: np.ndarray | float, params: GrowthParams) -> np.ndarray | float:
    ab = params.alpha * params.beta
    if np.isscalar(k):
        return ab * float(k) ** params.alpha
    return ab * np.asarray(k, dtype=float) ** params.alpha


def steady_state_capital(params: GrowthParams) -> float:
    """k* solving k = αβ k^α."""
    return float((params.alpha * params.beta) ** (1.0 / (1.0 - params.alpha)))
