"""End-to-end VFI solves of the deterministic growth model."""

from __future__ import annotations

import numpy as np
import pytest

from growth_vfi.analysis.accuracy import compare_with_analytical, euler_equation_errors, max_errors
from growth_vfi.analysis.analytical import analytical_policy, steady_state_capital
from growth_vfi.models.params import GrowthParams, SolverConfig
from growth_vfi.models.production import cobb_douglas_output
from growth_vfi.sdp.bellman import bellman_operator
from growth_vfi.sdp.policy import simulate_capital_path
from growth_vfi.sdp.solver import SolverStatus, sup_norm, value_function_iteration


class TestReducedGridSolve:
    """Solve on 60 nodes over [0.05, 1.0] from a zero guess (shared fixture)."""

    def test_converges(self, solved, small_config):
        assert solved.status is SolverStatus.CONVERGED
        assert solved.distance < small_config.tol
        assert solved.iterations < small_config.max_iter

    def test_history_is_non_increasing(self, solved):
        """Contraction: successive sup-norm distances do not grow."""
        assert np.all(np.diff(solved.history) <= 1e-6)
        assert solved.history[-1] < solved.history[0]

    def test_distance_bounded_by_contraction_modulus(self, solved, params):
        """‖v_n - v_{n-1}‖ ≤ β^(n-1) ‖v_1 - v_0‖."""
        h = solved.history
        bound = params.beta ** np.arange(len(h)) * h[0]
        assert np.all(h <= bound + 1e-6)

    def test_policy_is_feasible(self, solved, params):
        y = cobb_douglas_output(solved.grid, params.alpha)
        assert np.all(solved.policy >= solved.grid[0])
        assert np.all(solved.policy <= y)

    def test_value_matches_closed_form(self, solved, params):
        errors = max_errors(compare_with_analytical(solved, params))
        assert errors["value"] < 0.1

    def test_policy_matches_closed_form(self, solved, params):
        h = solved.grid[1] - solved.grid[0]
        np.testing.assert_allclose(
            solved.policy, analytical_policy(solved.grid, params), atol=3 * h,
        )

    def test_bellman_is_idempotent_at_solution(self, solved, params, small_config):
        Tv, _ = bellman_operator(
            solved.value, solved.grid, params,
            interp_kind=small_config.interp_kind,
            xatol=small_config.xatol,
        )
        assert sup_norm(Tv, solved.value) < small_config.tol

    def test_value_increasing_and_concave(self, solved):
        assert np.all(np.diff(solved.value) > 0)
        assert np.all(np.diff(solved.value, 2) < 1e-5)

    def test_euler_errors_small(self, solved, params):
        errors = euler_equation_errors(solved, params)
        assert np.nanmedian(errors) < -0.5

    def test_transition_approaches_steady_state(self, solved, params):
        k_star = steady_state_capital(params)
        path = simulate_capital_path(solved, 0.5 * k_star + 0.05, 40)
        assert path[-1] == pytest.approx(k_star, abs=0.05)


@pytest.mark.slow
def test_reference_scenario_terminates():
    """1000 nodes on [0.001, 90], at most 600 iterations, tol 1e-6."""
    params = GrowthParams(alpha=0.4, beta=0.96)
    config = SolverConfig(
        k_min=0.001, k_max=90.0, n_grid=1000, tol=1e-6, max_iter=600, report_every=50,
    )
    result = value_function_iteration(params, config)

    assert result.status in (SolverStatus.CONVERGED, SolverStatus.MAX_ITER_REACHED)
    assert result.iterations <= 600
    if result.status is SolverStatus.CONVERGED:
        assert result.distance < 1e-6

    y = cobb_douglas_output(result.grid, params.alpha)
    assert np.all(result.policy >= result.grid[0])
    assert np.all(result.policy <= y)

    # Coarse spacing (~0.09) biases the level; check the relative error only
    table = compare_with_analytical(result, params, k_lo=0.05, k_hi=1.0)
    assert (table["value_error"] / table["value_exact"].abs()).max() < 0.05
