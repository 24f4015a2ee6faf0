"""Unit tests for analytical: closed-form value, policy and steady state."""

from __future__ import annotations

import numpy as np
import pytest

from growth_vfi.analysis.analytical import (
    analytical_coefficients,
    analytical_policy,
    analytical_value,
    steady_state_capital,
)
from growth_vfi.models.params import GrowthParams
from growth_vfi.models.production import cobb_douglas_output


@pytest.fixture
def params():
    return GrowthParams(alpha=0.4, beta=0.96)


class TestClosedForm:

    def test_coefficients(self, params):
        a, b = analytical_coefficients(params)
        ab = 0.4 * 0.96
        assert b == pytest.approx(0.4 / (1 - ab))
        expected_a = (np.log(1 - ab) + ab / (1 - ab) * np.log(ab)) / (1 - 0.96)
        assert a == pytest.approx(expected_a)

    def test_constant_term_contains_log_savings_share(self, params):
        """At α=0.4, β=0.96 the ln(1-αβ)/(1-β) term is only part of the intercept."""
        a, _ = analytical_coefficients(params)
        partial = np.log(1 - 0.384) / (1 - 0.96)
        assert a < partial

    def test_value_satisfies_bellman_equation(self, params):
        """v(k) = ln(f(k) - g(k)) + β v(g(k)) holds exactly for the closed form."""
        k = np.linspace(0.05, 5.0, 25)
        g = analytical_policy(k, params)
        c = cobb_douglas_output(k, params.alpha) - g
        rhs = np.log(c) + params.beta * analytical_value(g, params)
        np.testing.assert_allclose(analytical_value(k, params), rhs, rtol=1e-10)

    def test_scalar_inputs(self, params):
        assert isinstance(analytical_value(1.0, params), float)
        assert analytical_policy(1.0, params) == pytest.approx(0.384)

    def test_steady_state_is_fixed_point_of_policy(self, params):
        k_star = steady_state_capital(params)
        assert analytical_policy(k_star, params) == pytest.approx(k_star)
        assert k_star == pytest.approx(0.384 ** (1 / 0.6))
