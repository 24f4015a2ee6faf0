"""Shared fixtures for growth-model VFI tests."""

from __future__ import annotations

import pytest

from growth_vfi.models.params import GrowthParams, SolverConfig
from growth_vfi.sdp.solver import value_function_iteration


def make_test_config(**overrides) -> SolverConfig:
    """Return a reduced SolverConfig that solves in a few seconds."""
    defaults = dict(
        k_min=0.05,
        k_max=1.0,
        n_grid=60,
        tol=1e-4,
        max_iter=500,
        report_every=50,
    )
    defaults.update(overrides)
    return SolverConfig(**defaults)


@pytest.fixture(scope="session")
def params() -> GrowthParams:
    return GrowthParams(alpha=0.4, beta=0.96)


@pytest.fixture(scope="session")
def small_config() -> SolverConfig:
    return make_test_config()


@pytest.fixture(scope="session")
def solved(params, small_config):
    """Converged solution on the reduced grid, starting from a zero guess."""
    return value_function_iteration(params, small_config)
