"""Uniform capital grid for the VFI state space."""

from __future__ import annotations

import numpy as np


def build_capital_grid(
    k_min: float,
    k_max: float,
    n_points: int,
) -> np.ndarray:
    """Build a uniformly spaced capital grid with *n_points* nodes in [k_min, k_max].

    The grid is created once per solve and never mutated, so the returned
    array is flagged read-only.

    Parameters
    ----------
    k_min : lowest capital node (must be > 0)
    k_max : highest capital node (must exceed k_min)
    n_points : number of grid nodes (at least 2)

    Returns
    -------
    (n_points,) strictly increasing array of capital values
    """
    if k_min <= 0:
        raise ValueError(f"k_min must be > 0, got {k_min}")
    if k_max <= k_min:
        raise ValueError(f"k_max must exceed k_min, got [{k_min}, {k_max}]")
    if n_points < 2:
        raise ValueError(f"n_points must be >= 2, got {n_points}")
    grid = np.linspace(k_min, k_max, n_points)
    grid.setflags(write=False)
    return grid


def nearest_grid_index(grid: np.ndarray, value: float) -> int:
    """Index of the node of the increasing *grid* closest to *value*.

    Ties go to the lower node; values outside the grid map to an endpoint.
    """
    upper = int(np.clip(np.searchsorted(grid, value), 1, len(grid) - 1))
    lower = upper - 1
    return lower if value - grid[lower] <= grid[upper] - value else upper
