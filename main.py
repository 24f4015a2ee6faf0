#!/usr/bin/env python3
"""Growth-model VFI: CLI entry point.

Usage
-----
    python main.py [--config config/config.yaml] [--fast]

Options
-------
--config   Path to config YAML (default: config/config.yaml)
--fast     Reduce grid size and tolerance for a quick run (overrides config)
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np
import yaml

# ── Logging setup ──────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("growth_vfi.main")


# ── Project root on sys.path ────────────────────────────────────────────────────
ROOT = Path(__file__).parent
sys.path.insert(0, str(ROOT / "src"))

from growth_vfi.models.params import GrowthParams, SolverConfig, params_from_config
from growth_vfi.sdp.solver import value_function_iteration
from growth_vfi.sdp.policy import simulate_capital_path
from growth_vfi.analysis.accuracy import (
    compare_with_analytical,
    euler_equation_errors,
    max_errors,
    steady_state_node,
)

FAST_OVERRIDES = {"n_grid": 200, "tol": 1e-4}


# ── Helpers ────────────────────────────────────────────────────────────────────

def load_config(path: str | Path) -> dict:
    """Read the YAML config; an absent or empty file means all defaults.

    Raises
    ------
    yaml.YAMLError : the file is not valid YAML
    ValueError : the document is not a mapping
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Config file %s not found. Using defaults.", path)
        return {}
    with open(path) as f:
        cfg = yaml.safe_load(f)
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{path} must hold a mapping, got {type(cfg).__name__}")
    return cfg


def build_settings(
    cfg: dict,
    fast: bool = False,
) -> tuple[GrowthParams, SolverConfig, dict]:
    """Turn a loaded config into solver inputs, applying --fast overrides.

    Empty sections (``solver:`` with nothing under it) count as absent.
    """
    sections = {}
    for name in ("model", "solver", "analysis"):
        section = cfg.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"'{name}' section must be a mapping")
        sections[name] = dict(section)
    if fast:
        sections["solver"].update(FAST_OVERRIDES)
        logger.info("Fast mode: reduced grid/tolerance for quick run.")
    params, config = params_from_config(sections)
    return params, config, sections["analysis"]


def _finite_mean(values: np.ndarray) -> float:
    finite = values[np.isfinite(values)]
    return float(finite.mean()) if finite.size else float("nan")


# ── Main pipeline ──────────────────────────────────────────────────────────────

def run(config_path: str, fast: bool = False) -> None:
    t_start = time.time()

    # 1. Load config ────────────────────────────────────────────────────────────
    try:
        cfg = load_config(config_path)
        params, config, analysis_cfg = build_settings(cfg, fast=fast)
    except (yaml.YAMLError, ValueError) as exc:
        logger.error("Invalid config %s: %s", config_path, exc)
        sys.exit(1)

    # 2. Value function iteration ──────────────────────────────────────────────
    result = value_function_iteration(params, config)
    logger.info("Solver status: %s after %d iterations", result.status.value, result.iterations)

    # 3. Accuracy vs closed form ────────────────────────────────────────────────
    window = analysis_cfg.get("error_window") or [None, None]
    table = compare_with_analytical(result, params, k_lo=window[0], k_hi=window[1])
    errors = max_errors(table)
    euler = euler_equation_errors(result, params)
    at_ss = steady_state_node(result, params)

    # 4. Transition path ────────────────────────────────────────────────────────
    k0 = analysis_cfg.get("k0_fraction", 0.5) * at_ss["k_star"]
    n_periods = analysis_cfg.get("transition_periods", 30)
    path = simulate_capital_path(result, k0, n_periods)

    print(f"\n{'='*60}")
    print(f"  Status:                {result.status.value}")
    print(f"  Iterations:            {result.iterations}")
    print(f"  Final sup-norm:        {result.distance:.3e}")
    print(f"  Max value error:       {errors['value']:.3e}")
    print(f"  Max policy error:      {errors['policy']:.3e}")
    print(f"  Mean log10 Euler err:  {_finite_mean(euler):.2f}")
    print(f"  Steady state k*:       {at_ss['k_star']:.4f}")
    print(f"  v at node {at_ss['k']:.4f}:    {at_ss['value']:.4f}  (exact {at_ss['value_exact']:.4f})")
    print(f"  k after {n_periods:>3d} periods:  {path[-1]:.4f}  (from {path[0]:.4f})")
    print(f"{'='*60}\n")

    logger.info("All done in %.1fs.", time.time() - t_start)


# ── CLI ─────────────────────────────────────────────────────────────────────────

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Deterministic growth model via value function iteration"
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to YAML config file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Reduce grid/tolerance for quick debugging run",
    )
    args = parser.parse_args()
    run(config_path=args.config, fast=args.fast)


if __name__ == "__main__":
    main()
