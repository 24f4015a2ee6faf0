"""Model parameters and solver settings.

Both containers are frozen dataclasses passed explicitly into the solver,
so a solve depends on nothing but its arguments.

Example
-------
    >>> params, config = params_from_config({"model": {"alpha": 0.3}})
    >>> params.alpha, config.n_grid
    (0.3, 1000)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrowthParams:
    """Economic parameters of the deterministic growth model.

    Attributes
    ----------
    alpha : production exponent, must be in (0, 1)
    beta : discount factor, must be in (0, 1)
    """

    alpha: float = 0.4
    beta: float = 0.96

    def __post_init__(self) -> None:
        if not (0 < self.alpha < 1):
            raise ValueError(f"alpha must be in (0, 1), got {self.alpha}")
        if not (0 < self.beta < 1):
            raise ValueError(f"beta must be in (0, 1), got {self.beta}")


@dataclass(frozen=True)
class SolverConfig:
    """Grid and convergence settings for value function iteration.

    Attributes
    ----------
    k_min, k_max : capital grid bounds (0 < k_min < k_max)
    n_grid : number of grid nodes
    tol : sup-norm convergence tolerance
    max_iter : iteration cap
    interp_kind : ``interp1d`` kind used for the continuation value
    report_every : iterations between INFO-level trace lines
    xatol : absolute tolerance of the bounded scalar optimizer
    """

    k_min: float = 0.001
    k_max: float = 90.0
    n_grid: int = 1000
    tol: float = 1e-6
    max_iter: int = 600
    interp_kind: str = "linear"
    report_every: int = 1
    xatol: float = 1e-6

    def __post_init__(self) -> None:
        if self.k_min <= 0:
            raise ValueError(f"k_min must be > 0, got {self.k_min}")
        if self.k_max <= self.k_min:
            raise ValueError(
                f"k_max must exceed k_min, got k_min={self.k_min}, k_max={self.k_max}"
            )
        if self.n_grid < 2:
            raise ValueError(f"n_grid must be >= 2, got {self.n_grid}")
        if self.tol <= 0:
            raise ValueError(f"tol must be > 0, got {self.tol}")
        if self.max_iter < 1:
            raise ValueError(f"max_iter must be >= 1, got {self.max_iter}")
        if self.report_every < 1:
            raise ValueError(f"report_every must be >= 1, got {self.report_every}")
        if self.xatol <= 0:
            raise ValueError(f"xatol must be > 0, got {self.xatol}")


def _coerce(value: Any, type_name: str, key: str, section: str) -> Any:
    """Cast a raw config value to its field type.

    PyYAML reads exponent literals without a dot (``1e-6``) as strings.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{section}.{key} must be {type_name}, got {value!r}")
    if type_name == "str":
        return str(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{section}.{key} must be {type_name}, got {value!r}") from None
    if type_name == "int":
        if not number.is_integer():
            raise ValueError(f"{section}.{key} must be an integer, got {value!r}")
        return int(number)
    return number


def _filtered(cls, section: dict[str, Any] | None, name: str) -> dict[str, Any]:
    section = section or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' section must be a mapping, got {section!r}")
    types = {f.name: f.type for f in fields(cls)}
    unknown = sorted(set(section) - set(types))
    if unknown:
        logger.warning("Ignoring unknown keys in '%s' section: %s", name, unknown)
    return {
        k: _coerce(v, types[k], k, name)
        for k, v in section.items()
        if k in types
    }


def params_from_config(cfg: dict[str, Any] | None) -> tuple[GrowthParams, SolverConfig]:
    """Build parameter objects from the ``model`` and ``solver`` config sections.

    Missing sections or keys fall back to the dataclass defaults.
    """
    cfg = cfg or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config must be a mapping, got {type(cfg).__name__}")
    params = GrowthParams(**_filtered(GrowthParams, cfg.get("model"), "model"))
    config = SolverConfig(**_filtered(SolverConfig, cfg.get("solver"), "solver"))
    return params, config
