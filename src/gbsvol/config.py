"""Solver defaults. All tunable constants live here."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class SolverSettings:
    """Newton-Raphson implied-vol settings.

    Parameters
    ----------
    epsilon : float
        Absolute tolerance on ``|market price - model price|``.
    max_iter : int
        Hard ceiling on Newton steps. The non-improvement rule normally
        stops a diverging iteration well before this.
    """
    epsilon: float = 1e-8
    max_iter: int = 100

    def __post_init__(self):
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.max_iter <= 0:
            raise ValueError(f"max_iter must be positive, got {self.max_iter}")


DEFAULT_SETTINGS = SolverSettings()
