# normal.py
# Standard normal density and cumulative distribution for scalar pricing.

from __future__ import annotations
import math
import numpy as np
from scipy.stats import norm

from .exceptions import DistributionError

_N = norm.cdf   # erf/erfc-based ndtr, full double precision over the real line

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def density(x: float) -> float:
    """Standard normal pdf ``exp(-x^2/2) / sqrt(2*pi)``."""
    return _INV_SQRT_2PI * float(np.exp(-0.5 * x * x))


def cumulative_probability(x: float) -> float:
    """Standard normal cdf.

    Raises
    ------
    DistributionError
        If the underlying routine returns NaN for a non-NaN argument.
    """
    p = float(_N(x))
    if math.isnan(p) and not math.isnan(x):
        raise DistributionError(f"normal cdf evaluation failed at x={x!r}")
    return p
