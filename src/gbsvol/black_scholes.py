# black_scholes.py
# Generalized Black-Scholes-Merton price and vega.
#
# The cost-of-carry b selects the sub-model (see core.cost_of_carry):
#   b = r        Black-Scholes 1973, stock without dividends
#   b = r - q    Merton 1973, continuous dividend yield q
#   b = 0        Black 1976 futures (r = 0 as well: Asay 1982)
#   b = r - rf   Garman-Kohlhagen 1983, currency options
#
# Arithmetic is done on numpy scalars so that t = 0 or v = 0 give inf/nan
# instead of raising ZeroDivisionError.

from __future__ import annotations
import numpy as np

from .core import OptionSide, CALL, as_side
from .normal import density, cumulative_probability as _N


def _d1(s, x, t, b, v):
    s, x, t, b, v = (np.float64(a) for a in (s, x, t, b, v))
    return (np.log(s / x) + (b + 0.5 * v * v) * t) / (v * np.sqrt(t))


def price(kind: OptionSide | str, s: float, x: float, t: float,
          r: float, b: float, v: float) -> float:
    """Generalized Black-Scholes value of a European call or put.

    Parameters
    ----------
    kind : OptionSide or str
        ``CALL`` / ``PUT`` (or ``"call"`` / ``"put"``).
    s : float
        Underlying price.
    x : float
        Strike.
    t : float
        Time to expiry in years.
    r : float
        Continuously-compounded risk-free rate.
    b : float
        Cost of carry.
    v : float
        Volatility.

    Raises
    ------
    ValueError
        If ``kind`` is neither call nor put.
    """
    kind = as_side(kind)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        d1 = _d1(s, x, t, b, v)
        d2 = d1 - np.float64(v) * np.sqrt(np.float64(t))
        carry = np.float64(s) * np.exp((np.float64(b) - r) * t)
        disc = np.float64(x) * np.exp(-np.float64(r) * t)
        if kind is CALL:
            px = carry * _N(d1) - disc * _N(d2)
        else:
            px = disc * _N(-d2) - carry * _N(-d1)
    return float(px)


def vega(s: float, x: float, t: float, r: float, b: float, v: float) -> float:
    """dPrice/dSigma (absolute units, not per 1%). Identical for calls and puts."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        d1 = _d1(s, x, t, b, v)
        vg = (np.float64(s) * np.exp((np.float64(b) - r) * t)
              * density(d1) * np.sqrt(np.float64(t)))
    return float(vg)
