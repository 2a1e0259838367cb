# implied_vol.py
# Newton-Raphson implied volatility for the generalized Black-Scholes model
# (Haug, "Complete Guide to Option Pricing Formulas").

from __future__ import annotations
import logging
import numpy as np

from .core import OptionSide, as_side
from .black_scholes import price, vega
from .config import SolverSettings, DEFAULT_SETTINGS
from .exceptions import NonConvergenceError

logger = logging.getLogger(__name__)


def manaster_koehler_seed(s: float, x: float, t: float, r: float) -> float:
    """Manaster-Koehler starting vol ``sqrt(|ln(s/x) + r*t| * 2 / t)``.

    This is the inflection point of price in volatility when ``b = r``,
    from which Newton-Raphson converges monotonically.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        s, x, t, r = (np.float64(a) for a in (s, x, t, r))
        return float(np.sqrt(np.abs(np.log(s / x) + r * t) * 2.0 / t))


def implied_volatility(
    kind: OptionSide | str, s: float, x: float, t: float, r: float, b: float,
    cm: float, epsilon: float | None = None,
    *, max_iter: int | None = None,
) -> float:
    """Volatility at which :func:`price` reproduces the market price ``cm``.

    Newton-Raphson on vega from the Manaster-Koehler seed. Iteration stops
    as soon as a step makes the pricing error worse, so a diverging or
    oscillating sequence terminates instead of looping.

    Parameters
    ----------
    kind : OptionSide or str
        ``CALL`` / ``PUT``.
    s, x, t, r, b : float
        Underlying, strike, expiry (years), risk-free rate, cost of carry.
    cm : float
        Observed market price.
    epsilon : float, optional
        Absolute price tolerance. Default ``DEFAULT_SETTINGS.epsilon``.
    max_iter : int, optional
        Ceiling on Newton steps. Default ``DEFAULT_SETTINGS.max_iter``.

    Returns
    -------
    float
        ``v`` with ``|price(kind, s, x, t, r, b, v) - cm| < epsilon``.

    Raises
    ------
    NonConvergenceError
        The error stopped improving, became NaN, or ``max_iter`` was hit.
    ValueError
        Bad ``kind``, ``epsilon`` or ``max_iter``.
    """
    kind = as_side(kind)
    settings = SolverSettings(
        epsilon=DEFAULT_SETTINGS.epsilon if epsilon is None else epsilon,
        max_iter=DEFAULT_SETTINGS.max_iter if max_iter is None else max_iter,
    )
    eps = settings.epsilon

    vi = manaster_koehler_seed(s, x, t, r)
    ci = price(kind, s, x, t, r, b, vi)
    vegai = vega(s, x, t, r, b, vi)
    min_diff = abs(cm - ci)

    n = 0
    while min_diff >= eps:
        if n >= settings.max_iter:
            logger.debug("implied vol: max_iter=%d reached, vol=%r err=%r",
                         settings.max_iter, vi, min_diff)
            raise NonConvergenceError(
                f"no convergence within {settings.max_iter} iterations "
                f"(vol={vi!r}, error={min_diff!r})",
                volatility=vi, error=min_diff, iterations=n,
            )

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            vi = float(np.float64(vi) - np.float64(ci - cm) / np.float64(vegai))
        ci = price(kind, s, x, t, r, b, vi)
        vegai = vega(s, x, t, r, b, vi)
        n += 1
        diff = abs(cm - ci)
        logger.debug("implied vol step %d: vol=%r price=%r vega=%r err=%r",
                     n, vi, ci, vegai, diff)

        # NaN compares False here too
        if not diff <= min_diff:
            min_diff = diff
            break
        min_diff = diff

    if min_diff < eps:
        logger.debug("implied vol converged in %d steps: %r", n, vi)
        return vi

    logger.debug("implied vol stopped improving after %d steps, vol=%r err=%r",
                 n, vi, min_diff)
    raise NonConvergenceError(
        f"implied volatility did not converge (vol={vi!r}, error={min_diff!r}, "
        f"iterations={n})",
        volatility=vi, error=min_diff, iterations=n,
    )
