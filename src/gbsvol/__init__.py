# gbsvol: generalized Black-Scholes pricing and implied volatility
# Public API

from .core import (
    OptionSide, CALL, PUT,
    MODELS, BLACK_SCHOLES_1973, MERTON_1973, BLACK_1976, ASAY_1982,
    GARMAN_KOHLHAGEN_1983, cost_of_carry, model_rate,
)
from .normal import density, cumulative_probability
from .black_scholes import price, vega
from .implied_vol import implied_volatility, manaster_koehler_seed
from .config import SolverSettings, DEFAULT_SETTINGS
from .exceptions import GBSVolError, NonConvergenceError, DistributionError

__all__ = [
    # Data model
    "OptionSide", "CALL", "PUT",
    # Cost-of-carry sub-models
    "MODELS", "BLACK_SCHOLES_1973", "MERTON_1973", "BLACK_1976", "ASAY_1982",
    "GARMAN_KOHLHAGEN_1983", "cost_of_carry", "model_rate",
    # Normal distribution
    "density", "cumulative_probability",
    # Pricing
    "price", "vega",
    # Implied vol
    "implied_volatility", "manaster_koehler_seed",
    # Configuration
    "SolverSettings", "DEFAULT_SETTINGS",
    # Errors
    "GBSVolError", "NonConvergenceError", "DistributionError",
]

__version__ = "0.1.0"
