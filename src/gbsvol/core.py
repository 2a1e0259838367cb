from __future__ import annotations
from enum import Enum


class OptionSide(str, Enum):
    """Closed call/put enumeration.

    Members compare equal to their string values, so ``"call"`` and
    ``"put"`` can be passed anywhere a side is expected and are coerced
    with ``OptionSide(kind)``.
    """
    CALL = "call"
    PUT = "put"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("c", "call"):
                return cls.CALL
            if key in ("p", "put"):
                return cls.PUT
        return None


CALL = OptionSide.CALL
PUT  = OptionSide.PUT


def as_side(kind) -> OptionSide:
    """Coerce ``kind`` to :class:`OptionSide`, raising ``ValueError`` otherwise."""
    try:
        return OptionSide(kind)
    except ValueError:
        raise ValueError(f"kind must be 'call' or 'put', got {kind!r}") from None


# ---------------------------------------------------------------------------
# Cost-of-carry sub-models (Haug, "Complete Guide to Option Pricing Formulas")
# ---------------------------------------------------------------------------
BLACK_SCHOLES_1973    = "black_scholes_1973"      # stock, no dividend:     b = r
MERTON_1973           = "merton_1973"             # continuous yield q:     b = r - q
BLACK_1976            = "black_1976"              # futures:                b = 0
ASAY_1982             = "asay_1982"               # margined futures:       b = 0, r = 0
GARMAN_KOHLHAGEN_1983 = "garman_kohlhagen_1983"   # FX, foreign rate rf:    b = r - rf

MODELS = (
    BLACK_SCHOLES_1973, MERTON_1973, BLACK_1976, ASAY_1982, GARMAN_KOHLHAGEN_1983,
)


def _check_model(model: str) -> str:
    if model not in MODELS:
        raise ValueError(f"model must be one of {MODELS}, got {model!r}")
    return model


def cost_of_carry(model: str, r: float, q: float = 0.0, rf: float = 0.0) -> float:
    """Cost-of-carry ``b`` selecting one of the classical sub-models.

    Parameters
    ----------
    model : str
        One of :data:`MODELS`.
    r : float
        Domestic risk-free rate.
    q : float
        Continuous dividend yield (``merton_1973`` only).
    rf : float
        Foreign risk-free rate (``garman_kohlhagen_1983`` only).
    """
    model = _check_model(model)
    if model == BLACK_SCHOLES_1973:
        return r
    if model == MERTON_1973:
        return r - q
    if model == GARMAN_KOHLHAGEN_1983:
        return r - rf
    return 0.0


def model_rate(model: str, r: float) -> float:
    """Discount rate the sub-model feeds into the generalized formula."""
    if _check_model(model) == ASAY_1982:
        return 0.0
    return r
