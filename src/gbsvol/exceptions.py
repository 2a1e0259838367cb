"""Custom exceptions for gbsvol.

Bad arguments (unknown option side, unknown carry model, non-positive
tolerance) raise the builtin ``ValueError``.
"""


class GBSVolError(Exception):
    """Base exception for all gbsvol errors."""


class NonConvergenceError(GBSVolError, ArithmeticError):
    """Implied-vol iteration stopped improving before reaching tolerance.

    Attributes
    ----------
    volatility : float
        Last volatility iterate (may be NaN or infinite).
    error : float
        ``|cm - price(volatility)|`` at that iterate.
    iterations : int
        Newton steps taken.
    """

    def __init__(self, message: str, *, volatility: float = float("nan"),
                 error: float = float("nan"), iterations: int = 0):
        super().__init__(message)
        self.volatility = volatility
        self.error = error
        self.iterations = iterations


class DistributionError(GBSVolError, ArithmeticError):
    """Normal CDF evaluation failed internally. Not part of normal control flow."""
