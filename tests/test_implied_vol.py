"""Tests for the Newton-Raphson implied-vol solver."""

import logging
import math
import pytest
from gbsvol.core import CALL, PUT
from gbsvol.black_scholes import price
from gbsvol.implied_vol import implied_volatility, manaster_koehler_seed
from gbsvol.exceptions import NonConvergenceError
from gbsvol.config import DEFAULT_SETTINGS


def test_known_put_value():
    vol = implied_volatility(PUT, 65, 66, 0.5, 0.1, 0.1, 3, 1e-12)
    assert abs(vol - 0.2229) < 1e-4


def test_seed():
    expected = math.sqrt(abs(math.log(65 / 66) + 0.1 * 0.5) * 2 / 0.5)
    assert manaster_koehler_seed(65, 66, 0.5, 0.1) == pytest.approx(expected, rel=1e-15)


# ---------------------------------------------------------------------------
# price -> implied vol round trip
# ---------------------------------------------------------------------------
class TestRoundTrip:
    @pytest.mark.parametrize("kind, s, x, t, r, b, v", [
        (CALL, 100, 100, 1.0, 0.05, 0.05, 0.20),
        (PUT, 100, 110, 0.5, 0.03, 0.03, 0.25),
        (CALL, 60, 65, 0.25, 0.08, 0.08, 0.30),
        (PUT, 65, 66, 0.5, 0.10, 0.10, 0.2229),
        (CALL, 100, 90, 2.0, 0.04, 0.04, 0.45),
        (CALL, 100, 95, 0.5, 0.10, 0.05, 0.20),   # Merton, q = 5%
        (PUT, 19, 19, 0.75, 0.10, 0.0, 0.28),     # Black 76
    ])
    def test_recovers_vol(self, kind, s, x, t, r, b, v):
        cm = price(kind, s, x, t, r, b, v)
        vol = implied_volatility(kind, s, x, t, r, b, cm, 1e-10)
        assert abs(vol - v) < 1e-6
        assert abs(price(kind, s, x, t, r, b, vol) - cm) < 1e-10

    def test_string_kind(self):
        cm = price(CALL, 100, 100, 1.0, 0.05, 0.05, 0.2)
        assert implied_volatility("call", 100, 100, 1.0, 0.05, 0.05, cm, 1e-10) == pytest.approx(0.2, abs=1e-6)

    def test_default_epsilon(self):
        cm = price(PUT, 100, 110, 0.5, 0.03, 0.03, 0.25)
        assert implied_volatility(PUT, 100, 110, 0.5, 0.03, 0.03, cm) == pytest.approx(0.25, abs=1e-6)


# ---------------------------------------------------------------------------
# Failure modes
# ---------------------------------------------------------------------------
class TestNonConvergence:
    def test_put_above_discounted_strike(self):
        # A put is worth at most x * exp(-r t) ~= 62.78 here
        with pytest.raises(NonConvergenceError) as exc:
            implied_volatility(PUT, 65, 66, 0.5, 0.1, 0.1, 70.0, 1e-12)
        assert exc.value.iterations > 0
        assert not exc.value.error < 1e-12

    def test_call_above_underlying(self):
        with pytest.raises(NonConvergenceError):
            implied_volatility(CALL, 100, 100, 1.0, 0.05, 0.05, 150.0, 1e-8)

    def test_stops_when_error_grows(self):
        # Below the discounted intrinsic floor: Newton overshoots and the
        # error gets worse at a finite vol instead of reaching NaN
        with pytest.raises(NonConvergenceError) as exc:
            implied_volatility(CALL, 100, 100, 1.0, 0.05, 0.05, 0.001, 1e-8)
        assert math.isfinite(exc.value.error)
        assert exc.value.error >= 1e-8
        assert 0 < exc.value.iterations < DEFAULT_SETTINGS.max_iter

    def test_degenerate_seed(self):
        # ln(s/x) + r t = 0 gives a zero seed and a NaN price
        with pytest.raises(NonConvergenceError) as exc:
            implied_volatility(CALL, 100, 100, 1.0, 0.0, 0.0, 5.0, 1e-8)
        assert exc.value.iterations == 0
        assert exc.value.volatility == 0.0
        assert math.isnan(exc.value.error)

    def test_iteration_ceiling(self):
        cm = price(CALL, 100, 100, 1.0, 0.05, 0.05, 0.2)
        with pytest.raises(NonConvergenceError) as exc:
            implied_volatility(CALL, 100, 100, 1.0, 0.05, 0.05, cm, 1e-12, max_iter=1)
        assert exc.value.iterations == 1

    def test_is_arithmetic_error(self):
        assert issubclass(NonConvergenceError, ArithmeticError)


class TestArguments:
    def test_invalid_kind(self):
        with pytest.raises(ValueError):
            implied_volatility("straddle", 65, 66, 0.5, 0.1, 0.1, 3, 1e-12)

    @pytest.mark.parametrize("epsilon", [0.0, -1e-8])
    def test_non_positive_epsilon(self, epsilon):
        with pytest.raises(ValueError):
            implied_volatility(PUT, 65, 66, 0.5, 0.1, 0.1, 3, epsilon)

    def test_non_positive_max_iter(self):
        with pytest.raises(ValueError):
            implied_volatility(PUT, 65, 66, 0.5, 0.1, 0.1, 3, 1e-12, max_iter=0)


def test_logs_convergence(caplog):
    with caplog.at_level(logging.DEBUG, logger="gbsvol.implied_vol"):
        implied_volatility(PUT, 65, 66, 0.5, 0.1, 0.1, 3, 1e-12)
    assert any("converged" in rec.getMessage() for rec in caplog.records)
