import argparse
import logging
import sys

from .core import CALL, MODELS, as_side, cost_of_carry, model_rate
from .black_scholes import price, vega
from .implied_vol import implied_volatility
from .config import DEFAULT_SETTINGS
from .exceptions import NonConvergenceError


def _kind(s: str):
    try:
        return as_side(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def add_market(parser: argparse.ArgumentParser):
    parser.add_argument("--s", type=float, required=True, help="underlying price")
    parser.add_argument("--x", type=float, required=True, help="strike")
    parser.add_argument("--t", type=float, required=True, help="years")
    parser.add_argument("--r", type=float, required=True, help="cont. risk-free")
    carry = parser.add_mutually_exclusive_group(required=True)
    carry.add_argument("--b", type=float, help="cost of carry")
    carry.add_argument("--model", choices=MODELS, help="derive b (and r) from a sub-model")
    parser.add_argument("--q", type=float, help="cont. dividend yield (with --model merton_1973)")
    parser.add_argument("--rf", type=float, help="foreign rate (with --model garman_kohlhagen_1983)")


def _rate_carry(args):
    """Return (r, b) as fed to the generalized formula."""
    if args.model is None:
        return args.r, args.b
    return model_rate(args.model, args.r), cost_of_carry(args.model, args.r, args.q or 0.0, args.rf or 0.0)


def cmd_price(args):
    r, b = _rate_carry(args)
    print(f"{price(args.kind, args.s, args.x, args.t, r, b, args.vol):.10f}")


def cmd_vega(args):
    r, b = _rate_carry(args)
    print(f"{vega(args.s, args.x, args.t, r, b, args.vol):.10f}")


def cmd_iv(args):
    r, b = _rate_carry(args)
    try:
        vol = implied_volatility(args.kind, args.s, args.x, args.t, r, b, args.cm,
                                 args.epsilon, max_iter=args.max_iter)
    except NonConvergenceError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"{vol:.10f}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gbsvol",
        description="Generalized Black-Scholes pricing and implied volatility",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="log solver iterations")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Price
    p_px = sub.add_parser("price", help="generalized Black-Scholes price")
    add_market(p_px)
    p_px.add_argument("--vol", type=float, required=True, help="volatility")
    p_px.add_argument("--kind", type=_kind, default=CALL, help="call|put")
    p_px.set_defaults(func=cmd_price)

    # Vega
    p_vg = sub.add_parser("vega", help="dPrice/dSigma")
    add_market(p_vg)
    p_vg.add_argument("--vol", type=float, required=True, help="volatility")
    p_vg.set_defaults(func=cmd_vega)

    # Implied vol (Newton-Raphson)
    p_iv = sub.add_parser("iv", help="implied volatility from a market price")
    add_market(p_iv)
    p_iv.add_argument("--cm", type=float, required=True, help="market price")
    p_iv.add_argument("--kind", type=_kind, default=CALL, help="call|put")
    p_iv.add_argument("--epsilon", type=float, default=DEFAULT_SETTINGS.epsilon)
    p_iv.add_argument("--max-iter", dest="max_iter", type=int,
                      default=DEFAULT_SETTINGS.max_iter)
    p_iv.set_defaults(func=cmd_iv)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.model is None and (args.q is not None or args.rf is not None):
        parser.error("--q and --rf only apply with --model")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
