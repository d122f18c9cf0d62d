import argparse
import math
from typing import Tuple

from .config import settings
from .errors import ReactorModelError
from .reactors import CSTR, PFR, Feed, pfr_volume
from .train import build_train


def _positive(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    if not value > 0 or math.isinf(value):
        raise argparse.ArgumentTypeError(f"must be a positive number: {text!r}")
    return value


def _pfr_stage(text: str) -> Tuple[str, float]:
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError("PFR must be given as DIAMETER_CM,LENGTH_M")
    d, l = (_positive(x) for x in parts)
    return PFR, pfr_volume(d, l)


def _cstr_stage(text: str) -> Tuple[str, float]:
    return CSTR, _positive(text)


def run_cli(argv=None) -> None:
    parser = argparse.ArgumentParser(description="ReactorLab - PFR/CSTR train for ethyl acetate saponification")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_sim = sub.add_parser("simulate", help="Run a reactor train and print overall conversion")
    p_sim.add_argument("--fa", type=_positive, required=True, help="Ethyl acetate flow rate (L/h)")
    p_sim.add_argument("--fb", type=_positive, required=True, help="NaOH flow rate (L/h)")
    p_sim.add_argument("--na", type=_positive, default=1.0, help="Normality of ethyl acetate")
    p_sim.add_argument("--nb", type=_positive, default=1.0, help="Normality of NaOH")
    p_sim.add_argument("--T", type=float, required=True, help="Temperature (C)")
    p_sim.add_argument("--pfr", dest="stages", action="append", type=_pfr_stage, metavar="D,L",
                       help="Append a PFR (diameter cm, length m); repeatable, order kept")
    p_sim.add_argument("--cstr", dest="stages", action="append", type=_cstr_stage, metavar="V",
                       help="Append a CSTR (volume L); repeatable, order kept")
    p_sim.add_argument("--tau-min", type=int, default=settings.tau_min)
    p_sim.add_argument("--tau-max", type=int, default=settings.tau_max)
    p_sim.add_argument("--csv", type=str, help="Write the residence-time sweep to this CSV")

    p_serve = sub.add_parser("serve", help="Run the virtual lab web server")
    p_serve.add_argument("--host", type=str, default=settings.host)
    p_serve.add_argument("--port", type=int, default=settings.port)
    p_serve.add_argument("--debug", action="store_true")

    args = parser.parse_args(argv)

    if args.cmd == "serve":
        from .web import create_app

        create_app().run(host=args.host, port=args.port, debug=args.debug)
        return

    if not args.stages:
        raise SystemExit("Add at least one reactor with --pfr or --cstr")
    feed = Feed.from_lph(args.fa, args.fb, args.na, args.nb)
    try:
        train = build_train(feed, args.T, args.stages, tau_range=(args.tau_min, args.tau_max))
    except ReactorModelError as e:
        raise SystemExit(f"Invalid reactor train: {e}")
    except ValueError as e:
        raise SystemExit(f"Invalid residence-time scan: {e}")

    print(f"Reactors: {' -> '.join(train.pipe())}")
    print(f"k({train.temps[0]:g} C) = {train.k1:.6g} L/(mol s), k({train.temps[1]:g} C) = {train.k2:.6g} L/(mol s)")
    print(f"Ca0 = {train.ca0:.6g} mol/L, Cb0 = {train.cb0:.6g} mol/L")
    summary = train.summary()
    print(f"Xa = {summary['Xa']}")
    print(f"tau = {summary['tau']} s")

    if args.csv:
        train.sweep_frame().to_csv(args.csv, index=False)


if __name__ == "__main__":
    run_cli()
