"""Command-line interface for flexcalc."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from flexcalc.config import FlexcalcConfig, load_config
from flexcalc.errors import FlexcalcError
from flexcalc.pipeline import compute_flexibility
from flexcalc.synthetic import write_random_trajectory

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``flexcalc`` command."""
    parser = argparse.ArgumentParser(
        prog="flexcalc",
        description=(
            "Score the flexibility of a trajectory as the mean RMSD of "
            "every frame to the frame closest to the mean structure."
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score = subparsers.add_parser(
        "score", help="Compute the flexibility score of a trajectory file",
    )
    score.add_argument("trajectory", help="Header-delimited trajectory file")
    score.add_argument("--config", help="JSON config file")
    score.add_argument(
        "--precision", type=int, help="Decimal places in the printed score",
    )
    score.add_argument(
        "--show-closest",
        action="store_true",
        help="Also print the header of the frame closest to the mean",
    )
    verbosity = score.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress of each pass",
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only log errors",
    )

    generate = subparsers.add_parser(
        "generate", help="Write a random trajectory for testing",
    )
    generate.add_argument("output", help="Output file, or '-' for stdout")
    generate.add_argument("--frames", type=int, default=10000)
    generate.add_argument("--atoms", type=int, default=250)
    generate.add_argument("--box", type=float, default=100.0)
    generate.add_argument("--seed", type=int, default=None)

    return parser


def _error(message: str) -> int:
    print(f"flexcalc: error: {message}", file=sys.stderr)
    return 1


def _check_arguments(
    parser: argparse.ArgumentParser, args: argparse.Namespace,
) -> None:
    """Reject out-of-range option values as usage errors."""
    if args.command == "score":
        if args.precision is not None and args.precision < 0:
            parser.error(f"--precision must be non-negative, got {args.precision}")
        return
    if args.frames < 0:
        parser.error(f"--frames must be non-negative, got {args.frames}")
    if args.atoms < 1:
        parser.error(f"--atoms must be at least 1, got {args.atoms}")
    if args.box <= 0:
        parser.error(f"--box must be positive, got {args.box}")


def _score(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config) if args.config else FlexcalcConfig()
    except OSError as exc:
        return _error(f"cannot read config {args.config}: {exc.strerror or exc}")
    except ValueError as exc:
        return _error(f"invalid config {args.config}: {exc}")
    if args.precision is not None:
        config = dataclasses.replace(config, precision=args.precision)

    level = config.logging_level
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level, format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Using %s", config)

    try:
        result = compute_flexibility(args.trajectory, config)
    except OSError as exc:
        return _error(f"cannot read {args.trajectory}: {exc.strerror or exc}")
    except FlexcalcError as exc:
        return _error(f"{exc.kind}: {exc}")

    print(result.format_score(config.precision))
    if args.show_closest:
        print(f"closest frame: {result.closest_frame.label}")
    return 0


def _generate(args: argparse.Namespace) -> int:
    if args.output == "-":
        write_random_trajectory(
            sys.stdout, args.frames, args.atoms, box=args.box, seed=args.seed,
        )
        return 0
    try:
        with open(args.output, "w", encoding="utf-8") as handle:
            write_random_trajectory(
                handle, args.frames, args.atoms, box=args.box, seed=args.seed,
            )
    except OSError as exc:
        return _error(f"cannot write {args.output}: {exc.strerror or exc}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``flexcalc`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _check_arguments(parser, args)
    if args.command == "score":
        return _score(args)
    return _generate(args)


if __name__ == "__main__":
    sys.exit(main())
