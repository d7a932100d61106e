# ruff: noqa: T201

import argparse
import sys

from pyresults import Err, Ok

from todotask.interfaces.tui import endpoint
from todotask.util.dirs import load_env
from todotask.util.ids import parse_policy
from todotask.util.logger import setup_logger, setup_mode

logger = setup_logger("todotask", is_stream=False, is_file=True)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="todotask",
        description="Single-screen in-memory TODO list (curses TUI).",
    )
    p.add_argument("--debug", action="store_true", help="enable debug logging")
    p.add_argument(
        "--id-policy",
        default=None,
        help="task id policy: max_plus_one (default, reuses freed ids) or counter",
    )
    p.add_argument(
        "--notice-seconds",
        type=float,
        default=None,
        help="how long a notice stays in the footer",
    )
    return p


def resolve_args(args: argparse.Namespace, env: dict[str, str]) -> argparse.Namespace:
    """Fill unset options from config.env / environment variables."""
    raw_policy = args.id_policy if args.id_policy is not None else env["ID_POLICY"]
    match parse_policy(raw_policy):
        case Ok(policy):
            args.id_policy = policy
        case Err(e):
            raise ValueError(e)
    if args.notice_seconds is None:
        args.notice_seconds = float(env["NOTICE_SECONDS"])
    if args.notice_seconds <= 0:
        _msg = f"--notice-seconds must be positive: {args.notice_seconds}"
        raise ValueError(_msg)
    return args


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_mode(is_debug=args.debug)
    try:
        args = resolve_args(args, load_env())
    except ValueError as e:
        logger.exception("Invalid configuration")
        print(f"Error: {e}", file=sys.stderr)
        return 2
    logger.info("Starting todotask (id_policy=%s)", args.id_policy)
    return endpoint.run(args)


if __name__ == "__main__":
    sys.exit(main())
