from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from loguru import logger

from lambdaworld.backend import BACKENDS, get_backend
from lambdaworld.errors import EndOfInputError, JoinTimeoutError
from lambdaworld.program import PROGRAMS
from lambdaworld.runtime import run, run_async
from lambdaworld.utils import (
    debug_enabled,
    join_timeout,
    max_workers,
    parse_max_workers,
    parse_timeout,
)

cli_logger = logger.bind(component="cli")


def _timeout_arg(raw: str) -> float:
    try:
        return parse_timeout(raw, "--timeout")
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _max_workers_arg(raw: str) -> int:
    try:
        return parse_max_workers(raw, "--max-workers")
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lambdaworld",
        description="Read one line from stdin and echo it under the chosen carrier.",
    )
    parser.add_argument(
        "--carrier",
        choices=tuple(BACKENDS),
        default="identity",
        help="Effect carrier to run the program under (default: identity)",
    )
    parser.add_argument(
        "--style",
        choices=tuple(PROGRAMS),
        default="bind",
        help="Notation the echo program is written in (default: bind)",
    )
    parser.add_argument(
        "--timeout",
        type=_timeout_arg,
        default=None,
        help="Bound in seconds for the final join (default: LAMBDAWORLD_JOIN_TIMEOUT or 1.0)",
    )
    parser.add_argument(
        "--max-workers",
        type=_max_workers_arg,
        default=None,
        help="Thread pool size for the deferred carrier",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def _configure_logging(debug: bool) -> None:
    level = "DEBUG" if debug else "INFO"
    logger.remove()
    logger.add(sys.stderr, level=level, format="{level}: {message}")
    if debug:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.debug or debug_enabled())

    timeout = args.timeout if args.timeout is not None else join_timeout()
    program = PROGRAMS[args.style]

    backend_kwargs = {}
    if args.carrier == "deferred":
        backend_kwargs["max_workers"] = (
            args.max_workers if args.max_workers is not None else max_workers()
        )

    cli_logger.debug("running echo ({}) on the {} carrier", args.style, args.carrier)
    try:
        with get_backend(args.carrier, **backend_kwargs) as backend:
            if args.carrier == "task":
                value = asyncio.run(run_async(program, backend, timeout=timeout))
            else:
                value = run(program, backend, timeout=timeout)
    except EndOfInputError:
        cli_logger.error("no input line to echo")
        return 1
    except JoinTimeoutError as exc:
        cli_logger.error("{}", exc)
        return 1

    cli_logger.debug("echoed {!r}", value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
