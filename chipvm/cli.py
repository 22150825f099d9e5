"""Command line entry point."""

import argparse
import sys
from typing import Optional, Sequence

import jax

from chipvm import __version__
from chipvm.config import EmulatorConfig
from chipvm.errors import EmulatorError
from chipvm.logging import LOG_LEVELS, get_logger, set_log_level
from chipvm.machine import Machine
from chipvm.rendering import COLOR_SCHEMES, render_ascii

logger = get_logger("chipvm")


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chipvm", description="chipvm - A CHIP-8 emulator.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    load = subparsers.add_parser("load", help="Load and run a program")
    load.add_argument("program", help="Path to the CHIP-8 program image")
    load.add_argument("--scale", type=int, default=10, help="Window pixels per CHIP-8 pixel")
    load.add_argument("--colors", choices=list(COLOR_SCHEMES), default="cyan", help="Color scheme")
    load.add_argument("--delay", type=float, default=0.002, help="Seconds to sleep between cycles")
    load.add_argument("--seed", type=int, default=0, help="Random number generator seed")
    load.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        type=str.upper,
        default="INFO",
        help="Console log level",
    )
    load.add_argument("--headless", action="store_true", help="Run without a window")
    load.add_argument("--cycles", type=int, default=None, help="Stop after this many cycles")
    return parser


def run(config: EmulatorConfig, program: str) -> int:
    machine = Machine(rng=jax.random.PRNGKey(config.seed))
    machine.load_file(program)

    if config.headless:
        machine.run(config.cycles, progress=True)
        print(render_ascii(machine.display.pixels))
    else:
        # Imported here so headless runs do not need a display server
        from chipvm.frontend import run_window
        run_window(machine, config)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_argument_parser().parse_args(argv)

    try:
        config = EmulatorConfig.from_args(args)
    except ValueError as e:
        logger.error(str(e))
        return 2
    set_log_level(config.log_level)

    try:
        return run(config, args.program)
    except EmulatorError as e:
        logger.critical(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
