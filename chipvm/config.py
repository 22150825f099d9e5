"""Runtime configuration for the emulator frontends."""

import argparse
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmulatorConfig:
    """Settings shared by the windowed and headless runners.

    Attributes:
        cycle_delay: Seconds to sleep between cycles in the windowed runner
        scale: Window pixels per CHIP-8 pixel
        color_scheme: Name understood by ``rendering.create_color_scheme``
        seed: Seed for the CXNN random number generator
        log_level: Level applied to every shared logger
        headless: Run without a window and print the final screen
        cycles: Number of cycles to run, None runs until the window closes
    """
    cycle_delay: float = 0.002
    scale: int = 10
    color_scheme: str = "cyan"
    seed: int = 0
    log_level: str = "INFO"
    headless: bool = False
    cycles: Optional[int] = None

    def __post_init__(self):
        if self.cycle_delay < 0:
            raise ValueError(f"cycle_delay must be non-negative, got {self.cycle_delay}")
        if self.scale < 1:
            raise ValueError(f"scale must be at least 1, got {self.scale}")
        if self.cycles is not None and self.cycles < 0:
            raise ValueError(f"cycles must be non-negative, got {self.cycles}")
        if self.headless and self.cycles is None:
            raise ValueError("headless runs need a cycle count")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "EmulatorConfig":
        return cls(
            cycle_delay=args.delay,
            scale=args.scale,
            color_scheme=args.colors,
            seed=args.seed,
            log_level=args.log_level,
            headless=args.headless,
            cycles=args.cycles,
        )
