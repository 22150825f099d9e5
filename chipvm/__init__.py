"""CHIP-8 emulator package."""

__version__ = "0.1.0"

from chipvm.state import MachineState, StackState, create_state
from chipvm.emulator import execute, fetch, cycle, tick_timers, load_program, load_rom
from chipvm.decode import DecodedInstruction, decode, is_known
from chipvm.constants import PROGRAM_START, FONT_START, SCREEN_WIDTH, SCREEN_HEIGHT
from chipvm.display import Display, blit
from chipvm.keypad import Keypad
from chipvm.machine import Machine
from chipvm.errors import (
    EmulatorError, MemoryBoundsError, StackOverflowError, StackUnderflowError, ProgramLoadError,
)
from chipvm.rendering import display_to_rgb, create_color_scheme, render_ascii

__all__ = [
    "MachineState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "cycle",
    "tick_timers",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "is_known",
    "Display",
    "blit",
    "Keypad",
    "Machine",
    "EmulatorError",
    "MemoryBoundsError",
    "StackOverflowError",
    "StackUnderflowError",
    "ProgramLoadError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "display_to_rgb",
    "create_color_scheme",
    "render_ascii",
]
