"""Stateful CHIP-8 interpreter wrapping the pure execution engine."""

from pathlib import Path
from typing import Optional

import jax
import jax.numpy as jnp
from tqdm import tqdm

from chipvm.constants import MEMORY_SIZE
from chipvm.decode import decode, is_known
from chipvm.display import Display
from chipvm.emulator import cycle, load_program, load_rom
from chipvm.errors import MemoryBoundsError
from chipvm.keypad import Keypad
from chipvm.logging import get_logger
from chipvm.stack import check_pop, check_push
from chipvm.state import MachineState, create_state

logger = get_logger("chipvm.machine")

_jit_cycle = jax.jit(cycle)


class Machine:
    """CHIP-8 interpreter driven one cycle at a time by an outer loop.

    The machine owns the current :class:`MachineState` and the two
    peripherals. Each :meth:`step` copies the keypad latches and framebuffer
    into the state, runs one compiled cycle, and copies the framebuffer back
    into :attr:`display`. Conditions that would make the cycle undefined are
    checked on concrete values first and raised as
    :class:`~chipvm.errors.EmulatorError` subclasses with the state untouched.
    """

    def __init__(
        self,
        rng: Optional[jax.Array] = None,
        keypad: Optional[Keypad] = None,
        display: Optional[Display] = None,
    ):
        self.state = create_state(rng)
        self.keypad = keypad or Keypad()
        self.display = display or Display()
        self.cycles = 0

    def load(self, data: bytes):
        """Place a program image at 0x200."""
        self.state = load_program(self.state, data)

    def load_file(self, filename: str | Path):
        self.state = load_rom(self.state, filename)

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def awaiting_key(self) -> bool:
        """True while an FX0A instruction is waiting for a key press."""
        return int(self.state.key_wait) >= 0

    def _read_instruction(self, pc: int) -> int:
        if pc + 1 >= MEMORY_SIZE:
            raise MemoryBoundsError(pc)
        memory = self.state.memory
        return (int(memory[pc]) << 8) | int(memory[pc + 1])

    def step(self):
        """Run one fetch/decode/execute cycle, then tick the delay timer."""
        pc = self.pc
        instruction = decode(self._read_instruction(pc))

        if instruction.opcode == 0x2:
            check_push(self.state.stack, pc)
        elif instruction.raw == 0x00EE:
            check_pop(self.state.stack, pc)
        elif not is_known(instruction):
            logger.warning(f"Unknown instruction 0x{instruction.raw:04X} at 0x{pc:03X}")

        state = self.state.replace(keypad=self.keypad.latches, display=self.display.pixels)
        state = _jit_cycle(state)

        self.display.pixels = state.display
        if bool(state.draw_flag):
            self.display.dirty = True
            state = state.replace(draw_flag=jnp.zeros((), dtype=jnp.bool_))
        self.state = state
        self.cycles += 1

    def run(self, cycles: int, progress: bool = False) -> int:
        """Step a fixed number of cycles and return how many ran."""
        steps = range(cycles)
        if progress:
            steps = tqdm(steps, desc=f"Running ({cycles:,} cycles)", unit="cycle")
        for _ in steps:
            self.step()
        return cycles
