"""Main CHIP-8 execution engine."""

from pathlib import Path

import jax
import jax.lax
import jax.numpy as jnp
from chipvm.state import MachineState
from chipvm.decode import decode
from chipvm.constants import MEMORY_SIZE, PROGRAM_START
from chipvm.errors import ProgramLoadError
from chipvm.logging import get_logger
from chipvm.instructions.system import execute_system_instruction
from chipvm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key
)
from chipvm.instructions.alu import execute_alu_operation
from chipvm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipvm.instructions.display import execute_display
from chipvm.instructions.misc import execute_misc_instruction

logger = get_logger("chipvm.emulator")

# First nibble -> handler
INSTRUCTION_TABLE = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
]


def execute(state: MachineState, instruction: int) -> MachineState:
    """Execute single CHIP-8 instruction.

    The program counter is expected to already point past the instruction.
    """
    decoded_instruction = decode(instruction)
    return jax.lax.switch(decoded_instruction.opcode, INSTRUCTION_TABLE, state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: MachineState) -> tuple[MachineState, jnp.uint16]:
    """Fetch next instruction from memory and advance the program counter."""
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def tick_timers(state: MachineState) -> MachineState:
    """Decrement the delay timer if it is running."""
    timer = state.delay_timer
    return state.replace(delay_timer=jnp.where(timer > 0, timer - 1, timer))


def cycle(state: MachineState) -> MachineState:
    """One fetch/decode/execute step followed by a timer tick."""
    state, instruction = fetch(state)
    state = execute(state, instruction)
    return tick_timers(state)


def load_program(state: MachineState, data: bytes) -> MachineState:
    """Copy a program image into memory starting at 0x200.

    Bytes that would land past the end of memory are dropped.
    """
    capacity = MEMORY_SIZE - PROGRAM_START
    if len(data) > capacity:
        logger.debug(f"Program is {len(data)} bytes, truncating to {capacity}")
        data = data[:capacity]
    if not data:
        return state
    program = jnp.array(list(data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(data)].set(program)
    return state.replace(memory=new_memory)


def load_rom(state: MachineState, filename: str | Path) -> MachineState:
    """Load ROM data from a file into memory starting at 0x200."""
    try:
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as e:
        raise ProgramLoadError(f"cannot read program '{filename}': {e}") from e
    logger.info(f"Loaded {len(rom_data)} bytes from {filename}")
    return load_program(state, rom_data)
