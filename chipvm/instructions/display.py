"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipvm.state import MachineState
from chipvm.decode import DecodedInstruction
from chipvm.constants import ADDRESS_MASK, FLAG_REGISTER, MAX_SPRITE_HEIGHT
from chipvm.display import blit


def execute_display(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    addresses = (jnp.astype(state.I, jnp.int32) + jnp.arange(MAX_SPRITE_HEIGHT)) & ADDRESS_MASK
    sprite_rows = state.memory[addresses]

    display, collision = blit(
        state.display, state.V[instruction.x], state.V[instruction.y], sprite_rows, instruction.n
    )

    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8)),
        draw_flag=jnp.ones((), dtype=jnp.bool_),
    )
