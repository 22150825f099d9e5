"""CHIP-8 hexadecimal keypad."""

import jax.numpy as jnp

from chipvm.constants import NUM_KEYS
from chipvm.logging import get_logger

logger = get_logger("chipvm.keypad")


class Keypad:
    """Pressed/released latches for the 16 logical keys 0x0-0xF.

    Host key translation happens in the frontend; this class only stores
    logical indices.
    """

    def __init__(self):
        self.latches = jnp.zeros(NUM_KEYS, dtype=jnp.bool_)

    def set(self, index: int, pressed: bool):
        """Latch a press or release edge for one key."""
        if not 0 <= index < NUM_KEYS:
            logger.warning(f"Dropping event for invalid key index {index}")
            return
        self.latches = self.latches.at[index].set(pressed)

    def is_pressed(self, index: int) -> bool:
        return bool(self.latches[index])

    def release_all(self):
        self.latches = jnp.zeros(NUM_KEYS, dtype=jnp.bool_)
