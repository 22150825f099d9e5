"""CHIP-8 framebuffer and sprite blitting."""

from typing import Sequence

import jax.numpy as jnp

from chipvm.constants import SCREEN_HEIGHT, SCREEN_WIDTH, SPRITE_WIDTH

# Pre-computed coordinate grids for display operations
rows, cols = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def blank_pixels() -> jnp.ndarray:
    """Return an all-off framebuffer."""
    return jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_)


def blit(pixels: jnp.ndarray, x0, y0, sprite_rows: jnp.ndarray, height) -> tuple[jnp.ndarray, jnp.ndarray]:
    """XOR the first ``height`` rows of a sprite onto the framebuffer.

    Every sprite pixel lands on ``((y0 + row) % 32, (x0 + col) % 64)``, so
    sprites wrap around both edges of the screen.

    Args:
        pixels: Boolean framebuffer of shape (32, 64)
        x0: Column of the sprite's top-left corner
        y0: Row of the sprite's top-left corner
        sprite_rows: uint8 array with one byte per sprite row, MSB leftmost
        height: Number of rows to draw

    Returns:
        Tuple of (new framebuffer, collision) where collision is True if any
        pixel that was on got turned off
    """
    row_offset = (rows - jnp.astype(y0, jnp.int32)) % SCREEN_HEIGHT
    col_offset = (cols - jnp.astype(x0, jnp.int32)) % SCREEN_WIDTH
    covered = (row_offset < height) & (col_offset < SPRITE_WIDTH)

    row_bytes = jnp.astype(sprite_rows[jnp.minimum(row_offset, sprite_rows.shape[0] - 1)], jnp.int32)
    bits = (row_bytes >> (SPRITE_WIDTH - 1 - jnp.minimum(col_offset, SPRITE_WIDTH - 1))) & 1
    sprite = (bits == 1) & covered

    collision = jnp.any(pixels & sprite)
    return pixels ^ sprite, collision


class Display:
    """64x32 monochrome framebuffer with a redraw flag.

    The presentation layer polls :meth:`take_redraw` and renders ``pixels``
    when it returns True; the display never draws to a surface itself.
    """

    def __init__(self):
        self.pixels = blank_pixels()
        self.dirty = True

    def clear(self):
        """Turn every pixel off."""
        self.pixels = blank_pixels()
        self.dirty = True

    def draw(self, x0: int, y0: int, sprite_bytes: Sequence[int]) -> bool:
        """XOR a sprite at (x0, y0) and report whether it collided."""
        sprite_rows = jnp.asarray(list(sprite_bytes) or [0], dtype=jnp.uint8)
        self.pixels, collision = blit(self.pixels, x0, y0, sprite_rows, len(sprite_bytes))
        self.dirty = True
        return bool(collision)

    def take_redraw(self) -> bool:
        """Return the redraw flag and reset it."""
        dirty, self.dirty = self.dirty, False
        return dirty
