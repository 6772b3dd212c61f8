"""64x32 monochrome display buffer.

The buffer is indexed ``[x, y]``. Sprites are 8 pixels wide and one byte per
row, most significant bit on the left. Drawing XORs the sprite onto the
buffer; both the start position and each individual pixel wrap around the
screen edges.
"""

import jax.numpy as jnp

from vip8.constants import SCREEN_WIDTH, SCREEN_HEIGHT

SPRITE_WIDTH = 8

_bit_shifts = jnp.arange(SPRITE_WIDTH - 1, -1, -1, dtype=jnp.uint8)


def blank() -> jnp.ndarray:
    return jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    return jnp.zeros_like(display)


def sprite_layer(x: int, y: int, rows: jnp.ndarray) -> jnp.ndarray:
    """Rasterize sprite ``rows`` at (x, y) into a screen-sized boolean layer."""
    rows = jnp.asarray(rows, dtype=jnp.uint8)
    x0 = x % SCREEN_WIDTH
    y0 = y % SCREEN_HEIGHT

    bits = ((rows[:, None] >> _bit_shifts[None, :]) & 1).astype(jnp.bool_)
    xs = (x0 + jnp.arange(SPRITE_WIDTH)) % SCREEN_WIDTH
    ys = (y0 + jnp.arange(rows.shape[0])) % SCREEN_HEIGHT

    return blank().at[xs[None, :], ys[:, None]].set(bits)


def draw_sprite(display: jnp.ndarray, x: int, y: int, rows: jnp.ndarray) -> tuple[jnp.ndarray, bool]:
    """XOR ``rows`` onto the display at (x, y).

    Returns:
        The new display and whether any lit pixel was switched off
    """
    layer = sprite_layer(x, y, rows)
    collision = bool(jnp.any(display & layer))
    return display ^ layer, collision
