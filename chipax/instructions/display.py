"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipax.state import EmulatorState, advance
from chipax.decode import DecodedInstruction
from chipax.bus import read_bytes
from chipax.constants import FLAG_REGISTER, MAX_SPRITE_HEIGHT, SCREEN_WIDTH, SCREEN_HEIGHT

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def sprite_mask(rows: jnp.ndarray, sprite_x: int, sprite_y: int) -> jnp.ndarray:
    """Place sprite rows on a screen-sized boolean grid.

    Bits that land past the right or bottom edge are dropped rather than
    wrapped around.
    """
    height = rows.shape[0]
    padded = jnp.zeros(MAX_SPRITE_HEIGHT, dtype=jnp.uint8).at[:height].set(rows)

    row_offset = yy - sprite_y
    col_offset = xx - sprite_x
    in_sprite = (col_offset >= 0) & (col_offset < 8) & (row_offset >= 0) & (row_offset < height)

    sprite_bytes = padded[jnp.clip(row_offset, 0, MAX_SPRITE_HEIGHT - 1)].astype(jnp.int32)
    bits = (sprite_bytes >> jnp.clip(7 - col_offset, 0, 7)) & 1
    return (bits == 1) & in_sprite


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    The origin wraps around the screen once; pixels of the sprite itself are
    clipped at the edges. In ``toggle`` mode every drawn bit flips its pixel
    and so sets VF, leaving VF untouched when nothing visible is drawn. In
    ``collision`` mode VF reports whether any lit pixel was switched off.
    """
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT

    rows = read_bytes(state.memory, state.I, instruction.n)
    sprite = sprite_mask(rows, sprite_x, sprite_y)

    new_V = state.V
    if state.collision_mode == "collision":
        new_V = new_V.at[FLAG_REGISTER].set(int(jnp.any(state.display & sprite)))
    elif jnp.any(sprite):
        new_V = new_V.at[FLAG_REGISTER].set(1)

    return advance(state.replace(display=state.display ^ sprite, V=new_V))
