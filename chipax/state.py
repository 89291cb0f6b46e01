"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chipax.constants import (
    COLLISION_MODES, FONT_DATA, FONT_START, INSTRUCTION_SIZE, MEMORY_SIZE,
    NUM_KEYS, NUM_REGISTERS, PROGRAM_START, SCREEN_HEIGHT, SCREEN_WIDTH, STACK_SIZE,
)


class StackState(PyTreeNode):
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(
        default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_)
    )
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    collision_mode: str = field(pytree_node=False, default="toggle")


def create_state(
    rng: jax.Array = None, collision_mode: str = "toggle"
) -> EmulatorState:
    """Create initial emulator state with font data loaded.

    Args:
        rng: PRNG key for the random-byte instruction (default: ``PRNGKey(0)``)
        collision_mode: Draw flag policy, ``"toggle"`` or ``"collision"``

    Returns:
        Fresh state with PC at the program entry point
    """
    if collision_mode not in COLLISION_MODES:
        raise ValueError(
            f"Unknown collision mode '{collision_mode}'. Available: {list(COLLISION_MODES)}"
        )
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = EmulatorState(rng, collision_mode=collision_mode)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def advance(state: EmulatorState, instructions: int = 1) -> EmulatorState:
    """Move PC forward past ``instructions`` two-byte words."""
    return state.replace(pc=state.pc + INSTRUCTION_SIZE * instructions)
