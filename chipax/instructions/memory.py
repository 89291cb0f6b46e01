"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chipax.state import EmulatorState, advance
from chipax.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return advance(state.replace(V=state.V.at[instruction.x].set(instruction.nn)))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping at 256. VF is left alone."""
    result = (int(state.V[instruction.x]) + instruction.nn) & 0xFF
    return advance(state.replace(V=state.V.at[instruction.x].set(result)))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return advance(state.replace(I=jnp.asarray(instruction.nnn, dtype=jnp.uint16)))


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    new_V = state.V.at[instruction.x].set(int(random_value) & instruction.nn)
    return advance(state.replace(V=new_V, rng=key))
