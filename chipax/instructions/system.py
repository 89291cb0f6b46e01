"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chipax.state import EmulatorState, advance
from chipax.decode import DecodedInstruction
from chipax.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return advance(state.replace(display=jnp.zeros_like(state.display)))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine.

    The stack holds the address of the call itself, so execution resumes
    one instruction past it.
    """
    stack, address = pop(state.stack)
    return advance(state.replace(stack=stack, pc=address))
