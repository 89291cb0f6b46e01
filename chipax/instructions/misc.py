"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chipax.state import EmulatorState, advance
from chipax.decode import DecodedInstruction
from chipax.bus import read_bytes, write_bytes
from chipax.constants import FONT_GLYPH_SIZE, FONT_START, NUM_REGISTERS


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return advance(state.replace(V=state.V.at[instruction.x].set(state.delay_timer)))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return advance(state.replace(delay_timer=state.V[instruction.x]))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return advance(state.replace(sound_timer=state.V[instruction.x]))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register, wrapping at 16 bits."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & 0xFFFF
    return advance(state.replace(I=jnp.asarray(new_i, dtype=jnp.uint16)))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    PC stays put while no key is down, so the instruction runs again on the
    next cycle.
    """
    if not jnp.any(state.keypad):
        return state
    pressed_key = int(jnp.argmax(state.keypad))
    return advance(state.replace(V=state.V.at[instruction.x].set(pressed_key)))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + FONT_GLYPH_SIZE * int(state.V[instruction.x])
    return advance(state.replace(I=jnp.asarray(font_address, dtype=jnp.uint16)))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return advance(state.replace(memory=write_bytes(state.memory, state.I, digits)))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    registers = state.V[:instruction.x + 1]
    return advance(state.replace(memory=write_bytes(state.memory, state.I, registers)))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    memory_values = read_bytes(state.memory, state.I, count)
    register_mask = jnp.arange(NUM_REGISTERS) < count
    padded = jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8).at[:count].set(memory_values)
    new_V = jnp.where(register_mask, padded, state.V)
    return advance(state.replace(V=new_V))
