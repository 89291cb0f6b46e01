"""Main CHIP-8 emulator execution engine."""

from typing import Iterable

import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import decode
from chipax.opcodes import Op, identify
from chipax.bus import read_bytes, write_bytes
from chipax.constants import MAX_ROM_SIZE, PROGRAM_START
from chipax.errors import Chip8Error, RomTooLargeError
from chipax.keymap import keypad_from_keys
from chipax.instructions.system import execute_clear_screen, execute_return
from chipax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed,
)
from chipax.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor,
    execute_alu_add, execute_alu_sub_xy, execute_alu_shift_right,
    execute_alu_sub_yx, execute_alu_shift_left,
)
from chipax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipax.instructions.display import execute_display
from chipax.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers,
)

HANDLERS = {
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_BYTE: execute_skip_if_equal_immediate,
    Op.SNE_BYTE: execute_skip_if_not_equal_immediate,
    Op.SE_REG: execute_skip_if_equal_register,
    Op.LD_BYTE: execute_set,
    Op.ADD_BYTE: execute_add,
    Op.LD_REG: execute_alu_set,
    Op.OR: execute_alu_or,
    Op.AND: execute_alu_and,
    Op.XOR: execute_alu_xor,
    Op.ADD_REG: execute_alu_add,
    Op.SUB: execute_alu_sub_xy,
    Op.SHR: execute_alu_shift_right,
    Op.SUBN: execute_alu_sub_yx,
    Op.SHL: execute_alu_shift_left,
    Op.SNE_REG: execute_skip_if_not_equal_register,
    Op.LD_I: execute_set_index,
    Op.JP_V0: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key_pressed,
    Op.SKNP: execute_skip_if_key_not_pressed,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_VX_K: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I_VX: execute_add_to_index,
    Op.LD_F_VX: execute_font_character,
    Op.LD_B_VX: execute_bcd_conversion,
    Op.LD_MEM_VX: execute_store_registers,
    Op.LD_VX_MEM: execute_load_registers,
}

_missing = set(Op) - set(HANDLERS)
if _missing:
    raise ImportError(f"No handler for {sorted(op.name for op in _missing)}")


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Raises:
        Chip8Error: On any fatal condition, with ``pc`` set to the address of
            the failing instruction.
    """
    decoded_instruction = decode(instruction)
    try:
        op = identify(decoded_instruction)
        return HANDLERS[op](state, decoded_instruction)
    except Chip8Error as error:
        if error.pc is None:
            error.pc = int(state.pc)
        raise


def fetch(state: EmulatorState) -> int:
    """Fetch the big-endian instruction word at PC without moving PC."""
    try:
        high, low = (int(byte) for byte in read_bytes(state.memory, state.pc, 2))
    except Chip8Error as error:
        error.pc = int(state.pc)
        raise
    return (high << 8) | low


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement each non-zero timer by one."""
    def _tick(timer):
        return jnp.where(timer > 0, timer - 1, timer).astype(jnp.uint8)

    return state.replace(
        delay_timer=_tick(state.delay_timer),
        sound_timer=_tick(state.sound_timer),
    )


def cycle(state: EmulatorState, keys: Iterable[int] = ()) -> EmulatorState:
    """Run one emulation tick.

    Installs the pressed-key snapshot, decrements the timers, then fetches
    and executes one instruction. The snapshot is cleared afterwards; keys
    must be supplied again for the next tick.
    """
    state = state.replace(keypad=keypad_from_keys(keys))
    state = tick_timers(state)
    state = execute(state, fetch(state))
    return state.replace(keypad=jnp.zeros_like(state.keypad))


def load_rom(state: EmulatorState, rom: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    rom = bytes(rom)
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLargeError(len(rom), MAX_ROM_SIZE)
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    return state.replace(memory=write_bytes(state.memory, PROGRAM_START, rom_array))
