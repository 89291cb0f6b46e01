"""CHIP-8 interpreter package."""

from chipax.state import EmulatorState, StackState, create_state
from chipax.emulator import execute, fetch, cycle, tick_timers, load_rom
from chipax.decode import DecodedInstruction, decode
from chipax.opcodes import Op, identify
from chipax.constants import *
from chipax.errors import (
    Chip8Error, InvalidOpcodeError, StackOverflowError, StackUnderflowError,
    MemoryAccessError, RomTooLargeError, InvalidKeyError, MachineHaltedError,
)
from chipax.keymap import KEY_MAP, keys_from_names
from chipax.interpreter import Interpreter
from chipax.rendering import chip8_display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "cycle",
    "tick_timers",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "Op",
    "identify",
    "Interpreter",
    "KEY_MAP",
    "keys_from_names",
    "Chip8Error",
    "InvalidOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "RomTooLargeError",
    "InvalidKeyError",
    "MachineHaltedError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
]
