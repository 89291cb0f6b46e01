"""Fatal machine conditions raised by the CHIP-8 engine."""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all fatal interpreter errors.

    Attributes:
        pc: Address of the instruction that was executing, if known
    """

    def __init__(self, message: str, pc: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.pc = pc

    def __str__(self) -> str:
        if self.pc is None:
            return self.message
        return f"{self.message} (pc=0x{self.pc:03X})"


class InvalidOpcodeError(Chip8Error):
    """Instruction word matches no known opcode."""

    def __init__(self, instruction: int, pc: Optional[int] = None):
        super().__init__(f"Invalid opcode 0x{instruction:04X}", pc)
        self.instruction = instruction


class StackOverflowError(Chip8Error):
    """Subroutine call with every stack slot already in use."""


class StackUnderflowError(Chip8Error):
    """Return executed with an empty stack."""


class MemoryAccessError(Chip8Error):
    """Access outside the 4 KiB address space."""

    def __init__(self, address: int, length: int, pc: Optional[int] = None):
        super().__init__(
            f"Memory access out of range: {length} byte(s) at 0x{address:04X}", pc
        )
        self.address = address
        self.length = length


class RomTooLargeError(Chip8Error, ValueError):
    """Program image does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM is {size} bytes, at most {limit} bytes fit in memory")
        self.size = size
        self.limit = limit


class InvalidKeyError(Chip8Error, ValueError):
    """Key symbol outside the 0x0-0xF keypad alphabet."""

    def __init__(self, key):
        super().__init__(f"Invalid key symbol {key!r}, expected 0x0-0xF")
        self.key = key


class MachineHaltedError(Chip8Error):
    """Cycle requested after a fatal error stopped the machine."""

    def __init__(self, cause: Chip8Error):
        super().__init__(f"Machine halted by earlier error: {cause}", cause.pc)
        self.cause = cause
