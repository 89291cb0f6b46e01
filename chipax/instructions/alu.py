"""CHIP-8 ALU operations (8xxx).

Each ``alu_*`` function takes the current VX and VY values and returns the new
VX value together with the VF flag it produces, or ``None`` when the
operation leaves VF alone. All arithmetic wraps modulo 256.
"""

from typing import Callable, Optional

from chipax.constants import FLAG_REGISTER
from chipax.state import EmulatorState, advance
from chipax.decode import DecodedInstruction

AluResult = tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, VF = 1 when the wrapped sum is below the old VX."""
    result = (vx + vy) & 0xFF
    return result, int(result < vx)


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = 1 when VX > VY."""
    return (vx - vy) & 0xFF, int(vx > vy)


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right: VX >>= 1, VF = bit shifted out."""
    return vx >> 1, vx & 0x01


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when VY > VX."""
    return (vy - vx) & 0xFF, int(vy > vx)


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left: VX <<= 1, VF = bit shifted out."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


def make_alu_instruction(alu_fn: Callable[[int, int], AluResult]):
    """Wrap a pure ALU function into an instruction handler."""
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = int(state.V[instruction.x])
        vy = int(state.V[instruction.y])
        result, flag = alu_fn(vx, vy)

        # VF is written last so the flag wins when X is F
        new_V = state.V.at[instruction.x].set(result)
        if flag is not None:
            new_V = new_V.at[FLAG_REGISTER].set(flag)
        return advance(state.replace(V=new_V))

    alu_instruction.__doc__ = alu_fn.__doc__
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or)
execute_alu_and = make_alu_instruction(alu_and)
execute_alu_xor = make_alu_instruction(alu_xor)
execute_alu_add = make_alu_instruction(alu_add)
execute_alu_sub_xy = make_alu_instruction(alu_sub_xy)
execute_alu_shift_right = make_alu_instruction(alu_shift_right)
execute_alu_sub_yx = make_alu_instruction(alu_sub_yx)
execute_alu_shift_left = make_alu_instruction(alu_shift_left)
