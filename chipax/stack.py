"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chipax.constants import ADDRESS_MASK, STACK_SIZE
from chipax.errors import StackOverflowError, StackUnderflowError
from chipax.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    if stack.pointer >= STACK_SIZE:
        raise StackOverflowError(f"Call nested deeper than {STACK_SIZE} levels")
    masked_address = address & ADDRESS_MASK
    new_data = stack.data.at[stack.pointer].set(masked_address)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    if stack.pointer <= 0:
        raise StackUnderflowError("Return without a matching call")
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
