"""Bounds-checked access to the 4 KiB address space."""

import jax.numpy as jnp

from chipax.constants import MEMORY_SIZE
from chipax.errors import MemoryAccessError


def check_range(address: int, length: int) -> None:
    """Raise MemoryAccessError unless [address, address + length) is mapped."""
    address = int(address)
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(address, length)


def read_bytes(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Read ``length`` bytes starting at ``address``."""
    check_range(address, length)
    start = int(address)
    return memory[start:start + length]


def write_bytes(memory: jnp.ndarray, address: int, values) -> jnp.ndarray:
    """Return a copy of ``memory`` with ``values`` stored from ``address`` on."""
    values = jnp.asarray(values, dtype=jnp.uint8)
    check_range(address, values.shape[0])
    start = int(address)
    return memory.at[start:start + values.shape[0]].set(values)
