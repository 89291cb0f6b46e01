"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from chipax import create_state, load_rom


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def collision_state():
    """Provide a fresh state using conventional collision reporting."""
    return create_state(collision_mode="collision")


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def assemble(*words):
    """Helper to turn 16-bit instruction words into a big-endian ROM image."""
    return b"".join(word.to_bytes(2, "big") for word in words)


def program_state(*words, **kwargs):
    """Helper to build a state with the given instructions loaded at 0x200."""
    return load_rom(create_state(**kwargs), assemble(*words))
