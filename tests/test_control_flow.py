"""Tests for control flow instructions."""

import pytest
import jax.numpy as jnp
from chipax import execute, InvalidOpcodeError


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1ABC)
        assert state.pc == 0xABC

    def test_jump_with_offset(self, fresh_state):
        """BNNN - Jump with V0 offset."""
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0x6230)  # V2 = 0x30, ignored
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_not_masked(self, fresh_state):
        """BNNN - Targets past 0xFFF are kept as is."""
        state = execute(fresh_state, 0x60FF)
        state = execute(state, 0xBFFF)
        assert state.pc == 0xFFF + 0xFF


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 4

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 4

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 4

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x44))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xBB))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 4

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xCC))
        state = state.replace(V=state.V.at[8].set(0xCC))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_register_compare_needs_zero_nibble(self, fresh_state):
        """5XYN and 9XYN with N != 0 are not instructions."""
        for instruction in (0x5121, 0x912F):
            with pytest.raises(InvalidOpcodeError):
                execute(fresh_state, instruction)

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 4


class TestKeySkips:
    """Test EX9E/EXA1 against the pressed-key snapshot."""

    def test_skip_if_key_pressed(self, fresh_state):
        """EX9E - Skip if key pressed."""
        state = execute(fresh_state, 0x6005)  # V0 = 5
        state = state.replace(keypad=state.keypad.at[5].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 4

    def test_no_skip_if_other_key_pressed(self, fresh_state):
        """EX9E - A different key does not count."""
        state = execute(fresh_state, 0x6005)
        state = state.replace(keypad=state.keypad.at[6].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 2

    def test_skip_if_key_not_pressed(self, fresh_state):
        """EXA1 - Skip if key not pressed."""
        state = execute(fresh_state, 0x6005)
        initial_pc = state.pc

        state = execute(state, 0xE0A1)
        assert state.pc == initial_pc + 4

    def test_no_skip_if_key_not_pressed_but_down(self, fresh_state):
        """EXA1 - Falls through when the key is held."""
        state = execute(fresh_state, 0x6005)
        state = state.replace(keypad=state.keypad.at[5].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE0A1)
        assert state.pc == initial_pc + 2

    def test_key_uses_low_nibble(self, fresh_state):
        """Only the low nibble of VX selects the key."""
        state = execute(fresh_state, 0x60F3)  # V0 = 0xF3 → key 3
        state = state.replace(keypad=state.keypad.at[3].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 4

    def test_empty_keypad(self, fresh_state):
        """No keys held: EX9E falls through, EXA1 skips."""
        assert not jnp.any(fresh_state.keypad)
        assert execute(fresh_state, 0xE09E).pc == 0x202
        assert execute(fresh_state, 0xE0A1).pc == 0x204
