"""Tests for the host-facing Interpreter."""

import io

import pytest
import jax.numpy as jnp
from chipax import (
    Interpreter, InvalidKeyError, InvalidOpcodeError, MachineHaltedError,
    RomTooLargeError, StackUnderflowError,
)
from chipax.logging import MachineLogger
from conftest import assemble


def quiet_logger(level="DEBUG"):
    return MachineLogger(log_level=level, use_colors=False, show_timestamps=False, stream=io.StringIO())


class TestLifecycle:
    """Test construction, cycling and reset."""

    def test_initial_state(self):
        interpreter = Interpreter(assemble(0x6A05))

        assert interpreter.pc == 0x200
        assert not interpreter.halted
        assert interpreter.framebuffer.shape == (64, 32)
        assert interpreter.delay_timer == 0
        assert interpreter.sound_timer == 0

    def test_cycle_advances(self):
        interpreter = Interpreter(assemble(0x6A05))

        interpreter.cycle()

        assert interpreter.pc == 0x202
        assert interpreter.state.V[0xA] == 5

    def test_timers_exposed(self):
        # V0 = 3, delay = V0, sound = V0, then spin
        interpreter = Interpreter(assemble(0x6003, 0xF015, 0xF018, 0x1206))

        interpreter.run(3)
        assert interpreter.delay_timer == 2  # Ticked once after being set
        assert interpreter.sound_timer == 3

        interpreter.run(2)
        assert interpreter.delay_timer == 0
        assert interpreter.sound_timer == 1

    def test_run_loop(self):
        # V0 += 1; jump back
        interpreter = Interpreter(assemble(0x7001, 0x1200))

        interpreter.run(10)

        assert interpreter.state.V[0] == 5
        assert interpreter.pc == 0x200

    def test_run_with_progress(self):
        interpreter = Interpreter(assemble(0x1200))
        interpreter.run(3, progress=True)
        assert interpreter.pc == 0x200

    def test_keys_passed_through(self):
        # Skip if key 0 pressed
        interpreter = Interpreter(assemble(0xE09E))
        interpreter.cycle(keys=[0])
        assert interpreter.pc == 0x204

    def test_rom_too_large(self):
        with pytest.raises(RomTooLargeError):
            Interpreter(bytes(4096))

    def test_unknown_collision_mode(self):
        with pytest.raises(ValueError):
            Interpreter(b"", collision_mode="sticky")


class TestHalting:
    """Test the fatal error policy."""

    def test_invalid_opcode_halts(self):
        interpreter = Interpreter(assemble(0x6001, 0x0000), logger=quiet_logger())
        interpreter.cycle()

        with pytest.raises(InvalidOpcodeError) as exc_info:
            interpreter.cycle()

        assert exc_info.value.pc == 0x202
        assert interpreter.halted
        assert interpreter.error is exc_info.value
        assert interpreter.pc == 0x202  # State kept at the failing instruction

    def test_cycle_after_halt(self):
        interpreter = Interpreter(assemble(0x00EE), logger=quiet_logger())
        with pytest.raises(StackUnderflowError):
            interpreter.cycle()

        with pytest.raises(MachineHaltedError) as exc_info:
            interpreter.cycle()
        assert isinstance(exc_info.value.cause, StackUnderflowError)

    def test_reset_clears_halt(self):
        interpreter = Interpreter(assemble(0x6001, 0x0000), logger=quiet_logger())
        interpreter.run(1)
        with pytest.raises(InvalidOpcodeError):
            interpreter.cycle()

        interpreter.reset()

        assert not interpreter.halted
        assert interpreter.pc == 0x200
        assert interpreter.state.V[0] == 0
        interpreter.cycle()
        assert interpreter.state.V[0] == 1

    def test_invalid_key_does_not_halt(self):
        interpreter = Interpreter(assemble(0x6001))
        with pytest.raises(InvalidKeyError):
            interpreter.cycle(keys=[16])
        assert not interpreter.halted
        assert interpreter.pc == 0x200

    def test_halt_is_logged(self):
        logger = quiet_logger(level="ERROR")
        interpreter = Interpreter(assemble(0xF0FF), logger=logger)

        with pytest.raises(InvalidOpcodeError):
            interpreter.cycle()

        output = logger.stream.getvalue()
        assert "invalid opcode 0xF0FF" in output
        assert "pc=0x200" in output


class TestPresentation:
    """Test framebuffer access for hosts."""

    def test_framebuffer_after_draw(self):
        # I = glyph 1 (V0 = 1), draw at (V1, V2) = (0, 0)
        interpreter = Interpreter(assemble(0x6001, 0xF029, 0xD125))
        interpreter.run(3)

        assert jnp.sum(interpreter.framebuffer) == 8  # 0x20 0x60 0x20 0x20 0x70
        assert interpreter.state.V[15] == 1

    def test_render(self):
        interpreter = Interpreter(b"")
        image = interpreter.render(scale=2, color_scheme="amber")
        assert image.shape == (64, 128, 3)
        assert (image == 0).all()
