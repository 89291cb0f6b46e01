"""Stateful CHIP-8 engine instance for hosts.

Wraps the functional core: one program image, one machine state, and the
halt-on-fatal-error policy. The host owns pacing, input polling and
presentation; it calls :meth:`Interpreter.cycle` once per tick and reads
the framebuffer and timers back.
"""

import time
from typing import Iterable, Optional

import jax
import jax.numpy as jnp
import numpy as np
from tqdm import tqdm

from chipax.emulator import cycle, load_rom
from chipax.errors import Chip8Error, MachineHaltedError
from chipax.keymap import keypad_from_keys
from chipax.logging import MachineLogger
from chipax.rendering import chip8_display_to_rgb, create_color_scheme
from chipax.state import EmulatorState, create_state


class Interpreter:
    """One CHIP-8 machine running one program.

    Args:
        rom: Program image, copied to 0x200
        collision_mode: Draw flag policy, ``"toggle"`` or ``"collision"``
        rng: PRNG key for the random-byte instruction
        logger: Logger for lifecycle events (default: quiet MachineLogger)
    """

    def __init__(
        self,
        rom: bytes,
        collision_mode: str = "toggle",
        rng: Optional[jax.Array] = None,
        logger: Optional[MachineLogger] = None,
    ):
        self.rom = bytes(rom)
        self.collision_mode = collision_mode
        self.rng = rng
        self.logger = logger or MachineLogger()
        self.error: Optional[Chip8Error] = None
        self.state = self._boot()

    def _boot(self) -> EmulatorState:
        state = load_rom(create_state(self.rng, self.collision_mode), self.rom)
        self.logger.log_rom_loaded(len(self.rom))
        return state

    @property
    def halted(self) -> bool:
        return self.error is not None

    @property
    def framebuffer(self) -> jnp.ndarray:
        """Immutable (64, 32) boolean pixel grid indexed [x, y]."""
        return self.state.display

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    def cycle(self, keys: Iterable[int] = ()):
        """Advance the machine by one tick with ``keys`` held down.

        Raises:
            MachineHaltedError: If an earlier cycle hit a fatal error.
            Chip8Error: On a fatal error in this cycle. The machine halts and
                keeps the state from before the failing instruction.
        """
        if self.error is not None:
            raise MachineHaltedError(self.error)
        keys = tuple(keys)
        keypad_from_keys(keys)  # reject bad symbols before touching the machine

        try:
            self.state = cycle(self.state, keys)
        except Chip8Error as error:
            self.error = error
            self.logger.log_halt(error)
            raise

    def run(self, cycles: int, keys: Iterable[int] = (), progress: bool = False):
        """Run ``cycles`` ticks with the same keys held for each one."""
        keys = tuple(keys)
        start = time.time()
        for _ in tqdm(range(cycles), desc="Cycles", unit="cycle", disable=not progress):
            self.cycle(keys)
        self.logger.log_run_summary(cycles, time.time() - start)

    def reset(self):
        """Reload the program into a fresh machine and clear any halt."""
        self.error = None
        self.state = self._boot()
        self.logger.log_reset()

    def render(self, scale: int = 8, color_scheme: str = "classic") -> np.ndarray:
        """Current framebuffer as an RGB image."""
        on_color, off_color = create_color_scheme(color_scheme)
        return chip8_display_to_rgb(self.framebuffer, scale, on_color, off_color)
