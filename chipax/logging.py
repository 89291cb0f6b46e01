"""Console logging utilities for the chipax interpreter.

A small levelled logger that writes timestamped, optionally coloured lines
to a stream, plus a machine-specific subclass that reports program loads,
halts and run summaries.
"""

import sys
import time
from typing import Optional, TextIO

from chipax.errors import Chip8Error, InvalidOpcodeError


class ConsoleLogger:
    """Flexible console logger with levels and colour formatting."""

    LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    def __init__(
        self,
        name: str = "chipax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        if log_level.upper() not in self.LEVELS:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.LEVELS)}"
            )
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream
        out = self._stream()
        self.use_colors = use_colors and hasattr(out, "isatty") and out.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m",
            }
            if self.use_colors
            else {k: "" for k in self.LEVELS + ("RESET",)}
        )
        self.level_order = {level: order for order, level in enumerate(self.LEVELS)}

    def _stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output
        return self.stream if self.stream is not None else sys.stdout

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            level_str = f"{color}{level_str}{self.colors['RESET']}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            print(self._format_message(level, message), file=self._stream(), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class MachineLogger(ConsoleLogger):
    """Logger for interpreter lifecycle events."""

    def __init__(self, name: str = "chipax", log_level: str = "WARNING", **kwargs):
        super().__init__(name, log_level=log_level, **kwargs)

    def log_rom_loaded(self, size: int):
        self.info(f"Loaded program image ({size} bytes) at 0x200")

    def log_halt(self, error: Chip8Error):
        """Report the fatal error that stopped the machine."""
        pc = "unknown" if error.pc is None else f"0x{error.pc:03X}"
        if isinstance(error, InvalidOpcodeError):
            self.error(f"Halted: invalid opcode 0x{error.instruction:04X} at pc={pc}")
        else:
            self.error(f"Halted: {type(error).__name__}: {error.message} at pc={pc}")

    def log_reset(self):
        self.info("Machine reset, program reloaded")

    def log_run_summary(self, cycles: int, elapsed: float):
        """Log cycle throughput for a batch run."""
        rate = cycles / elapsed if elapsed > 0 else 0.0
        self.debug(f"Ran {cycles} cycles in {elapsed:.3f}s ({rate:.0f} cycles/s)")
