"""Console logging utilities for vip8.

``ConsoleLogger`` prints ``[elapsed][LEVEL][name] message`` lines, colored when
the stream is a terminal. ``MachineLogger`` adds the emulator vocabulary:
instruction traces, register dumps and failed-step reports. Long headless
runs get a ``tqdm`` progress bar.
"""

import sys
import time
from functools import partialmethod
from typing import Optional, TextIO

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


def _level_rank(level: str) -> int:
    try:
        return LEVELS.index(level.upper())
    except ValueError:
        raise ValueError(f"unknown log level {level!r}, expected one of {', '.join(LEVELS)}") from None


class ConsoleLogger:
    """Leveled console logger.

    Args:
        name: Shown in brackets on every line
        log_level: Lowest level that is printed
        use_colors: Color the level tag, only honored on a TTY
        show_timestamps: Prefix seconds elapsed since the logger was created
        stream: Output stream, ``sys.stdout`` by default
    """

    def __init__(
        self,
        name: str = "vip8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.threshold = _level_rank(log_level)
        self.stream = stream if stream is not None else sys.stdout
        self.colored = use_colors and getattr(self.stream, "isatty", lambda: False)()
        self.show_timestamps = show_timestamps
        self.started = time.monotonic()

    def is_enabled_for(self, level: str) -> bool:
        return _level_rank(level) >= self.threshold

    def _tag(self, level: str) -> str:
        tag = f"[{level:>8s}]"
        if self.colored:
            return f"{_COLORS[level]}{tag}{_RESET}"
        return tag

    def log(self, level: str, message: str):
        level = level.upper()
        if not self.is_enabled_for(level):
            return
        elapsed = f"[{time.monotonic() - self.started:8.2f}s]" if self.show_timestamps else ""
        print(f"{elapsed}{self._tag(level)}[{self.name}] {message}", file=self.stream, flush=True)

    debug = partialmethod(log, "DEBUG")
    info = partialmethod(log, "INFO")
    warning = partialmethod(log, "WARNING")
    error = partialmethod(log, "ERROR")
    critical = partialmethod(log, "CRITICAL")


def format_registers(state) -> str:
    """One-line dump: ``V0=.. .. VF=.. I=.... PC=... SP=. DT=. ST=.``."""
    registers = " ".join(f"V{i:X}={int(v):02X}" for i, v in enumerate(state.V))
    return (
        f"{registers} I={int(state.I):04X} PC={int(state.pc):03X} SP={state.stack.pointer} "
        f"DT={int(state.delay_timer)} ST={int(state.sound_timer)}"
    )


class MachineLogger(ConsoleLogger):
    """Logger that knows how to describe emulator state."""

    def log_step(self, pc: int, opcode: int, text: str):
        """DEBUG trace line for one executed instruction."""
        if self.is_enabled_for("DEBUG"):
            self.debug(f"{pc:03X}: {opcode:04X}  {text}")

    def log_registers(self, state, level: str = "DEBUG"):
        if self.is_enabled_for(level):
            self.log(level, format_registers(state))

    def log_error(self, error: Exception, state=None):
        """Report a failed step with the state the machine stopped in."""
        self.error(f"{type(error).__name__}: {error}")
        if state is not None:
            self.log_registers(state, level="ERROR")


def build_progress_bar(total: int, desc: str = "Running", unit: str = "frame", disable: bool = False) -> tqdm:
    """Progress bar for headless runs."""
    return tqdm(
        total=total,
        desc=desc,
        unit=unit,
        disable=disable,
        dynamic_ncols=True,
        leave=False,
    )
