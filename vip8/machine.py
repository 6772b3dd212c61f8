"""Host-facing CHIP-8 machine.

``Chip8`` wraps the functional core in a small stateful object: the host
calls ``step`` as often as it likes, ``tick_timers`` at 60 Hz, reads the
display and sound state every frame and pushes key events in between.

Because each state is immutable, a failing step simply never replaces
``self.state``: the error propagates and the machine stays exactly where it
was before the step.
"""

from typing import Optional

import numpy as np

from vip8 import emulator, keypad, savestate, timers
from vip8.config import Quirks
from vip8.decode import decode, mnemonic
from vip8.errors import ExecutionError
from vip8.logging import MachineLogger
from vip8.random_source import RandomSource, PRNGKeySource
from vip8.state import EmulatorState, create_state


class Chip8:
    """A single, self-contained CHIP-8 virtual machine.

    Args:
        quirks: Opcode interpretation, COSMAC VIP by default
        rng: Source of random bytes for CXNN, a seeded ``PRNGKeySource`` by default
        logger: Where load/reset/savestate events and DEBUG traces go
    """

    def __init__(
        self,
        quirks: Optional[Quirks] = None,
        rng: Optional[RandomSource] = None,
        logger: Optional[MachineLogger] = None,
    ):
        self.quirks = quirks if quirks is not None else Quirks()
        self.rng = rng if rng is not None else PRNGKeySource(0)
        self.logger = logger if logger is not None else MachineLogger(log_level="WARNING")
        self.rom: Optional[bytes] = None
        self.cycles = 0
        self.state: EmulatorState = create_state(self.quirks)

    def load_rom(self, rom: bytes):
        """Load ``rom`` into a freshly reset machine and point PC at 0x200."""
        state = emulator.load_rom(create_state(self.quirks), rom)
        self.state = state
        self.rom = bytes(rom)
        self.cycles = 0
        self.logger.info(f"Loaded ROM ({len(self.rom)} bytes)")

    def reset(self):
        """Zero the machine and reload the last ROM, if any."""
        self.state = create_state(self.quirks)
        self.cycles = 0
        if self.rom is not None:
            self.state = emulator.load_rom(self.state, self.rom)
        self.logger.info("Machine reset")

    def step(self) -> int:
        """Execute one instruction and return its opcode.

        Raises:
            ExecutionError: the instruction could not run; state is unchanged
        """
        pc = int(self.state.pc)
        try:
            new_state, opcode = emulator.step(self.state, self.rng)
        except ExecutionError as e:
            self.logger.log_error(e, self.state)
            raise
        if self.logger.is_enabled_for("DEBUG"):
            self.logger.log_step(pc, opcode, mnemonic(decode(opcode)))
        self.state = new_state
        self.cycles += 1
        return opcode

    def run(self, cycles: int) -> list[int]:
        """Execute ``cycles`` instructions, stopping at the first error."""
        return [self.step() for _ in range(cycles)]

    def tick_timers(self):
        """One 60 Hz timer tick."""
        self.state = timers.tick(self.state)

    def get_display(self) -> np.ndarray:
        """Copy of the framebuffer as a ``bool[64, 32]`` array indexed ``[x, y]``."""
        return np.array(self.state.display, dtype=bool)

    def set_key(self, index: int, pressed: bool):
        self.state = keypad.set_key(self.state, index, pressed)

    def is_pressed(self, index: int) -> bool:
        return keypad.is_pressed(self.state, index)

    def sound_active(self) -> bool:
        return timers.sound_active(self.state)

    @property
    def waiting_for_key(self) -> bool:
        """True while an FX0A is pending."""
        return self.state.key_wait.active

    def snapshot(self) -> EmulatorState:
        """Current state. Immutable, so safe to keep and ``restore`` later."""
        return self.state

    def restore(self, state: EmulatorState):
        if state.quirks != self.quirks:
            state = state.replace(quirks=self.quirks)
        self.state = state

    def save_state(self) -> bytes:
        data = savestate.dump_state(self.state)
        self.logger.info(f"Saved state ({len(data)} bytes)")
        return data

    def load_state(self, data: bytes):
        self.state = savestate.restore_state(data, self.quirks)
        self.logger.info("Restored state")
