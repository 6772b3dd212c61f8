"""CHIP-8 emulator state structures."""

import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from vip8.config import Quirks
from vip8.constants import (
    MEMORY_SIZE, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, NUM_KEYS, NUM_REGISTERS
)

NO_KEY_WAIT = -1


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


@dataclass(frozen=True)
class KeyWaitState:
    """Pending FX0A instruction.

    ``register`` is the destination register, or ``NO_KEY_WAIT``. ``baseline``
    holds the keys that were already down, so only fresh presses count.
    """
    register: int = NO_KEY_WAIT
    baseline: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))

    @property
    def active(self) -> bool:
        return self.register != NO_KEY_WAIT


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    key_wait: KeyWaitState = KeyWaitState()
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    quirks: Quirks = field(pytree_node=False, default=Quirks())


def create_state(quirks: Quirks = Quirks()) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(quirks=quirks)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def with_register(state: EmulatorState, index: int, value: int) -> EmulatorState:
    """Return ``state`` with V[index] set to ``value`` (wrapped to 8 bits)."""
    return state.replace(V=state.V.at[index].set(value & 0xFF))


def with_flag(state: EmulatorState, value: int) -> EmulatorState:
    """Return ``state`` with VF set to ``value``."""
    return state.replace(V=state.V.at[0xF].set(value & 0xFF))
