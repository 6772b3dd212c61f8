"""Input latch: the 16-key hexadecimal keypad."""

import operator

import jax.numpy as jnp

from vip8.constants import NUM_KEYS
from vip8.errors import InvalidKey
from vip8.state import EmulatorState


def _key_index(index) -> int:
    try:
        key = operator.index(index)
    except TypeError:
        raise InvalidKey(index) from None
    if not 0 <= key < NUM_KEYS:
        raise InvalidKey(index)
    return key


def set_key(state: EmulatorState, index: int, pressed: bool) -> EmulatorState:
    return state.replace(keypad=state.keypad.at[_key_index(index)].set(bool(pressed)))


def is_pressed(state: EmulatorState, index: int) -> bool:
    return bool(state.keypad[_key_index(index)])


def press_transitions(keypad: jnp.ndarray, baseline: jnp.ndarray) -> jnp.ndarray:
    """Keys that are down now but were up in ``baseline``."""
    return keypad & ~baseline
