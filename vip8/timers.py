"""Delay and sound timers."""

import jax.numpy as jnp

from vip8.state import EmulatorState


def _decrement(timer: jnp.ndarray) -> jnp.ndarray:
    value = int(timer)
    return jnp.asarray(value - 1 if value > 0 else 0, dtype=jnp.uint8)


def tick(state: EmulatorState) -> EmulatorState:
    """One 60 Hz tick: count each nonzero timer down by one."""
    return state.replace(
        delay_timer=_decrement(state.delay_timer),
        sound_timer=_decrement(state.sound_timer),
    )


def sound_active(state: EmulatorState) -> bool:
    """The buzzer sounds while the sound timer is nonzero."""
    return int(state.sound_timer) > 0
