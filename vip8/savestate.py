"""Versioned savestate encoding.

A savestate is the msgpack encoding (via ``flax.serialization``) of::

    {"version": SAVESTATE_VERSION, "machine": <state dict of EmulatorState>}

The state dict covers memory, registers, stack, timers, display, keypad and
any pending key wait. Quirks are configuration, not state: the caller passes
them back in on restore.
"""

import operator

import jax
import jax.numpy as jnp
import msgpack
import numpy as np
from flax import serialization

from vip8.config import Quirks
from vip8.constants import (
    ADDRESS_MASK, MEMORY_SIZE, SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, NUM_KEYS, NUM_REGISTERS
)
from vip8.errors import SavestateError
from vip8.state import EmulatorState, NO_KEY_WAIT, create_state

SAVESTATE_VERSION = 1

# Dotted field path -> (shape, dtype) every restored leaf must have
_EXPECTED_LEAVES = {
    "memory": ((MEMORY_SIZE,), jnp.uint8),
    "pc": ((), jnp.uint16),
    "display": ((SCREEN_WIDTH, SCREEN_HEIGHT), jnp.bool_),
    "stack.data": ((STACK_SIZE,), jnp.uint16),
    "delay_timer": ((), jnp.uint8),
    "sound_timer": ((), jnp.uint8),
    "keypad": ((NUM_KEYS,), jnp.bool_),
    "key_wait.baseline": ((NUM_KEYS,), jnp.bool_),
    "V": ((NUM_REGISTERS,), jnp.uint8),
    "I": ((), jnp.uint16),
}


def dump_state(state: EmulatorState) -> bytes:
    """Serialize ``state`` to savestate bytes."""
    payload = {
        "version": SAVESTATE_VERSION,
        "machine": serialization.to_state_dict(state),
    }
    return serialization.msgpack_serialize(jax.device_get(payload))


def _as_device_array(leaf):
    if isinstance(leaf, np.ndarray):
        return jnp.asarray(leaf)
    return leaf


def _field(state: EmulatorState, path: str):
    value = state
    for name in path.split("."):
        value = getattr(value, name)
    return value


def _validate(state: EmulatorState):
    for path, (shape, dtype) in _EXPECTED_LEAVES.items():
        leaf = _field(state, path)
        if not hasattr(leaf, "shape") or tuple(leaf.shape) != shape:
            raise SavestateError(f"field {path!r} has shape {getattr(leaf, 'shape', None)}, expected {shape}")
        if leaf.dtype != dtype:
            raise SavestateError(f"field {path!r} has dtype {leaf.dtype}, expected {jnp.dtype(dtype)}")

    if not 0 <= state.stack.pointer <= STACK_SIZE:
        raise SavestateError(f"stack pointer {state.stack.pointer} out of range")
    if int(jnp.max(state.stack.data)) > ADDRESS_MASK:
        raise SavestateError("call stack holds an address beyond 0xFFF")
    if int(state.pc) & 1 or int(state.pc) >= MEMORY_SIZE:
        raise SavestateError(f"program counter 0x{int(state.pc):04X} is not a valid even address")
    if state.key_wait.register != NO_KEY_WAIT and not 0 <= state.key_wait.register < NUM_REGISTERS:
        raise SavestateError(f"key wait targets register {state.key_wait.register}")


def restore_state(data: bytes, quirks: Quirks = Quirks()) -> EmulatorState:
    """Rebuild an ``EmulatorState`` from ``dump_state`` output.

    Raises:
        SavestateError: the bytes do not decode, carry another version or
            describe a machine that could not exist
    """
    try:
        payload = serialization.msgpack_restore(data)
    except (msgpack.exceptions.UnpackException, ValueError, TypeError) as e:
        raise SavestateError(f"cannot decode savestate: {e}") from e

    if not isinstance(payload, dict) or "machine" not in payload:
        raise SavestateError("savestate payload is missing the machine state")
    version = payload.get("version")
    if version != SAVESTATE_VERSION:
        raise SavestateError(f"unsupported savestate version {version!r} (expected {SAVESTATE_VERSION})")

    try:
        state = serialization.from_state_dict(create_state(quirks), payload["machine"])
        state = jax.tree_util.tree_map(_as_device_array, state)
        state = state.replace(
            stack=state.stack.replace(pointer=operator.index(state.stack.pointer)),
            key_wait=state.key_wait.replace(register=operator.index(state.key_wait.register)),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise SavestateError(f"malformed savestate: {e}") from e

    _validate(state)
    return state
