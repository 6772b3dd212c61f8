"""CHIP-8 memory and register operations."""

import jax.numpy as jnp
from vip8.state import EmulatorState, with_register
from vip8.decode import DecodedInstruction
from vip8.random_source import RandomSource


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return with_register(state, instruction.x, instruction.nn)


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX. No carry flag."""
    return with_register(state, instruction.x, int(state.V[instruction.x]) + instruction.nn)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.asarray(instruction.nnn, dtype=jnp.uint16))


def execute_random(state: EmulatorState, instruction: DecodedInstruction, rng: RandomSource) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    random_value = rng.next_byte() & 0xFF
    return with_register(state, instruction.x, random_value & instruction.nn)
