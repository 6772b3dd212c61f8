"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from vip8.state import EmulatorState
from vip8.decode import DecodedInstruction
from vip8.constants import ADDRESS_MASK
from vip8.errors import MisalignedJump
from vip8.stack import push
from vip8 import keypad


def set_pc(state: EmulatorState, address: int) -> EmulatorState:
    """Transfer control to ``address`` within the 12-bit address space."""
    address &= ADDRESS_MASK
    if address & 1:
        raise MisalignedJump(address)
    return state.replace(pc=jnp.asarray(address, dtype=jnp.uint16))


def skip_next(state: EmulatorState) -> EmulatorState:
    """Step over the following 2-byte instruction."""
    return state.replace(pc=jnp.asarray((int(state.pc) + 2) & ADDRESS_MASK, dtype=jnp.uint16))


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return set_pc(state, instruction.nnn)


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return skip_next(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to NNN + V0, or BXNN - jump to XNN + VX with the ``jump_uses_vx`` quirk."""
    register = instruction.x if state.quirks.jump_uses_vx else 0
    return set_pc(state, instruction.nnn + int(state.V[register]))


def _key_pressed(state: EmulatorState, instruction: DecodedInstruction) -> bool:
    return keypad.is_pressed(state, int(state.V[instruction.x]) & 0xF)


execute_skip_if_key = make_skip_instruction(
    lambda state, inst: _key_pressed(state, inst)
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst)
)
