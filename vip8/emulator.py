"""Main CHIP-8 emulator execution engine."""

from typing import Optional

import jax.numpy as jnp
from vip8.state import EmulatorState, create_state
from vip8.decode import decode
from vip8.constants import PROGRAM_START, MAX_ROM_SIZE, ADDRESS_MASK
from vip8.errors import InvalidFetch, MemoryOutOfBounds, MissingRandomSource, RomTooLarge, UnknownOpcode
from vip8.random_source import RandomSource
from vip8 import memory
from vip8.instructions.system import execute_system_instruction
from vip8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from vip8.instructions.alu import execute_alu_operation
from vip8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from vip8.instructions.display import execute_display
from vip8.instructions.misc import execute_misc_instruction, resume_key_wait


def _register_pair(handler):
    """5XY0 / 9XY0 only exist with a zero low nibble."""
    def dispatch(state, instruction):
        if instruction.n != 0:
            raise UnknownOpcode(instruction.raw)
        return handler(state, instruction)
    return dispatch


def _execute_key_instruction(state, instruction):
    """EX9E / EXA1 - Skip on key state."""
    if instruction.nn == 0x9E:
        return execute_skip_if_key(state, instruction)
    if instruction.nn == 0xA1:
        return execute_skip_if_not_key(state, instruction)
    raise UnknownOpcode(instruction.raw)


INSTRUCTION_FAMILIES = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    _register_pair(execute_skip_if_equal_register),
    execute_set,
    execute_add,
    execute_alu_operation,
    _register_pair(execute_skip_if_not_equal_register),
    execute_set_index,
    execute_jump_with_offset,
    None,  # CXNN needs the random source, see execute()
    execute_display,
    _execute_key_instruction,
    execute_misc_instruction,
]


def execute(state: EmulatorState, instruction: int, rng: Optional[RandomSource] = None) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Expects PC to already point past ``instruction`` (see ``fetch``). Raises an
    ``ExecutionError`` subclass instead of returning a partially updated state.
    CXNN draws from ``rng`` and fails with ``MissingRandomSource`` without one.
    """
    decoded_instruction = decode(instruction)

    if decoded_instruction.opcode == 0xC:
        if rng is None:
            raise MissingRandomSource(decoded_instruction.raw)
        return execute_random(state, decoded_instruction, rng)
    return INSTRUCTION_FAMILIES[decoded_instruction.opcode](state, decoded_instruction)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC past it."""
    pc = int(state.pc)
    try:
        instruction = memory.read_word(state.memory, pc)
    except MemoryOutOfBounds:
        raise InvalidFetch(pc) from None
    return state.replace(pc=jnp.asarray((pc + 2) & ADDRESS_MASK, dtype=jnp.uint16)), instruction


def step(state: EmulatorState, rng: Optional[RandomSource] = None) -> tuple[EmulatorState, int]:
    """Run one fetch-decode-execute cycle.

    While an FX0A is pending nothing is fetched: the step only polls the
    keypad. Returns the new state and the opcode that ran (or is waiting).
    """
    if state.key_wait.active:
        instruction = memory.read_word(state.memory, int(state.pc))
        return resume_key_wait(state), instruction

    state, instruction = fetch(state)
    return execute(state, instruction, rng), instruction


def load_rom(state: EmulatorState, rom: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200 and point PC at it."""
    rom_data = bytes(rom)
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom_data), MAX_ROM_SIZE)
    new_memory = memory.write_bytes(state.memory, PROGRAM_START, list(rom_data))
    return state.replace(memory=new_memory, pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16))


def boot(rom: bytes, quirks=None) -> EmulatorState:
    """Fresh state with ``rom`` loaded."""
    state = create_state() if quirks is None else create_state(quirks)
    return load_rom(state, rom)
