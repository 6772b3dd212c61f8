"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from vip8.state import EmulatorState, KeyWaitState, with_register
from vip8.decode import DecodedInstruction
from vip8.constants import FONT_START, FONT_SPRITE_SIZE, INDEX_MASK, ADDRESS_MASK
from vip8.errors import UnknownOpcode
from vip8 import keypad, memory


def _set_index(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(I=jnp.asarray(value & INDEX_MASK, dtype=jnp.uint16))


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return with_register(state, instruction.x, int(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=jnp.asarray(state.V[instruction.x], dtype=jnp.uint8))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=jnp.asarray(state.V[instruction.x], dtype=jnp.uint8))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register. VF is not touched."""
    return _set_index(state, int(state.I) + int(state.V[instruction.x]))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Arms the key wait and rewinds PC onto this instruction. ``resume_key_wait``
    completes it on a later step.
    """
    waiting = KeyWaitState(register=instruction.x, baseline=state.keypad)
    rewound_pc = (int(state.pc) - 2) & ADDRESS_MASK
    return state.replace(key_wait=waiting, pc=jnp.asarray(rewound_pc, dtype=jnp.uint16))


def resume_key_wait(state: EmulatorState) -> EmulatorState:
    """Poll a pending FX0A.

    A key that is down now and was up when the wait began (or was released
    since) completes it: its index goes to VX and PC moves past the FX0A.
    Otherwise released keys drop out of the baseline and PC stays put.
    """
    waiting = state.key_wait
    pressed = keypad.press_transitions(state.keypad, waiting.baseline)
    if not bool(jnp.any(pressed)):
        return state.replace(key_wait=waiting.replace(baseline=waiting.baseline & state.keypad))

    key = int(jnp.argmax(pressed))
    state = with_register(state, waiting.register, key)
    next_pc = (int(state.pc) + 2) & ADDRESS_MASK
    return state.replace(key_wait=KeyWaitState(), pc=jnp.asarray(next_pc, dtype=jnp.uint16))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    return _set_index(state, FONT_START + digit * FONT_SPRITE_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=memory.write_bytes(state.memory, int(state.I), digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    new_memory = memory.write_bytes(state.memory, int(state.I), state.V[:count])
    state = state.replace(memory=new_memory)

    if state.quirks.memory_increments_i:
        return _set_index(state, int(state.I) + count)
    return state


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    values = memory.read_bytes(state.memory, int(state.I), count)
    state = state.replace(V=state.V.at[:count].set(values))

    if state.quirks.memory_increments_i:
        return _set_index(state, int(state.I) + count)
    return state


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise UnknownOpcode(instruction.raw)
    return handler(state, instruction)
