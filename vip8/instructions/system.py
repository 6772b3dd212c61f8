"""CHIP-8 system instructions (0x0xxx)."""

from vip8.state import EmulatorState
from vip8.decode import DecodedInstruction
from vip8.errors import UnsupportedMachineRoutine
from vip8.stack import pop
from vip8 import display
from vip8.instructions.control_flow import set_pc


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=display.clear(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return set_pc(state.replace(stack=stack), address)


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions.

    Any other 0NNN word would call native COSMAC VIP code, which is not emulated.
    """
    if instruction.raw == 0x00E0:
        return execute_clear_screen(state, instruction)
    if instruction.raw == 0x00EE:
        return execute_return(state, instruction)
    raise UnsupportedMachineRoutine(instruction.raw)
