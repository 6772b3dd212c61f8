"""CHIP-8 display operations."""

from vip8.state import EmulatorState, with_flag
from vip8.decode import DecodedInstruction
from vip8 import display, memory


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])
    rows = memory.read_bytes(state.memory, int(state.I), instruction.n)

    new_display, collision = display.draw_sprite(state.display, sprite_x, sprite_y, rows)
    return with_flag(state.replace(display=new_display), int(collision))
