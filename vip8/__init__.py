"""CHIP-8 virtual machine with COSMAC VIP semantics."""

from vip8.state import EmulatorState, create_state
from vip8.emulator import execute, load_rom, fetch, step, boot
from vip8.decode import DecodedInstruction, decode, mnemonic
from vip8.config import Quirks, MachineConfig, load_config
from vip8.machine import Chip8
from vip8.random_source import RandomSource, PRNGKeySource, SequenceSource
from vip8.savestate import dump_state, restore_state
from vip8.errors import (
    Chip8Error, ExecutionError, MemoryOutOfBounds, InvalidFetch, UnknownOpcode,
    UnsupportedMachineRoutine, StackOverflow, StackUnderflow, MisalignedJump, MissingRandomSource,
    RomTooLarge, SavestateError, ConfigError, InvalidKey,
)
from vip8.constants import *

__all__ = [
    "EmulatorState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "boot",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "mnemonic",
    "Quirks",
    "MachineConfig",
    "load_config",
    "Chip8",
    "RandomSource",
    "PRNGKeySource",
    "SequenceSource",
    "dump_state",
    "restore_state",
    "Chip8Error",
    "ExecutionError",
    "MemoryOutOfBounds",
    "InvalidFetch",
    "UnknownOpcode",
    "UnsupportedMachineRoutine",
    "StackOverflow",
    "StackUnderflow",
    "MisalignedJump",
    "MissingRandomSource",
    "RomTooLarge",
    "SavestateError",
    "ConfigError",
    "InvalidKey",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
    "MEMORY_SIZE",
]
