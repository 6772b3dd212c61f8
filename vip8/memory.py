"""Bounds-checked access to CHIP-8 memory.

Every instruction that touches memory goes through these functions, which turn
a stray address into ``MemoryOutOfBounds`` instead of a silent wrap or an
indexing error.
"""

from typing import Sequence

import jax.numpy as jnp

from vip8.constants import MEMORY_SIZE
from vip8.errors import MemoryOutOfBounds


def check_range(address: int, length: int = 1):
    """Raise ``MemoryOutOfBounds`` unless [address, address + length) fits in memory."""
    if address < 0 or length < 0 or address + length > MEMORY_SIZE:
        raise MemoryOutOfBounds(address, length)


def read_byte(memory: jnp.ndarray, address: int) -> int:
    check_range(address)
    return int(memory[address])


def write_byte(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    check_range(address)
    return memory.at[address].set(value & 0xFF)


def read_word(memory: jnp.ndarray, address: int) -> int:
    """Read a big-endian 16-bit word."""
    check_range(address, 2)
    return _pack_u16(int(memory[address]), int(memory[address + 1]))


def read_bytes(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    check_range(address, length)
    return memory[address:address + length]


def write_bytes(memory: jnp.ndarray, address: int, values: Sequence[int]) -> jnp.ndarray:
    values = jnp.asarray(values, dtype=jnp.uint8)
    check_range(address, len(values))
    return memory.at[address:address + len(values)].set(values)


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into uint16."""
    return (high << 8) | low
