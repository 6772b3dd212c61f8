"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from vip8 import create_state, load_rom, Quirks, SequenceSource


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state (VIP quirks) with PC at 0x200."""
    return load_rom(create_state(), b"")


@pytest.fixture
def vip_state():
    """Provide a fresh state with COSMAC VIP quirks."""
    return load_rom(create_state(Quirks.vip()), b"")


@pytest.fixture
def modern_state():
    """Provide a fresh state with modern (CHIP-48) quirks."""
    return load_rom(create_state(Quirks.modern()), b"")


@pytest.fixture
def rng():
    """Deterministic random source."""
    return SequenceSource([0xA5, 0x3C, 0xFF, 0x00])


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10, VF=1)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def program(*opcodes):
    """Assemble 16-bit opcodes into big-endian ROM bytes."""
    return b"".join(op.to_bytes(2, "big") for op in opcodes)


def with_pc(state, address):
    """Helper to move the program counter."""
    return state.replace(pc=jnp.asarray(address, dtype=jnp.uint16))
