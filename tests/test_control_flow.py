"""Tests for control flow instructions."""

import pytest
from vip8 import execute, MisalignedJump, StackOverflow, STACK_SIZE
from conftest import set_registers, with_pc


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """1NNN - Jump to address."""
        state = execute(fresh_state, 0x1ABC)
        assert state.pc == 0xABC

    def test_jump_to_odd_address(self, fresh_state):
        """1NNN - Odd targets would leave PC misaligned."""
        with pytest.raises(MisalignedJump) as excinfo:
            execute(fresh_state, 0x1001)
        assert excinfo.value.address == 0x001

    def test_call_pushes_return_address(self, fresh_state):
        """2NNN - Current PC is pushed before the jump."""
        state = execute(fresh_state, 0x2300)
        assert state.pc == 0x300
        assert state.stack.pointer == 1
        assert state.stack.data[0] == 0x200

    def test_call_overflow_leaves_state_unchanged(self, fresh_state):
        """2NNN - A full stack refuses the call."""
        state = fresh_state
        for _ in range(STACK_SIZE):
            state = execute(state, 0x2400)
        assert state.stack.pointer == STACK_SIZE

        with pytest.raises(StackOverflow):
            execute(state, 0x2600)

        assert state.pc == 0x400
        assert state.stack.pointer == STACK_SIZE


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = set_registers(fresh_state, V5=0x42)
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = set_registers(fresh_state, V5=0x41)
        initial_pc = state.pc

        state = execute(state, 0x3542)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = set_registers(fresh_state, V3=0x10)
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = set_registers(fresh_state, V3=0x20)
        initial_pc = state.pc

        state = execute(state, 0x4320)
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x55)
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x44)
        initial_pc = state.pc

        state = execute(state, 0x5120)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = set_registers(fresh_state, V7=0xAA, V8=0xBB)
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = set_registers(fresh_state, V7=0xCC, V8=0xCC)
        initial_pc = state.pc

        state = execute(state, 0x9780)
        assert state.pc == initial_pc

    def test_skip_with_zero_values(self, fresh_state):
        """Test skip instructions with zero values."""
        state = fresh_state
        initial_pc = state.pc

        state = execute(state, 0x3000)  # Skip if V0 == 0
        assert state.pc == initial_pc + 2

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = set_registers(fresh_state, V0=0xFF)
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2

    def test_skip_at_end_of_memory_wraps(self, fresh_state):
        """Skipping past 0xFFE wraps into the 12-bit address space."""
        state = with_pc(fresh_state, 0xFFE)
        state = execute(state, 0x3000)
        assert state.pc == 0x000


class TestJumpWithOffset:
    """Test jump with offset under both quirk settings."""

    def test_jump_with_offset_vip(self, vip_state):
        """BNNN - Jump with V0 offset."""
        state = execute(vip_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_modern(self, modern_state):
        """BXNN - Jump with VX offset."""
        state = execute(modern_state, 0x6210)  # V2 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V2
        assert state.pc == 0x260

    def test_jump_mode_comparison(self, vip_state, modern_state):
        """Quirks change the offset register."""
        state_vip = execute(vip_state, 0x6010)  # V0 = 0x10
        state_vip = execute(state_vip, 0x6230)  # V2 = 0x30
        state_vip = execute(state_vip, 0xB250)

        state_modern = execute(modern_state, 0x6010)
        state_modern = execute(state_modern, 0x6230)
        state_modern = execute(state_modern, 0xB250)

        assert state_vip.pc == 0x260  # 0x250 + V0
        assert state_modern.pc == 0x280  # 0x250 + V2

    def test_jump_with_offset_wraps(self, vip_state):
        """BNNN - Targets past 0xFFF wrap to 12 bits."""
        state = execute(vip_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xBFF0)
        assert state.pc == 0x000

    def test_jump_with_offset_odd_target(self, vip_state):
        state = execute(vip_state, 0x6001)  # V0 = 1
        with pytest.raises(MisalignedJump):
            execute(state, 0xB300)
