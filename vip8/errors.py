"""Error types raised by the CHIP-8 core."""


class Chip8Error(Exception):
    """Base class for every error raised by vip8."""


class ExecutionError(Chip8Error):
    """A step could not complete. The machine state is left unchanged."""


class MemoryOutOfBounds(ExecutionError):
    """Memory access outside the 4 KiB address space."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        if length == 1:
            message = f"memory access out of bounds at 0x{address:04X}"
        else:
            message = f"memory access out of bounds: {length} bytes at 0x{address:04X}"
        super().__init__(message)


class InvalidFetch(MemoryOutOfBounds):
    """Instruction fetch from an address with no full word behind it."""

    def __init__(self, address: int):
        super().__init__(address, 2)
        self.args = (f"cannot fetch instruction at 0x{address:04X}",)


class UnknownOpcode(ExecutionError):
    """The fetched word matches no instruction pattern."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"unknown opcode 0x{opcode:04X}")


class UnsupportedMachineRoutine(UnknownOpcode):
    """0NNN: call into native COSMAC VIP machine code."""

    def __init__(self, opcode: int):
        super().__init__(opcode)
        self.address = opcode & 0x0FFF
        self.args = (f"unsupported machine code routine at 0x{self.address:03X} (opcode 0x{opcode:04X})",)


class StackOverflow(ExecutionError):
    """Subroutine call with a full call stack."""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"call stack overflow (depth {depth})")


class StackUnderflow(ExecutionError):
    """Return with an empty call stack."""

    def __init__(self):
        super().__init__("return with an empty call stack")


class MisalignedJump(ExecutionError):
    """Control transfer to an odd address."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"jump to odd address 0x{address:03X}")


class MissingRandomSource(ExecutionError):
    """CXNN executed without a random source to draw from."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"opcode 0x{opcode:04X} needs a random source, none was given")


class RomTooLarge(Chip8Error):
    """ROM does not fit between PROGRAM_START and the end of memory."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM is {size} bytes, at most {limit} fit in memory")


class SavestateError(Chip8Error):
    """Savestate payload cannot be restored."""


class ConfigError(Chip8Error, ValueError):
    """Invalid machine configuration."""


class InvalidKey(Chip8Error, ValueError):
    """Key index outside 0x0-0xF."""

    def __init__(self, index):
        self.index = index
        super().__init__(f"key index must be in 0x0-0xF, got {index!r}")
