"""
CHIP-8 error taxonomy
Load-time errors are recoverable; everything deriving from FatalError halts the CPU
"""


class Chip8Error(Exception):
    """Base for every error raised by the interpreter core."""

    pass


class ProgramTooLarge(Chip8Error):
    def __init__(self, actual, allowed):
        self.actual = actual
        self.allowed = allowed
        super().__init__(
            f"Program is {actual} bytes, must be smaller than {allowed} bytes"
        )


class FatalError(Chip8Error):
    """Runtime fault; the VM refuses to step again until reset."""

    pass


class AddressOutOfBounds(FatalError):
    def __init__(self, address):
        self.address = address
        super().__init__(f"Memory access out of bounds at 0x{address:04X}")


class IllegalInstruction(FatalError):
    def __init__(self, opcode, address=None):
        self.opcode = opcode
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Illegal instruction 0x{opcode:04X}{where}")


class StackOverflow(FatalError):
    def __init__(self, capacity):
        self.capacity = capacity
        super().__init__(f"Call stack overflow (capacity {capacity})")


class StackUnderflow(FatalError):
    def __init__(self):
        super().__init__("Return with empty call stack")
