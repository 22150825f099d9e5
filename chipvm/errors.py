"""Exceptions raised by the emulator."""


class EmulatorError(Exception):
    """Base class for unrecoverable emulator conditions."""


class MemoryBoundsError(EmulatorError):
    """Program counter ran past the end of addressable memory."""

    def __init__(self, pc: int):
        super().__init__(f"instruction fetch out of bounds at pc=0x{pc:04X}")
        self.pc = pc


class StackOverflowError(EmulatorError):
    """Subroutine call with every stack slot in use."""

    def __init__(self, pc: int, depth: int):
        super().__init__(f"stack overflow at pc=0x{pc:04X} (depth {depth})")
        self.pc = pc
        self.depth = depth


class StackUnderflowError(EmulatorError):
    """Return from subroutine with nothing on the stack."""

    def __init__(self, pc: int):
        super().__init__(f"stack underflow at pc=0x{pc:04X}")
        self.pc = pc


class ProgramLoadError(EmulatorError):
    """Program image could not be read."""
