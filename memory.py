"""
CHIP-8 Memory
Flat 4KB address space holding the hex font and the loaded program
"""

from errors import AddressOutOfBounds, ProgramTooLarge

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
# Loading must leave the program strictly smaller than the space above 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START
FONT_START = 0x050
FONT_GLYPH_SIZE = 5

# Hex digit sprites 0-F, 4 pixels wide (high nibble), 5 rows each
FONT = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)
FONT_END = FONT_START + len(FONT) - 1  # 0x09F


def font_address(digit):
    """Address of the glyph for hex digit `digit` (only the low nibble counts)"""
    return FONT_START + (digit & 0xF) * FONT_GLYPH_SIZE


class Memory:
    def __init__(self):
        self.ram = bytearray(MEMORY_SIZE)
        self.program_size = 0
        self._install_font()

    def _install_font(self):
        self.ram[FONT_START : FONT_END + 1] = FONT

    def clear(self):
        """Zero everything and put the font back"""
        self.ram[:] = bytes(MEMORY_SIZE)
        self.program_size = 0
        self._install_font()

    def load(self, program):
        """Copy a program image to 0x200.

        Args:
            program (bytes): raw big-endian CHIP-8 bytecode

        Raises:
            ProgramTooLarge: if the image does not fit below the top of memory
        """
        program = bytes(program)
        if len(program) >= MAX_PROGRAM_SIZE:
            raise ProgramTooLarge(len(program), MAX_PROGRAM_SIZE)
        self.ram[PROGRAM_START : PROGRAM_START + len(program)] = program
        self.program_size = len(program)

    def check_range(self, addr, length=1):
        """Raise AddressOutOfBounds unless addr..addr+length-1 is addressable"""
        if addr < 0 or addr >= MEMORY_SIZE:
            raise AddressOutOfBounds(addr)
        last = addr + length - 1
        if length > 0 and last >= MEMORY_SIZE:
            raise AddressOutOfBounds(last)

    def read_byte(self, addr):
        """Read from memory"""
        if addr < 0 or addr >= MEMORY_SIZE:
            raise AddressOutOfBounds(addr)
        return self.ram[addr]

    def write_byte(self, addr, value):
        """Write to memory"""
        if addr < 0 or addr >= MEMORY_SIZE:
            raise AddressOutOfBounds(addr)
        self.ram[addr] = value & 0xFF

    def read_word(self, addr):
        """Big-endian 16-bit read (used for opcode fetch)"""
        self.check_range(addr, 2)
        return (self.ram[addr] << 8) | self.ram[addr + 1]

    def read_block(self, addr, length):
        self.check_range(addr, length)
        return bytes(self.ram[addr : addr + length])

    def write_block(self, addr, data):
        """Write a run of bytes; nothing is written if any byte would land out of range"""
        self.check_range(addr, len(data))
        self.ram[addr : addr + len(data)] = bytes(v & 0xFF for v in data)
