"""
CHIP-8 Register File
V0-VF, index register I, program counter and the call stack
"""

from errors import StackOverflow, StackUnderflow
from memory import PROGRAM_START

NUM_REGISTERS = 16
STACK_CAPACITY = 16
VF = 0xF


class Registers:
    def __init__(self, stack_capacity=STACK_CAPACITY):
        self.stack_capacity = stack_capacity
        self.reset()

    def reset(self):
        """Power-on state: everything zero, PC at the program start"""
        self.V = [0] * NUM_REGISTERS  # General purpose, VF doubles as flags
        self.I = 0  # Index register
        self.PC = PROGRAM_START  # Program counter
        self.stack = []  # Return addresses, top of stack is stack[-1]

    @property
    def SP(self):
        """Stack pointer: number of return addresses currently stacked"""
        return len(self.stack)

    def get(self, index):
        return self.V[index]

    def set(self, index, value):
        self.V[index] = value & 0xFF

    def get_i(self):
        return self.I

    def set_i(self, value):
        self.I = value & 0xFFFF

    def get_pc(self):
        return self.PC

    def set_pc(self, value):
        self.PC = value & 0xFFFF

    def push(self, addr):
        """Push a return address"""
        if len(self.stack) >= self.stack_capacity:
            raise StackOverflow(self.stack_capacity)
        self.stack.append(addr & 0xFFFF)

    def pop(self):
        """Pop a return address"""
        if not self.stack:
            raise StackUnderflow()
        return self.stack.pop()
