"""
Main CHIP-8 Virtual Machine Class
Owns Memory, Registers, Timers, Display and Keypad and drives the CPU one
instruction at a time. The front end decides how often step() and tick()
are called; nothing here knows about wall-clock time.
"""

from cpu import CPU
from display import Display
from errors import FatalError
from keypad import Keypad
from memory import Memory
from registers import Registers, STACK_CAPACITY
from timers import Timers
from utils import debug_print


class Chip8:
    def __init__(self, program=b"", rng=None, stack_capacity=STACK_CAPACITY):
        """Build a machine with `program` loaded at 0x200.

        Raises:
            ProgramTooLarge: if the program does not fit
        """
        # Initialize components
        self.memory = Memory()
        self.registers = Registers(stack_capacity)
        self.timers = Timers()
        self.display = Display()
        self.keypad = Keypad()
        self.cpu = CPU(
            self.memory, self.registers, self.timers, self.display, self.keypad, rng
        )

        # Fatal error that stopped the CPU, if any
        self.fault = None

        # Timing
        self.cycles = 0
        self.ticks = 0

        self.program = bytes(program)
        self.memory.load(self.program)
        debug_print(f"CHIP8: Loaded {len(self.program)} byte program")

    @property
    def halted(self):
        return self.fault is not None

    @property
    def waiting_for_key(self):
        return self.cpu.waiting_for_key

    def reset(self):
        """Return to power-on state with the same program loaded"""
        self.memory.clear()
        self.memory.load(self.program)
        self.registers.reset()
        self.timers.reset()
        self.display.clear()
        self.keypad.reset()
        self.cpu.reset()
        self.fault = None
        self.cycles = 0
        self.ticks = 0
        debug_print("CHIP8: Reset complete, PC=0x200")

    def step(self):
        """Execute one instruction.

        Returns the Instruction that ran. A fatal error halts the machine:
        it is raised now and raised again on every later call until reset().
        """
        if self.fault is not None:
            raise self.fault
        try:
            instruction = self.cpu.fetch_decode_execute()
        except FatalError as e:
            self.fault = e
            debug_print(f"CHIP8: Halted after {self.cycles} cycles: {e}")
            raise
        self.cycles += 1
        return instruction

    def run_for_cycles(self, cycles):
        """Run `cycles` steps; a fatal error stops the run and propagates"""
        for _ in range(cycles):
            self.step()
        return cycles

    def tick(self):
        """Advance the delay and sound timers by one 60 Hz period"""
        self.timers.tick()
        self.ticks += 1

    def set_key(self, index, pressed):
        self.keypad.set_key(index, pressed)

    def framebuffer(self):
        """64x32 grid of booleans, indexed [row][column]"""
        return self.display.rows()

    def sound_active(self):
        return self.timers.sound_active

    def get_cpu_state(self):
        """Get CPU state for debugging"""
        return {
            "PC": self.registers.PC,
            "I": self.registers.I,
            "SP": self.registers.SP,
            "V": list(self.registers.V),
            "stack": list(self.registers.stack),
            "delay": self.timers.delay,
            "sound": self.timers.sound,
            "cycles": self.cycles,
            "halted": self.halted,
        }
