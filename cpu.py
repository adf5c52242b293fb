"""
CHIP-8 CPU
Fetch-decode-execute over the machine's memory, registers, timers, display
and keypad. Decoding lives in instructions.py; this module holds one handler
per Op in a dispatch table.

Ambiguous behaviours follow the COSMAC VIP interpreter:
- 8XY6/8XYE shift VY and store the result in VX
- FX55/FX65 leave I pointing past the last register transferred (I += X + 1)
- Whenever an instruction writes VF as a flag, the flag is written after the
  primary result, so with X == F the flag wins
"""

import random

from errors import AddressOutOfBounds, FatalError
from instructions import Op, decode
from memory import font_address
from registers import VF
from utils import debug_print


class CPU:
    def __init__(self, memory, registers, timers, display, keypad, rng=None):
        self.memory = memory
        self.registers = registers
        self.timers = timers
        self.display = display
        self.keypad = keypad
        self.rng = rng if rng is not None else random.Random()

        # Set while FX0A is re-executing itself for lack of a key press
        self.waiting_for_key = False

        # Instruction counter, cleared by reset()
        self.total_instructions = 0

        self.instruction_dispatch = {
            Op.SYS: self.execute_sys,
            Op.CLS: self.execute_cls,
            Op.RET: self.execute_ret,
            Op.JP: self.execute_jp,
            Op.CALL: self.execute_call,
            Op.SE_VX_NN: self.execute_se_vx_nn,
            Op.SNE_VX_NN: self.execute_sne_vx_nn,
            Op.SE_VX_VY: self.execute_se_vx_vy,
            Op.LD_VX_NN: self.execute_ld_vx_nn,
            Op.ADD_VX_NN: self.execute_add_vx_nn,
            Op.LD_VX_VY: self.execute_ld_vx_vy,
            Op.OR: self.execute_or,
            Op.AND: self.execute_and,
            Op.XOR: self.execute_xor,
            Op.ADD_VX_VY: self.execute_add_vx_vy,
            Op.SUB: self.execute_sub,
            Op.SHR: self.execute_shr,
            Op.SUBN: self.execute_subn,
            Op.SHL: self.execute_shl,
            Op.SNE_VX_VY: self.execute_sne_vx_vy,
            Op.LD_I: self.execute_ld_i,
            Op.JP_V0: self.execute_jp_v0,
            Op.RND: self.execute_rnd,
            Op.DRW: self.execute_drw,
            Op.SKP: self.execute_skp,
            Op.SKNP: self.execute_sknp,
            Op.LD_VX_DT: self.execute_ld_vx_dt,
            Op.LD_VX_K: self.execute_ld_vx_k,
            Op.LD_DT_VX: self.execute_ld_dt_vx,
            Op.LD_ST_VX: self.execute_ld_st_vx,
            Op.ADD_I_VX: self.execute_add_i_vx,
            Op.LD_F_VX: self.execute_ld_f_vx,
            Op.LD_B_VX: self.execute_ld_b_vx,
            Op.LD_I_VX: self.execute_ld_i_vx,
            Op.LD_VX_I: self.execute_ld_vx_i,
        }

    def reset(self):
        self.waiting_for_key = False
        self.total_instructions = 0

    def fetch_decode_execute(self):
        """Run exactly one instruction and return the decoded Instruction.

        PC is advanced past the instruction before its handler runs, so jump
        and call targets are absolute and CALL stacks the following address.
        If the handler faults, PC is put back on the faulting instruction.
        """
        regs = self.registers
        pc = regs.PC
        # Instructions are word aligned; an odd PC is a bad jump target
        if pc & 1:
            raise AddressOutOfBounds(pc)
        opcode = self.memory.read_word(pc)
        instruction = decode(opcode, pc)

        regs.PC = (pc + 2) & 0xFFFF
        self.waiting_for_key = False
        try:
            self.instruction_dispatch[instruction.op](instruction)
        except FatalError as e:
            regs.PC = pc
            debug_print(f"CPU: Fault at PC=0x{pc:03X} ({instruction}): {e}")
            raise

        self.total_instructions += 1
        debug_print(f"CPU: PC=0x{pc:03X} {instruction}")
        return instruction

    def skip(self):
        self.registers.PC = (self.registers.PC + 2) & 0xFFFF

    # -- Flow control ---------------------------------------------------------

    def execute_sys(self, ins):
        pass

    def execute_cls(self, ins):
        self.display.clear()

    def execute_ret(self, ins):
        self.registers.PC = self.registers.pop()

    def execute_jp(self, ins):
        self.registers.PC = ins.nnn

    def execute_call(self, ins):
        # PC already points at the instruction after the call
        self.registers.push(self.registers.PC)
        self.registers.PC = ins.nnn

    def execute_jp_v0(self, ins):
        self.registers.PC = ins.nnn + self.registers.V[0]

    def execute_se_vx_nn(self, ins):
        if self.registers.V[ins.x] == ins.nn:
            self.skip()

    def execute_sne_vx_nn(self, ins):
        if self.registers.V[ins.x] != ins.nn:
            self.skip()

    def execute_se_vx_vy(self, ins):
        if self.registers.V[ins.x] == self.registers.V[ins.y]:
            self.skip()

    def execute_sne_vx_vy(self, ins):
        if self.registers.V[ins.x] != self.registers.V[ins.y]:
            self.skip()

    # -- Register arithmetic --------------------------------------------------

    def execute_ld_vx_nn(self, ins):
        self.registers.set(ins.x, ins.nn)

    def execute_add_vx_nn(self, ins):
        # Wraps silently, VF untouched
        self.registers.set(ins.x, self.registers.V[ins.x] + ins.nn)

    def execute_ld_vx_vy(self, ins):
        self.registers.set(ins.x, self.registers.V[ins.y])

    def execute_or(self, ins):
        regs = self.registers
        regs.set(ins.x, regs.V[ins.x] | regs.V[ins.y])

    def execute_and(self, ins):
        regs = self.registers
        regs.set(ins.x, regs.V[ins.x] & regs.V[ins.y])

    def execute_xor(self, ins):
        regs = self.registers
        regs.set(ins.x, regs.V[ins.x] ^ regs.V[ins.y])

    def execute_add_vx_vy(self, ins):
        regs = self.registers
        total = regs.V[ins.x] + regs.V[ins.y]
        regs.set(ins.x, total)
        regs.set(VF, 1 if total > 0xFF else 0)

    def execute_sub(self, ins):
        regs = self.registers
        vx, vy = regs.V[ins.x], regs.V[ins.y]
        regs.set(ins.x, vx - vy)
        regs.set(VF, 1 if vx >= vy else 0)

    def execute_subn(self, ins):
        regs = self.registers
        vx, vy = regs.V[ins.x], regs.V[ins.y]
        regs.set(ins.x, vy - vx)
        regs.set(VF, 1 if vy >= vx else 0)

    def execute_shr(self, ins):
        regs = self.registers
        value = regs.V[ins.y]
        regs.set(ins.x, value >> 1)
        regs.set(VF, value & 0x01)

    def execute_shl(self, ins):
        regs = self.registers
        value = regs.V[ins.y]
        regs.set(ins.x, value << 1)
        regs.set(VF, (value >> 7) & 0x01)

    def execute_rnd(self, ins):
        self.registers.set(ins.x, self.rng.randint(0, 0xFF) & ins.nn)

    # -- Index register and memory --------------------------------------------

    def execute_ld_i(self, ins):
        self.registers.set_i(ins.nnn)

    def execute_add_i_vx(self, ins):
        regs = self.registers
        regs.set_i(regs.I + regs.V[ins.x])

    def execute_ld_f_vx(self, ins):
        self.registers.set_i(font_address(self.registers.V[ins.x]))

    def execute_ld_b_vx(self, ins):
        value = self.registers.V[ins.x]
        self.memory.write_block(
            self.registers.I, (value // 100, (value // 10) % 10, value % 10)
        )

    def execute_ld_i_vx(self, ins):
        regs = self.registers
        count = ins.x + 1
        self.memory.write_block(regs.I, regs.V[:count])
        regs.set_i(regs.I + count)

    def execute_ld_vx_i(self, ins):
        regs = self.registers
        count = ins.x + 1
        data = self.memory.read_block(regs.I, count)
        for index, value in enumerate(data):
            regs.set(index, value)
        regs.set_i(regs.I + count)

    # -- Display ---------------------------------------------------------------

    def execute_drw(self, ins):
        regs = self.registers
        # Sprite bytes are fetched (and bounds checked) before the screen changes
        sprite = self.memory.read_block(regs.I, ins.n)
        collision = self.display.draw_sprite(regs.V[ins.x], regs.V[ins.y], sprite)
        regs.set(VF, 1 if collision else 0)

    # -- Keypad ----------------------------------------------------------------

    def execute_skp(self, ins):
        if self.keypad.is_pressed(self.registers.V[ins.x]):
            self.skip()

    def execute_sknp(self, ins):
        if not self.keypad.is_pressed(self.registers.V[ins.x]):
            self.skip()

    def execute_ld_vx_k(self, ins):
        key = self.keypad.first_pressed()
        if key is None:
            # Run this instruction again on the next step
            self.registers.PC = (self.registers.PC - 2) & 0xFFFF
            self.waiting_for_key = True
        else:
            self.registers.set(ins.x, key)

    # -- Timers ----------------------------------------------------------------

    def execute_ld_vx_dt(self, ins):
        self.registers.set(ins.x, self.timers.get_delay())

    def execute_ld_dt_vx(self, ins):
        self.timers.set_delay(self.registers.V[ins.x])

    def execute_ld_st_vx(self, ins):
        self.timers.set_sound(self.registers.V[ins.x])
