#!/usr/bin/env python3
"""
Test opcode decoding into Op variants and operand fields
"""

import pytest

from errors import IllegalInstruction
from instructions import Op, decode

DOCUMENTED = [
    (0x0123, Op.SYS),
    (0x00E0, Op.CLS),
    (0x00EE, Op.RET),
    (0x1ABC, Op.JP),
    (0x2ABC, Op.CALL),
    (0x3A12, Op.SE_VX_NN),
    (0x4A12, Op.SNE_VX_NN),
    (0x5AB0, Op.SE_VX_VY),
    (0x6A12, Op.LD_VX_NN),
    (0x7A12, Op.ADD_VX_NN),
    (0x8AB0, Op.LD_VX_VY),
    (0x8AB1, Op.OR),
    (0x8AB2, Op.AND),
    (0x8AB3, Op.XOR),
    (0x8AB4, Op.ADD_VX_VY),
    (0x8AB5, Op.SUB),
    (0x8AB6, Op.SHR),
    (0x8AB7, Op.SUBN),
    (0x8ABE, Op.SHL),
    (0x9AB0, Op.SNE_VX_VY),
    (0xAABC, Op.LD_I),
    (0xBABC, Op.JP_V0),
    (0xCA12, Op.RND),
    (0xDAB5, Op.DRW),
    (0xEA9E, Op.SKP),
    (0xEAA1, Op.SKNP),
    (0xFA07, Op.LD_VX_DT),
    (0xFA0A, Op.LD_VX_K),
    (0xFA15, Op.LD_DT_VX),
    (0xFA18, Op.LD_ST_VX),
    (0xFA1E, Op.ADD_I_VX),
    (0xFA29, Op.LD_F_VX),
    (0xFA33, Op.LD_B_VX),
    (0xFA55, Op.LD_I_VX),
    (0xFA65, Op.LD_VX_I),
]


def test_every_op_has_a_decoding():
    assert len(DOCUMENTED) == 35
    assert {op for _, op in DOCUMENTED} == set(Op)


@pytest.mark.parametrize("opcode,op", DOCUMENTED)
def test_decode(opcode, op):
    ins = decode(opcode)
    assert ins.op is op
    assert ins.opcode == opcode


def test_operand_fields():
    ins = decode(0xD7A5)
    assert (ins.x, ins.y, ins.n) == (0x7, 0xA, 0x5)
    assert ins.nn == 0xA5
    assert ins.nnn == 0x7A5
    assert str(ins) == "D7A5 DRW"


@pytest.mark.parametrize(
    "opcode",
    [0x5AB1, 0x9ABF, 0x8AB8, 0x8ABD, 0x8ABF, 0xEA00, 0xEA9F, 0xFA00, 0xFA56, 0xFFFF],
)
def test_illegal_opcodes(opcode):
    with pytest.raises(IllegalInstruction) as excinfo:
        decode(opcode, 0x234)
    assert excinfo.value.opcode == opcode
    assert excinfo.value.address == 0x234
    assert "0x234" in str(excinfo.value)


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
