#!/usr/bin/env python3
"""
Test the register file and call stack
"""

import pytest

from errors import StackOverflow, StackUnderflow
from registers import STACK_CAPACITY, Registers


def test_power_on_state():
    regs = Registers()
    assert regs.V == [0] * 16
    assert regs.I == 0
    assert regs.PC == 0x200
    assert regs.SP == 0


def test_registers_wrap_to_8_bits():
    regs = Registers()
    regs.set(0xA, 0x1FF)
    assert regs.get(0xA) == 0xFF
    regs.set(0x3, -1)
    assert regs.get(0x3) == 0xFF
    regs.set_i(0x12345)
    assert regs.get_i() == 0x2345


def test_stack_push_pop_order():
    regs = Registers()
    for addr in (0x202, 0x304, 0x406):
        regs.push(addr)
    assert regs.SP == 3
    assert regs.pop() == 0x406
    assert regs.pop() == 0x304
    assert regs.pop() == 0x202
    assert regs.SP == 0


def test_stack_overflow():
    regs = Registers()
    for i in range(STACK_CAPACITY):
        regs.push(0x200 + 2 * i)
    with pytest.raises(StackOverflow):
        regs.push(0x300)
    assert regs.SP == STACK_CAPACITY


def test_stack_underflow():
    regs = Registers()
    with pytest.raises(StackUnderflow):
        regs.pop()


def test_custom_capacity():
    regs = Registers(stack_capacity=2)
    regs.push(1)
    regs.push(2)
    with pytest.raises(StackOverflow) as excinfo:
        regs.push(3)
    assert excinfo.value.capacity == 2


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
