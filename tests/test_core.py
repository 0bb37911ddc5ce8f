from types import SimpleNamespace

import pytest

from gbcore import alu
from gbcore.core import CpuCore
from gbcore.registers import Flags

START = 0x0100


class FakeBus:
    def __init__(self):
        self.mem = bytearray(0x10000)

    def read8(self, addr):
        return self.mem[addr & 0xFFFF]

    def write8(self, addr, value):
        self.mem[addr & 0xFFFF] = value & 0xFF

    def load(self, addr, data):
        self.mem[addr:addr + len(data)] = bytes(data)


@pytest.fixture
def bus():
    return FakeBus()


@pytest.fixture
def core(bus):
    return CpuCore(bus, SimpleNamespace(ime=False))


def run(core, bus):
    opcode = bus.read8(core.regs.pc)
    core.regs.pc = (core.regs.pc + 1) & 0xFFFF
    return core.execute(opcode)


def test_initial_registers(core):
    assert core.regs.pc == 0x0100
    assert core.regs.sp == 0xFFFE


def test_nop_takes_one_cycle(core, bus):
    bus.load(START, [0x00])
    assert run(core, bus) == 1
    assert core.regs.pc == START + 1


def test_ld_register_immediate(core, bus):
    bus.load(START, [0x06, 0x42])
    assert run(core, bus) == 2
    assert core.regs.b == 0x42
    assert core.regs.pc == START + 2


def test_ld_bc_immediate_little_endian(core, bus):
    bus.load(START, [0x01, 0x34, 0x12])
    assert run(core, bus) == 3
    assert core.regs.bc() == 0x1234


def test_ld_register_register(core, bus):
    core.regs.e = 0x5A
    bus.load(START, [0x53])  # LD D,E
    assert run(core, bus) == 1
    assert core.regs.d == 0x5A


def test_ld_hl_increment_stores_a(core, bus):
    core.regs.a = 0x77
    core.regs.set_hl(0xC000)
    bus.load(START, [0x22])  # LD [HL+],A
    run(core, bus)
    assert bus.read8(0xC000) == 0x77
    assert core.regs.hl() == 0xC001


def test_ld_a_hl_decrement(core, bus):
    bus.write8(0xC010, 0x99)
    core.regs.set_hl(0xC010)
    bus.load(START, [0x3A])  # LD A,[HL-]
    run(core, bus)
    assert core.regs.a == 0x99
    assert core.regs.hl() == 0xC00F


def test_add_matches_alu(core, bus):
    core.regs.a = 0x3A
    core.regs.b = 0xC6
    expected_flags = Flags()
    expected = alu.add8(expected_flags, 0x3A, 0xC6)
    bus.load(START, [0x80])  # ADD A,B
    assert run(core, bus) == 1
    assert core.regs.a == expected
    assert core.regs.flags == expected_flags


def test_xor_a_clears_a(core, bus):
    core.regs.a = 0x5C
    bus.load(START, [0xAF])
    run(core, bus)
    assert core.regs.a == 0
    assert core.regs.flags.z


def test_cp_keeps_a(core, bus):
    core.regs.a = 0x10
    bus.load(START, [0xFE, 0x10])  # CP A,n8
    assert run(core, bus) == 2
    assert core.regs.a == 0x10
    assert core.regs.flags.z
    assert core.regs.flags.n


def test_push_pop_round_trip(core):
    sp = core.regs.sp
    core.push16(0xBEEF)
    assert core.regs.sp == (sp - 2) & 0xFFFF
    assert core.pop16() == 0xBEEF
    assert core.regs.sp == sp


def test_pop_af_drops_low_nibble(core, bus):
    core.push16(0x12FF)
    bus.load(START, [0xF1])  # POP AF
    run(core, bus)
    assert core.regs.a == 0x12
    assert core.regs.flags.as_u8() & 0x0F == 0
    assert core.regs.flags.z and core.regs.flags.c


def test_call_and_ret(core, bus):
    bus.load(START, [0xCD, 0x00, 0x20])  # CALL 0x2000
    bus.load(0x2000, [0xC9])  # RET
    assert run(core, bus) == 6
    assert core.regs.pc == 0x2000
    assert len(core.call_stack) == 1
    assert run(core, bus) == 4
    assert core.regs.pc == START + 3
    assert core.call_stack == []


def test_call_method_and_ret_method(core):
    core.regs.pc = 0x1234
    core.call(0x4000)
    assert core.regs.pc == 0x4000
    core.ret()
    assert core.regs.pc == 0x1234
    assert core.call_stack == []


def test_ret_closes_interrupt(core):
    core.push16(0x0150)
    core.irq_stack.append(0x0150)
    core.ret()
    assert core.regs.pc == 0x0150
    assert core.irq_stack == []


def test_conditional_jump_not_taken(core, bus):
    core.regs.flags.z = False
    bus.load(START, [0xCA, 0x00, 0x30])  # JP Z,a16
    assert run(core, bus) == 3
    assert core.regs.pc == START + 3


def test_conditional_jump_taken(core, bus):
    core.regs.flags.z = True
    bus.load(START, [0xCA, 0x00, 0x30])
    assert run(core, bus) == 4
    assert core.regs.pc == 0x3000


def test_jr_backwards_to_itself(core, bus):
    bus.load(START, [0x18, 0xFE])
    assert run(core, bus) == 3
    assert core.regs.pc == START


def test_rst_pushes_return_address(core, bus):
    bus.load(START, [0xFF])  # RST 38
    assert run(core, bus) == 4
    assert core.regs.pc == 0x38
    assert core.pop16() == START + 1
    assert core.call_stack == []


def test_ei_schedules_and_di_cancels(core, bus):
    bus.load(START, [0xFB, 0xF3])
    run(core, bus)
    assert core.ime_scheduled
    core.irqs.ime = True
    run(core, bus)
    assert not core.ime_scheduled
    assert core.irqs.ime is False


def test_reti_enables_interrupts(core, bus):
    core.push16(0x0200)
    bus.load(START, [0xD9])
    run(core, bus)
    assert core.irqs.ime is True
    assert core.regs.pc == 0x0200


def test_halt_sets_state(core, bus):
    bus.load(START, [0x76])
    run(core, bus)
    assert core.halted
    assert core.check_halt_bug


def test_stop_skips_byte_and_clears_div(core, bus):
    bus.write8(0xFF04, 0xAB)
    bus.load(START, [0x10, 0x00])
    run(core, bus)
    assert core.stopped
    assert core.regs.pc == START + 2
    assert bus.read8(0xFF04) == 0


def test_cb_prefix_dispatch(core, bus):
    core.regs.a = 0x12
    expected = alu.swap(Flags(), 0x12)
    bus.load(START, [0xCB, 0x37])  # SWAP A
    assert run(core, bus) == 2
    assert core.regs.a == expected
    assert core.regs.pc == START + 2


def test_ld_hl_sp_negative_offset(core, bus):
    core.regs.sp = 0x1000
    bus.load(START, [0xF8, 0xFF])  # LD HL,SP-1
    assert run(core, bus) == 3
    assert core.regs.hl() == (core.regs.sp - 1) & 0xFFFF
    assert not core.regs.flags.z
    assert not core.regs.flags.n


def test_inc_hl_indirect(core, bus):
    core.regs.set_hl(0xC100)
    bus.write8(0xC100, 0xFF)
    bus.load(START, [0x34])
    assert run(core, bus) == 3
    assert bus.read8(0xC100) == 0
    assert core.regs.flags.z


def test_ld_a16_sp(core, bus):
    core.regs.sp = 0xABCD
    bus.load(START, [0x08, 0x00, 0xC2])
    assert run(core, bus) == 5
    assert bus.read8(0xC200) == 0xCD
    assert bus.read8(0xC201) == 0xAB


@pytest.mark.parametrize(
    "opcode", [0xD3, 0xDB, 0xDD, 0xE3, 0xE4, 0xEB, 0xEC, 0xED, 0xF4, 0xFC, 0xFD]
)
def test_illegal_opcodes_raise(core, opcode):
    with pytest.raises(ValueError):
        core.execute(opcode)