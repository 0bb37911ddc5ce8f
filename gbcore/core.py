"""Instruction execution for the CPU: decoding and running one opcode."""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional, Protocol

from . import alu
from .cb import execute_cb
from .registers import Flags, Registers

__all__ = ["CpuCore"]

# Register operands selected by three opcode bits; index 6 stands for [HL].
_R8: tuple[Optional[str], ...] = ("b", "c", "d", "e", "h", "l", None, "a")
_IND = 6

_HALT = 0x76
_DIV_ADDR = 0xFF04
_HIGH_PAGE = 0xFF00

# ADD, ADC, SUB, SBC, AND, XOR, OR, CP in opcode order.
_ALU_OPS: tuple[Callable[[Flags, int, int], Optional[int]], ...] = (
    alu.add8,
    alu.adc8,
    alu.sub8,
    alu.sbc8,
    alu.and8,
    alu.xor8,
    alu.or8,
    alu.cp8,
)


class _Bus(Protocol):
    def read8(self, addr: int) -> int: ...

    def write8(self, addr: int, value: int) -> None: ...


class _Irqs(Protocol):
    ime: bool


def _signed8(value: int) -> int:
    return value - 0x100 if value & 0x80 else value


class CpuCore:
    """Registers and execution state of the CPU, and the instruction set.

    ``execute`` runs one already fetched opcode (PC points past it) and
    returns the machine cycles it took. ``irqs`` only needs an ``ime``
    attribute, the interrupt master enable flag.
    """

    def __init__(self, bus: _Bus, irqs: _Irqs) -> None:
        self.bus = bus
        self.irqs = irqs
        self.regs = Registers()
        self.regs.reset()
        self.ime_scheduled = False
        self.halted = False
        self.check_halt_bug = False
        self.stopped = False
        # Return addresses of serviced interrupts and of CALLs, for nesting depth.
        self.irq_stack: list[int] = []
        self.call_stack: list[int] = []
        self._ops = self._build_table()

    # Public operations --------------------------------------------------------------------

    def execute(self, opcode: int) -> int:
        """Run ``opcode`` and return its m-cycles; ValueError if it is not an instruction."""
        try:
            handler = self._ops[opcode]
        except KeyError:
            raise ValueError(f"unrecognized opcode {opcode!r}") from None
        return handler()

    def call(self, address: int) -> None:
        """Push PC, remember it as a call return address and jump to ``address``."""
        self.push16(self.regs.pc)
        self.call_stack.append(self.regs.pc)
        self.regs.pc = address & 0xFFFF

    def ret(self) -> None:
        """Pop PC from the stack, closing any interrupt or call it returns from."""
        pc = self.pop16()
        self.regs.pc = pc
        if self.irq_stack and self.irq_stack[-1] == pc:
            self.irq_stack.pop()
        if self.call_stack and self.call_stack[-1] == pc:
            self.call_stack.pop()

    def push16(self, value: int) -> None:
        regs = self.regs
        regs.sp = (regs.sp - 2) & 0xFFFF
        self.bus.write8(regs.sp, value & 0xFF)
        self.bus.write8((regs.sp + 1) & 0xFFFF, (value >> 8) & 0xFF)

    def pop16(self) -> int:
        regs = self.regs
        lsb = self.bus.read8(regs.sp)
        msb = self.bus.read8((regs.sp + 1) & 0xFFFF)
        regs.sp = (regs.sp + 2) & 0xFFFF
        return (msb << 8) | lsb

    # Operand access -----------------------------------------------------------------------

    def _fetch8(self) -> int:
        regs = self.regs
        value = self.bus.read8(regs.pc)
        regs.pc = (regs.pc + 1) & 0xFFFF
        return value

    def _fetch16(self) -> int:
        lsb = self._fetch8()
        return lsb | (self._fetch8() << 8)

    def _write16(self, addr: int, value: int) -> None:
        self.bus.write8(addr & 0xFFFF, value & 0xFF)
        self.bus.write8((addr + 1) & 0xFFFF, (value >> 8) & 0xFF)

    def _read_r(self, idx: int) -> int:
        name = _R8[idx]
        if name is None:
            return self.bus.read8(self.regs.hl())
        return getattr(self.regs, name)

    def _write_r(self, idx: int, value: int) -> None:
        name = _R8[idx]
        if name is None:
            self.bus.write8(self.regs.hl(), value & 0xFF)
        else:
            setattr(self.regs, name, value & 0xFF)

    def _get_rr(self, idx: int) -> int:
        regs = self.regs
        return (regs.bc, regs.de, regs.hl, lambda: regs.sp)[idx]()

    def _set_rr(self, idx: int, value: int) -> None:
        value &= 0xFFFF
        regs = self.regs
        if idx == 0:
            regs.set_bc(value)
        elif idx == 1:
            regs.set_de(value)
        elif idx == 2:
            regs.set_hl(value)
        else:
            regs.sp = value

    def _ind_address(self, idx: int) -> int:
        """Address for [BC], [DE], [HL+] or [HL-]; HL is stepped for the last two."""
        regs = self.regs
        if idx == 0:
            return regs.bc()
        if idx == 1:
            return regs.de()
        addr = regs.hl()
        regs.set_hl(addr + 1 if idx == 2 else addr - 1)
        return addr

    def _cond(self, idx: int) -> bool:
        flags = self.regs.flags
        return (not flags.z, flags.z, not flags.c, flags.c)[idx]

    # Dispatch table -----------------------------------------------------------------------

    def _build_table(self) -> dict[int, Callable[[], int]]:
        ops: dict[int, Callable[[], int]] = {}

        for op in range(0x40, 0x80):
            ops[op] = partial(self._ld_r_r, (op >> 3) & 7, op & 7)
        ops[_HALT] = self._halt

        for op in range(0x80, 0xC0):
            ops[op] = partial(self._alu_r, _ALU_OPS[(op >> 3) & 7], op & 7)
        for i, fn in enumerate(_ALU_OPS):
            ops[0xC6 | (i << 3)] = partial(self._alu_n, fn)

        for i in range(8):
            ops[0x04 | (i << 3)] = partial(self._inc_r, i)
            ops[0x05 | (i << 3)] = partial(self._dec_r, i)
            ops[0x06 | (i << 3)] = partial(self._ld_r_n, i)
            ops[0xC7 | (i << 3)] = partial(self._rst, i << 3)

        for i in range(4):
            ops[0x01 | (i << 4)] = partial(self._ld_rr_n, i)
            ops[0x02 | (i << 4)] = partial(self._ld_ind_a, i)
            ops[0x03 | (i << 4)] = partial(self._inc_rr, i)
            ops[0x09 | (i << 4)] = partial(self._add_hl_rr, i)
            ops[0x0A | (i << 4)] = partial(self._ld_a_ind, i)
            ops[0x0B | (i << 4)] = partial(self._dec_rr, i)
            ops[0xC1 | (i << 4)] = partial(self._pop, i)
            ops[0xC5 | (i << 4)] = partial(self._push, i)
            ops[0x20 | (i << 3)] = partial(self._jr_cond, i)
            ops[0xC0 | (i << 3)] = partial(self._ret_cond, i)
            ops[0xC2 | (i << 3)] = partial(self._jp_cond, i)
            ops[0xC4 | (i << 3)] = partial(self._call_cond, i)

        ops.update(
            {
                0x00: self._nop,
                0x07: partial(self._rotate_a, alu.rlc),
                0x0F: partial(self._rotate_a, alu.rrc),
                0x17: partial(self._rotate_a, alu.rl),
                0x1F: partial(self._rotate_a, alu.rr),
                0x27: self._daa,
                0x2F: self._cpl,
                0x37: self._scf,
                0x3F: self._ccf,
                0x08: self._ld_a16_sp,
                0x10: self._stop,
                0x18: self._jr,
                0xC3: self._jp,
                0xC9: self._ret,
                0xCB: self._cb,
                0xCD: self._call_imm,
                0xD9: self._reti,
                0xE0: self._ldh_a8_a,
                0xF0: self._ldh_a_a8,
                0xE2: self._ld_c_a,
                0xF2: self._ld_a_c,
                0xE8: self._add_sp_e8,
                0xF8: self._ld_hl_sp_e8,
                0xE9: self._jp_hl,
                0xF9: self._ld_sp_hl,
                0xEA: self._ld_a16_a,
                0xFA: self._ld_a_a16,
                0xF3: self._di,
                0xFB: self._ei,
            }
        )
        return ops

    # Loads --------------------------------------------------------------------------------

    def _nop(self) -> int:
        return 1

    def _ld_r_r(self, dst: int, src: int) -> int:
        self._write_r(dst, self._read_r(src))
        return 2 if _IND in (dst, src) else 1

    def _ld_r_n(self, idx: int) -> int:
        self._write_r(idx, self._fetch8())
        return 3 if idx == _IND else 2

    def _ld_ind_a(self, idx: int) -> int:
        self.bus.write8(self._ind_address(idx), self.regs.a)
        return 2

    def _ld_a_ind(self, idx: int) -> int:
        self.regs.a = self.bus.read8(self._ind_address(idx))
        return 2

    def _ld_rr_n(self, idx: int) -> int:
        self._set_rr(idx, self._fetch16())
        return 3

    def _ld_a16_sp(self) -> int:
        self._write16(self._fetch16(), self.regs.sp)
        return 5

    def _ldh_a8_a(self) -> int:
        self.bus.write8(_HIGH_PAGE + self._fetch8(), self.regs.a)
        return 3

    def _ldh_a_a8(self) -> int:
        self.regs.a = self.bus.read8(_HIGH_PAGE + self._fetch8())
        return 3

    def _ld_c_a(self) -> int:
        self.bus.write8(_HIGH_PAGE + self.regs.c, self.regs.a)
        return 2

    def _ld_a_c(self) -> int:
        self.regs.a = self.bus.read8(_HIGH_PAGE + self.regs.c)
        return 2

    def _ld_a16_a(self) -> int:
        self.bus.write8(self._fetch16(), self.regs.a)
        return 4

    def _ld_a_a16(self) -> int:
        self.regs.a = self.bus.read8(self._fetch16())
        return 4

    def _ld_sp_hl(self) -> int:
        self.regs.sp = self.regs.hl()
        return 2

    def _sp_plus_e8(self) -> int:
        # H and C come from the low byte, as in an 8-bit addition.
        offset = _signed8(self._fetch8())
        sp = self.regs.sp
        flags = self.regs.flags
        flags.c = alu.check_carry(sp, offset & 0xFF)
        flags.h = alu.check_half_carry(sp & 0xFF, offset & 0xFF)
        flags.z = False
        flags.n = False
        return (sp + offset) & 0xFFFF

    def _ld_hl_sp_e8(self) -> int:
        self.regs.set_hl(self._sp_plus_e8())
        return 3

    def _add_sp_e8(self) -> int:
        self.regs.sp = self._sp_plus_e8()
        return 4

    def _push(self, idx: int) -> int:
        regs = self.regs
        value = regs.af() if idx == 3 else self._get_rr(idx)
        self.push16(value)
        return 4

    def _pop(self, idx: int) -> int:
        value = self.pop16()
        if idx == 3:
            self.regs.set_af(value)
        else:
            self._set_rr(idx, value)
        return 3

    # Arithmetic and logic ---------------------------------------------------------------

    def _apply_alu(self, fn: Callable[[Flags, int, int], Optional[int]], rhs: int) -> None:
        result = fn(self.regs.flags, self.regs.a, rhs)
        if result is not None:
            self.regs.a = result

    def _alu_r(self, fn: Callable[[Flags, int, int], Optional[int]], src: int) -> int:
        self._apply_alu(fn, self._read_r(src))
        return 2 if src == _IND else 1

    def _alu_n(self, fn: Callable[[Flags, int, int], Optional[int]]) -> int:
        self._apply_alu(fn, self._fetch8())
        return 2

    def _inc_r(self, idx: int) -> int:
        self._write_r(idx, alu.inc8(self.regs.flags, self._read_r(idx)))
        return 3 if idx == _IND else 1

    def _dec_r(self, idx: int) -> int:
        self._write_r(idx, alu.dec8(self.regs.flags, self._read_r(idx)))
        return 3 if idx == _IND else 1

    def _inc_rr(self, idx: int) -> int:
        self._set_rr(idx, self._get_rr(idx) + 1)
        return 2

    def _dec_rr(self, idx: int) -> int:
        self._set_rr(idx, self._get_rr(idx) - 1)
        return 2

    def _add_hl_rr(self, idx: int) -> int:
        regs = self.regs
        regs.set_hl(alu.add16(regs.flags, regs.hl(), self._get_rr(idx)))
        return 2

    def _rotate_a(self, fn: Callable[[Flags, int], int]) -> int:
        regs = self.regs
        regs.a = fn(regs.flags, regs.a)
        regs.flags.z = False
        return 1

    def _daa(self) -> int:
        self.regs.a = alu.daa(self.regs.flags, self.regs.a)
        return 1

    def _cpl(self) -> int:
        regs = self.regs
        regs.a = ~regs.a & 0xFF
        regs.flags.h = True
        regs.flags.n = True
        return 1

    def _scf(self) -> int:
        flags = self.regs.flags
        flags.c = True
        flags.h = False
        flags.n = False
        return 1

    def _ccf(self) -> int:
        flags = self.regs.flags
        flags.c = not flags.c
        flags.h = False
        flags.n = False
        return 1

    def _cb(self) -> int:
        return execute_cb(self.regs, self.bus, self._fetch8())

    # Control flow -------------------------------------------------------------------------

    def _jp(self) -> int:
        self.regs.pc = self._fetch16()
        return 4

    def _jp_hl(self) -> int:
        self.regs.pc = self.regs.hl()
        return 1

    def _jp_cond(self, idx: int) -> int:
        if self._cond(idx):
            return self._jp()
        self.regs.pc = (self.regs.pc + 2) & 0xFFFF
        return 3

    def _jr(self) -> int:
        offset = _signed8(self._fetch8())
        self.regs.pc = (self.regs.pc + offset) & 0xFFFF
        return 3

    def _jr_cond(self, idx: int) -> int:
        if self._cond(idx):
            return self._jr()
        self.regs.pc = (self.regs.pc + 1) & 0xFFFF
        return 2

    def _call_imm(self) -> int:
        self.call(self._fetch16())
        return 6

    def _call_cond(self, idx: int) -> int:
        if self._cond(idx):
            return self._call_imm()
        self.regs.pc = (self.regs.pc + 2) & 0xFFFF
        return 3

    def _rst(self, offset: int) -> int:
        self.push16(self.regs.pc)
        self.regs.pc = offset
        return 4

    def _ret(self) -> int:
        self.ret()
        return 4

    def _ret_cond(self, idx: int) -> int:
        if self._cond(idx):
            self.ret()
            return 5
        return 2

    def _reti(self) -> int:
        self.ret()
        self.irqs.ime = True
        return 4

    # Interrupt and power control -------------------------------------------------------

    def _ei(self) -> int:
        # IME is only set after the next instruction has run.
        self.ime_scheduled = True
        return 1

    def _di(self) -> int:
        self.irqs.ime = False
        self.ime_scheduled = False
        return 1

    def _halt(self) -> int:
        self.halted = True
        self.check_halt_bug = True
        return 1

    def _stop(self) -> int:
        # STOP is two bytes long; the second is ignored. It also clears DIV.
        self.regs.pc = (self.regs.pc + 1) & 0xFFFF
        self.stopped = True
        self.bus.write8(_DIV_ADDR, 0)
        return 1