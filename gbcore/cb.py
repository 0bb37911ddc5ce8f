"""Execution of the CB-prefixed instructions: rotates, shifts and bit operations."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from . import alu
from .registers import Flags, Registers

__all__ = ["execute_cb"]


class _Bus(Protocol):
    def read8(self, addr: int) -> int: ...

    def write8(self, addr: int, value: int) -> None: ...


# Operand selected by the low three bits of the opcode; None stands for [HL].
_OPERANDS: tuple[Optional[str], ...] = ("b", "c", "d", "e", "h", "l", None, "a")

# Operations of the 0x00..0x3F block, selected by bits 3..5 of the opcode.
_SHIFTS: tuple[Callable[[Flags, int], int], ...] = (
    alu.rlc,
    alu.rrc,
    alu.rl,
    alu.rr,
    alu.sla,
    alu.sra,
    alu.swap,
    alu.srl,
)

_GROUP_SHIFT = 0
_GROUP_BIT = 1
_GROUP_RES = 2

_REG_CYCLES = 2
_IND_CYCLES = 4
_BIT_IND_CYCLES = 3


def execute_cb(regs: Registers, bus: _Bus, opcode: int) -> int:
    """Run the CB-prefixed instruction ``opcode`` and return its m-cycles.

    ``opcode`` is the byte that follows the 0xCB prefix; the caller has
    already advanced PC past it. Register operands are updated on ``regs``,
    the [HL] operand is read from and written back to ``bus``.
    """
    if not 0 <= opcode <= 0xFF:
        raise ValueError(f"CB opcode must be a byte, got {opcode!r}")

    name = _OPERANDS[opcode & 0x07]
    index = (opcode >> 3) & 0x07
    group = opcode >> 6

    if name is None:
        addr = regs.hl()
        value = bus.read8(addr)
    else:
        value = getattr(regs, name)

    if group == _GROUP_BIT:
        alu.bit(regs.flags, index, value)
        return _REG_CYCLES if name is not None else _BIT_IND_CYCLES

    if group == _GROUP_SHIFT:
        result = _SHIFTS[index](regs.flags, value)
    elif group == _GROUP_RES:
        result = value & ~(1 << index) & 0xFF
    else:
        result = (value | (1 << index)) & 0xFF

    if name is None:
        bus.write8(addr, result)
        return _IND_CYCLES
    setattr(regs, name, result)
    return _REG_CYCLES