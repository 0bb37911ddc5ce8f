"""CPU register file and the flags register."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

__all__ = ["Flags", "Registers"]


@dataclass
class Flags:
    """The F register.

    Bit 7 is Z (zero), bit 6 N (subtract), bit 5 H (half carry) and
    bit 4 C (carry); bits 0..3 are unused and always read as 0.
    """

    z: bool = False
    n: bool = False
    h: bool = False
    c: bool = False

    MASK_Z: ClassVar[int] = 0b1000_0000
    MASK_N: ClassVar[int] = 0b0100_0000
    MASK_H: ClassVar[int] = 0b0010_0000
    MASK_C: ClassVar[int] = 0b0001_0000

    def as_u8(self) -> int:
        value = 0
        if self.z:
            value |= self.MASK_Z
        if self.n:
            value |= self.MASK_N
        if self.h:
            value |= self.MASK_H
        if self.c:
            value |= self.MASK_C
        return value

    def from_u8(self, value: int) -> None:
        self.z = bool(value & self.MASK_Z)
        self.n = bool(value & self.MASK_N)
        self.h = bool(value & self.MASK_H)
        self.c = bool(value & self.MASK_C)

    def __int__(self) -> int:
        return self.as_u8()


@dataclass
class Registers:
    """The seven 8-bit registers, PC, SP and flags.

    A fresh instance has every register at zero; ``reset`` puts PC and SP
    at their start-up values.
    """

    a: int = 0
    b: int = 0
    c: int = 0
    d: int = 0
    e: int = 0
    h: int = 0
    l: int = 0  # noqa: E741
    pc: int = 0
    sp: int = 0
    flags: Flags = field(default_factory=Flags)

    PC_INITIAL: ClassVar[int] = 0x0100
    SP_INITIAL: ClassVar[int] = 0xFFFE

    def af(self) -> int:
        return (self.a << 8) | self.flags.as_u8()

    def bc(self) -> int:
        return (self.b << 8) | self.c

    def de(self) -> int:
        return (self.d << 8) | self.e

    def hl(self) -> int:
        return (self.h << 8) | self.l

    def set_af(self, value: int) -> None:
        self.a = (value >> 8) & 0xFF
        self.flags.from_u8(value & 0xFF)

    def set_bc(self, value: int) -> None:
        self.b = (value >> 8) & 0xFF
        self.c = value & 0xFF

    def set_de(self, value: int) -> None:
        self.d = (value >> 8) & 0xFF
        self.e = value & 0xFF

    def set_hl(self, value: int) -> None:
        self.h = (value >> 8) & 0xFF
        self.l = value & 0xFF

    def reset(self) -> None:
        """Zero the general registers and flags; PC and SP take start-up values."""
        self.a = self.b = self.c = self.d = self.e = self.h = self.l = 0
        self.pc = self.PC_INITIAL
        self.sp = self.SP_INITIAL
        self.flags.from_u8(0)

    def equal_skip_pc(self, other: Registers) -> bool:
        return (
            self.a == other.a
            and self.b == other.b
            and self.c == other.c
            and self.d == other.d
            and self.e == other.e
            and self.h == other.h
            and self.l == other.l
            and self.sp == other.sp
            and self.flags == other.flags
        )

    def equal(self, other: Registers) -> bool:
        return self.equal_skip_pc(other) and self.pc == other.pc