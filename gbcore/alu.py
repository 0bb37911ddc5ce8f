"""Arithmetic, logic, rotate and shift operations of the CPU.

Each operation takes the flags register, updates it in place and returns
the new 8- or 16-bit value (comparisons and bit tests return nothing).
"""

from __future__ import annotations

from .registers import Flags

__all__ = [
    "check_carry",
    "check_carry16",
    "check_half_carry",
    "check_half_carry16",
    "check_borrow",
    "check_half_borrow",
    "add8",
    "adc8",
    "sub8",
    "sbc8",
    "and8",
    "or8",
    "xor8",
    "cp8",
    "inc8",
    "dec8",
    "daa",
    "add16",
    "rlc",
    "rl",
    "rrc",
    "rr",
    "sla",
    "sra",
    "srl",
    "swap",
    "bit",
]


def check_carry(lhs: int, rhs: int, carry: bool = False) -> bool:
    """Carry out of bit 7 when adding the low bytes."""
    return (lhs & 0xFF) + (rhs & 0xFF) + int(carry) > 0xFF


def check_carry16(lhs: int, rhs: int) -> bool:
    """Carry out of bit 15."""
    return (lhs & 0xFFFF) + (rhs & 0xFFFF) > 0xFFFF


def check_half_carry(lhs: int, rhs: int, carry: bool = False) -> bool:
    """Carry out of bit 3."""
    return (lhs & 0x0F) + (rhs & 0x0F) + int(carry) > 0x0F


def check_half_carry16(lhs: int, rhs: int) -> bool:
    """Carry out of bit 11."""
    return (lhs & 0x0FFF) + (rhs & 0x0FFF) > 0x0FFF


def check_borrow(lhs: int, rhs: int, carry: bool = False) -> bool:
    return lhs < rhs + int(carry)


def check_half_borrow(lhs: int, rhs: int, carry: bool = False) -> bool:
    """Borrow into bit 4."""
    return (lhs & 0x0F) < (rhs & 0x0F) + int(carry)


def add8(flags: Flags, a: int, rhs: int) -> int:
    res = (a + rhs) & 0xFF
    flags.z = res == 0
    flags.h = check_half_carry(a, rhs)
    flags.n = False
    flags.c = check_carry(a, rhs)
    return res


def adc8(flags: Flags, a: int, rhs: int) -> int:
    carry = flags.c
    res = (a + rhs + int(carry)) & 0xFF
    flags.z = res == 0
    flags.h = check_half_carry(a, rhs, carry)
    flags.n = False
    flags.c = check_carry(a, rhs, carry)
    return res


def sub8(flags: Flags, a: int, rhs: int) -> int:
    res = (a - rhs) & 0xFF
    flags.z = res == 0
    flags.h = check_half_borrow(a, rhs)
    flags.n = True
    flags.c = check_borrow(a, rhs)
    return res


def sbc8(flags: Flags, a: int, rhs: int) -> int:
    carry = flags.c
    res = (a - rhs - int(carry)) & 0xFF
    flags.z = res == 0
    flags.h = check_half_borrow(a, rhs, carry)
    flags.n = True
    flags.c = check_borrow(a, rhs, carry)
    return res


def and8(flags: Flags, a: int, rhs: int) -> int:
    res = a & rhs & 0xFF
    flags.z = res == 0
    flags.h = True
    flags.n = False
    flags.c = False
    return res


def or8(flags: Flags, a: int, rhs: int) -> int:
    res = (a | rhs) & 0xFF
    flags.z = res == 0
    flags.h = False
    flags.n = False
    flags.c = False
    return res


def xor8(flags: Flags, a: int, rhs: int) -> int:
    res = (a ^ rhs) & 0xFF
    flags.z = res == 0
    flags.h = False
    flags.n = False
    flags.c = False
    return res


def cp8(flags: Flags, a: int, rhs: int) -> None:
    """Set flags as for ``a - rhs`` without producing a result."""
    flags.z = a == rhs
    flags.h = check_half_borrow(a, rhs)
    flags.n = True
    flags.c = check_borrow(a, rhs)


def inc8(flags: Flags, value: int) -> int:
    """Increment; the carry flag is left untouched."""
    flags.z = value == 0xFF
    flags.h = check_half_carry(value, 1)
    flags.n = False
    return (value + 1) & 0xFF


def dec8(flags: Flags, value: int) -> int:
    """Decrement; the carry flag is left untouched."""
    flags.z = value == 0x01
    flags.h = check_half_borrow(value, 1)
    flags.n = True
    return (value - 1) & 0xFF


def daa(flags: Flags, a: int) -> int:
    """Decimal-adjust A after a BCD addition or subtraction.

    Z follows the result, H is cleared, N is kept, C follows the adjustment.
    """
    adjust = 0
    next_c = False
    if not flags.n:
        if flags.c or a > 0x99:
            adjust = 0x60
            next_c = True
        if flags.h or (a & 0x0F) > 0x09:
            adjust += 0x06
    elif flags.c:
        adjust = 0x9A if flags.h else 0xA0
        next_c = True
    else:
        adjust = 0xFA if flags.h else 0x00

    res = (a + adjust) & 0xFF
    flags.z = res == 0
    flags.c = next_c
    flags.h = False
    return res


def add16(flags: Flags, lhs: int, rhs: int) -> int:
    """16-bit addition as in ADD HL,rr; Z is left untouched."""
    flags.c = check_carry16(lhs, rhs)
    flags.h = check_half_carry16(lhs, rhs)
    flags.n = False
    return (lhs + rhs) & 0xFFFF


def _shift_flags(flags: Flags, res: int, carry: bool) -> int:
    flags.c = carry
    flags.z = res == 0
    flags.h = False
    flags.n = False
    return res


def rlc(flags: Flags, value: int) -> int:
    """Rotate left; bit 7 goes to C and to bit 0."""
    bit7 = bool(value & 0x80)
    return _shift_flags(flags, ((value << 1) | int(bit7)) & 0xFF, bit7)


def rl(flags: Flags, value: int) -> int:
    """Rotate left through carry."""
    bit7 = bool(value & 0x80)
    return _shift_flags(flags, ((value << 1) | int(flags.c)) & 0xFF, bit7)


def rrc(flags: Flags, value: int) -> int:
    """Rotate right; bit 0 goes to C and to bit 7."""
    bit0 = bool(value & 0x01)
    return _shift_flags(flags, ((value & 0xFF) >> 1) | (int(bit0) << 7), bit0)


def rr(flags: Flags, value: int) -> int:
    """Rotate right through carry."""
    bit0 = bool(value & 0x01)
    return _shift_flags(flags, ((value & 0xFF) >> 1) | (int(flags.c) << 7), bit0)


def sla(flags: Flags, value: int) -> int:
    """Shift left; bit 7 goes to C, 0 enters bit 0."""
    bit7 = bool(value & 0x80)
    return _shift_flags(flags, (value << 1) & 0xFF, bit7)


def sra(flags: Flags, value: int) -> int:
    """Arithmetic shift right; bit 7 is kept, bit 0 goes to C."""
    bit0 = bool(value & 0x01)
    value &= 0xFF
    return _shift_flags(flags, (value >> 1) | (value & 0x80), bit0)


def srl(flags: Flags, value: int) -> int:
    """Logical shift right; bit 0 goes to C, 0 enters bit 7."""
    bit0 = bool(value & 0x01)
    return _shift_flags(flags, (value & 0xFF) >> 1, bit0)


def swap(flags: Flags, value: int) -> int:
    """Exchange the two nibbles; C is cleared."""
    value &= 0xFF
    return _shift_flags(flags, ((value << 4) | (value >> 4)) & 0xFF, False)


def bit(flags: Flags, index: int, value: int) -> None:
    """Z becomes the complement of bit ``index``; H set, N cleared, C kept."""
    if not 0 <= index < 8:
        raise ValueError(f"bit index must be in 0..7, got {index}")
    flags.z = not (value & (1 << index))
    flags.h = True
    flags.n = False