import pytest

from gbcore import alu
from gbcore.registers import Flags


def _bcd(n):
    return ((n // 10) << 4) | (n % 10)


def test_check_carry_helpers():
    assert alu.check_carry(0xFF, 0x01)
    assert not alu.check_carry(0x7F, 0x80)
    assert alu.check_carry(0x7F, 0x80, True)
    assert alu.check_half_carry(0x0F, 0x01)
    assert not alu.check_half_carry(0x0E, 0x01)
    assert alu.check_half_carry(0x0E, 0x01, True)
    assert alu.check_carry16(0xFFFF, 0x0001)
    assert not alu.check_carry16(0xFFFE, 0x0001)
    assert alu.check_half_carry16(0x0FFF, 0x0001)
    assert not alu.check_half_carry16(0x0FFE, 0x0001)


def test_check_borrow_helpers():
    assert alu.check_borrow(0x00, 0x01)
    assert not alu.check_borrow(0x01, 0x01)
    assert alu.check_borrow(0x01, 0x01, True)
    assert alu.check_half_borrow(0x10, 0x01)
    assert not alu.check_half_borrow(0x11, 0x01)
    assert alu.check_half_borrow(0x11, 0x01, True)


def test_add8_overflow_flags():
    flags = Flags()
    res = alu.add8(flags, 0xFF, 0x01)
    assert res == 0
    assert flags.z and flags.h and flags.c and not flags.n


@pytest.mark.parametrize("a", [0x00, 0x0F, 0x42, 0x80, 0xFF])
@pytest.mark.parametrize("b", [0x00, 0x01, 0x10, 0x7F, 0xFF])
def test_add_then_sub_round_trip(a, b):
    flags = Flags()
    total = alu.add8(flags, a, b)
    assert alu.sub8(flags, total, b) == a
    assert flags.n


@pytest.mark.parametrize("a", [0x00, 0x05, 0x80, 0xFF])
@pytest.mark.parametrize("b", [0x00, 0x05, 0x7F, 0xFF])
def test_cp8_matches_sub8_flags(a, b):
    sub_flags = Flags()
    alu.sub8(sub_flags, a, b)
    cp_flags = Flags()
    assert alu.cp8(cp_flags, a, b) is None
    assert cp_flags == sub_flags


@pytest.mark.parametrize("a", [0x00, 0x0F, 0xF0, 0xFF])
@pytest.mark.parametrize("b", [0x00, 0x01, 0xFE])
def test_adc_sbc_with_carry_round_trip(a, b):
    flags = Flags(c=True)
    total = alu.adc8(flags, a, b)
    flags.c = True
    assert alu.sbc8(flags, total, b) == a


def test_adc_without_carry_equals_add():
    add_flags = Flags()
    adc_flags = Flags()
    assert alu.adc8(adc_flags, 0x3A, 0xC6) == alu.add8(add_flags, 0x3A, 0xC6)
    assert adc_flags == add_flags


def test_logic_flags():
    flags = Flags(c=True)
    assert alu.and8(flags, 0xF0, 0x0F) == 0
    assert flags.z and flags.h and not flags.c and not flags.n
    assert alu.xor8(flags, 0x5A, 0x5A) == 0
    assert flags.z and not flags.h
    assert alu.or8(flags, 0xF0, 0x0F) == 0xFF
    assert not flags.z


def test_inc_dec_keep_carry_and_invert():
    for value in (0x00, 0x0F, 0x10, 0x7F, 0xFF):
        flags = Flags(c=True)
        up = alu.inc8(flags, value)
        assert flags.c and not flags.n
        assert flags.z == (up == 0)
        assert alu.dec8(flags, up) == value
        assert flags.c and flags.n
        assert flags.z == (value == 0)


def test_daa_source_example():
    flags = Flags()
    res = alu.add8(flags, 0x09, 0x08)
    assert alu.daa(flags, res) == 0x17


@pytest.mark.parametrize("x", range(0, 100, 7))
def test_daa_after_addition(x):
    for y in range(100):
        flags = Flags()
        res = alu.daa(flags, alu.add8(flags, _bcd(x), _bcd(y)))
        assert res == _bcd((x + y) % 100)
        assert flags.c == (x + y >= 100)
        assert flags.z == (res == 0)
        assert not flags.h


@pytest.mark.parametrize("x", range(0, 100, 7))
def test_daa_after_subtraction(x):
    for y in range(100):
        flags = Flags()
        res = alu.daa(flags, alu.sub8(flags, _bcd(x), _bcd(y)))
        assert res == _bcd((x - y) % 100)
        assert flags.c == (x < y)
        assert flags.n
        assert not flags.h


def test_add16_flags_and_z_untouched():
    flags = Flags(z=True)
    assert alu.add16(flags, 0xFFFF, 0x0001) == 0
    assert flags.c and flags.h and flags.z and not flags.n
    flags = Flags()
    alu.add16(flags, 0x0FFF, 0x0001)
    assert flags.h and not flags.c and not flags.z


@pytest.mark.parametrize("value", [0x00, 0x01, 0x80, 0x5A, 0xFF])
def test_rlc_rrc_inverse_and_period(value):
    flags = Flags()
    assert alu.rrc(flags, alu.rlc(flags, value)) == value
    res = value
    for _ in range(8):
        res = alu.rlc(flags, res)
    assert res == value


@pytest.mark.parametrize("value", [0x00, 0x01, 0x80, 0x5A, 0xFF])
@pytest.mark.parametrize("carry", [False, True])
def test_rl_rr_through_carry(value, carry):
    flags = Flags(c=carry)
    res = value
    for _ in range(9):
        res = alu.rl(flags, res)
    assert res == value and flags.c == carry
    assert alu.rr(flags, alu.rl(flags, value)) == value
    assert flags.c == carry


def test_rlc_moves_bit7_to_carry():
    flags = Flags()
    assert alu.rlc(flags, 0x80) == 0x01
    assert flags.c and not flags.z


@pytest.mark.parametrize("value", range(0, 256, 17))
def test_shifts(value):
    flags = Flags()
    left = alu.sla(flags, value)
    assert flags.c == bool(value & 0x80)
    assert left & 0x01 == 0
    assert flags.z == (left == 0)

    right = alu.srl(flags, value)
    assert flags.c == bool(value & 0x01)
    assert right & 0x80 == 0

    arith = alu.sra(flags, value)
    assert arith & 0x80 == value & 0x80
    assert arith & 0x7F == right & 0x7F


@pytest.mark.parametrize("value", range(0, 256, 13))
def test_swap_twice_is_identity(value):
    flags = Flags(c=True)
    once = alu.swap(flags, value)
    assert not flags.c
    assert alu.swap(flags, once) == value


def test_bit_source_example():
    flags = Flags(c=True)
    alu.bit(flags, 2, 0x22)
    assert flags.z and flags.h and not flags.n and flags.c
    alu.bit(flags, 1, 0x22)
    assert not flags.z


@pytest.mark.parametrize("index", [-1, 8])
def test_bit_rejects_bad_index(index):
    with pytest.raises(ValueError):
        alu.bit(Flags(), index, 0xFF)