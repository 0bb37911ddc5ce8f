"""Joypad register (P1) and its interrupt timing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Iterator, Protocol

__all__ = ["Button", "PressedButtons", "Joypad"]

_IF_ADDR = 0xFF0F
_JOYPAD_IRQ_MASK = 0x10
_UNUSED_BITS = 0xC0


class _Bus(Protocol):
    def read8(self, addr: int) -> int: ...

    def write8(self, addr: int, value: int) -> None: ...


class Button(Enum):
    START = auto()
    SELECT = auto()
    B = auto()
    A = auto()
    DOWN = auto()
    UP = auto()
    LEFT = auto()
    RIGHT = auto()


_BUTTON_BITS = {
    Button.A: 0x01,
    Button.B: 0x02,
    Button.SELECT: 0x04,
    Button.START: 0x08,
}

_DPAD_BITS = {
    Button.RIGHT: 0x01,
    Button.LEFT: 0x02,
    Button.UP: 0x04,
    Button.DOWN: 0x08,
}


class _Selection(IntEnum):
    BOTH = 0x00
    BUTTONS = 0x01
    DPAD = 0x02
    DISABLED = 0x03


@dataclass
class PressedButtons:
    """A bounded set of buttons held down at one moment."""

    pressed: list[Button] = field(default_factory=list)

    def add(self, btn: Button) -> None:
        """Add a button; ignored once every button slot is used."""
        if len(self.pressed) >= len(Button):
            return
        self.pressed.append(btn)

    def __iter__(self) -> Iterator[Button]:
        return iter(self.pressed)

    def __len__(self) -> int:
        return len(self.pressed)


class Joypad:
    """The P1 register: button state as seen by the game, plus the joypad IRQ."""

    def __init__(self, bus: _Bus) -> None:
        self._bus = bus
        self.reset()

    def reset(self) -> None:
        self._selection = _Selection.DISABLED
        self._dpad = (_Selection.DPAD << 4) | 0x0F | _UNUSED_BITS
        self._buttons = (_Selection.BUTTONS << 4) | 0x0F | _UNUSED_BITS
        self._counter_enabled = False
        self._cycles = 0

    def step(self, m_cycles: int) -> None:
        """Advance time; request the interrupt once a press is held past 4 m-cycles."""
        if not self._counter_enabled:
            return
        self._cycles += m_cycles
        if self._cycles > 4:
            current = self._bus.read8(_IF_ADDR)
            self._bus.write8(_IF_ADDR, current | _JOYPAD_IRQ_MASK)

    def write(self, value: int) -> None:
        """Select which group is read; only bits 4 and 5 matter."""
        selection = _Selection((value >> 4) & 0x03)
        if selection in (_Selection.BUTTONS, _Selection.DPAD):
            self._cycles = 0
        else:
            self._counter_enabled = False
            self._cycles = 0
        self._selection = selection

    def read(self) -> int:
        if self._selection is _Selection.DPAD:
            return self._dpad
        if self._selection is _Selection.BUTTONS:
            return self._buttons
        if self._selection is _Selection.BOTH:
            return 0xFF
        return 0xCF

    def press(self, btn: Button) -> None:
        """Press a button (active low)."""
        if btn in _BUTTON_BITS:
            self._buttons &= ~_BUTTON_BITS[btn] & 0xFF
        else:
            self._dpad &= ~_DPAD_BITS[btn] & 0xFF
        if self._in_current_selection(btn):
            self._counter_enabled = True

    def release(self, btn: Button) -> None:
        """Release a button; stop the IRQ counter when its group is all released."""
        if btn in _BUTTON_BITS:
            self._buttons |= _BUTTON_BITS[btn]
        else:
            self._dpad |= _DPAD_BITS[btn]
        if self._in_current_selection(btn) and (self.read() & 0x0F) == 0x0F:
            self._counter_enabled = False
            self._cycles = 0

    def action(self, pressed: PressedButtons) -> None:
        """Release every button, then press exactly those given."""
        for btn in Button:
            self.release(btn)
        for btn in pressed:
            self.press(btn)

    def _in_current_selection(self, btn: Button) -> bool:
        if btn in _DPAD_BITS:
            return self._selection is _Selection.DPAD
        return self._selection is _Selection.BUTTONS