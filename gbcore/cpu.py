"""The CPU: interrupt servicing, HALT/STOP handling and instruction stepping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Protocol

from .core import CpuCore
from .registers import Registers

__all__ = ["StepResult", "CPU"]

_JOYPAD_ADDR = 0xFF00
_IRQ_VECTOR_BASE = 0x40
_IRQ_CALL_CYCLES = 5


class _Bus(Protocol):
    def read8(self, addr: int) -> int: ...

    def write8(self, addr: int, value: int) -> None: ...


class _Irqs(Protocol):
    """Interrupt controller as seen by the CPU.

    ``current_irq`` returns the bit index (0 = V-blank .. 4 = joypad) of the
    highest priority interrupt that is both enabled and requested, or None.
    """

    ime: bool

    def reset(self) -> None: ...

    def current_irq(self) -> Optional[int]: ...

    def read_if(self) -> int: ...

    def write_if(self, value: int) -> None: ...


@dataclass(frozen=True)
class StepResult:
    """Outcome of one CPU step: whether the opcode was valid and the m-cycles used."""

    ok: bool
    cycles: int


class CPU:
    """Runs one instruction, interrupt or idle cycle per ``step``.

    Cycle counts are machine cycles (clock cycles divided by 4).
    """

    LONGEST_INSTRUCTION_CYCLES: ClassVar[int] = 6

    def __init__(self, bus: _Bus, irqs: _Irqs) -> None:
        self._bus = bus
        self.irqs = irqs
        self._core = CpuCore(bus, irqs)
        self._cycles = 0
        self.reset()

    @property
    def regs(self) -> Registers:
        return self._core.regs

    def reset(self) -> None:
        core = self._core
        self._cycles = 0
        core.ime_scheduled = False
        core.halted = False
        core.check_halt_bug = False
        core.stopped = False
        core.regs.reset()
        self.irqs.reset()

    def step(self) -> StepResult:
        core = self._core
        regs = core.regs
        irqs = self.irqs
        trigger_halt_bug = False

        # While stopped nothing runs until a joypad line goes low.
        if core.stopped:
            if (self._bus.read8(_JOYPAD_ADDR) & 0x0F) != 0x0F:
                core.stopped = False
            else:
                return StepResult(True, 1)

        irq = irqs.current_irq()

        if core.check_halt_bug:
            core.check_halt_bug = False
            if not irqs.ime and irq is not None:
                trigger_halt_bug = True

        if irq is not None:
            # A pending interrupt always ends HALT, even if it is not serviced.
            core.halted = False
            if irqs.ime:
                irqs.ime = False
                irqs.write_if(irqs.read_if() & ~(1 << irq) & 0xFF)
                cycles = self._call_irq(irq)
                self._cycles += cycles
                return StepResult(True, cycles)

        if core.halted:
            return StepResult(True, 1)

        if core.ime_scheduled:
            irqs.ime = True
            core.ime_scheduled = False

        opcode = self._bus.read8(regs.pc)
        regs.pc = (regs.pc + 1) & 0xFFFF

        # HALT bug: the byte after HALT is read twice.
        if trigger_halt_bug:
            regs.pc = (regs.pc - 1) & 0xFFFF

        try:
            cycles = core.execute(opcode)
            ok = True
        except ValueError:
            cycles = 1
            ok = False
        self._cycles += cycles
        return StepResult(ok, cycles)

    def elapsed_cycles(self) -> int:
        return self._cycles

    def is_halted(self) -> bool:
        return self._core.halted

    def is_stopped(self) -> bool:
        return self._core.stopped

    def irq_nesting(self) -> int:
        return len(self._core.irq_stack)

    def call_nesting(self) -> int:
        return len(self._core.call_stack)

    def _call_irq(self, irq: int) -> int:
        core = self._core
        pc = core.regs.pc
        core.push16(pc)
        core.irq_stack.append(pc)
        core.regs.pc = _IRQ_VECTOR_BASE + 8 * irq
        return _IRQ_CALL_CYCLES