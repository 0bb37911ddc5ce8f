# gbcore

Building blocks for a Game Boy (DMG) emulator, written in plain Python with no
third-party dependencies.

## Modules

- `gbcore.cartridge_types` – enums for cartridge header fields (`CGBFlag`,
  `SGBFlag`, `CartridgeType`, `DestCode`), their display names
  (`cgb_flag_to_str`, `sgb_flag_to_str`, `cart_type_to_str`, `dest_code_to_str`),
  `cart_type_from_code` for the cartridge type byte, and `new_licensee_name` /
  `old_licensee_name` for publisher codes. Unknown codes give
  `CartridgeType.UNKNOWN` or an empty string.
- `gbcore.joypad` – `Joypad` emulates the P1 register: `write` selects the
  button or d-pad group, `read` returns the active-low state, `press`,
  `release` and `action` (with a `PressedButtons` set of `Button` values)
  change it, and `step` requests the joypad interrupt (bit 4 of IF at 0xFF0F)
  once a press in the selected group has been held for more than 4 m-cycles.
- `gbcore.matrix` – `RgbaPixel` (with `as_u32`, packed as 0xRRGGBBAA), the
  shades `WHITE`, `LIGHT_GREY`, `DARK_GREY` and `BLACK`, `RgbaBuffer` (a byte
  buffer indexed as `buf[x, y]`, coordinates wrapping around) and `Matrix`, a
  grid of small values whose `fill_rgba_buffer` renders 0..3 as white to black.
  `Matrix.get` and `Matrix.set` raise `IndexError` outside the grid.
- `gbcore.registers` – `Flags` (Z, N, H, C with `as_u8` / `from_u8`) and
  `Registers` (A–L, PC, SP, the 16-bit pairs and `reset`, which puts PC at
  0x0100 and SP at 0xFFFE).
- `gbcore.alu` – the arithmetic, logic, rotate, shift and bit-test operations;
  each takes a `Flags`, updates it and returns the new value.
- `gbcore.cb` – `execute_cb(regs, bus, opcode)` runs one CB-prefixed
  instruction and returns its m-cycles.
- `gbcore.core` – `CpuCore`, the main opcode table. `execute` runs one fetched
  opcode and raises `ValueError` for the unused opcodes.
- `gbcore.cpu` – `CPU`, which services interrupts, handles HALT (including the
  HALT bug), STOP and the delayed effect of EI, and runs one instruction per
  `step`, returning a `StepResult(ok, cycles)`. It also tracks
  `elapsed_cycles`, `irq_nesting` and `call_nesting`.

Cycle counts are machine cycles (clock cycles divided by 4).

## Bus and interrupt objects

Components that touch memory take a *bus*: any object with `read8(addr)` and
`write8(addr, value)`.

`CPU` also takes an interrupt controller: an object with an `ime` attribute and
the methods `reset()`, `current_irq()` (the bit index 0..4 of the
highest-priority pending interrupt, or `None`), `read_if()` and
`write_if(value)`. A serviced interrupt jumps to `0x40 + 8 * index`.

## Example

```python
from gbcore.cpu import CPU


class Bus:
    def __init__(self):
        self.mem = bytearray(0x10000)

    def read8(self, addr):
        return self.mem[addr]

    def write8(self, addr, value):
        self.mem[addr] = value & 0xFF


class Irqs:
    def __init__(self):
        self.ime = False
        self.flags = 0

    def reset(self):
        self.ime = False
        self.flags = 0

    def current_irq(self):
        return None

    def read_if(self):
        return self.flags

    def write_if(self, value):
        self.flags = value


bus = Bus()
bus.mem[0x100:0x104] = bytes([0x3E, 0x05, 0xC6, 0x03])  # LD A,5 ; ADD A,3

cpu = CPU(bus, Irqs())
cpu.step()
result = cpu.step()
print(cpu.regs.a, result.cycles)  # 8 2
```

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What this package does not do

It provides components, not a whole emulator. It does not read or validate a
cartridge header from a ROM image, load ROM files, or emulate memory bank
controllers. It has no OAM DMA engine, no picture, timer, serial or sound
hardware, no memory map tying the parts together, no save states, and no window
or command to run a game. The caller supplies the bus and the interrupt
controller.