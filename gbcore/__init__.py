"""Game Boy emulator components: CPU, joypad, cartridge header enums and pixel buffers."""

__version__ = "0.1.0"