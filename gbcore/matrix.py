"""Generic pixel matrices and RGBA buffers used for screen output."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "RgbaPixel",
    "RgbaBuffer",
    "Matrix",
    "BLACK",
    "DARK_GREY",
    "LIGHT_GREY",
    "WHITE",
]


@dataclass(frozen=True)
class RgbaPixel:
    r: int
    g: int
    b: int
    a: int

    def as_u32(self) -> int:
        """Pack as 0xRRGGBBAA."""
        return (self.r << 24) | (self.g << 16) | (self.b << 8) | self.a


BLACK = RgbaPixel(0, 0, 0, 255)
DARK_GREY = RgbaPixel(120, 120, 120, 255)
LIGHT_GREY = RgbaPixel(200, 200, 200, 255)
WHITE = RgbaPixel(255, 255, 255, 255)

_SHADES = {0: WHITE, 1: LIGHT_GREY, 2: DARK_GREY, 3: BLACK}


class RgbaBuffer:
    """A width x height image stored as packed RGBA bytes.

    Pixel coordinates wrap around the buffer size.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.data = bytearray(width * height * 4)

    @property
    def size(self) -> int:
        return len(self.data)

    def _offset(self, pos: tuple[int, int]) -> int:
        x, y = pos
        x %= self.width
        y %= self.height
        return (y * self.width + x) * 4

    def __getitem__(self, pos: tuple[int, int]) -> RgbaPixel:
        off = self._offset(pos)
        return RgbaPixel(*self.data[off:off + 4])

    def __setitem__(self, pos: tuple[int, int], pixel: RgbaPixel) -> None:
        off = self._offset(pos)
        self.data[off:off + 4] = bytes((pixel.r, pixel.g, pixel.b, pixel.a))

    def fill(self, pixel: RgbaPixel) -> None:
        self.data[:] = bytes((pixel.r, pixel.g, pixel.b, pixel.a)) * (self.width * self.height)


class Matrix:
    """A width x height grid of small values (such as 2-bit shades).

    Subclasses may override ``_get`` and ``_set`` to map the grid onto other
    storage; by default one byte per cell is kept.
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._cells = bytearray(width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"({x}, {y}) outside {self._width}x{self._height} matrix")

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return self._get(x, y)

    def set(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        self._set(x, y, value)

    def _get(self, x: int, y: int) -> int:
        return self._cells[y * self._width + x]

    def _set(self, x: int, y: int, value: int) -> None:
        self._cells[y * self._width + x] = value & 0xFF

    def fill_rgba_buffer(self, buf: RgbaBuffer) -> None:
        """Render cells as grey shades (0 white .. 3 black) into ``buf``."""
        for y in range(self._height):
            for x in range(self._width):
                buf[x, y] = _SHADES.get(self.get(x, y), WHITE)