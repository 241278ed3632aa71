from __future__ import annotations

from typing import Iterable, List, NamedTuple, Sequence


class Color(NamedTuple):
    red: int
    green: int
    blue: int


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)

Rows = List[List[Color]]  # row-major, rows[y][x]


def _check_channel(v: int) -> int:
    if not 0 <= v <= 255:
        raise ValueError(f"channel out of range 0..255: {v}")
    return v


def as_color(value: Sequence[int]) -> Color:
    r, g, b = value
    return Color(_check_channel(int(r)), _check_channel(int(g)), _check_channel(int(b)))


class PixelBuffer:
    """
    Fixed-shape grid of RGB pixels.
    - rows[y][x], y in 0..height-1, x in 0..width-1
    - shape never changes after construction; pixels may be replaced
    """

    __slots__ = ("height", "width", "_rows")

    def __init__(self, height: int, width: int, fill: Color = BLACK) -> None:
        if height < 0 or width < 0:
            raise ValueError(f"invalid size {width}x{height}")
        fill = as_color(fill)
        self.height = height
        self.width = width
        self._rows: Rows = [[fill] * width for _ in range(height)]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Sequence[int]]]) -> "PixelBuffer":
        grid = [[as_color(px) for px in row] for row in rows]
        h = len(grid)
        w = len(grid[0]) if h > 0 else 0
        for y, row in enumerate(grid):
            if len(row) != w:
                raise ValueError(f"ragged row {y}: expected width {w}, got {len(row)}")
        buf = cls(h, w)
        buf._rows = grid
        return buf

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, row: int, col: int) -> Color:
        return self._rows[row][col]

    def set(self, row: int, col: int, color: Color) -> None:
        self._rows[row][col] = color

    def red(self, row: int, col: int) -> int:
        return self._rows[row][col].red

    def green(self, row: int, col: int) -> int:
        return self._rows[row][col].green

    def blue(self, row: int, col: int) -> int:
        return self._rows[row][col].blue

    def rows(self) -> Rows:
        """Live rows; mutate pixels through set() or by replacing items."""
        return self._rows

    def to_rows(self) -> Rows:
        return [row[:] for row in self._rows]

    def copy(self) -> "PixelBuffer":
        out = PixelBuffer(self.height, self.width)
        out._rows = self.to_rows()
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and self._rows == other._rows

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
