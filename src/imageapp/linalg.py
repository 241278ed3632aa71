from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Vector2:
    x: int
    y: int

    def __getitem__(self, index: int) -> int:
        return (self.x, self.y)[index]


@dataclass(frozen=True)
class Matrix2x2:
    rows: Tuple[Tuple[int, int], Tuple[int, int]]

    def multiply(self, v: Vector2) -> Vector2:
        (a, b), (c, d) = self.rows
        return Vector2(a * v.x + b * v.y, c * v.x + d * v.y)

    def __matmul__(self, v: Vector2) -> Vector2:
        return self.multiply(v)


# 90 degree rotation; with rows growing downward this turns the image clockwise
ROTATE_90 = Matrix2x2(((0, -1), (1, 0)))
