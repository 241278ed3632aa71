from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .linalg import ROTATE_90, Vector2
from .pixels import WHITE, Color, PixelBuffer


@dataclass(frozen=True)
class EditOptions:
    recolor: bool = False
    negative: bool = False
    grayscale: bool = False
    rotate: int | None = None  # clockwise degrees; whole 90 steps only
    insert: Path | None = None  # image overlaid at (insert_x, insert_y)
    insert_x: int = 0
    insert_y: int = 0
    background: Color = WHITE  # overlay color treated as transparent


def op_recolor(buf: PixelBuffer) -> PixelBuffer:
    """(R, G, B) -> (G, B, R), in place."""
    for row in buf.rows():
        for x, (r, g, b) in enumerate(row):
            row[x] = Color(g, b, r)
    return buf


def op_negative(buf: PixelBuffer) -> PixelBuffer:
    for row in buf.rows():
        for x, (r, g, b) in enumerate(row):
            row[x] = Color(255 - r, 255 - g, 255 - b)
    return buf


def op_grayscale(buf: PixelBuffer) -> PixelBuffer:
    """
    Average of the three channels, truncated (not rounded).
    """
    for row in buf.rows():
        for x, (r, g, b) in enumerate(row):
            avg = (r + g + b) // 3
            row[x] = Color(avg, avg, avg)
    return buf


def rotate_step(src: PixelBuffer) -> PixelBuffer:
    """
    One clockwise 90 degree step into a new buffer.

    Source (row i, col j) is taken as the vector (j, i) and multiplied by
    ROTATE_90, giving (-i, j). Translating by (dest_w - 1, 0) moves it into
    destination index space: (x, y) -> (col, row). Writes that land outside
    the destination are dropped.
    """
    src_h, src_w = src.height, src.width
    dest_h, dest_w = src_w, src_h
    out = PixelBuffer(dest_h, dest_w)

    for i in range(src_h):
        for j in range(src_w):
            rotated = ROTATE_90 @ Vector2(j, i)
            new_x, new_y = rotated[0], rotated[1]

            dest_col = new_x + (dest_w - 1)
            dest_row = new_y

            if out.in_bounds(dest_row, dest_col):
                out.set(dest_row, dest_col, src.get(i, j))
    return out


def op_rotate(buf: PixelBuffer, degrees: int) -> PixelBuffer:
    """
    Clockwise rotation in repeated 90 degree steps.
    A remainder below 90 is dropped; degrees < 90 return an unrotated copy.
    The input buffer is never modified.
    """
    out = buf.copy()
    remaining = degrees
    while remaining >= 90:
        out = rotate_step(out)
        remaining -= 90
    return out


def op_insert(
    target: PixelBuffer,
    source: PixelBuffer,
    x: int,
    y: int,
    background: Color = WHITE,
) -> PixelBuffer:
    """
    Overlay source onto target with its top-left corner at column x, row y.
    Source pixels equal to background are skipped; pixels that fall outside
    target are dropped. Mutates and returns target.
    """
    for i in range(source.height):
        for j in range(source.width):
            color = source.get(i, j)
            if target.in_bounds(y + i, x + j) and color != background:
                target.set(y + i, x + j, color)
    return target


def apply_edits(
    buf: PixelBuffer,
    opts: EditOptions,
    overlay: PixelBuffer | None = None,
) -> PixelBuffer:
    """
    Deterministic edit order:
    recolor → negative → grayscale → rotate → insert
    The input buffer is left untouched.
    """
    out = buf.copy()
    if opts.recolor:
        out = op_recolor(out)
    if opts.negative:
        out = op_negative(out)
    if opts.grayscale:
        out = op_grayscale(out)
    if opts.rotate is not None:
        out = op_rotate(out, opts.rotate)
    if opts.insert is not None:
        if overlay is None:
            raise ValueError("insert requested but no overlay image was given")
        out = op_insert(out, overlay, opts.insert_x, opts.insert_y, opts.background)
    return out
