from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .ops import EditOptions, apply_edits
from .pixels import Color, PixelBuffer

SUPPORTED_INPUT_FORMATS = frozenset({"png", "jpg", "jpeg", "webp", "bmp"})
SUPPORTED_EXPORT_FORMATS = frozenset({"png", "jpg", "jpeg", "webp", "bmp"})


class ImageAppError(Exception):
    """User-facing one-line errors."""


@dataclass(frozen=True)
class ImageResult:
    width: int
    height: int
    source_path: Path
    out_path: Path


def _suffix(path: Path) -> str:
    return path.suffix.lower().lstrip(".")


def buffer_from_image(img: Image.Image) -> PixelBuffer:
    rgb = img.convert("RGB")
    w, h = rgb.size
    px = rgb.load()
    rows = []
    for y in range(h):
        row = []
        for x in range(w):
            row.append(Color(*px[x, y]))
        rows.append(row)
    if h == 0:
        return PixelBuffer(0, w)
    return PixelBuffer.from_rows(rows)


def image_from_buffer(buf: PixelBuffer) -> Image.Image:
    img = Image.new("RGB", buf.size, (0, 0, 0))
    px = img.load()
    for y, row in enumerate(buf.rows()):
        for x, color in enumerate(row):
            px[x, y] = tuple(color)
    return img


def load_buffer(path: Path, verbose: bool = False) -> PixelBuffer:
    path = Path(path)
    if not path.exists():
        raise ImageAppError(f"File not found: {path}")
    if _suffix(path) not in SUPPORTED_INPUT_FORMATS:
        raise ImageAppError(
            f"Unsupported input format: {path.name} "
            f"(expected one of {', '.join(sorted(SUPPORTED_INPUT_FORMATS))})"
        )
    try:
        with Image.open(path) as img:
            buf = buffer_from_image(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageAppError(f"Cannot decode image: {path.name} ({exc})") from exc
    if verbose:
        print(f"Loaded {path} ({buf.width}x{buf.height})")
    return buf


def save_buffer(buf: PixelBuffer, path: Path, verbose: bool = False) -> Path:
    path = Path(path)
    if _suffix(path) not in SUPPORTED_EXPORT_FORMATS:
        raise ImageAppError(
            f"Unsupported output format: {path.name} "
            f"(expected one of {', '.join(sorted(SUPPORTED_EXPORT_FORMATS))})"
        )
    if buf.width == 0 or buf.height == 0:
        raise ImageAppError("Image has zero size; nothing to save.")
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        image_from_buffer(buf).save(path)
    except OSError as exc:
        raise ImageAppError(f"Cannot write image: {path} ({exc})") from exc
    if verbose:
        print(f"Wrote {path} ({buf.width}x{buf.height})")
    return path


def process_image(
    input_path: Path,
    out_path: Path,
    edits: EditOptions,
    verbose: bool = False,
) -> ImageResult:
    """
    Load input_path, apply edits (loading the insert image if requested),
    save the result to out_path.
    """
    buf = load_buffer(input_path, verbose=verbose)

    overlay = None
    if edits.insert is not None:
        overlay = load_buffer(edits.insert, verbose=verbose)

    out = apply_edits(buf, edits, overlay=overlay)
    if verbose and edits.rotate is not None:
        steps = max(edits.rotate, 0) // 90
        print(f"Rotated {steps * 90} degrees -> {out.width}x{out.height}")

    save_buffer(out, out_path, verbose=verbose)
    return ImageResult(width=out.width, height=out.height, source_path=Path(input_path), out_path=Path(out_path))
