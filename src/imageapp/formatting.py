from __future__ import annotations

import re

from .pixels import BLACK, WHITE, Color, as_color

_NAMED = {"white": WHITE, "black": BLACK}
_HEX_RE = re.compile(r"#?([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})")


def parse_color(text: str) -> Color:
    """
    Parse a color written as:
    - '#RRGGBB' or 'RRGGBB'
    - 'r,g,b' (decimal, 0..255 each)
    - 'white' / 'black'
    """
    s = text.strip()
    named = _NAMED.get(s.lower())
    if named is not None:
        return named

    m = _HEX_RE.fullmatch(s)
    if m:
        return Color(*(int(part, 16) for part in m.groups()))

    parts = [p.strip() for p in s.split(",")]
    if len(parts) != 3:
        raise ValueError(f"invalid color: {text!r}")
    try:
        values = [int(p) for p in parts]
    except ValueError as exc:
        raise ValueError(f"invalid color: {text!r}") from exc
    return as_color(values)


def format_color(color: Color) -> str:
    """
    Uppercase '#RRGGBB'.
    """
    r, g, b = color
    return f"#{r:02X}{g:02X}{b:02X}"
