from __future__ import annotations

import argparse
import sys
import unittest
from pathlib import Path
from typing import List, Tuple

from . import __version__
from .core import ImageAppError, process_image
from .formatting import parse_color
from .ops import EditOptions
from .pixels import Color


def _parse_at(value: str) -> Tuple[int, int]:
    try:
        xs, ys = value.split(",", 1)
        return int(xs.strip()), int(ys.strip())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid --at: {value!r} (expected X,Y)") from exc


def _parse_background(value: str) -> Color:
    try:
        return parse_color(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _edit_options_from_args(ns: argparse.Namespace) -> EditOptions:
    x, y = ns.at
    return EditOptions(
        recolor=ns.recolor,
        negative=ns.negative,
        grayscale=ns.grayscale,
        rotate=ns.rotate,
        insert=ns.insert,
        insert_x=x,
        insert_y=y,
        background=ns.background,
    )


def _add_edit_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--recolor", action="store_true", help="swap channels (R,G,B) -> (G,B,R)")
    p.add_argument("--negative", action="store_true", help="photographic negative")
    p.add_argument("--grayscale", action="store_true", help="average RGB into gray")
    p.add_argument(
        "--rotate",
        type=int,
        metavar="DEG",
        help="rotate clockwise by DEG (whole 90 degree steps; remainder ignored)",
    )
    p.add_argument("--insert", type=Path, metavar="IMAGE", help="image to overlay")
    p.add_argument(
        "--at",
        type=_parse_at,
        default=(0, 0),
        metavar="X,Y",
        help="overlay position in the main image (default 0,0)",
    )
    p.add_argument(
        "--background",
        type=_parse_background,
        default=parse_color("white"),
        metavar="COLOR",
        help="overlay color treated as transparent: #RRGGBB, r,g,b, white, black (default white)",
    )


def run_selftest() -> int:
    loader = unittest.TestLoader()
    suite = loader.discover(start_dir=str(Path(__file__).parent.parent.parent / "tests"))
    runner = unittest.TextTestRunner(verbosity=2)
    res = runner.run(suite)
    return 0 if res.wasSuccessful() else 1


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="imageapp",
        description="Recolor, rotate and composite RGB images.",
    )
    ap.add_argument("--selftest", action="store_true", help="run the internal test suite and exit")
    ap.add_argument("--version", action="version", version=f"imageapp {__version__}")

    sub = ap.add_subparsers(dest="cmd", required=False)

    p_gui = sub.add_parser("gui", help="launch the picture explorer")
    p_gui.add_argument("input", type=Path, nargs="?", metavar="IMAGE")

    p_apply = sub.add_parser("apply", help="apply edits to one image and save the result")
    p_apply.add_argument("input", type=Path, metavar="IMAGE")
    p_apply.add_argument("-o", "--output", type=Path, required=True, help="output image path")
    p_apply.add_argument("--verbose", action="store_true", help="verbose logging")
    _add_edit_flags(p_apply)

    return ap


def main(argv: List[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    ap = build_parser()
    ns = ap.parse_args(argv)

    if ns.cmd == "gui":
        # lazy import: tkinter is not needed for batch use
        from .gui import main as gui_main
        gui_main(ns.input)
        return

    if ns.selftest and ns.cmd is None:
        sys.exit(run_selftest())

    if ns.cmd == "apply":
        if ns.insert is None and ns.at != (0, 0):
            ap.error("--at requires --insert")
        edits = _edit_options_from_args(ns)
        try:
            process_image(
                input_path=ns.input,
                out_path=ns.output,
                edits=edits,
                verbose=ns.verbose,
            )
        except ImageAppError as e:
            print(str(e), file=sys.stderr)
            sys.exit(2)
        return

    ap.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
