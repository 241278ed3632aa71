from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from typing import Optional

from PIL import Image, ImageTk

from . import __version__
from .core import ImageAppError, image_from_buffer, load_buffer, save_buffer
from .formatting import format_color, parse_color
from .ops import op_grayscale, op_insert, op_negative, op_recolor, op_rotate
from .pixels import WHITE, PixelBuffer

_FILETYPES = [
    ("Images", "*.png *.jpg *.jpeg *.webp *.bmp"),
    ("All files", "*.*"),
]


class Explorer(ttk.Frame):
    """
    Picture explorer: shows the current picture and runs one operation per
    button press. The current picture belongs to this window.
    """

    def __init__(self, master: tk.Tk, picture: Optional[PixelBuffer] = None) -> None:
        super().__init__(master, padding=12)
        self.master.title(f"imageapp v{__version__}")
        self._build_menu()
        self.master.geometry("980x720")
        self.master.minsize(640, 480)

        self.picture: Optional[PixelBuffer] = None
        self._original: Optional[PixelBuffer] = None
        self._photo: Optional[ImageTk.PhotoImage] = None
        self.source_path = tk.StringVar(value="")

        self.zoom = tk.IntVar(value=1)
        self.insert_x = tk.IntVar(value=0)
        self.insert_y = tk.IntVar(value=0)
        self.background = tk.StringVar(value=format_color(WHITE))

        self._build_ui()
        if picture is not None:
            self.show(picture, keep_as_original=True)

    # ---------- Menubar ----------
    def _build_menu(self) -> None:
        menubar = tk.Menu(self.master)
        file_menu = tk.Menu(menubar, tearoff=False)
        file_menu.add_command(label="Open…", command=self._open_clicked)
        file_menu.add_command(label="Save as…", command=self._save_clicked)
        file_menu.add_separator()
        file_menu.add_command(label="Quit", command=self.master.destroy)
        menubar.add_cascade(label="File", menu=file_menu)
        self.master.config(menu=menubar)

    # ---------------- UI ----------------
    def _build_ui(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        bar = ttk.Frame(self)
        bar.grid(row=0, column=0, sticky="ew", pady=(0, 8))
        ttk.Button(bar, text="Open…", command=self._open_clicked).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(bar, text="Recolor", command=lambda: self._color_op(op_recolor)).grid(row=0, column=1, padx=2)
        ttk.Button(bar, text="Negative", command=lambda: self._color_op(op_negative)).grid(row=0, column=2, padx=2)
        ttk.Button(bar, text="Grayscale", command=lambda: self._color_op(op_grayscale)).grid(row=0, column=3, padx=2)
        ttk.Button(bar, text="Rotate 90", command=lambda: self._rotate(90)).grid(row=0, column=4, padx=2)
        ttk.Button(bar, text="Rotate 180", command=lambda: self._rotate(180)).grid(row=0, column=5, padx=2)
        ttk.Button(bar, text="Rotate 270", command=lambda: self._rotate(270)).grid(row=0, column=6, padx=2)
        ttk.Button(bar, text="Reset", command=self._reset_clicked).grid(row=0, column=7, padx=(6, 2))
        ttk.Button(bar, text="Save as…", command=self._save_clicked).grid(row=0, column=8, padx=2)

        ins = ttk.Frame(self)
        ins.grid(row=2, column=0, sticky="ew", pady=(8, 0))
        ttk.Label(ins, text="Insert at X").grid(row=0, column=0)
        ttk.Spinbox(ins, from_=-4096, to=4096, width=6, textvariable=self.insert_x).grid(row=0, column=1, padx=(4, 10))
        ttk.Label(ins, text="Y").grid(row=0, column=2)
        ttk.Spinbox(ins, from_=-4096, to=4096, width=6, textvariable=self.insert_y).grid(row=0, column=3, padx=(4, 10))
        ttk.Label(ins, text="Background").grid(row=0, column=4)
        ttk.Entry(ins, textvariable=self.background, width=10).grid(row=0, column=5, padx=(4, 10))
        ttk.Button(ins, text="Insert…", command=self._insert_clicked).grid(row=0, column=6)
        ttk.Label(ins, text="Zoom").grid(row=0, column=7, padx=(20, 0))
        ttk.Spinbox(ins, from_=1, to=16, width=4, textvariable=self.zoom, command=self._render).grid(row=0, column=8, padx=4)

        self.canvas = tk.Canvas(self, bg="#FFFFFF", highlightthickness=1, relief="sunken")
        self.canvas.grid(row=1, column=0, sticky="nsew")

        self.status = ttk.Label(self, text="No picture loaded", anchor="w")
        self.status.grid(row=3, column=0, sticky="ew", pady=(6, 0))

        self.pack(fill="both", expand=True)

    # ---------- Display ----------
    def show(self, picture: PixelBuffer, keep_as_original: bool = False) -> None:
        """Make picture the current one and render it."""
        self.picture = picture
        if keep_as_original:
            self._original = picture.copy()
        self._render()

    def _render(self, *_args) -> None:
        self.canvas.delete("all")
        if self.picture is None or self.picture.width == 0 or self.picture.height == 0:
            return
        zoom = max(1, int(self.zoom.get()))
        img = image_from_buffer(self.picture)
        if zoom != 1:
            img = img.resize((img.width * zoom, img.height * zoom), Image.NEAREST)
        self._photo = ImageTk.PhotoImage(img)
        self.canvas.configure(scrollregion=(0, 0, self._photo.width(), self._photo.height()))
        self.canvas.create_image(0, 0, anchor="nw", image=self._photo)
        self.status.configure(text=f"{self.picture.width}x{self.picture.height}  {self.source_path.get()}")

    def _require_picture(self) -> bool:
        if self.picture is None:
            messagebox.showerror("imageapp", "Open a picture first.")
            return False
        return True

    # ---------- Operations ----------
    def _color_op(self, op) -> None:
        if not self._require_picture():
            return
        self.show(op(self.picture))

    def _rotate(self, degrees: int) -> None:
        if not self._require_picture():
            return
        self.show(op_rotate(self.picture, degrees))

    def _insert_clicked(self) -> None:
        if not self._require_picture():
            return
        try:
            bg = parse_color(self.background.get())
            x = int(self.insert_x.get())
            y = int(self.insert_y.get())
        except (ValueError, tk.TclError) as e:
            messagebox.showerror("imageapp", f"Invalid insert settings: {e}")
            return
        p = filedialog.askopenfilename(title="Choose image to insert", filetypes=_FILETYPES)
        if not p:
            return
        try:
            overlay = load_buffer(Path(p))
        except ImageAppError as e:
            messagebox.showerror("imageapp", str(e))
            return
        self.show(op_insert(self.picture, overlay, x, y, background=bg))

    def _reset_clicked(self) -> None:
        if self._original is not None:
            self.show(self._original.copy())

    # ---------- Files ----------
    def open_path(self, path: Path) -> None:
        try:
            buf = load_buffer(path)
        except ImageAppError as e:
            messagebox.showerror("imageapp", str(e))
            return
        self.source_path.set(str(path))
        self.show(buf, keep_as_original=True)

    def _open_clicked(self) -> None:
        p = filedialog.askopenfilename(title="Choose picture", filetypes=_FILETYPES)
        if p:
            self.open_path(Path(p))

    def _save_clicked(self) -> None:
        if not self._require_picture():
            return
        p = filedialog.asksaveasfilename(
            title="Save picture as",
            defaultextension=".png",
            filetypes=_FILETYPES,
        )
        if not p:
            return
        try:
            save_buffer(self.picture, Path(p))
        except ImageAppError as e:
            messagebox.showerror("imageapp", str(e))


def main(path: Optional[Path] = None) -> None:
    root = tk.Tk()
    try:
        style = ttk.Style()
        if "vista" in style.theme_names():
            style.theme_use("vista")
        elif "clam" in style.theme_names():
            style.theme_use("clam")
    except tk.TclError:
        pass
    app = Explorer(root)
    if path is not None:
        app.open_path(Path(path))
    root.mainloop()


if __name__ == "__main__":
    main()
