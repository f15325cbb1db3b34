import argparse
import logging
import os
import tkinter as tk
from tkinter import filedialog, messagebox
from typing import List, Optional, Tuple

from PIL import Image, ImageTk

from .config import IMAGE_EXTENSIONS, RGBA, WindowConfig
from .controller import FrameInput, FrameResult, KeyLatch
from .geometry import CanvasGeometry, fit_canvas
from .overlay import Cursor, FilledRect, Line, RectOutline
from .session import Session

logger = logging.getLogger(__name__)

TK_CURSORS = {
    Cursor.DEFAULT: "",
    Cursor.RESIZE_NWSE: "bottom_right_corner",
    Cursor.RESIZE_NESW: "bottom_left_corner",
    Cursor.RESIZE_NS: "sb_v_double_arrow",
    Cursor.RESIZE_EW: "sb_h_double_arrow",
    Cursor.MOVE: "fleur",
}


def tk_color(rgba: RGBA) -> str:
    r, g, b, _ = rgba
    return f"#{r:02x}{g:02x}{b:02x}"


def tk_stipple(rgba: RGBA) -> str:
    # Tk has no alpha; approximate translucency with a stipple
    alpha = rgba[3]
    if alpha >= 255:
        return ""
    if alpha < 64:
        return "gray12"
    if alpha < 160:
        return "gray50"
    return "gray75"


# -------------------------
# ImageCanvas (UI)
# -------------------------
class ImageCanvas(tk.Canvas):
    """Letterboxed image plus box overlay; turns mouse events into frames."""

    def __init__(self, parent, session: Session, on_finalized, background: str):
        super().__init__(parent, bg=background, highlightthickness=0)
        self.pack(fill=tk.BOTH, expand=True)
        self.session = session
        self.on_finalized = on_finalized

        self.photo: Optional[ImageTk.PhotoImage] = None
        self._photo_key: Optional[Tuple] = None
        self.canvas_geometry: CanvasGeometry = CanvasGeometry(0, 0, 0, 0)
        self._pointer = (0.0, 0.0)
        self._pointer_inside = False

        self.bind("<Button-1>", self.on_mouse_down)
        self.bind("<B1-Motion>", self.on_mouse_drag)
        self.bind("<ButtonRelease-1>", self.on_mouse_up)
        self.bind("<Motion>", self.on_motion)
        self.bind("<Leave>", self.on_leave)
        self.bind("<Configure>", lambda e: self.refresh())

    # -- mouse events --
    def on_mouse_down(self, event):
        self._frame(event, pressed=True)

    def on_mouse_drag(self, event):
        self._frame(event, dragging=True)

    def on_mouse_up(self, event):
        self._frame(event, released=True)

    def on_motion(self, event):
        self._frame(event)

    def on_leave(self, event):
        self._pointer_inside = False
        self.refresh()

    def refresh(self):
        """Redraw with the last known pointer and no button edges."""
        x, y = self._pointer
        self._run_frame(x, y, over_widget=self._pointer_inside)

    def _frame(self, event, pressed=False, dragging=False, released=False):
        self._pointer = (float(event.x), float(event.y))
        self._pointer_inside = True
        self._run_frame(event.x, event.y, pressed=pressed, dragging=dragging,
                        released=released)

    def _run_frame(self, x, y, pressed=False, dragging=False, released=False,
                   over_widget=True):
        if not self.session.has_image:
            self.delete("all")
            return
        width, height = self.winfo_width(), self.winfo_height()
        self.canvas_geometry = fit_canvas(width, height, *self.session.image_size)
        inp = FrameInput(
            pointer=(float(x), float(y)),
            over_canvas=over_widget and self.canvas_geometry.contains(x, y),
            pressed=pressed, dragging=dragging, released=released,
            display_size=(float(width), float(height)),
        )
        result = self.session.frame(inp, self.canvas_geometry)
        self._draw(result)
        if result.finalized is not None:
            self.on_finalized(result.finalized)

    # -- drawing --
    def _show_image(self):
        g = self.canvas_geometry
        size = (max(1, int(round(g.width))), max(1, int(round(g.height))))
        key = (self.session.image_path, size)
        if key != self._photo_key:
            img = self.session.image.resize(size, Image.Resampling.BILINEAR)
            self.photo = ImageTk.PhotoImage(img)
            self._photo_key = key
        self.create_image(g.x, g.y, anchor=tk.NW, image=self.photo)

    def _draw(self, result: FrameResult):
        self.delete("all")
        self._show_image()
        for prim in result.primitives:
            if isinstance(prim, RectOutline):
                self.create_rectangle(*prim.p1, *prim.p2, outline=tk_color(prim.color),
                                      width=prim.thickness)
            elif isinstance(prim, FilledRect):
                self.create_rectangle(*prim.p1, *prim.p2, fill=tk_color(prim.color),
                                      outline="", stipple=tk_stipple(prim.color))
            elif isinstance(prim, Line):
                self.create_line(*prim.p1, *prim.p2, fill=tk_color(prim.color),
                                 width=prim.thickness, stipple=tk_stipple(prim.color))
        self.config(cursor=TK_CURSORS[result.cursor])


# -------------------------
# Main App (controller)
# -------------------------
class AnnotatorApp:
    def __init__(self, root, config: Optional[WindowConfig] = None):
        config = config or WindowConfig()
        self.root = root
        self.root.title(config.title)
        self.root.geometry(f"{config.width}x{config.height}")

        topbar = tk.Frame(root, height=28, bg="#2c2f33")
        topbar.pack(side=tk.TOP, fill=tk.X)
        self.status_label = tk.Label(topbar, text="", fg="#bdc3c7", bg="#2c2f33")
        self.status_label.pack(side=tk.LEFT, padx=10)

        self.session = Session()
        self.canvas = ImageCanvas(root, self.session, self.on_box_finalized,
                                  background=config.background)

        # menu
        menubar = tk.Menu(root)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Open Image", command=self.ask_open)
        file_menu.add_command(label="Save", command=self.save)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=root.quit)
        menubar.add_cascade(label="File", menu=file_menu)
        root.config(menu=menubar)

        # keybindings
        self._save_latch = KeyLatch()
        root.bind('<Right>', lambda e: self.next_image())
        root.bind('<Left>', lambda e: self.prev_image())
        root.bind('<KeyPress-s>', self._on_save_key)
        root.bind('<KeyRelease-s>', self._on_save_key_release)
        root.bind('<KeyPress-q>', lambda e: root.quit())
        self._update_status()

    # UI helpers
    def _update_status(self):
        s = self.session
        if not s.has_image:
            self.status_label.config(text="No image loaded")
            return
        fname = os.path.basename(s.image_path)
        w, h = s.image_size
        if s.index.index >= 0:
            pos = f"{s.index.index + 1}/{len(s.index)}: "
        else:
            pos = ""
        self.status_label.config(text=f"{pos}{fname} ({w}x{h})")

    def _report_failure(self, title: str):
        err = self.session.last_error
        if err is not None:
            messagebox.showerror(title, str(err))

    def open_image(self, path: str) -> bool:
        ok = self.session.load_image(path)
        if not ok:
            self._report_failure("Open Image")
        self._update_status()
        self.canvas.refresh()
        return ok

    def ask_open(self):
        patterns = " ".join(f"*{ext}" for ext in IMAGE_EXTENSIONS)
        path = filedialog.askopenfilename(filetypes=[("Images", patterns), ("All files", "*")])
        if path:
            self.open_image(path)

    def next_image(self):
        if not self.session.navigate_next():
            self._report_failure("Next Image")
        self._update_status()
        self.canvas.refresh()

    def prev_image(self):
        if not self.session.navigate_previous():
            self._report_failure("Previous Image")
        self._update_status()
        self.canvas.refresh()

    def save(self):
        if not self.session.save():
            self._report_failure("Save")

    def _on_save_key(self, event):
        if self._save_latch.press(event.time):
            self.save()

    def _on_save_key_release(self, event):
        self._save_latch.release(event.time)

    # callbacks from canvas
    def on_box_finalized(self, event):
        print(event.console_line())
        print(event.yolo_line())


# -------------------------
# Entry point
# -------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Draw and save a single bounding box over an image.")
    parser.add_argument("image", nargs="?", help="Image to open on start-up.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: INFO).")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.debug("Starting with image=%s", args.image)
    root = tk.Tk()
    app = AnnotatorApp(root)
    if args.image:
        app.open_image(os.path.abspath(args.image))
    root.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
