import logging
import sys
import tkinter as tk
from gettext import gettext as _
from tkinter import filedialog, messagebox, ttk
from typing import Optional

from PIL import Image, ImageTk

from image_marker.core.annotation import (
    Color,
    ContainerRect,
    KeyEvent,
    MarkerSession,
    PointerEvent,
    WheelEvent,
)
from image_marker.interfaces import GUIMarkerAdapter, InputEventRouter
from image_marker.utils.config import load_cfg
from image_marker.utils.image import read_rgb_image

logger = logging.getLogger(__name__)

IMAGE_FILETYPES = [
    (_("Images"), "*.png *.jpg *.jpeg *.bmp *.tif *.tiff *.webp"),
    (_("All files"), "*"),
]


def handle(args):
    cfg = load_cfg()

    session = MarkerSession.from_config(cfg)
    session.select_color(args.color)

    if args.image is not None:
        try:
            image = read_rgb_image(args.image)
        except (FileNotFoundError, ValueError) as e:
            logger.error(_("Could not open image: {error}").format(error=e))
            sys.exit(1)
        session.load_image(image, str(args.image))

    root = tk.Tk()
    root.title(_("Image Marker"))
    app = MarkerApp(root, session, cfg)
    app.pack(fill=tk.BOTH, expand=True)
    root.mainloop()


class MarkerApp(ttk.Frame):
    """Tk window feeding the input router and showing the rendered container."""

    def __init__(self, master: tk.Tk, session: MarkerSession, cfg):
        super().__init__(master, padding=8)
        self.session = session
        self.router = InputEventRouter.from_config(session, cfg)
        self.adapter = GUIMarkerAdapter.from_config(
            session, cfg, update_image_callback=self._redraw
        )
        self._photo: Optional[ImageTk.PhotoImage] = None

        self._build_toolbar()

        self.hint = ttk.Label(
            self,
            text=_("Click on the image to mark. Hold Z and scroll over the image to zoom."),
        )
        self.hint.pack(anchor=tk.W, pady=(4, 4))

        self.canvas = tk.Canvas(
            self,
            width=self.adapter.container_width,
            height=self.adapter.container_width,
            highlightthickness=0,
            bg="#1f1f1f",
        )
        self.canvas.pack(anchor=tk.W)

        self.status = ttk.Label(self)
        self.status.pack(anchor=tk.W, pady=(4, 0))

        self.canvas.bind("<Button-1>", self._on_click)
        self.canvas.bind("<MouseWheel>", self._on_mouse_wheel)  # Windows/macOS
        self.canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self.canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down
        master.bind_all("<KeyPress>", self._on_key_down)
        master.bind_all("<KeyRelease>", self._on_key_up)

        self._redraw()

    def _build_toolbar(self):
        toolbar = ttk.Frame(self)
        toolbar.pack(fill=tk.X)

        ttk.Button(toolbar, text=_("Open image..."), command=self._on_open).pack(
            side=tk.LEFT
        )

        self.color_var = tk.StringVar(value=self.session.pending_color.value)
        colors = [c.value for c in Color]
        ttk.OptionMenu(
            toolbar,
            self.color_var,
            self.color_var.get(),
            *colors,
            command=self._on_color_selected,
        ).pack(side=tk.LEFT, padx=(8, 0))

        ttk.Button(toolbar, text=_("Reset Zoom"), command=self._on_reset_zoom).pack(
            side=tk.RIGHT
        )

    def _container_rect(self) -> ContainerRect:
        size = self.adapter.container_size()
        if size is None:
            return ContainerRect(0, 0, 0, 0)
        width, height = size
        return ContainerRect(0, 0, width, height)

    def _redraw(self):
        self.canvas.delete("all")
        vis = self.adapter.get_visualization()
        if vis is None:
            self.status.configure(text=_("No image loaded"))
            return

        height, width = vis.shape[:2]
        self.canvas.configure(width=width, height=height)
        self._photo = ImageTk.PhotoImage(Image.fromarray(vis))
        self.canvas.create_image(0, 0, image=self._photo, anchor="nw")

        viewport = self.session.viewport
        self.status.configure(
            text=_("Zoom {scale:.0%} - {count} markers").format(
                scale=viewport.scale, count=len(self.session.annotations)
            )
        )

    def _on_open(self):
        path = filedialog.askopenfilename(filetypes=IMAGE_FILETYPES)
        if not path:
            return
        try:
            image = read_rgb_image(path)
        except (FileNotFoundError, ValueError) as e:
            logger.error(_("Could not open image: {error}").format(error=e))
            messagebox.showerror(_("Image Marker"), str(e))
            return
        self.router.load_image(image, path)

    def _on_color_selected(self, value: str):
        self.router.select_color(value)

    def _on_reset_zoom(self):
        self.router.reset_zoom()

    def _on_click(self, event: tk.Event):
        self.canvas.focus_set()
        self.router.on_click(PointerEvent(event.x, event.y), self._container_rect())

    def _on_mouse_wheel(self, event: tk.Event):
        # Tk reports scrolling up as a positive delta
        self.router.on_wheel(
            WheelEvent(event.x, event.y, -event.delta), self._container_rect()
        )

    def _on_mouse_wheel_linux(self, event: tk.Event):
        delta_y = -1 if getattr(event, "num", None) == 4 else 1
        self.router.on_wheel(WheelEvent(event.x, event.y, delta_y), self._container_rect())

    def _on_key_down(self, event: tk.Event):
        self.router.on_key_down(KeyEvent(event.keysym))

    def _on_key_up(self, event: tk.Event):
        self.router.on_key_up(KeyEvent(event.keysym))
