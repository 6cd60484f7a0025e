"""Виджет предпросмотра: исходное или восстановленное изображение.

Принципы:
- SRP: только отображение, масштаб и панорамирование, без кодека.
- Пиксельная графика масштабируется без сглаживания (NEAREST), иначе не видно отдельных точек.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

MIN_SCALE = 0.1
MAX_SCALE = 32.0
WHEEL_STEP = 1.25


class ImageViewer(ctk.CTkFrame):
    """Канва с одним изображением, зумом колесом и перетаскиванием мышью."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._scale: float = 1.0
        self._offset: Optional[Tuple[int, int]] = None  # top-left of the image on the canvas
        self._drag_from: Optional[Tuple[int, int]] = None

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Tuple[int, int, int, int]]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", lambda _e: self._render())
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", lambda _e: self._emit_cursor(None, None))
        self._canvas.bind("<MouseWheel>", lambda e: self._zoom_at(e.x, e.y, e.delta > 0))  # Windows/macOS
        self._canvas.bind("<Button-4>", lambda e: self._zoom_at(e.x, e.y, True))  # X11 up
        self._canvas.bind("<Button-5>", lambda e: self._zoom_at(e.x, e.y, False))  # X11 down
        self._canvas.bind("<ButtonPress-1>", self._on_drag_start)
        self._canvas.bind("<B1-Motion>", self._on_drag_move)
        self._canvas.bind("<ButtonRelease-1>", lambda _e: setattr(self, "_drag_from", None))

    # ---- Public API ----
    def set_image(self, image: Optional[Image.Image]) -> None:
        """Показывает изображение (или очищает канву при None) и вписывает его в окно."""
        self._image = None if image is None else image.convert("RGBA")
        self.set_zoom_to_fit()

    def set_zoom_to_fit(self) -> None:
        self._scale = self._fit_scale()
        self._offset = None
        self._render()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        self._scale = max(MIN_SCALE, min(MAX_SCALE, zoom_percent / 100.0))
        self._offset = None
        self._render()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale * 100))

    # ---- Internals ----
    def _render(self) -> None:
        self._canvas.delete("all")
        if self._image is None:
            return
        img_w, img_h = self._image.size
        scaled = (max(1, int(img_w * self._scale)), max(1, int(img_h * self._scale)))
        if self._offset is None:
            cw, ch = self._canvas_size()
            self._offset = ((cw - scaled[0]) // 2, (ch - scaled[1]) // 2)
        self._tk_image = ImageTk.PhotoImage(self._image.resize(scaled, Image.Resampling.NEAREST))
        self._canvas.create_image(*self._offset, image=self._tk_image, anchor="nw")

    def _fit_scale(self) -> float:
        if self._image is None:
            return 1.0
        cw, ch = self._canvas_size()
        img_w, img_h = self._image.size
        return max(MIN_SCALE, min(MAX_SCALE, cw / img_w, ch / img_h))

    def _canvas_size(self) -> Tuple[int, int]:
        return max(1, int(self._canvas.winfo_width())), max(1, int(self._canvas.winfo_height()))

    def _to_image_xy(self, cx: int, cy: int) -> Tuple[Optional[int], Optional[int]]:
        if self._image is None or self._offset is None:
            return None, None
        x = int((cx - self._offset[0]) / self._scale)
        y = int((cy - self._offset[1]) / self._scale)
        img_w, img_h = self._image.size
        if 0 <= x < img_w and 0 <= y < img_h and cx >= self._offset[0] and cy >= self._offset[1]:
            return x, y
        return None, None

    def _on_mouse_move(self, event: tk.Event) -> None:
        self._emit_cursor(*self._to_image_xy(event.x, event.y))

    def _emit_cursor(self, x: Optional[int], y: Optional[int]) -> None:
        if self.on_cursor_move is None:
            return
        if x is None or y is None or self._image is None:
            self.on_cursor_move(None, None, None)
            return
        self.on_cursor_move(x, y, self._image.getpixel((x, y)))

    def _zoom_at(self, cx: int, cy: int, zoom_in: bool) -> None:
        if self._image is None or self._offset is None:
            return
        old = self._scale
        new = max(MIN_SCALE, min(MAX_SCALE, old * WHEEL_STEP if zoom_in else old / WHEEL_STEP))
        if abs(new - old) < 1e-6:
            return
        # keep the point under the cursor in place
        ix = (cx - self._offset[0]) / old
        iy = (cy - self._offset[1]) / old
        self._scale = new
        self._offset = (int(round(cx - ix * new)), int(round(cy - iy * new)))
        self._render()
        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    def _on_drag_start(self, event: tk.Event) -> None:
        if self._offset is not None:
            self._drag_from = (event.x - self._offset[0], event.y - self._offset[1])

    def _on_drag_move(self, event: tk.Event) -> None:
        if self._drag_from is None:
            return
        self._offset = (event.x - self._drag_from[0], event.y - self._drag_from[1])
        self._render()

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
