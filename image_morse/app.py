"""Главное окно кодека: просмотр изображения, панель кодирования и строка статуса.

Принципы:
- Окно только собирает виджеты в сетку; связи между ними настраивает `AppController`.
- Просмотр занимает всё свободное место, боковая панель имеет фиксированную ширину.
"""
import customtkinter as ctk

from image_morse.controllers.app_controller import AppController
from image_morse.ui.image_viewer import ImageViewer
from image_morse.ui.sidebar import Sidebar
from image_morse.ui.bottom_bar import BottomBar

WINDOW_TITLE = "Image Morse Codec"
MIN_WINDOW_SIZE = (900, 600)


class ImageMorseApp(ctk.CTk):
    """Окно с просмотром слева, панелью кодека справа и статусом снизу."""

    def __init__(self) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title(WINDOW_TITLE)
        self.minsize(*MIN_WINDOW_SIZE)

        # root layout: left preview, right sidebar, status bar below
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self)
        self._controller.bind_events()
