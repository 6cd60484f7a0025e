"""Контроллер приложения: связывает UI с кодеком.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики кодирования).
- DIP: кодек и сервис изображений — подменяемые зависимости.
Clean Code:
- Обработчики компактны; вся работа с файлами — в `ImageMorseCodec`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from image_morse.models.errors import MorseCodecError
from image_morse.models.image_model import ImageData
from image_morse.models.result_model import CodecResult
from image_morse.services.codec_service import ImageMorseCodec
from image_morse.services.digit_codec import DigitCodec
from image_morse.services.frame_format import FrameFormat
from image_morse.services.image_service import ImageService, pack_color
from image_morse.ui.bottom_bar import BottomBar
from image_morse.ui.image_viewer import ImageViewer
from image_morse.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

IMAGE_FILETYPES = (("Images", "*.png *.jpg *.jpeg"), ("All files", "*.*"))
TEXT_FILETYPES = (("Morse text", "*.txt"), ("All files", "*.*"))


@dataclass
class AppController:
    """Связывает элементы UI с кодеком.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Запуск кодирования/декодирования через `ImageMorseCodec`.
    - Показ исходного или восстановленного изображения и статуса операции.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _codec: ImageMorseCodec = ImageMorseCodec()
    _image_service: ImageService = ImageService()
    _frame_format: FrameFormat = FrameFormat()
    _digit_codec: DigitCodec = DigitCodec()
    _current_image: Optional[ImageData] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_encode_file = self._handle_encode_file
        self.sidebar.on_decode_file = self._handle_decode_file
        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self.bottom.set_zoom_percent
        self.bottom.on_zoom_preset = self._handle_zoom_preset
        self.bottom.on_zoom_fit = self._handle_zoom_fit

    # ---- Handlers ----
    def _handle_encode_file(self) -> None:
        file_path = self._ask_path("Выберите изображение", IMAGE_FILETYPES)
        if not file_path:
            return
        result = self._run(self._codec.encode, file_path)
        # preview the source
        if result:
            self._show_image(Path(file_path), result)

    def _handle_decode_file(self) -> None:
        file_path = self._ask_path("Выберите текст Морзе", TEXT_FILETYPES)
        if not file_path:
            return
        result = self._run(self._codec.decode, file_path)
        if result:
            self._show_image(result.output, result)

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        morse = None
        if rgba is not None:
            r, g, b, a = rgba
            index = pack_color(r, g, b, a)
            morse = self._frame_format.render_token(self._digit_codec.encode_integer(index))
        self.sidebar.update_cursor_info(x, y, rgba, morse)

    def _handle_zoom_preset(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def _ask_path(self, title: str, filetypes: tuple) -> Optional[str]:
        try:
            return filedialog.askopenfilename(title=title, filetypes=filetypes) or None
        except TclError:
            # Silent fail if dialog cannot open
            return None

    def _run(self, action, file_path: str) -> CodecResult:
        self.sidebar.set_busy(True)
        self.bottom.set_status(f"Обработка: {file_path}…")
        self.window.update_idletasks()
        try:
            result = action(file_path)
        finally:
            self.sidebar.set_busy(False)
        if result:
            self.bottom.set_status(f"Готово: {result.output}")
        else:
            self.bottom.set_status(f"Ошибка ({type(result.error).__name__}): {result.error}", error=True)
        return result

    def _show_image(self, path: Path, result: CodecResult) -> None:
        try:
            image_data = self._image_service.load_image(path)
        except MorseCodecError as exc:
            logger.warning("Preview failed for %s: %s", path, exc)
            self.bottom.set_status(f"Не удалось показать {path}: {exc}", error=True)
            return
        self._current_image = image_data
        self.viewer.set_image(image_data.pil_image)
        self.sidebar.set_image_info(image_data, output=str(result.output))
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
