"""Боковая панель: действия кодека, сведения о файле и пикселе под курсором.

Принципы:
- SRP: управляет только UI, кодек вызывает контроллер.
- ISP: события наружу через `on_*`, данные внутрь через `set_*`/`update_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from image_morse.models.image_model import ImageData


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


def _format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "—"
    if size_bytes < 1024:
        return f"{size_bytes} Б"
    if size_bytes < 1024 ** 2:
        return f"{size_bytes / 1024:.1f} КБ"
    return f"{size_bytes / 1024 ** 2:.1f} МБ"


class Sidebar(ctk.CTkFrame):
    """Панель с блоками: кодек, файл, курсор."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=300, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_encode_file: Optional[Callable[[], None]] = None
        self.on_decode_file: Optional[Callable[[], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        # Кодек
        self._title = ctk.CTkLabel(self, text="Кодек", font=bold)
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._encode_btn = ctk.CTkButton(self, text="Изображение → Морзе…", command=self._emit_encode)
        self._encode_btn.grid(row=1, column=0, padx=8, pady=(0, 6), sticky="ew")
        self._decode_btn = ctk.CTkButton(self, text="Морзе → изображение…", command=self._emit_decode)
        self._decode_btn.grid(row=2, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Файл
        self._info_title = ctk.CTkLabel(self, text="Изображение", font=bold)
        self._info_title.grid(row=3, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._output_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._format_val = ctk.StringVar(value="—")

        info_vars = (self._path_val, self._output_val, self._size_val, self._dims_val, self._format_val)
        for row, var in enumerate(info_vars, start=4):
            label = ctk.CTkLabel(self, textvariable=var, wraplength=270, anchor="w", justify="left")
            label.grid(row=row, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Курсор
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=bold)
        self._cursor_title.grid(row=10, column=0, padx=8, pady=(12, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")
        self._cursor_morse_val = ctk.StringVar(value="—")

        cursor_vars = (self._cursor_xy_val, self._cursor_rgba_val, self._cursor_hex_val, self._cursor_morse_val)
        for row, var in enumerate(cursor_vars, start=11):
            label = ctk.CTkLabel(self, textvariable=var, wraplength=270, anchor="w", justify="left")
            label.grid(row=row, column=0, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_image_info(self, image_data: ImageData, output: Optional[str] = None) -> None:
        """Отображает метаданные показанного изображения и путь к результату кодека."""
        self._path_val.set(f"Файл: {image_data.path}")
        self._output_val.set(f"Результат: {output}" if output else "Результат: —")
        self._size_val.set(f"Размер: {_format_size(image_data.size_bytes)}")
        self._dims_val.set(f"{image_data.width} × {image_data.height} px")
        self._format_val.set(f"Формат: {image_data.format_name or '—'}")

    def update_cursor_info(
        self,
        x: Optional[int],
        y: Optional[int],
        rgba: Optional[Tuple[int, int, int, int]],
        morse: Optional[str] = None,
    ) -> None:
        """Обновляет информацию по курсору (координаты, RGBA, HEX, токен Морзе)."""
        if x is None or y is None or rgba is None:
            for var in (self._cursor_xy_val, self._cursor_rgba_val, self._cursor_hex_val, self._cursor_morse_val):
                var.set("—")
            return
        self._cursor_xy_val.set(f"({x}, {y})")
        r, g, b, a = rgba
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}")
        self._cursor_hex_val.set(f"HEX: {_rgba_to_hex(rgba)}")
        self._cursor_morse_val.set(f"Морзе: {morse}" if morse else "—")

    def set_busy(self, busy: bool) -> None:
        state = "disabled" if busy else "normal"
        self._encode_btn.configure(state=state)
        self._decode_btn.configure(state=state)

    # ---- Events ----
    def _emit_encode(self) -> None:
        if self.on_encode_file:
            self.on_encode_file()

    def _emit_decode(self) -> None:
        if self.on_decode_file:
            self.on_decode_file()
