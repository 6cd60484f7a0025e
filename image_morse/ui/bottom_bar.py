from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

ZOOM_PRESETS = ("Fit", "100%", "400%", "1600%")


class BottomBar(ctk.CTkFrame):
    """Строка состояния кодека и управление масштабом предпросмотра."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=48, **kwargs)

        self.on_zoom_preset: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)  # status stretches

        self._status = ctk.StringVar(value="Готово")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status, anchor="w")
        self._status_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="ew")

        self._zoom_value = ctk.StringVar(value="100%")
        self._zoom_value_label = ctk.CTkLabel(self, textvariable=self._zoom_value, width=56, anchor="e")
        self._zoom_value_label.grid(row=0, column=1, padx=6, pady=8, sticky="e")

        self._preset_buttons = ctk.CTkSegmentedButton(self, values=list(ZOOM_PRESETS), command=self._on_preset_click)
        self._preset_buttons.set("Fit")
        self._preset_buttons.grid(row=0, column=2, padx=(6, 10), pady=8, sticky="e")

    # public API (sync from controller)
    def set_status(self, text: str, error: bool = False) -> None:
        self._status.set(text)
        self._status_label.configure(text_color=("#B00020", "#FF6B6B") if error else ("gray10", "gray90"))

    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_value.set(f"{percent}%")

    # events
    def _on_preset_click(self, value: str) -> None:
        if value == "Fit":
            if self.on_zoom_fit:
                self.on_zoom_fit()
            return
        try:
            percent = int(value.rstrip("%"))
        except ValueError:
            return
        if self.on_zoom_preset:
            self.on_zoom_preset(percent)
