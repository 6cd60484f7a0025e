"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для метаданных; холст — изменяемый буфер.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class ImageMeta:
    """Размеры и формат изображения, прочитанные без декодирования пикселей."""
    width: int
    height: int
    format_name: str  # Pillow format, e.g. "PNG"


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Загруженное изображение PIL.
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL, например "RGBA".
        format_name: Формат файла по данным Pillow, например "PNG".
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    format_name: Optional[str]
    size_bytes: Optional[int]


@dataclass
class Canvas:
    """Холст true-color: массив (H, W) uint32 с упакованными цветами a<<24|r<<16|g<<8|b."""
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])
