"""Модели кадра: формат, размеры, заголовок и последовательность индексов.

Принципы:
- SRP: только структура данных и проверка инвариантов, без кодирования.
- Неизменяемость (`frozen=True`) — кадр собирается один раз на вызов кодека.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

from image_morse.models.errors import InvalidDimensions, PixelCountMismatch, UnknownFormat


class FormatCode(IntEnum):
    """Числовой код формата файла изображения, записываемый в заголовок."""
    PNG = 0
    JPEG = 1

    @property
    def subtype(self) -> str:
        """MIME-подтип: "png" | "jpeg"."""
        return self.name.lower()

    @property
    def extension(self) -> str:
        # native extension equals the MIME subtype ("jpeg", not "jpg")
        return self.subtype

    @property
    def pil_format(self) -> str:
        return self.name

    @classmethod
    def from_code(cls, code: int) -> "FormatCode":
        try:
            return cls(code)
        except ValueError as exc:
            raise UnknownFormat(f"Неизвестный код формата: {code}") from exc

    @classmethod
    def from_subtype(cls, subtype: str) -> "FormatCode":
        """Сопоставляет MIME-подтип (или имя формата Pillow) с кодом формата."""
        key = subtype.strip().upper()
        if key == "JPG":
            key = "JPEG"
        try:
            return cls[key]
        except KeyError as exc:
            raise UnknownFormat(f"Неподдерживаемый формат изображения: {subtype}") from exc


@dataclass(frozen=True)
class Dimensions:
    """Размеры растра, px. Обе стороны не меньше единицы."""
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions(f"Некорректные размеры: {self.width} × {self.height}")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Header:
    """Заголовок кадра: первые три токена в порядке format, width, height."""
    format: FormatCode
    dimensions: Dimensions

    def as_fields(self) -> Tuple[int, int, int]:
        return int(self.format), self.dimensions.width, self.dimensions.height


@dataclass(frozen=True)
class Frame:
    """Полный кадр: заголовок и индексы пикселей в порядке растровой развёртки.

    Fields:
        header: Формат и размеры изображения.
        pixel_indices: Ровно width*height неотрицательных индексов цвета.
    """
    header: Header
    pixel_indices: Tuple[int, ...]

    def __post_init__(self) -> None:
        expected = self.header.dimensions.pixel_count
        if len(self.pixel_indices) != expected:
            raise PixelCountMismatch(
                f"Ожидалось {expected} пиксельных токенов, получено {len(self.pixel_indices)}"
            )

    @property
    def token_count(self) -> int:
        return 3 + len(self.pixel_indices)


@dataclass(frozen=True)
class MediaKind:
    """Тип содержимого файла, например ("image", "png") или ("text", "plain")."""
    type: str
    subtype: str

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"
