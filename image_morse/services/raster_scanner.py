"""Порядок обхода пикселей: построчно, слева направо, сверху вниз.

Единственный источник истины о том, как плоский массив индексов
ложится на двумерные координаты. Кодер и декодер обходят растр одинаково.
"""
from __future__ import annotations

from typing import Iterator, Tuple

from image_morse.models.frame_model import Dimensions

Coordinate = Tuple[int, int]


def scan(width: int, height: int) -> Iterator[Coordinate]:
    """Возвращает ленивую последовательность (x, y) длиной width*height.

    Размеры проверяются сразу при вызове, а не на первой итерации.

    Raises:
        InvalidDimensions: если ширина или высота меньше единицы.
    """
    dims = Dimensions(width, height)
    return _row_major(dims.width, dims.height)


def _row_major(width: int, height: int) -> Iterator[Coordinate]:
    for y in range(height):
        for x in range(width):
            yield x, y


class RasterScanner:
    """Перезапускаемый обход: каждый `iter()` начинает развёртку заново."""

    def __init__(self, width: int, height: int) -> None:
        self._dims = Dimensions(width, height)

    @classmethod
    def for_dimensions(cls, dims: Dimensions) -> "RasterScanner":
        return cls(dims.width, dims.height)

    def __iter__(self) -> Iterator[Coordinate]:
        return _row_major(self._dims.width, self._dims.height)

    def __len__(self) -> int:
        return self._dims.pixel_count
