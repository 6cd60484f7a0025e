"""Работа с файлами изображений через Pillow и numpy.

Принципы:
- SRP: класс отвечает только за распознавание, чтение, пиксели и сохранение.
- Кодек видит изображение как холст true-color: индекс цвета пикселя —
  упакованное значение a<<24 | r<<16 | g<<8 | b. Палитровые и серые
  изображения сначала переводятся в RGBA, поэтому индекс не зависит от
  таблицы цветов конкретного файла.
"""
from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from image_morse.models.errors import (
    ImageDecodeFailure,
    InvalidColorIndex,
    IoFailure,
    UnsupportedInput,
)
from image_morse.models.frame_model import FormatCode, MediaKind
from image_morse.models.image_model import Canvas, ImageData, ImageMeta

logger = logging.getLogger(__name__)

MAX_COLOR_INDEX = 0xFFFFFFFF
_SNIFF_BYTES = 8192

RGBA = Tuple[int, int, int, int]


def pack_rgba(rgba: np.ndarray) -> np.ndarray:
    """(H, W, 4) uint8 -> (H, W) uint32 с упакованными цветами."""
    arr = rgba.astype(np.uint32)
    return (arr[..., 3] << 24) | (arr[..., 0] << 16) | (arr[..., 1] << 8) | arr[..., 2]


def pack_color(r: int, g: int, b: int, a: int) -> int:
    for name, value in (("red", r), ("green", g), ("blue", b), ("alpha", a)):
        if not 0 <= value <= 255:
            raise ValueError(f"Компонента {name} вне диапазона 0..255: {value}")
    return (a << 24) | (r << 16) | (g << 8) | b


def unpack_rgba(packed: np.ndarray) -> np.ndarray:
    """(H, W) uint32 -> (H, W, 4) uint8 в порядке R, G, B, A."""
    packed = packed.astype(np.uint32)
    channels = [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF, (packed >> 24) & 0xFF]
    return np.stack(channels, axis=-1).astype(np.uint8)


class ImageService:
    # ---- Detection / metadata ----
    def detect_kind(self, file_path: str | Path) -> MediaKind:
        """Определяет тип содержимого файла.

        Изображения распознаются по сигнатуре средствами Pillow, текст — по
        содержимому (UTF-8 без нулевых байтов), остальное — по расширению.

        Raises:
            UnsupportedInput: если путь не существует или не указывает на файл.
            IoFailure: если файл не удалось прочитать.
            ImageDecodeFailure: если Pillow отказался открывать слишком большое изображение.
        """
        path = self._existing_file(file_path)
        try:
            with Image.open(path) as img:
                fmt = img.format
        except UnidentifiedImageError:
            fmt = None
        except Image.DecompressionBombError as exc:
            raise ImageDecodeFailure(f"Изображение слишком велико: {path}") from exc
        except OSError as exc:
            raise IoFailure(f"Не удалось прочитать файл: {path}") from exc
        if fmt:
            return MediaKind("image", fmt.lower())

        try:
            with path.open("rb") as fh:
                head = fh.read(_SNIFF_BYTES)
        except OSError as exc:
            raise IoFailure(f"Не удалось прочитать файл: {path}") from exc
        if not head:
            return MediaKind("application", "x-empty")
        if b"\x00" not in head and _is_utf8(head, truncated=len(head) == _SNIFF_BYTES):
            return MediaKind("text", "plain")

        guessed, _encoding = mimetypes.guess_type(path.name)
        if guessed and "/" in guessed:
            kind, subtype = guessed.split("/", 1)
            return MediaKind(kind, subtype)
        return MediaKind("application", "octet-stream")

    def read_meta(self, file_path: str | Path) -> ImageMeta:
        """Читает размеры и формат изображения без декодирования пикселей."""
        path = self._existing_file(file_path)
        try:
            with Image.open(path) as img:
                width, height = img.size
                return ImageMeta(width=width, height=height, format_name=img.format or "")
        except UnidentifiedImageError as exc:
            raise ImageDecodeFailure(f"Файл не является изображением: {path}") from exc
        except Image.DecompressionBombError as exc:
            raise ImageDecodeFailure(f"Изображение слишком велико: {path}") from exc
        except OSError as exc:
            raise IoFailure(f"Не удалось прочитать файл: {path}") from exc

    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            UnsupportedInput: если путь не существует или не указывает на файл.
            ImageDecodeFailure: если файл не распознан как изображение.
        """
        path = self._existing_file(file_path)
        try:
            with Image.open(path) as src:
                format_name = src.format
                pil_image = src.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise ImageDecodeFailure(f"Файл не является изображением: {path}") from exc
        except Image.DecompressionBombError as exc:
            raise ImageDecodeFailure(f"Изображение слишком велико: {path}") from exc
        except OSError as exc:
            raise ImageDecodeFailure(f"Не удалось декодировать изображение: {path}") from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            format_name=format_name,
            size_bytes=size_bytes,
        )

    # ---- Pixels ----
    def decode(self, file_path: str | Path, format_code: FormatCode) -> Canvas:
        """Полностью декодирует файл в холст true-color.

        Raises:
            ImageDecodeFailure: если Pillow не смог разобрать байты или формат файла
                не совпадает с `format_code`.
        """
        path = self._existing_file(file_path)
        try:
            with Image.open(path) as src:
                if src.format != format_code.pil_format:
                    raise ImageDecodeFailure(
                        f"Ожидался формат {format_code.pil_format}, а файл {path} — {src.format}"
                    )
                src.load()
                rgba = np.asarray(src.convert("RGBA"), dtype=np.uint8)
        except UnidentifiedImageError as exc:
            raise ImageDecodeFailure(f"Файл не является изображением: {path}") from exc
        except Image.DecompressionBombError as exc:
            raise ImageDecodeFailure(f"Изображение слишком велико: {path}") from exc
        except (OSError, SyntaxError) as exc:
            raise ImageDecodeFailure(f"Не удалось декодировать изображение: {path}") from exc
        logger.debug("Decoded %s into %dx%d canvas", path, rgba.shape[1], rgba.shape[0])
        return Canvas(pixels=pack_rgba(rgba))

    def palette_index_at(self, canvas: Canvas, x: int, y: int) -> int:
        return int(canvas.pixels[y, x])

    def rgba_for_index(self, canvas: Canvas, index: int) -> RGBA:
        """Раскладывает индекс цвета на компоненты (r, g, b, a).

        Холст true-color, поэтому индекс самодостаточен: таблица цветов не нужна.
        """
        if index < 0 or index > MAX_COLOR_INDEX:
            raise InvalidColorIndex(f"Индекс цвета вне диапазона 0..{MAX_COLOR_INDEX}: {index}")
        return (index >> 16) & 0xFF, (index >> 8) & 0xFF, index & 0xFF, (index >> 24) & 0xFF

    def new_canvas(self, width: int, height: int) -> Canvas:
        """Создаёт пустой (прозрачный чёрный) холст заданного размера."""
        return Canvas(pixels=np.zeros((height, width), dtype=np.uint32))

    def allocate_color(self, canvas: Canvas, r: int, g: int, b: int, a: int) -> int:
        return pack_color(r, g, b, a)

    def set_pixel(self, canvas: Canvas, x: int, y: int, color: int) -> None:
        canvas.pixels[y, x] = color

    def to_pil_image(self, canvas: Canvas) -> Image.Image:
        """Собирает RGBA-изображение PIL из холста."""
        return Image.fromarray(unpack_rgba(canvas.pixels))

    def save(self, canvas: Canvas, file_path: str | Path, format_code: FormatCode, quality: int) -> Path:
        """Сохраняет холст в файл.

        Для PNG `quality` — уровень сжатия zlib (0–9), для JPEG — качество (1–100);
        JPEG не хранит альфа-канал, поэтому он отбрасывается.

        Raises:
            IoFailure: при ошибке записи.
        """
        path = Path(file_path)
        image = self.to_pil_image(canvas)
        if format_code is FormatCode.JPEG:
            image = image.convert("RGB")
            params = {"quality": quality}
        else:
            params = {"compress_level": quality}
        try:
            image.save(path, format=format_code.pil_format, **params)
        except OSError as exc:
            raise IoFailure(f"Не удалось сохранить изображение: {path}") from exc
        logger.debug("Saved %s as %s", path, format_code.pil_format)
        return path

    # ---- Helpers ----
    @staticmethod
    def _existing_file(file_path: str | Path) -> Path:
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise UnsupportedInput(f"Файл не найден: {path}")
        return path


def _is_utf8(data: bytes, truncated: bool = False) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as exc:
        # a multibyte sequence cut at the sniff boundary is still text
        return truncated and exc.start >= len(data) - 3
    return True
