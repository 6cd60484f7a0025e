"""Настройки кодека (значения по умолчанию совпадают с исходным поведением)."""
from __future__ import annotations

from dataclasses import dataclass

from image_morse.models.frame_model import FormatCode


@dataclass(frozen=True)
class CodecSettings:
    """Параметры сохранения и чтения файлов.

    Fields:
        png_compress_level: Уровень сжатия zlib для PNG, 0–9.
        jpeg_quality: Качество JPEG, 1–100.
        text_encoding: Кодировка текстового файла с кадром.
        text_suffix: Расширение текстового файла рядом с изображением.
    """
    png_compress_level: int = 0
    jpeg_quality: int = 100
    text_encoding: str = "ascii"
    text_suffix: str = ".txt"

    def quality_for(self, format_code: FormatCode) -> int:
        if format_code is FormatCode.JPEG:
            return self.jpeg_quality
        return self.png_compress_level
