"""Типизированные ошибки кодека.

Принципы:
- Каждый вид сбоя — отдельный класс, чтобы вызывающий код мог ветвиться по типу.
- Общий предок `MorseCodecError` позволяет поймать всё разом на границе API.
"""
from __future__ import annotations


class MorseCodecError(Exception):
    """Базовая ошибка кодека «изображение ↔ Морзе»."""


class UnsupportedInput(MorseCodecError):
    """Файл отсутствует или его тип/подтип не поддерживается."""


class InvalidDimensions(MorseCodecError, ValueError):
    """Ширина или высота изображения меньше единицы."""


class ImageDecodeFailure(MorseCodecError):
    """Библиотека изображений не смогла разобрать байты файла."""


class MalformedToken(MorseCodecError):
    """Длина токена Морзе не кратна пяти или токен пуст."""


class InvalidSymbol(MorseCodecError):
    """Группа из пяти символов не соответствует ни одной цифре."""


class UnknownFormat(MorseCodecError):
    """Код формата в заголовке не распознан."""


class PixelCountMismatch(MorseCodecError):
    """Число пиксельных токенов не равно width*height."""


class InvalidColorIndex(MorseCodecError):
    """Индекс цвета не помещается в упакованное 32-битное RGBA."""


class IoFailure(MorseCodecError):
    """Ошибка чтения или записи файла."""
