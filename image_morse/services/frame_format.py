"""Текстовая раскладка кадра: заголовок из трёх токенов и по токену на пиксель.

Формат на диске:
- цифры одного числа (группы по 5 символов) разделены одним пробелом;
- числа разделены " / " и переводом строки;
- после последнего токена разделителя и перевода строки нет.

Пример для PNG 2×1 с индексами [5, 0]:

    ----- /
    ..--- /
    .---- /
    ..... /
    -----
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from image_morse.models.errors import InvalidSymbol, IoFailure, MalformedToken
from image_morse.models.frame_model import Dimensions, FormatCode, Frame, Header
from image_morse.services.digit_codec import DigitCodec

logger = logging.getLogger(__name__)

DIGIT_SEPARATOR = " "
NUMBER_SEPARATOR = " / "
LINE_BREAK = "\n"

# " / " with any surrounding whitespace (line break included), or a bare line break
_TOKEN_BOUNDARY = re.compile(r"[ \t]*/[ \t]*(?:\r\n|\n|\r)?|\r\n|\n|\r")


class FrameFormat:
    """Сериализация и разбор кадра. `render` и `parse` взаимно обратны."""

    def __init__(self, digit_codec: Optional[DigitCodec] = None, encoding: str = "ascii") -> None:
        self._codec = digit_codec or DigitCodec()
        self._encoding = encoding

    # ---- Rendering ----
    def render_token(self, token: str) -> str:
        """Разбивает токен на группы по 5 символов и склеивает их одним пробелом."""
        return DIGIT_SEPARATOR.join(self._codec.split_groups(token))

    def iter_lines(self, header: Header, pixel_indices: Iterable[int]) -> Iterator[str]:
        """Отдаёт отрисованные токены кадра по одному, с разделителем везде, кроме последнего."""
        tokens = self._tokens(header, pixel_indices)
        previous: Optional[str] = None
        for token in tokens:
            if previous is not None:
                yield previous + NUMBER_SEPARATOR + LINE_BREAK
            previous = self.render_token(token)
        if previous is not None:
            yield previous

    def render(self, header: Header, pixel_indices: Sequence[int]) -> str:
        """Возвращает кадр целиком как текст."""
        frame = Frame(header, tuple(pixel_indices))
        return "".join(self.iter_lines(frame.header, frame.pixel_indices))

    def serialize(self, header: Header, pixel_indices: Sequence[int], destination: str | Path) -> Path:
        """Дописывает кадр в конец файла `destination`, токен за токеном.

        Файл открывается на дозапись: существующее содержимое не удаляется.
        Если запись прервалась, уже записанные байты остаются на диске.

        Raises:
            PixelCountMismatch: если индексов не width*height.
            IoFailure: при ошибке открытия или записи.
        """
        frame = Frame(header, tuple(pixel_indices))
        path = Path(destination)
        written = 0
        try:
            with path.open("a", encoding=self._encoding, newline="") as fh:
                for line in self.iter_lines(frame.header, frame.pixel_indices):
                    fh.write(line)
                    written += 1
        except OSError as exc:
            raise IoFailure(f"Не удалось записать кадр в {path} (записано токенов: {written})") from exc
        logger.debug("Serialized %d tokens to %s", written, path)
        return path

    # ---- Parsing ----
    def split_tokens(self, text: str) -> List[str]:
        """Делит текст на сырые токены Морзе, убирая разделители и пробелы внутри токенов."""
        stripped = text.strip()
        if not stripped:
            return []
        return [part.replace(DIGIT_SEPARATOR, "") for part in _TOKEN_BOUNDARY.split(stripped)]

    def parse(self, text: str) -> Frame:
        """Разбирает текст кадра.

        Raises:
            MalformedToken: если токенов меньше трёх или токен повреждён.
            InvalidSymbol: если группа не является цифрой Морзе.
            UnknownFormat: если код формата не распознан.
            InvalidDimensions: если ширина или высота меньше единицы.
            PixelCountMismatch: если пиксельных токенов не width*height.
        """
        tokens = self.split_tokens(text)
        if len(tokens) < 3:
            raise MalformedToken(f"Заголовок кадра требует 3 токена, найдено {len(tokens)}")
        format_code, width, height = (self._codec.decode_integer(t) for t in tokens[:3])
        header = Header(FormatCode.from_code(format_code), Dimensions(width, height))
        indices = tuple(self._codec.decode_integer(t) for t in tokens[3:])
        return Frame(header, indices)

    # the decode pipeline names this step "deserialize"
    deserialize = parse

    def read(self, source: str | Path) -> Frame:
        """Читает файл кадра с диска и разбирает его.

        Raises:
            InvalidSymbol: если файл содержит символы вне кодировки кадра.
            IoFailure: если файл не удалось прочитать.
        """
        path = Path(source)
        try:
            text = path.read_text(encoding=self._encoding)
        except UnicodeDecodeError as exc:
            raise InvalidSymbol(
                f"Недопустимый символ в кадре {path} (позиция {exc.start}): ожидались только '.', '-', '/' и пробелы"
            ) from exc
        except OSError as exc:
            raise IoFailure(f"Не удалось прочитать кадр: {path}") from exc
        return self.parse(text)

    # ---- Helpers ----
    def _tokens(self, header: Header, pixel_indices: Iterable[int]) -> Iterator[str]:
        for field in header.as_fields():
            yield self._codec.encode_integer(field)
        for index in pixel_indices:
            yield self._codec.encode_integer(int(index))
