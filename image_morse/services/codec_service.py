"""Оркестрация кодека «изображение ↔ текст Морзе».

Два независимых конвейера:
- encode: ValidateInput → ReadImageMeta → DecodeImagePixels → BuildFrame → WriteFrame;
- decode: ValidateInput → ReadFrame → RebuildCanvas → ResolvePixelColors → PaintPixels → PersistImage.

Состояние вызова (размеры, формат, холст) живёт в контексте, созданном внутри
вызова, а не в полях объекта, поэтому один экземпляр можно переиспользовать.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional

from image_morse.models.codec_settings import CodecSettings
from image_morse.models.errors import MorseCodecError, UnsupportedInput
from image_morse.models.frame_model import Dimensions, FormatCode, Frame, Header, MediaKind
from image_morse.models.image_model import Canvas
from image_morse.models.result_model import CodecResult
from image_morse.services.frame_format import FrameFormat
from image_morse.services.image_service import ImageService
from image_morse.services.raster_scanner import RasterScanner

logger = logging.getLogger(__name__)

IMAGE_SUBTYPES: FrozenSet[str] = frozenset(code.subtype for code in FormatCode)
TEXT_SUBTYPES: FrozenSet[str] = frozenset({"plain"})


@dataclass
class EncodeContext:
    """Состояние одного вызова encode."""
    source: Path
    output: Path
    header: Optional[Header] = None
    canvas: Optional[Canvas] = None
    pixel_indices: List[int] = field(default_factory=list)


@dataclass
class DecodeContext:
    """Состояние одного вызова decode."""
    source: Path
    frame: Optional[Frame] = None
    canvas: Optional[Canvas] = None
    color_ids: List[int] = field(default_factory=list)
    output: Optional[Path] = None


class ImageMorseCodec:
    """Кодирует изображение в текст Морзе и восстанавливает изображение из текста.

    Методы `encode_image`/`decode_text` бросают типизированные ошибки
    (`MorseCodecError` и наследники); `encode`/`decode` возвращают `CodecResult`;
    `to_morse`/`from_morse` сводят результат к bool.
    """

    def __init__(
        self,
        image_service: Optional[ImageService] = None,
        frame_format: Optional[FrameFormat] = None,
        settings: Optional[CodecSettings] = None,
    ) -> None:
        self._settings = settings or CodecSettings()
        self._images = image_service or ImageService()
        self._frames = frame_format or FrameFormat(encoding=self._settings.text_encoding)

    @property
    def settings(self) -> CodecSettings:
        return self._settings

    # ---- Boolean adapters ----
    def to_morse(self, file_path: str | Path) -> bool:
        """Кодирует изображение в соседний `.txt`. True при успехе, иначе False."""
        return self.encode(file_path).ok

    def from_morse(self, file_path: str | Path) -> bool:
        """Восстанавливает изображение из текста Морзе. True при успехе, иначе False."""
        return self.decode(file_path).ok

    # ---- Result-typed entry points ----
    def encode(self, file_path: str | Path) -> CodecResult:
        return self._run(self.encode_image, Path(file_path), "encode")

    def decode(self, file_path: str | Path) -> CodecResult:
        return self._run(self.decode_text, Path(file_path), "decode")

    # ---- Encode pipeline ----
    def encode_image(self, file_path: str | Path) -> Path:
        """Кодирует изображение и возвращает путь к записанному текстовому файлу.

        Raises:
            UnsupportedInput: файл отсутствует или не PNG/JPEG.
            InvalidDimensions: ширина или высота меньше единицы.
            ImageDecodeFailure: Pillow не смог декодировать пиксели.
            IoFailure: ошибка записи кадра.
        """
        source = Path(file_path)
        ctx = EncodeContext(source=source, output=source.with_suffix(self._settings.text_suffix))
        self._validate_input(ctx.source, "image", IMAGE_SUBTYPES)
        self._read_image_meta(ctx)
        self._decode_image_pixels(ctx)
        self._write_frame(ctx)
        logger.info("Encoded %s -> %s (%d pixels)", ctx.source, ctx.output, len(ctx.pixel_indices))
        return ctx.output

    def _read_image_meta(self, ctx: EncodeContext) -> None:
        meta = self._images.read_meta(ctx.source)
        format_code = FormatCode.from_subtype(meta.format_name)
        # raises InvalidDimensions before anything is written
        ctx.header = Header(format_code, Dimensions(meta.width, meta.height))
        logger.debug("Image meta for %s: %s %dx%d", ctx.source, format_code.name, meta.width, meta.height)

    def _decode_image_pixels(self, ctx: EncodeContext) -> None:
        dims = ctx.header.dimensions
        ctx.canvas = self._images.decode(ctx.source, ctx.header.format)
        scanner = RasterScanner.for_dimensions(dims)
        ctx.pixel_indices = [self._images.palette_index_at(ctx.canvas, x, y) for x, y in scanner]

    def _write_frame(self, ctx: EncodeContext) -> None:
        self._frames.serialize(ctx.header, ctx.pixel_indices, ctx.output)

    # ---- Decode pipeline ----
    def decode_text(self, file_path: str | Path) -> Path:
        """Восстанавливает изображение из текста и возвращает путь к сохранённому файлу.

        Raises:
            UnsupportedInput: файл отсутствует или не является простым текстом.
            MalformedToken, InvalidSymbol, UnknownFormat, PixelCountMismatch,
            InvalidDimensions: текст кадра повреждён.
            InvalidColorIndex: индекс не раскладывается в RGBA.
            IoFailure: ошибка чтения текста или записи изображения.
        """
        ctx = DecodeContext(source=Path(file_path))
        self._validate_input(ctx.source, "text", TEXT_SUBTYPES)
        ctx.frame = self._frames.read(ctx.source)
        self._rebuild_canvas(ctx)
        self._resolve_pixel_colors(ctx)
        self._paint_pixels(ctx)
        self._persist_image(ctx)
        logger.info("Decoded %s -> %s", ctx.source, ctx.output)
        return ctx.output

    def _rebuild_canvas(self, ctx: DecodeContext) -> None:
        dims = ctx.frame.header.dimensions
        ctx.canvas = self._images.new_canvas(dims.width, dims.height)

    def _resolve_pixel_colors(self, ctx: DecodeContext) -> None:
        # index -> RGBA -> color id allocated on the new canvas; index spaces may differ
        ctx.color_ids = []
        for index in ctx.frame.pixel_indices:
            r, g, b, a = self._images.rgba_for_index(ctx.canvas, index)
            ctx.color_ids.append(self._images.allocate_color(ctx.canvas, r, g, b, a))

    def _paint_pixels(self, ctx: DecodeContext) -> None:
        dims = ctx.frame.header.dimensions
        for (x, y), color_id in zip(RasterScanner.for_dimensions(dims), ctx.color_ids):
            self._images.set_pixel(ctx.canvas, x, y, color_id)

    def _persist_image(self, ctx: DecodeContext) -> None:
        format_code = ctx.frame.header.format
        output = ctx.source.with_suffix("." + format_code.extension)
        quality = self._settings.quality_for(format_code)
        self._images.save(ctx.canvas, output, format_code, quality)
        ctx.output = output

    # ---- Helpers ----
    def _validate_input(self, path: Path, expected_type: str, subtypes: FrozenSet[str]) -> MediaKind:
        kind = self._images.detect_kind(path)
        if kind.type != expected_type or kind.subtype not in subtypes:
            raise UnsupportedInput(f"Неподдерживаемый тип файла {kind} для {path}")
        return kind

    def _run(self, stage: Callable[[Path], Path], source: Path, name: str) -> CodecResult:
        try:
            output = stage(source)
        except MorseCodecError as exc:
            logger.warning("%s failed for %s: %s: %s", name, source, type(exc).__name__, exc)
            return CodecResult.failure(source, exc)
        return CodecResult.success(source, output)
