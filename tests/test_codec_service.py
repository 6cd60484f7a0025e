from pathlib import Path
import shutil
import sys

import numpy as np
import pytest
from PIL import Image

from image_morse.models.codec_settings import CodecSettings
from image_morse.models.errors import (
    ImageDecodeFailure,
    InvalidDimensions,
    InvalidSymbol,
    MalformedToken,
    PixelCountMismatch,
    UnknownFormat,
    UnsupportedInput,
)
from image_morse.models.frame_model import Dimensions, FormatCode, Header, MediaKind
from image_morse.models.image_model import ImageMeta
from image_morse.services.codec_service import ImageMorseCodec
from image_morse.services.frame_format import FrameFormat
from image_morse.services.image_service import ImageService


def _move_to(path: Path, folder: Path) -> Path:
    """Переносит текст кадра в отдельную папку, чтобы декодер не затёр исходник."""
    folder.mkdir(exist_ok=True)
    return Path(shutil.move(str(path), str(folder / path.name)))


def _rgba_pixels(path: Path):
    with Image.open(path) as img:
        return list(img.convert("RGBA").getdata())


def test_encode_writes_sibling_text_frame(codec, rgba_png: Path):
    result = codec.encode(rgba_png)
    assert result.ok and bool(result)
    assert result.output == rgba_png.with_suffix(".txt")

    frame = FrameFormat().read(result.output)
    assert frame.header.format is FormatCode.PNG
    assert (frame.header.dimensions.width, frame.header.dimensions.height) == (3, 2)
    assert frame.token_count == 3 + 6
    # row-major: first pixel of the second row is the transparent one
    assert frame.pixel_indices[3] == 0x000C2238


def test_png_round_trip_is_pixel_exact(codec, rgba_png: Path, tmp_path: Path):
    original = _rgba_pixels(rgba_png)
    text = _move_to(codec.encode(rgba_png).output, tmp_path / "restored")

    result = codec.decode(text)
    assert result.ok
    assert result.output == text.with_suffix(".png")
    with Image.open(result.output) as img:
        assert img.format == "PNG"
        assert img.size == (3, 2)
    assert _rgba_pixels(result.output) == original


def test_palette_source_indices_are_not_reused_across_images(codec, tmp_path: Path):
    """Индексы палитры исходника не переносятся как есть: в кадр пишется сам цвет."""
    source = tmp_path / "palette.png"
    img = Image.new("P", (2, 2))
    img.putpalette([0, 0, 0, 255, 0, 0, 0, 255, 0, 0, 0, 255] + [0] * (256 * 3 - 12))
    img.putdata([1, 2, 3, 0])
    img.save(source, format="PNG")
    original = _rgba_pixels(source)

    text = _move_to(codec.encode(source).output, tmp_path / "restored")
    frame = FrameFormat().read(text)
    assert frame.pixel_indices != (1, 2, 3, 0)

    restored = codec.decode(text).output
    assert _rgba_pixels(restored) == original


def test_jpeg_round_trip_keeps_format_and_size(codec, tmp_path: Path):
    source = tmp_path / "photo.jpg"
    Image.new("RGB", (5, 3), (120, 60, 30)).save(source, format="JPEG", quality=95)
    text = codec.encode(source).output
    assert FrameFormat().read(text).header.format is FormatCode.JPEG

    restored = codec.decode(_move_to(text, tmp_path / "restored")).output
    assert restored.suffix == ".jpeg"
    with Image.open(restored) as img:
        assert img.format == "JPEG"
        assert img.size == (5, 3)


def test_codec_instance_is_reusable(codec, rgba_png: Path, tmp_path: Path):
    other = tmp_path / "wide.png"
    Image.new("RGBA", (7, 1), (1, 2, 3, 4)).save(other, format="PNG")

    first = FrameFormat().read(codec.encode(rgba_png).output)
    second = FrameFormat().read(codec.encode(other).output)
    assert (first.header.dimensions.width, first.header.dimensions.height) == (3, 2)
    assert (second.header.dimensions.width, second.header.dimensions.height) == (7, 1)
    assert set(second.pixel_indices) == {0x04010203}


def test_missing_file_is_unsupported(codec, tmp_path: Path):
    result = codec.encode(tmp_path / "missing.png")
    assert not result
    assert isinstance(result.error, UnsupportedInput)
    assert codec.to_morse(tmp_path / "missing.png") is False
    assert codec.from_morse(tmp_path / "missing.txt") is False


def test_wrong_media_kinds_are_rejected(codec, rgba_png: Path, tmp_path: Path):
    text = tmp_path / "notes.txt"
    text.write_text("hello", encoding="ascii")
    gif = tmp_path / "anim.gif"
    Image.new("RGB", (2, 2)).save(gif, format="GIF")

    assert isinstance(codec.encode(text).error, UnsupportedInput)
    assert isinstance(codec.encode(gif).error, UnsupportedInput)
    assert isinstance(codec.decode(rgba_png).error, UnsupportedInput)
    assert not gif.with_suffix(".txt").exists()


def test_truncated_image_reports_decode_failure(codec, tmp_path: Path):
    noise = np.random.default_rng(7).integers(0, 256, size=(48, 48, 4), dtype=np.uint8)
    full = tmp_path / "noise.png"
    Image.fromarray(noise).save(full, format="PNG")
    broken = tmp_path / "broken.png"
    broken.write_bytes(full.read_bytes()[: full.stat().st_size // 2])
    result = codec.encode(broken)
    assert isinstance(result.error, ImageDecodeFailure)
    assert not broken.with_suffix(".txt").exists()


class _ZeroSizedImages(ImageService):
    def detect_kind(self, file_path):
        return MediaKind("image", "png")

    def read_meta(self, file_path):
        return ImageMeta(width=0, height=0, format_name="PNG")

    def decode(self, file_path, format_code):
        raise AssertionError("pixels must not be read for an empty image")


def test_zero_sized_image_is_rejected_before_any_output(tmp_path: Path):
    codec = ImageMorseCodec(image_service=_ZeroSizedImages())
    source = tmp_path / "empty.png"
    result = codec.encode(source)
    assert isinstance(result.error, InvalidDimensions)
    assert not source.with_suffix(".txt").exists()
    with pytest.raises(InvalidDimensions):
        codec.encode_image(source)


@pytest.mark.parametrize(
    "text, error",
    [
        ("----- / \n..--- / \n.---- / \n.....", PixelCountMismatch),
        ("...-- / \n.---- / \n.---- / \n-----", UnknownFormat),
    ],
)
def test_corrupt_frames_do_not_produce_images(codec, tmp_path: Path, text, error):
    source = tmp_path / "frame.txt"
    source.write_text(text, encoding="ascii")
    result = codec.decode(source)
    assert isinstance(result.error, error)
    assert codec.from_morse(source) is False
    assert not (tmp_path / "frame.png").exists()
    assert not (tmp_path / "frame.jpeg").exists()


def test_decode_two_by_one_frame(codec, tmp_path: Path):
    source = tmp_path / "tiny.txt"
    red, blue = 0xFFFF0000, 0xFF0000FF
    FrameFormat().serialize(Header(FormatCode.PNG, Dimensions(2, 1)), [red, blue], source)
    assert codec.from_morse(source) is True
    assert _rgba_pixels(tmp_path / "tiny.png") == [(255, 0, 0, 255), (0, 0, 255, 255)]


def test_custom_settings_are_used_for_jpeg(tmp_path: Path):
    codec = ImageMorseCodec(settings=CodecSettings(jpeg_quality=10))
    assert codec.settings.quality_for(FormatCode.JPEG) == 10
    assert codec.settings.quality_for(FormatCode.PNG) == 0


def test_oversized_image_returns_false(codec, oversized_png: Path):
    result = codec.encode(oversized_png)
    assert isinstance(result.error, ImageDecodeFailure)
    assert codec.to_morse(oversized_png) is False
    assert not oversized_png.with_suffix(".txt").exists()


def test_overlong_pixel_token_returns_false(codec, tmp_path: Path):
    source = tmp_path / "long.txt"
    source.write_text("----- / \n.---- / \n.---- / \n" + ".----" * 5000, encoding="ascii")
    if hasattr(sys, "get_int_max_str_digits") and 0 < sys.get_int_max_str_digits() < 5000:
        assert isinstance(codec.decode(source).error, MalformedToken)
    assert codec.from_morse(source) is False


def test_non_ascii_frame_returns_false(codec, tmp_path: Path):
    source = tmp_path / "dots.txt"
    source.write_text("----- / \n.---- / \n.---- / \n·····", encoding="utf-8")
    assert isinstance(codec.decode(source).error, InvalidSymbol)
    assert codec.from_morse(source) is False
