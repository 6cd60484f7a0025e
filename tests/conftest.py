from __future__ import annotations

from pathlib import Path
import struct
import zlib

import pytest
from PIL import Image

from image_morse.services.codec_service import ImageMorseCodec


@pytest.fixture
def codec() -> ImageMorseCodec:
    return ImageMorseCodec()


@pytest.fixture
def rgba_png(tmp_path: Path) -> Path:
    """3×2 PNG с разными цветами и прозрачностью."""
    img = Image.new("RGBA", (3, 2))
    img.putdata([
        (255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255),
        (12, 34, 56, 0), (255, 255, 255, 128), (0, 0, 0, 255),
    ])
    path = tmp_path / "sample.png"
    img.save(path, format="PNG")
    return path


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


@pytest.fixture
def oversized_png(tmp_path: Path) -> Path:
    """PNG, чей заголовок объявляет 30000×30000: Pillow отказывается открывать такие файлы."""
    ihdr = struct.pack(">IIBBBBB", 30000, 30000, 8, 6, 0, 0, 0)
    data = (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", zlib.compress(b""))
        + _png_chunk(b"IEND", b"")
    )
    path = tmp_path / "huge.png"
    path.write_bytes(data)
    return path
