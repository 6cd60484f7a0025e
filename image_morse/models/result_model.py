from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from image_morse.models.errors import MorseCodecError


@dataclass(frozen=True)
class CodecResult:
    """Итог одного вызова кодека: путь к результату либо типизированная ошибка.

    Истинен только при успехе, поэтому `if codec.encode(path): ...` читается естественно.
    """
    source: Path
    output: Optional[Path] = None
    error: Optional[MorseCodecError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.output is not None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, source: Path, output: Path) -> "CodecResult":
        return cls(source=source, output=output)

    @classmethod
    def failure(cls, source: Path, error: MorseCodecError) -> "CodecResult":
        return cls(source=source, error=error)
