"""Командная строка: `image-morse to-morse PATH` и `image-morse from-morse PATH`."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from image_morse.services.codec_service import ImageMorseCodec

LOG_FORMAT = "%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-morse",
        description="Convert a PNG/JPEG image to Morse text and back",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    to_morse = sub.add_parser("to-morse", help="Encode an image into a sibling .txt file")
    to_morse.add_argument("path", help="Input image (.png, .jpeg)")

    from_morse = sub.add_parser("from-morse", help="Decode a Morse .txt file into a sibling image")
    from_morse.add_argument("path", help="Input text file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )

    codec = ImageMorseCodec()
    if args.command == "to-morse":
        result = codec.encode(args.path)
    else:
        result = codec.decode(args.path)

    if result:
        print(f"Success: Saved to {result.output}")
        return 0
    print(f"Conversion Failed: {result.error}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
