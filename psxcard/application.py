"""Loading a memory card image and serving save titles and icons."""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path
from typing import Optional

from psxcard.bmp import save_24bit_image
from psxcard.memcard import (
    CARD_SIZE,
    FILE_COUNT,
    ICON_HEIGHT,
    ICON_WIDTH,
    BlockAllocationState,
    Memcard,
    VirtualMemcardIo,
    icon_to_bgr24,
    icon_to_rgb24,
    unpack_raw_icon,
)
from psxcard.sjis import sjis_to_ascii

_INTEGER = re.compile(r"\s*[+-]?[0-9]+\s*")


def _to_int(text: str) -> int:
    return int(text) if _INTEGER.fullmatch(text) else 0


def parse_image_id(image_id: str) -> tuple:
    """Split an ``"<file>/<icon>"`` id; anything malformed falls back to 0."""
    parts = image_id.split("/")
    if len(parts) != 2:
        return 0, 0
    return _to_int(parts[0]), _to_int(parts[1])


class Application:
    """Access to the saves of one memory card."""

    def __init__(self, memcard: Memcard) -> None:
        self.memcard = memcard

    @classmethod
    def from_file(cls, path) -> "Application":
        """Load a raw card image; a short file is padded with zero bytes."""
        data = Path(path).read_bytes()[:CARD_SIZE]
        data = data.ljust(CARD_SIZE, b"\x00")
        return cls(Memcard(VirtualMemcardIo(data)))

    def _icon_colours(self, file_id: int, icon_id: int) -> list:
        record = self.memcard.get_file(file_id)
        header = self.memcard.read_file_header(record)
        if header.icon_frames_count == 0:
            raise ValueError(f"file {file_id} has no icon frames")
        raw = self.memcard.read_file_icon(
            record, icon_id % header.icon_frames_count
        )
        return unpack_raw_icon(header.color_palette, raw)

    def get_image(self, file_id: int, icon_id: int) -> bytes:
        """Return a 16x16 icon as RGB bytes; the icon index wraps around."""
        return icon_to_rgb24(self._icon_colours(file_id, icon_id))

    def request_image(self, image_id: str) -> bytes:
        """Return the icon named by an ``"<file>/<icon>"`` id as RGB bytes."""
        return self.get_image(*parse_image_id(image_id))

    def _first_blocks(self):
        for file_id in range(FILE_COUNT):
            record = self.memcard.get_file(file_id)
            if record.allocation_state == BlockAllocationState.FIRST_FILE_BLOCK:
                yield file_id, record

    def file_titles(self) -> list:
        """Return ``(file_id, title)`` for every file that starts a save."""
        return [
            (file_id, sjis_to_ascii(self.memcard.read_file_header(record).title))
            for file_id, record in self._first_blocks()
        ]

    def export_icons(self, directory) -> list:
        """Write every icon frame of every save as a BMP file and return the paths."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        written = []
        for file_id, record in self._first_blocks():
            header = self.memcard.read_file_header(record)
            for icon_id in range(header.icon_frames_count):
                raw = self.memcard.read_file_icon(record, icon_id)
                pixels = icon_to_bgr24(unpack_raw_icon(header.color_palette, raw))
                path = directory / f"{file_id}_{icon_id}.bmp"
                with path.open("wb") as stream:
                    save_24bit_image(ICON_WIDTH, ICON_HEIGHT, pixels, stream)
                written.append(path)
        return written


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="psxcard", description="List the saves on a memory card image."
    )
    parser.add_argument("image", help="raw 128 KiB memory card image")
    parser.add_argument("--export", metavar="DIR", help="write save icons as BMP files")
    args = parser.parse_args(argv)

    try:
        app = Application.from_file(args.image)
    except OSError as exc:
        print(f"psxcard: {exc}", file=sys.stderr)
        return 1

    titles = dict(app.file_titles())
    for file_id in range(FILE_COUNT):
        print(f"Memcard file id: {file_id}")
        if file_id in titles:
            print(titles[file_id])

    if args.export:
        for path in app.export_icons(args.export):
            print(f"Wrote icon: {path}")
    return 0