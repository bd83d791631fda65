"""Reading directory entries, save headers and icons from memory card images."""

from __future__ import annotations

import abc
import enum
import struct
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

FRAME_SIZE = 128
FRAMES_PER_BLOCK = 64
BLOCK_SIZE = FRAME_SIZE * FRAMES_PER_BLOCK
CARD_SIZE = 128 * 1024
MAX_FRAME_INDEX = 0x3FF
FILE_COUNT = 15
BROKEN_SECTOR_COUNT = 20
ICON_WIDTH = 16
ICON_HEIGHT = 16
ICON_PIXELS = ICON_WIDTH * ICON_HEIGHT
RAW_ICON_SIZE = ICON_PIXELS // 2
PALETTE_SIZE = 16
NO_NEXT_BLOCK = 0xFFFF


class BlockAllocationState(enum.IntEnum):
    """Allocation state byte of a directory frame."""

    FIRST_FILE_BLOCK = 0x51
    MIDDLE_FILE_BLOCK = 0x52
    LAST_FILE_BLOCK = 0x53
    FORMATTED = 0xA0
    DELETED_FIRST_FILE_BLOCK = 0xA1
    DELETED_MIDDLE_FILE_BLOCK = 0xA2
    DELETED_LAST_FILE_BLOCK = 0xA3


class MemcardIo(abc.ABC):
    """Source of 128-byte memory card frames."""

    @abc.abstractmethod
    def read_frame(self, frame_index: int) -> bytes:
        """Return the frame at ``frame_index``; raise IndexError if it does not exist."""


class VirtualMemcardIo(MemcardIo):
    """Frames served from an in-memory card image."""

    def __init__(self, image) -> None:
        image = bytes(image)
        if len(image) != CARD_SIZE:
            raise ValueError(
                f"memory card image must be {CARD_SIZE} bytes, got {len(image)}"
            )
        self._image = image

    def read_frame(self, frame_index: int) -> bytes:
        if not 0 <= frame_index <= MAX_FRAME_INDEX:
            raise IndexError(f"frame index {frame_index} out of range")
        start = frame_index * FRAME_SIZE
        return self._image[start : start + FRAME_SIZE]


@dataclass
class FileRecord:
    """One directory entry of the card."""

    block_id: int
    allocation_state: Union[BlockAllocationState, int] = BlockAllocationState.FORMATTED
    file_size: int = 0
    next_block: Optional["FileRecord"] = field(default=None, repr=False, compare=False)
    name: bytes = bytes(21)


@dataclass(frozen=True)
class FileHeader:
    """Title frame at the start of a save file."""

    icon_frames_count: int
    unknown_value: int
    title: bytes
    color_palette: tuple


def _allocation_state(value: int) -> Union[BlockAllocationState, int]:
    try:
        return BlockAllocationState(value)
    except ValueError:
        return value


class Memcard:
    """Directory and save data access on top of a frame source."""

    def __init__(self, io: MemcardIo) -> None:
        self._io = io
        self._records = self._scan_file_table()
        self._broken_sector_ids = self._scan_broken_sectors()

    def _scan_file_table(self) -> tuple:
        records = []
        next_ids = []
        for block_id in range(FILE_COUNT):
            frame = self._io.read_frame(block_id + 1)
            file_size, next_id = struct.unpack_from("<IH", frame, 4)
            records.append(
                FileRecord(
                    block_id=block_id,
                    allocation_state=_allocation_state(frame[0]),
                    file_size=file_size,
                    name=bytes(frame[0x0A : 0x0A + 21]),
                )
            )
            next_ids.append(next_id)
        for record, next_id in zip(records, next_ids):
            if next_id != NO_NEXT_BLOCK and next_id < FILE_COUNT:
                record.next_block = records[next_id]
        return tuple(records)

    def _scan_broken_sectors(self) -> tuple:
        return tuple(
            struct.unpack_from("<I", self._io.read_frame(index + 1))[0]
            for index in range(16, 16 + BROKEN_SECTOR_COUNT)
        )

    def get_file(self, file_id: int) -> FileRecord:
        """Return the directory entry with the given index (0 to 14)."""
        if not 0 <= file_id < FILE_COUNT:
            raise IndexError(f"file id {file_id} out of range")
        return self._records[file_id]

    def read_file_header(self, record: FileRecord) -> FileHeader:
        """Read the title frame of the file starting at ``record``."""
        frame = self._io.read_frame((record.block_id + 1) * BLOCK_SIZE // FRAME_SIZE)
        palette = struct.unpack_from(f"<{PALETTE_SIZE}H", frame, 0x60)
        return FileHeader(
            icon_frames_count=frame[2] & 0x0F,
            unknown_value=frame[3],
            title=bytes(frame[4 : 4 + 64]),
            color_palette=palette,
        )

    def read_file_icon(self, record: FileRecord, icon_id: int) -> bytes:
        """Read one packed 4-bit icon frame of the file starting at ``record``."""
        first = (record.block_id + 1) * BLOCK_SIZE // FRAME_SIZE
        return self._io.read_frame(first + 1 + icon_id)

    def read_replacement_data(self, replacement_block_id: int) -> bytes:
        """Read a frame of the broken-sector replacement area."""
        return self._io.read_frame(replacement_block_id + 36)

    def broken_sector_ids(self) -> tuple:
        """Return the 20 entries of the broken sector list."""
        return self._broken_sector_ids


def unpack_raw_icon(palette: Sequence[int], raw_icon) -> list:
    """Expand a packed 4-bit icon into 256 15-bit palette colours."""
    raw_icon = bytes(raw_icon)
    if len(palette) != PALETTE_SIZE:
        raise ValueError(f"palette must hold {PALETTE_SIZE} colours")
    if len(raw_icon) != RAW_ICON_SIZE:
        raise ValueError(f"raw icon must be {RAW_ICON_SIZE} bytes")
    pixels = []
    for packed in raw_icon:
        pixels.append(palette[packed & 0x0F])
        pixels.append(palette[(packed >> 4) & 0x0F])
    return pixels


def _channels(pixel: int) -> tuple:
    return (
        (pixel & 0x1F) << 3,
        ((pixel >> 5) & 0x1F) << 3,
        ((pixel >> 10) & 0x1F) << 3,
    )


def icon_to_bgr24(icon: Sequence[int]) -> bytes:
    """Convert 15-bit colours to 24-bit blue-green-red bytes."""
    out = bytearray()
    for pixel in icon:
        r, g, b = _channels(pixel)
        out += bytes((b, g, r))
    return bytes(out)


def icon_to_rgb24(icon: Sequence[int]) -> bytes:
    """Convert 15-bit colours to 24-bit red-green-blue bytes."""
    out = bytearray()
    for pixel in icon:
        out += bytes(_channels(pixel))
    return bytes(out)


def generate_image_24bit_bgr(width: int, height: int, r: int, g: int, b: int) -> bytes:
    """Return a single-colour image as blue-green-red bytes."""
    return bytes((b, g, r)) * (width * height)