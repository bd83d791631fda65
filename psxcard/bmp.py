"""Writer for uncompressed 24-bit BMP images."""

from __future__ import annotations

import struct
from typing import BinaryIO

_FILE_HEADER = struct.Struct("<HIHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")

BMP_SIGNATURE = 0x4D42
HEADERS_SIZE = _FILE_HEADER.size + _INFO_HEADER.size


def encode_24bit_image(width: int, height: int, data) -> bytes:
    """Return a complete BMP file holding ``width * height`` 24-bit pixels.

    The pixel bytes are written as given, without row padding.
    """
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    data_size = width * height * 3
    pixels = bytes(data)[:data_size]
    if len(pixels) < data_size:
        raise ValueError(
            f"expected {data_size} bytes of pixel data, got {len(pixels)}"
        )
    file_size = HEADERS_SIZE + data_size
    file_header = _FILE_HEADER.pack(
        BMP_SIGNATURE, file_size, 0, 0, file_size - data_size
    )
    info_header = _INFO_HEADER.pack(
        _INFO_HEADER.size, width, height, 1, 3 * 8, 0, data_size, 0, 0, 0, 0
    )
    return file_header + info_header + pixels


def save_24bit_image(width: int, height: int, data, stream: BinaryIO) -> None:
    """Write a 24-bit BMP image to a binary stream."""
    stream.write(encode_24bit_image(width, height, data))