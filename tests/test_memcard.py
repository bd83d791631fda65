import struct

import pytest

from psxcard.memcard import (
    BLOCK_SIZE,
    CARD_SIZE,
    FRAME_SIZE,
    BlockAllocationState,
    Memcard,
    VirtualMemcardIo,
    generate_image_24bit_bgr,
    icon_to_bgr24,
    icon_to_rgb24,
    unpack_raw_icon,
)

NAME = b"BESLES-00000GAME"
TITLE = "ＳＡＶＥ".encode("shift_jis")
PALETTE = [0x0000, 0x001F, 0x7C00] + [0x03E0] * 13


def _frame_offset(index):
    return index * FRAME_SIZE


def build_card():
    image = bytearray(CARD_SIZE)
    for block in range(15):
        off = _frame_offset(block + 1)
        state = 0x51 if block == 0 else 0xA0
        size = BLOCK_SIZE if block == 0 else 0
        next_id = 1 if block == 2 else 0xFFFF
        struct.pack_into("<BxxxIH", image, off, state, size, next_id)
        if block == 0:
            image[off + 0x0A : off + 0x0A + len(NAME)] = NAME
    struct.pack_into("<I", image, _frame_offset(17), 0x12345678)
    image[_frame_offset(37) : _frame_offset(38)] = b"\xAA" * FRAME_SIZE
    header = _frame_offset(64)
    image[header : header + 4] = b"SC\x12\x07"
    image[header + 4 : header + 4 + len(TITLE)] = TITLE
    struct.pack_into("<16H", image, header + 0x60, *PALETTE)
    image[_frame_offset(65) : _frame_offset(66)] = b"\x21" * FRAME_SIZE
    return bytes(image)


@pytest.fixture
def card():
    return Memcard(VirtualMemcardIo(build_card()))


def test_directory_records(card):
    first = card.get_file(0)
    assert first.block_id == 0
    assert first.allocation_state == BlockAllocationState.FIRST_FILE_BLOCK
    assert first.file_size == BLOCK_SIZE
    assert first.name.rstrip(b"\x00") == NAME
    assert first.next_block is None
    assert card.get_file(5).allocation_state == BlockAllocationState.FORMATTED


def test_next_block_link(card):
    assert card.get_file(2).next_block is card.get_file(1)


def test_get_file_out_of_range(card):
    with pytest.raises(IndexError):
        card.get_file(15)
    with pytest.raises(IndexError):
        card.get_file(-1)


def test_file_header(card):
    header = card.read_file_header(card.get_file(0))
    assert header.icon_frames_count == 2
    assert header.unknown_value == 7
    assert header.title.startswith(TITLE)
    assert len(header.title) == 64
    assert list(header.color_palette) == PALETTE


def test_file_icon(card):
    record = card.get_file(0)
    assert card.read_file_icon(record, 0) == b"\x21" * FRAME_SIZE
    assert card.read_file_icon(record, 1) == bytes(FRAME_SIZE)


def test_broken_sectors_and_replacement(card):
    ids = card.broken_sector_ids()
    assert len(ids) == 20
    assert ids[0] == 0x12345678
    assert card.read_replacement_data(1) == b"\xAA" * FRAME_SIZE


def test_virtual_io_bounds():
    io = VirtualMemcardIo(build_card())
    assert len(io.read_frame(0x3FF)) == FRAME_SIZE
    with pytest.raises(IndexError):
        io.read_frame(0x400)


def test_virtual_io_rejects_wrong_size():
    with pytest.raises(ValueError):
        VirtualMemcardIo(b"\x00" * 100)


def test_unknown_allocation_state_kept_raw():
    image = bytearray(build_card())
    image[_frame_offset(3)] = 0x42
    card = Memcard(VirtualMemcardIo(bytes(image)))
    assert card.get_file(2).allocation_state == 0x42


def test_unpack_raw_icon_order():
    pixels = unpack_raw_icon(PALETTE, b"\x21" * 128)
    assert len(pixels) == 256
    assert pixels[0::2] == [PALETTE[1]] * 128
    assert pixels[1::2] == [PALETTE[2]] * 128


def test_unpack_raw_icon_validates():
    with pytest.raises(ValueError):
        unpack_raw_icon(PALETTE, b"\x00" * 10)
    with pytest.raises(ValueError):
        unpack_raw_icon(PALETTE[:4], b"\x00" * 128)


def test_colour_conversions():
    red, blue = 0x001F, 0x7C00
    rgb = icon_to_rgb24([red, blue, 0])
    bgr = icon_to_bgr24([red, blue, 0])
    assert rgb[:3] == bytes((0xF8, 0, 0))
    assert bgr[:3] == rgb[:3][::-1]
    assert rgb[3:6] == bgr[:3]
    assert rgb[6:] == bytes(3)


def test_bgr_is_reversed_rgb():
    icon = list(range(0, 0x8000, 128))
    rgb = icon_to_rgb24(icon)
    bgr = icon_to_bgr24(icon)
    assert len(rgb) == len(icon) * 3
    triples_rgb = [rgb[i : i + 3] for i in range(0, len(rgb), 3)]
    triples_bgr = [bgr[i : i + 3] for i in range(0, len(bgr), 3)]
    assert [t[::-1] for t in triples_rgb] == triples_bgr


def test_stp_bit_ignored():
    assert icon_to_rgb24([0x801F]) == icon_to_rgb24([0x001F])


def test_generate_image():
    image = generate_image_24bit_bgr(3, 2, 1, 2, 3)
    assert image == bytes((3, 2, 1)) * 6