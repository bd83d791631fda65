# psxcard

psxcard reads PlayStation memory card images, which are raw 128 KiB dumps.
It can read the directory of the card and decode the Shift-JIS title of each
save. It can also unpack the 16x16 palette icons to 24-bit pixels or write
them out as BMP files.

## Installation

```
pip install .
```

## Command line

```
psxcard path/to/card.bin
psxcard path/to/card.bin --export icons/
```

For each of the 15 directory slots, the command prints `Memcard file id: N`.
If a slot holds the first block of a save, the save's title follows on the
next line.

`--export DIR` writes every icon frame of every save to `DIR` as a BMP file
named `<file>_<icon>.bmp`. It then prints each path it wrote. The directory
is created if it does not exist.

If the image file is shorter than 128 KiB, it is padded with zero bytes.
Anything past 128 KiB is ignored. If the file cannot be read, the command
prints an error and exits with status 1.

## Library use

```python
from psxcard.memcard import Memcard, VirtualMemcardIo, BlockAllocationState
from psxcard.sjis import sjis_to_ascii

with open("card.bin", "rb") as fh:
    card = Memcard(VirtualMemcardIo(fh.read()))

for slot in range(15):
    record = card.get_file(slot)
    if record.allocation_state == BlockAllocationState.FIRST_FILE_BLOCK:
        header = card.read_file_header(record)
        print(slot, sjis_to_ascii(header.title))
```

`VirtualMemcardIo` only accepts an image of exactly 131072 bytes. Any other
size raises `ValueError`. `read_frame` and `get_file` raise `IndexError` for
an index that is out of range.

To get icon pixels:

```python
from psxcard.memcard import unpack_raw_icon, icon_to_rgb24

raw = card.read_file_icon(record, 0)
pixels = icon_to_rgb24(unpack_raw_icon(header.color_palette, raw))
```

`icon_to_bgr24` gives the same pixels in blue-green-red order. That is the
byte order that BMP files use.

`Memcard.broken_sector_ids()` returns the 20 entries of the broken sector
list. `read_replacement_data(n)` reads a frame of the replacement area.

`sjis_to_ascii` decodes full-width letters, digits and common symbols. It
stops at the first zero byte. A character with no ASCII equivalent becomes
`"\xff"`.

### BMP output

`psxcard.bmp.save_24bit_image(width, height, data, stream)` writes a BMP to a
binary stream. `psxcard.bmp.encode_24bit_image(width, height, data)` returns
the encoded bytes instead. The pixel data is written as given, with no row
padding.

### The Application class

`psxcard.application.Application` puts these pieces together:

- `Application.from_file(path)` opens a card image. A short file is padded with zeros.
- `file_titles()` returns `(file_id, title)` for every slot that starts a save.
- `get_image(file_id, icon_id)` returns one icon as RGB bytes. The icon index wraps around the save's frame count. A save with no icon frames raises `ValueError`.
- `request_image("3/1")` does the same as `get_image`, but takes an id of the form `"<file>/<icon>"`. A malformed id falls back to file 0, icon 0.
- `export_icons(directory)` writes the icons as BMP files and returns their paths.

## What it does not do

psxcard only reads card images. It does not write, copy or delete saves, and
it does not format cards. It has no graphical browser for a card's contents.
It also does not talk to real memory card hardware.

## Tests

```
pip install .[test]
pytest
```