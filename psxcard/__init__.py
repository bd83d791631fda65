"""Read PlayStation memory card images: directory entries, save titles, icons and BMP export."""

__version__ = "0.1.0"
__all__ = ["application", "bmp", "memcard", "sjis"]