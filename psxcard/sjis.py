"""Conversion of full-width Shift-JIS save titles to plain ASCII."""

from __future__ import annotations

UNKNOWN_CHAR = "\xff"

_SYMBOLS = {
    0x8140: " ",
    0x8149: "!",
    0x8168: '"',
    0x8194: "#",
    0x8190: "$",
    0x8193: "%",
    0x8195: "&",
    0x8166: '"',
    0x8169: "(",
    0x816A: ")",
    0x8196: "*",
    0x817B: "+",
    0x8143: ",",
    0x817C: "-",
    0x8144: ".",
    0x815E: "/",
    0x8146: ":",
    0x8147: ";",
    0x8171: "<",
    0x8181: "=",
    0x8172: ">",
    0x8148: "?",
    0x8197: "@",
    0x816D: "[",
    0x818F: "\\",
    0x816E: "]",
    0x814F: "^",
    0x8151: "_",
    0x8165: "`",
    0x816F: "{",
    0x8162: "|",
    0x8170: "}",
    0x8150: "~",
}


def _decode_char(code: int) -> str:
    if 0x8260 <= code <= 0x8279:
        return chr(code - 0x8260 + ord("A"))
    if 0x8281 <= code <= 0x829A:
        return chr(code - 0x8281 + ord("a"))
    if 0x824F <= code <= 0x8258:
        return chr(code - 0x824F + ord("0"))
    return _SYMBOLS.get(code, UNKNOWN_CHAR)


def sjis_to_ascii(data) -> str:
    """Decode double-byte Shift-JIS characters until a zero byte.

    Characters without an ASCII equivalent become ``UNKNOWN_CHAR``.
    """
    raw = bytes(data)
    chars = []
    for high, low in zip(raw[0::2], raw[1::2]):
        if high == 0 or low == 0:
            break
        chars.append(_decode_char((high << 8) | low))
    return "".join(chars)