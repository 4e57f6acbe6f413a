from __future__ import annotations

from typing import Sequence, Union

Message = Union[str, bytes, bytearray, memoryview, Sequence[int]]

def _utf16_units(text: str) -> list[int]:
    units: list[int] = []
    for ch in text:
        code = ord(ch)
        if code >= 0x10000:
            code -= 0x10000
            units.append(0xD800 | code >> 10)
            units.append(0xDC00 | code & 0x3FF)
        else:
            units.append(code)
    return units

def encode_text(text: str) -> bytes:
    """Encode text with the 1-4 byte variable-length scheme.

    Well-formed text encodes exactly like UTF-8. Text is read as UTF-16 code
    units, and a surrogate unit is combined with the unit that follows it as
    if the two formed a pair, so unmatched halves still produce four bytes
    instead of an error.
    """
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        pass

    units = _utf16_units(text)
    out = bytearray()
    n = len(units)
    i = 0
    while i < n:
        code = units[i]
        if code < 0x80:
            out.append(code)
        elif code < 0x800:
            out.append(0xC0 | code >> 6)
            out.append(0x80 | code & 0x3F)
        elif code < 0xD800 or code >= 0xE000:
            out.append(0xE0 | code >> 12)
            out.append(0x80 | code >> 6 & 0x3F)
            out.append(0x80 | code & 0x3F)
        else:
            # surrogate: fold in the next unit (0 past the end)
            i += 1
            low = units[i] if i < n else 0
            code = 0x10000 + ((code & 0x3FF) << 10 | low & 0x3FF)
            out.append(0xF0 | code >> 18)
            out.append(0x80 | code >> 12 & 0x3F)
            out.append(0x80 | code >> 6 & 0x3F)
            out.append(0x80 | code & 0x3F)
        i += 1
    return bytes(out)

def to_bytes(message: Message) -> bytes:
    if isinstance(message, str):
        return encode_text(message)
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    # sequence of byte values; out-of-range ints keep their low 8 bits
    return bytes(b & 0xFF for b in message)
