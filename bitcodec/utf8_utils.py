#!/usr/bin/env python3
"""
Extended UTF-8 code-point codec.

Uses the classic pre-RFC 3629 layout, so values up to 2**31 - 1 encode to
as many as 6 bytes. Lead byte patterns: 0xxxxxxx, 110xxxxx, 1110xxxx,
11110xxx, 111110xx, 1111110x; continuation bytes are 10xxxxxx.
"""
from typing import Tuple

from .bitmanip_utils import leading_zeros

UTF8_MAX_LEN = 6

# (exclusive upper bound, byte count, lead marker)
_RANGES = (
    (1 << 7, 1, 0x00),
    (1 << 11, 2, 0xC0),
    (1 << 16, 3, 0xE0),
    (1 << 21, 4, 0xF0),
    (1 << 26, 5, 0xF8),
)


def utf8_encode(value: int) -> bytes:
    if value < 0 or value >= 1 << 31:
        raise ValueError(f"Code point out of range: {value}")
    size, marker = UTF8_MAX_LEN, 0xFC
    for bound, n, lead in _RANGES:
        if value < bound:
            size, marker = n, lead
            break
    out = bytearray(size)
    for i in range(size - 1, 0, -1):
        out[i] = 0x80 | (value & 0x3F)
        value >>= 6
    out[0] = (marker | value) & 0xFF
    return bytes(out)


def utf8_bytes_left(lead: int) -> int:
    """Number of continuation bytes announced by a lead byte."""
    ones = leading_zeros(~(lead << 24) & 0xFFFFFFFF)
    return max(0, ones - 1)


def utf8_decode(data: bytes) -> Tuple[int, int]:
    """Return (codepoint, size); (0, 0) if the sequence is malformed or short."""
    if not data:
        return 0, 0
    lead = data[0]
    size = utf8_bytes_left(lead) + 1
    if (lead & 0xC0) == 0x80:
        return 0, 0
    if size == 1:
        return lead, 1
    if size > UTF8_MAX_LEN or len(data) < size:
        return 0, 0
    value = lead & ((1 << (7 - size)) - 1)
    for byte in data[1:size]:
        if (byte & 0xC0) != 0x80:
            return 0, 0
        value = (value << 6) | (byte & 0x3F)
    return value, size
