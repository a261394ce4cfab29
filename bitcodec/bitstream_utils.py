#!/usr/bin/env python3
"""
Bit-granular writer/reader over a byte stream.

Bits are accumulated MSB-first into an 8-bit cell. With BitOrder.LSB each
cell is bit-reversed right before it is written (and right after it is
read), which is the packing used by DEFLATE-style formats.
"""
from enum import IntEnum
from typing import BinaryIO

from .bitmanip_utils import reverse8
from .utf8_utils import UTF8_MAX_LEN, utf8_bytes_left, utf8_decode, utf8_encode

CELL_BITS = 8
MAX_WIDTH = 32


class BitOrder(IntEnum):
    MSB = 0
    LSB = 1


class BitStreamError(ValueError):
    pass


def _check_width(bits: int) -> None:
    if bits > MAX_WIDTH:
        raise BitStreamError(f"bit count too high: {bits}")
    if bits < 1:
        raise BitStreamError(f"bit count too low: {bits}")


class BitWriter:
    def __init__(self, stream: BinaryIO, order: BitOrder = BitOrder.MSB) -> None:
        self._stream = stream
        self._order = BitOrder(order)
        self._acc = 0
        self._index = 0

    @property
    def order(self) -> BitOrder:
        return self._order

    @property
    def pending_bits(self) -> int:
        return self._index

    def __enter__(self) -> "BitWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.flush()

    def _push(self) -> None:
        cell = self._acc & 0xFF
        if self._order == BitOrder.LSB:
            cell = reverse8(cell)
        self._stream.write(bytes((cell,)))
        self._acc = 0
        self._index = 0

    def reset(self) -> None:
        """Drop any bits not yet written."""
        self._acc = 0
        self._index = 0

    def write(self, value: int, bits: int) -> int:
        """Write the low `bits` bits of value, MSB first. Returns bytes emitted."""
        _check_width(bits)
        written = 0
        while bits:
            take = min(CELL_BITS - self._index, bits)
            shift = bits - take
            self._acc = (self._acc << take) | ((value >> shift) & ((1 << take) - 1))
            self._index += take
            if self._index == CELL_BITS:
                self._push()
                written += 1
            bits -= take
        return written

    def write_bytes(self, data: bytes) -> int:
        written = 0
        for byte in data:
            written += self.write(byte, 8)
        return written

    def write_utf8(self, value: int) -> int:
        return self.write_bytes(utf8_encode(value))

    def flush(self, fill: bool = False) -> int:
        if self._index == 0:
            return 0
        remaining = CELL_BITS - self._index
        self._acc <<= remaining
        if fill:
            self._acc |= (1 << remaining) - 1
        self._push()
        return 1


class BitReader:
    def __init__(self, stream: BinaryIO, order: BitOrder = BitOrder.MSB) -> None:
        self._stream = stream
        self._order = BitOrder(order)
        self._acc = 0
        self._index = CELL_BITS

    @property
    def order(self) -> BitOrder:
        return self._order

    def _fetch(self) -> None:
        data = self._stream.read(1)
        if not data:
            raise EOFError("Unexpected end of bitstream")
        cell = data[0]
        if self._order == BitOrder.LSB:
            cell = reverse8(cell)
        self._acc = cell
        self._index = 0

    def discard_pending(self) -> None:
        """Skip to the next byte boundary."""
        self._index = CELL_BITS

    def read(self, bits: int) -> int:
        _check_width(bits)
        value = 0
        while bits:
            if self._index == CELL_BITS:
                self._fetch()
            take = min(CELL_BITS - self._index, bits)
            shift = CELL_BITS - self._index - take
            value = (value << take) | ((self._acc >> shift) & ((1 << take) - 1))
            self._index += take
            bits -= take
        return value

    def read_bytes(self, n: int) -> bytes:
        return bytes(self.read(8) for _ in range(n))

    def read_utf8(self) -> int:
        lead = self.read(8)
        left = utf8_bytes_left(lead)
        if left >= UTF8_MAX_LEN:
            raise BitStreamError("Invalid UTF-8 sequence encountered")
        buf = bytes((lead,)) + self.read_bytes(left)
        value, size = utf8_decode(buf)
        if size == 0:
            raise BitStreamError("Invalid UTF-8 sequence encountered")
        return value
