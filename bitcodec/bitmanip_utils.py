#!/usr/bin/env python3
"""Bit counting and reversal helpers for 32-bit unsigned values."""

WORD_BITS = 32
WORD_MASK = 0xFFFFFFFF


def bits_set(number: int) -> int:
    return bin(number & WORD_MASK).count("1")


def leading_zeros(number: int) -> int:
    return WORD_BITS - (number & WORD_MASK).bit_length()


def trailing_zeros(number: int) -> int:
    number &= WORD_MASK
    if number == 0:
        return WORD_BITS
    return (number & -number).bit_length() - 1


def msb_set(number: int) -> int:
    """0-based position of the highest 1-bit, or 32 for zero."""
    number &= WORD_MASK
    if number == 0:
        return WORD_BITS
    return number.bit_length() - 1


def lsb_set(number: int) -> int:
    """0-based position of the lowest 1-bit, or 32 for zero."""
    return trailing_zeros(number)


def reverse8(number: int) -> int:
    number &= 0xFF
    number = ((number & 0xF0) >> 4) | ((number & 0x0F) << 4)
    number = ((number & 0xCC) >> 2) | ((number & 0x33) << 2)
    number = ((number & 0xAA) >> 1) | ((number & 0x55) << 1)
    return number
