from bitcodec.bitmanip_utils import bits_set, leading_zeros, lsb_set, msb_set, reverse8, trailing_zeros


def test_bits_set():
    assert bits_set(0) == 0
    assert bits_set(0xFFFFFFFF) == 32
    assert bits_set(0b1011) == 3


def test_leading_and_trailing_zeros():
    assert leading_zeros(0) == 32
    assert leading_zeros(1) == 31
    assert leading_zeros(0x80000000) == 0
    assert trailing_zeros(0) == 32
    assert trailing_zeros(0b1000) == 3
    assert trailing_zeros(0x80000000) == 31


def test_msb_and_lsb_positions():
    assert msb_set(0) == 32
    assert msb_set(0b10100) == 4
    assert lsb_set(0) == 32
    assert lsb_set(0b10100) == 2


def test_reverse8():
    assert reverse8(0x01) == 0x80
    assert reverse8(0xB8) == 0x1D
    assert reverse8(0xFF) == 0xFF
    for b in range(256):
        assert reverse8(reverse8(b)) == b
