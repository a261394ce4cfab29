import pytest

from bitcodec.utf8_utils import UTF8_MAX_LEN, utf8_bytes_left, utf8_decode, utf8_encode


@pytest.mark.parametrize("value,size", [
    (0x00, 1), (0x7F, 1), (0x80, 2), (0x7FF, 2), (0x800, 3), (0xFFFF, 3),
    (0x10000, 4), (0x1FFFFF, 4), (0x200000, 5), (0x4000000, 6), (0x7FFFFFFF, 6),
])
def test_encode_lengths_and_decode(value, size):
    data = utf8_encode(value)
    assert len(data) == size
    assert utf8_decode(data) == (value, size)


def test_matches_standard_utf8_for_unicode_range():
    for ch in "aé€\U0001f600":
        assert utf8_encode(ord(ch)) == ch.encode("utf-8")


def test_six_byte_lead():
    data = utf8_encode(0x7FFFFFFF)
    assert data[0] == 0xFD
    assert len(data) == UTF8_MAX_LEN


def test_bytes_left():
    assert utf8_bytes_left(0x41) == 0
    assert utf8_bytes_left(0xC3) == 1
    assert utf8_bytes_left(0xE2) == 2
    assert utf8_bytes_left(0xFC) == 5
    assert utf8_bytes_left(0xFF) == 7


def test_malformed_sequences_return_sentinel():
    assert utf8_decode(b"\xc3\x29") == (0, 0)
    assert utf8_decode(b"\x80") == (0, 0)
    assert utf8_decode(b"\xfe" + b"\x80" * 6) == (0, 0)
    assert utf8_decode(b"\xe2\x82") == (0, 0)
    assert utf8_decode(b"") == (0, 0)


def test_encode_rejects_out_of_range():
    with pytest.raises(ValueError):
        utf8_encode(-1)
    with pytest.raises(ValueError):
        utf8_encode(1 << 31)
