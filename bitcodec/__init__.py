from .bitstream_utils import BitOrder, BitReader, BitStreamError, BitWriter
from .digest_utils import DigestError, MD5Context
from .huffman_utils import HuffmanCode, HuffmanError, decode_symbols, encode_symbols

__all__ = [
    "BitOrder",
    "BitReader",
    "BitStreamError",
    "BitWriter",
    "DigestError",
    "HuffmanCode",
    "HuffmanError",
    "MD5Context",
    "decode_symbols",
    "encode_symbols",
]
