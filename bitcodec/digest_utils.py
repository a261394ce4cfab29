#!/usr/bin/env python3
import hashlib

DIGEST_SIZE = 16


class DigestError(RuntimeError):
    pass


class MD5Context:
    """MD5 accumulator; finalize() may be called once, after which the context is spent."""

    def __init__(self) -> None:
        self._md5 = hashlib.md5()
        self._bytes_processed = 0
        self._finalized = False

    @property
    def bytes_processed(self) -> int:
        return self._bytes_processed

    def consume(self, data: bytes) -> "MD5Context":
        if self._finalized:
            raise DigestError("MD5 context already finalized.")
        self._md5.update(data)
        self._bytes_processed += len(data)
        return self

    def finalize(self) -> bytes:
        if self._finalized:
            raise DigestError("MD5 context already finalized.")
        self._finalized = True
        return self._md5.digest()


def md5_digest(data: bytes) -> bytes:
    return MD5Context().consume(data).finalize()
