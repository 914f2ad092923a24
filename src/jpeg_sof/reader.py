from __future__ import annotations
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


class BufferUnderrunError(IOError):
    """Raised when a read needs more bytes than the buffer has left."""


class SequentialByteReader:
    """
    Big-endian reads over an in-memory buffer.

    The buffer is borrowed through a memoryview, never copied. Every read
    advances the cursor by the number of bytes consumed.
    """

    __slots__ = ("_buf", "_pos")

    def __init__(self, data: BytesLike):
        self._buf = memoryview(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._buf)

    @property
    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return len(self._buf) - self._pos

    def _take(self, n: int) -> memoryview:
        end = self._pos + n
        if end > len(self._buf):
            raise BufferUnderrunError(
                f"Attempted to read {n} byte(s) at position {self._pos}, "
                f"but only {self.remaining()} remain"
            )
        out = self._buf[self._pos:end]
        self._pos = end
        return out

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_u16(self) -> int:
        b = self._take(2)
        return (b[0] << 8) | b[1]
