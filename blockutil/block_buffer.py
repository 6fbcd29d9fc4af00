"""Fixed size buffers for processing data in blocks.

Two kinds of buffer are provided.  An :class:`EagerBuffer` processes a block
as soon as it is full, so its position always lies in ``0..block_size - 1``.
A :class:`LazyBuffer` keeps a full block until more data arrives, so its
position lies in ``0..block_size``.
"""

from __future__ import annotations

import abc
import copy
from collections.abc import Callable

MAX_BLOCK_SIZE = 255


class BlockBufferError(ValueError):
    """Data does not fit a buffer, or serialized buffer state is malformed."""

    def __init__(self, message: str = "block buffer error") -> None:
        super().__init__(message)


def _check_block_size(block_size: int) -> int:
    if not 1 <= block_size <= MAX_BLOCK_SIZE:
        raise ValueError(f"block size must be between 1 and {MAX_BLOCK_SIZE}")
    return block_size


def _chunks(data: bytes, block_size: int, count: int) -> list[bytes]:
    return [data[i * block_size : (i + 1) * block_size] for i in range(count)]


class BlockBuffer(abc.ABC):
    """Buffer for block processing of data.

    ``data`` is the initial content; its length must be a valid position for
    the kind of buffer.
    """

    def __init__(self, block_size: int, data: bytes = b"") -> None:
        self._size = _check_block_size(block_size)
        self._buffer = bytearray(block_size)
        self._pos = 0
        data = bytes(data)
        if not self._invariant(len(data), block_size):
            raise BlockBufferError(
                f"{len(data)} bytes of data do not fit {type(self).__name__} "
                f"with block size {block_size}"
            )
        self._set_data(data)

    @staticmethod
    @abc.abstractmethod
    def _invariant(pos: int, block_size: int) -> bool:
        """Return whether ``pos`` is a valid position for this kind."""

    @staticmethod
    @abc.abstractmethod
    def _split_blocks(data: bytes, block_size: int) -> tuple[list[bytes], bytes]:
        """Split ``data`` into whole blocks to process and a tail to keep."""

    def _set_data(self, data: bytes) -> None:
        self._buffer[: len(data)] = data
        self._pos = len(data)

    def digest_blocks(
        self, data: bytes, compress: Callable[[list[bytes]], object]
    ) -> None:
        """Feed ``data`` in, passing every completed run of blocks to ``compress``.

        ``compress`` receives a non-empty list of blocks each time it is called.
        """
        data = bytes(data)
        pos = self._pos
        rem = self._size - pos
        if self._invariant(len(data), rem):
            self._buffer[pos : pos + len(data)] = data
            self._pos = pos + len(data)
            return
        if pos != 0:
            self._buffer[pos:] = data[:rem]
            data = data[rem:]
            compress([bytes(self._buffer)])

        blocks, leftover = self._split_blocks(data, self._size)
        if blocks:
            compress(blocks)
        self._set_data(leftover)

    def reset(self) -> None:
        """Set the cursor position to zero."""
        self._pos = 0

    def pad_with_zeros(self) -> bytes:
        """Return the buffered data padded with zeros to a block, and reset."""
        block = self.data() + bytes(self._size - self._pos)
        self.reset()
        return block

    def pos(self) -> int:
        """Return the current cursor position."""
        return self._pos

    def data(self) -> bytes:
        """Return the data held in the buffer."""
        return bytes(self._buffer[: self._pos])

    def set(self, block: bytes, pos: int) -> None:
        """Replace the buffer content with ``block`` and the position with ``pos``."""
        block = bytes(block)
        if len(block) != self._size:
            raise ValueError(f"block must be {self._size} bytes long")
        if pos < 0 or not self._invariant(pos, self._size):
            raise BlockBufferError(f"position {pos} is not valid for this buffer")
        self._buffer = bytearray(block)
        self._pos = pos

    def size(self) -> int:
        """Return the block size in bytes."""
        return self._size

    def remaining(self) -> int:
        """Return the number of unused bytes in the buffer."""
        return self._size - self._pos

    def __copy__(self) -> BlockBuffer:
        clone = type(self).__new__(type(self))
        clone._size = self._size
        clone._buffer = bytearray(self._buffer)
        clone._pos = self._pos
        return clone

    def __deepcopy__(self, memo: dict) -> BlockBuffer:
        return copy.copy(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(pos={self._pos}, block_size={self._size}, "
            f"data={self.data()!r})"
        )


class EagerBuffer(BlockBuffer):
    """Block buffer that processes a block as soon as it is full."""

    @staticmethod
    def _invariant(pos: int, block_size: int) -> bool:
        return pos < block_size

    @staticmethod
    def _split_blocks(data: bytes, block_size: int) -> tuple[list[bytes], bytes]:
        count = len(data) // block_size
        return _chunks(data, block_size, count), data[count * block_size :]

    def digest_pad(
        self, delim: int, suffix: bytes, compress: Callable[[bytes], object]
    ) -> None:
        """Pad the buffered data with ``delim``, zeros and ``suffix``.

        ``compress`` is called with each resulting block: twice if the
        remaining space cannot hold the delimiter and the suffix.
        """
        suffix = bytes(suffix)
        if len(suffix) > self._size:
            raise ValueError("suffix is too long")
        if not 0 <= delim <= 0xFF:
            raise ValueError("delimiter must be a byte value")
        pos = self._pos
        block = bytearray(self.pad_with_zeros())
        block[pos] = delim

        start = self._size - len(suffix)
        if self._size - pos - 1 < len(suffix):
            compress(bytes(block))
            block = bytearray(self._size)
        block[start:] = suffix
        compress(bytes(block))
        self.reset()

    @staticmethod
    def _length_bytes(data_len: int, bits: int, byteorder: str) -> bytes:
        if not 0 <= data_len < 1 << bits:
            raise ValueError(f"data length does not fit in {bits} bits")
        return data_len.to_bytes(bits // 8, byteorder)

    def len64_padding_be(
        self, data_len: int, compress: Callable[[bytes], object]
    ) -> None:
        """Pad with 0x80, zeros and a big-endian 64-bit message length."""
        self.digest_pad(0x80, self._length_bytes(data_len, 64, "big"), compress)

    def len64_padding_le(
        self, data_len: int, compress: Callable[[bytes], object]
    ) -> None:
        """Pad with 0x80, zeros and a little-endian 64-bit message length."""
        self.digest_pad(0x80, self._length_bytes(data_len, 64, "little"), compress)

    def len128_padding_be(
        self, data_len: int, compress: Callable[[bytes], object]
    ) -> None:
        """Pad with 0x80, zeros and a big-endian 128-bit message length."""
        self.digest_pad(0x80, self._length_bytes(data_len, 128, "big"), compress)

    def serialize(self) -> bytes:
        """Return the buffer state as one block; its last byte is the position."""
        block = bytearray(self.data() + bytes(self._size - self._pos))
        block[-1] = self._pos
        return bytes(block)

    @classmethod
    def deserialize(cls, buffer: bytes) -> EagerBuffer:
        """Restore a buffer from the output of :meth:`serialize`."""
        buffer = bytes(buffer)
        if not 1 <= len(buffer) <= MAX_BLOCK_SIZE:
            raise BlockBufferError("serialized buffer has an invalid length")
        pos = buffer[-1]
        if not cls._invariant(pos, len(buffer)):
            raise BlockBufferError("serialized buffer has an invalid position")
        if any(buffer[pos:-1]):
            raise BlockBufferError("serialized buffer holds bytes past its data")
        result = cls(len(buffer))
        result._buffer = bytearray(buffer)
        result._pos = pos
        return result


class LazyBuffer(BlockBuffer):
    """Block buffer that keeps a full block until more data arrives."""

    @staticmethod
    def _invariant(pos: int, block_size: int) -> bool:
        return pos <= block_size

    @staticmethod
    def _split_blocks(data: bytes, block_size: int) -> tuple[list[bytes], bytes]:
        if not data:
            return [], b""
        count, tail_len = divmod(len(data), block_size)
        if tail_len == 0:
            count -= 1
            tail_len = block_size
        return _chunks(data, block_size, count), data[len(data) - tail_len :]

    def serialize(self) -> bytes:
        """Return the position byte followed by the data padded with zeros."""
        return bytes([self._pos]) + self.data() + bytes(self._size - self._pos)

    @classmethod
    def deserialize(cls, buffer: bytes) -> LazyBuffer:
        """Restore a buffer from the output of :meth:`serialize`."""
        buffer = bytes(buffer)
        block_size = len(buffer) - 1
        if not 1 <= block_size <= MAX_BLOCK_SIZE:
            raise BlockBufferError("serialized buffer has an invalid length")
        pos = buffer[0]
        if not cls._invariant(pos, block_size):
            raise BlockBufferError("serialized buffer has an invalid position")
        if any(buffer[1 + pos :]):
            raise BlockBufferError("serialized buffer holds bytes past its data")
        result = cls(block_size)
        result._buffer = bytearray(buffer[1:])
        result._pos = pos
        return result