"""Buffer for reading data produced one block at a time."""

from __future__ import annotations

from collections.abc import Callable

from .block_buffer import MAX_BLOCK_SIZE, BlockBufferError


class ReadBuffer:
    """Buffer for reading block-generated data.

    The first byte of the internal block holds the cursor position; bytes
    from the position to the end of the block are unread data.
    """

    def __init__(self, block_size: int) -> None:
        if not 1 <= block_size <= MAX_BLOCK_SIZE:
            raise ValueError(f"block size must be between 1 and {MAX_BLOCK_SIZE}")
        self._size = block_size
        self._buffer = bytearray(block_size)
        self._buffer[0] = block_size

    def pos(self) -> int:
        """Return the current cursor position."""
        return self._buffer[0]

    def size(self) -> int:
        """Return the block size in bytes."""
        return self._size

    def remaining(self) -> int:
        """Return the number of unread bytes held in the buffer."""
        return self._size - self.pos()

    def _generate(self, gen_block: Callable[[], bytes]) -> bytes:
        block = bytes(gen_block())
        if len(block) != self._size:
            raise ValueError(
                f"generated block is {len(block)} bytes long, expected {self._size}"
            )
        return block

    def read(self, n: int, gen_block: Callable[[], bytes]) -> bytes:
        """Return ``n`` bytes: buffered data first, then new blocks.

        ``gen_block`` is called with no arguments for each new block needed;
        the unread part of the last block is kept for later reads.
        """
        if n < 0:
            raise ValueError("number of bytes must not be negative")
        pos = self.pos()
        rem = self._size - pos
        out = bytearray()

        if rem:
            if n < rem:
                self._buffer[0] = pos + n
                return bytes(self._buffer[pos : pos + n])
            out += self._buffer[pos:]
            n -= rem

        full, left = divmod(n, self._size)
        for _ in range(full):
            out += self._generate(gen_block)

        if left:
            block = bytearray(self._generate(gen_block))
            out += block[:left]
            block[0] = left
            self._buffer = block
        else:
            self._buffer[0] = self._size
        return bytes(out)

    def serialize(self) -> bytes:
        """Return the buffer state with already-read bytes zeroed."""
        pos = self.pos()
        state = bytearray(self._buffer)
        state[1:pos] = bytes(max(pos - 1, 0))
        return bytes(state)

    @classmethod
    def deserialize(cls, buffer: bytes) -> ReadBuffer:
        """Restore a buffer from the output of :meth:`serialize`."""
        buffer = bytes(buffer)
        if not 1 <= len(buffer) <= MAX_BLOCK_SIZE:
            raise BlockBufferError("serialized buffer has an invalid length")
        pos = buffer[0]
        if pos == 0 or pos > len(buffer) or any(buffer[1:pos]):
            raise BlockBufferError("serialized read buffer is malformed")
        result = cls(len(buffer))
        result._buffer = bytearray(buffer)
        return result

    def __copy__(self) -> ReadBuffer:
        clone = type(self).__new__(type(self))
        clone._size = self._size
        clone._buffer = bytearray(self._buffer)
        return clone

    def __repr__(self) -> str:
        return f"ReadBuffer(block_size={self._size}, remaining={self.remaining()})"