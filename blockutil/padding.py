"""Padding and unpadding of messages divided into blocks.

Each scheme works on one block at a time.  ``pad`` takes a block whose first
``pos`` bytes hold message data and returns the padded block, and ``unpad``
returns the message data held in a padded block.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence

_MAX_BYTE_BLOCK = 255


class PadType(enum.Enum):
    """How a padding scheme relates padded and unpadded messages."""

    REVERSIBLE = "reversible"
    AMBIGUOUS = "ambiguous"
    NO_PADDING = "no padding"


class UnpadError(ValueError):
    """A block holds malformed padding."""

    def __init__(self, message: str = "unpad error") -> None:
        super().__init__(message)


def _check_pos(block: bytes, pos: int, *, allow_full: bool) -> None:
    if pos < 0:
        raise ValueError("`pos` must not be negative")
    if allow_full:
        if pos > len(block):
            raise ValueError("`pos` is bigger than block size")
    elif pos >= len(block):
        raise ValueError("`pos` is bigger or equal to block size")


def _check_byte_block(block: bytes, scheme: str) -> None:
    if len(block) > _MAX_BYTE_BLOCK:
        raise ValueError(f"block size is too big for {scheme}")


class Padding:
    """Base class for padding schemes."""

    TYPE: PadType = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        """Return ``block`` padded after its first ``pos`` bytes."""
        raise NotImplementedError

    def unpad(self, block: bytes) -> bytes:
        """Return the message data held in the padded ``block``."""
        raise NotImplementedError

    def unpad_blocks(self, blocks: Sequence[bytes]) -> bytes:
        """Return the message held in ``blocks``, whose last block is padded.

        All blocks must have the same size.
        """
        blocks = [bytes(block) for block in blocks]
        if blocks and any(len(block) != len(blocks[0]) for block in blocks):
            raise ValueError("all blocks must have the same size")
        if self.TYPE is PadType.NO_PADDING:
            return b"".join(blocks)
        if not blocks:
            if self.TYPE is PadType.AMBIGUOUS:
                return b""
            raise UnpadError()
        *head, last = blocks
        tail = self.unpad(last)
        return b"".join(head) + tail

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ZeroPadding(Padding):
    """Pad with zeros.

    Not reversible for messages that end with one or more zero bytes.
    """

    TYPE = PadType.AMBIGUOUS

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        _check_pos(block, pos, allow_full=True)
        return block[:pos] + bytes(len(block) - pos)

    def unpad(self, block: bytes) -> bytes:
        return bytes(block).rstrip(b"\x00")


def _pkcs7_pad(block: bytes, pos: int) -> bytes:
    block = bytes(block)
    _check_byte_block(block, "PKCS#7")
    _check_pos(block, pos, allow_full=False)
    n = len(block) - pos
    return block[:pos] + bytes([n]) * n


def _pkcs7_unpad(block: bytes, strict: bool) -> bytes:
    block = bytes(block)
    _check_byte_block(block, "PKCS#7")
    if not block:
        raise ValueError("block must not be empty")
    n = block[-1]
    if n == 0 or n > len(block):
        raise UnpadError()
    start = len(block) - n
    if strict and any(b != n for b in block[start:-1]):
        raise UnpadError()
    return block[:start]


class Pkcs7(Padding):
    """Pad with bytes equal to the number of bytes added (PKCS#7)."""

    TYPE = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        return _pkcs7_pad(block, pos)

    def unpad(self, block: bytes) -> bytes:
        return _pkcs7_unpad(block, strict=True)


class Iso10126(Padding):
    """Padding ending with a byte equal to the number of bytes added.

    Padding writes the same bytes as PKCS#7; unpadding checks only the last
    byte.
    """

    TYPE = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        return _pkcs7_pad(block, pos)

    def unpad(self, block: bytes) -> bytes:
        return _pkcs7_unpad(block, strict=False)


class AnsiX923(Padding):
    """Pad with zeros and a last byte equal to the number of bytes added."""

    TYPE = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        _check_byte_block(block, "ANSI X9.23")
        _check_pos(block, pos, allow_full=False)
        n = len(block) - pos
        return block[:pos] + bytes(n - 1) + bytes([n])

    def unpad(self, block: bytes) -> bytes:
        block = bytes(block)
        _check_byte_block(block, "ANSI X9.23")
        if not block:
            raise ValueError("block must not be empty")
        n = block[-1]
        if n == 0 or n > len(block):
            raise UnpadError()
        start = len(block) - n
        if any(block[start:-1]):
            raise UnpadError()
        return block[:start]


class Iso7816(Padding):
    """Pad with the byte sequence ``80 00 .. 00``."""

    TYPE = PadType.REVERSIBLE

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        _check_pos(block, pos, allow_full=False)
        return block[:pos] + b"\x80" + bytes(len(block) - pos - 1)

    def unpad(self, block: bytes) -> bytes:
        block = bytes(block)
        stripped = block.rstrip(b"\x00")
        if not stripped or stripped[-1] != 0x80:
            raise UnpadError()
        return stripped[:-1]


class NoPadding(Padding):
    """Leave the data unpadded; the message must fill whole blocks.

    ``unpad`` returns the whole block, including any bytes past the message.
    """

    TYPE = PadType.NO_PADDING

    def pad(self, block: bytes, pos: int) -> bytes:
        block = bytes(block)
        _check_pos(block, pos, allow_full=True)
        return block

    def unpad(self, block: bytes) -> bytes:
        return bytes(block)