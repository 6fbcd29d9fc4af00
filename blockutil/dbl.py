"""Doubling and inverse doubling of blocks over GF(2^n), big-endian."""

from __future__ import annotations

_CONSTANTS = {
    8: 0b1_1011,
    16: 0b1000_0111,
    32: 0b100_0010_0101,
}


def _constant(block: bytes) -> int:
    try:
        return _CONSTANTS[len(block)]
    except KeyError:
        raise ValueError(
            f"unsupported block size {len(block)}; expected 8, 16 or 32 bytes"
        ) from None


def dbl(block: bytes) -> bytes:
    """Multiply ``block`` by x.

    Shifts left by one bit and, if the top bit was set, XORs in the field's
    reduction constant.
    """
    c = _constant(block)
    size = len(block)
    bits = size * 8
    val = int.from_bytes(block, "big")
    top = val >> (bits - 1)
    val = ((val << 1) & ((1 << bits) - 1)) ^ (top * c)
    return val.to_bytes(size, "big")


def inv_dbl(block: bytes) -> bytes:
    """Divide ``block`` by x; the inverse of :func:`dbl`."""
    c = _constant(block)
    size = len(block)
    bits = size * 8
    val = int.from_bytes(block, "big")
    low = val & 1
    val = (val >> 1) ^ (low * ((1 << (bits - 1)) ^ (c >> 1)))
    return val.to_bytes(size, "big")