"""Iterators over a simple binary blob storage format.

The format is a sequence of binary blobs with git-flavoured variable-length
quantities (VLQ) used for unsigned numbers.

The data starts with a count ``d`` of de-duplicated blobs, followed by ``d``
entries, each a length ``m`` and ``m`` bytes of blob.  Then follows any number
of entries for the stored blobs.  Each starts with a number ``n`` whose least
significant bit is a flag: when it is 0, ``n >> 1`` bytes of blob follow;
otherwise the entry refers to de-duplicated blob number ``n >> 1``.
"""

from __future__ import annotations

import enum
from collections import Counter
from collections.abc import Iterable, Iterator

_NEXT_MASK = 0b1000_0000
_VAL_MASK = 0b0111_1111
_MAX_VLQ_BYTES = 4


class BlobErrorKind(enum.Enum):
    """Kinds of failure when reading blob storage."""

    INVALID_VLQ = "decoded VLQ number is too big"
    INVALID_INDEX = "invalid de-duplicated blob index"
    UNEXPECTED_END = "unexpected end of data"
    NOT_ENOUGH_ELEMENTS = "not enough elements for a group of blobs"


class BlobError(ValueError):
    """Malformed blob storage data."""

    def __init__(self, kind: BlobErrorKind, pos: int | None = None) -> None:
        super().__init__(kind.value)
        self.kind = kind
        self.pos = pos


def read_vlq(data: bytes, pos: int) -> tuple[int, int]:
    """Read a git-flavoured VLQ starting at ``pos``.

    Returns the value and the position just after it.  Values longer than
    four bytes are rejected with ``INVALID_VLQ``; the error's ``pos`` is the
    position after the bytes that were consumed.
    """
    consumed = 0
    value = 0
    more = True
    while more:
        if consumed == _MAX_VLQ_BYTES:
            raise BlobError(BlobErrorKind.INVALID_VLQ, pos)
        if pos >= len(data):
            raise BlobError(BlobErrorKind.UNEXPECTED_END, pos)
        byte = data[pos]
        pos += 1
        part = byte & _VAL_MASK
        value = part if consumed == 0 else ((value + 1) << 7) + part
        consumed += 1
        more = bool(byte & _NEXT_MASK)
    return value, pos


def encode_vlq(value: int) -> bytes:
    """Encode ``value`` as a git-flavoured VLQ of at most four bytes."""
    if value < 0:
        raise ValueError("integer must not be negative")
    out = [value & _VAL_MASK]
    value >>= 7
    while value:
        if len(out) == _MAX_VLQ_BYTES:
            raise ValueError("integer is too big")
        value -= 1
        out.append(_NEXT_MASK | (value & _VAL_MASK))
        value >>= 7
    return bytes(reversed(out))


def _index_rank(blob: bytes, counts: Counter) -> tuple[int, int]:
    if blob == b"\x00":
        kind = 2
    elif blob == b"\x01":
        kind = 1
    else:
        kind = 0
    return kind, counts[blob]


def encode_blobs(blobs: Iterable[bytes]) -> tuple[bytes, int]:
    """Encode ``blobs`` in the storage format.

    Non-empty blobs that occur more than once are placed in the
    de-duplication index.  Returns the encoded data and the index length.
    """
    blobs = [bytes(blob) for blob in blobs]
    counts = Counter(blob for blob in blobs if blob)

    index = sorted(blob for blob, count in counts.items() if count > 1)
    index.sort(key=lambda blob: _index_rank(blob, counts))
    index.reverse()
    positions = {blob: i for i, blob in enumerate(index)}

    out = bytearray(encode_vlq(len(index)))
    for entry in index:
        out += encode_vlq(len(entry))
        out += entry

    for blob in blobs:
        dup_pos = positions.get(blob)
        if dup_pos is not None:
            out += encode_vlq((dup_pos << 1) + 1)
        else:
            out += encode_vlq(len(blob) << 1)
            out += blob

    return bytes(out), len(index)


class BlobIterator:
    """Iterator over the blobs stored in ``data``.

    After an error is raised the iterator is exhausted.
    """

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        count, pos = read_vlq(data, 0)
        dedup = []
        for _ in range(count):
            size, pos = read_vlq(data, pos)
            end = pos + size
            if end > len(data):
                raise BlobError(BlobErrorKind.UNEXPECTED_END, pos)
            dedup.append(data[pos:end])
            pos = end
        self._dedup = tuple(dedup)
        self._data = data[pos:]
        self._pos = 0

    def __iter__(self) -> BlobIterator:
        return self

    def __next__(self) -> bytes:
        if self._pos >= len(self._data):
            raise StopIteration
        try:
            return self._read()
        except BlobError:
            self._exhaust()
            raise

    def _read(self) -> bytes:
        value, self._pos = read_vlq(self._data, self._pos)
        is_ref = value & 1
        value >>= 1
        if is_ref:
            if value >= len(self._dedup):
                raise BlobError(BlobErrorKind.INVALID_INDEX, self._pos)
            return self._dedup[value]
        start = self._pos
        end = start + value
        if end > len(self._data):
            raise BlobError(BlobErrorKind.UNEXPECTED_END, start)
        self._pos = end
        return self._data[start:end]

    def _exhaust(self) -> None:
        self._pos = len(self._data)


class BlobNIterator:
    """Iterator over consecutive groups of ``n`` blobs stored in ``data``."""

    def __init__(self, data: bytes, n: int) -> None:
        if n < 1:
            raise ValueError("group size must be at least 1")
        self._inner = BlobIterator(data)
        self._n = n

    def __iter__(self) -> BlobNIterator:
        return self

    def __next__(self) -> tuple[bytes, ...]:
        group = []
        for i in range(self._n):
            try:
                group.append(next(self._inner))
            except StopIteration:
                if i == 0:
                    raise
                self._inner._exhaust()
                raise BlobError(BlobErrorKind.NOT_ENOUGH_ELEMENTS) from None
        return tuple(group)


def iter_blobs(data: bytes) -> Iterator[bytes]:
    """Convenience generator over the blobs stored in ``data``."""
    yield from BlobIterator(data)