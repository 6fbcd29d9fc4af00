import pytest

from blockutil.blobby import (
    BlobError,
    BlobErrorKind,
    BlobIterator,
    BlobNIterator,
    encode_blobs,
    encode_vlq,
    read_vlq,
)

DOC_BUF = b"\x02\x05hello\x06world!\x01\x02 \x00\x03\x06:::\x03\x01\x00"

VLQ_EXAMPLES = bytes(
    [
        0b0000_0000,
        0b0000_0010,
        0b0111_1111,
        0b1000_0000, 0b0000_0000,
        0b1111_1111, 0b0111_1111,
        0b1000_0000, 0b1000_0000, 0b0000_0000,
        0b1111_1111, 0b1111_1111, 0b0111_1111,
        0b1000_0000, 0b1000_0000, 0b1000_0000, 0b0000_0000,
        0b1111_1111, 0b1111_1111, 0b1111_1111, 0b0111_1111,
        0b1111_1111, 0b1111_1111, 0b1111_1111, 0b1111_1111, 0b0111_1111,
    ]
)

VLQ_TARGETS = [
    (0, 1),
    (2, 1),
    (127, 1),
    (128, 2),
    (16511, 2),
    (16512, 3),
    (2113663, 3),
    (2113664, 4),
    (270549119, 4),
]


def test_vlq_examples():
    pos = 0
    for value, size in VLQ_TARGETS:
        prev = pos
        got, pos = read_vlq(VLQ_EXAMPLES, pos)
        assert got == value
        assert pos - prev == size
        assert encode_vlq(value) == VLQ_EXAMPLES[prev:pos]

    with pytest.raises(BlobError) as info:
        read_vlq(VLQ_EXAMPLES, pos)
    assert info.value.kind is BlobErrorKind.INVALID_VLQ
    assert info.value.pos == 25


@pytest.mark.parametrize(
    "value",
    list(range(0, 20000)) + [2113662, 2113663, 2113664, 270549118, 270549119],
)
def test_vlq_round_trip(value):
    encoded = encode_vlq(value)
    assert read_vlq(encoded, 0) == (value, len(encoded))


def test_encode_vlq_too_big():
    with pytest.raises(ValueError):
        encode_vlq(270549120)


def test_read_vlq_unexpected_end():
    with pytest.raises(BlobError) as info:
        read_vlq(b"\x80", 0)
    assert info.value.kind is BlobErrorKind.UNEXPECTED_END


def test_doc_example_single():
    assert list(BlobIterator(DOC_BUF)) == [
        b"hello", b" ", b"", b"world!", b":::", b"world!", b"hello", b"",
    ]


def test_doc_example_pairs():
    assert list(BlobNIterator(DOC_BUF, 2)) == [
        (b"hello", b" "),
        (b"", b"world!"),
        (b":::", b"world!"),
        (b"hello", b""),
    ]


def test_doc_example_quads():
    assert list(BlobNIterator(DOC_BUF, 4)) == [
        (b"hello", b" ", b"", b"world!"),
        (b":::", b"world!", b"hello", b""),
    ]


def test_not_enough_elements():
    it = BlobNIterator(DOC_BUF, 3)
    assert next(it) == (b"hello", b" ", b"")
    assert next(it) == (b"world!", b":::", b"world!")
    with pytest.raises(BlobError) as info:
        next(it)
    assert info.value.kind is BlobErrorKind.NOT_ENOUGH_ELEMENTS
    with pytest.raises(StopIteration):
        next(it)


def test_invalid_index_stops_iteration():
    it = BlobIterator(b"\x00\x02a\x01\x02b")
    assert next(it) == b"a"
    with pytest.raises(BlobError) as info:
        next(it)
    assert info.value.kind is BlobErrorKind.INVALID_INDEX
    assert list(it) == []


def test_truncated_blob():
    it = BlobIterator(b"\x00\x02a\x04a")
    assert next(it) == b"a"
    with pytest.raises(BlobError) as info:
        next(it)
    assert info.value.kind is BlobErrorKind.UNEXPECTED_END
    assert list(it) == []


def test_truncated_dedup_entry():
    with pytest.raises(BlobError) as info:
        BlobIterator(b"\x01\x05ab")
    assert info.value.kind is BlobErrorKind.UNEXPECTED_END


def test_empty_data():
    with pytest.raises(BlobError) as info:
        BlobIterator(b"")
    assert info.value.kind is BlobErrorKind.UNEXPECTED_END


def test_group_size_must_be_positive():
    with pytest.raises(ValueError):
        BlobNIterator(DOC_BUF, 0)


@pytest.mark.parametrize(
    "blobs",
    [
        [],
        [b""],
        [b"hello", b" ", b"", b"world!", b":::", b"world!", b"hello", b""],
        [b"\x00", b"\x01", b"\x00", b"\x01", b"x" * 300, b"x" * 300],
        [bytes([i % 7]) * (i % 5) for i in range(100)],
    ],
)
def test_encode_round_trip(blobs):
    data, idx_len = encode_blobs(blobs)
    assert list(BlobIterator(data)) == blobs
    assert read_vlq(data, 0)[0] == idx_len


def test_encode_dedup_count():
    data, idx_len = encode_blobs([b"a", b"a", b"b", b"", b""])
    assert idx_len == 1
    assert list(BlobIterator(data)) == [b"a", b"a", b"b", b"", b""]


def test_encode_index_order():
    blobs = [b"x"] * 3 + [b"\x00"] * 2 + [b"\x01"] * 2
    data, idx_len = encode_blobs(blobs)
    assert idx_len == 3
    assert data[:7] == b"\x03\x01\x00\x01\x01\x01x"