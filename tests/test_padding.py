import pytest

from blockutil.padding import (
    AnsiX923,
    Iso7816,
    Iso10126,
    NoPadding,
    PadType,
    Pkcs7,
    UnpadError,
    ZeroPadding,
)

MSG = b"test"
BLOCK = MSG + b"\xff" * 4


@pytest.mark.parametrize(
    "scheme, padded, unpadded",
    [
        (ZeroPadding(), b"test\x00\x00\x00\x00", b"test"),
        (Pkcs7(), b"test\x04\x04\x04\x04", b"test"),
        (Iso10126(), b"test\x04\x04\x04\x04", b"test"),
        (AnsiX923(), b"test\x00\x00\x00\x04", b"test"),
        (Iso7816(), b"test\x80\x00\x00\x00", b"test"),
        (NoPadding(), b"test\xff\xff\xff\xff", b"test\xff\xff\xff\xff"),
    ],
)
def test_documented_examples(scheme, padded, unpadded):
    result = scheme.pad(BLOCK, len(MSG))
    assert result == padded
    assert scheme.unpad(result) == unpadded


@pytest.mark.parametrize("scheme", [Pkcs7(), Iso10126(), AnsiX923(), Iso7816()])
@pytest.mark.parametrize("pos", range(8))
def test_reversible_round_trip(scheme, pos):
    message = bytes(range(1, pos + 1))
    block = message + b"\xaa" * (8 - pos)
    padded = scheme.pad(block, pos)
    assert len(padded) == 8
    assert padded[:pos] == message
    assert scheme.unpad(padded) == message


@pytest.mark.parametrize("scheme", [Pkcs7(), Iso10126(), AnsiX923(), Iso7816()])
def test_reversible_rejects_full_block(scheme):
    with pytest.raises(ValueError):
        scheme.pad(b"12345678", 8)


@pytest.mark.parametrize("scheme", [ZeroPadding(), NoPadding()])
def test_full_block_allowed_for_zero_and_no_padding(scheme):
    assert scheme.pad(b"12345678", 8) == b"12345678"


@pytest.mark.parametrize("scheme", [ZeroPadding(), NoPadding()])
def test_pos_beyond_block_rejected(scheme):
    with pytest.raises(ValueError):
        scheme.pad(b"1234", 5)


@pytest.mark.parametrize("scheme", [Pkcs7(), Iso10126(), AnsiX923()])
def test_block_too_big_for_byte_count(scheme):
    with pytest.raises(ValueError):
        scheme.pad(bytes(256), 0)


def test_pkcs7_strict_vs_iso10126_lenient():
    block = b"test\x05\x06\x07\x04"
    with pytest.raises(UnpadError):
        Pkcs7().unpad(block)
    assert Iso10126().unpad(block) == b"test"


@pytest.mark.parametrize("scheme", [Pkcs7(), Iso10126(), AnsiX923()])
@pytest.mark.parametrize("last", [0, 9])
def test_invalid_count_byte(scheme, last):
    with pytest.raises(UnpadError):
        scheme.unpad(b"1234567" + bytes([last]))


def test_ansix923_rejects_nonzero_filler():
    with pytest.raises(UnpadError):
        AnsiX923().unpad(b"test\x00\x01\x00\x04")


@pytest.mark.parametrize("block", [bytes(8), b"test\x00\x01\x00\x00"])
def test_iso7816_rejects_malformed(block):
    with pytest.raises(UnpadError):
        Iso7816().unpad(block)


def test_zero_padding_strips_trailing_zeros_of_message():
    padded = ZeroPadding().pad(b"ab\x00\x00\xff\xff", 4)
    assert ZeroPadding().unpad(padded) == b"ab"


def test_unpad_error_is_value_error():
    with pytest.raises(ValueError):
        Pkcs7().unpad(b"\x00\x00")


@pytest.mark.parametrize("scheme", [Pkcs7(), AnsiX923(), Iso7816(), ZeroPadding()])
def test_unpad_blocks_round_trip(scheme):
    message = b"0123456789abc"
    full = [message[:8]]
    tail = message[8:]
    last = scheme.pad(tail + b"\xee" * (8 - len(tail)), len(tail))
    assert scheme.unpad_blocks(full + [last]) == message


def test_unpad_blocks_no_padding_keeps_everything():
    blocks = [b"abcdefgh", b"ijklmnop"]
    assert NoPadding().unpad_blocks(blocks) == b"".join(blocks)
    assert NoPadding().unpad_blocks([]) == b""


def test_unpad_blocks_empty():
    assert ZeroPadding().unpad_blocks([]) == b""
    with pytest.raises(UnpadError):
        Pkcs7().unpad_blocks([])


def test_unpad_blocks_propagates_error():
    with pytest.raises(UnpadError):
        Pkcs7().unpad_blocks([b"abcdefgh", b"abcdefg\x00"])


def test_unpad_blocks_rejects_mixed_sizes():
    with pytest.raises(ValueError):
        NoPadding().unpad_blocks([b"abcd", b"abc"])


def test_pad_types_govern_empty_unpad():
    reversible = Pkcs7()
    ambiguous = ZeroPadding()
    unpadded = NoPadding()
    assert reversible.TYPE is PadType.REVERSIBLE
    with pytest.raises(UnpadError):
        reversible.unpad_blocks([])
    assert ambiguous.TYPE is PadType.AMBIGUOUS
    assert ambiguous.unpad_blocks([]) == b""
    assert unpadded.TYPE is PadType.NO_PADDING
    assert unpadded.unpad_blocks([b"\x00\x00"]) == b"\x00\x00"