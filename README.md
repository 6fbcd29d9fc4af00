# blockutil

Small, dependency-free helpers for code that processes data in fixed-size
blocks.

## Modules

- `blockutil.blobby`: a compact binary format for a sequence of byte blobs.
  Numbers are git-flavoured variable-length quantities of at most four bytes
  (`encode_vlq`, `read_vlq`). Non-empty blobs that occur more than once are
  de-duplicated into an index at the start of the data. `encode_blobs`
  returns the encoded data and the index length; `BlobIterator` yields the
  blobs one by one, `BlobNIterator` yields them as tuples of `n`, and
  `iter_blobs` is a generator over the blobs. Malformed data raises
  `BlobError` (a `ValueError`), whose `kind` is a `BlobErrorKind`. After an
  error the iterator is exhausted.
- `blockutil.convert`: `encode_lines` turns hex text lines into the blob
  format, `decode_blobs` turns the blob format back into hex lines, and
  `main` runs them from the command line.
- `blockutil.dbl`: `dbl` and `inv_dbl` multiply and divide 8-, 16- or
  32-byte big-endian blocks by x in GF(2^n). Other sizes raise `ValueError`.
- `blockutil.padding`: the padding schemes `ZeroPadding`, `Pkcs7`,
  `Iso10126`, `AnsiX923`, `Iso7816` and `NoPadding`, all subclasses of
  `Padding`. `pad(block, pos)` returns a new padded block built from the
  first `pos` bytes of `block`; `unpad(block)` returns the message data;
  `unpad_blocks(blocks)` joins equally sized blocks and unpads the last one.
  Each scheme's `TYPE` is a `PadType`. Malformed padding raises `UnpadError`.
  `Iso10126` pads with the same bytes as `Pkcs7` and, when unpadding, checks
  only the last byte.
- `blockutil.cmov`: selection with bit masks: `cmovnz` and `cmovz` return
  `value` or `current` depending on a byte condition; `cmoveq` and `cmovne`
  return `input` or `output` depending on whether two integers, or two
  sequences of integers, are equal.
- `blockutil.block_buffer`: `EagerBuffer` and `LazyBuffer`, subclasses of
  `BlockBuffer`, collect input through `digest_blocks` and pass completed
  blocks to a `compress` callable as a list of blocks. An eager buffer
  processes a block as soon as it is full; a lazy buffer keeps a full block
  until more data arrives. `EagerBuffer` also has `digest_pad`,
  `len64_padding_be`, `len64_padding_le` and `len128_padding_be`. Both can be
  serialized to bytes and restored with `deserialize`; invalid data or state
  raises `BlockBufferError`. Block sizes range from 1 to 255 bytes.
- `blockutil.read_buffer`: `ReadBuffer` hands out bytes from blocks produced
  on demand: `read(n, gen_block)` calls `gen_block()` for each new block it
  needs and keeps the unread rest. It also supports `serialize` and
  `deserialize`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

`blobby-convert` converts between a text file of hex lines and the binary
blob format:

```
blobby-convert encode vectors.txt vectors.blb
blobby-convert decode vectors.blb vectors.txt
```

Encoding prints the number of de-duplicated index entries; both directions
print how many records were processed (bytes written when encoding, blobs
when decoding). A mode other than `encode` or `decode`, invalid hex or
invalid blob data is reported as an error with exit status 1; missing
arguments print a usage line and exit with status 2.

## Examples

Padding a block with PKCS#7 and removing it again:

```python
from blockutil.padding import Pkcs7

padded = Pkcs7().pad(b"test\xff\xff\xff\xff", 4)
assert padded == b"test\x04\x04\x04\x04"
assert Pkcs7().unpad(padded) == b"test"
```

Feeding data through an eager block buffer:

```python
from blockutil.block_buffer import EagerBuffer

blocks = []
buf = EagerBuffer(4)
buf.digest_blocks(b"01234567", blocks.extend)
assert blocks == [b"0123", b"4567"]
```

Storing and reading back blobs:

```python
from blockutil.blobby import BlobIterator, encode_blobs

data, index_len = encode_blobs([b"hello", b"world", b"hello"])
assert index_len == 1
assert list(BlobIterator(data)) == [b"hello", b"world", b"hello"]
```

## What it does not do

The package provides building blocks only: it contains no cipher or hash
function of its own, and `Iso10126` does not write random padding bytes.