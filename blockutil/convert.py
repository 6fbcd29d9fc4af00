"""Convert between hex lines and the blob storage format."""

from __future__ import annotations

import binascii
import sys
from collections.abc import Iterable, Sequence
from typing import BinaryIO, TextIO

from .blobby import BlobError, BlobIterator, encode_blobs

_USAGE = "usage: convert (encode|decode) <input> <output>"


def _decode_hex(line: str) -> bytes:
    try:
        return binascii.unhexlify(line)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex data: {exc}") from exc


def _strip_line_end(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def encode_lines(reader: Iterable[str], writer: BinaryIO) -> int:
    """Encode hex lines from ``reader`` into ``writer``.

    Prints the index length and returns the number of bytes written.
    """
    blobs = [_decode_hex(_strip_line_end(line)) for line in reader]
    data, idx_len = encode_blobs(blobs)
    print(f"Index len: {idx_len}")
    writer.write(data)
    return len(data)


def decode_blobs(reader: BinaryIO, writer: BinaryIO) -> int:
    """Write each blob stored in ``reader`` as a hex line into ``writer``.

    Returns the number of blobs written.
    """
    data = reader.read()
    count = 0
    try:
        for blob in BlobIterator(data):
            writer.write(blob.hex().encode("ascii"))
            writer.write(b"\n")
            count += 1
    except BlobError as exc:
        raise ValueError(f"invalid blobby data: {exc.kind.name}") from exc
    return count


def main(argv: Sequence[str] | None = None) -> int:
    """Run the converter: ``(encode|decode) <input> <output>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print(_USAGE, file=sys.stderr)
        return 2
    mode, in_path, out_path = args[0], args[1], args[2]
    if mode not in ("encode", "decode"):
        print("Error: unknown mode", file=sys.stderr)
        return 1

    try:
        if mode == "encode":
            with open(in_path, encoding="utf-8", newline="") as src, open(
                out_path, "wb"
            ) as dst:
                count = encode_lines(src, dst)
        else:
            with open(in_path, "rb") as src, open(out_path, "wb") as dst:
                count = decode_blobs(src, dst)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Processed {count} record(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())