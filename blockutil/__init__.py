"""Helpers for block-oriented cryptography: blob storage and its converter, block buffers, paddings, GF(2^n) doubling and conditional moves."""

__version__ = "0.1.0"

__all__ = [
    "blobby",
    "block_buffer",
    "cmov",
    "convert",
    "dbl",
    "padding",
    "read_buffer",
]