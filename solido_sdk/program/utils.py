"""Utility functions for the Solido program module."""

import struct

from Crypto.Hash import SHA256

from .errors import FieldOverflowError

U8_MAX = 0xFF
U32_MAX = 0xFFFFFFFF
U64_MAX = 0xFFFFFFFFFFFFFFFF


def sha256(data: bytes) -> bytes:
    """Compute the SHA-256 hash of data."""
    h = SHA256.new()
    h.update(data)
    return h.digest()


def _check_range(value: int, max_value: int, name: str) -> None:
    if not 0 <= value <= max_value:
        raise FieldOverflowError(name, value, max_value)


def encode_u8(value: int, name: str = "u8") -> bytes:
    """Encode an unsigned 8-bit integer.

    Raises:
        FieldOverflowError: If value is out of range [0, 255]
    """
    _check_range(value, U8_MAX, name)
    return struct.pack("<B", value)


def encode_u32(value: int, name: str = "u32") -> bytes:
    """Encode an unsigned 32-bit integer (little-endian).

    Raises:
        FieldOverflowError: If value is out of range [0, 4294967295]
    """
    _check_range(value, U32_MAX, name)
    return struct.pack("<I", value)


def encode_u64(value: int, name: str = "u64") -> bytes:
    """Encode an unsigned 64-bit integer (little-endian).

    Raises:
        FieldOverflowError: If value is out of range [0, 2^64-1]
    """
    _check_range(value, U64_MAX, name)
    return struct.pack("<Q", value)


def decode_u8(data: bytes, offset: int = 0) -> int:
    """Decode an unsigned 8-bit integer."""
    return struct.unpack_from("<B", data, offset)[0]


def decode_u32(data: bytes, offset: int = 0) -> int:
    """Decode an unsigned 32-bit integer (little-endian)."""
    return struct.unpack_from("<I", data, offset)[0]


def decode_u64(data: bytes, offset: int = 0) -> int:
    """Decode an unsigned 64-bit integer (little-endian)."""
    return struct.unpack_from("<Q", data, offset)[0]
