"""Recursive Length Prefix (RLP) encoder.

Encodes two kinds of values:
- byte strings (``bytes``, ``bytearray``, ``memoryview``; unsigned ``int``
  is encoded as its minimal big-endian byte string)
- lists (``list`` / ``tuple``) of values, nested arbitrarily

Encoding rules:
- single byte < 0x80         -> the byte itself
- byte string, len 0..55     -> 0x80 + len, bytes
- byte string, len > 55      -> 0xB7 + len(len_be), len_be, bytes
- list, payload 0..55        -> 0xC0 + len, payload
- list, payload > 55         -> 0xF7 + len(len_be), len_be, payload

Lists are encoded bottom-up: every child is encoded first, then the header is
chosen from the summed child lengths. No backpatching.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

from genalloc.errors import EncodingError, EncodingOverflow

RlpValue = Union[bytes, bytearray, memoryview, int, Sequence["RlpValue"]]

SHORT_STRING_OFFSET = 0x80
LONG_STRING_OFFSET = 0xB7
SHORT_LIST_OFFSET = 0xC0
LONG_LIST_OFFSET = 0xF7

SHORT_PAYLOAD_MAX = 55
"""Largest length that still fits in the one-byte header."""

MAX_LENGTH = 256**8 - 1
"""Largest length expressible with 8 length bytes (0xBF - 0xB7 == 8)."""


def int_to_big_endian(value: int) -> bytes:
    """Minimal big-endian bytes of a non-negative int; 0 -> b''."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"expected int, got {type(value).__name__}")
    if value < 0:
        raise EncodingError(f"cannot encode negative integer {value}")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def encode_length(length: int, offset: int) -> bytes:
    """Build the header for a payload of ``length`` bytes.

    Args:
        length: Payload length in bytes
        offset: SHORT_STRING_OFFSET or SHORT_LIST_OFFSET

    Raises:
        EncodingOverflow: If length needs more than 8 length bytes
    """
    if length <= SHORT_PAYLOAD_MAX:
        return bytes([offset + length])
    if length > MAX_LENGTH:
        raise EncodingOverflow(f"length {length} exceeds RLP maximum {MAX_LENGTH}")
    length_be = int_to_big_endian(length)
    return bytes([offset + SHORT_PAYLOAD_MAX + len(length_be)]) + length_be


def encode_bytes(data: bytes | bytearray | memoryview) -> bytes:
    """Encode a byte string."""
    raw = bytes(data)
    if len(raw) == 1 and raw[0] < SHORT_STRING_OFFSET:
        return raw
    return encode_length(len(raw), SHORT_STRING_OFFSET) + raw


def encode_int(value: int) -> bytes:
    """Encode an unsigned integer (0 encodes as the empty string, 0x80)."""
    return encode_bytes(int_to_big_endian(value))


def encode_list(items: Sequence[RlpValue]) -> bytes:
    """Encode a list: children first, then the header over their total length."""
    children = [encode(item) for item in items]
    payload = b"".join(children)
    return encode_length(len(payload), SHORT_LIST_OFFSET) + payload


def encode(value: RlpValue) -> bytes:
    """Encode a byte string, unsigned int, or (nested) list.

    Raises:
        EncodingError: For unsupported types (str, bool, None, floats, ...)
            and negative integers
        EncodingOverflow: If any length exceeds the representable range
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return encode_bytes(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return encode_int(value)
    if isinstance(value, (list, tuple)):
        return encode_list(value)
    raise EncodingError(f"cannot RLP-encode value of type {type(value).__name__}")
