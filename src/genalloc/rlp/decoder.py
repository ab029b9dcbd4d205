"""Strict RLP decoder.

Inverse of :mod:`genalloc.rlp.encoder`. Only canonical encodings are
accepted, so ``encode(decode(data)) == data`` for every input that decodes.

Rejected:
- empty, truncated, or (in strict mode) trailing input
- a single byte < 0x80 wrapped in a 0x81 header
- long-form headers for lengths <= 55
- length fields with leading zero bytes
"""

from __future__ import annotations

from genalloc.errors import DecodingError
from genalloc.rlp.encoder import (
    LONG_LIST_OFFSET,
    LONG_STRING_OFFSET,
    SHORT_LIST_OFFSET,
    SHORT_PAYLOAD_MAX,
    SHORT_STRING_OFFSET,
)

Decoded = bytes | list["Decoded"]


def big_endian_to_int(data: bytes) -> int:
    """Big-endian bytes to int; b'' -> 0."""
    return int.from_bytes(data, "big")


def decode_int(data: bytes) -> int:
    """Decode a canonical unsigned integer byte string.

    Raises:
        DecodingError: If the byte string has a leading zero byte
    """
    if not isinstance(data, bytes):
        raise DecodingError("expected a byte string for an integer, got a list")
    if data[:1] == b"\x00":
        raise DecodingError(f"integer has leading zero byte: 0x{data.hex()}")
    return big_endian_to_int(data)


def _read_length(data: bytes, pos: int, num_bytes: int) -> int:
    end = pos + num_bytes
    if end > len(data):
        raise DecodingError(f"truncated length field at offset {pos}")
    field = data[pos:end]
    if field[0] == 0:
        raise DecodingError(f"length field has leading zero byte at offset {pos}")
    length = big_endian_to_int(field)
    if length <= SHORT_PAYLOAD_MAX:
        raise DecodingError(f"long-form header used for length {length} at offset {pos}")
    return length


def _consume_header(data: bytes, pos: int) -> tuple[bool, int, int]:
    """Parse the header at ``pos``.

    Returns:
        Tuple of (is_list, payload_start, payload_length)
    """
    prefix = data[pos]
    if prefix < SHORT_STRING_OFFSET:
        return False, pos, 1
    if prefix <= LONG_STRING_OFFSET:
        length = prefix - SHORT_STRING_OFFSET
        if length == 1 and pos + 1 < len(data) and data[pos + 1] < SHORT_STRING_OFFSET:
            raise DecodingError(f"single byte below 0x80 must not be prefixed at offset {pos}")
        return False, pos + 1, length
    if prefix < SHORT_LIST_OFFSET:
        num_bytes = prefix - LONG_STRING_OFFSET
        return False, pos + 1 + num_bytes, _read_length(data, pos + 1, num_bytes)
    if prefix <= LONG_LIST_OFFSET:
        return True, pos + 1, prefix - SHORT_LIST_OFFSET
    num_bytes = prefix - LONG_LIST_OFFSET
    return True, pos + 1 + num_bytes, _read_length(data, pos + 1, num_bytes)


def _decode_at(data: bytes, pos: int) -> tuple[Decoded, int]:
    if pos >= len(data):
        raise DecodingError(f"unexpected end of input at offset {pos}")
    is_list, start, length = _consume_header(data, pos)
    end = start + length
    if end > len(data):
        raise DecodingError(
            f"payload at offset {pos} needs {length} bytes, only {len(data) - start} available"
        )
    if not is_list:
        return data[start:end], end

    items: list[Decoded] = []
    cursor = start
    while cursor < end:
        item, cursor = _decode_at(data, cursor)
        if cursor > end:
            raise DecodingError(f"list item overruns list payload ending at offset {end}")
        items.append(item)
    return items, end


def decode(data: bytes | bytearray, *, strict: bool = True) -> Decoded:
    """Decode one RLP item.

    Args:
        data: Encoded bytes
        strict: If True, trailing bytes after the item raise DecodingError

    Returns:
        ``bytes`` for byte strings, ``list`` for lists (nested)
    """
    raw = bytes(data)
    if not raw:
        raise DecodingError("cannot decode empty input")
    item, end = _decode_at(raw, 0)
    if strict and end != len(raw):
        raise DecodingError(f"{len(raw) - end} trailing bytes after RLP item")
    return item
