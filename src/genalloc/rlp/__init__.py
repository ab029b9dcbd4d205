"""Recursive Length Prefix codec.

Byte strings, unsigned integers and nested lists; canonical form only.
"""

from genalloc.rlp.decoder import big_endian_to_int, decode, decode_int
from genalloc.rlp.encoder import (
    RlpValue,
    encode,
    encode_bytes,
    encode_int,
    encode_length,
    encode_list,
    int_to_big_endian,
)

__all__ = [
    "RlpValue",
    "big_endian_to_int",
    "decode",
    "decode_int",
    "encode",
    "encode_bytes",
    "encode_int",
    "encode_length",
    "encode_list",
    "int_to_big_endian",
]
