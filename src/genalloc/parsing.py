"""Balance and address parsing.

- Balances: ASCII decimal digits only, arbitrary precision, bounded by
  ``max_bits`` (256 by default, the width of an EVM balance word).
- Addresses: exactly 40 hex characters, case-insensitive, optional
  ``0x``/``0X`` prefix. Short addresses are rejected, never zero-padded.
"""

from __future__ import annotations

import re

from genalloc.contracts import ADDRESS_LENGTH
from genalloc.errors import InvalidAddress, InvalidBalance
from genalloc.numeric import decimal_to_int

DEFAULT_MAX_BALANCE_BITS = 256

_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_ADDRESS_RE = re.compile(r"(?:0[xX])?([0-9a-fA-F]{%d})" % (ADDRESS_LENGTH * 2))


def parse_balance(text: str, *, max_bits: int | None = DEFAULT_MAX_BALANCE_BITS) -> int:
    """Parse a decimal balance string.

    Args:
        text: Decimal digits, e.g. ``"1000000000000000000"``
        max_bits: Upper bound on the value's bit length (None = unbounded)

    Raises:
        InvalidBalance: Empty, non-digit (incl. sign, whitespace, hex), or too large
    """
    if not isinstance(text, str):
        raise InvalidBalance(f"balance must be a string, got {type(text).__name__}")
    if not text:
        raise InvalidBalance("balance is empty")
    if _DECIMAL_RE.fullmatch(text) is None:
        raise InvalidBalance(f"balance {text!r} is not a non-negative decimal integer")
    digits = text.lstrip("0")
    if max_bits is not None and len(digits) > max_bits // 3 + 1:
        raise InvalidBalance(f"balance {_preview(text)} exceeds {max_bits} bits")
    value = decimal_to_int(digits)
    if max_bits is not None and value.bit_length() > max_bits:
        raise InvalidBalance(f"balance {_preview(text)} exceeds {max_bits} bits")
    return value


def _preview(text: str) -> str:
    if len(text) <= 40:
        return repr(text)
    return f"{text[:20]!r}... ({len(text)} digits)"


def normalize_address(text: str) -> bytes:
    """Normalize an address string to its 20-byte key.

    Raises:
        InvalidAddress: Wrong length, non-hex characters, or not a string
    """
    if not isinstance(text, str):
        raise InvalidAddress(f"address must be a string, got {type(text).__name__}")
    match = _HEX_ADDRESS_RE.fullmatch(text)
    if match is None:
        raise InvalidAddress(
            f"address {text!r} must be {ADDRESS_LENGTH * 2} hex characters, optionally 0x-prefixed"
        )
    return bytes.fromhex(match.group(1))


def format_address(key: bytes) -> str:
    """Render a 20-byte key as lowercase 0x-prefixed hex."""
    return "0x" + key.hex()
