"""Decimal text <-> int conversion without the interpreter's int/str digit limit.

``int(s)`` and ``str(n)`` refuse values above ``sys.get_int_max_str_digits()``
(4300 by default). Balances are arbitrary precision, so both directions work
in chunks that each stay below that limit.
"""

from __future__ import annotations

DIGIT_CHUNK = 1000
_CHUNK_BASE = 10**DIGIT_CHUNK


def decimal_to_int(digits: str) -> int:
    """Convert a string of ASCII decimal digits (already validated) to int."""
    value = 0
    for start in range(0, len(digits), DIGIT_CHUNK):
        chunk = digits[start : start + DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def int_to_decimal(value: int) -> str:
    """Render a non-negative int as decimal text."""
    if value < _CHUNK_BASE:
        return str(value)
    chunks: list[str] = []
    while value:
        value, low = divmod(value, _CHUNK_BASE)
        chunks.append(str(low))
    head, *rest = reversed(chunks)
    return head + "".join(chunk.zfill(DIGIT_CHUNK) for chunk in rest)
