"""Allocation exception hierarchy.

Every stage of the allocation pipeline fails fast: the first error aborts the
run and nothing is written. A partially encoded genesis allocation is worse
than no output at all, so none of these errors are retryable.

Exception hierarchy:
- AllocError (base)
  - InvalidBalance (balance is not pure non-negative decimal digits)
  - InvalidAddress (address does not resolve to exactly 20 bytes of hex)
  - DuplicateAddress (two records normalize to the same 20-byte key)
  - EncodingError (value cannot be RLP-encoded)
    - EncodingOverflow (a length exceeds the representable range)
  - DecodingError (malformed or non-canonical RLP input)
  - AllocDocumentError (input document has the wrong shape)
  - ArtifactFormatError (constant artifact text is malformed)
"""

from __future__ import annotations


class AllocError(Exception):
    """Base exception for all allocation errors.

    Attributes:
        record: ``(address, balance)`` of the offending record, if known
    """

    def __init__(self, message: str, record: tuple[str, str] | None = None) -> None:
        self.record = record
        if record is not None:
            message = f"{message} (record: address={record[0]!r}, balance={record[1]!r})"
        super().__init__(message)


class InvalidBalance(AllocError):  # noqa: N818 - domain name
    """Balance string is empty, contains non-digits, or exceeds the sanity bound."""


class InvalidAddress(AllocError):  # noqa: N818 - domain name
    """Address string is not 40 hex characters (optionally ``0x``-prefixed)."""


class DuplicateAddress(AllocError):  # noqa: N818 - domain name
    """Two input records normalize to the same address key.

    Attributes:
        first: Raw spelling of the address seen first
        second: Raw spelling of the colliding address
    """

    def __init__(self, first: str, second: str) -> None:
        self.first = first
        self.second = second
        if first == second:
            msg = f"duplicate address {first!r}"
        else:
            msg = f"duplicate address: {first!r} and {second!r} normalize to the same key"
        super().__init__(msg)


class EncodingError(AllocError):
    """Value has a type or sign the encoder does not support."""


class EncodingOverflow(EncodingError):  # noqa: N818 - domain name
    """A byte-string or list length does not fit in 8 length bytes."""


class DecodingError(AllocError):
    """RLP input is truncated, has trailing bytes, or is non-canonical."""


class AllocDocumentError(AllocError):
    """Input document is not a mapping of address to balance."""


class ArtifactFormatError(AllocError):
    """Constant artifact text does not match ``const <name> = "<escapes>"``."""
