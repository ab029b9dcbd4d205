"""Domain contracts for the genesis allocation pipeline.

These contracts are the data flowing through the pipeline:
  address/balance strings → AllocItem(address, LedgerEntry) → ordered items → RLP bytes

All contracts are:
- Immutable (frozen dataclasses)
- JSON-serializable (for inspection output)
- Validated on construction (invariants cannot be violated downstream)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from genalloc.errors import DecodingError, InvalidAddress, InvalidBalance
from genalloc.numeric import decimal_to_int, int_to_decimal
from genalloc.rlp import decode_int

ADDRESS_LENGTH = 20
CODE_REFERENCE_LENGTH = 32
EMPTY_CODE_REFERENCE = bytes(CODE_REFERENCE_LENGTH)
"""Code reference for accounts without executable code (32 zero bytes)."""


@dataclass(frozen=True)
class AllocationPolicy:
    """Fixed per-account policy applied by the record builder.

    Every genesis account starts with no activity and no code.
    """

    sequence_counter: int = 0
    code_reference: bytes = EMPTY_CODE_REFERENCE

    def __post_init__(self) -> None:
        if self.sequence_counter < 0:
            raise ValueError(f"sequence_counter must be >= 0, got {self.sequence_counter}")
        if len(self.code_reference) != CODE_REFERENCE_LENGTH:
            raise ValueError(
                f"code_reference must be {CODE_REFERENCE_LENGTH} bytes, "
                f"got {len(self.code_reference)}"
            )


DEFAULT_POLICY = AllocationPolicy()


@dataclass(frozen=True)
class LedgerEntry:
    """Account state at genesis: [sequence_counter, balance, code_reference]."""

    balance: int
    sequence_counter: int = 0
    code_reference: bytes = EMPTY_CODE_REFERENCE

    def __post_init__(self) -> None:
        if isinstance(self.balance, bool) or not isinstance(self.balance, int):
            raise InvalidBalance(f"balance must be an int, got {type(self.balance).__name__}")
        if self.balance < 0:
            raise InvalidBalance(f"balance must be >= 0, got {self.balance}")
        if isinstance(self.sequence_counter, bool) or not isinstance(self.sequence_counter, int):
            raise ValueError(
                f"sequence_counter must be an int, got {type(self.sequence_counter).__name__}"
            )
        if self.sequence_counter < 0:
            raise ValueError(f"sequence_counter must be >= 0, got {self.sequence_counter}")
        if len(self.code_reference) != CODE_REFERENCE_LENGTH:
            raise ValueError(
                f"code_reference must be {CODE_REFERENCE_LENGTH} bytes, "
                f"got {len(self.code_reference)}"
            )

    def to_rlp_items(self) -> list[Any]:
        """RLP shape: 3-element list [sequence_counter, balance, code_reference]."""
        return [self.sequence_counter, self.balance, self.code_reference]

    @classmethod
    def from_rlp_items(cls, items: Any) -> LedgerEntry:
        """Rebuild from a decoded 3-element list.

        Raises:
            DecodingError: If the shape or field widths are wrong
        """
        if not isinstance(items, list) or len(items) != 3:
            raise DecodingError("ledger entry must be a 3-element list")
        nonce_raw, balance_raw, code_reference = items
        if not isinstance(code_reference, bytes) or len(code_reference) != CODE_REFERENCE_LENGTH:
            raise DecodingError(f"code reference must be a {CODE_REFERENCE_LENGTH}-byte string")
        return cls(
            balance=decode_int(balance_raw),
            sequence_counter=decode_int(nonce_raw),
            code_reference=code_reference,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "sequence_counter": self.sequence_counter,
            "balance": int_to_decimal(self.balance),
            "code_reference": "0x" + self.code_reference.hex(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LedgerEntry:
        """Create from dict."""
        code_hex = d.get("code_reference", "0x" + EMPTY_CODE_REFERENCE.hex())
        return cls(
            balance=_balance_from_dict(d["balance"]),
            sequence_counter=int(d.get("sequence_counter", 0)),
            code_reference=bytes.fromhex(code_hex.removeprefix("0x")),
        )


def _balance_from_dict(value: Any) -> int:
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return decimal_to_int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise InvalidBalance(f"balance must be a decimal string, got {value!r}")


@dataclass(frozen=True)
class AllocItem:
    """One (address key, ledger entry) pair of the allocation."""

    address: bytes
    entry: LedgerEntry
    source: str = field(default="", compare=False)
    """Raw address spelling from the input document (diagnostics only)."""

    def __post_init__(self) -> None:
        if len(self.address) != ADDRESS_LENGTH:
            raise InvalidAddress(
                f"address key must be {ADDRESS_LENGTH} bytes, got {len(self.address)}"
            )

    @property
    def address_hex(self) -> str:
        """Lowercase 0x-prefixed address."""
        return "0x" + self.address.hex()

    def to_rlp_items(self) -> list[Any]:
        """RLP shape: 2-element list [address, entry]."""
        return [self.address, self.entry.to_rlp_items()]

    @classmethod
    def from_rlp_items(cls, items: Any) -> AllocItem:
        """Rebuild from a decoded 2-element list."""
        if not isinstance(items, list) or len(items) != 2:
            raise DecodingError("allocation item must be a 2-element list")
        address, entry = items
        if not isinstance(address, bytes) or len(address) != ADDRESS_LENGTH:
            raise DecodingError(f"address must be a {ADDRESS_LENGTH}-byte string")
        return cls(address=address, entry=LedgerEntry.from_rlp_items(entry))

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"address": self.address_hex, **self.entry.to_dict()}


@dataclass(frozen=True)
class AllocResult:
    """Output of one pipeline run.

    Attributes:
        items: Allocation items in canonical (ascending address) order
        encoded: RLP encoding of the items
        digest: Short sha256 of ``encoded`` for determinism checks
    """

    items: tuple[AllocItem, ...]
    encoded: bytes
    digest: str

    @property
    def total_balance(self) -> int:
        return sum(item.entry.balance for item in self.items)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "accounts": len(self.items),
            "total_balance": int_to_decimal(self.total_balance),
            "encoded_bytes": len(self.encoded),
            "digest": self.digest,
            "items": [item.to_dict() for item in self.items],
        }
