"""Record builder and canonical orderer.

Turns the raw address→balance mapping into ledger entries and imposes the
one total order the output depends on: ascending unsigned byte order of the
20-byte address. Input iteration order never reaches the output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from genalloc.contracts import DEFAULT_POLICY, AllocationPolicy, AllocItem, LedgerEntry
from genalloc.errors import AllocError, DuplicateAddress
from genalloc.parsing import DEFAULT_MAX_BALANCE_BITS, normalize_address, parse_balance

logger = logging.getLogger(__name__)


def build_entry(balance: int, policy: AllocationPolicy = DEFAULT_POLICY) -> LedgerEntry:
    """Build the ledger entry for one account under ``policy``."""
    return LedgerEntry(
        balance=balance,
        sequence_counter=policy.sequence_counter,
        code_reference=policy.code_reference,
    )


def build_items(
    mapping: Mapping[str, str],
    *,
    policy: AllocationPolicy = DEFAULT_POLICY,
    max_bits: int | None = DEFAULT_MAX_BALANCE_BITS,
) -> list[AllocItem]:
    """Parse, normalize and build one AllocItem per input record.

    Errors are re-raised with the offending record attached.

    Raises:
        InvalidAddress: Malformed address
        InvalidBalance: Malformed or oversized balance
        DuplicateAddress: Two records normalize to the same key
    """
    seen: dict[bytes, str] = {}
    items: list[AllocItem] = []
    for raw_address, raw_balance in mapping.items():
        try:
            key = normalize_address(raw_address)
            balance = parse_balance(raw_balance, max_bits=max_bits)
        except AllocError as e:
            raise type(e)(str(e), record=(str(raw_address), str(raw_balance))) from e

        if key in seen:
            raise DuplicateAddress(seen[key], raw_address)
        seen[key] = raw_address

        logger.debug(
            "Normalized %s -> 0x%s balance_bits=%d", raw_address, key.hex(), balance.bit_length()
        )
        items.append(AllocItem(address=key, entry=build_entry(balance, policy), source=raw_address))
    return items


def order_items(items: Iterable[AllocItem]) -> tuple[AllocItem, ...]:
    """Sort items by ascending unsigned lexicographic address bytes.

    Raises:
        DuplicateAddress: If two items share an address key
    """
    ordered = sorted(items, key=lambda item: item.address)
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.address == cur.address:
            raise DuplicateAddress(prev.source or prev.address_hex, cur.source or cur.address_hex)
    return tuple(ordered)
