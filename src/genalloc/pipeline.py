"""Allocation pipeline.

1. Parses balances and normalizes addresses (per record)
2. Builds ledger entries under the allocation policy
3. Orders items by address bytes
4. RLP-encodes the ordered list of [address, [nonce, balance, code_ref]]
5. Produces a deterministic output digest

Fail-fast: the first invalid record aborts the run.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping

from genalloc import rlp
from genalloc.contracts import DEFAULT_POLICY, AllocationPolicy, AllocItem, AllocResult
from genalloc.errors import DecodingError
from genalloc.parsing import DEFAULT_MAX_BALANCE_BITS
from genalloc.records import build_items, order_items

logger = logging.getLogger(__name__)


def compute_digest(encoded: bytes) -> str:
    """Short sha256 digest of the encoded allocation."""
    return hashlib.sha256(encoded).hexdigest()[:16]


def encode_items(items: tuple[AllocItem, ...]) -> bytes:
    """RLP-encode already ordered items as the top-level list."""
    return rlp.encode([item.to_rlp_items() for item in items])


def build_allocation(
    mapping: Mapping[str, str],
    *,
    policy: AllocationPolicy = DEFAULT_POLICY,
    max_bits: int | None = DEFAULT_MAX_BALANCE_BITS,
) -> AllocResult:
    """Run the whole pipeline on an address→balance mapping.

    Args:
        mapping: Raw address string → decimal balance string
        policy: Per-account nonce / code reference policy
        max_bits: Balance sanity bound in bits (None = unbounded)

    Returns:
        AllocResult with ordered items, encoded bytes and digest
    """
    items = order_items(build_items(mapping, policy=policy, max_bits=max_bits))
    encoded = encode_items(items)
    result = AllocResult(items=items, encoded=encoded, digest=compute_digest(encoded))
    logger.info(
        "Encoded %d accounts into %d bytes (digest %s)",
        len(items),
        len(encoded),
        result.digest,
    )
    return result


def decode_allocation(data: bytes) -> tuple[AllocItem, ...]:
    """Decode an encoded allocation and check it is in canonical order.

    Raises:
        DecodingError: Malformed RLP, wrong shape, or addresses not strictly ascending
    """
    decoded = rlp.decode(data)
    if not isinstance(decoded, list):
        raise DecodingError("allocation must be an RLP list")
    items = tuple(AllocItem.from_rlp_items(raw) for raw in decoded)
    for prev, cur in zip(items, items[1:]):
        if prev.address >= cur.address:
            raise DecodingError(
                f"allocation is not in canonical order: {prev.address_hex} before {cur.address_hex}"
            )
    return items
