"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "genalloc"

# {"0x00..01": {"balance": "100"}} -> [[addr, [0, 100, 32 zero bytes]]]
SINGLE_ACCOUNT_GOLDEN_HEX = (
    "f83b" "f839" "94" + "00" * 19 + "01" + "e3" "80" "64" "a0" + "00" * 32
)


@pytest.fixture
def golden_hex() -> str:
    """Expected encoding of the single-account fixture."""
    return SINGLE_ACCOUNT_GOLDEN_HEX


@pytest.fixture
def fixture_dir() -> Path:
    """Directory holding allocation document fixtures."""
    return FIXTURE_DIR


@pytest.fixture
def sample_mapping() -> dict[str, str]:
    """Address → balance mapping with mixed address spellings."""
    return {
        "0xffffffffffffffffffffffffffffffffffffffff": "1",
        "0x0000000000000000000000000000000000000001": "100",
        "0xDbDbdB2cBD23b783741e8d7fcF51e459b497e4a6": str(2**200),
        "e6716f9544a56c530d868e4bfbacb172315bdead": "0",
        "0x1a26338f0d905e295fccb71fa9ea849ffa12aaf4": "1000000000000000000",
    }
