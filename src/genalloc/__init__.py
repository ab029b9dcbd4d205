"""GENALLOC - Canonical genesis allocation encoder.

Turns an address → balance mapping into a deterministic RLP byte string and
renders it as a hex-escaped source constant.

Note: version is sourced from package metadata (pyproject.toml).
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from genalloc.contracts import AllocItem, AllocResult, LedgerEntry
from genalloc.pipeline import build_allocation, decode_allocation


def _pkg_version() -> str:
    try:
        return version("genalloc")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _pkg_version()

__all__ = [
    "AllocItem",
    "AllocResult",
    "LedgerEntry",
    "__version__",
    "build_allocation",
    "decode_allocation",
]
