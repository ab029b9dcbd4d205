"""Input document loading and artifact writing.

Input documents (JSON, or YAML by ``.yml``/``.yaml`` suffix) may be:
- a flat mapping:          {"0xabc...": "100"}
- a genesis alloc mapping: {"0xabc...": {"balance": "100"}}
- a full genesis document with a top-level "alloc" mapping

Balances are handed to the core as strings. JSON integers are accepted and
converted to their decimal form; floats and booleans are rejected.

Artifacts are written atomically (tmp file + os.replace): either the whole
constant lands on disk or nothing does.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from genalloc.errors import AllocDocumentError, DuplicateAddress
from genalloc.numeric import int_to_decimal

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yml", ".yaml"})


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in pairs:
        if key in out:
            raise DuplicateAddress(key, key)
        out[key] = value
    return out


def _balance_text(address: str, value: Any) -> str:
    if isinstance(value, dict):
        if "balance" not in value:
            raise AllocDocumentError(f"account {address!r} has no 'balance' field")
        value = value["balance"]
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise AllocDocumentError(
            f"account {address!r} balance must be a decimal string, got {type(value).__name__}"
        )
    if isinstance(value, int):
        return int_to_decimal(value)
    return value


def extract_alloc(doc: Any) -> dict[str, str]:
    """Reduce a parsed document to address → balance-string.

    Raises:
        AllocDocumentError: If the document is not a mapping of accounts
    """
    if not isinstance(doc, dict):
        raise AllocDocumentError(f"allocation document must be a mapping, got {type(doc).__name__}")
    if "alloc" in doc and isinstance(doc["alloc"], dict):
        doc = doc["alloc"]
    alloc: dict[str, str] = {}
    for address, value in doc.items():
        # YAML reads unquoted 0x... keys as integers
        if not isinstance(address, str):
            raise AllocDocumentError(
                f"address keys must be strings, got {type(address).__name__} {address!r} "
                "(quote hex addresses in YAML)"
            )
        alloc[address] = _balance_text(address, value)
    return alloc


def load_alloc_document(path: Path) -> dict[str, str]:
    """Load an allocation document from disk.

    Raises:
        OSError: If the file cannot be read
        AllocDocumentError: If the file is not valid JSON/YAML or has the wrong shape
        DuplicateAddress: If a JSON document repeats an address key verbatim
    """
    text = path.read_text(encoding="utf-8")
    # ValueError also covers integer literals past the int/str digit limit
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            doc = yaml.safe_load(text)
        else:
            doc = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except (ValueError, yaml.YAMLError) as e:
        raise AllocDocumentError(f"cannot parse {path}: {e}") from e
    alloc = extract_alloc(doc)
    logger.info("Loaded %d accounts from %s", len(alloc), path)
    return alloc


def write_artifact(path: Path, text: str) -> None:
    """Write text atomically: tmp file + os.replace. Appends a trailing newline."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(text + "\n", encoding="utf-8")
        tmp.replace(path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    logger.info("Wrote %s", path)


def read_artifact(path: Path) -> str:
    """Read a previously written artifact."""
    return path.read_text(encoding="utf-8")
