"""Build configuration.

Environment variables:
    GENALLOC_CONST_NAME        Name of the emitted constant (default: allocData)
    GENALLOC_MAX_BALANCE_BITS  Balance sanity bound in bits; 0 disables (default: 256)
    GENALLOC_LOG_LEVEL         DEBUG / INFO / WARNING / ERROR (default: WARNING)

Explicit CLI values take precedence over the environment.

Design decisions:
- Unset / empty / whitespace → default value.
- strict=True (default): invalid values raise ``ConfigError``.
- strict=False: invalid values log a warning and fall back to the default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from genalloc.parsing import DEFAULT_MAX_BALANCE_BITS

logger = logging.getLogger(__name__)

ENV_CONST_NAME = "GENALLOC_CONST_NAME"
ENV_MAX_BALANCE_BITS = "GENALLOC_MAX_BALANCE_BITS"
ENV_LOG_LEVEL = "GENALLOC_LOG_LEVEL"

DEFAULT_CONST_NAME = "allocData"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})


class ConfigError(Exception):
    """Raised when an environment variable has an invalid value (strict mode)."""


def parse_int(
    name: str,
    default: int | None = None,
    *,
    min_value: int | None = None,
    strict: bool = True,
) -> int | None:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when unset or (in non-strict mode) unparseable.
        min_value: Optional lower bound (inclusive).
        strict: If *True*, invalid values raise :class:`ConfigError`.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    if v == "":
        return default
    try:
        result = int(v)
    except ValueError:
        if strict:
            raise ConfigError(f"invalid integer value for {name}: {raw!r}") from None
        logger.warning("Invalid integer value for %s: %r, using default %s", name, raw, default)
        return default
    if min_value is not None and result < min_value:
        if strict:
            raise ConfigError(f"{name}={result} is below minimum {min_value}")
        logger.warning("%s=%d is below minimum %d, using default %s", name, result, min_value, default)
        return default
    return result


def parse_enum(
    name: str,
    allowed: frozenset[str],
    default: str | None = None,
    *,
    strict: bool = True,
) -> str | None:
    """Parse a case-insensitive enum-like environment variable.

    Returns the canonical (as-in-*allowed*) form.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    if v == "":
        return default
    lookup = {a.lower(): a for a in allowed}
    match = lookup.get(v.lower())
    if match is not None:
        return match
    if strict:
        raise ConfigError(f"invalid value for {name}: {raw!r} (allowed: {sorted(allowed)})")
    logger.warning(
        "Invalid value for %s: %r (allowed: %s), using default %s",
        name,
        raw,
        sorted(allowed),
        default,
    )
    return default


@dataclass(frozen=True)
class BuildConfig:
    """Resolved build settings.

    Attributes:
        const_name: Name of the emitted constant
        max_balance_bits: Balance bound in bits (None = unbounded)
        log_level: Logging level name
    """

    const_name: str = DEFAULT_CONST_NAME
    max_balance_bits: int | None = DEFAULT_MAX_BALANCE_BITS
    log_level: str = DEFAULT_LOG_LEVEL


def load_config_from_env(
    const_name: str | None = None,
    max_balance_bits: int | None = None,
    log_level: str | None = None,
) -> BuildConfig:
    """Load build configuration; explicit arguments override the environment.

    A bit bound of 0 (from either source) disables the bound.

    Raises:
        ConfigError: If an environment variable is invalid
    """
    if const_name is None:
        const_name = os.environ.get(ENV_CONST_NAME, "").strip() or DEFAULT_CONST_NAME

    if max_balance_bits is None:
        max_balance_bits = parse_int(
            ENV_MAX_BALANCE_BITS, DEFAULT_MAX_BALANCE_BITS, min_value=0
        )
    elif max_balance_bits < 0:
        raise ConfigError(f"max balance bits must be >= 0, got {max_balance_bits}")

    if log_level is None:
        log_level = parse_enum(ENV_LOG_LEVEL, LOG_LEVELS, DEFAULT_LOG_LEVEL, strict=False)

    return BuildConfig(
        const_name=const_name,
        max_balance_bits=max_balance_bits or None,
        log_level=log_level or DEFAULT_LOG_LEVEL,
    )
