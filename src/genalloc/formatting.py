"""Hex-escape constant formatter.

Renders encoded bytes as a source constant::

    const allocData = "\\xf8\\x3b..."

Every byte is a ``\\xNN`` escape (lowercase hex). No trailing newline; the
file writer adds one.
"""

from __future__ import annotations

import re

from genalloc.errors import ArtifactFormatError

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_CONST_RE = re.compile(r'const ([A-Za-z_][A-Za-z0-9_]*) = "((?:\\x[0-9a-fA-F]{2})*)"')


def hex_escape(data: bytes) -> str:
    """Render every byte as a two-hex-digit ``\\xNN`` token."""
    return "".join(f"\\x{b:02x}" for b in data)


def render_const(name: str, data: bytes) -> str:
    """Wrap escaped bytes in ``const <name> = "..."``.

    Raises:
        ArtifactFormatError: If ``name`` is not a valid identifier
    """
    if _NAME_RE.fullmatch(name) is None:
        raise ArtifactFormatError(f"invalid constant name {name!r}")
    return f'const {name} = "{hex_escape(data)}"'


def parse_const(text: str) -> tuple[str, bytes]:
    """Parse a rendered constant back into (name, bytes).

    Surrounding whitespace (e.g. the writer's trailing newline) is ignored.

    Raises:
        ArtifactFormatError: If the text is not a rendered constant
    """
    match = _CONST_RE.fullmatch(text.strip())
    if match is None:
        raise ArtifactFormatError('artifact must look like: const <name> = "\\xNN..."')
    name, body = match.groups()
    return name, bytes.fromhex(body.replace("\\x", ""))
