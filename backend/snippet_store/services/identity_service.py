"""Deterministic, UUID-shaped identifiers for snippets and folders.

Identifiers are derived only from names, so the same folder or file always
maps to the same id across calls and process restarts without a stored
mapping. The hash space is 32 bits: collisions are possible on large corpora
and the ids carry no cryptographic meaning, they merely pass UUID validators.
"""

import uuid

SQL_EXTENSION = ".sql"

_LCG_MULTIPLIER = 1103515245
_LCG_INCREMENT = 12345
_LCG_MASK = 0x7FFFFFFF  # mod 2^31


def _to_int32(value: int) -> int:
    """Wrap an integer to signed 32-bit two's complement."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def simple_hash(value: str) -> int:
    """Rolling ``h * 31 + codepoint`` hash with signed 32-bit wraparound.

    The absolute value is returned, except for -2**31 which has no positive
    counterpart in 32 bits and is returned unchanged.
    """
    h = 0
    for ch in value:
        h = _to_int32((h << 5) - h + ord(ch))
    if h < 0:
        h = _to_int32(-h)
    return h


def deterministic_uuid(parts: list[str]) -> str:
    """Build a reproducible UUID-shaped string from an ordered list of parts.

    Empty parts are dropped and the rest joined with ``_``. If nothing is
    left a random uuid4 is returned; that is the only non-deterministic path.
    """
    joined = "_".join(part for part in parts if part)
    if not joined:
        return str(uuid.uuid4())

    seed = simple_hash(joined) & 0xFFFFFFFF
    out = bytearray(16)
    for i in range(16):
        seed = (seed * _LCG_MULTIPLIER + _LCG_INCREMENT) & _LCG_MASK
        out[i] = (seed >> 16) & 0xFF

    # Version 4 / RFC 4122 variant bits
    out[6] = (out[6] & 0x0F) | 0x40
    out[8] = (out[8] & 0x3F) | 0x80
    return str(uuid.UUID(bytes=bytes(out)))


def folder_identity(folder_name: str) -> str:
    """Identifier of the top-level folder with this directory name."""
    return deterministic_uuid([folder_name])


def snippet_identity(name: str, folder_id: str | None = None) -> str:
    """Identifier of snippet ``name`` (without extension) inside ``folder_id``.

    Foldered snippets hash the folder's identifier, which is itself a pure
    function of the folder name.
    """
    filename = name + SQL_EXTENSION
    if folder_id is not None:
        return deterministic_uuid([folder_id, filename])
    return deterministic_uuid([filename])
