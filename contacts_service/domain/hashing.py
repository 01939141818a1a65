"""Stable 64-bit content hash.

Hash keys are persisted as the de-duplication key of every stored value, so
this mix and its constants must never change without rewriting stored rows
(see ``contacts_service.scripts.rehash_rows``).

The table is seeded with 0x544B2FBACAAF1684; hashing starts from
0xBB40E64DA205B064 and multiplies by 7664345821815920749 per byte, feeding
both bytes of every UTF-16 code unit (low byte first).
"""

from __future__ import annotations

_MASK = 0xFFFFFFFFFFFFFFFF

TABLE_SEED = 0x544B2FBACAAF1684
HSTART = 0xBB40E64DA205B064
HMULT = 7664345821815920749


def _build_table() -> tuple[int, ...]:
    table = []
    h = TABLE_SEED
    for _ in range(256):
        for _ in range(31):
            h = (h >> 7) ^ h
            h = ((h << 11) ^ h) & _MASK
            h = (h >> 10) ^ h
        table.append(h)
    return tuple(table)


_TABLE = _build_table()


def _signed(value: int) -> int:
    return value - (1 << 64) if value & (1 << 63) else value


def hash64(text: str) -> int:
    """Hash text to a signed 64-bit integer, the form a BIGINT column stores."""
    h = HSTART
    for b in text.encode("utf-16-le"):
        h = ((h * HMULT) & _MASK) ^ _TABLE[b]
    return _signed(h)
