"""
16-bit rolling checksum stored in the token header.

Multiply-and-add over each byte with 32-bit wraparound, truncated to 16 bits.
Detects corruption and most wrong-password decodes cheaply; it is not a MAC.
"""

from .constants import (
    CHECKSUM_SEED,
    CHECKSUM_MULTIPLIER,
    CHECKSUM_MASK32,
    CHECKSUM_MASK16,
)


def checksum16(data: bytes, seed: int = CHECKSUM_SEED) -> int:
    c = seed & CHECKSUM_MASK32
    for b in data:
        c = (c * CHECKSUM_MULTIPLIER + b) & CHECKSUM_MASK32
    return c & CHECKSUM_MASK16
