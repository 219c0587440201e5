"""Chunk dimensions, chunk coordinates and chunk state flags."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

CHUNK_WIDTH_BLOCKS = 15
CHUNK_WIDTH_BLOCKS_FLOAT = float(CHUNK_WIDTH_BLOCKS)
CHUNK_HEIGHT_BLOCKS = 256
CHUNK_VOLUME = CHUNK_WIDTH_BLOCKS * CHUNK_WIDTH_BLOCKS * CHUNK_HEIGHT_BLOCKS

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_MASK_32 = (1 << 32) - 1


def _signed32(value: int) -> int:
    value &= _MASK_32
    return value - (1 << 32) if value > _INT32_MAX else value


@dataclass(frozen=True)
class ChunkCoords:
    """Position of a chunk in the world grid; each axis is a signed 32-bit int."""

    x: int
    z: int

    def __post_init__(self) -> None:
        for name in ("x", "z"):
            value = getattr(self, name)
            if not _INT32_MIN <= value <= _INT32_MAX:
                raise ValueError(f"chunk coordinate {name}={value} outside 32-bit range")

    @property
    def seed(self) -> int:
        """Both axes packed into 64 bits: x in the low word, z in the high word."""
        return (self.x & _MASK_32) | ((self.z & _MASK_32) << 32)

    @classmethod
    def from_seed(cls, seed: int) -> "ChunkCoords":
        if not 0 <= seed < (1 << 64):
            raise ValueError("seed does not fit in 64 bits")
        return cls(_signed32(seed), _signed32(seed >> 32))

    def __hash__(self) -> int:
        return self.seed


class ChunkFlag(IntFlag):
    """State bits kept by a chunk."""

    MODEL_UPDATE = 1 << 0