"""A 16x256x16 occupancy bit space with axis-reordered views and face maps.

The space is a 65536-bit Python int. A bit index decodes as
``i + (k << 4) + (j << 8)``. Seen as 16-bit words, word ``j * 16 + k``
covers bits ``i``; seen as 256-bit strips, strip ``i * 16 + k`` covers
the 256 positions along the third axis.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Tuple

_SPACE_BITS = 1 << 16


def _repeat(pattern: int, width: int, count: int) -> int:
    return int.from_bytes(pattern.to_bytes(width // 8, "little") * count, "little")


_LANE16_LOW = _repeat(0x7FFF, 16, _SPACE_BITS // 16)
_LANE16_HIGH = _repeat(0xFFFE, 16, _SPACE_BITS // 16)
_STRIP_LOW = _repeat((1 << 255) - 1, 256, _SPACE_BITS // 256)
_STRIP_HIGH = _repeat(((1 << 256) - 1) ^ 1, 256, _SPACE_BITS // 256)


def _check_byte(name: str, value: int, limit: int) -> None:
    if not 0 <= value < limit:
        raise ValueError(f"{name}={value} outside 0..{limit - 1}")


@dataclass(frozen=True)
class InChunkCoords:
    """Block position inside a chunk, one byte per axis."""

    x: int
    y: int
    z: int

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            _check_byte(name, getattr(self, name), 256)

    def __hash__(self) -> int:
        return (self.y << 16) + (self.x << 8) + self.z


@dataclass(frozen=True)
class ChunkWorldCoords:
    """Chunk position in the world, one unsigned 16-bit value per axis."""

    c_x: int
    c_z: int

    def __post_init__(self) -> None:
        _check_byte("c_x", self.c_x, 1 << 16)
        _check_byte("c_z", self.c_z, 1 << 16)

    def __hash__(self) -> int:
        return (self.c_x << 16) + self.c_z


@dataclass
class Bitset16:
    """Sixteen bits in one word."""

    bits: int = 0

    def __post_init__(self) -> None:
        self.bits &= 0xFFFF

    @staticmethod
    def _check(n: int) -> None:
        if not 0 <= n < 16:
            raise ValueError("Bit out of range.")

    def set(self, n: int, state: bool) -> None:
        """OR ``state`` into bit ``n``; a false state leaves the bit as it is."""
        self._check(n)
        self.bits |= int(bool(state)) << n

    def test(self, n: int) -> bool:
        self._check(n)
        return bool((self.bits >> n) & 1)

    def __getitem__(self, n: int) -> bool:
        return self.test(n)

    def __ilshift__(self, n: int) -> "Bitset16":
        self.bits = (self.bits << n) & 0xFFFF
        return self


def _set_bits(value: int) -> Iterator[int]:
    bits = format(value, "b")[::-1]
    position = bits.find("1")
    while position != -1:
        yield position
        position = bits.find("1", position + 1)


def _zxy_index(i: int, j: int, k: int) -> int:
    return (j << 8) + (i << 4) + k


def _yxz_index(i: int, j: int, k: int) -> int:
    return (k << 12) + (i << 8) + j


def _reorder(space: int, *targets: Callable[[int, int, int], int]) -> Tuple[int, ...]:
    results = [0] * len(targets)
    for index in _set_bits(space):
        j, k, i = index >> 8, (index >> 4) & 15, index & 15
        for slot, target in enumerate(targets):
            results[slot] |= 1 << target(i, j, k)
    return tuple(results)


@dataclass
class ChunkSet:
    """Occupancy bits of a 16x256x16 chunk held in one 65536-bit int."""

    chunk_space: int = 0

    def flip_to(self, state: bool, coords: InChunkCoords) -> None:
        """Set or clear the bit at ``x + (y << 4) + (z << 8)``."""
        if not (coords.x < 16 and coords.y < 256 and coords.z < 16):
            raise ValueError("Bit out of range.")
        location = (coords.x + (coords.y << 4) + (coords.z << 8)) & 0xFFFF
        if state:
            self.chunk_space |= 1 << location
        else:
            self.chunk_space &= ~(1 << location)

    def data_xzy(self) -> int:
        """Left-right aligned data: the space as stored."""
        return self.chunk_space

    def data_zxy(self) -> int:
        """Forward-backward aligned data."""
        return _reorder(self.chunk_space, _zxy_index)[0]

    def data_yxz(self) -> int:
        """Up-down aligned data."""
        return _reorder(self.chunk_space, _yxz_index)[0]

    def aligned_data(self) -> Tuple[int, int, int]:
        """All three alignments (xzy, zxy, yxz) from one traversal."""
        zxy, yxz = _reorder(self.chunk_space, _zxy_index, _yxz_index)
        return self.chunk_space, zxy, yxz


def exposed_face_map(chunk: ChunkSet) -> Tuple[int, int, int, int, int, int]:
    """Exposed-face bits as (p_xzy, p_zxy, p_yxz, n_xzy, n_zxy, n_yxz).

    The ``p_`` maps keep bits whose next position is clear, the ``n_`` maps
    bits whose previous position is clear, within each 16-bit word for the
    xzy/zxy layouts and within each 256-bit strip for the yxz layout.
    """
    xzy, zxy, yxz = chunk.aligned_data()

    def keep_next_clear(value: int, mask: int) -> int:
        return value & ~((value >> 1) & mask)

    def keep_previous_clear(value: int, mask: int) -> int:
        return value & ~((value << 1) & mask)

    return (
        keep_next_clear(xzy, _LANE16_LOW),
        keep_next_clear(zxy, _LANE16_LOW),
        keep_next_clear(yxz, _STRIP_LOW),
        keep_previous_clear(xzy, _LANE16_HIGH),
        keep_previous_clear(zxy, _LANE16_HIGH),
        keep_previous_clear(yxz, _STRIP_HIGH),
    )