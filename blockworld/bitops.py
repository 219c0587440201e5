"""256-bit lane arithmetic and the binary face-culling chunk.

A 256-bit value is held as a Python int. Its four 64-bit lanes are the
int's little-endian 64-bit words; its sixteen 16-bit lanes likewise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

MASK_16 = (1 << 16) - 1
MASK_64 = (1 << 64) - 1
MASK_256 = (1 << 256) - 1


def _check(value: int) -> int:
    if not 0 <= value <= MASK_256:
        raise ValueError("value does not fit in 256 bits")
    return value


def _from_lanes(lanes: Iterable[int], count: int, width: int) -> int:
    lanes = list(lanes)
    if len(lanes) != count:
        raise ValueError(f"expected {count} lanes, got {len(lanes)}")
    limit = 1 << width
    result = 0
    for position, lane in enumerate(lanes):
        if not 0 <= lane < limit:
            raise ValueError(f"lane value {lane} does not fit in {width} bits")
        result |= lane << (width * position)
    return result


def to_u16_lanes(value: int) -> List[int]:
    """Split a 256-bit value into sixteen 16-bit lanes, lowest first."""
    _check(value)
    return [(value >> (16 * k)) & MASK_16 for k in range(16)]


def from_u16_lanes(lanes: Iterable[int]) -> int:
    """Join sixteen 16-bit lanes, lowest first, into a 256-bit value."""
    return _from_lanes(lanes, 16, 16)


def to_u64_lanes(value: int) -> List[int]:
    """Split a 256-bit value into four 64-bit lanes, lowest first."""
    _check(value)
    return [(value >> (64 * k)) & MASK_64 for k in range(4)]


def from_u64_lanes(lanes: Iterable[int]) -> int:
    """Join four 64-bit lanes, lowest first, into a 256-bit value."""
    return _from_lanes(lanes, 4, 64)


def _check_count(count: int) -> int:
    if not 0 <= count <= 255:
        raise ValueError("shift count must be within 0..255")
    return count


def shift_left_16(value: int, count: int) -> int:
    """Shift each 16-bit lane left; bits leaving a lane are lost."""
    _check_count(count)
    if count > 15:
        return 0
    return from_u16_lanes((lane << count) & MASK_16 for lane in to_u16_lanes(value))


def shift_right_16(value: int, count: int) -> int:
    """Shift each 16-bit lane right; bits leaving a lane are lost."""
    _check_count(count)
    if count > 15:
        return 0
    return from_u16_lanes(lane >> count for lane in to_u16_lanes(value))


def _sll64(lane: int, count: int) -> int:
    return (lane << count) & MASK_64 if count < 64 else 0


def _srl64(lane: int, count: int) -> int:
    return lane >> count if count < 64 else 0


def shift_left_256(value: int, count: int) -> int:
    """Shift each 64-bit lane left, carrying the top bits of the next lane in.

    Lane i becomes ``(lane[i] << count) | (lane[i + 1] >> (64 - count))``.
    """
    _check_count(count)
    carry_shift = (64 - count) % 256
    lanes = to_u64_lanes(value)
    following = lanes[1:] + [0]
    return from_u64_lanes(
        _sll64(lane, count) | _srl64(nxt, carry_shift) for lane, nxt in zip(lanes, following)
    )


def shift_right_256(value: int, count: int) -> int:
    """Shift each 64-bit lane right, carrying the low bits of the previous lane in.

    Lane i becomes ``(lane[i] >> count) | (lane[i - 1] << (64 - count))``.
    """
    _check_count(count)
    carry_shift = (64 - count) % 256
    lanes = to_u64_lanes(value)
    previous = [0] + lanes[:3]
    return from_u64_lanes(
        _srl64(lane, count) | _sll64(prev, carry_shift) for lane, prev in zip(lanes, previous)
    )


def right_face_bits_16(value: int) -> int:
    """Keep set bits whose lower neighbour in the same 16-bit lane is clear."""
    return value & (MASK_256 ^ shift_left_16(value, 1))


def left_face_bits_16(value: int) -> int:
    """Keep set bits whose higher neighbour in the same 16-bit lane is clear."""
    return value & (MASK_256 ^ shift_right_16(value, 1))


def right_face_bits_256(value: int) -> int:
    """Keep set bits whose next position along the 256-bit strip is clear."""
    return value & (MASK_256 ^ shift_left_256(value, 1))


def left_face_bits_256(value: int) -> int:
    """Keep set bits whose previous position along the 256-bit strip is clear."""
    return value & (MASK_256 ^ shift_right_256(value, 1))


def format_hex(value: int) -> str:
    """The four 64-bit lanes in upper-case hex, highest lane first."""
    return " ".join(f"{lane:X}" for lane in reversed(to_u64_lanes(value)))


def format_bin(value: int) -> str:
    """All 256 bits, highest lane and highest bit first."""
    return f"{_check(value):0256b}"


def _check_index(name: str, value: int, limit: int) -> None:
    if not 0 <= value < limit:
        raise ValueError(f"{name}={value} outside 0..{limit - 1}")


def set_jik(grid: List[List[int]], i: int, j: int, k: int) -> None:
    """Set position ``j`` of the 256-bit strip at ``grid[k][i]``.

    Position 0 is the top bit of lane 0, position 63 its bottom bit,
    position 64 the top bit of lane 1, and so on.
    """
    _check_index("i", i, 16)
    _check_index("j", j, 256)
    _check_index("k", k, 16)
    lane, offset = divmod(j, 64)
    grid[k][i] |= 1 << (64 * lane + 63 - offset)


def set_ikj(rows: List[int], i: int, j: int, k: int) -> None:
    """Set bit ``i`` of 16-bit lane ``k`` in ``rows[j]``."""
    _check_index("i", i, 16)
    _check_index("j", j, 256)
    _check_index("k", k, 16)
    rows[j] |= 1 << (16 * k + i)


def _grid() -> List[List[int]]:
    return [[0] * 16 for _ in range(16)]


def _rows() -> List[int]:
    return [0] * 256


@dataclass
class BinaryChunk:
    """Occupancy bits of a chunk, laid out along each axis in both directions.

    ``*_yxz`` are 16x16 grids of vertical strips indexed ``[z][x]``;
    ``*_xzy`` and ``*_zxy`` are 256 rows (one per height) of sixteen
    16-bit lanes.
    """

    p_yxz: List[List[int]] = field(default_factory=_grid)
    p_xzy: List[int] = field(default_factory=_rows)
    p_zxy: List[int] = field(default_factory=_rows)
    n_yxz: List[List[int]] = field(default_factory=_grid)
    n_xzy: List[int] = field(default_factory=_rows)
    n_zxy: List[int] = field(default_factory=_rows)

    def face_bits_inplace(self) -> None:
        """Turn occupancy bits into exposed-face bits for every direction."""
        self.p_yxz[:] = [[right_face_bits_256(v) for v in row] for row in self.p_yxz]
        self.n_yxz[:] = [[left_face_bits_256(v) for v in row] for row in self.n_yxz]
        self.p_xzy[:] = [right_face_bits_16(v) for v in self.p_xzy]
        self.p_zxy[:] = [right_face_bits_16(v) for v in self.p_zxy]
        self.n_xzy[:] = [left_face_bits_16(v) for v in self.n_xzy]
        self.n_zxy[:] = [left_face_bits_16(v) for v in self.n_zxy]