import copy
import random

import pytest

from blockworld.bitops import (
    MASK_256,
    BinaryChunk,
    format_bin,
    format_hex,
    from_u16_lanes,
    from_u64_lanes,
    left_face_bits_16,
    left_face_bits_256,
    right_face_bits_16,
    right_face_bits_256,
    set_ikj,
    set_jik,
    shift_left_16,
    shift_left_256,
    shift_right_16,
    shift_right_256,
    to_u16_lanes,
    to_u64_lanes,
)

RANDOM_VALUES = [random.Random(1234 + n).getrandbits(256) for n in range(12)]


def strip(*positions):
    grid = [[0] * 16 for _ in range(16)]
    for j in positions:
        set_jik(grid, 0, j, 0)
    return grid[0][0]


def row(*bits, lane=3):
    rows = [0] * 256
    for i in bits:
        set_ikj(rows, i, 0, lane)
    return rows[0]


@pytest.mark.parametrize("value", RANDOM_VALUES)
def test_lane_round_trips(value):
    assert from_u16_lanes(to_u16_lanes(value)) == value
    assert from_u64_lanes(to_u64_lanes(value)) == value


def test_lane_errors():
    with pytest.raises(ValueError):
        from_u16_lanes([0] * 15)
    with pytest.raises(ValueError):
        from_u64_lanes([1 << 64, 0, 0, 0])
    with pytest.raises(ValueError):
        to_u64_lanes(-1)
    with pytest.raises(ValueError):
        to_u16_lanes(MASK_256 + 1)


def test_shift_left_256_by_whole_lane_moves_lanes_down():
    lanes = [11, 22, 33, 44]
    value = from_u64_lanes(lanes)
    assert to_u64_lanes(shift_left_256(value, 64)) == [22, 33, 44, 0]
    assert to_u64_lanes(shift_right_256(value, 64)) == [0, 11, 22, 33]


@pytest.mark.parametrize("value", RANDOM_VALUES[:4])
def test_zero_shift_is_identity(value):
    assert shift_left_256(value, 0) == value
    assert shift_right_256(value, 0) == value
    assert shift_left_16(value, 0) == value


def test_256_shift_moves_strip_position_across_lanes():
    assert shift_left_256(strip(64), 1) == strip(63)
    assert shift_right_256(strip(63), 1) == strip(64)
    assert shift_left_256(strip(0), 1) == 0


def test_16_bit_shifts_stay_within_lane():
    value = from_u16_lanes([0x8000] * 16)
    assert to_u16_lanes(shift_left_16(value, 1)) == [0] * 16
    assert shift_right_16(row(0), 1) == 0
    assert shift_left_16(row(3), 1) == row(4)
    assert shift_left_16(MASK_256, 16) == 0


def test_shift_count_out_of_range():
    with pytest.raises(ValueError):
        shift_left_256(1, -1)
    with pytest.raises(ValueError):
        shift_right_16(1, 256)


def test_face_bits_256_on_column():
    column = strip(10, 11, 12)
    assert right_face_bits_256(column) == strip(12)
    assert left_face_bits_256(column) == strip(10)


def test_face_bits_256_across_lane_boundary():
    column = strip(63, 64)
    assert right_face_bits_256(column) == strip(64)
    assert left_face_bits_256(column) == strip(63)


def test_face_bits_16_on_row():
    value = row(3, 4, 5)
    assert right_face_bits_16(value) == row(3)
    assert left_face_bits_16(value) == row(5)


def test_face_bits_16_do_not_cross_lanes():
    rows = [0] * 256
    set_ikj(rows, 15, 0, 3)
    set_ikj(rows, 0, 0, 4)
    assert right_face_bits_16(rows[0]) == rows[0]
    assert left_face_bits_16(rows[0]) == rows[0]


@pytest.mark.parametrize("value", RANDOM_VALUES)
@pytest.mark.parametrize(
    "face", [right_face_bits_16, left_face_bits_16, right_face_bits_256, left_face_bits_256]
)
def test_face_bits_are_subset_and_idempotent(face, value):
    result = face(value)
    assert result & ~value == 0
    assert face(result) == result


def test_set_index_checks():
    grid = [[0] * 16 for _ in range(16)]
    with pytest.raises(ValueError):
        set_jik(grid, 16, 0, 0)
    with pytest.raises(ValueError):
        set_jik(grid, 0, 256, 0)
    with pytest.raises(ValueError):
        set_ikj([0] * 256, 16, 0, 0)


def test_format_hex_lists_high_lane_first():
    value = from_u64_lanes([1, 2, 3, 0xABC])
    assert format_hex(value) == "ABC 3 2 1"


@pytest.mark.parametrize("value", RANDOM_VALUES[:4])
def test_format_bin_round_trip(value):
    text = format_bin(value)
    assert len(text) == 256
    assert int(text, 2) == value


def filled_chunk(blocks):
    chunk = BinaryChunk()
    for x, y, z in blocks:
        set_ikj(chunk.n_xzy, x, y, z)
        set_ikj(chunk.p_xzy, x + 1, y, z)
        set_jik(chunk.n_yxz, x, y, z)
        set_jik(chunk.p_yxz, x, y, z)
        set_ikj(chunk.n_zxy, z, y, x)
        set_ikj(chunk.p_zxy, z + 1, y, x)
    return chunk


def test_isolated_block_keeps_all_faces():
    chunk = filled_chunk([(2, 5, 7)])
    before = copy.deepcopy(chunk)
    chunk.face_bits_inplace()
    assert chunk == before


def test_stacked_blocks_lose_inner_faces():
    chunk = filled_chunk([(2, 5, 7), (2, 6, 7)])
    chunk.face_bits_inplace()
    top_only = filled_chunk([(2, 6, 7)])
    bottom_only = filled_chunk([(2, 5, 7)])
    assert chunk.p_yxz == top_only.p_yxz
    assert chunk.n_yxz == bottom_only.n_yxz


def test_side_by_side_blocks_lose_shared_faces():
    chunk = filled_chunk([(2, 5, 7), (3, 5, 7)])
    chunk.face_bits_inplace()
    assert chunk.n_xzy == filled_chunk([(3, 5, 7)]).n_xzy
    assert chunk.p_xzy == filled_chunk([(2, 5, 7)]).p_xzy