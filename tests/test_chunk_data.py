import pytest

from blockworld.chunk_data import ChunkCoords, ChunkFlag


@pytest.mark.parametrize("x, z", [(0, 0), (3, -7), (-1, -1), (2**31 - 1, -(2**31))])
def test_seed_round_trip(x, z):
    coords = ChunkCoords(x, z)
    assert ChunkCoords.from_seed(coords.seed) == coords


def test_negative_x_packs_into_low_word():
    assert ChunkCoords(-1, 0).seed == 0xFFFFFFFF


def test_z_packs_into_high_word():
    assert ChunkCoords(0, 1).seed == 1 << 32


def test_hash_is_seed():
    coords = ChunkCoords(5, 9)
    assert hash(coords) == hash(coords.seed)


def test_equal_coords_collapse_in_set():
    assert len({ChunkCoords(1, 2), ChunkCoords(1, 2), ChunkCoords(2, 1)}) == 2


@pytest.mark.parametrize("x, z", [(2**31, 0), (0, -(2**31) - 1)])
def test_out_of_range_rejected(x, z):
    with pytest.raises(ValueError):
        ChunkCoords(x, z)


def test_from_seed_rejects_oversized():
    with pytest.raises(ValueError):
        ChunkCoords.from_seed(1 << 64)


def test_model_update_flag_set_and_cleared():
    flags = ChunkFlag(0) | ChunkFlag.MODEL_UPDATE
    assert ChunkFlag.MODEL_UPDATE in flags
    flags &= ~ChunkFlag.MODEL_UPDATE
    assert ChunkFlag.MODEL_UPDATE not in flags