import time

import pytest

from blockworld.blocks import BlockCoords, BlockRegister, WorldBlockCoords
from blockworld.chunk_data import CHUNK_WIDTH_BLOCKS, ChunkCoords
from blockworld.context import Context
from blockworld.world import World, decompose_coordinates


@pytest.fixture
def blocks():
    return BlockRegister()


def make_world(blocks, distance=0, position=(0.0, 60.0, 0.0), workers=0):
    context = Context(
        screen_width_px=1080,
        screen_height_px=720,
        ch_render_load_distance=distance,
        player_position=position,
    )
    return World(blocks, context, 30.0, workers=workers), context


@pytest.mark.parametrize("x", [-31, -16, -15, -1, 0, 1, 14, 15, 29, 300])
def test_decompose_round_trips_horizontal_axes(x):
    chunk, block = decompose_coordinates(WorldBlockCoords(x, 10, -x))
    assert chunk.x * CHUNK_WIDTH_BLOCKS + block.x == x
    assert chunk.z * CHUNK_WIDTH_BLOCKS + block.z == -x
    assert 0 <= block.x < CHUNK_WIDTH_BLOCKS
    assert 0 <= block.z < CHUNK_WIDTH_BLOCKS
    assert block.y == 10


def test_decompose_negative_position():
    chunk, block = decompose_coordinates(WorldBlockCoords(-1, 7, 15))
    assert chunk == ChunkCoords(-1, 1)
    assert block == BlockCoords(14, 7, 0)


def test_initial_load_with_zero_distance(blocks):
    world, _ = make_world(blocks)
    try:
        assert set(world.chunks) == {ChunkCoords(0, 0)}
        assert world.check_block(WorldBlockCoords(0, 0, 0)) is True
        assert world.get_block(WorldBlockCoords(0, 0, 0)).is_air() is False
    finally:
        world.close()


def test_initial_load_covers_square(blocks):
    world, _ = make_world(blocks, distance=1)
    try:
        expected = {ChunkCoords(x, z) for x in (-1, 0, 1) for z in (-1, 0, 1)}
        assert set(world.chunks) == expected
    finally:
        world.close()


def test_set_and_destroy_block(blocks):
    world, _ = make_world(blocks)
    try:
        target = WorldBlockCoords(3, 250, 4)
        assert world.check_block(target) is False
        world.set_block(blocks.cobblestone, target)
        assert world.check_block(target) is True
        assert world.get_block(target) == blocks.cobblestone
        world.destroy_block(target)
        assert world.check_block(target) is False
    finally:
        world.close()


def test_missing_block_in_loaded_chunk_raises(blocks):
    world, _ = make_world(blocks)
    try:
        with pytest.raises(KeyError):
            world.get_block(WorldBlockCoords(2, 250, 2))
    finally:
        world.close()


def test_positions_in_unloaded_chunks_are_air_and_ignored(blocks):
    world, _ = make_world(blocks)
    try:
        far = WorldBlockCoords(1000, 250, 1000)
        world.set_block(blocks.stone, far)
        assert world.check_block(far) is False
        assert world.get_block(far) == blocks.air
    finally:
        world.close()


def test_update_without_movement_advances_day(blocks):
    world, _ = make_world(blocks)
    try:
        before = world.day_light_cycle.time_game_days
        world.update()
        assert world.day_light_cycle.time_game_days > before
        assert set(world.chunks) == {ChunkCoords(0, 0)}
    finally:
        world.close()


def test_update_follows_player(blocks):
    world, context = make_world(blocks)
    try:
        context.player_position = (16.0, 60.0, 0.0)
        world.update()
        assert set(world.chunks) == {ChunkCoords(1, 0)}
        assert world.player_last_chunk_pos_x == 1
        assert world.player_last_chunk_pos_z == 0
    finally:
        world.close()


def test_mesh_built_only_where_all_neighbours_loaded(blocks):
    world, _ = make_world(blocks, distance=1)
    try:
        world.update()
        chunks = world.chunks
        centre = chunks[ChunkCoords(0, 0)]
        assert centre.mesh is not None
        assert len(centre.mesh) > 0
        assert chunks[ChunkCoords(1, 1)].mesh is None
    finally:
        world.close()


def test_load_chunk_keeps_existing_chunk(blocks):
    world, _ = make_world(blocks)
    try:
        original = world.chunks[ChunkCoords(0, 0)]
        world.load_chunk(ChunkCoords(0, 0))
        assert world.chunks[ChunkCoords(0, 0)] is original
        world.load_chunk(ChunkCoords(5, 5))
        assert ChunkCoords(5, 5) in world.chunks
    finally:
        world.close()


def test_threaded_loading_and_close(blocks):
    world, _ = make_world(blocks, workers=2)
    deadline = time.monotonic() + 30.0
    while ChunkCoords(0, 0) not in world.chunks and time.monotonic() < deadline:
        time.sleep(0.01)
    loaded = set(world.chunks)
    world.close()
    assert loaded == {ChunkCoords(0, 0)}
    assert world.chunks == {}


def test_negative_worker_count_rejected(blocks):
    with pytest.raises(ValueError):
        make_world(blocks, workers=-1)