"""The loaded part of the world: chunks around the player and the day cycle."""

from __future__ import annotations

import math
import threading
from functools import partial
from typing import Callable, Dict, Optional, Set, Tuple

from blockworld.blocks import Block, BlockCoords, BlockRegister, WorldBlockCoords
from blockworld.chunk import Chunk
from blockworld.chunk_data import CHUNK_WIDTH_BLOCKS, CHUNK_WIDTH_BLOCKS_FLOAT, ChunkCoords
from blockworld.context import Context
from blockworld.day_cycle import DayLightCycle
from blockworld.log import LogLevel, TextColor, app_log
from blockworld.thread_list import ThreadList
from blockworld.timer import Timer
from blockworld.world_generator import WorldGenerator

DEFAULT_SEED = 38513759
DEFAULT_WORKERS = 32


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def decompose_coordinates(coords: WorldBlockCoords) -> Tuple[ChunkCoords, BlockCoords]:
    """Split a world position into its chunk and its position inside the chunk."""
    chunk_coords = ChunkCoords(
        math.floor(coords.x / CHUNK_WIDTH_BLOCKS_FLOAT),
        math.floor(coords.z / CHUNK_WIDTH_BLOCKS_FLOAT),
    )
    block_coords = BlockCoords(
        coords.x % CHUNK_WIDTH_BLOCKS,
        coords.y & 0xFF,
        coords.z % CHUNK_WIDTH_BLOCKS,
    )
    return chunk_coords, block_coords


class World:
    """Chunks kept loaded within the render distance of the player.

    Chunks are generated by a pool of ``workers`` threads; with no workers
    they are generated in the calling thread.
    """

    def __init__(
        self,
        block_register: BlockRegister,
        user_context: Context,
        ticks_per_second: float,
        minutes_per_day: float = 1.0,
        seed: int = DEFAULT_SEED,
        workers: int = DEFAULT_WORKERS,
    ) -> None:
        if workers < 0:
            raise ValueError("worker count must not be negative")
        self._world_gen = WorldGenerator(seed, block_register)
        self.user_context = user_context
        self.day_light_cycle = DayLightCycle(minutes_per_day, ticks_per_second)
        self._block_register = block_register
        self._chunk_map: Dict[ChunkCoords, Chunk] = {}
        self._world_lock = threading.RLock()
        self._loading: Set[ChunkCoords] = set()
        self._loading_lock = threading.Lock()
        self.player_last_chunk_pos_x = 0
        self.player_last_chunk_pos_z = 0
        self._pool: Optional[ThreadList] = ThreadList(workers) if workers else None

        app_log().print(LogLevel.INFO, TextColor.WHITE, "World created.")

        distance = int(user_context.ch_render_load_distance)
        centre_x = _trunc_div(int(user_context.player_position[0]), CHUNK_WIDTH_BLOCKS)
        centre_z = _trunc_div(int(user_context.player_position[2]), CHUNK_WIDTH_BLOCKS)
        for x in range(centre_x - distance, centre_x + distance + 1):
            for z in range(centre_z - distance, centre_z + distance + 1):
                self._submit(partial(self.load_chunk, ChunkCoords(x, z)))

    @property
    def block_register(self) -> BlockRegister:
        return self._block_register

    @property
    def chunks(self) -> Dict[ChunkCoords, Chunk]:
        """A snapshot of the loaded chunks."""
        with self._world_lock:
            return dict(self._chunk_map)

    def _submit(self, task: Callable[[], None]) -> None:
        if self._pool is None:
            task()
        else:
            self._pool.push_task(task)

    def _find(self, coords: ChunkCoords) -> Optional[Chunk]:
        with self._world_lock:
            return self._chunk_map.get(coords)

    def update(self) -> None:
        """Load and unload chunks, advance the day and refresh chunk meshes."""
        self.load_chunks_around_player()
        self.day_light_cycle.update()
        with self._world_lock:
            for chunk in self._chunk_map.values():
                chunk.update()
            count = len(self._chunk_map)
        app_log().print(LogLevel.DEBUG, TextColor.GREEN, "Total chunks: %d", count)

    def set_block(self, block: Block, coords: WorldBlockCoords) -> None:
        """Place ``block``; positions in chunks that are not loaded are ignored."""
        chunk_coords, block_coords = decompose_coordinates(coords)
        chunk = self._find(chunk_coords)
        if chunk is not None:
            chunk.set_block(block_coords, block)

    def check_block(self, coords: WorldBlockCoords) -> bool:
        chunk_coords, block_coords = decompose_coordinates(coords)
        chunk = self._find(chunk_coords)
        return chunk is not None and chunk.check_block(block_coords)

    def get_block(self, coords: WorldBlockCoords) -> Block:
        """The block at ``coords``; air if its chunk is not loaded."""
        chunk_coords, block_coords = decompose_coordinates(coords)
        chunk = self._find(chunk_coords)
        if chunk is None:
            return self._block_register.air
        return chunk.get_block(block_coords.x, block_coords.y, block_coords.z)

    def destroy_block(self, coords: WorldBlockCoords) -> None:
        chunk_coords, block_coords = decompose_coordinates(coords)
        chunk = self._find(chunk_coords)
        if chunk is not None:
            chunk.delete_block(block_coords)

    def load_chunk(self, coords: ChunkCoords) -> None:
        """Generate the chunk at ``coords`` and add it unless already present."""
        with self._loading_lock:
            if coords in self._loading:
                return
            self._loading.add(coords)

        try:
            chunk = self._world_gen.build_chunk(coords, self._chunk_map)
            with self._world_lock, self._loading_lock:
                self._chunk_map.setdefault(coords, chunk)
                self._loading.discard(coords)
        except BaseException:
            with self._loading_lock:
                self._loading.discard(coords)
            raise

    def load_chunks_around_player(self) -> None:
        """Unload chunks out of range and load the strips the player moved into."""
        with Timer("MT World Update and Load"):
            position = self.user_context.player_position
            player_x = int(position[0] / CHUNK_WIDTH_BLOCKS_FLOAT)
            player_z = int(position[2] / CHUNK_WIDTH_BLOCKS_FLOAT)
            difference_x = player_x - self.player_last_chunk_pos_x
            difference_z = player_z - self.player_last_chunk_pos_z
            distance = int(self.user_context.ch_render_load_distance)

            if difference_x == 0 and difference_z == 0:
                return

            with self._world_lock:
                stale = [
                    coords
                    for coords in self._chunk_map
                    if abs(coords.x - player_x) > distance or abs(coords.z - player_z) > distance
                ]
                for coords in stale:
                    del self._chunk_map[coords]

            x1, x2 = player_x - distance, player_x + distance
            z1, z2 = player_z - distance, player_z + distance
            xmod1, xmod2 = player_x - distance, player_x + distance

            if difference_x > 0:
                x1 = self.player_last_chunk_pos_x + distance + 1
                xmod2 = x1 - 1
            else:
                x2 = self.player_last_chunk_pos_x - distance - 1
                xmod1 = x2 + 1

            if difference_z > 0:
                z1 = self.player_last_chunk_pos_z + distance + 1
            else:
                z2 = self.player_last_chunk_pos_z - distance - 1

            chunk_loads = 0
            for x in range(x1, x2 + 1):
                for z in range(player_z - distance, player_z + distance + 1):
                    self._submit(partial(self.load_chunk, ChunkCoords(x, z)))
                    chunk_loads += 1
            for z in range(z1, z2 + 1):
                for x in range(xmod1, xmod2 + 1):
                    self._submit(partial(self.load_chunk, ChunkCoords(x, z)))
                    chunk_loads += 1

            expected = (abs(difference_x) + abs(difference_z)) * (distance * 2 + 1) - abs(
                difference_x * difference_z
            )
            if chunk_loads != expected:
                app_log().print(
                    LogLevel.ERROR,
                    TextColor.BRIGHT_RED,
                    "Chunk render error: Expected: %d, Got: %d",
                    expected,
                    chunk_loads,
                )

            self.player_last_chunk_pos_x = player_x
            self.player_last_chunk_pos_z = player_z

    def close(self) -> None:
        """Finish pending chunk loads, then unload every chunk."""
        if self._pool is not None:
            self._pool.close()
        with self._world_lock:
            self._chunk_map.clear()
        app_log().print(LogLevel.INFO, TextColor.WHITE, "All chunks unloaded.")
        app_log().print(LogLevel.INFO, TextColor.WHITE, "World destroyed.")