"""Terrain generation of chunks from layered noise."""

from __future__ import annotations

from typing import Mapping

from blockworld.blocks import Block, BlockCoords, BlockRegister
from blockworld.chunk import Chunk
from blockworld.chunk_data import CHUNK_HEIGHT_BLOCKS, CHUNK_WIDTH_BLOCKS, ChunkCoords
from blockworld.log import LogLevel, TextColor, app_log
from blockworld.noise import PerlinNoiseGenerator

_SEA_LEVEL = 60


def _threshold_fraction(macro_elevation: float) -> float:
    if macro_elevation < 0.25:
        return 0.15
    if macro_elevation < 0.5:
        x = macro_elevation - 0.5
        return -2 * (x * x) + 0.275
    if macro_elevation < 0.75:
        return 0.25 * macro_elevation + 0.15
    return 0.5 * macro_elevation - 0.0375


class WorldGenerator:
    """Builds chunks of terrain from a world seed."""

    def __init__(self, seed: int, blocks: BlockRegister) -> None:
        self._seed = seed
        self._blocks = blocks
        self._noise = PerlinNoiseGenerator(seed)
        app_log().print(LogLevel.INFO, TextColor.WHITE, "World Seed: %d", seed)

    @property
    def seed(self) -> int:
        return self._seed

    def build_chunk(self, coords: ChunkCoords, chunk_map: Mapping[ChunkCoords, Chunk]) -> Chunk:
        """Generate the terrain of the chunk at ``coords``."""
        sample = self._noise.sample_2d
        chunk = Chunk(coords, chunk_map)
        chunk.reserve(100 * CHUNK_WIDTH_BLOCKS * CHUNK_WIDTH_BLOCKS)

        for bz in range(CHUNK_WIDTH_BLOCKS):
            for bx in range(CHUNK_WIDTH_BLOCKS):
                w_x = float(coords.x * CHUNK_WIDTH_BLOCKS + bx)
                w_z = float(coords.z * CHUNK_WIDTH_BLOCKS + bz)

                macro = sample(w_x / 250.0, w_z / 250.0) / 4.0 + 0.5
                macro += sample(w_x / 120.0, w_z / 120.0) / 4.0
                macro += sample(w_z / 320.0, w_x / 320.0) / 4.0
                macro += sample(w_z / 400.0, w_x / 400.0) / 4.0

                threshold = int(250 * _threshold_fraction(macro))
                threshold = int(threshold + 4.0 * sample(w_x / 90.0, w_z / 90.0))
                threshold = int(threshold + 15.0 * sample(w_x / 45.0, w_z / 45.0))

                biome = sample(w_x / 300.0, w_z / 300.0) * sample(w_x / 651.0, w_z / 651.0)

                top = min(max(threshold, _SEA_LEVEL), CHUNK_HEIGHT_BLOCKS - 1)
                for y in range(top + 1):
                    chunk.set_block(
                        BlockCoords(bx, y, bz), self.block_layered(threshold - y, y, biome)
                    )
        return chunk

    def block_layered(self, depth: int, height: int, biome: float) -> Block:
        """The block found ``depth`` below the surface at ``height`` in ``biome``."""
        blocks = self._blocks
        if height <= _SEA_LEVEL:
            if depth < 0:
                return blocks.water
            if depth < 5:
                return blocks.sand
        elif biome < 0.0:
            if depth < 5:
                return blocks.sand
        else:
            if depth < 1:
                return blocks.grass
            if depth < 2:
                return blocks.dirt
        return blocks.stone