"""A column of blocks and the building of its exposed-face mesh."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from blockworld.bitops import BinaryChunk, set_ikj, set_jik, to_u16_lanes, to_u64_lanes
from blockworld.blocks import (
    Block,
    BlockCoords,
    BlockDirection,
    BlockVertex,
    block_direction_to_normal,
)
from blockworld.chunk_data import (
    CHUNK_HEIGHT_BLOCKS,
    CHUNK_VOLUME,
    CHUNK_WIDTH_BLOCKS,
    ChunkCoords,
    ChunkFlag,
)
from blockworld.log import LogLevel, TextColor, app_log
from blockworld.timer import Timer

_LAST = CHUNK_WIDTH_BLOCKS - 1
_LANE64_BITS = CHUNK_HEIGHT_BLOCKS // 4


def _set_bits(value: int, limit: int) -> Iterator[int]:
    """Positions of set bits, lowest first, stopping at the first one >= ``limit``."""
    while value:
        low = value & -value
        position = low.bit_length() - 1
        if position >= limit:
            return
        yield position
        value ^= low


class Chunk:
    """Blocks of one chunk, keyed by their in-chunk coordinates.

    ``chunk_map`` is the shared map of loaded chunks, used to look up the
    four horizontal neighbours when building the mesh.
    """

    def __init__(self, chunk_coords: ChunkCoords, chunk_map: Mapping[ChunkCoords, "Chunk"]) -> None:
        self._chunk_coords = chunk_coords
        self._chunk_map = chunk_map
        self._blocks: Dict[BlockCoords, Block] = {}
        self._lock = threading.RLock()
        self.flags = ChunkFlag.MODEL_UPDATE
        self.mesh: Optional[List[BlockVertex]] = None
        app_log().print(LogLevel.INFO, TextColor.WHITE, "Chunk generated.")

    @property
    def chunk_coords(self) -> ChunkCoords:
        return self._chunk_coords

    @property
    def blocks(self) -> Dict[BlockCoords, Block]:
        """A snapshot of the chunk's blocks."""
        with self._lock:
            return dict(self._blocks)

    def __len__(self) -> int:
        with self._lock:
            return len(self._blocks)

    def _neighbour(self, dx: int, dz: int) -> Optional["Chunk"]:
        coords = ChunkCoords(self._chunk_coords.x + dx, self._chunk_coords.z + dz)
        return self._chunk_map.get(coords)

    def _has_all_neighbours(self) -> bool:
        return all(
            self._neighbour(dx, dz) is not None for dx, dz in ((1, 0), (-1, 0), (0, 1), (0, -1))
        )

    def update(self) -> bool:
        """Rebuild the mesh if it is stale and all four neighbours are loaded.

        Returns whether the mesh was rebuilt.
        """
        with self._lock:
            stale = bool(self.flags & ChunkFlag.MODEL_UPDATE)
        if not stale or not self._has_all_neighbours():
            return False
        data = self.package_render_data()
        with self._lock:
            self.mesh = data
            self.flags = ChunkFlag(self.flags & ~ChunkFlag.MODEL_UPDATE)
        return True

    @staticmethod
    def _check_coords(coords: BlockCoords) -> None:
        if not (coords.x < CHUNK_WIDTH_BLOCKS and coords.z < CHUNK_WIDTH_BLOCKS):
            raise ValueError("Block outside chunk range.")

    def set_block(self, coords: BlockCoords, block: Block) -> None:
        """Place ``block`` at ``coords``; air blocks are ignored."""
        self._check_coords(coords)
        if block.is_air():
            app_log().print(LogLevel.WARN, TextColor.BRIGHT_YELLOW, "Air block instruction ignored.")
            return
        with self._lock:
            self._blocks[coords] = block
            self.flags |= ChunkFlag.MODEL_UPDATE

    def delete_block(self, coords: BlockCoords) -> None:
        """Remove whatever block is at ``coords``."""
        self._check_coords(coords)
        with self._lock:
            self._blocks.pop(coords, None)
            self.flags |= ChunkFlag.MODEL_UPDATE

    def check_block(self, coords: BlockCoords) -> bool:
        with self._lock:
            return coords in self._blocks

    def get_block(self, x: int, y: int, z: int) -> Block:
        """The block at ``(x, y, z)``; raises KeyError if there is none."""
        coords = BlockCoords(x, y, z)
        with self._lock:
            try:
                return self._blocks[coords]
            except KeyError:
                raise KeyError("Block not found") from None

    def reserve(self, amount: int) -> int:
        """Ask for room for ``amount`` more blocks; return how many were granted."""
        if amount < 0:
            raise ValueError("reserve amount must not be negative")
        with self._lock:
            size = len(self._blocks)
        if size >= CHUNK_VOLUME:
            app_log().print(
                LogLevel.WARN, TextColor.BRIGHT_YELLOW,
                "Reserve failed - Chunk is already at full capacity.",
            )
            return 0
        if size + amount > CHUNK_VOLUME:
            app_log().print(
                LogLevel.WARN, TextColor.BRIGHT_YELLOW,
                "Reserve attempted - Chunk has been set to maximum capacity.",
            )
            return CHUNK_VOLUME - size
        return amount

    def _neighbour_keys(self, dx: int, dz: int) -> Iterable[BlockCoords]:
        chunk = self._neighbour(dx, dz)
        if chunk is None:
            return ()
        with chunk._lock:
            return list(chunk._blocks)

    def package_render_data(self) -> List[BlockVertex]:
        """One vertex for every block face not covered by another block."""
        with Timer("Packaging"):
            with self._lock:
                blocks = dict(self._blocks)

            binary = BinaryChunk()
            for c in blocks:
                set_ikj(binary.n_xzy, c.x, c.y, c.z)
                set_ikj(binary.p_xzy, c.x + 1, c.y, c.z)
                set_jik(binary.n_yxz, c.x, c.y, c.z)
                set_jik(binary.p_yxz, c.x, c.y, c.z)
                set_ikj(binary.n_zxy, c.z, c.y, c.x)
                set_ikj(binary.p_zxy, c.z + 1, c.y, c.x)

            for c in self._neighbour_keys(1, 0):
                if c.x == 0 and c.z < CHUNK_WIDTH_BLOCKS:
                    set_ikj(binary.n_xzy, CHUNK_WIDTH_BLOCKS, c.y, c.z)
            for c in self._neighbour_keys(0, 1):
                if c.z == 0 and c.x < CHUNK_WIDTH_BLOCKS:
                    set_ikj(binary.n_zxy, CHUNK_WIDTH_BLOCKS, c.y, c.x)
            for c in self._neighbour_keys(-1, 0):
                if c.x == _LAST and c.z < CHUNK_WIDTH_BLOCKS:
                    set_ikj(binary.p_xzy, 0, c.y, c.z)
            for c in self._neighbour_keys(0, -1):
                if c.z == _LAST and c.x < CHUNK_WIDTH_BLOCKS:
                    set_ikj(binary.p_zxy, 0, c.y, c.x)

            binary.face_bits_inplace()

            vertices: List[BlockVertex] = []
            for u in range(CHUNK_HEIGHT_BLOCKS):
                vertices.extend(self._row_faces(u, binary, blocks))
                vertices.extend(self._column_faces(u % 16, u // 16, binary, blocks))
            return vertices

    @staticmethod
    def _vertex(
        pos: BlockCoords, direction: BlockDirection, blocks: Mapping[BlockCoords, Block]
    ) -> BlockVertex:
        return BlockVertex(
            position=(float(pos.x), float(pos.y), float(pos.z)),
            normal=block_direction_to_normal(direction),
            tex_coords=blocks[pos].get_texture(direction),
        )

    def _row_faces(
        self, u: int, binary: BinaryChunk, blocks: Mapping[BlockCoords, Block]
    ) -> Iterator[BlockVertex]:
        n_xzy = to_u16_lanes(binary.n_xzy[u])
        p_xzy = to_u16_lanes(binary.p_xzy[u])
        n_zxy = to_u16_lanes(binary.n_zxy[u])
        p_zxy = to_u16_lanes(binary.p_zxy[u])
        for b in range(CHUNK_WIDTH_BLOCKS):
            for i in _set_bits(n_xzy[b], CHUNK_WIDTH_BLOCKS):
                yield self._vertex(BlockCoords(i, u, b), BlockDirection.FORWARD, blocks)
            for bit in _set_bits(p_xzy[b], CHUNK_WIDTH_BLOCKS + 1):
                if bit:
                    yield self._vertex(BlockCoords(bit - 1, u, b), BlockDirection.BACKWARD, blocks)
            for i in _set_bits(n_zxy[b], CHUNK_WIDTH_BLOCKS):
                yield self._vertex(BlockCoords(b, u, i), BlockDirection.RIGHT, blocks)
            for bit in _set_bits(p_zxy[b], CHUNK_WIDTH_BLOCKS + 1):
                if bit:
                    yield self._vertex(BlockCoords(b, u, bit - 1), BlockDirection.LEFT, blocks)

    def _column_faces(
        self, i: int, k: int, binary: BinaryChunk, blocks: Mapping[BlockCoords, Block]
    ) -> Iterator[BlockVertex]:
        down = to_u64_lanes(binary.n_yxz[k][i])
        up = to_u64_lanes(binary.p_yxz[k][i])
        for b in range(4):
            for bit in _set_bits(down[b], _LANE64_BITS):
                if bit == 63 and b == 0:
                    continue
                j = (b << 6) | (63 - bit)
                yield self._vertex(BlockCoords(i, j, k), BlockDirection.DOWN, blocks)
            for bit in _set_bits(up[b], _LANE64_BITS):
                j = (b << 6) | (63 - bit)
                yield self._vertex(BlockCoords(i, j, k), BlockDirection.UP, blocks)