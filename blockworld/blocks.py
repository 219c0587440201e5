"""Block types, coordinates, textures and the registry of known blocks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

from blockworld.log import LogLevel, TextColor, app_log

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


class BlockDirection(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    FORWARD = "forward"
    BACKWARD = "backward"


class BlockTextureType(Enum):
    CUBE = "cube"
    PILLAR = "pillar"


class BlockType(IntEnum):
    AIR = 0
    DIRT = 1
    GRASS = 2
    STONE = 3
    COBBLESTONE = 4
    SAND = 5
    GRAVEL = 6
    WOOD = 7
    WATER = 8
    LEAVES = 9


_COORD_LIMIT = 256


@dataclass(frozen=True)
class BlockCoords:
    """Position of a block inside a chunk; each axis is one byte."""

    x: int
    y: int
    z: int

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            value = getattr(self, name)
            if not 0 <= value < _COORD_LIMIT:
                raise ValueError(f"block coordinate {name}={value} outside 0..255")

    @property
    def index(self) -> int:
        """Packed form: x in the low byte, then y, then z."""
        return self.x | (self.y << 8) | (self.z << 16)

    @classmethod
    def from_index(cls, index: int) -> "BlockCoords":
        return cls(index & 0xFF, (index >> 8) & 0xFF, (index >> 16) & 0xFF)

    def __hash__(self) -> int:
        return self.index


@dataclass(frozen=True)
class WorldBlockCoords:
    """Absolute block position in the world."""

    x: int
    y: int
    z: int


@dataclass(frozen=True)
class TexData:
    """Tile position of a texture inside the block atlas."""

    x: int
    y: int


@dataclass(frozen=True)
class CubeTexData:
    front: TexData
    back: TexData
    right: TexData
    left: TexData
    up: TexData
    down: TexData


def make_cube_tex_data(side: TexData) -> CubeTexData:
    """Texture data with the same tile on all six faces."""
    return CubeTexData(front=side, back=side, right=side, left=side, up=side, down=side)


def make_pillar_tex_data(top: TexData, side: TexData, bottom: TexData) -> CubeTexData:
    """Texture data with distinct top and bottom tiles and one side tile."""
    return CubeTexData(front=side, back=side, right=side, left=side, up=top, down=bottom)


_NORMALS = {
    BlockDirection.UP: (0.0, 1.0, 0.0),
    BlockDirection.DOWN: (0.0, -1.0, 0.0),
    BlockDirection.RIGHT: (0.0, 0.0, 1.0),
    BlockDirection.LEFT: (0.0, 0.0, -1.0),
    BlockDirection.FORWARD: (1.0, 0.0, 0.0),
    BlockDirection.BACKWARD: (-1.0, 0.0, 0.0),
}


def block_direction_to_normal(direction: BlockDirection) -> Vec3:
    """Unit normal of the face pointing in ``direction``."""
    try:
        return _NORMALS[direction]
    except KeyError:
        raise ValueError(f"unknown block direction: {direction!r}") from None


@dataclass(frozen=True)
class BlockVertex:
    """One face of a block as sent to the renderer."""

    position: Vec3
    normal: Vec3
    tex_coords: Vec2

    @property
    def data(self) -> Tuple[float, ...]:
        """The eight floats of the vertex, in layout order."""
        return tuple(float(v) for v in (*self.position, *self.normal, *self.tex_coords))


_FACE_FIELDS = {
    BlockDirection.UP: "up",
    BlockDirection.DOWN: "down",
    BlockDirection.FORWARD: "front",
    BlockDirection.BACKWARD: "back",
    BlockDirection.RIGHT: "right",
    BlockDirection.LEFT: "left",
}


@dataclass(frozen=True)
class Block:
    """A block kind together with its face textures."""

    block_type: BlockType = BlockType.AIR
    texture_data: Optional[CubeTexData] = None

    def is_air(self) -> bool:
        return self.block_type is BlockType.AIR

    def get_texture(self, direction: BlockDirection) -> Vec2:
        """Atlas tile of the face pointing in ``direction``."""
        if self.texture_data is None:
            raise ValueError(f"{self.block_type.name} block has no texture")
        try:
            tile = getattr(self.texture_data, _FACE_FIELDS[direction])
        except KeyError:
            raise ValueError(f"unknown block direction: {direction!r}") from None
        return (float(tile.x), float(tile.y))


class BlockRegister:
    """The fixed set of blocks the game knows about."""

    def __init__(self) -> None:
        self.air = Block()
        self.dirt = Block(BlockType.DIRT, make_cube_tex_data(TexData(0, 0)))
        self.grass = Block(
            BlockType.GRASS,
            make_pillar_tex_data(TexData(2, 0), TexData(1, 0), TexData(0, 0)),
        )
        self.full_grass = Block(BlockType.GRASS, make_cube_tex_data(TexData(2, 0)))
        self.stone = Block(BlockType.STONE, make_cube_tex_data(TexData(3, 0)))
        self.cobblestone = Block(BlockType.COBBLESTONE, make_cube_tex_data(TexData(4, 0)))
        self.sand = Block(BlockType.SAND, make_cube_tex_data(TexData(5, 0)))
        self.gravel = Block(BlockType.GRAVEL, make_cube_tex_data(TexData(6, 0)))
        self.logs = Block(
            BlockType.WOOD,
            make_pillar_tex_data(TexData(9, 0), TexData(7, 0), TexData(9, 0)),
        )
        self.water = Block(BlockType.WATER, make_cube_tex_data(TexData(10, 0)))
        self.leaves = Block(BlockType.LEAVES, make_cube_tex_data(TexData(11, 0)))
        app_log().print(LogLevel.INFO, TextColor.WHITE, "Blocks initialized.")