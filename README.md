# blockworld

A voxel world simulation in pure Python, with no third-party dependencies.
The world is split into chunks of 15 × 15 × 256 blocks that are generated from
layered gradient noise, loaded and unloaded around a moving player, and turned
into lists of exposed block faces (`BlockVertex` values) ready for a renderer.

## Modules

- `blockworld.log`: `Log`, a levelled logger writing ANSI-coloured lines
  (`LogLevel`, `TextColor`), and the shared `app_log()` and `graphics_log()`.
- `blockworld.blocks`: block kinds (`BlockType`, `Block`, `BlockRegister`),
  coordinates (`BlockCoords`, `WorldBlockCoords`), face directions
  (`BlockDirection`, `block_direction_to_normal`), texture atlas data
  (`TexData`, `CubeTexData`, `make_cube_tex_data`, `make_pillar_tex_data`)
  and `BlockVertex`.
- `blockworld.bitops`: 256-bit values held as ints, split into 16- or 64-bit
  lanes, shifted lane-wise, filtered to face bits, and `BinaryChunk`, the bit
  grids used to find exposed faces.
- `blockworld.chunk_data`: chunk dimensions, `ChunkCoords` and `ChunkFlag`.
- `blockworld.chunkset`: `ChunkSet`, a 16 × 256 × 16 occupancy bit space with
  its axis-reordered views (`data_xzy`, `data_zxy`, `data_yxz`,
  `aligned_data`) and `exposed_face_map`.
- `blockworld.noise`: `PerlinNoiseGenerator`, seeded 2D gradient noise whose
  `sample_2d` result is clamped to [-1, 1].
- `blockworld.day_cycle`: `DayLightCycle`, game time and sun angle advanced
  once per tick.
- `blockworld.thread_list`: `ThreadList`, a worker pool that finishes its
  queued tasks before closing; usable as a context manager.
- `blockworld.timer`: `Timer`, a context manager that logs elapsed
  milliseconds at debug level.
- `blockworld.chunk`: `Chunk`, block storage for one chunk. `update()`
  rebuilds `chunk.mesh` when blocks have changed and all four horizontal
  neighbours are loaded; `package_render_data()` returns one vertex per
  uncovered face.
- `blockworld.world_generator`: `WorldGenerator`, terrain with water, sand,
  grass, dirt and stone layers.
- `blockworld.world`: `World`, chunk loading around the player on a thread
  pool (or in the calling thread with `workers=0`), block access by world
  coordinates, and `decompose_coordinates`.
- `blockworld.player`: `Player` movement, turning, zoom, and ray-cast
  `place_block` (cobblestone) and `break_block`, plus the `perspective` and
  `look_at` matrix helpers.
- `blockworld.input`: `InputContext`, which collects cursor, button, key,
  scroll and window-size events through its `on_*` methods.
- `blockworld.context`: `Context` and `GameTime`, the state shared between the
  world, the player and the main loop.
- `blockworld.game`: `Game`, which owns the world, player and input state and
  advances them with `tick(now)` or `run()`.

## Examples

Sample terrain noise:

```python
from blockworld.noise import PerlinNoiseGenerator

noise = PerlinNoiseGenerator(38513759)
value = noise.sample_2d(12.5, -3.25)   # always within [-1.0, 1.0]
```

Split a world position into the chunk and the block inside it:

```python
from blockworld.blocks import WorldBlockCoords
from blockworld.world import decompose_coordinates

chunk_coords, block_coords = decompose_coordinates(WorldBlockCoords(x=-1, y=64, z=31))
# ChunkCoords(x=-1, z=2), BlockCoords(x=14, y=64, z=1)
```

Look up block textures in the atlas:

```python
from blockworld.blocks import BlockDirection, BlockRegister

blocks = BlockRegister()
blocks.grass.get_texture(BlockDirection.UP)   # (2.0, 0.0)
blocks.air.is_air()                           # True
```

Drive a small game synchronously, feeding it input events:

```python
from blockworld.game import KEY_W, Game
from blockworld.input import KeyAction

with Game(render_load_distance=2, workers=0) as game:
    game.input_context.on_key(KEY_W, KeyAction.PRESS)
    for step in range(10):
        game.tick(step / 30.0)
    print(game.player.position)
```

## What it does not do

There is no window, no drawing and no sound: the package produces face
vertices, camera matrices and sky timing for a renderer but renders nothing
itself, and input arrives only through the `InputContext.on_*` methods.
There is no command-line program. Chunks are not saved; an unloaded chunk is
generated again from the seed when it is next needed, and edits to it are
lost.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.