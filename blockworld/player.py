"""The player: a free-flying camera that can place and break blocks."""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Tuple

from blockworld.blocks import WorldBlockCoords
from blockworld.context import Context, Matrix4
from blockworld.world import World

Vec3 = Tuple[float, float, float]

WORLD_UP: Vec3 = (0.0, 1.0, 0.0)
SPEED = 40.0 / 60.0
SPRINT_SPEED = 100.0 / 60.0

YAW = -90.0
PITCH = 0.0
REACH = 10.0
SENSITIVITY = 0.1
ZOOM = 30.0
CLICK_COOLDOWN_SECONDS = 0.1
SPAWN_POINT: Vec3 = (0.0, 60.0, 0.0)

MIN_FOV = 1.0
MAX_FOV = 45.0
PITCH_LIMIT = 89.9
_CLICK_COOLDOWN_TICKS = int(CLICK_COOLDOWN_SECONDS * 60)
_WORLD_HEIGHT = 256.0


class Controls(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    RIGHT = "right"
    LEFT = "left"
    UP = "up"
    DOWN = "down"


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(a: Tuple[float, ...]) -> float:
    return math.sqrt(sum(c * c for c in a))


def _normalize(a: Vec3) -> Vec3:
    length = _length(a)
    if length == 0.0:
        raise ValueError("cannot normalize a zero vector")
    return _scale(a, 1.0 / length)


def _ieee_div(a: float, b: float) -> float:
    """Division that yields inf or nan on a zero divisor instead of raising."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def perspective(fovy: float, aspect: float, near: float, far: float) -> Matrix4:
    """Right-handed perspective projection, as columns (``m[column][row]``)."""
    if far == near:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    if tan_half == 0.0 or aspect == 0.0:
        raise ValueError("field of view and aspect ratio must be non-zero")
    depth = far - near
    return (
        (1.0 / (aspect * tan_half), 0.0, 0.0, 0.0),
        (0.0, 1.0 / tan_half, 0.0, 0.0),
        (0.0, 0.0, -(far + near) / depth, -1.0),
        (0.0, 0.0, -(2.0 * far * near) / depth, 0.0),
    )


def look_at(eye: Vec3, center: Vec3, up: Vec3) -> Matrix4:
    """Right-handed view matrix, as columns (``m[column][row]``)."""
    f = _normalize(_sub(center, eye))
    s = _normalize(_cross(f, up))
    u = _cross(s, f)
    return (
        (s[0], u[0], -f[0], 0.0),
        (s[1], u[1], -f[1], 0.0),
        (s[2], u[2], -f[2], 0.0),
        (-_dot(s, eye), -_dot(u, eye), _dot(f, eye), 1.0),
    )


class _Ray:
    """Voxel traversal state along the player's view direction."""

    def __init__(self, position: Vec3, front: Vec3) -> None:
        start = _add(position, (0.5, 0.5, 0.5))
        self.unit = [
            _length(tuple(_ieee_div(c, axis) for c in front)) for axis in front
        ]
        self.pos = [
            math.floor(start[0]),
            math.floor(start[1]) & 0xFF,
            math.floor(start[2]),
        ]
        self.step: List[int] = []
        self.length: List[float] = []
        for direction, origin, cell, unit in zip(front, start, self.pos, self.unit):
            if direction < 0:
                self.step.append(-1)
                self.length.append((origin - float(cell)) * unit)
            else:
                self.step.append(1)
                self.length.append((float(cell + 1) - origin) * unit)

    def ambiguous(self) -> bool:
        x, y, z = self.length
        return x == y or x == z or y == z

    def advance(self) -> float:
        """Step into the next cell; return the distance travelled so far."""
        x, y, z = self.length
        if x < y and x < z:
            axis = 0
        elif y < z:
            axis = 1
        else:
            axis = 2
        self.pos[axis] += self.step[axis]
        if axis == 1:
            self.pos[1] &= 0xFF
        distance = self.length[axis]
        self.length[axis] += self.unit[axis]
        return distance

    @property
    def coords(self) -> WorldBlockCoords:
        return WorldBlockCoords(self.pos[0], self.pos[1], self.pos[2])


class Player:
    """Camera position and orientation, movement and block interaction."""

    def __init__(
        self,
        world: World,
        render_context: Context,
        position: Vec3 = SPAWN_POINT,
        yaw: float = YAW,
        pitch: float = PITCH,
        fov: float = ZOOM,
        mouse_sensitivity: float = SENSITIVITY,
    ) -> None:
        self.world = world
        self.render_context = render_context
        self._position: Vec3 = tuple(float(c) for c in position)
        self._displacement: Vec3 = (0.0, 0.0, 0.0)
        self.yaw = float(yaw)
        self.pitch = float(pitch)
        self.fov = float(fov)
        self.mouse_sensitivity = float(mouse_sensitivity)
        self.movement_speed = SPEED
        self.reach = REACH
        self.sprinting = False
        self.click_cooldown = 0
        self._update_view = False
        self._update_projection = False
        self.front: Vec3 = (0.0, 0.0, -1.0)
        self.right: Vec3 = (1.0, 0.0, 0.0)
        self.up: Vec3 = WORLD_UP
        self.right_screen: Vec3 = (1.0, 0.0, 0.0)
        self._update_vectors()

    @property
    def position(self) -> Vec3:
        return self._position

    def update(self) -> None:
        """Apply queued movement, tick the click cooldown and refresh the context."""
        self.movement_speed = SPRINT_SPEED if self.sprinting else SPEED
        if self._displacement != (0.0, 0.0, 0.0):
            self._position = _add(
                self._position, _scale(_normalize(self._displacement), self.movement_speed)
            )
            self._displacement = (0.0, 0.0, 0.0)
        if self.click_cooldown:
            self.click_cooldown -= 1
        self._update_render_context()

    def move(self, direction: Controls) -> None:
        """Queue a step in ``direction``; steps are combined on the next update."""
        offsets = {
            Controls.FORWARD: self.front,
            Controls.BACKWARD: _scale(self.front, -1.0),
            Controls.RIGHT: self.right,
            Controls.LEFT: _scale(self.right, -1.0),
            Controls.UP: WORLD_UP,
            Controls.DOWN: _scale(WORLD_UP, -1.0),
        }
        try:
            offset = offsets[direction]
        except KeyError:
            raise ValueError(f"unknown control: {direction!r}") from None
        self._displacement = _add(self._displacement, offset)
        self._update_view = True

    def zoom(self, yoffset: float) -> None:
        """Narrow the field of view by ``yoffset`` degrees, within its limits."""
        self.fov -= yoffset
        if self.fov < MIN_FOV:
            self.fov = MIN_FOV
            return
        if self.fov > MAX_FOV:
            self.fov = MAX_FOV
            return
        self._update_projection = True

    def turn(self, xoffset: float, yoffset: float, constrain_pitch: bool = True) -> None:
        """Rotate by mouse offsets scaled by the sensitivity."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch += yoffset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = max(-PITCH_LIMIT, min(PITCH_LIMIT, self.pitch))
        self._update_vectors()

    def _can_click(self) -> bool:
        if self.click_cooldown != 0:
            return False
        if self._position[1] <= 0.0 or self._position[1] >= _WORLD_HEIGHT:
            return False
        self.click_cooldown = _CLICK_COOLDOWN_TICKS
        return True

    def place_block(self) -> None:
        """Put cobblestone in front of the first block hit within reach."""
        if not self._can_click():
            return
        ray = _Ray(self._position, self.front)
        last = ray.coords
        distance = 0.0
        while distance < self.reach:
            if ray.ambiguous():
                break
            distance = ray.advance()
            current = ray.coords
            if self.world.check_block(current):
                self.world.set_block(self.world.block_register.cobblestone, last)
                break
            last = current

    def break_block(self) -> None:
        """Remove the first block hit within reach."""
        if not self._can_click():
            return
        ray = _Ray(self._position, self.front)
        distance = 0.0
        while distance < self.reach:
            if ray.ambiguous():
                break
            current = ray.coords
            if self.world.check_block(current):
                self.world.destroy_block(current)
                break
            distance = ray.advance()

    def _update_vectors(self) -> None:
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        self.front = _normalize(
            (math.cos(yaw) * math.cos(pitch), math.sin(pitch), math.sin(yaw) * math.cos(pitch))
        )
        self.right = _normalize(_cross(self.front, WORLD_UP))
        self.up = _normalize(_cross(self.right, self.front))
        self.right_screen = _normalize(_cross(self.up, self.front))
        self._update_view = True

    def _update_render_context(self) -> None:
        ctx = self.render_context
        if self._update_projection:
            aspect = (
                ctx.screen_width_px / ctx.screen_height_px if ctx.screen_height_px else math.inf
            )
            ctx.projection_matrix = perspective(
                math.radians(self.fov),
                aspect,
                0.1,
                (ctx.ch_render_load_distance + 3.0) * 15.0,
            )
        if self._update_view:
            ctx.view_matrix = look_at(
                self._position, _add(self._position, self.front), self.up
            )
        ctx.player_position = self._position
        self._update_projection = False
        self._update_view = False