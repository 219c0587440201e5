"""Shared per-frame state read by the world, the player and the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

Vec3 = Tuple[float, float, float]
Matrix4 = Tuple[Tuple[float, float, float, float], ...]

_DEFAULT_RATE_SECONDS = 1.0 / 30.0


def _identity() -> Matrix4:
    return tuple(
        tuple(1.0 if row == column else 0.0 for column in range(4)) for row in range(4)
    )


@dataclass
class GameTime:
    """Clock state of the main loop, in seconds."""

    frame_rate_seconds: float
    game_update_rate_seconds: float
    last_time_seconds: float = 0.0
    delta_time_seconds: float = 0.0
    last_frame_time_seconds: float = 0.0
    last_update_time_seconds: float = 0.0


def _default_timer() -> GameTime:
    return GameTime(
        frame_rate_seconds=_DEFAULT_RATE_SECONDS,
        game_update_rate_seconds=_DEFAULT_RATE_SECONDS,
    )


@dataclass
class Context:
    """Screen size, camera matrices, view distances, clock and player position."""

    screen_width_px: int = 0
    screen_height_px: int = 0
    view_matrix: Matrix4 = field(default_factory=_identity)
    projection_matrix: Matrix4 = field(default_factory=_identity)
    ch_shadow_window_distance: int = 8
    ch_render_load_distance: int = 8
    timer: GameTime = field(default_factory=_default_timer)
    player_position: Vec3 = (0.0, 0.0, 0.0)