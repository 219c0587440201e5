"""The game loop: input handling, world updates and player updates on a clock."""

from __future__ import annotations

import time
from typing import Callable, Optional, Tuple

from blockworld.blocks import BlockRegister
from blockworld.context import Context, GameTime
from blockworld.input import InputContext
from blockworld.log import LogLevel, TextColor, app_log, graphics_log
from blockworld.player import Controls, Player
from blockworld.world import DEFAULT_WORKERS, World

KEY_SPACE = 32
KEY_A = 65
KEY_D = 68
KEY_S = 83
KEY_W = 87
KEY_ESCAPE = 256
KEY_LEFT_SHIFT = 340

_KEY_CONTROLS = {
    KEY_W: Controls.FORWARD,
    KEY_S: Controls.BACKWARD,
    KEY_D: Controls.RIGHT,
    KEY_A: Controls.LEFT,
    KEY_SPACE: Controls.UP,
    KEY_LEFT_SHIFT: Controls.DOWN,
}

CursorSource = Callable[[], Tuple[float, float]]


class Game:
    """Owns the world, the player and the input state, and drives them in time."""

    def __init__(
        self,
        screen_width: int = 1080,
        screen_height: int = 720,
        fps: float = 60.0 / 2.0,
        ups: float = 60.0 / 2.0,
        *,
        render_load_distance: int = 12,
        workers: int = DEFAULT_WORKERS,
        seed: int = 1,
        cursor_source: Optional[CursorSource] = None,
    ) -> None:
        if fps <= 0 or ups <= 0:
            raise ValueError("frame and update rates must be positive")
        self.input_context = InputContext(
            screen_width_px=screen_width, screen_height_px=screen_height
        )
        self.cursor_source = cursor_source
        self.should_close = False
        self.context = Context(
            screen_width_px=screen_width,
            screen_height_px=screen_height,
            ch_shadow_window_distance=8,
            ch_render_load_distance=render_load_distance,
            timer=GameTime(frame_rate_seconds=1.0 / fps, game_update_rate_seconds=1.0 / ups),
            player_position=(0.0, 0.0, 0.0),
        )
        self.blocks = BlockRegister()
        self.world = World(self.blocks, self.context, ups, 10.0, seed, workers=workers)
        self.player = Player(self.world, self.context)

    def handle_input(self) -> None:
        """Apply the input gathered since the last update to the player and context."""
        inputs = self.input_context
        self.context.screen_width_px = inputs.screen_width_px
        self.context.screen_height_px = inputs.screen_height_px

        for key, held in sorted(inputs.key_cache.items()):
            if not held:
                continue
            if key == KEY_ESCAPE:
                self.should_close = True
            elif key in _KEY_CONTROLS:
                self.player.move(_KEY_CONTROLS[key])

        if inputs.cached_x_offset != 0 or inputs.cached_y_offset != 0:
            self.player.turn(inputs.cached_x_offset, -inputs.cached_y_offset)
            inputs.cached_x_offset = 0.0
            inputs.cached_y_offset = 0.0

        if inputs.reset_flag:
            graphics_log().print(LogLevel.INFO, TextColor.WHITE, "Reset mouse.")
            if self.cursor_source is not None:
                inputs.last_x, inputs.last_y = self.cursor_source()
            inputs.reset_flag = False

        if inputs.right_click_press:
            self.player.place_block()
        if inputs.left_click_press:
            self.player.break_block()

        if inputs.left_click_release:
            inputs.left_click_press = False
            inputs.left_click_release = False
        if inputs.right_click_release:
            inputs.right_click_press = False
            inputs.right_click_release = False
        if inputs.middle_click_release:
            inputs.middle_click_press = False
            inputs.middle_click_release = False

        self.player.zoom(inputs.scroll_amount)
        inputs.scroll_amount = 0.0

    def update(self) -> None:
        """Advance the world by one game tick."""
        self.world.update()

    def handle_context(self) -> None:
        """Advance the player by one frame."""
        self.player.update()

    def tick(self, now: float) -> None:
        """One pass of the main loop at clock time ``now`` in seconds."""
        timer = self.context.timer
        if timer.last_time_seconds - timer.last_update_time_seconds >= timer.game_update_rate_seconds:
            timer.last_update_time_seconds = timer.last_time_seconds
            self.handle_input()
            self.update()
        if timer.last_time_seconds - timer.last_frame_time_seconds >= timer.frame_rate_seconds:
            timer.last_frame_time_seconds = timer.last_time_seconds
            self.handle_context()
        timer.delta_time_seconds = now - timer.last_time_seconds
        timer.last_time_seconds = now

    def run(self, clock: Callable[[], float] = time.perf_counter) -> int:
        """Tick until the game is asked to close; return the exit status."""
        while not self.should_close:
            self.tick(clock())
        return 0

    def close(self) -> None:
        """Shut the world down."""
        self.world.close()
        app_log().print(LogLevel.INFO, TextColor.WHITE, "Application terminated.")

    def __enter__(self) -> "Game":
        return self

    def __exit__(self, *args) -> None:
        self.close()