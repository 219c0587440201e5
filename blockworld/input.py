"""Window input events collected between game updates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional


class MouseButton(IntEnum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class KeyAction(IntEnum):
    RELEASE = 0
    PRESS = 1
    REPEAT = 2


@dataclass
class InputContext:
    """Input state accumulated from window callbacks until the game consumes it."""

    screen_width_px: int = 1080
    screen_height_px: int = 720
    scroll_amount: float = 0.0
    key_cache: Dict[int, bool] = field(default_factory=dict)
    last_x: Optional[float] = None
    last_y: Optional[float] = None
    cached_x_offset: float = 0.0
    cached_y_offset: float = 0.0
    reset_flag: bool = False
    right_click_press: bool = False
    left_click_press: bool = False
    middle_click_press: bool = False
    right_click_release: bool = False
    left_click_release: bool = False
    middle_click_release: bool = False

    def __post_init__(self) -> None:
        if self.last_x is None:
            self.last_x = self.screen_width_px / 2.0
        if self.last_y is None:
            self.last_y = self.screen_height_px / 2.0

    def on_cursor_pos(self, x: float, y: float) -> None:
        """Accumulate the cursor movement since the last known position."""
        self.cached_x_offset += x - self.last_x
        self.cached_y_offset += y - self.last_y
        self.last_x = x
        self.last_y = y

    def on_mouse_button(self, button: int, action: int) -> None:
        """Record a press or release of the left, right or middle button."""
        try:
            button = MouseButton(button)
            action = KeyAction(action)
        except ValueError:
            return
        if action is KeyAction.REPEAT:
            return
        pressed = action is KeyAction.PRESS
        name = button.name.lower()
        suffix = "press" if pressed else "release"
        setattr(self, f"{name}_click_{suffix}", True)

    def on_key(self, key: int, action: int) -> None:
        """Mark ``key`` as held on press and as released on release."""
        if action == KeyAction.PRESS:
            self.key_cache[key] = True
        elif action == KeyAction.RELEASE:
            self.key_cache[key] = False

    def on_scroll(self, xoffset: float, yoffset: float) -> None:
        """Accumulate vertical scrolling; horizontal scrolling is ignored."""
        self.scroll_amount += yoffset

    def on_framebuffer_size(self, width: int, height: int) -> None:
        self.screen_width_px = width
        self.screen_height_px = height

    def on_cursor_enter(self, entered: bool) -> None:
        """Ask for the cursor position to be re-read once it enters the window."""
        if entered:
            self.reset_flag = True