"""Day and night progression measured in game days."""

from __future__ import annotations

from blockworld.log import LogLevel, TextColor, app_log

_FULL_TURN = 6.2831855
_YEAR_DAYS = 365.0


def game_days_per_tick(minutes_per_game_day: float, ticks_per_second: float) -> float:
    """Fraction of a game day that passes in one tick."""
    if minutes_per_game_day <= 0 or ticks_per_second <= 0:
        raise ValueError("day length and tick rate must be positive")
    return 1.0 / (minutes_per_game_day * 60.0 * ticks_per_second)


class DayLightCycle:
    """Game time and sun angle, advanced one tick per update."""

    def __init__(self, minutes_per_game_day: float, ticks_per_second: float) -> None:
        self.game_days_per_tick = game_days_per_tick(minutes_per_game_day, ticks_per_second)
        self.time_game_days = 0.0
        self.sun_angle = 0.0
        self.update()

    def update(self) -> None:
        """Advance one tick; time wraps to zero after a year of days."""
        self.time_game_days += self.game_days_per_tick
        if self.time_game_days >= _YEAR_DAYS:
            self.time_game_days = 0.0
        self.sun_angle = _FULL_TURN * self.time_game_days
        app_log().print(LogLevel.DEBUG, TextColor.GREEN, "Time: %f", self.time_game_days)