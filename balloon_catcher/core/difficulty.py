"""
Difficulty Controller
=====================

Derives spawn delay and fall speed from elapsed play time.
"""

from __future__ import annotations

from typing import Optional

from balloon_catcher.core.config_loader import GameConfig, get_config


class DifficultyController:
    """
    Linear difficulty ramp.

    - Spawn delay shrinks from base_spawn_delay, floored at min_spawn_delay
    - Fall speed grows from base_speed, capped at max_speed

    Stateless: both values are pure functions of elapsed time.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize difficulty controller.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config.difficulty

    def spawn_delay(self, elapsed: float) -> float:
        """Seconds between spawns after elapsed seconds of play."""
        elapsed = max(0.0, elapsed)
        d = self._config
        return max(d.min_spawn_delay, d.base_spawn_delay - elapsed * d.spawn_ramp)

    def fall_speed(self, elapsed: float) -> float:
        """Base fall speed for balloons spawned after elapsed seconds of play."""
        elapsed = max(0.0, elapsed)
        d = self._config
        return min(d.max_speed, d.base_speed + elapsed * d.speed_ramp)

    @property
    def min_spawn_delay(self) -> float:
        return self._config.min_spawn_delay

    @property
    def max_speed(self) -> float:
        return self._config.max_speed
