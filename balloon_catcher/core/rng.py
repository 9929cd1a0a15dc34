"""
RNG - Balloon Factory
=====================

Rolls every random attribute of a new balloon from one seeded generator,
so a seed reproduces the whole spawn sequence.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from balloon_catcher.core.config_loader import GameConfig, get_config
from balloon_catcher.core.entities import Balloon


class BalloonFactory:
    """
    Creates balloons at spawn time.

    Each spawn draws, in order: x position, radius, speed jitter, palette
    color, bob phase, string length, bonus roll.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize balloon factory.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config.balloon
        self._rng = random.Random(seed)
        self._spawned: int = 0
        self._bonus_spawned: int = 0
        self._next_uid: int = 1

    @property
    def spawned(self) -> int:
        """Balloons created since the last reset."""
        return self._spawned

    @property
    def bonus_spawned(self) -> int:
        """Bonus balloons created since the last reset."""
        return self._bonus_spawned

    def spawn_x(self, viewport_width: float) -> float:
        """Random x keeping spawn_margin clear of both walls."""
        margin = self._config.spawn_margin
        span = max(0.0, viewport_width - 2 * margin)
        return self._rng.random() * span + margin

    def create(self, viewport_width: float, base_speed: float) -> Balloon:
        """
        Create a balloon above the viewport.

        Args:
            viewport_width: Current viewport width.
            base_speed: Fall speed from the difficulty controller.

        Returns:
            A new Balloon. About bonus_probability of them are bonus balloons.
        """
        cfg = self._config
        rng = self._rng

        x = self.spawn_x(viewport_width)
        radius = cfg.base_radius + rng.random() * cfg.radius_jitter
        speed = base_speed + rng.random() * 2 * cfg.speed_jitter - cfg.speed_jitter
        color = cfg.palette[rng.randrange(len(cfg.palette))]
        bob_offset = rng.random() * math.pi * 2
        string_length = cfg.string_length + rng.random() * cfg.string_jitter
        points = cfg.points

        if rng.random() < cfg.bonus_probability:
            points = cfg.bonus_points
            color = cfg.bonus_color
            radius += cfg.bonus_radius_bonus
            self._bonus_spawned += 1

        self._spawned += 1
        uid = self._next_uid
        self._next_uid += 1
        return Balloon(
            x=x,
            y=cfg.spawn_y,
            radius=radius,
            speed=speed,
            color=color,
            points=points,
            bob_offset=bob_offset,
            string_length=string_length,
            bob_amplitude=cfg.bob_amplitude,
            bob_frequency=cfg.bob_frequency,
            uid=uid
        )

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset counters, optionally reseeding. Balloon uids restart at 1.

        Args:
            seed: New random seed. Keeps current generator if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._spawned = 0
        self._bonus_spawned = 0
        self._next_uid = 1
