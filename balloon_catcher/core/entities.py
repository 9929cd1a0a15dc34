"""
Entities
========

Balloon and Catcher models with their per-tick update rules.
Neither knows about the viewport beyond what is passed in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Any, Optional

from balloon_catcher.core.color import Color
from balloon_catcher.core.config_loader import CatcherConfig, GameConfig, get_config


@dataclass(eq=False)
class Balloon:
    """
    A falling balloon.

    Speed is fixed at spawn. Horizontal bobbing is keyed to a cosmetic clock
    rather than simulation time, so it never affects determinism of scoring.
    The uid is assigned by BalloonFactory; hand-built balloons keep 0.
    """
    x: float
    y: float
    radius: float
    speed: float
    color: Color
    points: int = 1
    bob_offset: float = 0.0
    string_length: float = 30.0
    bob_amplitude: float = 0.5
    bob_frequency: float = 1.0
    uid: int = 0

    @property
    def is_bonus(self) -> bool:
        return self.points > 1

    @property
    def bottom(self) -> float:
        """Leading (lowest) edge of the balloon."""
        return self.y + self.radius

    def update(self, dt: float, cosmetic_time: float) -> None:
        """
        Advance one tick.

        Args:
            dt: Simulation step in seconds.
            cosmetic_time: Wall-clock seconds driving the bob.
        """
        self.y += self.speed * dt
        self.x += math.sin(cosmetic_time * self.bob_frequency + self.bob_offset) * self.bob_amplitude

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uid": self.uid,
            "x": self.x,
            "y": self.y,
            "radius": self.radius,
            "color": self.color.as_tuple(),
            "points": self.points,
            "is_bonus": self.is_bonus,
            "string_length": self.string_length,
        }


class Catcher:
    """
    The container the player slides along the bottom of the viewport.

    Position comes from input via move_to(); color, tilt and the catch
    highlight ease towards rest in update().
    """

    def __init__(
        self,
        viewport_width: float,
        viewport_height: float,
        config: Optional[GameConfig] = None
    ):
        """
        Create a catcher centered horizontally.

        Args:
            viewport_width: Current viewport width.
            viewport_height: Current viewport height.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config: CatcherConfig = config.catcher
        self.width = self._config.width
        self.height = self._config.height

        self._viewport_width = viewport_width
        self.x = viewport_width / 2 - self.width / 2
        self.y = viewport_height - self._config.floor_offset
        self.x = self._clamp_x(self.x)
        self.last_x = self.x
        self.tilt = 0.0

        self.current_color = self._config.base_color
        self.rim_color = self.current_color.darken(self._config.rim_darken)
        self.start_color = self.current_color
        self.target_color = self.current_color
        self.color_transition = 1.0
        self.change_effect = 0.0

    def _clamp_x(self, x: float) -> float:
        upper = max(0.0, self._viewport_width - self.width)
        return max(0.0, min(x, upper))

    def move_to(self, target_x: float) -> None:
        """Center the catcher on target_x, clamped to the viewport, and tilt."""
        clamped = self._clamp_x(target_x - self.width / 2)
        self.x = clamped

        delta = clamped - self.last_x
        limit = self._config.tilt_limit
        self.tilt = max(-limit, min(limit, delta * self._config.tilt_per_pixel))
        self.last_x = clamped

    def resize(self, viewport_width: float, viewport_height: float) -> None:
        """Re-anchor to a new viewport size."""
        self._viewport_width = viewport_width
        self.y = viewport_height - self._config.floor_offset
        self.x = self._clamp_x(self.x)
        self.last_x = self.x

    def change_color(self, color: Color) -> None:
        """Start a transition to color and flash the catch highlight."""
        self.start_color = self.current_color
        self.target_color = color
        self.color_transition = 0.0
        self.change_effect = 1.0

    def update(self, dt: float) -> None:
        """Advance cosmetic easing by one tick."""
        if self.color_transition < 1.0:
            self.color_transition = min(1.0, self.color_transition + dt * self._config.color_rate)
            self.current_color = self.start_color.lerp(self.target_color, self.color_transition)
            self.rim_color = self.current_color.darken(self._config.rim_darken)

        # Per-tick decay, deliberately not scaled by dt
        self.tilt *= self._config.tilt_decay

        if self.change_effect > 0:
            self.change_effect = max(0.0, self.change_effect - dt * self._config.effect_decay_rate)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "tilt": self.tilt,
            "color": self.current_color.as_tuple(),
            "rim_color": self.rim_color.as_tuple(),
            "change_effect": self.change_effect,
        }
