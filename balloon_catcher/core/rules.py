"""
Game Rules
==========

Collision test, floor-crossing and cleanup conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from balloon_catcher.core.config_loader import GameConfig, get_config
from balloon_catcher.core.entities import Balloon, Catcher


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, y grows downward."""
    x: float
    y: float
    w: float
    h: float


def catcher_rect(catcher: Catcher) -> Rect:
    """Bounding rectangle of the catcher (tilt is cosmetic and ignored)."""
    return Rect(catcher.x, catcher.y, catcher.width, catcher.height)


def circle_overlaps_rect(x: float, y: float, r: float, rect: Rect) -> bool:
    """
    Circle-vs-rectangle overlap, approximated by expanding the rectangle
    by r on every side. Touching edges do not count.
    """
    return (
        x + r > rect.x
        and x - r < rect.x + rect.w
        and y + r > rect.y
        and y - r < rect.y + rect.h
    )


def is_caught(balloon: Balloon, catcher: Catcher) -> bool:
    """True if the balloon overlaps the catcher."""
    return circle_overlaps_rect(balloon.x, balloon.y, balloon.radius, catcher_rect(catcher))


class FloorRules:
    """
    Floor conditions.

    - Floor crossing: leading edge at or past the viewport bottom ends the run
    - Cleanup: balloons far past the floor are dropped without effect
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize floor rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._cleanup_margin = config.loop.cleanup_margin

    @property
    def cleanup_margin(self) -> float:
        return self._cleanup_margin

    def crossed_floor(self, balloon: Balloon, floor_y: float) -> bool:
        """True once the balloon's bottom edge reaches floor_y."""
        return balloon.bottom >= floor_y

    def needs_cleanup(self, balloon: Balloon, floor_y: float) -> bool:
        """True if the balloon is far enough past the floor to discard."""
        return balloon.y > floor_y + self._cleanup_margin
