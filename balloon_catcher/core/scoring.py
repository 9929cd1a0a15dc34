"""
Scoring System
==============

Awards catch points and picks the end-of-run message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from balloon_catcher.core.color import Color
from balloon_catcher.core.config_loader import GameConfig, get_config


@dataclass
class CatchEvent:
    """Record of a caught balloon, for audio and particle effects."""
    points: int
    x: float
    y: float
    color: Color

    @property
    def is_bonus(self) -> bool:
        return self.points > 1

    def __repr__(self) -> str:
        if self.is_bonus:
            return f"CatchEvent(bonus={self.points})"
        return f"CatchEvent(points={self.points})"


class ScoreTracker:
    """
    Tracks the run's score and catch counts.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._score: int = 0
        self._catches: int = 0
        self._bonus_catches: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def catches(self) -> int:
        """Balloons caught this run."""
        return self._catches

    @property
    def bonus_catches(self) -> int:
        """Bonus balloons caught this run."""
        return self._bonus_catches

    def apply_catch(self, points: int, x: float, y: float, color: Color) -> CatchEvent:
        """
        Add points for a caught balloon and return the event.

        Args:
            points: Balloon point value.
            x: Balloon x at the moment of the catch.
            y: Balloon y at the moment of the catch.
            color: Balloon color.

        Returns:
            CatchEvent describing the catch.
        """
        event = CatchEvent(points=points, x=x, y=y, color=color)
        self._score += points
        self._catches += 1
        if event.is_bonus:
            self._bonus_catches += 1
        return event

    def final_message(self, score: Optional[int] = None) -> str:
        """
        End-of-run message for a score.

        Args:
            score: Score to rate. Uses current score if None.

        Returns:
            Message of the highest tier whose threshold the score meets.
        """
        if score is None:
            score = self._score
        return message_for_score(score, self._config)

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._catches = 0
        self._bonus_catches = 0


def message_for_score(score: int, config: Optional[GameConfig] = None) -> str:
    """Look up the end-of-run message; tiers are sorted highest first."""
    if config is None:
        config = get_config()
    for tier in config.scoring.messages:
        if score >= tier.threshold:
            return tier.message
    return config.scoring.default_message
