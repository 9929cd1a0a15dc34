"""
Color
=====

Small typed RGB value with the interpolation helpers the catcher needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


def _clamp_channel(value: float) -> int:
    return int(max(0, min(255, round(value))))


@dataclass(frozen=True)
class Color:
    """RGB color with channels bounded to [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        # Frozen dataclass: bypass __setattr__ to store clamped channels
        object.__setattr__(self, "r", _clamp_channel(self.r))
        object.__setattr__(self, "g", _clamp_channel(self.g))
        object.__setattr__(self, "b", _clamp_channel(self.b))

    def lerp(self, other: "Color", factor: float) -> "Color":
        """
        Linearly interpolate towards another color.

        Args:
            other: Target color.
            factor: Interpolation factor, clamped to [0, 1].

        Returns:
            Interpolated color (channels rounded).
        """
        t = max(0.0, min(1.0, factor))
        return Color(
            self.r + (other.r - self.r) * t,
            self.g + (other.g - self.g) * t,
            self.b + (other.b - self.b) * t
        )

    def darken(self, factor: float) -> "Color":
        """Scale every channel by factor (0.8 keeps 80% brightness)."""
        return Color(self.r * factor, self.g * factor, self.b * factor)

    def as_tuple(self) -> Tuple[int, int, int]:
        """Channels as a plain tuple (pygame accepts these directly)."""
        return (self.r, self.g, self.b)

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"
