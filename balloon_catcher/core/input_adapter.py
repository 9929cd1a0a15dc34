"""
Pointer Input
=============

Turns mouse and touch events into the single target X the game reads
each tick. Later events overwrite earlier ones; nothing is queued.
"""

from __future__ import annotations

from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False


class PointerInput:
    """
    InputSource fed by pointer events.

    Screen coordinates are scaled into viewport coordinates, so a window
    drawn at a different size than the simulation still tracks correctly.
    """

    def __init__(self):
        self._target_x: Optional[float] = None
        self._tracking: bool = False

    @property
    def current_target_x(self) -> Optional[float]:
        return self._target_x

    @property
    def is_tracking(self) -> bool:
        """True while a button or finger is down."""
        return self._tracking

    def on_pointer(
        self,
        screen_x: float,
        surface_width: float,
        viewport_width: float,
        pressed: bool = True
    ) -> None:
        """
        Record a pointer position.

        Args:
            screen_x: Pointer X on the drawing surface.
            surface_width: Width of the drawing surface.
            viewport_width: Width of the simulated viewport.
            pressed: Whether this event starts or continues a press.
        """
        if surface_width <= 0:
            return
        self._target_x = screen_x * (viewport_width / surface_width)
        if pressed:
            self._tracking = True

    def on_release(self) -> None:
        """Pointer lifted. The last target stays in effect."""
        self._tracking = False

    def reset(self) -> None:
        self._target_x = None
        self._tracking = False

    def handle_event(self, event, surface_width: float, viewport_width: float) -> bool:
        """
        Feed a pygame event.

        Returns:
            True if the event was a pointer event.
        """
        if not PYGAME_AVAILABLE:
            return False

        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION):
            pressed = event.type == pygame.MOUSEBUTTONDOWN or self._tracking
            self.on_pointer(event.pos[0], surface_width, viewport_width, pressed=pressed)
            return True
        if event.type == pygame.MOUSEBUTTONUP:
            self.on_release()
            return True
        if event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
            # Finger coordinates are normalized to [0, 1]
            self.on_pointer(event.x * surface_width, surface_width, viewport_width)
            return True
        if event.type == pygame.FINGERUP:
            self.on_release()
            return True
        return False
