"""
Ports
=====

Interfaces the simulation loop talks to its collaborators through.
Input writes one target X (last write wins); events are fire-and-forget.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Tuple


class InputSource(Protocol):
    """Supplies the horizontal position the player is pointing at."""

    @property
    def current_target_x(self) -> Optional[float]:
        """Target X in viewport coordinates, or None before any input."""
        ...


class EventSink(Protocol):
    """Receives gameplay notifications (audio, particles, UI)."""

    def on_catch(self, is_bonus: bool) -> None: ...

    def on_floor_miss(self) -> None: ...

    def on_game_over(self) -> None: ...

    def on_game_start(self) -> None: ...

    def on_game_quit(self) -> None: ...


class FixedInput:
    """InputSource holding a value set directly (headless play, tests)."""

    def __init__(self, target_x: Optional[float] = None):
        self.target_x = target_x

    @property
    def current_target_x(self) -> Optional[float]:
        return self.target_x


class NullEventSink:
    """EventSink that ignores everything."""

    def on_catch(self, is_bonus: bool) -> None:
        pass

    def on_floor_miss(self) -> None:
        pass

    def on_game_over(self) -> None:
        pass

    def on_game_start(self) -> None:
        pass

    def on_game_quit(self) -> None:
        pass


class RecordingEventSink:
    """EventSink that keeps every notification in order."""

    def __init__(self):
        self.events: List[Tuple[str, Tuple[Any, ...]]] = []

    def on_catch(self, is_bonus: bool) -> None:
        self.events.append(("catch", (is_bonus,)))

    def on_floor_miss(self) -> None:
        self.events.append(("floor_miss", ()))

    def on_game_over(self) -> None:
        self.events.append(("game_over", ()))

    def on_game_start(self) -> None:
        self.events.append(("game_start", ()))

    def on_game_quit(self) -> None:
        self.events.append(("game_quit", ()))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def clear(self) -> None:
        self.events.clear()
