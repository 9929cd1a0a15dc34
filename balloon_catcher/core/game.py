"""
Core Game
=========

Main simulation loop combining spawning, motion, collisions, scoring,
difficulty and the phase machine.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from balloon_catcher.core.config_loader import GameConfig, get_config
from balloon_catcher.core.difficulty import DifficultyController
from balloon_catcher.core.entities import Balloon, Catcher
from balloon_catcher.core.ports import EventSink, FixedInput, InputSource, NullEventSink
from balloon_catcher.core.rng import BalloonFactory
from balloon_catcher.core.rules import FloorRules, is_caught
from balloon_catcher.core.scoring import CatchEvent, ScoreTracker
from balloon_catcher.core.state_machine import GamePhase, PhaseMachine


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    dt: float
    delta_score: int
    catches: List[CatchEvent] = field(default_factory=list)
    spawned: List[Balloon] = field(default_factory=list)
    game_over: bool = False

    @staticmethod
    def idle() -> "TickResult":
        return TickResult(dt=0.0, delta_score=0)


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Difficulty ramp
    - Balloon spawning (seeded)
    - Balloon and catcher updates
    - Floor and catch checks
    - Scoring
    - Game phase

    One tick = one display frame, with dt capped at loop.max_dt.
    The floor check runs before the catch check, so a balloon that crosses
    the floor while touching the catcher ends the run without scoring.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        input_source: Optional[InputSource] = None,
        event_sink: Optional[EventSink] = None,
        cosmetic_clock: Optional[Callable[[], float]] = None,
        viewport: Optional[Tuple[float, float]] = None,
        debug: bool = False
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible spawns.
            input_source: Supplies the pointer target X. Defaults to no input.
            event_sink: Receives catch/miss/phase notifications.
            cosmetic_clock: Wall-clock seconds for balloon bobbing.
                Defaults to time.monotonic.
            viewport: (width, height). Uses config viewport if None.
            debug: If True, prints [DEBUG] lines for game events.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._debug = debug

        self._input = input_source if input_source is not None else FixedInput()
        self._events = event_sink if event_sink is not None else NullEventSink()
        self._cosmetic_clock = cosmetic_clock if cosmetic_clock is not None else time.monotonic

        if viewport is None:
            viewport = (config.viewport.width, config.viewport.height)
        self._viewport_width, self._viewport_height = viewport

        # Subsystems
        self._difficulty = DifficultyController(config)
        self._factory = BalloonFactory(config, seed)
        self._scorer = ScoreTracker(config)
        self._floor = FloorRules(config)
        self._phases = PhaseMachine(debug=debug)

        # Simulation state
        self._balloons: List[Balloon] = []
        self._catcher: Optional[Catcher] = None
        self._elapsed: float = 0.0
        self._spawn_timer: float = 0.0
        self._last_target_x: Optional[float] = None
        self._final_score: int = 0

    # ------------------------------------------------------------------
    # Read-only state

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def phase(self) -> GamePhase:
        """Current game phase."""
        return self._phases.phase

    @property
    def is_playing(self) -> bool:
        return self._phases.is_playing

    @property
    def is_over(self) -> bool:
        """True after a floor crossing, until restart or quit."""
        return self._phases.phase is GamePhase.GAME_OVER

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def final_score(self) -> int:
        """Score at the end of the last finished run."""
        return self._final_score

    @property
    def final_message(self) -> str:
        """End-of-run message for the last finished run."""
        return self._scorer.final_message(self._final_score)

    @property
    def elapsed_time(self) -> float:
        """Simulation seconds since the run started."""
        return self._elapsed

    @property
    def spawn_timer(self) -> float:
        """Seconds since the last spawn."""
        return self._spawn_timer

    @property
    def spawn_delay(self) -> float:
        """Current spawn delay (derived from elapsed time)."""
        return self._difficulty.spawn_delay(self._elapsed)

    @property
    def fall_speed(self) -> float:
        """Current base fall speed (derived from elapsed time)."""
        return self._difficulty.fall_speed(self._elapsed)

    @property
    def balloons(self) -> Tuple[Balloon, ...]:
        """Active balloons."""
        return tuple(self._balloons)

    @property
    def catcher(self) -> Optional[Catcher]:
        return self._catcher

    @property
    def scorer(self) -> ScoreTracker:
        return self._scorer

    @property
    def viewport(self) -> Tuple[float, float]:
        return (self._viewport_width, self._viewport_height)

    @property
    def has_viewport(self) -> bool:
        return self._viewport_width > 0 and self._viewport_height > 0

    # ------------------------------------------------------------------
    # Phase transitions

    def start_game(self) -> bool:
        """
        START -> PLAYING. Resets all simulation state.

        Returns:
            True if the game started, False if not in START.
        """
        if self._phases.phase is not GamePhase.START:
            return False
        return self._begin_run()

    def restart_game(self) -> bool:
        """
        GAME_OVER -> PLAYING. Same reset as start_game().

        Returns:
            True if the game restarted, False if not in GAME_OVER.
        """
        if self._phases.phase is not GamePhase.GAME_OVER:
            return False
        return self._begin_run()

    def quit_game(self) -> bool:
        """
        GAME_OVER -> START. The final score stays available for display.

        Returns:
            True if the phase changed.
        """
        if not self._phases.transition(GamePhase.START):
            return False
        self._emit("on_game_quit")
        return True

    def _begin_run(self) -> bool:
        if not self._phases.transition(GamePhase.PLAYING):
            return False
        self._reset_state()
        self._emit("on_game_start")
        return True

    def _reset_state(self) -> None:
        """Reset everything a run owns."""
        self._scorer.reset()
        self._factory.reset(self._seed)
        self._balloons = []
        self._elapsed = 0.0
        self._spawn_timer = 0.0
        self._last_target_x = None
        self._catcher = None
        if self.has_viewport:
            self._catcher = Catcher(self._viewport_width, self._viewport_height, self._config)

    def _end_run(self, balloon: Balloon) -> None:
        self._emit("on_floor_miss")
        self._phases.transition(GamePhase.GAME_OVER)
        self._final_score = self._scorer.score
        if self._debug:
            print(f"[DEBUG] Balloon {balloon.uid} hit the floor at t={self._elapsed:.2f}s, "
                  f"final score {self._final_score}")
        self._emit("on_game_over")

    # ------------------------------------------------------------------
    # Viewport and input

    def resize(self, width: float, height: float) -> None:
        """
        Update the viewport size and re-anchor the catcher.

        Args:
            width: New viewport width.
            height: New viewport height.
        """
        self._viewport_width = width
        self._viewport_height = height
        if not self.has_viewport:
            return
        if self._catcher is not None:
            self._catcher.resize(width, height)
        elif self.is_playing:
            self._catcher = Catcher(width, height, self._config)

    def move_catcher(self, target_x: float) -> bool:
        """
        Center the catcher on target_x.

        Returns:
            True if the catcher moved, False outside PLAYING or without a catcher.
        """
        if not self.is_playing or self._catcher is None:
            return False
        self._catcher.move_to(target_x)
        return True

    def _apply_input(self) -> None:
        """Read the input source once; only a new value moves the catcher."""
        target_x = self._input.current_target_x
        if target_x is None or target_x == self._last_target_x:
            return
        self._last_target_x = target_x
        self._catcher.move_to(target_x)

    # ------------------------------------------------------------------
    # Simulation

    def spawn_balloon(self, balloon: Optional[Balloon] = None) -> Optional[Balloon]:
        """
        Add a balloon to the play field.

        Args:
            balloon: Balloon to add. A random one at the current fall speed
                is created if None.

        Returns:
            The added balloon, or None outside PLAYING.
        """
        if not self.is_playing or not self.has_viewport:
            return None
        if balloon is None:
            balloon = self._factory.create(self._viewport_width, self.fall_speed)
        self._balloons.append(balloon)
        if self._debug:
            kind = "bonus" if balloon.is_bonus else "normal"
            print(f"[DEBUG] Spawned {kind} balloon {balloon.uid} at x={balloon.x:.1f}, "
                  f"speed={balloon.speed:.1f}")
        return balloon

    def tick(self, dt: float) -> TickResult:
        """
        Advance the simulation by one frame.

        Args:
            dt: Seconds since the previous frame. Clamped to [0, loop.max_dt].

        Returns:
            TickResult with score change, catches and spawns this tick.
        """
        if not self.is_playing or self._catcher is None or not self.has_viewport:
            return TickResult.idle()

        dt = max(0.0, min(dt, self._config.loop.max_dt))
        score_before = self._scorer.score
        result = TickResult(dt=dt, delta_score=0)

        catcher = self._catcher
        self._apply_input()
        catcher.update(dt)

        self._elapsed += dt
        spawn_delay = self._difficulty.spawn_delay(self._elapsed)

        self._spawn_timer += dt
        if self._spawn_timer >= spawn_delay:
            result.spawned.append(self.spawn_balloon())
            self._spawn_timer = 0.0

        cosmetic_time = self._cosmetic_clock()
        floor_y = self._viewport_height

        # Reverse order so removal does not skip balloons
        for i in range(len(self._balloons) - 1, -1, -1):
            balloon = self._balloons[i]
            balloon.update(dt, cosmetic_time)

            if self._floor.crossed_floor(balloon, floor_y):
                self._end_run(balloon)
                result.game_over = True
                break

            if is_caught(balloon, catcher):
                event = self._scorer.apply_catch(balloon.points, balloon.x, balloon.y, balloon.color)
                catcher.change_color(balloon.color)
                del self._balloons[i]
                result.catches.append(event)
                if self._debug:
                    print(f"[DEBUG] Caught balloon {balloon.uid}: {event} (score {self._scorer.score})")
                self._emit("on_catch", event.is_bonus)
                continue

            if self._floor.needs_cleanup(balloon, floor_y):
                del self._balloons[i]

        result.delta_score = self._scorer.score - score_before
        return result

    def _emit(self, name: str, *args: Any) -> None:
        """Notify the event sink; a failing sink never stops the simulation."""
        handler = getattr(self._events, name, None)
        if handler is None:
            return
        try:
            handler(*args)
        except Exception as e:
            if self._debug:
                print(f"[DEBUG] Event sink {name} failed: {e}")

    # ------------------------------------------------------------------
    # Host access

    def get_info(self) -> Dict[str, Any]:
        """Summary of the current run."""
        return {
            "phase": self.phase.value,
            "score": self._scorer.score,
            "catches": self._scorer.catches,
            "bonus_catches": self._scorer.bonus_catches,
            "elapsed_time": self._elapsed,
            "spawn_delay": self.spawn_delay,
            "fall_speed": self.fall_speed,
            "balloon_count": len(self._balloons),
            "final_score": self._final_score,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict snapshot of viewport, phase, score, balloons and catcher.
        """
        return {
            "viewport_width": self._viewport_width,
            "viewport_height": self._viewport_height,
            "phase": self.phase.value,
            "score": self._scorer.score,
            "elapsed_time": self._elapsed,
            "balloons": [b.to_dict() for b in self._balloons],
            "catcher": self._catcher.to_dict() if self._catcher is not None else None,
            "final_score": self._final_score,
            "final_message": self.final_message,
        }
