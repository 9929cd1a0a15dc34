"""
Game Phase State Machine
========================

START -> PLAYING -> GAME_OVER -> (PLAYING | START)
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class GamePhase(str, Enum):
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "game_over"


_TRANSITIONS: Dict[GamePhase, FrozenSet[GamePhase]] = {
    GamePhase.START: frozenset({GamePhase.PLAYING}),
    GamePhase.PLAYING: frozenset({GamePhase.GAME_OVER}),
    GamePhase.GAME_OVER: frozenset({GamePhase.PLAYING, GamePhase.START}),
}


class PhaseMachine:
    """
    Tracks the current phase and rejects illegal transitions.

    Rejected transitions are silent: transition() returns False and the
    phase is unchanged.
    """

    def __init__(self, debug: bool = False):
        self._phase = GamePhase.START
        self._debug = debug

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def is_playing(self) -> bool:
        return self._phase is GamePhase.PLAYING

    def can_transition(self, target: GamePhase) -> bool:
        return target in _TRANSITIONS[self._phase]

    def transition(self, target: GamePhase) -> bool:
        """
        Move to target if the transition is legal.

        Returns:
            True if the phase changed.
        """
        if not self.can_transition(target):
            if self._debug:
                print(f"[DEBUG] Ignored phase change {self._phase.value} -> {target.value}")
            return False

        if self._debug:
            print(f"[DEBUG] Phase {self._phase.value} -> {target.value}")
        self._phase = target
        return True
