"""
Balloon Catcher Core - simulation loop and its collaborators.

Main exports:
- CoreGame: Simulation loop and phase transitions
- GameConfig: Configuration loaded from game_config.yaml
- DifficultyController: Spawn delay and fall speed ramps
- Balloon, Catcher: Entity models
- GamePhase: START / PLAYING / GAME_OVER
"""

from balloon_catcher.core.config_loader import GameConfig, load_config, get_config
from balloon_catcher.core.color import Color
from balloon_catcher.core.entities import Balloon, Catcher
from balloon_catcher.core.difficulty import DifficultyController
from balloon_catcher.core.rng import BalloonFactory
from balloon_catcher.core.scoring import CatchEvent, ScoreTracker, message_for_score
from balloon_catcher.core.state_machine import GamePhase, PhaseMachine
from balloon_catcher.core.ports import (
    InputSource,
    EventSink,
    FixedInput,
    NullEventSink,
    RecordingEventSink,
)
from balloon_catcher.core.game import CoreGame, TickResult

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "Color",
    "Balloon",
    "Catcher",
    "DifficultyController",
    "BalloonFactory",
    "CatchEvent",
    "ScoreTracker",
    "message_for_score",
    "GamePhase",
    "PhaseMachine",
    "InputSource",
    "EventSink",
    "FixedInput",
    "NullEventSink",
    "RecordingEventSink",
    "CoreGame",
    "TickResult",
]
