"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml

from balloon_catcher.core.color import Color


@dataclass(frozen=True)
class ViewportConfig:
    """Default play area size, used until the host reports a real one."""
    width: int
    height: int


@dataclass(frozen=True)
class DifficultyConfig:
    """Linear ramps for spawn delay and fall speed."""
    base_spawn_delay: float  # Seconds between spawns at t=0
    min_spawn_delay: float   # Floor of the spawn delay
    spawn_ramp: float        # Delay removed per second of play
    base_speed: float        # Fall speed at t=0
    max_speed: float         # Ceiling of the fall speed
    speed_ramp: float        # Speed gained per second of play


@dataclass(frozen=True)
class LoopConfig:
    """Simulation loop limits."""
    max_dt: float            # Per-tick step cap
    cleanup_margin: float    # Distance past the floor before a balloon is dropped


@dataclass(frozen=True)
class BalloonConfig:
    """Balloon spawn parameters."""
    spawn_y: float
    spawn_margin: float
    base_radius: float
    radius_jitter: float
    speed_jitter: float
    bob_amplitude: float
    bob_frequency: float
    string_length: float
    string_jitter: float
    points: int
    bonus_points: int
    bonus_probability: float
    bonus_radius_bonus: float
    bonus_color: Color
    palette: Tuple[Color, ...]


@dataclass(frozen=True)
class CatcherConfig:
    """Catcher geometry and easing constants."""
    width: float
    height: float
    floor_offset: float      # Distance of the catcher top from the viewport bottom
    base_color: Color
    rim_darken: float
    tilt_limit: float
    tilt_per_pixel: float
    tilt_decay: float        # Multiplier applied once per tick
    color_rate: float        # Transition progress gained per second
    effect_decay_rate: float


@dataclass(frozen=True)
class MessageTier:
    """End-of-run message shown when the score reaches threshold."""
    threshold: int
    message: str


@dataclass(frozen=True)
class ScoringConfig:
    """End-of-run message table, highest threshold first."""
    messages: Tuple[MessageTier, ...]
    default_message: str


@dataclass(frozen=True)
class AudioConfig:
    """Audio synthesis and mixing parameters."""
    sample_rate: int
    master_volume: float
    sfx_volume: float
    music_volume: float
    background_volume: float  # Master volume while the window is unfocused
    music_note_seconds: float


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    viewport: ViewportConfig
    difficulty: DifficultyConfig
    loop: LoopConfig
    balloon: BalloonConfig
    catcher: CatcherConfig
    scoring: ScoringConfig
    audio: AudioConfig


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    channels = tuple(int(c) for c in color_data)
    for c in channels:
        if not 0 <= c <= 255:
            raise ValueError(f"Color channels must be in [0, 255], got {color_data}")
    return Color(*channels)


def _parse_messages(messages_data: List) -> Tuple[MessageTier, ...]:
    """Parse the score message table from YAML."""
    return tuple(
        MessageTier(threshold=int(m["threshold"]), message=str(m["message"]))
        for m in messages_data
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.viewport.width <= 0 or config.viewport.height <= 0:
        raise ValueError(
            f"Viewport must have positive size, got "
            f"{config.viewport.width}x{config.viewport.height}"
        )

    difficulty = config.difficulty
    if not 0 < difficulty.min_spawn_delay <= difficulty.base_spawn_delay:
        raise ValueError(
            f"min_spawn_delay ({difficulty.min_spawn_delay}) must be in "
            f"(0, base_spawn_delay ({difficulty.base_spawn_delay})]"
        )
    if not 0 < difficulty.base_speed <= difficulty.max_speed:
        raise ValueError(
            f"base_speed ({difficulty.base_speed}) must be in "
            f"(0, max_speed ({difficulty.max_speed})]"
        )
    if difficulty.spawn_ramp < 0 or difficulty.speed_ramp < 0:
        raise ValueError("Difficulty ramps must be non-negative")

    if config.loop.max_dt <= 0:
        raise ValueError(f"loop.max_dt must be positive, got {config.loop.max_dt}")

    balloon = config.balloon
    if balloon.base_radius <= 0:
        raise ValueError(f"balloon.base_radius must be positive, got {balloon.base_radius}")
    if not 0.0 <= balloon.bonus_probability <= 1.0:
        raise ValueError(
            f"balloon.bonus_probability must be in [0, 1], got {balloon.bonus_probability}"
        )
    if not balloon.palette:
        raise ValueError("balloon.palette must contain at least one color")

    if config.catcher.width <= 0 or config.catcher.height <= 0:
        raise ValueError("Catcher must have positive size")

    thresholds = [tier.threshold for tier in config.scoring.messages]
    if thresholds != sorted(thresholds, reverse=True):
        raise ValueError(f"scoring.messages must be sorted by descending threshold, got {thresholds}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    viewport_data = raw["viewport"]
    viewport = ViewportConfig(
        width=int(viewport_data["width"]),
        height=int(viewport_data["height"])
    )

    difficulty_data = raw["difficulty"]
    difficulty = DifficultyConfig(
        base_spawn_delay=float(difficulty_data["base_spawn_delay"]),
        min_spawn_delay=float(difficulty_data["min_spawn_delay"]),
        spawn_ramp=float(difficulty_data["spawn_ramp"]),
        base_speed=float(difficulty_data["base_speed"]),
        max_speed=float(difficulty_data["max_speed"]),
        speed_ramp=float(difficulty_data["speed_ramp"])
    )

    loop_data = raw.get("loop", {})
    loop = LoopConfig(
        max_dt=float(loop_data.get("max_dt", 0.016)),
        cleanup_margin=float(loop_data.get("cleanup_margin", 100.0))
    )

    balloon_data = raw["balloon"]
    balloon = BalloonConfig(
        spawn_y=float(balloon_data.get("spawn_y", -30.0)),
        spawn_margin=float(balloon_data.get("spawn_margin", 30.0)),
        base_radius=float(balloon_data["base_radius"]),
        radius_jitter=float(balloon_data.get("radius_jitter", 0.0)),
        speed_jitter=float(balloon_data.get("speed_jitter", 0.0)),
        bob_amplitude=float(balloon_data.get("bob_amplitude", 0.5)),
        bob_frequency=float(balloon_data.get("bob_frequency", 1.0)),
        string_length=float(balloon_data.get("string_length", 30.0)),
        string_jitter=float(balloon_data.get("string_jitter", 20.0)),
        points=int(balloon_data.get("points", 1)),
        bonus_points=int(balloon_data.get("bonus_points", 5)),
        bonus_probability=float(balloon_data["bonus_probability"]),
        bonus_radius_bonus=float(balloon_data.get("bonus_radius_bonus", 5.0)),
        bonus_color=_parse_color(balloon_data["bonus_color"]),
        palette=tuple(_parse_color(c) for c in balloon_data["palette"])
    )

    catcher_data = raw["catcher"]
    catcher = CatcherConfig(
        width=float(catcher_data["width"]),
        height=float(catcher_data["height"]),
        floor_offset=float(catcher_data["floor_offset"]),
        base_color=_parse_color(catcher_data["base_color"]),
        rim_darken=float(catcher_data.get("rim_darken", 0.8)),
        tilt_limit=float(catcher_data.get("tilt_limit", 0.3)),
        tilt_per_pixel=float(catcher_data.get("tilt_per_pixel", 0.01)),
        tilt_decay=float(catcher_data.get("tilt_decay", 0.9)),
        color_rate=float(catcher_data.get("color_rate", 3.0)),
        effect_decay_rate=float(catcher_data.get("effect_decay_rate", 2.0))
    )

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        messages=_parse_messages(scoring_data.get("messages", [])),
        default_message=str(scoring_data.get("default_message", ""))
    )

    # Audio section is optional; headless runs never touch it
    audio_data = raw.get("audio", {})
    audio = AudioConfig(
        sample_rate=int(audio_data.get("sample_rate", 22050)),
        master_volume=float(audio_data.get("master_volume", 0.7)),
        sfx_volume=float(audio_data.get("sfx_volume", 0.8)),
        music_volume=float(audio_data.get("music_volume", 0.4)),
        background_volume=float(audio_data.get("background_volume", 0.1)),
        music_note_seconds=float(audio_data.get("music_note_seconds", 0.8))
    )

    config = GameConfig(
        viewport=viewport,
        difficulty=difficulty,
        loop=loop,
        balloon=balloon,
        catcher=catcher,
        scoring=scoring,
        audio=audio
    )

    _validate_config(config)
    return config


# Module-level cache for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
