"""
Headless Simulation
===================

Plays seeded games with a simple autopilot and reports score statistics
and tick throughput. Useful for tuning difficulty constants.

The autopilot slides the jar towards the lowest balloon at a limited
speed, so it eventually misses once spawns outpace it.

Usage:
    python -m tools.simulate_headless [--seeds N] [--max-seconds S] [--hand-speed PX]
"""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from balloon_catcher.core.config_loader import GameConfig, load_config
from balloon_catcher.core.game import CoreGame
from balloon_catcher.core.ports import FixedInput


@dataclass
class EpisodeResult:
    """Result for a single seed."""
    seed: int
    final_score: int
    survived_seconds: float
    catches: int
    bonus_catches: int
    ticks: int
    game_over: bool


@dataclass
class SimulationSummary:
    """Summary across all seeds."""
    mean_score: float
    std_score: float
    min_score: int
    max_score: int
    median_score: float
    mean_survival: float
    ticks_per_second: float
    results: List[EpisodeResult]


class Autopilot:
    """Moves a FixedInput target towards the lowest balloon."""

    def __init__(self, hand_speed: float):
        self.hand_speed = hand_speed
        self.input = FixedInput()

    def update(self, game: CoreGame, dt: float) -> None:
        catcher = game.catcher
        if catcher is None:
            return
        current = catcher.x + catcher.width / 2
        if self.input.target_x is None:
            self.input.target_x = current

        balloons = game.balloons
        if not balloons:
            return
        lowest = max(balloons, key=lambda b: b.y)
        step = self.hand_speed * dt
        delta = lowest.x - self.input.target_x
        self.input.target_x += max(-step, min(step, delta))


def run_episode(
    seed: int,
    config: Optional[GameConfig] = None,
    hand_speed: float = 600.0,
    max_seconds: float = 300.0,
    frame_dt: float = 1.0 / 60.0
) -> EpisodeResult:
    """
    Play one game to the first miss or until max_seconds of game time.

    Args:
        seed: Balloon spawn seed.
        config: Game configuration. Loads default if None.
        hand_speed: Autopilot speed limit in pixels per second.
        max_seconds: Game-time cap.
        frame_dt: Frame time fed to tick() (capped by loop.max_dt).

    Returns:
        EpisodeResult for the run.
    """
    if config is None:
        config = load_config()

    pilot = Autopilot(hand_speed)
    # Fixed cosmetic clock keeps the bob out of the measurement
    game = CoreGame(config=config, seed=seed, input_source=pilot.input, cosmetic_clock=lambda: 0.0)
    game.start_game()

    ticks = 0
    while game.is_playing and game.elapsed_time < max_seconds:
        pilot.update(game, min(frame_dt, config.loop.max_dt))
        game.tick(frame_dt)
        ticks += 1

    return EpisodeResult(
        seed=seed,
        final_score=game.score,
        survived_seconds=game.elapsed_time,
        catches=game.scorer.catches,
        bonus_catches=game.scorer.bonus_catches,
        ticks=ticks,
        game_over=game.is_over
    )


def run_simulation(
    seeds: List[int],
    config: Optional[GameConfig] = None,
    hand_speed: float = 600.0,
    max_seconds: float = 300.0,
    verbose: bool = False
) -> SimulationSummary:
    """Run one episode per seed and aggregate. An empty seed list gives an all-zero summary."""
    if config is None:
        config = load_config()

    if not seeds:
        return SimulationSummary(
            mean_score=0.0,
            std_score=0.0,
            min_score=0,
            max_score=0,
            median_score=0.0,
            mean_survival=0.0,
            ticks_per_second=0.0,
            results=[]
        )

    results = []
    start = time.perf_counter()
    for seed in seeds:
        result = run_episode(seed, config, hand_speed=hand_speed, max_seconds=max_seconds)
        results.append(result)
        if verbose:
            print(f"  Seed {seed}: score={result.final_score}, "
                  f"survived={result.survived_seconds:.1f}s, catches={result.catches}")
    elapsed = time.perf_counter() - start

    scores = np.array([r.final_score for r in results])
    survival = np.array([r.survived_seconds for r in results])
    total_ticks = sum(r.ticks for r in results)

    return SimulationSummary(
        mean_score=float(np.mean(scores)),
        std_score=float(np.std(scores)),
        min_score=int(np.min(scores)),
        max_score=int(np.max(scores)),
        median_score=float(np.median(scores)),
        mean_survival=float(np.mean(survival)),
        ticks_per_second=total_ticks / elapsed if elapsed > 0 else 0.0,
        results=results
    )


def main():
    parser = argparse.ArgumentParser(description="Run headless Balloon Catcher games")
    parser.add_argument("--seeds", type=int, default=20, help="Number of seeds (0..N-1)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--hand-speed", type=float, default=600.0, help="Autopilot speed (px/s)")
    parser.add_argument("--max-seconds", type=float, default=300.0, help="Game-time cap per run")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")

    args = parser.parse_args()
    if args.seeds < 1:
        parser.error("--seeds must be at least 1")

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    seeds = list(range(args.seeds))
    print(f"Simulating {len(seeds)} seeds...")
    summary = run_simulation(
        seeds,
        config,
        hand_speed=args.hand_speed,
        max_seconds=args.max_seconds,
        verbose=not args.quiet
    )

    print()
    print("=" * 50)
    print("SIMULATION SUMMARY")
    print("=" * 50)
    print(f"Seeds simulated: {len(seeds)}")
    print(f"Mean score:      {summary.mean_score:.2f}")
    print(f"Std deviation:   {summary.std_score:.2f}")
    print(f"Min score:       {summary.min_score}")
    print(f"Max score:       {summary.max_score}")
    print(f"Median score:    {summary.median_score:.2f}")
    print(f"Mean survival:   {summary.mean_survival:.1f}s")
    print(f"Ticks/second:    {summary.ticks_per_second:.0f}")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
