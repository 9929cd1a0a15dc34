"""
Human Play Mode
================

Play Balloon Catcher interactively with mouse or touch control.

Controls:
    - Mouse / touch: Move the jar
    - Click/Space: Start game (start screen) or play again (game over)
    - R: Restart after game over
    - Q: Back to start screen after game over
    - M: Toggle sound
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from balloon_catcher.core.audio import AudioManager
from balloon_catcher.core.config_loader import load_config, GameConfig
from balloon_catcher.core.game import CoreGame
from balloon_catcher.core.input_adapter import PointerInput
from balloon_catcher.core.render_pygame import PygameRenderer
from balloon_catcher.core.state_machine import GamePhase


class HumanPlayer:
    """
    Composition root: owns the window, the game, and its collaborators,
    and drives CoreGame.tick() once per display frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: int = 60,
        sound: bool = True,
        debug: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps
        self._debug = debug
        width = window_width or config.viewport.width
        height = window_height or config.viewport.height

        # Initialize pygame
        pygame.init()
        self._screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption("Balloon Catcher")
        self._clock = pygame.time.Clock()

        # Collaborators
        self._input = PointerInput()
        self._audio = AudioManager(config, enabled=sound, debug=debug)
        self._renderer = PygameRenderer(config, seed=seed)

        self._game = CoreGame(
            config=config,
            seed=seed,
            input_source=self._input,
            event_sink=self._audio,
            viewport=(width, height),
            debug=debug
        )

        self._running = True
        self._reported_game_over = False

    def run(self) -> int:
        """Run the game loop. Returns the last final score."""
        print("=== Balloon Catcher ===")
        print("Move the mouse to slide the jar, catch every balloon!")
        print("Click or Space to start, M to mute, ESC to quit")
        if not self._audio.enabled:
            print("(sound unavailable, playing silently)")
        print()

        while self._running:
            dt = self._clock.tick(self._target_fps) / 1000.0
            self._handle_events()

            result = self._game.tick(dt)
            if result.game_over:
                self._report_game_over()

            self._renderer.render_to_surface(self._screen, self._game.get_render_data())
            pygame.display.flip()

        self._audio.close()
        self._renderer.close()
        pygame.quit()
        return self._game.final_score

    def _handle_events(self) -> None:
        """Process pygame events."""
        width = self._screen.get_width()
        viewport_width = self._game.viewport[0]

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self._screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self._game.resize(event.w, event.h)

            elif event.type == pygame.WINDOWFOCUSLOST:
                self._audio.on_focus_change(False)
            elif event.type == pygame.WINDOWFOCUSGAINED:
                self._audio.on_focus_change(True)

            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN) and not self._game.is_playing:
                self._advance_phase()

            elif self._game.is_playing:
                self._input.handle_event(event, width, viewport_width)

    def _handle_key(self, key: int) -> None:
        phase = self._game.phase
        if key == pygame.K_ESCAPE:
            self._running = False
        elif key == pygame.K_m:
            muted = self._audio.toggle_mute()
            print("Sound off" if muted else "Sound on")
        elif key == pygame.K_SPACE:
            self._advance_phase()
        elif key == pygame.K_r and phase is GamePhase.GAME_OVER:
            self._restart()
        elif key == pygame.K_q and phase is GamePhase.GAME_OVER:
            self._game.quit_game()

    def _advance_phase(self) -> None:
        """Start from the start screen, or play again from game over."""
        if self._game.phase is GamePhase.START:
            self._input.reset()
            if self._game.start_game():
                self._reported_game_over = False
        elif self._game.phase is GamePhase.GAME_OVER:
            self._restart()

    def _restart(self) -> None:
        self._input.reset()
        if self._game.restart_game():
            self._reported_game_over = False
            print("\n=== Game Restarted ===\n")

    def _report_game_over(self) -> None:
        if self._reported_game_over:
            return
        self._reported_game_over = True
        print(f"\nGAME OVER - Score: {self._game.final_score}")
        print(self._game.final_message)


def main():
    parser = argparse.ArgumentParser(description="Play Balloon Catcher interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: from config)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: from config)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--no-sound", action="store_true", help="Disable audio")
    parser.add_argument("--debug", action="store_true", help="Print [DEBUG] game events")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps,
            sound=not args.no_sound,
            debug=args.debug
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except (ImportError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
