"""
Tests for pointer input scaling and the pygame renderer.
"""

import numpy as np
import pytest

from balloon_catcher.core.color import Color
from balloon_catcher.core.config_loader import load_config
from balloon_catcher.core.entities import Balloon
from balloon_catcher.core.game import CoreGame
from balloon_catcher.core.input_adapter import PointerInput


class TestPointerInput:
    """Test screen-to-viewport mapping."""

    def test_no_target_initially(self):
        pointer = PointerInput()
        assert pointer.current_target_x is None
        assert not pointer.is_tracking

    def test_same_size_passthrough(self):
        pointer = PointerInput()
        pointer.on_pointer(123, 480, 480)
        assert pointer.current_target_x == 123
        assert pointer.is_tracking

    def test_scales_to_viewport(self):
        pointer = PointerInput()
        pointer.on_pointer(480, 960, 480)
        assert pointer.current_target_x == 240

    def test_zero_width_surface_ignored(self):
        pointer = PointerInput()
        pointer.on_pointer(100, 480, 480)
        pointer.on_pointer(300, 0, 480)
        assert pointer.current_target_x == 100

    def test_release_keeps_last_target(self):
        pointer = PointerInput()
        pointer.on_pointer(200, 480, 480)
        pointer.on_release()
        assert not pointer.is_tracking
        assert pointer.current_target_x == 200

    def test_hover_does_not_start_tracking(self):
        pointer = PointerInput()
        pointer.on_pointer(50, 480, 480, pressed=False)
        assert pointer.current_target_x == 50
        assert not pointer.is_tracking

    def test_reset(self):
        pointer = PointerInput()
        pointer.on_pointer(200, 480, 480)
        pointer.reset()
        assert pointer.current_target_x is None
        assert not pointer.is_tracking

    def test_drives_catcher(self):
        pointer = PointerInput()
        game = CoreGame(config=load_config(), input_source=pointer, cosmetic_clock=lambda: 0.0)
        game.start_game()
        pointer.on_pointer(600, 960, 480)
        game.tick(0.016)
        assert game.catcher.x == 300 - game.catcher.width / 2


@pytest.fixture
def pygame_headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    return pytest.importorskip("pygame")


class TestPointerEvents:
    """Test pygame event translation."""

    def test_mouse_events(self, pygame_headless):
        pygame = pygame_headless
        pointer = PointerInput()

        down = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(100, 50), button=1)
        assert pointer.handle_event(down, 480, 480)
        assert pointer.current_target_x == 100
        assert pointer.is_tracking

        up = pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(100, 50), button=1)
        assert pointer.handle_event(up, 480, 480)
        assert not pointer.is_tracking

        motion = pygame.event.Event(pygame.MOUSEMOTION, pos=(240, 50), rel=(0, 0), buttons=(0, 0, 0))
        assert pointer.handle_event(motion, 960, 480)
        assert pointer.current_target_x == 120

    def test_finger_events_are_normalized(self, pygame_headless):
        pygame = pygame_headless
        pointer = PointerInput()
        finger = pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5, touch_id=0, finger_id=0)
        assert pointer.handle_event(finger, 960, 480)
        assert pointer.current_target_x == pytest.approx(240)

    def test_other_events_ignored(self, pygame_headless):
        pygame = pygame_headless
        pointer = PointerInput()
        key = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
        assert not pointer.handle_event(key, 480, 480)
        assert pointer.current_target_x is None


class TestRenderer:
    """Smoke tests for the renderer in headless mode."""

    @pytest.fixture
    def renderer(self, pygame_headless):
        from balloon_catcher.core.render_pygame import PygameRenderer
        renderer = PygameRenderer(load_config(), seed=0)
        yield renderer
        renderer.close()

    @pytest.fixture
    def game(self):
        return CoreGame(config=load_config(), seed=3, cosmetic_clock=lambda: 0.0, viewport=(240, 400))

    def test_start_screen(self, renderer, game):
        frame = renderer.render(game.get_render_data(), 240, 400)
        assert frame.shape == (400, 240, 3)
        assert frame.dtype == np.uint8

    def test_playing_frame(self, renderer, game):
        game.start_game()
        game.spawn_balloon(Balloon(x=60, y=250, radius=20, speed=0.0, color=Color(255, 0, 0)))
        game.spawn_balloon(Balloon(x=180, y=200, radius=25, speed=0.0, color=Color(255, 215, 0), points=5))
        game.catcher.change_color(Color(0, 0, 255))
        game.catcher.move_to(200)
        frame = renderer.render(game.get_render_data(), 240, 400)
        assert frame.shape == (400, 240, 3)
        # Red balloon body is drawn at its centre
        r, g, b = frame[250, 60]
        assert r > 200 and g < 80 and b < 80

    def test_highlight_blends_over_balloon(self, renderer):
        game = CoreGame(config=load_config(), seed=3, cosmetic_clock=lambda: 0.0, viewport=(480, 800))
        game.start_game()
        game.spawn_balloon(Balloon(x=240, y=400, radius=30, speed=0.0, color=Color(255, 0, 0)))
        frame = renderer.render(game.get_render_data(), 480, 800)

        assert tuple(frame[400, 240]) == (255, 0, 0)
        # 40% white over red, not sky showing through
        r, g, b = (int(c) for c in frame[391, 231])
        assert r >= 250
        assert 90 <= g <= 115
        assert abs(g - b) <= 2

    def test_jar_shine_blends_over_body(self, renderer):
        game = CoreGame(config=load_config(), seed=3, cosmetic_clock=lambda: 0.0, viewport=(480, 800))
        game.start_game()
        data = game.get_render_data()
        assert data["catcher"]["x"] == 200.0
        assert data["catcher"]["tilt"] == 0.0
        frame = renderer.render(data, 480, 800)

        # Body (139, 69, 19) under 30% white
        r, g, b = (int(c) for c in frame[750, 212])
        assert r == pytest.approx(174, abs=3)
        assert g == pytest.approx(125, abs=3)
        assert b == pytest.approx(90, abs=3)

    def test_scaled_output(self, renderer, game):
        game.start_game()
        frame = renderer.render(game.get_render_data(), 480, 800)
        assert frame.shape == (800, 480, 3)

    def test_game_over_screen(self, renderer, game):
        game.start_game()
        game.spawn_balloon(Balloon(x=20, y=395, radius=20, speed=0.0, color=Color(255, 0, 0)))
        game.tick(0.016)
        assert game.is_over
        frame = renderer.render(game.get_render_data(), 240, 400)
        assert frame.shape == (400, 240, 3)
