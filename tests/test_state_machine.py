"""
Tests for phase transitions and run resets.
"""

import pytest

from balloon_catcher.core.color import Color
from balloon_catcher.core.config_loader import load_config
from balloon_catcher.core.entities import Balloon
from balloon_catcher.core.game import CoreGame
from balloon_catcher.core.ports import RecordingEventSink
from balloon_catcher.core.state_machine import GamePhase, PhaseMachine


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def sink():
    return RecordingEventSink()


@pytest.fixture
def game(config, sink):
    return CoreGame(config=config, seed=7, event_sink=sink, cosmetic_clock=lambda: 0.0)


def _end_run(game):
    """Drop a balloon onto the floor to finish the current run."""
    width, height = game.viewport
    game.spawn_balloon(Balloon(x=width - 30, y=height - 5, radius=20, speed=0.0, color=Color(255, 0, 0)))
    result = game.tick(0.016)
    assert result.game_over


def _catch_one(game, points=1):
    catcher = game.catcher
    game.spawn_balloon(Balloon(
        x=catcher.x + catcher.width / 2,
        y=catcher.y + 10,
        radius=20,
        speed=0.0,
        color=Color(0, 255, 0),
        points=points
    ))
    game.tick(0.016)


class TestPhaseMachine:
    """Test the transition table."""

    def test_starts_in_start(self):
        assert PhaseMachine().phase is GamePhase.START

    def test_legal_path(self):
        machine = PhaseMachine()
        assert machine.transition(GamePhase.PLAYING)
        assert machine.is_playing
        assert machine.transition(GamePhase.GAME_OVER)
        assert machine.transition(GamePhase.START)
        assert machine.phase is GamePhase.START

    @pytest.mark.parametrize("source,target", [
        (GamePhase.START, GamePhase.GAME_OVER),
        (GamePhase.START, GamePhase.START),
        (GamePhase.PLAYING, GamePhase.START),
        (GamePhase.PLAYING, GamePhase.PLAYING),
    ])
    def test_illegal_transitions_are_ignored(self, source, target):
        machine = PhaseMachine()
        if source is GamePhase.PLAYING:
            machine.transition(GamePhase.PLAYING)
        assert not machine.can_transition(target)
        assert not machine.transition(target)
        assert machine.phase is source

    def test_debug_output(self, capsys):
        machine = PhaseMachine(debug=True)
        machine.transition(GamePhase.PLAYING)
        machine.transition(GamePhase.START)
        out = capsys.readouterr().out
        assert "[DEBUG] Phase start -> playing" in out
        assert "[DEBUG] Ignored phase change playing -> start" in out

    def test_phase_values(self):
        assert GamePhase.GAME_OVER.value == "game_over"
        assert GamePhase("playing") is GamePhase.PLAYING


class TestGamePhases:
    """Test phase handling in CoreGame."""

    def test_idle_before_start(self, game):
        assert game.phase is GamePhase.START
        assert game.catcher is None
        result = game.tick(0.016)
        assert result.delta_score == 0
        assert game.elapsed_time == 0.0

    def test_start_game(self, game, sink):
        assert game.start_game()
        assert game.is_playing
        assert game.catcher is not None
        assert sink.names() == ["game_start"]

    def test_start_only_from_start(self, game):
        game.start_game()
        assert not game.start_game()
        _end_run(game)
        assert not game.start_game()
        assert game.is_over

    def test_restart_only_from_game_over(self, game):
        assert not game.restart_game()
        game.start_game()
        assert not game.restart_game()

    def test_moves_ignored_outside_playing(self, game):
        assert not game.move_catcher(100)
        game.start_game()
        assert game.move_catcher(100)
        _end_run(game)
        x = game.catcher.x
        assert not game.move_catcher(300)
        assert game.catcher.x == x

    def test_spawn_ignored_outside_playing(self, game):
        assert game.spawn_balloon() is None
        assert game.balloons == ()

    def test_quit_keeps_final_score(self, game, sink):
        game.start_game()
        _catch_one(game, points=5)
        _end_run(game)
        assert game.quit_game()
        assert game.phase is GamePhase.START
        assert game.final_score == 5
        assert sink.names()[-1] == "game_quit"

    def test_quit_only_from_game_over(self, game):
        assert not game.quit_game()
        game.start_game()
        assert not game.quit_game()
        assert game.is_playing


class TestRestart:
    """Test that a restart fully resets the run."""

    def test_restart_resets_state(self, game, config):
        game.start_game()
        for _ in range(3):
            _catch_one(game)
        game.move_catcher(40)
        for _ in range(100):
            game.tick(0.016)
        if game.is_playing:
            _end_run(game)
        assert game.final_score == 3

        assert game.restart_game()

        width, height = game.viewport
        assert game.score == 0
        assert game.elapsed_time == 0.0
        assert game.spawn_timer == 0.0
        assert game.balloons == ()
        assert game.catcher.x == width / 2 - config.catcher.width / 2
        assert game.catcher.tilt == 0.0
        assert game.catcher.current_color == config.catcher.base_color
        assert game.scorer.catches == 0

    def test_double_restart_is_noop(self, game):
        game.start_game()
        _end_run(game)
        assert game.restart_game()
        game.tick(0.016)
        elapsed = game.elapsed_time
        assert not game.restart_game()
        assert game.elapsed_time == elapsed

    def test_restart_replays_spawn_sequence(self, game):
        game.start_game()
        first = [game.spawn_balloon() for _ in range(5)]
        _end_run(game)
        game.restart_game()
        second = [game.spawn_balloon() for _ in range(5)]

        def key(b):
            return (b.uid, b.x, b.radius, b.speed, b.points, b.color)

        assert [key(b) for b in first] == [key(b) for b in second]

    def test_info_reports_phase(self, game):
        assert game.get_info()["phase"] == "start"
        game.start_game()
        _catch_one(game)
        info = game.get_info()
        assert info["phase"] == "playing"
        assert info["score"] == 1
        assert info["catches"] == 1
