"""
Tests for configuration loading and validation.
"""

import dataclasses
from pathlib import Path

import pytest
import yaml

import balloon_catcher
from balloon_catcher.core.color import Color
from balloon_catcher.core.config_loader import get_config, load_config, reload_config
from balloon_catcher.core.scoring import message_for_score


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    path = Path(balloon_catcher.__file__).parent / "game_config.yaml"
    with open(path) as f:
        return yaml.safe_load(f)


def _write(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(raw))
    return str(path)


class TestDefaultConfig:
    """Test the shipped game_config.yaml."""

    def test_difficulty_constants(self, config):
        """Default ramps match the documented game constants."""
        d = config.difficulty
        assert d.base_spawn_delay == 2.0
        assert d.min_spawn_delay == 0.5
        assert d.spawn_ramp == 0.02
        assert d.base_speed == 100.0
        assert d.max_speed == 400.0
        assert d.speed_ramp == 20.0

    def test_loop_and_catcher_constants(self, config):
        assert config.loop.max_dt == 0.016
        assert config.loop.cleanup_margin == 100.0
        assert config.catcher.width == 80.0
        assert config.catcher.height == 60.0
        assert config.catcher.floor_offset == 80.0

    def test_colors_are_typed(self, config):
        """Colors are parsed into Color values, not strings."""
        assert config.balloon.bonus_color == Color(255, 215, 0)
        assert config.catcher.base_color == Color(139, 69, 19)
        assert len(config.balloon.palette) == 10
        assert all(isinstance(c, Color) for c in config.balloon.palette)

    def test_config_is_frozen(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.difficulty.base_speed = 1.0


class TestConfigValidation:
    """Test loader error handling."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_roundtrip_of_shipped_file(self, tmp_path, raw_config, config):
        """A dumped copy of the shipped YAML loads to the same config."""
        assert load_config(_write(tmp_path, raw_config)) == config

    def test_bonus_probability_out_of_range(self, tmp_path, raw_config):
        raw_config["balloon"]["bonus_probability"] = 1.5
        with pytest.raises(ValueError, match="bonus_probability"):
            load_config(_write(tmp_path, raw_config))

    def test_min_delay_above_base(self, tmp_path, raw_config):
        raw_config["difficulty"]["min_spawn_delay"] = 3.0
        with pytest.raises(ValueError, match="min_spawn_delay"):
            load_config(_write(tmp_path, raw_config))

    def test_bad_color(self, tmp_path, raw_config):
        raw_config["balloon"]["bonus_color"] = [255, 215]
        with pytest.raises(ValueError, match="Color"):
            load_config(_write(tmp_path, raw_config))

    def test_unsorted_messages(self, tmp_path, raw_config):
        raw_config["scoring"]["messages"].reverse()
        with pytest.raises(ValueError, match="descending"):
            load_config(_write(tmp_path, raw_config))

    def test_non_positive_viewport(self, tmp_path, raw_config):
        raw_config["viewport"]["width"] = 0
        with pytest.raises(ValueError, match="Viewport"):
            load_config(_write(tmp_path, raw_config))


class TestMessageTiers:
    """Test end-of-run message lookup."""

    @pytest.mark.parametrize("score,prefix", [
        (120, "Amazing"),
        (50, "Amazing"),
        (49, "Great job"),
        (30, "Great job"),
        (15, "Good effort"),
        (5, "Not bad"),
        (4, "Better luck"),
        (0, "Better luck"),
    ])
    def test_highest_threshold_wins(self, config, score, prefix):
        assert message_for_score(score, config).startswith(prefix)


class TestConfigCache:
    """Test the cached accessor."""

    @pytest.fixture(autouse=True)
    def restore_default(self):
        yield
        reload_config()

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_replaces_cache(self, tmp_path, raw_config):
        raw_config["viewport"]["width"] = 360
        custom = reload_config(_write(tmp_path, raw_config))
        assert custom.viewport.width == 360
        assert get_config() is custom
