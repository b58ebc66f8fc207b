"""
Tests for configuration loading and validation.
"""

import dataclasses
from pathlib import Path

import pytest
import yaml

import flappy
from flappy.flappy_core.config_loader import get_config, load_config, reload_config

DEFAULT_CONFIG = Path(flappy.__file__).parent / "game_config.yaml"


def write_config(tmp_path, **overrides):
    """Copy the default config with section overrides applied."""
    raw = yaml.safe_load(DEFAULT_CONFIG.read_text())
    for section, values in overrides.items():
        raw[section].update(values)
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(raw))
    return str(path)


class TestDefaults:
    """Test the shipped configuration."""

    def test_physics_constants(self, config):
        assert config.physics.gravity == 1800.0
        assert config.physics.jump_velocity == -550.0
        assert config.physics.max_dt == 0.05

    def test_avatar(self, config):
        assert config.avatar.x == 90.0
        assert config.avatar.radius == 14.0
        assert config.avatar_start_y == pytest.approx(210.0)

    def test_board(self, config):
        assert config.board.width == 400
        assert config.board.height == 600
        assert config.floor_y == 530.0

    def test_persistence_key(self, config):
        assert config.persistence.key == "flappy_best_score_v1"

    def test_frozen(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.physics.gravity = 0.0

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_replaces_cache(self):
        first = get_config()
        second = reload_config()
        assert second is not first
        assert get_config() is second


class TestValidation:
    """Test rejection of inconsistent files."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_override_is_applied(self, tmp_path):
        config = load_config(write_config(tmp_path, physics={"gravity": 900.0}))
        assert config.physics.gravity == 900.0

    @pytest.mark.parametrize("section, values", [
        ("board", {"width": 0}),
        ("board", {"ground_height": 700}),
        ("physics", {"max_dt": 0}),
        ("avatar", {"radius": -1}),
        ("avatar", {"start_y_ratio": 0.99}),
        ("obstacles", {"width": 0}),
        ("difficulty", {"max_speed": 100.0}),
        ("difficulty", {"min_gap": 200.0}),
        ("difficulty", {"min_spawn_every": 2.0}),
        ("difficulty", {"base_gap": 400.0, "min_gap": 100.0}),
        ("persistence", {"key": ""}),
        ("observation", {"max_obstacles": 0}),
        ("env", {"frame_skip": 0}),
    ])
    def test_invalid_values(self, tmp_path, section, values):
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, **{section: values}))
