"""Tests for sciencegame.config."""

import pytest
from pydantic import ValidationError

from sciencegame.config import GameConfig, load_config_from_env


class TestGameConfig:
    """Tests for GameConfig validation."""

    def test_defaults(self):
        config = GameConfig()
        assert config.min_players == 2
        assert config.max_players is None
        assert config.round_count is None
        assert config.eliminate_on_miss is False
        assert config.points_value == 1
        assert config.payout_schedule is None

    def test_max_below_min_rejected(self):
        with pytest.raises(ValidationError, match="max_players"):
            GameConfig(min_players=3, max_players=2)

    def test_negative_schedule_rejected(self):
        with pytest.raises(ValidationError):
            GameConfig(payout_schedule=(10, -1))

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            GameConfig(rounds=3)


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env."""

    def test_empty_environment_gives_defaults(self):
        assert load_config_from_env({}) == GameConfig()

    def test_reads_all_variables(self):
        config = load_config_from_env({
            "SCIENCEGAME_MIN_PLAYERS": "3",
            "SCIENCEGAME_MAX_PLAYERS": "8",
            "SCIENCEGAME_ROUND_COUNT": "5",
            "SCIENCEGAME_ELIMINATE_ON_MISS": "true",
            "SCIENCEGAME_POINTS_VALUE": "10",
            "SCIENCEGAME_PAYOUT_SCHEDULE": "50,30,20",
        })
        assert config.min_players == 3
        assert config.max_players == 8
        assert config.round_count == 5
        assert config.eliminate_on_miss is True
        assert config.points_value == 10
        assert config.payout_schedule == (50, 30, 20)

    def test_blank_values_ignored(self):
        config = load_config_from_env({"SCIENCEGAME_MAX_PLAYERS": "", "SCIENCEGAME_PAYOUT_SCHEDULE": " "})
        assert config.max_players is None
        assert config.payout_schedule is None

    def test_unparseable_value_raises(self):
        with pytest.raises(ValueError):
            load_config_from_env({"SCIENCEGAME_MIN_PLAYERS": "two"})

    @pytest.mark.parametrize("value", ["0", "false", "No", " off "])
    def test_false_boolean_values(self, value):
        config = load_config_from_env({"SCIENCEGAME_ELIMINATE_ON_MISS": value})
        assert config.eliminate_on_miss is False

    @pytest.mark.parametrize("value", ["1", "TRUE", "yes", "on"])
    def test_true_boolean_values(self, value):
        config = load_config_from_env({"SCIENCEGAME_ELIMINATE_ON_MISS": value})
        assert config.eliminate_on_miss is True

    def test_unrecognised_boolean_raises(self):
        with pytest.raises(ValueError, match="maybe"):
            load_config_from_env({"SCIENCEGAME_ELIMINATE_ON_MISS": "maybe"})

    def test_blank_boolean_ignored(self):
        assert load_config_from_env({"SCIENCEGAME_ELIMINATE_ON_MISS": ""}).eliminate_on_miss is False

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("SCIENCEGAME_MIN_PLAYERS", "4")
        assert load_config_from_env().min_players == 4
