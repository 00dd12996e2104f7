"""
Tests for configuration
"""

import pytest

from fusion_law import FusionLawConfig, UsefulRuleEngine, get_config, set_config
from fusion_law.config import ENV_MAX_PURE_PIECE_SIZE, MAX_PURE_PIECE_SIZE


class TestFusionLawConfig:
    def test_defaults(self):
        assert FusionLawConfig().max_pure_piece_size == MAX_PURE_PIECE_SIZE

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            FusionLawConfig(max_pure_piece_size=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_MAX_PURE_PIECE_SIZE, "3")
        assert FusionLawConfig.from_env().max_pure_piece_size == 3

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv(ENV_MAX_PURE_PIECE_SIZE, raising=False)
        assert FusionLawConfig.from_env() == FusionLawConfig()

    def test_from_env_not_an_integer(self, monkeypatch):
        monkeypatch.setenv(ENV_MAX_PURE_PIECE_SIZE, "many")
        with pytest.raises(ValueError):
            FusionLawConfig.from_env()

    def test_with_overrides(self):
        config = FusionLawConfig().with_overrides(max_pure_piece_size=4)
        assert config.max_pure_piece_size == 4


class TestActiveConfig:
    def test_set_config_returns_previous(self, jordan):
        previous = set_config(FusionLawConfig(max_pure_piece_size=1))
        try:
            assert get_config().max_pure_piece_size == 1
            assert UsefulRuleEngine(jordan).config.max_pure_piece_size == 1
        finally:
            set_config(previous)
        assert get_config() is previous


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
