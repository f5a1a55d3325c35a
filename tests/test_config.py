"""Tests for environment-driven configuration"""

import logging

from econlab.config import configure_logging, seed_from_env


class TestSeedFromEnv:
    def test_missing(self, monkeypatch) -> None:
        monkeypatch.delenv("ECONLAB_SEED", raising=False)
        assert seed_from_env() is None
        assert seed_from_env(default=3) == 3

    def test_integer(self, monkeypatch) -> None:
        monkeypatch.setenv("ECONLAB_SEED", "42")
        assert seed_from_env() == 42

    def test_not_an_integer(self, monkeypatch) -> None:
        monkeypatch.setenv("ECONLAB_SEED", "abc")
        assert seed_from_env() is None


class TestConfigureLogging:
    def test_level_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("ECONLAB_LOG_LEVEL", "debug")
        logger = configure_logging()
        assert logger.level == logging.DEBUG

    def test_explicit_level(self) -> None:
        logger = configure_logging("ERROR")
        assert logger.level == logging.ERROR

    def test_unknown_level_defaults_to_warning(self) -> None:
        logger = configure_logging("LOUD")
        assert logger.level == logging.WARNING

    def test_single_handler(self) -> None:
        configure_logging()
        logger = configure_logging()
        assert len(logger.handlers) == 1
