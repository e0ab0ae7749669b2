"""Test coverage for environment-driven settings."""
import logging

import pytest
from settings import MAX_MINUTES, MAX_QUESTIONS, load_settings


ENV_NAMES = (
    "APTITUDE_SCORE_FILE",
    "APTITUDE_TIMEOUT_CAP",
    "APTITUDE_DEFAULT_QUESTIONS",
    "APTITUDE_DEFAULT_MINUTES",
    "APTITUDE_SEED",
    "APTITUDE_LOG_LEVEL",
)


@pytest.fixture
def env(monkeypatch, tmp_path):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)

    def load(**values):
        for name, value in values.items():
            monkeypatch.setenv(name, value)
        return load_settings(tmp_path / "missing.env")
    return load


class TestDefaults:
    def test_defaults_without_environment(self, env):
        settings = env()

        assert settings.timeout_cap == 60
        assert settings.default_questions == 10
        assert settings.default_minutes == 10
        assert settings.seed is None
        assert settings.level == logging.WARNING

    def test_invalid_integer_falls_back(self, env):
        assert env(APTITUDE_DEFAULT_QUESTIONS="many").default_questions == 10


class TestClamping:
    """Exam defaults and the timeout cap stay inside their prompt ranges."""

    @pytest.mark.parametrize("raw, expected", [("0", 1), ("-3", 1), ("25", 25), ("500", MAX_QUESTIONS)])
    def test_default_questions(self, env, raw, expected):
        assert env(APTITUDE_DEFAULT_QUESTIONS=raw).default_questions == expected

    @pytest.mark.parametrize("raw, expected", [("0", 1), ("-1", 1), ("45", 45), ("1000", MAX_MINUTES)])
    def test_default_minutes(self, env, raw, expected):
        assert env(APTITUDE_DEFAULT_MINUTES=raw).default_minutes == expected

    @pytest.mark.parametrize("raw, expected", [("0", 1), ("30", 30), ("90", 60)])
    def test_timeout_cap(self, env, raw, expected):
        assert env(APTITUDE_TIMEOUT_CAP=raw).timeout_cap == expected


class TestLogLevel:
    def test_named_level(self, env):
        assert env(APTITUDE_LOG_LEVEL="debug").level == logging.DEBUG

    @pytest.mark.parametrize("raw", ["LOUD", "BASIC_FORMAT"])
    def test_unknown_level_falls_back_to_warning(self, env, raw):
        assert env(APTITUDE_LOG_LEVEL=raw).level == logging.WARNING
