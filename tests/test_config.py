import importlib
import logging
import os
from unittest.mock import patch

from coverage_analysis import config, coverage


class TestEnvParsing:
    def test_env_int_reads_value(self, monkeypatch):
        monkeypatch.setenv("COVERAGE_TEST_INT", "65")
        assert config._env_int("COVERAGE_TEST_INT", 80) == 65

    def test_env_int_falls_back_on_missing_or_invalid(self, monkeypatch):
        monkeypatch.delenv("COVERAGE_TEST_INT", raising=False)
        assert config._env_int("COVERAGE_TEST_INT", 80) == 80

        monkeypatch.setenv("COVERAGE_TEST_INT", "eighty")
        assert config._env_int("COVERAGE_TEST_INT", 80) == 80

    def test_env_flag(self, monkeypatch):
        monkeypatch.setenv("COVERAGE_TEST_FLAG", "Yes")
        assert config._env_flag("COVERAGE_TEST_FLAG") is True

        monkeypatch.setenv("COVERAGE_TEST_FLAG", "0")
        assert config._env_flag("COVERAGE_TEST_FLAG") is False

        monkeypatch.delenv("COVERAGE_TEST_FLAG")
        assert config._env_flag("COVERAGE_TEST_FLAG", default=True) is True


class TestConfigureLogging:
    def test_uses_requested_level(self):
        with patch("coverage_analysis.config.logging.basicConfig") as basic_config:
            config.configure_logging("debug")
        basic_config.assert_called_once_with(level=logging.DEBUG, format=config.LOG_FORMAT)

    def test_unknown_level_falls_back_to_info(self):
        with patch("coverage_analysis.config.logging.basicConfig") as basic_config:
            config.configure_logging("chatty")
        basic_config.assert_called_once_with(level=logging.INFO, format=config.LOG_FORMAT)


class TestLoadSettings:
    def test_import_does_not_load_dotenv(self):
        """
        Importing the engine must leave the environment alone; .env files are
        only read through load_settings().
        """
        try:
            with patch("dotenv.load_dotenv") as load_dotenv:
                importlib.reload(config)
                importlib.reload(coverage)
            load_dotenv.assert_not_called()
        finally:
            importlib.reload(config)

    def test_load_settings_reads_dotenv_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("COVERAGE_GOOD_THRESHOLD", raising=False)
        monkeypatch.delenv("COVERAGE_WARN_THRESHOLD", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("COVERAGE_GOOD_THRESHOLD=90\nCOVERAGE_WARN_THRESHOLD=60\n")

        try:
            settings = config.load_settings(str(env_file))
        finally:
            os.environ.pop("COVERAGE_GOOD_THRESHOLD", None)
            os.environ.pop("COVERAGE_WARN_THRESHOLD", None)

        assert settings["good_threshold"] == 90
        assert settings["warn_threshold"] == 60

    def test_environment_wins_over_dotenv_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COVERAGE_GOOD_THRESHOLD", "75")
        env_file = tmp_path / ".env"
        env_file.write_text("COVERAGE_GOOD_THRESHOLD=90\n")

        assert config.load_settings(str(env_file))["good_threshold"] == 75


class TestLogLevel:
    def test_debug_flag_forces_debug(self, monkeypatch):
        monkeypatch.setenv("COVERAGE_DEBUG", "true")
        monkeypatch.setenv("COVERAGE_LOG_LEVEL", "warning")
        assert config.log_level() == "DEBUG"

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.delenv("COVERAGE_DEBUG", raising=False)
        monkeypatch.setenv("COVERAGE_LOG_LEVEL", "warning")
        assert config.log_level() == "WARNING"
