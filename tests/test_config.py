"""Tests for tracker.lib.config and tracker.lib.envparse modules."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from tracker.lib import config as config_module
from tracker.lib import envparse
from tracker.lib.config import (
    VALID_LOG_LEVELS,
    ConfigError,
    TrackerConfig,
    configure_logging,
    load_config,
)
from tracker.lib.constants import DEFAULT_DB_PATH


class TestLoadConfig:
    """Layering of tracker.env and TRACKER_* variables."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config(environ={})
        assert config.db_path == Path(DEFAULT_DB_PATH)
        assert config.log_level == "WARNING"
        assert config.log_file is None
        assert config.clear_screen is True

    def test_reads_cwd_tracker_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "tracker.env").write_text('DB_PATH="store/db.json"\nCLEAR_SCREEN=false\n')
        config = load_config(environ={})
        assert config.db_path == Path("store/db.json")
        assert config.clear_screen is False

    def test_explicit_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("# comment\nLOG_LEVEL=debug\nLOG_FILE=logs/tracker.log\n")
        config = load_config(env_file, environ={})
        assert config.log_level == "DEBUG"
        assert config.log_file == Path("logs/tracker.log")

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.env", environ={})

    def test_malformed_file_raises(self, tmp_path):
        env_file = tmp_path / "bad.env"
        env_file.write_text("DB_PATH\n")
        with pytest.raises(ConfigError):
            load_config(env_file, environ={})

    def test_environment_overrides_file(self, tmp_path):
        env_file = tmp_path / "tracker.env"
        env_file.write_text("DB_PATH=a.json\n")
        config = load_config(env_file, environ={"TRACKER_DB_PATH": "b.json", "DB_PATH": "ignored.json"})
        assert config.db_path == Path("b.json")

    @patch("tracker.lib.config.envparse.load_env")
    def test_invalid_log_level_falls_back(self, mock_load_env, caplog):
        mock_load_env.return_value = {"LOG_LEVEL": "chatty"}
        config = load_config(Path("/fake/tracker.env"), environ={})
        assert config.log_level == "WARNING"
        assert "Unknown LOG_LEVEL 'CHATTY'" in caplog.text

    def test_valid_levels(self):
        assert "DEBUG" in VALID_LOG_LEVELS
        assert "WARNING" in VALID_LOG_LEVELS


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
        config_module._handler = None

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "tracker.log"
        config = TrackerConfig(db_path=tmp_path / "db.json", log_level="INFO", log_file=log_file)

        configure_logging(config)
        logging.getLogger("tracker.test").info("hello from test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello from test" in log_file.read_text()

    def test_verbose_forces_debug(self, tmp_path):
        config = TrackerConfig(db_path=tmp_path / "db.json")
        configure_logging(config, verbose=True)
        assert logging.getLogger().level == logging.DEBUG


class TestEnvParse:
    def test_quotes_and_export(self):
        env = envparse.parse_env_text("export A='x y'\nB=\"z\"\n\n# skip\nC=plain")
        assert env == {"A": "x y", "B": "z", "C": "plain"}

    def test_rejects_lowercase_key(self):
        with pytest.raises(ValueError, match="invalid key"):
            envparse.parse_env_text("db_path=x")

    @pytest.mark.parametrize("value", ["`ls`", "$(whoami)", "${HOME}/db.json"])
    def test_rejects_shell_patterns(self, value):
        with pytest.raises(ValueError, match="forbidden pattern"):
            envparse.parse_env_text(f"DB_PATH={value}")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            envparse.load_env(tmp_path / "none.env")

    def test_env_overrides(self):
        environ = {"TRACKER_DB_PATH": "x", "TRACKER_": "empty", "OTHER": "y"}
        assert envparse.env_overrides("TRACKER_", environ) == {"DB_PATH": "x"}
