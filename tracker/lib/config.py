"""
Configuration loader for the tracker.

Settings come from tracker.env, then TRACKER_* environment variables, then
command-line flags (applied by the CLI), each layer overriding the last.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tracker.errors import TrackerError
from tracker.lib import envparse
from tracker.lib.constants import DEFAULT_CONFIG_FILE, DEFAULT_DB_PATH, ENV_PREFIX

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigError(TrackerError):
    """Configuration file could not be used."""
    pass


@dataclass
class TrackerConfig:
    """Runtime settings from tracker.env"""
    db_path: Path
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    clear_screen: bool = True


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(config_path: Optional[Path] = None, environ=None) -> TrackerConfig:
    """Load TrackerConfig.

    Args:
        config_path: Explicit tracker.env path; must exist if given. When
            omitted, ./tracker.env is used if present.
        environ: Mapping to read TRACKER_* overrides from (defaults to os.environ)

    Raises:
        ConfigError: If the file is missing (when explicit) or malformed
    """
    env: dict[str, str] = {}

    if config_path is not None:
        try:
            env = envparse.load_env(config_path)
        except (FileNotFoundError, ValueError) as e:
            raise ConfigError(str(e)) from e
    else:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            try:
                env = envparse.load_env(default_path)
            except ValueError as e:
                raise ConfigError(str(e)) from e

    env.update(envparse.env_overrides(ENV_PREFIX, environ))

    log_level = env.get("LOG_LEVEL", "WARNING").upper()
    if log_level not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL '{log_level}', using WARNING")
        log_level = "WARNING"

    log_file = env.get("LOG_FILE")

    return TrackerConfig(
        db_path=Path(env.get("DB_PATH", DEFAULT_DB_PATH)),
        log_level=log_level,
        log_file=Path(log_file) if log_file else None,
        clear_screen=_parse_bool(env.get("CLEAR_SCREEN", "true")),
    )


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Handler installed by configure_logging, replaced on reconfiguration
_handler: Optional[logging.Handler] = None


def configure_logging(config: TrackerConfig, verbose: bool = False) -> None:
    """Attach the tracker's handler to the root logger and set its level.

    Logs go to LOG_FILE when set, otherwise to stderr.
    """
    global _handler
    root = logging.getLogger()

    if _handler is not None:
        root.removeHandler(_handler)
        _handler.close()

    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        _handler = logging.FileHandler(config.log_file)
    else:
        _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root.addHandler(_handler)
    root.setLevel(logging.DEBUG if verbose else getattr(logging, config.log_level))
