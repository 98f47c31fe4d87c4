"""
Configuration for discord-notify.

Two records live here:

- NotificationOptions: what to send, filled once by the option parser.
- SenderConfig: how to send it. Loaded from (in priority order):
  1. Environment variables (highest priority)
  2. Config file ($HOME/.config/discord-notify/config.yaml, or the path in
     DISCORD_NOTIFY_CONFIG)
  3. Defaults (lowest priority)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

import yaml

from .errors import OptionError


CONFIG_PATH_ENV = "DISCORD_NOTIFY_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class NotificationOptions:
    """Validated command-line options."""
    webhook_url: Optional[str] = None
    username: Optional[str] = None
    message: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    avatar_url: Optional[str] = None
    color: Optional[int] = None
    file_path: Optional[str] = None

    def has_content(self) -> bool:
        """True when at least one content-bearing field is set."""
        return any((self.message, self.title, self.description, self.file_path))

    def is_file_mode(self) -> bool:
        return bool(self.file_path)


@dataclass
class HttpConfig:
    """HTTP client settings, in seconds."""
    connect_timeout: float = 10.0
    read_timeout: float = 30.0

    @property
    def timeout(self) -> Tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class SenderConfig:
    """Main configuration container."""
    http: HttpConfig = field(default_factory=HttpConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(
        cls,
        config_path: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "SenderConfig":
        """
        Load configuration from file and environment variables.

        Args:
            config_path: Optional path to a config.yaml file
            env: Environment mapping, defaults to os.environ

        Returns:
            Loaded SenderConfig instance

        Raises:
            OptionError: If the file cannot be parsed or a value is invalid
        """
        env = os.environ if env is None else env
        config = cls()

        if config_path is None:
            config_path = default_config_path(env)

        if config_path.exists():
            config._load_from_file(config_path)

        config._load_from_env(env)

        errors = config.validate()
        if errors:
            raise OptionError("; ".join(errors))

        return config

    def _load_from_file(self, path: Path) -> None:
        """Load configuration from YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise OptionError(f"Cannot read config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise OptionError(f"Config file {path} must contain a mapping")

        # HTTP config
        if "http" in data:
            http_data = data["http"] or {}
            if "connect_timeout" in http_data:
                self.http.connect_timeout = _to_float("http.connect_timeout", http_data["connect_timeout"])
            if "read_timeout" in http_data:
                self.http.read_timeout = _to_float("http.read_timeout", http_data["read_timeout"])

        # Logging config
        if "logging" in data:
            logging_data = data["logging"] or {}
            if "level" in logging_data:
                self.log.level = str(logging_data["level"]).upper()

    def _load_from_env(self, env: Mapping[str, str]) -> None:
        """Load configuration from environment variables."""
        if connect_timeout := env.get("DISCORD_NOTIFY_CONNECT_TIMEOUT"):
            self.http.connect_timeout = _to_float("DISCORD_NOTIFY_CONNECT_TIMEOUT", connect_timeout)
        if read_timeout := env.get("DISCORD_NOTIFY_READ_TIMEOUT"):
            self.http.read_timeout = _to_float("DISCORD_NOTIFY_READ_TIMEOUT", read_timeout)
        if level := env.get("DISCORD_NOTIFY_LOG_LEVEL"):
            self.log.level = level.upper()

    def validate(self) -> list[str]:
        """
        Validate the configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.http.connect_timeout <= 0:
            errors.append("Connect timeout must be > 0")

        if self.http.read_timeout <= 0:
            errors.append("Read timeout must be > 0")

        if self.log.level not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log.level}")

        return errors

    @property
    def log_level(self) -> int:
        return getattr(logging, self.log.level)


def default_config_path(env: Mapping[str, str]) -> Path:
    if custom := env.get(CONFIG_PATH_ENV):
        return Path(custom)
    home = env.get("HOME") or str(Path.home())
    return Path(home) / ".config" / "discord-notify" / "config.yaml"


def _to_float(key: str, value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise OptionError(f"{key} must be a number: {value}") from e
