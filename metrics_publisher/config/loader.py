"""
Configuration loader reading the process environment.
"""

import os
from collections.abc import Mapping

from ..logging import get_logger
from .schema import Config, SourceConfig

logger = get_logger("config")


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


class ConfigLoader:
    """
    Loads and validates configuration from environment variables.

    Usage:
        loader = ConfigLoader()
        config = loader.load_env()
        # or, with an explicit mapping
        config = loader.load_env({"BROKER_URL": "tcp://localhost:1883"})
    """

    def load_env(self, environ: Mapping[str, str] | None = None) -> Config:
        """
        Load configuration from environment variables.

        Args:
            environ: Variables to read (defaults to os.environ)

        Returns:
            Validated Config object

        Raises:
            ConfigError: If a variable is missing or invalid
        """
        if environ is None:
            environ = os.environ

        try:
            return Config.from_env(environ)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def load_source(self, environ: Mapping[str, str] | None = None) -> SourceConfig:
        """
        Load only the host sampling settings.

        Used when the broker settings are invalid but the host still has
        to be sampled. An invalid variable is logged and falls back to its
        default; every other setting is kept.
        """
        if environ is None:
            environ = os.environ

        errors: list[str] = []
        config = SourceConfig.from_env(environ, errors)
        for error in errors:
            logger.warning(f"{error}, using default")
        return config

    def validate(self, config: Config) -> list[str]:
        """
        Validate configuration and return list of warnings.

        Args:
            config: Configuration to validate

        Returns:
            List of warning messages
        """
        warnings: list[str] = []
        fan = config.source.fan_speed

        if fan.command and fan.file:
            warnings.append(
                "Both FAN_SPEED_COMMAND and FAN_SPEED_FILE are set; "
                "the file is only read when the command fails"
            )

        if fan.timeout <= 0:
            warnings.append(f"FAN_SPEED_TIMEOUT must be positive, got {fan.timeout}")

        if config.source.cpu_sample_interval < 0:
            warnings.append(
                f"CPU_SAMPLE_INTERVAL must not be negative, got "
                f"{config.source.cpu_sample_interval}"
            )

        if config.mqtt.keepalive <= 0:
            warnings.append(f"MQTT_KEEPALIVE must be positive, got {config.mqtt.keepalive}")

        return warnings
