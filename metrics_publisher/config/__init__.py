"""
Configuration loading from environment variables.
"""

from .loader import ConfigError, ConfigLoader
from .schema import Config, FanSpeedConfig, MQTTConfig, SourceConfig

__all__ = [
    "Config",
    "ConfigError",
    "ConfigLoader",
    "FanSpeedConfig",
    "MQTTConfig",
    "SourceConfig",
]
