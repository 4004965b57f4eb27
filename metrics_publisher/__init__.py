"""
Metrics Publisher: host metrics to Home Assistant via MQTT discovery.
"""

from .const import APP_VERSION

__version__ = APP_VERSION
