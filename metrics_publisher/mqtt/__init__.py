"""
MQTT client and Home Assistant discovery publishing.
"""

from .client import MQTTClient
from .homeassistant import HomeAssistantPublisher

__all__ = [
    "MQTTClient",
    "HomeAssistantPublisher",
]
