"""
Home Assistant MQTT Discovery publisher.

Each metric becomes two messages: the discovery config, which registers
(or re-registers) the sensor, and the state carrying the value. Both are
republished every run, so a lost message is fixed by the next one.
"""

import json
from typing import Protocol

from ..logging import get_logger
from ..models.discovery import HomeAssistantDiscoveryConfig, derive
from ..models.metric import Metric, state_value
from ..outputs.base import MetricSink

logger = get_logger("mqtt.homeassistant")


class Publisher(Protocol):
    async def publish(
        self,
        topic: str,
        payload: str,
        qos: int | None = None,
        retain: bool = False,
    ) -> bool: ...


def build_state_payload(metric: Metric) -> str:
    """Build the JSON state payload for a metric."""
    return json.dumps({"value": state_value(metric)}, separators=(",", ":"), ensure_ascii=False)


class HomeAssistantPublisher(MetricSink):
    """Metric sink publishing to Home Assistant over MQTT."""

    def __init__(self, mqtt_client: Publisher, qos: int = 0):
        """
        Initialize publisher.

        Args:
            mqtt_client: Connected MQTT client
            qos: QoS for discovery and state messages
        """
        self.mqtt = mqtt_client
        self.qos = qos

    async def publish_discovery(self, config: HomeAssistantDiscoveryConfig) -> bool:
        """Publish the discovery config of a sensor."""
        logger.debug(f"config topic = {config.config_topic}")
        return await self.mqtt.publish(config.config_topic, config.to_json(), qos=self.qos)

    async def publish_state(self, config: HomeAssistantDiscoveryConfig, metric: Metric) -> bool:
        """Publish the current value of a sensor."""
        logger.debug(f"state topic = {config.state_topic}")
        return await self.mqtt.publish(config.state_topic, build_state_payload(metric), qos=self.qos)

    async def write(self, metric: Metric) -> None:
        """
        Publish a metric's discovery config and state.

        Raises:
            UnsupportedMetricError: If the metric has no discovery rule
        """
        config = derive(metric)
        registered = await self.publish_discovery(config)
        stated = await self.publish_state(config, metric)

        if registered and stated:
            logger.info(f"Published {config.name}: {state_value(metric)!r}")
        else:
            logger.warning(
                f"Publishing {config.name} incomplete "
                f"(config: {'ok' if registered else 'failed'}, "
                f"state: {'ok' if stated else 'failed'})"
            )
