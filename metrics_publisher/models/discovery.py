"""
Home Assistant MQTT Discovery config derivation.

Every metric maps to exactly one sensor. The sensor's name, unique_id
and topics are derived from (host, category, component) so the same
metric always lands on the same Home Assistant entity.
"""

import json
from dataclasses import dataclass
from typing import Any

from .metric import Category, Metric, PercentMetric, UsedMetric, ValueMetric

DISCOVERY_PREFIX = "homeassistant"
VALUE_TEMPLATE = "{{ value_json.value }}"
STATE_CLASS = "measurement"
EXPIRE_AFTER = 300

TEMPERATURE_ICON = "mdi:thermometer"


class UnsupportedMetricError(ValueError):
    """Raised when a metric has no discovery rule."""

    pass


# category -> (name suffix, sensor name, icon)
_PERCENT_SENSORS: dict[Category, tuple[str, str, str]] = {
    Category.DISK: ("disk", "diskUsePercent", "mdi:harddisk"),
    Category.MEMORY: ("memory", "memoryUsePercent", "mdi:memory"),
    Category.CPU: ("cpu", "cpuUsePercent", "mdi:cpu-64-bit"),
    Category.SWAP: ("swap", "swapUsePercent", "mdi:swap-horizontal"),
    Category.FAN_SPEED: ("fanspeed_percent", "fanSpeedPercent", "mdi:fan"),
}

# category -> (name suffix, sensor name, unit)
_USED_SENSORS: dict[Category, tuple[str, str, str]] = {
    Category.DISK: ("disk_used", "diskUsed", "GB"),
    Category.MEMORY: ("memory_used", "memoryUsed", "MB"),
    Category.SWAP: ("swap_used", "swapUsed", "MB"),
}


@dataclass(frozen=True)
class HomeAssistantDiscoveryConfig:
    """Discovery descriptor for one sensor."""

    name: str
    unique_id: str
    state_topic: str
    unit_of_measurement: str
    icon: str
    value_template: str = VALUE_TEMPLATE
    state_class: str = STATE_CLASS
    expire_after: int = EXPIRE_AFTER

    @property
    def config_topic(self) -> str:
        """Discovery topic, derived from the state topic."""
        return self.state_topic.replace("/state", "/config")

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the discovery payload dictionary.

        Key order matches the wire format Home Assistant receives.
        """
        return {
            "name": self.name,
            "unique_id": self.unique_id,
            "state_topic": self.state_topic,
            "unit_of_measurement": self.unit_of_measurement,
            "value_template": self.value_template,
            "state_class": self.state_class,
            "icon": self.icon,
            "expire_after": self.expire_after,
        }

    def to_json(self) -> str:
        """Serialize the discovery payload as compact JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


def state_topic_for(unique_id: str) -> str:
    """Get the state topic for a sensor unique_id."""
    return f"{DISCOVERY_PREFIX}/sensor/{unique_id}/state"


def sanitize_unique_id(value: str) -> str:
    """
    Normalize a string to a unique_id slug.

    Lowercases, turns spaces into underscores and drops every character
    that is not an ASCII letter, digit or underscore.
    """
    lowered = value.lower().replace(" ", "_")
    return "".join(c for c in lowered if c == "_" or (c.isascii() and c.isalnum()))


def _percent_config(metric: PercentMetric) -> HomeAssistantDiscoveryConfig:
    try:
        suffix, sensor_name, icon = _PERCENT_SENSORS[metric.category]
    except KeyError:
        raise UnsupportedMetricError(
            f"unsupported category for Percent metric: {metric.category}"
        ) from None

    unique_id = f"{metric.host}{sensor_name}".lower()
    return HomeAssistantDiscoveryConfig(
        name=f"{metric.host}-{suffix}",
        unique_id=unique_id,
        state_topic=state_topic_for(unique_id),
        unit_of_measurement="%",
        icon=icon,
    )


def _used_config(metric: UsedMetric) -> HomeAssistantDiscoveryConfig:
    try:
        suffix, sensor_name, unit = _USED_SENSORS[metric.category]
    except KeyError:
        raise UnsupportedMetricError(
            f"unsupported category for Used metric: {metric.category}"
        ) from None

    unique_id = f"{metric.host}{sensor_name}".lower()
    return HomeAssistantDiscoveryConfig(
        name=f"{metric.host}-{suffix}",
        unique_id=unique_id,
        state_topic=state_topic_for(unique_id),
        unit_of_measurement=unit,
        icon=_PERCENT_SENSORS[metric.category][2],
    )


def _value_config(metric: ValueMetric) -> HomeAssistantDiscoveryConfig:
    if metric.category is not Category.TEMPERATURE:
        raise UnsupportedMetricError(
            f"unsupported category for Value metric: {metric.category}"
        )

    name = f"{metric.host}-temperature-{metric.component_label}"
    # Labels that normalize to the same slug share one sensor
    unique_id = sanitize_unique_id(f"{name}-temp")
    return HomeAssistantDiscoveryConfig(
        name=name,
        unique_id=unique_id,
        state_topic=state_topic_for(unique_id),
        unit_of_measurement=metric.unit,
        icon=TEMPERATURE_ICON,
    )


def derive(metric: Metric) -> HomeAssistantDiscoveryConfig:
    """
    Derive the Home Assistant discovery config for a metric.

    Args:
        metric: Metric to describe

    Returns:
        Discovery config for the metric's sensor

    Raises:
        UnsupportedMetricError: If the metric/category pair has no rule
    """
    if isinstance(metric, PercentMetric):
        return _percent_config(metric)
    if isinstance(metric, UsedMetric):
        return _used_config(metric)
    if isinstance(metric, ValueMetric):
        return _value_config(metric)
    raise UnsupportedMetricError(f"Not a metric: {metric!r}")
