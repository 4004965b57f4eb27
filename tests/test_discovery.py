"""
Tests for Home Assistant discovery config derivation.
"""

import json

import pytest

from metrics_publisher.models.discovery import (
    HomeAssistantDiscoveryConfig,
    UnsupportedMetricError,
    derive,
    sanitize_unique_id,
)
from metrics_publisher.models.metric import (
    Category,
    Percentage,
    PercentMetric,
    UsedMetric,
    ValueMetric,
)


def _config(state_topic: str = "homeassistant/sensor/test-id/state") -> HomeAssistantDiscoveryConfig:
    return HomeAssistantDiscoveryConfig(
        name="test-sensor",
        unique_id="test-id",
        state_topic=state_topic,
        unit_of_measurement="%",
        icon="mdi:cpu-64-bit",
    )


def test_config_topic() -> None:
    config = _config()

    assert config.config_topic == "homeassistant/sensor/test-id/config"
    assert config.state_topic == "homeassistant/sensor/test-id/state"


def test_fixed_fields() -> None:
    config = _config()

    assert config.value_template == "{{ value_json.value }}"
    assert config.state_class == "measurement"
    assert config.expire_after == 300


def test_disk_percent() -> None:
    config = derive(PercentMetric("h", Category.DISK, Percentage(40)))

    assert config.name == "h-disk"
    assert config.unique_id == "hdiskusepercent"
    assert config.state_topic == "homeassistant/sensor/hdiskusepercent/state"
    assert config.config_topic == "homeassistant/sensor/hdiskusepercent/config"
    assert config.unit_of_measurement == "%"
    assert config.icon == "mdi:harddisk"


@pytest.mark.parametrize(
    "category, name, unique_id, icon",
    [
        (Category.CPU, "test-host-cpu", "test-hostcpuusepercent", "mdi:cpu-64-bit"),
        (Category.MEMORY, "test-host-memory", "test-hostmemoryusepercent", "mdi:memory"),
        (Category.DISK, "test-host-disk", "test-hostdiskusepercent", "mdi:harddisk"),
        (Category.SWAP, "test-host-swap", "test-hostswapusepercent", "mdi:swap-horizontal"),
        (Category.FAN_SPEED, "test-host-fanspeed_percent", "test-hostfanspeedpercent", "mdi:fan"),
    ],
)
def test_percent_configs(category: Category, name: str, unique_id: str, icon: str) -> None:
    config = derive(PercentMetric("test-host", category, Percentage(50)))

    assert config.name == name
    assert config.unique_id == unique_id
    assert config.state_topic == f"homeassistant/sensor/{unique_id}/state"
    assert config.unit_of_measurement == "%"
    assert config.icon == icon


def test_unique_id_is_lowercased() -> None:
    config = derive(PercentMetric("MyHost", Category.CPU, Percentage(5)))

    assert config.name == "MyHost-cpu"
    assert config.unique_id == "myhostcpuusepercent"


@pytest.mark.parametrize(
    "category, used, total, name, unique_id, unit, icon",
    [
        (
            Category.DISK, 500_000_000_000, 1_000_000_000_000,
            "test-host-disk_used", "test-hostdiskused", "GB", "mdi:harddisk",
        ),
        (
            Category.MEMORY, 4096, 8192,
            "test-host-memory_used", "test-hostmemoryused", "MB", "mdi:memory",
        ),
        (
            Category.SWAP, 1024, 2048,
            "test-host-swap_used", "test-hostswapused", "MB", "mdi:swap-horizontal",
        ),
    ],
)
def test_used_configs(
    category: Category, used: int, total: int, name: str, unique_id: str, unit: str, icon: str
) -> None:
    config = derive(UsedMetric("test-host", category, used, total))

    assert config.name == name
    assert config.unique_id == unique_id
    assert config.state_topic == f"homeassistant/sensor/{unique_id}/state"
    assert config.unit_of_measurement == unit
    assert config.icon == icon


def test_memory_used() -> None:
    config = derive(UsedMetric("h", Category.MEMORY, 4096, 8192))

    assert config.unique_id == "hmemoryused"
    assert config.unit_of_measurement == "MB"


def test_temperature_value() -> None:
    metric = ValueMetric("h", Category.TEMPERATURE, "CPU Core 1", 52.5, "°C")
    config = derive(metric)

    assert config.name == "h-temperature-CPU Core 1"
    assert config.unique_id == "htemperaturecpu_core_1temp"
    assert config.unique_id.endswith("temp")
    assert " " not in config.unique_id
    assert all(c == "_" or (c.isascii() and c.isalnum() and not c.isupper()) for c in config.unique_id)
    assert config.state_topic == "homeassistant/sensor/htemperaturecpu_core_1temp/state"
    assert config.unit_of_measurement == "°C"
    assert config.icon == "mdi:thermometer"


def test_sanitize_unique_id() -> None:
    assert sanitize_unique_id("Host-Temperature-Package id 0-temp") == "hosttemperaturepackage_id_0temp"
    assert sanitize_unique_id("nvme Sensor (1)/Ünit") == "nvme_sensor_1nit"


@pytest.mark.parametrize(
    "metric",
    [
        UsedMetric("h", Category.CPU, 0, 0),
        UsedMetric("h", Category.FAN_SPEED, 750, 0),
        UsedMetric("h", Category.TEMPERATURE, 0, 0),
        PercentMetric("h", Category.TEMPERATURE, Percentage(0)),
        ValueMetric("h", Category.DISK, "sda", 1.0, "GB"),
        ValueMetric("h", Category.FAN_SPEED, "fan1", 750.0, "RPM"),
    ],
)
def test_unsupported_combinations_fail(metric) -> None:
    with pytest.raises(UnsupportedMetricError):
        derive(metric)


def test_value_unsupported_message() -> None:
    with pytest.raises(UnsupportedMetricError, match="unsupported category for Value metric"):
        derive(ValueMetric("h", Category.CPU, "core", 1.0, "%"))


def test_derive_is_deterministic() -> None:
    metrics = [
        PercentMetric("h", Category.SWAP, Percentage(12)),
        UsedMetric("h", Category.DISK, 40, 100),
        ValueMetric("h", Category.TEMPERATURE, "CPU Core 1", 52.5, "°C"),
    ]

    for metric in metrics:
        assert derive(metric).to_json() == derive(metric).to_json()
        assert derive(metric) == derive(metric)


def test_config_topic_does_not_mutate_state_topic() -> None:
    config = derive(PercentMetric("h", Category.CPU, Percentage(1)))
    before = config.state_topic

    assert config.config_topic == before.replace("/state", "/config")
    assert config.state_topic == before


def test_discovery_payload_wire_format() -> None:
    config = derive(PercentMetric("h", Category.DISK, Percentage(40)))

    assert config.to_json() == (
        '{"name":"h-disk","unique_id":"hdiskusepercent",'
        '"state_topic":"homeassistant/sensor/hdiskusepercent/state",'
        '"unit_of_measurement":"%","value_template":"{{ value_json.value }}",'
        '"state_class":"measurement","icon":"mdi:harddisk","expire_after":300}'
    )


def test_discovery_payload_keys() -> None:
    config = derive(ValueMetric("h", Category.TEMPERATURE, "CPU Core 1", 52.5, "°C"))
    payload = json.loads(config.to_json())

    assert list(payload) == [
        "name",
        "unique_id",
        "state_topic",
        "unit_of_measurement",
        "value_template",
        "state_class",
        "icon",
        "expire_after",
    ]
    assert payload["unit_of_measurement"] == "°C"
    assert "°C" in config.to_json()
