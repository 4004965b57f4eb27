"""
Pytest configuration and fixtures.
"""

import logging

import pytest

from metrics_publisher.collectors.base import ComponentTemperature
from metrics_publisher.collectors.static import StaticMetricSource, StaticTemperatureSource
from metrics_publisher.models.metric import Metric
from metrics_publisher.outputs.base import MetricSink


class RecordingSink(MetricSink):
    """Sink remembering every metric it was given."""

    def __init__(self, fail_on: type | None = None, error: Exception | None = None):
        self.metrics: list[Metric] = []
        self.fail_on = fail_on
        self.error = error or RuntimeError("sink failure")

    async def write(self, metric: Metric) -> None:
        self.metrics.append(metric)
        if self.fail_on is not None and isinstance(metric, self.fail_on):
            raise self.error


class FakeMQTT:
    """Stands in for MQTTClient, recording published messages."""

    def __init__(self, result: bool = True):
        self.messages: list[tuple[str, str, int | None, bool]] = []
        self.result = result

    async def publish(
        self,
        topic: str,
        payload: str,
        qos: int | None = None,
        retain: bool = False,
    ) -> bool:
        self.messages.append((topic, payload, qos, retain))
        return self.result


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def fake_mqtt() -> FakeMQTT:
    return FakeMQTT()


@pytest.fixture
def stub_source() -> StaticMetricSource:
    """Source returning 40% and 40/100 for host 'h'."""
    return StaticMetricSource(host="h", percent=40, used=40, total=100)


@pytest.fixture
def stub_temperatures() -> StaticTemperatureSource:
    """One readable and one unreadable component."""
    return StaticTemperatureSource(
        [
            ComponentTemperature("CPU Core 1", 52.5),
            ComponentTemperature("acpitz", None),
        ]
    )


@pytest.fixture
def make_sink() -> type[RecordingSink]:
    """Factory for sinks that fail on a given metric type."""
    return RecordingSink


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging() during a test."""
    yield
    logger = logging.getLogger("metrics_publisher")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
