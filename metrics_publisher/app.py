"""
Main application orchestrator.

Handles:
- Configuration loading
- Sink selection (MQTT or console fallback)
- One sampling pass over the requested categories

Scheduling is external (cron, systemd timer, ...): every invocation runs
exactly one pass and returns an exit status.
"""

from collections.abc import Iterable, Mapping

import aiomqtt

from .collectors.base import MetricSource, TemperatureSource
from .collectors.system import SystemMetricSource
from .collectors.temperature import HwmonTemperatureSource
from .config.loader import ConfigError, ConfigLoader
from .config.schema import SourceConfig
from .logging import get_logger
from .models.metric import Category
from .mqtt.client import MQTTClient
from .mqtt.homeassistant import HomeAssistantPublisher
from .outputs.base import MetricSink
from .outputs.console import ConsoleMetricSink
from .pipeline import MetricPipeline

logger = get_logger("app")

DEFAULT_CATEGORIES = (
    Category.DISK,
    Category.MEMORY,
    Category.CPU,
    Category.SWAP,
    Category.FAN_SPEED,
    Category.TEMPERATURE,
)


class Application:
    """
    Runs one sampling pass.

    Orchestrates the metric source, the temperature enumerator and a sink.
    """

    def __init__(
        self,
        source: MetricSource,
        sink: MetricSink,
        temperatures: TemperatureSource,
    ):
        self.pipeline = MetricPipeline(source, sink, temperatures)

    async def run(self, categories: Iterable[Category] = DEFAULT_CATEGORIES) -> int:
        """
        Process every category in order.

        A category that raises is logged and skipped.

        Returns:
            Number of categories that failed
        """
        failed = 0
        for category in categories:
            try:
                await self.pipeline.process(category)
            except Exception as e:
                logger.error(f"Error processing {category}: {e}")
                failed += 1
        return failed


def _create_sources(
    config: SourceConfig,
) -> tuple[MetricSource, TemperatureSource]:
    return SystemMetricSource(config), HwmonTemperatureSource()


async def run_console(
    source_config: SourceConfig,
    categories: Iterable[Category] = DEFAULT_CATEGORIES,
) -> None:
    """Run one pass printing metrics to stdout."""
    source, temperatures = _create_sources(source_config)
    await Application(source, ConsoleMetricSink(), temperatures).run(categories)


async def run_mqtt(
    client: MQTTClient,
    source_config: SourceConfig,
    categories: Iterable[Category] = DEFAULT_CATEGORIES,
) -> int:
    """
    Run one pass publishing to Home Assistant.

    Returns:
        Exit status: 1 if the broker is unreachable, else 0
    """
    try:
        await client.connect()
    except aiomqtt.MqttError as e:
        logger.error(f"Unable to connect to MQTT broker {client.config.address}: {e}")
        return 1

    try:
        source, temperatures = _create_sources(source_config)
        sink = HomeAssistantPublisher(client, qos=client.config.qos)
        await Application(source, sink, temperatures).run(categories)
    finally:
        await client.disconnect()
    return 0


async def run_once(
    categories: Iterable[Category] = DEFAULT_CATEGORIES,
    environ: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> int:
    """
    Load configuration and run one pass.

    Without a valid broker configuration the pass still runs against the
    console, but the exit status is 1 so the operator notices.

    Args:
        categories: Categories to process, in order
        environ: Environment to configure from (defaults to os.environ)
        dry_run: Print to console instead of publishing

    Returns:
        Process exit status
    """
    categories = list(categories)
    loader = ConfigLoader()

    if dry_run:
        await run_console(loader.load_source(environ), categories)
        return 0

    try:
        config = loader.load_env(environ)
    except ConfigError as e:
        logger.error(f"Error loading configuration: {e}")
        logger.error("Usage: set the BROKER_URL environment variable, e.g. tcp://localhost:1883")
        logger.warning("Writing values to console")
        await run_console(loader.load_source(environ), categories)
        return 1

    for warning in loader.validate(config):
        logger.warning(f"Config warning: {warning}")

    logger.debug(f"Broker: {config.mqtt.address} (tls={config.mqtt.tls})")
    return await run_mqtt(MQTTClient(config.mqtt), config.source, categories)
