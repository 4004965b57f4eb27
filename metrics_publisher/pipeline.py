"""
Metric pipeline: reads a category from a source and writes it to a sink.
"""

import math

from .collectors.base import MetricSource, TemperatureSource
from .logging import get_logger
from .models.discovery import UnsupportedMetricError
from .models.metric import Category, Metric, ValueMetric
from .outputs.base import MetricSink

logger = get_logger("pipeline")

TEMPERATURE_UNIT = "°C"


class MetricPipeline:
    """
    Moves one category's readings from a source to a sink.

    Every write is independent: a failing write is logged and the next
    metric is still attempted.
    """

    def __init__(
        self,
        source: MetricSource,
        sink: MetricSink,
        temperatures: TemperatureSource,
    ):
        """
        Initialize pipeline.

        Args:
            source: Percentage and used/total readings
            sink: Destination for every metric
            temperatures: Enumerator of temperature components
        """
        self.source = source
        self.sink = sink
        self.temperatures = temperatures

    async def _write(self, metric: Metric) -> bool:
        """Write a metric, logging instead of raising on failure."""
        try:
            await self.sink.write(metric)
            return True
        except UnsupportedMetricError as e:
            logger.warning(f"Skipping {metric}: {e}")
        except Exception as e:
            logger.error(f"Failed to write {metric}: {e}")
        return False

    async def process(self, category: Category) -> None:
        """
        Read and write all metrics of a category.

        Args:
            category: Category to process
        """
        logger.debug(f"Processing {category}")
        await self._write(await self.source.get_percent(category))

        if category is Category.TEMPERATURE:
            await self._process_temperatures()
        elif category.publishes_used:
            await self._write(await self.source.get_used(category))

    async def _process_temperatures(self) -> None:
        host = self.source.get_host()
        count = 0

        for component in await self.temperatures.read_components():
            if component.temperature is None or math.isnan(component.temperature):
                logger.debug(f"No temperature for component {component.label!r}")
                continue

            await self._write(
                ValueMetric(
                    host=host,
                    category=Category.TEMPERATURE,
                    component_label=component.label,
                    value=component.temperature,
                    unit=TEMPERATURE_UNIT,
                )
            )
            count += 1

        if count == 0:
            logger.warning("No temperature components found or none readable")
