"""
Collector interfaces for metric sampling.

A MetricSource produces percentage and used/total readings per category.
A TemperatureSource enumerates the hardware components that expose a
temperature. Both are injected into the pipeline, so live host readers
and fixed-value stubs are interchangeable.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple

from ..models.metric import Category, PercentMetric, UsedMetric


class ComponentTemperature(NamedTuple):
    """Temperature reading of one hardware component."""

    label: str  # e.g. "coretemp Core 0"
    temperature: float | None  # Celsius, None if unreadable


class MetricSource(ABC):
    """Abstract source of host metrics."""

    @abstractmethod
    async def get_percent(self, category: Category) -> PercentMetric:
        """
        Read the 0-100 usage of a category.

        Args:
            category: Resource to read

        Returns:
            PercentMetric for the category
        """
        pass

    @abstractmethod
    async def get_used(self, category: Category) -> UsedMetric:
        """
        Read the used/total pair of a category.

        Args:
            category: Resource to read

        Returns:
            UsedMetric for the category
        """
        pass

    @abstractmethod
    def get_host(self) -> str:
        """Get the identifier of the sampled host."""
        pass


class TemperatureSource(ABC):
    """Abstract enumerator of temperature-bearing components."""

    @abstractmethod
    async def read_components(self) -> list[ComponentTemperature]:
        """
        Read every component exposing a temperature.

        Returns:
            One entry per component; unreadable ones carry None
        """
        pass
