"""
Fixed-value sources for dry runs and tests.
"""

from ..models.metric import Category, Percentage, PercentMetric, UsedMetric
from .base import ComponentTemperature, MetricSource, TemperatureSource


class StaticMetricSource(MetricSource):
    """Returns the same readings for every category."""

    def __init__(
        self,
        host: str = "tux",
        percent: int = 25,
        used: int = 25,
        total: int = 100,
    ):
        self.host = host
        self.percentage = Percentage(percent)
        self.used = used
        self.total = total

    def get_host(self) -> str:
        return self.host

    async def get_percent(self, category: Category) -> PercentMetric:
        return PercentMetric(self.host, category, self.percentage)

    async def get_used(self, category: Category) -> UsedMetric:
        return UsedMetric(self.host, category, self.used, self.total)


class StaticTemperatureSource(TemperatureSource):
    """Returns a fixed list of components."""

    def __init__(self, components: list[ComponentTemperature] | None = None):
        self.components = list(components or [])

    async def read_components(self) -> list[ComponentTemperature]:
        return list(self.components)
