"""
Sink interface for metric output.
"""

from abc import ABC, abstractmethod

from ..models.metric import Metric


class MetricSink(ABC):
    """Abstract destination for metrics."""

    @abstractmethod
    async def write(self, metric: Metric) -> None:
        """
        Persist or publish one metric.

        Args:
            metric: Metric to write

        Raises:
            Exception: If the metric cannot be written at all
        """
        pass
