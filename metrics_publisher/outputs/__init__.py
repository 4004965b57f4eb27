"""
Metric sinks.
"""

from .base import MetricSink
from .console import ConsoleMetricSink

__all__ = [
    "MetricSink",
    "ConsoleMetricSink",
]
