"""
Metric sources for host telemetry.
"""

from .base import ComponentTemperature, MetricSource, TemperatureSource
from .static import StaticMetricSource, StaticTemperatureSource
from .system import SystemMetricSource
from .temperature import HwmonTemperatureSource

__all__ = [
    "ComponentTemperature",
    "MetricSource",
    "TemperatureSource",
    "StaticMetricSource",
    "StaticTemperatureSource",
    "SystemMetricSource",
    "HwmonTemperatureSource",
]
