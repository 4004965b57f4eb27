"""
Data models for metrics and Home Assistant discovery configs.
"""

from .discovery import HomeAssistantDiscoveryConfig, UnsupportedMetricError, derive
from .metric import (
    Category,
    InvalidPercentage,
    Metric,
    Percentage,
    PercentMetric,
    UsedMetric,
    ValueMetric,
    state_value,
)

__all__ = [
    "Category",
    "HomeAssistantDiscoveryConfig",
    "InvalidPercentage",
    "Metric",
    "Percentage",
    "PercentMetric",
    "UnsupportedMetricError",
    "UsedMetric",
    "ValueMetric",
    "derive",
    "state_value",
]
