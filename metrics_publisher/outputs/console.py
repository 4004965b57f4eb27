"""
Console sink printing metrics to stdout.
"""

import sys
from typing import TextIO

from ..models.metric import Metric
from .base import MetricSink


class ConsoleMetricSink(MetricSink):
    """Prints one line per metric. Used without a broker."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    async def write(self, metric: Metric) -> None:
        print(metric, file=self.stream or sys.stdout, flush=True)
