"""
System-wide metrics source.

Reads:
- CPU usage (percent only)
- Memory and swap usage (bytes)
- Disk usage of one mount point (bytes)
- Fan speed (RPM, via command or file)
"""

import asyncio
import math
import platform
import socket

import psutil

from ..config.schema import SourceConfig
from ..logging import get_logger
from ..models.metric import Category, InvalidPercentage, Percentage, PercentMetric, UsedMetric
from .base import MetricSource
from .fan import read_fan_speed

logger = get_logger("collectors.system")

UNKNOWN_HOST = "unknown_host"


def get_hostname() -> str:
    """Get the local hostname."""
    try:
        hostname = socket.gethostname()
    except OSError:
        hostname = platform.node()
    return hostname or UNKNOWN_HOST


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def to_percentage(value: float, context: str = "") -> Percentage:
    """
    Round a computed percentage into a Percentage.

    A result outside 0-100 is logged and gives 0%, so one bad reading
    never aborts the run.
    """
    rounded = round_half_up(value)
    try:
        return Percentage(rounded)
    except InvalidPercentage as e:
        logger.warning(f"Invalid percentage calculated: {rounded}{context} ({e})")
        return Percentage(0)


def percent_of(used: int, total: int) -> Percentage:
    """Compute used/total as a Percentage. A total of 0 gives 0%."""
    if total == 0:
        return Percentage(0)
    return to_percentage(used / total * 100, f" for {used}/{total}")


class SystemMetricSource(MetricSource):
    """Metric source reading the local host via psutil."""

    def __init__(self, config: SourceConfig | None = None):
        self.config = config or SourceConfig()

    def get_host(self) -> str:
        return get_hostname()

    async def get_percent(self, category: Category) -> PercentMetric:
        host = self.get_host()

        if category is Category.CPU:
            usage = await asyncio.to_thread(
                psutil.cpu_percent, interval=self.config.cpu_sample_interval
            )
            return PercentMetric(host, category, to_percentage(usage, " for CPU usage"))

        if category is Category.TEMPERATURE:
            # Temperatures are published per component, not as a percentage
            return PercentMetric(host, category, Percentage(0))

        used = await self.get_used(category)
        return PercentMetric(host, category, percent_of(used.used, used.total))

    async def get_used(self, category: Category) -> UsedMetric:
        host = self.get_host()

        if category is Category.DISK:
            try:
                usage = psutil.disk_usage(self.config.disk_path)
            except OSError as e:
                logger.error(f"Failed to read disk usage of {self.config.disk_path!r}: {e}")
                return UsedMetric(host, category, 0, 0)
            # Root-reserved blocks count as used
            return UsedMetric(host, category, usage.total - usage.free, usage.total)

        if category is Category.MEMORY:
            mem = psutil.virtual_memory()
            return UsedMetric(host, category, mem.used, mem.total)

        if category is Category.SWAP:
            swap = psutil.swap_memory()
            return UsedMetric(host, category, swap.used, swap.total)

        if category is Category.FAN_SPEED:
            # Total 0: RPM has no upper bound to compute a percentage from
            rpm = await read_fan_speed(self.config.fan_speed)
            return UsedMetric(host, category, rpm, 0)

        logger.error(f"No used metric for {category}")
        return UsedMetric(host, category, 0, 0)
