"""
Metric value types.

A metric is one observation of a host resource. Three shapes exist:

- PercentMetric: a 0-100 reading (disk usage, CPU load, ...)
- UsedMetric: a used/total pair in the category's natural unit
- ValueMetric: a single reading tied to a named component (temperature)
"""

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """Resource kind being measured. Value is the display name."""

    DISK = "Disk"
    MEMORY = "Memory"
    CPU = "CPU"
    SWAP = "Swap"
    FAN_SPEED = "FanSpeed"
    TEMPERATURE = "temperature"

    def __str__(self) -> str:
        return self.value

    @property
    def publishes_used(self) -> bool:
        """Whether a used/total reading is published for this category."""
        return self in (Category.DISK, Category.MEMORY, Category.SWAP)

    @classmethod
    def parse(cls, text: str) -> "Category":
        """
        Parse a category from its enum name or display name.

        Matching ignores case, dashes and underscores, so "fan_speed",
        "fan-speed" and "FanSpeed" all give FAN_SPEED.

        Raises:
            ValueError: If text names no category
        """
        wanted = text.strip().lower().replace("-", "").replace("_", "")
        for category in cls:
            if wanted in (category.name.lower().replace("_", ""), category.value.lower()):
                return category
        raise ValueError(f"Unknown category: {text!r}")


class InvalidPercentage(ValueError):
    """Raised when a percentage is outside 0-100."""

    def __init__(self, message: str = "Percent value must be between 0 and 100"):
        super().__init__(message)


@dataclass(frozen=True, order=True)
class Percentage:
    """Integer percentage in [0, 100]."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidPercentage()
        if not 0 <= self.value <= 100:
            raise InvalidPercentage()

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PercentMetric:
    """A 0-100 reading."""

    host: str
    category: Category
    percentage: Percentage

    def __str__(self) -> str:
        return f"{self.host}-{self.category}: {self.percentage}%"


@dataclass(frozen=True)
class UsedMetric:
    """
    A used/total pair.

    Bytes for disk, memory and swap. Fan speed carries RPM in `used`
    and 0 in `total`, meaning no percentage can be derived.
    """

    host: str
    category: Category
    used: int
    total: int

    def __str__(self) -> str:
        return f"{self.host}-{self.category}: {self.used}/{self.total}"


@dataclass(frozen=True)
class ValueMetric:
    """A free-form reading of one named component."""

    host: str
    category: Category
    component_label: str
    value: float
    unit: str

    def __str__(self) -> str:
        return (
            f"{self.host} - {self.category} - {self.component_label}: "
            f"{format_number(self.value)}{self.unit}"
        )


Metric = PercentMetric | UsedMetric | ValueMetric


def format_number(value: float) -> str:
    """Render a number without a trailing '.0' for integral values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def state_value(metric: Metric) -> str:
    """
    Get the string published as a metric's state.

    Used/total pairs have no single state value and give an empty string.
    """
    if isinstance(metric, PercentMetric):
        return str(metric.percentage.value)
    if isinstance(metric, UsedMetric):
        return ""
    if isinstance(metric, ValueMetric):
        return format_number(metric.value)
    raise TypeError(f"Not a metric: {metric!r}")
