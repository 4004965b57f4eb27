"""
Temperature component enumeration.

Reads hwmon sensors through psutil's sensors_temperatures(). When psutil
reports nothing (or the platform has no support for it) the sysfs
thermal zones under /sys/class/thermal are used instead.
"""

import math
from pathlib import Path
from typing import NamedTuple

import psutil

from ..logging import get_logger
from .base import ComponentTemperature, TemperatureSource

logger = get_logger("collectors.temperature")

THERMAL_PATH = Path("/sys/class/thermal")


class ThermalZone(NamedTuple):
    """Thermal zone information."""

    name: str
    path: Path
    type: str


def discover_thermal_zones(base: Path = THERMAL_PATH) -> list[ThermalZone]:
    """
    Discover available thermal zones from sysfs.

    Returns:
        List of ThermalZone tuples
    """
    zones: list[ThermalZone] = []

    if not base.exists():
        return zones

    for zone_dir in sorted(base.glob("thermal_zone*")):
        type_file = zone_dir / "type"
        if not (zone_dir / "temp").exists():
            continue

        try:
            zone_type = type_file.read_text().strip() or zone_dir.name
        except OSError:
            zone_type = zone_dir.name

        zones.append(ThermalZone(name=zone_dir.name, path=zone_dir, type=zone_type))

    return zones


def read_thermal_zone_temp(zone: ThermalZone) -> float | None:
    """
    Read temperature from a thermal zone.

    Returns:
        Temperature in Celsius, or None if unavailable
    """
    try:
        # Millidegrees Celsius
        return int((zone.path / "temp").read_text().strip()) / 1000.0
    except (OSError, ValueError):
        return None


def _defined(value: float | None) -> float | None:
    if value is None or math.isnan(value):
        return None
    return float(value)


def read_hwmon_components() -> list[ComponentTemperature]:
    """
    Read hwmon temperature sensors via psutil.

    Returns:
        One ComponentTemperature per chip entry
    """
    try:
        temps = psutil.sensors_temperatures()
    except (AttributeError, OSError) as e:
        logger.debug(f"psutil temperature sensors unavailable: {e}")
        return []

    components: list[ComponentTemperature] = []
    for chip, entries in temps.items():
        for i, entry in enumerate(entries):
            label = f"{chip} {entry.label}" if entry.label else f"{chip} {i}"
            components.append(ComponentTemperature(label, _defined(entry.current)))
    return components


def read_thermal_zone_components(base: Path = THERMAL_PATH) -> list[ComponentTemperature]:
    """Read every sysfs thermal zone as a component."""
    return [
        ComponentTemperature(zone.type, read_thermal_zone_temp(zone))
        for zone in discover_thermal_zones(base)
    ]


class HwmonTemperatureSource(TemperatureSource):
    """Temperature components of the local host."""

    def __init__(self, thermal_path: Path = THERMAL_PATH):
        self.thermal_path = thermal_path

    async def read_components(self) -> list[ComponentTemperature]:
        components = read_hwmon_components()
        if components:
            return components

        logger.debug("No hwmon temperature sensors, falling back to thermal zones")
        return read_thermal_zone_components(self.thermal_path)
