"""Data classes for Winix Purifiers."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from winixaio.constants import Airflow, AirQuality, Mode, Plasmawave, Power


class CacheState(Enum):
    """Freshness of a device's cached state."""

    UNINITIALIZED = 'uninitialized'
    FRESH = 'fresh'
    STALE = 'stale'


@dataclass
class DeviceState:
    """Dataclass for the attribute state of a Winix purifier"""

    power: Power = Power.OFF
    mode: Mode = Mode.AUTO
    airflow: Airflow = Airflow.LOW
    air_quality: AirQuality = AirQuality.GOOD
    plasmawave: Plasmawave = Plasmawave.OFF
    ambient_light: float = 0
    filter_hours: int = 0

    def copy(self) -> DeviceState:
        """Return an independent copy of this state."""
        return replace(self)
