"""Mapping between Winix attribute values and the values an automation host understands.

All functions are pure and total: any valid device value has a defined host
value and unknown air quality codes degrade to ``AirQualityLevel.UNKNOWN``.
"""
from __future__ import annotations

import math

from winixaio.constants import (
    ActiveState,
    Airflow,
    AirQuality,
    AirQualityLevel,
    CurrentPurifierState,
    FILTER_MAX_HOURS,
    FILTER_REPLACEMENT_PERCENTAGE,
    MIN_AMBIENT_LIGHT,
    Mode,
    Plasmawave,
    Power,
    ROTATION_SPEED_STEP,
    TargetPurifierState,
)


ROTATION_SPEEDS: dict[Airflow, int] = {
    Airflow.SLEEP: 0,
    Airflow.LOW: 25,
    Airflow.MEDIUM: 50,
    Airflow.HIGH: 75,
    Airflow.TURBO: 100,
}
AIRFLOWS: dict[int, Airflow] = {speed: airflow for airflow, speed in ROTATION_SPEEDS.items()}
AIR_QUALITY_LEVELS: dict[AirQuality, AirQualityLevel] = {
    AirQuality.GOOD: AirQualityLevel.GOOD,
    AirQuality.FAIR: AirQualityLevel.FAIR,
    AirQuality.POOR: AirQualityLevel.POOR,
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def to_active_state(power: Power) -> ActiveState:
    return ActiveState.ACTIVE if power == Power.ON else ActiveState.INACTIVE


def to_power(active: int | bool) -> Power:
    return Power.ON if active == ActiveState.ACTIVE else Power.OFF


def to_current_state(power: Power) -> CurrentPurifierState:
    return CurrentPurifierState.PURIFYING_AIR if power == Power.ON else CurrentPurifierState.INACTIVE


def to_target_state(mode: Mode) -> TargetPurifierState:
    return TargetPurifierState.AUTO if mode == Mode.AUTO else TargetPurifierState.MANUAL


def to_mode(target: int) -> Mode:
    return Mode.AUTO if target == TargetPurifierState.AUTO else Mode.MANUAL


def to_rotation_speed(airflow: Airflow, reserve_zero: bool = False) -> int:
    """Convert airflow to a rotation speed percentage.

    When reserve_zero is set, sleep is reported as 1 so that the host does not
    read a speed of 0 as the purifier being turned off.
    """
    if airflow == Airflow.SLEEP and reserve_zero:
        return 1
    return ROTATION_SPEEDS[airflow]


def to_airflow(speed: float, reserve_zero: bool = False) -> Airflow | None:
    """Convert a rotation speed percentage to the nearest airflow.

    The speed is rounded to the nearest multiple of 25 and clamped to the
    sleep..turbo range. With reserve_zero, a speed of exactly 0 means
    "turn off" to the host and None is returned so no airflow is written.
    """
    if reserve_zero and speed == 0:
        return None

    nearest = _round_half_up(speed / ROTATION_SPEED_STEP) * ROTATION_SPEED_STEP
    if nearest > 100:
        return Airflow.TURBO
    if nearest < 0:
        return Airflow.SLEEP
    return AIRFLOWS[nearest]


def to_air_quality(air_quality: AirQuality | str) -> AirQualityLevel:
    try:
        return AIR_QUALITY_LEVELS.get(AirQuality(air_quality), AirQualityLevel.UNKNOWN)
    except ValueError:
        return AirQualityLevel.UNKNOWN


def to_switch(plasmawave: Plasmawave) -> bool:
    return plasmawave == Plasmawave.ON


def to_plasmawave(on: bool) -> Plasmawave:
    return Plasmawave.ON if on else Plasmawave.OFF


def to_ambient_light(lux: float) -> float:
    # Hosts reject light levels below 0.0001 lux.
    return max(lux, MIN_AMBIENT_LIGHT)


def to_filter_life(hours: int, max_hours: int = FILTER_MAX_HOURS) -> int:
    """Return remaining filter life as a percentage of max_hours."""
    if hours <= 0:
        return 100
    remaining = max(max_hours - hours, 0)
    return _round_half_up(remaining / max_hours * 100)


def to_filter_change_indication(
    hours: int,
    threshold: int = FILTER_REPLACEMENT_PERCENTAGE,
    max_hours: int = FILTER_MAX_HOURS,
) -> bool:
    """True when the filter should be replaced."""
    return to_filter_life(hours, max_hours) <= threshold
