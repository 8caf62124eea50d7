"""Shared fixtures for WinixAIO tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from winixaio.constants import Airflow, AirQuality, Mode, Plasmawave, Power
from winixaio.device import WinixDevice
from winixaio.device_model import DeviceState

DEVICE_ID = "ABCDEF012345_abcdefghij"


def make_state(**kwargs) -> DeviceState:
    """Return a DeviceState with the given fields overridden."""
    return DeviceState(
        power=kwargs.get("power", Power.OFF),
        mode=kwargs.get("mode", Mode.AUTO),
        airflow=kwargs.get("airflow", Airflow.LOW),
        air_quality=kwargs.get("air_quality", AirQuality.GOOD),
        plasmawave=kwargs.get("plasmawave", Plasmawave.OFF),
        ambient_light=kwargs.get("ambient_light", 0),
        filter_hours=kwargs.get("filter_hours", 0),
    )


def _echo(device_id, value):
    return value


@pytest.fixture
def mock_client() -> AsyncMock:
    """Return a fully-mocked remote client reporting an idle purifier."""
    client = AsyncMock()
    client.async_get_device_status = AsyncMock(return_value=make_state())
    client.async_set_power = AsyncMock(side_effect=_echo)
    client.async_set_mode = AsyncMock(side_effect=_echo)
    client.async_set_airflow = AsyncMock(side_effect=_echo)
    client.async_set_plasmawave = AsyncMock(side_effect=_echo)
    return client


@pytest.fixture
async def device(mock_client) -> WinixDevice:
    """Return a WinixDevice whose auto mode re-fetch runs immediately."""
    winix_device = WinixDevice(DEVICE_ID, mock_client, name="Bedroom", reconcile_delay=0)
    yield winix_device
    await winix_device.async_shutdown()


def write_calls(client: AsyncMock) -> list[tuple[str, object]]:
    """Return (method, value) for each attribute write in call order."""
    return [
        (name, args[1])
        for name, args, _ in client.method_calls
        if name.startswith("async_set_")
    ]
