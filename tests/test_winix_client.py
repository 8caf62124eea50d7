"""Tests for the WinixClient class."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from winixaio.constants import Airflow, AirQuality, Attribute, Mode, Plasmawave, Power
from winixaio.device_model import DeviceState
from winixaio.exceptions import DeviceCommunicationError
from winixaio.winix_client import WinixClient

from .conftest import DEVICE_ID

STATUS_URL = f"https://us.api.winix-iot.com/common/event/sttus/devices/{DEVICE_ID}"
CONTROL_URL = f"https://us.api.winix-iot.com/common/control/devices/{DEVICE_ID}/A211"

# ---------------------------------------------------------------------------
#  Helpers
# ---------------------------------------------------------------------------


def _status_payload(**attributes) -> dict:
    base = {
        "A02": "1",
        "A03": "02",
        "A04": "03",
        "A07": "1",
        "A21": "1200",
        "S07": "02",
        "S14": "35",
    }
    base.update(attributes)
    return {
        "headers": {"resultCode": "S100", "resultMessage": ""},
        "body": {"deviceId": DEVICE_ID, "totalCnt": 1, "data": [{"apiNo": "A210", "attributes": base}]},
    }


def _make_client(status: int = 200, payload=None, json_error: Exception | None = None) -> WinixClient:
    """Create a client backed by a fake session returning one response."""
    resp = MagicMock()
    resp.status = status
    resp.json = AsyncMock(return_value=payload, side_effect=json_error)
    resp.text = AsyncMock(return_value=str(payload))
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=resp)
    ctx.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.get = MagicMock(return_value=ctx)
    return WinixClient(session=session)


# ---------------------------------------------------------------------------
#  Status
# ---------------------------------------------------------------------------


class TestDeviceStatus:
    """Test status fetch and parsing."""

    async def test_parses_attributes(self):
        client = _make_client(payload=_status_payload())

        state = await client.async_get_device_status(DEVICE_ID)

        assert state == DeviceState(
            power=Power.ON,
            mode=Mode.MANUAL,
            airflow=Airflow.HIGH,
            air_quality=AirQuality.FAIR,
            plasmawave=Plasmawave.ON,
            ambient_light=35.0,
            filter_hours=1200,
        )
        url = client._session.get.call_args[0][0]
        assert url == STATUS_URL
        timeout = client._session.get.call_args.kwargs["timeout"]
        assert isinstance(timeout, aiohttp.ClientTimeout)

    async def test_unknown_air_quality(self):
        client = _make_client(payload=_status_payload(S07="07"))

        state = await client.async_get_device_status(DEVICE_ID)

        assert state.air_quality == AirQuality.UNKNOWN

    async def test_filter_hours_clamped(self):
        client = _make_client(payload=_status_payload(A21="9000"))

        state = await client.async_get_device_status(DEVICE_ID)

        assert state.filter_hours == 6480

    async def test_missing_sensors_default(self):
        payload = _status_payload()
        attributes = payload["body"]["data"][0]["attributes"]
        for key in ("A07", "A21", "S14"):
            del attributes[key]
        client = _make_client(payload=payload)

        state = await client.async_get_device_status(DEVICE_ID)

        assert state.plasmawave == Plasmawave.OFF
        assert state.filter_hours == 0
        assert state.ambient_light == 0

    async def test_unrecognized_airflow_falls_back_to_low(self, caplog):
        client = _make_client(payload=_status_payload(A04="99"))

        with caplog.at_level(logging.WARNING):
            state = await client.async_get_device_status(DEVICE_ID)

        assert state.airflow == Airflow.LOW
        assert state.power == Power.ON
        assert state.air_quality == AirQuality.FAIR
        assert state.filter_hours == 1200
        assert "Unrecognized airflow code '99' (A04)" in caplog.text

    async def test_unrecognized_plasmawave_falls_back_to_off(self, caplog):
        client = _make_client(payload=_status_payload(A07="7"))

        with caplog.at_level(logging.WARNING):
            state = await client.async_get_device_status(DEVICE_ID)

        assert state.plasmawave == Plasmawave.OFF
        assert "(A07)" in caplog.text

    async def test_unrecognized_power_raises(self, caplog):
        client = _make_client(payload=_status_payload(A02="9"))

        with caplog.at_level(logging.WARNING):
            with pytest.raises(DeviceCommunicationError, match="Unrecognized status attributes"):
                await client.async_get_device_status(DEVICE_ID)

        assert "Unrecognized power ('9')" in caplog.text

    async def test_null_attributes_raises(self):
        payload = _status_payload()
        payload["body"]["data"][0]["attributes"] = None
        client = _make_client(payload=payload)

        with pytest.raises(DeviceCommunicationError, match="did not contain attributes"):
            await client.async_get_device_status(DEVICE_ID)

    async def test_non_dict_headers_raises(self):
        payload = _status_payload()
        payload["headers"] = "oops"
        client = _make_client(payload=payload)

        with pytest.raises(DeviceCommunicationError, match="Unexpected Winix response headers"):
            await client.async_get_device_status(DEVICE_ID)

    async def test_no_data_raises(self):
        payload = {"headers": {"resultCode": "S100", "resultMessage": "no data"}, "body": {}}
        client = _make_client(payload=payload)

        with pytest.raises(DeviceCommunicationError, match="offline"):
            await client.async_get_device_status(DEVICE_ID)

    async def test_empty_data_raises(self):
        payload = {"headers": {"resultMessage": ""}, "body": {"data": []}}
        client = _make_client(payload=payload)

        with pytest.raises(DeviceCommunicationError, match="did not contain attributes"):
            await client.async_get_device_status(DEVICE_ID)


# ---------------------------------------------------------------------------
#  Control
# ---------------------------------------------------------------------------


class TestControl:
    """Test attribute writes."""

    @pytest.mark.parametrize(
        ("method", "value", "path"),
        [
            ("async_set_power", Power.ON, "A02:1"),
            ("async_set_mode", Mode.AUTO, "A03:01"),
            ("async_set_airflow", Airflow.SLEEP, "A04:06"),
            ("async_set_plasmawave", Plasmawave.OFF, "A07:0"),
        ],
    )
    async def test_setters_build_url(self, method, value, path):
        client = _make_client(payload={"headers": {"resultCode": "S100", "resultMessage": ""}})

        result = await getattr(client, method)(DEVICE_ID, value)

        assert result == value
        assert client._session.get.call_args[0][0] == f"{CONTROL_URL}/{path}"

    async def test_control_returns_value(self):
        client = _make_client(payload={"headers": {"resultMessage": ""}})

        assert await client.async_control_device(DEVICE_ID, Attribute.AIRFLOW, "02") == "02"

    async def test_control_offline_raises(self):
        client = _make_client(payload={"headers": {"resultMessage": "no data"}})

        with pytest.raises(DeviceCommunicationError):
            await client.async_set_power(DEVICE_ID, Power.ON)

    async def test_control_non_dict_headers_raises(self):
        client = _make_client(payload={"headers": ["no data"]})

        with pytest.raises(DeviceCommunicationError, match="Unexpected Winix response headers"):
            await client.async_set_mode(DEVICE_ID, Mode.AUTO)


# ---------------------------------------------------------------------------
#  Transport errors
# ---------------------------------------------------------------------------


class TestErrors:
    """Test error mapping."""

    async def test_bad_status(self):
        client = _make_client(status=502, payload="Bad Gateway")

        with pytest.raises(DeviceCommunicationError, match="Status: 502"):
            await client.async_get_device_status(DEVICE_ID)

    async def test_invalid_json(self):
        client = _make_client(json_error=ValueError("not json"))

        with pytest.raises(DeviceCommunicationError, match="Could not return json"):
            await client.async_get_device_status(DEVICE_ID)

    async def test_non_dict_json(self):
        client = _make_client(payload=["unexpected"])

        with pytest.raises(DeviceCommunicationError, match="Unexpected Winix response"):
            await client.async_get_device_status(DEVICE_ID)

    async def test_client_error(self):
        client = _make_client()
        client._session.get.side_effect = aiohttp.ClientConnectionError("unreachable")

        with pytest.raises(DeviceCommunicationError) as err:
            await client.async_set_mode(DEVICE_ID, Mode.AUTO)
        assert isinstance(err.value.__cause__, aiohttp.ClientConnectionError)

    async def test_timeout(self):
        client = _make_client()
        client._session.get.side_effect = asyncio.TimeoutError()

        with pytest.raises(DeviceCommunicationError):
            await client.async_get_device_status(DEVICE_ID)


# ---------------------------------------------------------------------------
#  Session
# ---------------------------------------------------------------------------


class TestSession:
    """Test session ownership."""

    async def test_closes_own_session(self):
        with patch("winixaio.winix_client.ClientSession") as session_cls:
            session_cls.return_value.close = AsyncMock()
            client = WinixClient()
            await client.async_close()

        session_cls.return_value.close.assert_awaited_once()

    async def test_keeps_injected_session(self):
        client = _make_client()
        client._session.close = AsyncMock()

        await client.async_close()

        client._session.close.assert_not_awaited()
