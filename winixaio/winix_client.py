"""Python API for Winix Purifiers"""
from __future__ import annotations

from typing import Any
import asyncio
import logging

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from winixaio.constants import (
    Airflow,
    AirQuality,
    Attribute,
    Endpoint,
    FILTER_MAX_HOURS,
    Header,
    Mode,
    Plasmawave,
    Power,
    ResultMessage,
    TIMEOUT,
)
from winixaio.device_model import DeviceState
from winixaio.exceptions import DeviceCommunicationError


LOGGER = logging.getLogger(__name__)


class WinixClient:
    """Winix client."""

    def __init__(self, session: ClientSession | None = None, timeout: int = TIMEOUT) -> None:
        """Initialize Winix Client.

        session: aiohttp.ClientSession or None to create a new session
        timeout: seconds allowed for each request to Winix's servers
        """

        self._session: ClientSession = session if session else ClientSession()
        self._owns_session: bool = session is None
        self.timeout: int = timeout

    async def async_close(self) -> None:
        """Close the session if it was created by this client."""

        if self._owns_session:
            await self._session.close()

    async def async_get_device_status(self, device_id: str) -> DeviceState:
        """Fetch all attributes of a device in a single call."""

        url = f'{Endpoint.BASE_URI}{Endpoint.STATUS}/{device_id}'
        LOGGER.debug(f'Fetching status for device {device_id}')
        response = await self._get_endpoint(url)
        if self._result_message(response) == ResultMessage.NO_DATA:
            raise DeviceCommunicationError(
                f'Winix returned no data for device {device_id}. The device is likely offline.'
            )
        try:
            attributes = response['body']['data'][0]['attributes']
        except (KeyError, IndexError, TypeError) as parse_error:
            raise DeviceCommunicationError(
                f'Winix status response for device {device_id} did not contain attributes. '
                f'Response: {response}'
            ) from parse_error
        if not isinstance(attributes, dict):
            raise DeviceCommunicationError(
                f'Winix status response for device {device_id} did not contain attributes. '
                f'Response: {response}'
            )
        LOGGER.debug(f'Status attributes for device {device_id}: {attributes}')
        return self._parse_attributes(device_id, attributes)

    async def async_control_device(self, device_id: str, attribute: Attribute, value: str) -> str:
        """Main function to write a single attribute of a device."""

        url = (
            f'{Endpoint.BASE_URI}{Endpoint.CONTROL}/{device_id}/'
            f'{Endpoint.CONTROL_API}/{attribute.value}:{value}'
        )
        LOGGER.debug(f'Sending control command {attribute.name}={value} to device {device_id}')
        response = await self._get_endpoint(url)
        if self._result_message(response) == ResultMessage.NO_DATA:
            raise DeviceCommunicationError(
                f'Failed to execute {attribute.name.lower()} command for device {device_id}. '
                f'The device is likely offline.'
            )
        LOGGER.debug(f'Control command {attribute.name} sent to device {device_id}. Response: {response}')
        return value

    async def async_set_power(self, device_id: str, value: Power) -> Power:
        await self.async_control_device(device_id, Attribute.POWER, value.value)
        return value

    async def async_set_mode(self, device_id: str, value: Mode) -> Mode:
        await self.async_control_device(device_id, Attribute.MODE, value.value)
        return value

    async def async_set_airflow(self, device_id: str, value: Airflow) -> Airflow:
        await self.async_control_device(device_id, Attribute.AIRFLOW, value.value)
        return value

    async def async_set_plasmawave(self, device_id: str, value: Plasmawave) -> Plasmawave:
        await self.async_control_device(device_id, Attribute.PLASMAWAVE, value.value)
        return value

    @staticmethod
    def _parse_attributes(device_id: str, attributes: dict[str, Any]) -> DeviceState:
        """Build a DeviceState from the raw status attributes."""

        #  Power and mode drive write sequencing, so a status without them is unusable.
        try:
            power = Power(attributes[Attribute.POWER.value])
            mode = Mode(attributes[Attribute.MODE.value])
        except (KeyError, ValueError, TypeError) as parse_error:
            LOGGER.warning(
                f'Unrecognized power ({attributes.get(Attribute.POWER.value)!r}) or '
                f'mode ({attributes.get(Attribute.MODE.value)!r}) code for device {device_id}'
            )
            raise DeviceCommunicationError(
                f'Unrecognized status attributes for device {device_id}: {attributes}'
            ) from parse_error

        try:
            airflow = Airflow(attributes.get(Attribute.AIRFLOW.value))
        except (ValueError, TypeError):
            LOGGER.warning(
                f'Unrecognized airflow code {attributes.get(Attribute.AIRFLOW.value)!r} '
                f'({Attribute.AIRFLOW.value}) for device {device_id}. Reporting {Airflow.LOW.name}.'
            )
            airflow = Airflow.LOW

        try:
            plasmawave = Plasmawave(attributes.get(Attribute.PLASMAWAVE.value, Plasmawave.OFF.value))
        except (ValueError, TypeError):
            LOGGER.warning(
                f'Unrecognized plasmawave code {attributes.get(Attribute.PLASMAWAVE.value)!r} '
                f'({Attribute.PLASMAWAVE.value}) for device {device_id}. Reporting {Plasmawave.OFF.name}.'
            )
            plasmawave = Plasmawave.OFF

        try:
            air_quality = AirQuality(attributes.get(Attribute.AIR_QUALITY.value))
        except ValueError:
            LOGGER.debug(
                f'Unknown air quality code {attributes.get(Attribute.AIR_QUALITY.value)} for device {device_id}'
            )
            air_quality = AirQuality.UNKNOWN

        try:
            ambient_light = max(float(attributes.get(Attribute.AMBIENT_LIGHT.value) or 0), 0)
            filter_hours = int(attributes.get(Attribute.FILTER_HOURS.value) or 0)
        except (TypeError, ValueError) as parse_error:
            raise DeviceCommunicationError(
                f'Unrecognized sensor values for device {device_id}: {attributes}'
            ) from parse_error

        return DeviceState(
            power=power,
            mode=mode,
            airflow=airflow,
            air_quality=air_quality,
            plasmawave=plasmawave,
            ambient_light=ambient_light,
            # The device stops counting past the reporting ceiling.
            filter_hours=min(max(filter_hours, 0), FILTER_MAX_HOURS),
        )

    @staticmethod
    def _result_message(response: dict[str, Any]) -> Any:
        headers = response.get('headers')
        if headers is None:
            return None
        if not isinstance(headers, dict):
            raise DeviceCommunicationError(f'Unexpected Winix response headers: {headers!r}')
        return headers.get('resultMessage')

    async def _get_endpoint(self, url: str) -> dict[str, Any]:
        """Make GET API call to Winix's servers."""

        headers = {
            'accept': Header.ACCEPT.value,
            'user-agent': Header.USER_AGENT.value,
        }
        try:
            async with self._session.get(url, headers=headers, timeout=ClientTimeout(total=self.timeout)) as resp:
                return await self._response(resp)
        except (ClientError, asyncio.TimeoutError) as request_error:
            raise DeviceCommunicationError(
                f'Winix API request failed: {request_error!r}'
            ) from request_error

    @staticmethod
    async def _response(resp: ClientResponse) -> dict[str, Any]:
        """Return response from API call."""

        if resp.status != 200:
            error = await resp.text()
            raise DeviceCommunicationError(
                f'Winix API error. Status: {resp.status}, Response: {error}'
            )
        try:
            response = await resp.json(content_type=None)
        except Exception as resp_error:
            raise DeviceCommunicationError(f'Could not return json {resp_error}') from resp_error
        if not isinstance(response, dict):
            raise DeviceCommunicationError(f'Unexpected Winix response: {response}')
        return response
