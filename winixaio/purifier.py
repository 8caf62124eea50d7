"""Host facing handlers for a Winix purifier."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar
import logging

from winixaio import translator
from winixaio.constants import Airflow, Mode, TargetPurifierState
from winixaio.device import DeviceClient, WinixDevice
from winixaio.device_model import DeviceState
from winixaio.exceptions import ServiceCommunicationFailure, WinixError
from winixaio.options import PurifierOptions


LOGGER = logging.getLogger(__name__)

T = TypeVar('T')
SnapshotListener = Callable[[dict[str, Any]], None]


class WinixPurifier:
    """Translate host reads and writes into WinixDevice calls.

    Any failure talking to the device is logged and raised as
    ServiceCommunicationFailure so the host reports it instead of a value.
    """

    def __init__(self, device: WinixDevice, options: PurifierOptions | None = None) -> None:
        self.device: WinixDevice = device
        self.options: PurifierOptions = options if options else PurifierOptions()

    @classmethod
    def create(
        cls,
        device_id: str,
        client: DeviceClient,
        name: str | None = None,
        options: PurifierOptions | None = None,
    ) -> WinixPurifier:
        """Create a purifier with its own WinixDevice configured from options."""

        options = options if options else PurifierOptions()
        device = WinixDevice(
            device_id,
            client,
            name=name,
            cache_interval=options.cache_interval,
            refresh_policy=options.refresh_policy,
        )
        return cls(device, options)

    def add_listener(self, listener: SnapshotListener) -> Callable[[], None]:
        """Push host values to listener whenever the device state changes."""

        return self.device.add_listener(lambda state: listener(self.snapshot(state)))

    def snapshot(self, state: DeviceState) -> dict[str, Any]:
        """Return every exposed host value for state."""

        reserve_zero = self.options.reserve_zero_speed
        return {
            'active': translator.to_active_state(state.power),
            'current_state': translator.to_current_state(state.power),
            'target_state': translator.to_target_state(state.mode),
            'rotation_speed': translator.to_rotation_speed(state.airflow, reserve_zero),
            'air_quality': translator.to_air_quality(state.air_quality),
            'plasmawave': translator.to_switch(state.plasmawave),
            'ambient_light': translator.to_ambient_light(state.ambient_light),
            'auto_switch': state.mode == Mode.AUTO,
            'sleep_switch': state.airflow == Airflow.SLEEP,
            'filter_life': translator.to_filter_life(state.filter_hours),
            'filter_change_indication': translator.to_filter_change_indication(
                state.filter_hours, self.options.filter_replacement_percentage
            ),
        }

    async def async_get_active(self) -> int:
        power = await self._call('getting active state', self.device.async_get_power())
        return translator.to_active_state(power)

    async def async_get_current_state(self) -> int:
        power = await self._call('getting current state', self.device.async_get_power())
        return translator.to_current_state(power)

    async def async_get_target_state(self) -> int:
        mode = await self._call('getting target state', self.device.async_get_mode())
        return translator.to_target_state(mode)

    async def async_get_rotation_speed(self) -> int:
        airflow = await self._call('getting rotation speed', self.device.async_get_airflow())
        return translator.to_rotation_speed(airflow, self.options.reserve_zero_speed)

    async def async_get_air_quality(self) -> int:
        air_quality = await self._call('getting air quality', self.device.async_get_air_quality())
        return translator.to_air_quality(air_quality)

    async def async_get_plasmawave(self) -> bool:
        plasmawave = await self._call('getting plasmawave state', self.device.async_get_plasmawave())
        return translator.to_switch(plasmawave)

    async def async_get_ambient_light(self) -> float:
        lux = await self._call('getting ambient light', self.device.async_get_ambient_light())
        return translator.to_ambient_light(lux)

    async def async_get_auto_switch(self) -> bool:
        return await self.async_get_target_state() == TargetPurifierState.AUTO

    async def async_get_sleep_switch(self) -> bool:
        airflow = await self._call('getting sleep state', self.device.async_get_airflow())
        return airflow == Airflow.SLEEP

    async def async_get_filter_life(self) -> int:
        hours = await self._call('getting filter life', self.device.async_get_filter_hours())
        return translator.to_filter_life(hours)

    async def async_get_filter_change_indication(self) -> bool:
        hours = await self._call('getting filter change indication', self.device.async_get_filter_hours())
        return translator.to_filter_change_indication(hours, self.options.filter_replacement_percentage)

    async def async_set_active(self, value: int | bool) -> None:
        power = translator.to_power(value)
        LOGGER.debug(f'{self.device.name} - Set active {value} -> {power.name}')
        await self._call('setting active state', self.device.async_set_power(power))

    async def async_set_target_state(self, value: int) -> None:
        mode = translator.to_mode(value)
        LOGGER.debug(f'{self.device.name} - Set target state {value} -> {mode.name}')
        await self._call('setting target state', self.device.async_set_mode(mode))

    async def async_set_rotation_speed(self, value: float) -> None:
        airflow = translator.to_airflow(value, self.options.reserve_zero_speed)
        if airflow is None:
            # The host turns the purifier off through the active state
            LOGGER.debug(f'{self.device.name} - Rotation speed {value} is reserved. Ignoring.')
            return
        LOGGER.debug(f'{self.device.name} - Set rotation speed {value} -> {airflow.name}')
        await self._call('setting rotation speed', self.device.async_set_airflow(airflow))

    async def async_set_plasmawave(self, value: bool) -> None:
        plasmawave = translator.to_plasmawave(value)
        await self._call('setting plasmawave state', self.device.async_set_plasmawave(plasmawave))

    async def async_set_auto_switch(self, value: bool) -> None:
        target = TargetPurifierState.AUTO if value else TargetPurifierState.MANUAL
        await self.async_set_target_state(target)

    async def async_set_sleep_switch(self, value: bool) -> None:
        airflow = Airflow.SLEEP if value else Airflow.LOW
        await self._call('setting sleep state', self.device.async_set_airflow(airflow))

    async def _call(self, action: str, call: Awaitable[T]) -> T:
        try:
            return await call
        except WinixError as device_error:
            LOGGER.error(f'{self.device.name} - Error {action}: {device_error}')
            raise ServiceCommunicationFailure(f'{self.device.name} - Error {action}') from device_error
