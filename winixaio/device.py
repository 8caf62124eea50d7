"""Cached, write-sequencing view of a single Winix purifier."""
from __future__ import annotations

from typing import Callable, Protocol
import asyncio
import logging
import time

from winixaio.constants import (
    Airflow,
    AirQuality,
    CACHE_INTERVAL,
    LOCK_TIMEOUT,
    Mode,
    Plasmawave,
    Power,
    RECONCILE_DELAY,
    RefreshPolicy,
)
from winixaio.device_model import CacheState, DeviceState
from winixaio.exceptions import LockTimeoutError, WinixError


LOGGER = logging.getLogger(__name__)

StateListener = Callable[[DeviceState], None]


class DeviceClient(Protocol):
    """Remote calls a WinixDevice depends on."""

    async def async_get_device_status(self, device_id: str) -> DeviceState: ...

    async def async_set_power(self, device_id: str, value: Power) -> Power: ...

    async def async_set_mode(self, device_id: str, value: Mode) -> Mode: ...

    async def async_set_airflow(self, device_id: str, value: Airflow) -> Airflow: ...

    async def async_set_plasmawave(self, device_id: str, value: Plasmawave) -> Plasmawave: ...


class WinixDevice:
    """Coordinator for one Winix purifier.

    Holds the last known state of the device and serves reads from it while it
    is fresh. Only one status fetch runs at a time; readers that arrive while a
    fetch is in flight wait for it instead of starting another one.

    Writes are sequenced around the device's quirks: the purifier must be on
    before the mode or airflow can change, a mode change resets the airflow to
    low and an airflow change requires manual mode.
    """

    def __init__(
        self,
        device_id: str,
        client: DeviceClient,
        name: str | None = None,
        cache_interval: float = CACHE_INTERVAL,
        lock_timeout: float = LOCK_TIMEOUT,
        reconcile_delay: float = RECONCILE_DELAY,
        refresh_policy: RefreshPolicy = RefreshPolicy.CACHE,
    ) -> None:
        """Initialize Winix Device.

        device_id: Winix device identifier
        client: remote client used for status fetches and attribute writes
        name: name used in log messages, defaults to the device id
        cache_interval: seconds a fetched state is served before fetching again
        lock_timeout: seconds to wait for an in-flight status fetch
        reconcile_delay: seconds to wait before re-fetching after switching to auto
        refresh_policy: fetch lazily on read or on a fixed interval
        """

        self.device_id: str = device_id
        self.name: str = name or device_id
        self.cache_interval: float = cache_interval
        self.lock_timeout: float = lock_timeout
        self.reconcile_delay: float = reconcile_delay
        self.refresh_policy: RefreshPolicy = refresh_policy
        self._client: DeviceClient = client
        self._state: DeviceState = DeviceState()
        self._last_poll: float = -1
        self._lock: asyncio.Lock = asyncio.Lock()
        self._listeners: list[StateListener] = []
        self._background_tasks: set[asyncio.Task] = set()
        self._refresh_task: asyncio.Task | None = None

    def has_data(self) -> bool:
        return self._last_poll > -1

    @property
    def cache_state(self) -> CacheState:
        if not self.has_data():
            return CacheState.UNINITIALIZED
        if self._is_stale():
            return CacheState.STALE
        return CacheState.FRESH

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state pushes. Returns a function that removes it."""

        self._listeners.append(listener)

        def remove_listener() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove_listener

    async def async_get_power(self) -> Power:
        await self._ensure_updated()
        return self._state.power

    async def async_get_mode(self) -> Mode:
        await self._ensure_updated()
        return self._state.mode

    async def async_get_airflow(self) -> Airflow:
        await self._ensure_updated()
        return self._state.airflow

    async def async_get_air_quality(self) -> AirQuality:
        await self._ensure_updated()
        return self._state.air_quality

    async def async_get_plasmawave(self) -> Plasmawave:
        await self._ensure_updated()
        return self._state.plasmawave

    async def async_get_ambient_light(self) -> float:
        await self._ensure_updated()
        return self._state.ambient_light

    async def async_get_filter_hours(self) -> int:
        await self._ensure_updated()
        return self._state.filter_hours

    async def async_get_state(self) -> DeviceState:
        await self._ensure_updated()
        return self._state.copy()

    async def async_update(self) -> None:
        """Fetch the full device status and replace the cached state."""

        LOGGER.debug(f'{self.name} - Fetching device status')
        state = await self._client.async_get_device_status(self.device_id)
        self._state = state.copy()
        self._last_poll = time.monotonic()
        LOGGER.debug(f'{self.name} - Device status updated: {self._state}')

    async def async_set_power(self, value: Power) -> None:
        if await self._set_power(value):
            self._notify()

    async def async_set_mode(self, value: Mode) -> None:
        if await self._set_mode(value):
            self._notify()

    async def async_set_airflow(self, value: Airflow) -> None:
        await self._set_airflow(value)
        self._notify()

    async def async_set_plasmawave(self, value: Plasmawave) -> None:
        await self._set_plasmawave(value)
        self._notify()

    async def async_start(self) -> None:
        """Start refreshing on a fixed interval when using the interval policy."""

        if self.refresh_policy != RefreshPolicy.INTERVAL or self._refresh_task is not None:
            return
        LOGGER.debug(f'{self.name} - Refreshing every {self.cache_interval} seconds')
        self._refresh_task = asyncio.create_task(self._async_refresh_loop())

    async def async_shutdown(self) -> None:
        """Cancel the refresh loop and any pending reconciliation."""

        tasks = list(self._background_tasks)
        if self._refresh_task is not None:
            tasks.append(self._refresh_task)
            self._refresh_task = None
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._background_tasks.clear()

    async def _set_power(self, value: Power) -> bool:
        initial_power = await self.async_get_power()
        if initial_power == value:
            LOGGER.debug(f'{self.name} - Power already {value.name}. Skipping power command.')
            return False

        LOGGER.debug(f'{self.name} - Setting power {initial_power.name} -> {value.name}')
        await self._client.async_set_power(self.device_id, value)
        self._state.power = value

        # The purifier starts in auto mode when it is turned on
        if initial_power == Power.OFF and value == Power.ON:
            self._state.mode = Mode.AUTO
        return True

    async def _set_mode(self, value: Mode) -> bool:
        turned_on = await self._ensure_on()

        # Powering on changes the mode on the device, so the cached mode cannot be trusted
        if not turned_on and value == await self.async_get_mode():
            LOGGER.debug(f'{self.name} - Mode already {value.name}. Skipping mode command.')
            return False

        LOGGER.debug(f'{self.name} - Setting mode {value.name}')
        await self._client.async_set_mode(self.device_id, value)
        self._state.mode = value
        self._state.airflow = Airflow.LOW

        if value == Mode.AUTO:
            self._schedule_reconcile()
        return True

    async def _set_airflow(self, value: Airflow) -> None:
        LOGGER.debug(f'{self.name} - Setting airflow {value.name}')
        await self._ensure_on()
        await self._set_mode(Mode.MANUAL)
        await self._client.async_set_airflow(self.device_id, value)
        self._state.airflow = value

    async def _set_plasmawave(self, value: Plasmawave) -> None:
        LOGGER.debug(f'{self.name} - Setting plasmawave {value.name}')
        await self._ensure_on()
        await self._client.async_set_plasmawave(self.device_id, value)
        self._state.plasmawave = value

    async def _ensure_on(self) -> bool:
        """Turn the device on if needed. Returns True if it was turned on."""

        if await self.async_get_power() == Power.ON:
            return False
        LOGGER.debug(f'{self.name} - Device is off. Turning it on.')
        await self._set_power(Power.ON)
        return True

    async def _ensure_updated(self) -> None:
        if self.refresh_policy == RefreshPolicy.INTERVAL and self.has_data():
            return
        await self._async_locked_update()

    async def _async_locked_update(self, force: bool = False) -> None:
        """Fetch the device status while holding the fetch lock.

        Callers queued behind an in-flight fetch reuse its result unless force is set.
        """

        try:
            await asyncio.wait_for(self._lock.acquire(), timeout=self.lock_timeout)
        except asyncio.TimeoutError as timeout_error:
            raise LockTimeoutError(
                f'{self.name} - Timed out after {self.lock_timeout} seconds waiting for device status'
            ) from timeout_error
        try:
            if force or self._should_update():
                await self.async_update()
            else:
                LOGGER.debug(f'{self.name} - Using cached device status')
        finally:
            self._lock.release()

    def _should_update(self) -> bool:
        return not self.has_data() or self._is_stale()

    def _is_stale(self) -> bool:
        return time.monotonic() - self._last_poll > self.cache_interval

    def _schedule_reconcile(self) -> None:
        LOGGER.debug(f'{self.name} - Scheduling status refresh in {self.reconcile_delay} seconds')
        task = asyncio.create_task(self._async_reconcile())
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _async_reconcile(self) -> None:
        """Pick up the airflow the device chooses on its own after entering auto mode."""

        await asyncio.sleep(self.reconcile_delay)
        try:
            await self._async_locked_update(force=True)
        except WinixError as reconcile_error:
            LOGGER.warning(f'{self.name} - Failed to refresh status after switching to auto: {reconcile_error}')
            return
        self._notify()

    async def _async_refresh_loop(self) -> None:
        while True:
            previous = self._state.copy() if self.has_data() else None
            try:
                await self._async_locked_update(force=True)
            except WinixError as refresh_error:
                LOGGER.warning(f'{self.name} - Scheduled status refresh failed: {refresh_error}')
            else:
                if self._state != previous:
                    self._notify()
            await asyncio.sleep(self.cache_interval)

    def _notify(self) -> None:
        if not self.has_data():
            LOGGER.debug(f'{self.name} - No device status fetched yet. Skipping state push.')
            return

        state = self._state.copy()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                LOGGER.exception(f'{self.name} - Error in state listener')
