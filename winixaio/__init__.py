"""Init file for WinixAIO"""

from .constants import (ActiveState, Airflow, AirQuality, AirQualityLevel, Attribute, CACHE_INTERVAL,
                        CurrentPurifierState, Endpoint, FILTER_MAX_HOURS, FILTER_REPLACEMENT_PERCENTAGE,
                        LOCK_TIMEOUT, Mode, Plasmawave, Power, RefreshPolicy, TargetPurifierState, TIMEOUT,)
from .device import (DeviceClient, WinixDevice,)
from .device_model import (CacheState, DeviceState,)
from .exceptions import (DeviceCommunicationError, InvalidOptionError, LockTimeoutError,
                         ServiceCommunicationFailure, WinixError,)
from .options import PurifierOptions
from .purifier import WinixPurifier
from .str_enum import StrEnum
from .winix_client import (LOGGER, WinixClient,)
from .__version__ import __version__

__all__ = ['ActiveState', 'Airflow', 'AirQuality', 'AirQualityLevel', 'Attribute', 'CACHE_INTERVAL',
           'CacheState', 'CurrentPurifierState', 'DeviceClient', 'DeviceCommunicationError', 'DeviceState',
           'Endpoint', 'FILTER_MAX_HOURS', 'FILTER_REPLACEMENT_PERCENTAGE', 'InvalidOptionError',
           'LOCK_TIMEOUT', 'LOGGER', 'LockTimeoutError', 'Mode', 'Plasmawave', 'Power', 'PurifierOptions',
           'RefreshPolicy', 'ServiceCommunicationFailure', 'StrEnum', 'TargetPurifierState', 'TIMEOUT',
           'WinixClient', 'WinixDevice', 'WinixError', 'WinixPurifier', '__version__']
