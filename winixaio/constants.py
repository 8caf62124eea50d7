"""Constants for WinixAIO"""

from enum import IntEnum

from .str_enum import StrEnum
from .__version__ import __version__ as version


class Endpoint(StrEnum):

    BASE_URI = 'https://us.api.winix-iot.com/common'
    STATUS = '/event/sttus/devices'
    CONTROL = '/control/devices'
    CONTROL_API = 'A211'


class Header(StrEnum):

    ACCEPT = 'application/json'
    USER_AGENT = f'WinixAIO/{version}'


class ResultMessage(StrEnum):

    NO_DATA = 'no data'


class Attribute(StrEnum):

    POWER = 'A02'
    MODE = 'A03'
    AIRFLOW = 'A04'
    PLASMAWAVE = 'A07'
    FILTER_HOURS = 'A21'
    AIR_QUALITY = 'S07'
    AMBIENT_LIGHT = 'S14'


class Power(StrEnum):

    OFF = '0'
    ON = '1'


class Mode(StrEnum):

    AUTO = '01'
    MANUAL = '02'


class Airflow(StrEnum):

    LOW = '01'
    MEDIUM = '02'
    HIGH = '03'
    TURBO = '05'
    SLEEP = '06'


class AirQuality(StrEnum):

    GOOD = '01'
    FAIR = '02'
    POOR = '03'
    UNKNOWN = '00'


class Plasmawave(StrEnum):

    OFF = '0'
    ON = '1'


class RefreshPolicy(StrEnum):

    CACHE = 'cache'
    INTERVAL = 'interval'


# Values understood by the automation host.
class ActiveState(IntEnum):

    INACTIVE = 0
    ACTIVE = 1


class CurrentPurifierState(IntEnum):

    INACTIVE = 0
    IDLE = 1
    PURIFYING_AIR = 2


class TargetPurifierState(IntEnum):

    MANUAL = 0
    AUTO = 1


class AirQualityLevel(IntEnum):

    UNKNOWN = 0
    EXCELLENT = 1
    GOOD = 2
    FAIR = 3
    INFERIOR = 4
    POOR = 5


CACHE_INTERVAL = 60
LOCK_TIMEOUT = 3
RECONCILE_DELAY = 2
TIMEOUT = 10
FILTER_MAX_HOURS = 6480
FILTER_REPLACEMENT_PERCENTAGE = 10
MIN_AMBIENT_LIGHT = 0.0001
ROTATION_SPEED_STEP = 25
