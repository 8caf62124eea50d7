"""Options for Winix purifiers read from the automation host's configuration."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from winixaio.constants import CACHE_INTERVAL, FILTER_REPLACEMENT_PERCENTAGE, RefreshPolicy
from winixaio.exceptions import InvalidOptionError


@dataclass
class PurifierOptions:
    """Dataclass for per-purifier options"""

    cache_interval: float = CACHE_INTERVAL
    filter_replacement_percentage: int = FILTER_REPLACEMENT_PERCENTAGE
    reserve_zero_speed: bool = False
    refresh_policy: RefreshPolicy = RefreshPolicy.CACHE

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> PurifierOptions:
        """Build options from a host configuration mapping.

        Missing, empty or zero values fall back to the defaults.
        """

        cache_interval = config.get('cacheIntervalSeconds')
        # bool is an int subclass and would otherwise pass as 0 or 1.
        if isinstance(cache_interval, bool):
            raise InvalidOptionError(f'cacheIntervalSeconds must be a non-negative number, got {cache_interval!r}')
        cache_interval = cache_interval or CACHE_INTERVAL
        if not isinstance(cache_interval, (int, float)) or cache_interval < 0:
            raise InvalidOptionError(f'cacheIntervalSeconds must be a non-negative number, got {cache_interval!r}')

        percentage = config.get('filterReplacementIndicatorPercentage')
        if percentage is None:
            percentage = FILTER_REPLACEMENT_PERCENTAGE
        if isinstance(percentage, bool) or not isinstance(percentage, int) or not 0 <= percentage <= 100:
            raise InvalidOptionError(
                f'filterReplacementIndicatorPercentage must be between 0 and 100, got {percentage!r}'
            )

        policy = config.get('refreshPolicy') or RefreshPolicy.CACHE.value
        try:
            refresh_policy = RefreshPolicy(policy)
        except ValueError as policy_error:
            raise InvalidOptionError(f'Unknown refreshPolicy {policy!r}') from policy_error

        return cls(
            cache_interval=cache_interval,
            filter_replacement_percentage=percentage,
            reserve_zero_speed=bool(config.get('reserveZeroSpeed', False)),
            refresh_policy=refresh_policy,
        )
