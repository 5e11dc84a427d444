"""Client library for the SleepIQ smart bed and Insights APIs."""

from .aliases import convert_date_alias, convert_monthly_date_alias, convert_time_length
from .api import (
    SleepIQApiAuthError,
    SleepIQApiClientError,
    SleepIQDecodeError,
    SleepIQNotLoggedInError,
    SleepIQServiceError,
    SleepIQTransportError,
    SleepIQValidationError,
)
from .client import SleepIQ
from .const import (
    LIGHT_LEVEL_HIGH,
    LIGHT_LEVEL_LOW,
    LIGHT_LEVEL_MEDIUM,
    POSITION_FAVORITE,
    POSITION_FLAT,
    POSITION_READ,
    POSITION_SNORE,
    POSITION_WATCH_TV,
    POSITION_ZERO_G,
    TEMP_HIGH,
    TEMP_LOW,
    TEMP_MEDIUM,
    TEMP_OFF,
)
from .models import ServiceError, SleepIQConfig

__all__ = [
    "LIGHT_LEVEL_HIGH",
    "LIGHT_LEVEL_LOW",
    "LIGHT_LEVEL_MEDIUM",
    "POSITION_FAVORITE",
    "POSITION_FLAT",
    "POSITION_READ",
    "POSITION_SNORE",
    "POSITION_WATCH_TV",
    "POSITION_ZERO_G",
    "TEMP_HIGH",
    "TEMP_LOW",
    "TEMP_MEDIUM",
    "TEMP_OFF",
    "ServiceError",
    "SleepIQ",
    "SleepIQApiAuthError",
    "SleepIQApiClientError",
    "SleepIQConfig",
    "SleepIQDecodeError",
    "SleepIQNotLoggedInError",
    "SleepIQServiceError",
    "SleepIQTransportError",
    "SleepIQValidationError",
    "convert_date_alias",
    "convert_monthly_date_alias",
    "convert_time_length",
]
