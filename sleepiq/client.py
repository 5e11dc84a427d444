"""Client for the SleepIQ cloud and Insights APIs.

The :class:`SleepIQ` client owns two independent sessions: the primary
session (session key and cookies) used for bed and sleeper endpoints, and
the Insights session (access token) used for the analytics endpoints.
Every operation is synchronous and makes at most two sequential requests.
"""

import logging
from datetime import date
from typing import Any, Self, TypeVar
from urllib.parse import quote

import httpx

from . import api
from .aliases import (
    convert_date_alias,
    convert_monthly_date_alias,
    convert_time_length,
    format_date,
)
from .api import SleepIQNotLoggedInError, SleepIQValidationError
from .const import (
    FOOT_WARMER_MAX_DURATION,
    FOOT_WARMER_MIN_DURATION,
    FOOT_WARMER_OFF_DURATION,
    FOOT_WARMER_TEMPERATURES,
    LIGHT_LEVELS,
    LIGHT_MAX_DURATION,
    LIGHT_MIN_DURATION,
    POSITION_FAVORITE,
    POSITION_SNORE,
    PRESET_SPEED,
    SIDE_LEFT,
    SIDE_RIGHT,
    SIDES,
    SLEEP_NUMBER_MAX,
    SLEEP_NUMBER_MIN,
    TEMP_OFF,
    UNDERBED_LIGHT_OUTLET_ID,
)
from .models import (
    BedDetailedInfo,
    BedFoundationStatus,
    BedNodes,
    BedPinchStatus,
    BedPrivacyMode,
    BedsInfo,
    BedSystemStatus,
    EditedSleepSessions,
    FamilyStatus,
    FootWarmingStatus,
    InsightProviders,
    InsightsLoginResult,
    InsightsSession,
    LoginResult,
    MyInsights,
    NightlyTimeSeriesActivity,
    PrimarySession,
    RelativeInsights,
    ResponsiveAirSettings,
    ServiceResponse,
    SleeperActivities,
    SleeperActivityDetails,
    SleeperDetails,
    SleeperMonthlySummary,
    SleeperPreferences,
    SleepIQConfig,
    SleepIQModel,
    UnderbedLightOutletStatus,
    UnderbedLightStatus,
)

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=SleepIQModel)

NOT_LOGGED_IN = "User is not logged in. Please login and try again"
INSIGHTS_NOT_LOGGED_IN = "User is not logged in to Insights. Please login and try again"


def validate_side(side: str) -> str:
    """Validate a bed side and return it lower-cased.

    Raises:
        SleepIQValidationError: If side is not 'left' or 'right'.

    """
    if not isinstance(side, str) or side.lower() not in SIDES:
        error_msg = "Parameter 'side' must be 'left' or 'right'"
        raise SleepIQValidationError(error_msg)
    return side.lower()


def validate_range(name: str, value: int, minimum: int, maximum: int) -> None:
    """Validate that an integer parameter is within [minimum, maximum]."""
    if isinstance(value, bool) or not isinstance(value, int):
        error_msg = f"Parameter '{name}' must be an integer"
        raise SleepIQValidationError(error_msg)
    if value < minimum or value > maximum:
        error_msg = (
            f"Parameter '{name}' must be between {minimum} and {maximum} inclusive"
        )
        raise SleepIQValidationError(error_msg)


def validate_choice(name: str, value: int, choices: tuple[int, ...]) -> None:
    """Validate that a parameter is one of the allowed values."""
    if isinstance(value, bool) or not isinstance(value, int) or value not in choices:
        allowed = ", ".join(str(choice) for choice in choices)
        error_msg = f"Parameter '{name}' must be one of {allowed}"
        raise SleepIQValidationError(error_msg)


def require_id(name: str, value: str) -> str:
    """Return an opaque identifier, rejecting empty values."""
    if not value:
        error_msg = f"Parameter '{name}' must not be empty"
        raise SleepIQValidationError(error_msg)
    return str(value)


def _segment(name: str, value: str) -> str:
    return quote(require_id(name, value), safe="")


def _side_code(side: str) -> str:
    return side[0].upper()


class SleepIQ:
    """Synchronous client for the SleepIQ and Insights APIs.

    Not safe for concurrent use; use one instance per thread.
    """

    def __init__(
        self,
        session: httpx.Client | None = None,
        config: SleepIQConfig | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: HTTP client to use. When omitted the client creates
                one and closes it in :meth:`close`.
            config: Service endpoints and request settings.

        """
        self.config = config or SleepIQConfig()
        self._owns_session = session is None
        self.session = session or api.create_session_client(self.config.timeout)
        self.primary = PrimarySession()
        self.insights = InsightsSession()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if it was created by this instance."""
        if self._owns_session:
            self.session.close()

    @property
    def is_logged_in(self) -> bool:
        """Whether the primary session is logged in."""
        return self.primary.logged_in

    @property
    def is_insights_logged_in(self) -> bool:
        """Whether the Insights session is logged in."""
        return self.insights.logged_in

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> LoginResult:
        """Authenticate against the primary SleepIQ API.

        The session is reset before the attempt and only marked as logged
        in once the service accepts the credentials.

        Raises:
            SleepIQApiAuthError: If the service rejects the credentials.
            SleepIQApiClientError: If the request or its decoding fails.

        """
        self.primary.clear()
        url = f"{self.config.api_url}/login"
        payload = {"login": username, "password": password}

        _LOGGER.debug("Authenticating with SleepIQ API")
        response, cookies = api.http_put(
            self.session, url, payload, params={}, cookies=self.primary.cookies
        )
        data = self._validate_login(response)
        result = api.decode_response(LoginResult, data)

        self.primary.key = result.key
        self.primary.cookies = cookies
        self.primary.logged_in = True
        _LOGGER.info("Successfully authenticated with SleepIQ API")
        return result

    def insights_login(self, username: str, password: str) -> InsightsLoginResult:
        """Authenticate against the Insights API.

        Raises:
            SleepIQApiAuthError: If the service rejects the credentials.
            SleepIQApiClientError: If the request or its decoding fails.

        """
        self.insights.clear()
        url = f"{self.config.insights_url}/accesstoken"
        payload = {"login": username, "password": password}
        headers = api.create_insights_headers(self.config.subscription_key)

        _LOGGER.debug("Authenticating with SleepIQ Insights API")
        response = api.http_post(self.session, url, payload, headers=headers)
        data = self._validate_login(response)
        result = api.decode_response(InsightsLoginResult, data)

        self.insights.token = result.token
        self.insights.logged_in = True
        _LOGGER.info("Successfully authenticated with SleepIQ Insights API")
        return result

    @staticmethod
    def _validate_login(response: httpx.Response) -> dict[str, Any]:
        try:
            return api.validate_response(response)
        except api.SleepIQServiceError as err:
            _LOGGER.warning("Login rejected by service: %s", err)
            raise api.SleepIQApiAuthError(err.code, err.message) from err

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def _require_login(self) -> None:
        if not self.primary.logged_in:
            raise SleepIQNotLoggedInError(NOT_LOGGED_IN)

    def _require_insights_login(self) -> None:
        if not self.insights.logged_in:
            raise SleepIQNotLoggedInError(INSIGHTS_NOT_LOGGED_IN)

    def _get(
        self, path: str, model: type[T], params: dict[str, Any] | None = None
    ) -> T:
        url = f"{self.config.api_url}{path}"
        query = {"_k": self.primary.key, **(params or {})}

        _LOGGER.debug("Fetching %s from SleepIQ API", path)
        response = api.http_get(
            self.session,
            url,
            params=query,
            headers=api.create_headers(self.primary.cookies),
        )
        data = api.validate_response(response)
        return api.decode_response(model, data)

    def _insights_get(
        self, path: str, model: type[T], params: dict[str, Any] | None = None
    ) -> T:
        url = f"{self.config.insights_url}{path}"
        query = {**(params or {}), "access_token": self.insights.token}

        _LOGGER.debug("Fetching %s from SleepIQ Insights API", path)
        response = api.http_get(
            self.session,
            url,
            params=query,
            headers=api.create_insights_headers(self.config.subscription_key),
        )
        data = api.validate_response(response)
        return api.decode_response(model, data)

    def _put(self, path: str, payload: dict[str, Any] | None) -> ServiceResponse:
        url = f"{self.config.api_url}{path}"

        _LOGGER.debug("Sending %s to SleepIQ API: %s", path, payload)
        response, cookies = api.http_put(
            self.session,
            url,
            payload,
            params={"_k": self.primary.key},
            cookies=self.primary.cookies,
        )
        if cookies:
            self.primary.cookies = cookies
        data = api.validate_response(response)
        return api.decode_response(ServiceResponse, data)

    @staticmethod
    def _bed_path(bed_id: str, *parts: str) -> str:
        return "/".join(("/bed", _segment("bed_id", bed_id), *parts))

    # ------------------------------------------------------------------
    # Beds
    # ------------------------------------------------------------------

    def beds(self) -> BedsInfo:
        """Return all beds associated with the account."""
        self._require_login()
        return self._get("/bed", BedsInfo)

    def bed_privacy_mode(self, bed_id: str) -> BedPrivacyMode:
        """Return whether privacy (pause) mode is enabled for a bed."""
        self._require_login()
        return self._get(self._bed_path(bed_id, "pauseMode"), BedPrivacyMode)

    def bed_family_status(self) -> FamilyStatus:
        """Return the status of each bed and each side of a bed."""
        self._require_login()
        return self._get("/bed/familyStatus", FamilyStatus)

    def bed_detailed_status(self, bed_id: str) -> BedDetailedInfo:
        self._require_login()
        return self._get(self._bed_path(bed_id, "superStatus"), BedDetailedInfo)

    def bed_nodes(self, bed_id: str) -> BedNodes:
        self._require_login()
        return self._get(self._bed_path(bed_id, "nodes"), BedNodes)

    def bed_responsive_air(self, bed_id: str) -> ResponsiveAirSettings:
        self._require_login()
        return self._get(self._bed_path(bed_id, "responsiveAir"), ResponsiveAirSettings)

    def bed_foot_warmer_status(self, bed_id: str) -> FootWarmingStatus:
        self._require_login()
        return self._get(
            self._bed_path(bed_id, "foundation", "footwarming"), FootWarmingStatus
        )

    def bed_system_status(self, bed_id: str) -> BedSystemStatus:
        """Return the foundation board and lighting status of a bed."""
        self._require_login()
        return self._get(
            self._bed_path(bed_id, "foundation", "system"), BedSystemStatus
        )

    def bed_pinch_status(self, bed_id: str) -> BedPinchStatus:
        self._require_login()
        return self._get(self._bed_path(bed_id, "foundation", "pinch"), BedPinchStatus)

    def bed_light_status(self, bed_id: str) -> UnderbedLightStatus:
        self._require_login()
        return self._get(
            self._bed_path(bed_id, "foundation", "underbedLight"), UnderbedLightStatus
        )

    def bed_foundation_status(self, bed_id: str) -> BedFoundationStatus:
        self._require_login()
        return self._get(
            self._bed_path(bed_id, "foundation", "status"), BedFoundationStatus
        )

    def bed_lighting_outlet_status(
        self, bed_id: str, outlet_id: int
    ) -> UnderbedLightOutletStatus:
        self._require_login()
        return self._get(
            self._bed_path(bed_id, "foundation", "outlet"),
            UnderbedLightOutletStatus,
            {"outletId": outlet_id},
        )

    def bed_lighting_system_status(self, bed_id: str) -> BedSystemStatus:
        """Return the underbed lighting system status of a bed."""
        return self.bed_system_status(bed_id)

    # ------------------------------------------------------------------
    # Sleepers
    # ------------------------------------------------------------------

    def sleepers(self) -> SleeperDetails:
        """Return personal details of every sleeper on the account."""
        self._require_login()
        return self._get("/sleeper", SleeperDetails)

    def sleep_activity(
        self, date_alias: str = "today", time_length: str = ""
    ) -> SleeperActivityDetails:
        """Return daily sleep quality for every sleeper.

        Args:
            date_alias: Date as YYYY-MM-DD, or 'today' / 'yesterday'.
            time_length: 'D1' (one day), 'W1' (one week) or 'M1' (one
                month), case-insensitive. Defaults to one day.

        """
        self._require_login()
        params = {
            "date": convert_date_alias(date_alias),
            "interval": convert_time_length(time_length),
        }
        return self._get("/sleepData/", SleeperActivityDetails, params)

    def sleeper_preference(self, sleeper_id: str) -> SleeperPreferences:
        self._require_login()
        path = f"/sleeper/{_segment('sleeper_id', sleeper_id)}/preferences"
        return self._get(path, SleeperPreferences)

    def sleeper_monthly_summary(
        self, date_alias: str = "this"
    ) -> SleeperMonthlySummary:
        """Return a monthly summary by day for each sleeper.

        Args:
            date_alias: Month as YYYY-MM, 'this', 'last', or a month name.
                A month name later than the current month refers to the
                previous year.

        """
        self._require_login()
        params = {"startDate": convert_monthly_date_alias(date_alias)}
        return self._get("/sleepData/byMonth", SleeperMonthlySummary, params)

    def sleeper_edited_sessions(
        self, sleeper_id: str, start_date: date, end_date: date
    ) -> EditedSleepSessions:
        """Return manually edited or hidden sleep sessions in a date range."""
        self._require_login()
        params = {
            "startDate": format_date(start_date),
            "endDate": format_date(end_date),
            "sleeperId": require_id("sleeper_id", sleeper_id),
        }
        return self._get("/sleepData/editedHidden", EditedSleepSessions, params)

    def sleeper_nightly_detailed_activity(
        self, sleeper_id: str, night: date
    ) -> NightlyTimeSeriesActivity:
        """Return the sliced sleep activity of a sleeper for one night."""
        self._require_login()
        params = {
            "date": format_date(night),
            "sleeper": require_id("sleeper_id", sleeper_id),
        }
        return self._get("/sleepSliceData", NightlyTimeSeriesActivity, params)

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    def insights_activity(
        self, sleeper_id: str, start_date: date, end_date: date
    ) -> SleeperActivities:
        """Return activities sourced from external monitors such as watches."""
        self._require_insights_login()
        params = {
            "sleeperId": require_id("sleeper_id", sleeper_id),
            "startDate": format_date(start_date),
            "endDate": format_date(end_date),
        }
        return self._insights_get("/activities", SleeperActivities, params)

    def insights_providers(self) -> InsightProviders:
        """Return the status of the activity monitors Insights supports."""
        self._require_insights_login()
        return self._insights_get("/providers/", InsightProviders)

    def insights_like_me(
        self, sleeper_id: str, start_date: date, end_date: date
    ) -> RelativeInsights:
        """Return historical data for people with similar sleep patterns."""
        return self._historical_insights("likeme", sleeper_id, start_date, end_date)

    def insights_near_me(
        self, sleeper_id: str, start_date: date, end_date: date
    ) -> RelativeInsights:
        """Return historical data for people near the sleeper's location."""
        return self._historical_insights("nearme", sleeper_id, start_date, end_date)

    def insights_me(
        self, sleeper_id: str, start_date: date, end_date: date
    ) -> MyInsights:
        """Return historical insight data about the sleeper."""
        return self._historical_insights(
            "sleeper", sleeper_id, start_date, end_date, MyInsights
        )

    def _historical_insights(
        self,
        kind: str,
        sleeper_id: str,
        start_date: date,
        end_date: date,
        model: type[T] = RelativeInsights,
    ) -> T:
        self._require_insights_login()
        path = f"/insights/historical/{kind}/{_segment('sleeper_id', sleeper_id)}"
        params = {"start": format_date(start_date), "end": format_date(end_date)}
        return self._insights_get(path, model, params)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def control_foot_warmer(
        self, bed_id: str, side: str, temperature: int, duration: int
    ) -> FootWarmingStatus:
        """Set the foot warmer temperature and duration for one side.

        Args:
            bed_id: Bed identifier from :meth:`beds`.
            side: 'left' or 'right', case-insensitive.
            temperature: One of TEMP_OFF, TEMP_LOW, TEMP_MEDIUM, TEMP_HIGH.
            duration: Minutes, between 1 and 360.

        Returns:
            The foot warmer status fetched after the change.

        """
        side = validate_side(side)
        validate_choice("temperature", temperature, FOOT_WARMER_TEMPERATURES)
        validate_range(
            "duration", duration, FOOT_WARMER_MIN_DURATION, FOOT_WARMER_MAX_DURATION
        )
        self._require_login()

        suffix = side.title()
        payload = {
            f"footWarmingTemp{suffix}": temperature,
            f"footWarmingTimer{suffix}": duration,
        }
        self._put(self._bed_path(bed_id, "foundation", "footwarming"), payload)
        return self.bed_foot_warmer_status(bed_id)

    def control_foot_warmer_off(self, bed_id: str) -> FootWarmingStatus:
        """Turn the foot warmer off on both sides."""
        self.control_foot_warmer(bed_id, SIDE_LEFT, TEMP_OFF, FOOT_WARMER_OFF_DURATION)
        return self.control_foot_warmer(
            bed_id, SIDE_RIGHT, TEMP_OFF, FOOT_WARMER_OFF_DURATION
        )

    def control_bed_position(
        self, bed_id: str, side: str, position: int
    ) -> BedFoundationStatus:
        """Move one side of the bed to a preset position.

        Returns:
            The foundation status fetched after the change.

        """
        side = validate_side(side)
        validate_range("position", position, POSITION_FAVORITE, POSITION_SNORE)
        self._require_login()

        payload = {"preset": position, "side": _side_code(side), "speed": PRESET_SPEED}
        self._put(self._bed_path(bed_id, "foundation", "preset"), payload)
        return self.bed_foundation_status(bed_id)

    def control_underbed_light(
        self, bed_id: str, light_level: int, duration: int
    ) -> None:
        """Turn the underbed light on at a level for a number of minutes.

        A duration of 0 leaves the light on without a timer.
        """
        validate_choice("light_level", light_level, LIGHT_LEVELS)
        validate_range("duration", duration, LIGHT_MIN_DURATION, LIGHT_MAX_DURATION)
        self._require_login()

        system = {
            "rightUnderbedLightPWM": light_level,
            "leftUnderbedLightPWM": light_level,
        }
        self._put(self._bed_path(bed_id, "foundation", "system"), system)
        self._set_underbed_outlet(bed_id, "1", duration)

    def control_underbed_light_off(self, bed_id: str) -> None:
        """Turn the underbed light off."""
        self._require_login()
        self._set_underbed_outlet(bed_id, "0", 0)

    def _set_underbed_outlet(self, bed_id: str, setting: str, timer: int) -> None:
        payload = {
            "outletId": UNDERBED_LIGHT_OUTLET_ID,
            "setting": setting,
            "timer": timer,
        }
        self._put(self._bed_path(bed_id, "foundation", "outlet"), payload)

    def control_underbed_light_auto_mode(self, bed_id: str, enabled: bool) -> None:
        """Enable or disable the light turning on when someone leaves the bed."""
        self._require_login()
        self._put(
            self._bed_path(bed_id, "foundation", "underbedLight"),
            {"enableAuto": enabled},
        )

    def control_responsive_air_mode(
        self, bed_id: str, enabled: bool, side: str | None = None
    ) -> None:
        """Enable or disable responsive air on one side, or both when side is None."""
        sides = SIDES if side is None else (validate_side(side),)
        self._require_login()

        payload = {f"{name}SideEnabled": enabled for name in sides}
        self._put(self._bed_path(bed_id, "responsiveAir"), payload)

    def control_sleep_number(self, bed_id: str, side: str, sleep_number: int) -> None:
        """Set the sleep number of one side of the bed.

        The pump is forced idle first; if that fails the sleep number is
        not sent.
        """
        side = validate_side(side)
        validate_range("sleep_number", sleep_number, SLEEP_NUMBER_MIN, SLEEP_NUMBER_MAX)
        self._require_login()

        self.control_pump_force_idle(bed_id)
        payload = {"side": _side_code(side), "sleepNumber": sleep_number}
        self._put(self._bed_path(bed_id, "sleepNumber"), payload)

    def control_pump_force_idle(self, bed_id: str) -> None:
        """Force the air pump to stop whatever it is doing."""
        self._require_login()
        self._put(self._bed_path(bed_id, "pump", "forceIdle"), None)

