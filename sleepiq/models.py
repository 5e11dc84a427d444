"""Data models for the SleepIQ client.

Response models mirror the JSON returned by the SleepIQ and Insights
services. Fields use snake_case names and are read from the vendor's
camelCase keys, with an explicit alias where the two do not line up.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .const import BASE_URL, INSIGHTS_SUBSCRIPTION_KEY, INSIGHTS_URL, REQUEST_TIMEOUT


class SleepIQModel(BaseModel):
    """Base for every response shape.

    Unknown keys are ignored. Missing and null keys keep the field default.
    """

    model_config = ConfigDict(alias_generator=to_camel)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


@dataclass(frozen=True)
class SleepIQConfig:
    """Settings used by the client to reach the SleepIQ services."""

    api_url: str = BASE_URL
    insights_url: str = INSIGHTS_URL
    subscription_key: str = INSIGHTS_SUBSCRIPTION_KEY
    timeout: float = REQUEST_TIMEOUT


@dataclass
class PrimarySession:
    """Login state for the primary SleepIQ API."""

    logged_in: bool = False
    key: str = ""
    cookies: httpx.Cookies = field(default_factory=httpx.Cookies)

    def clear(self) -> None:
        self.logged_in = False
        self.key = ""


@dataclass
class InsightsSession:
    """Login state for the Insights API."""

    logged_in: bool = False
    token: str = ""

    def clear(self) -> None:
        self.logged_in = False
        self.token = ""


# ----------------------------------------------------------------------------
# Common
# ----------------------------------------------------------------------------


class ServiceError(SleepIQModel):
    """Error information embedded in every service response."""

    code: StrictInt = Field(0, alias="Code")
    message: str = Field("", alias="Message")


class ServiceResponse(SleepIQModel):
    """Envelope shared by every response; also the body of control calls."""

    error: ServiceError = Field(default_factory=ServiceError, alias="Error")


# ----------------------------------------------------------------------------
# Authentication
# ----------------------------------------------------------------------------


class LoginResult(ServiceResponse):
    user_id: str = ""
    key: str = ""
    registration_state: StrictInt = 0
    edp_login_status: StrictInt = 0
    edp_login_message: str = ""


class InsightsLoginResult(ServiceResponse):
    token: str = ""
    sleeper_id: str = ""


# ----------------------------------------------------------------------------
# Beds
# ----------------------------------------------------------------------------


class Bed(SleepIQModel):
    """Details of a single bed registered to the account."""

    registration_date: datetime | None = None
    sleeper_right_id: str = ""
    base: Any = None
    return_request_status: StrictInt = 0
    size: str = ""
    name: str = ""
    serial: str = ""
    is_kids_bed: StrictBool = False
    dual_sleep: StrictBool = False
    bed_id: str = ""
    status: StrictInt = 0
    sleeper_left_id: str = ""
    version: str = ""
    account_id: str = ""
    timezone: str = ""
    generation: str = ""
    model: str = ""
    purchase_date: datetime | None = None
    mac_address: str = ""
    sku: str = ""
    zipcode: str = ""
    reference: str = ""


class BedsInfo(ServiceResponse):
    beds: list[Bed] = []


class BedPrivacyMode(ServiceResponse):
    """Whether privacy (pause) mode is on or off."""

    account_id: str = ""
    bed_id: str = ""
    pause_mode: str = ""


class SideStatus(SleepIQModel):
    is_in_bed: StrictBool = False
    alert_detailed_message: str = ""
    sleep_number: StrictInt = 0
    alert_id: StrictInt = 0
    last_link: str = ""
    pressure: StrictInt = 0


class BedFamilyEntry(SleepIQModel):
    status: StrictInt = 0
    bed_id: str = ""
    left_side: SideStatus = Field(default_factory=SideStatus)
    right_side: SideStatus = Field(default_factory=SideStatus)


class FamilyStatus(ServiceResponse):
    """Settings for each bed and each side of a bed."""

    beds: list[BedFamilyEntry] = []


class Chambers(SleepIQModel):
    left_chamber_occupancy: Any = None
    left_chamber_refreshed_state: Any = None
    left_chamber_type: StrictInt = 0
    right_chamber_occupancy: Any = None
    right_chamber_refreshed_state: Any = None
    right_chamber_type: StrictInt = 0


class FoundationOutlet(SleepIQModel):
    outlet_id: StrictInt = 0
    setting: Any = None


class FoundationDetails(SleepIQModel):
    current_position_preset_left: str = Field("", alias="fsCurrentPositionPresetLeft")
    current_position_preset_right: str = Field("", alias="fsCurrentPositionPresetRight")
    type: str = Field("", alias="fsType")
    outlets: list[FoundationOutlet] = []


class PumpDetails(SleepIQModel):
    active_task: StrictInt = 0
    chamber_type: StrictInt = 0
    left_side_sleep_number: StrictInt = 0
    right_side_sleep_number: StrictInt = 0
    sleep_number_favorite_left: StrictInt = 0
    sleep_number_favorite_right: StrictInt = 0


class SmartOutlet(SleepIQModel):
    name: str = ""
    outlet_id: StrictInt = 0
    setting: StrictInt = 0


class BedDetailedInfo(ServiceResponse):
    """Detailed bed settings, mostly useful for troubleshooting."""

    bed_id: str = ""
    chambers: Chambers = Field(default_factory=Chambers)
    foundation: FoundationDetails = Field(default_factory=FoundationDetails)
    pump: PumpDetails = Field(default_factory=PumpDetails)
    smartoutlets: list[SmartOutlet] = []


class BedNodes(ServiceResponse):
    bed_id: str = ""
    nodes: list[StrictInt] = []


class ResponsiveAirSettings(ServiceResponse):
    adjustment_threshold: StrictInt = 0
    in_bed_timeout: StrictInt = 0
    left_side_enabled: StrictBool = False
    out_of_bed_timeout: StrictInt = 0
    poll_frequency: StrictInt = 0
    pref_sync_state: str = ""
    right_side_enabled: StrictBool = False


class FootWarmingStatus(ServiceResponse):
    foot_warming_status_left: StrictInt = 0
    foot_warming_status_right: StrictInt = 0
    foot_warming_timer_left: StrictInt = 0
    foot_warming_timer_right: StrictInt = 0


class BedSystemStatus(ServiceResponse):
    """Status of the foundation control board and underbed lighting."""

    bed_type: StrictInt = Field(0, alias="fsBedType")  # BED_TYPE_*
    board_faults: StrictInt = Field(0, alias="fsBoardFaults")
    board_features: StrictInt = Field(0, alias="fsBoardFeatures")
    board_hw_revision_code: StrictInt = Field(0, alias="fsBoardHWRevisionCode")
    board_status: StrictInt = Field(0, alias="fsBoardStatus")
    left_underbed_light_pwm: StrictInt = Field(0, alias="fsLeftUnderbedLightPWM")
    right_underbed_light_pwm: StrictInt = Field(0, alias="fsRightUnderbedLightPWM")


class BedPinchStatus(ServiceResponse):
    """Pinch sensor flags and event counters per foundation actuator."""

    continuous_pinch_left_foot: StrictBool = False
    continuous_pinch_left_head: StrictBool = False
    continuous_pinch_right_foot: StrictBool = False
    continuous_pinch_right_head: StrictBool = False
    pinch_events_left_foot: StrictInt = 0
    pinch_events_left_head: StrictInt = 0
    pinch_events_right_foot: StrictInt = 0
    pinch_events_right_head: StrictInt = 0
    pinch_sense_disconnected_left_foot: StrictBool = False
    pinch_sense_disconnected_left_head: StrictBool = False
    pinch_sense_disconnected_right_foot: StrictBool = False
    pinch_sense_disconnected_right_head: StrictBool = False


class UnderbedLightStatus(ServiceResponse):
    enable_auto: StrictBool = False
    pref_sync_state: str = ""


class BedFoundationStatus(ServiceResponse):
    """Status of the bed foundation, in particular its position."""

    current_position_preset_right: str = Field("", alias="fsCurrentPositionPresetRight")
    needs_homing: StrictBool = Field(False, alias="fsNeedsHoming")
    right_foot_position: str = Field("", alias="fsRightFootPosition")
    left_position_timer_lsb: str = Field("", alias="fsLeftPositionTimerLSB")
    timer_position_preset_left: str = Field("", alias="fsTimerPositionPresetLeft")
    current_position_preset_left: str = Field("", alias="fsCurrentPositionPresetLeft")
    left_position_timer_msb: str = Field("", alias="fsLeftPositionTimerMSB")
    right_foot_actuator_motor_status: str = Field(
        "", alias="fsRightFootActuatorMotorStatus"
    )
    current_position_preset: str = Field("", alias="fsCurrentPositionPreset")
    timer_position_preset_right: str = Field("", alias="fsTimerPositionPresetRight")
    type: str = Field("", alias="fsType")
    outlets_on: StrictBool = Field(False, alias="fsOutletsOn")
    left_head_position: str = Field("", alias="fsLeftHeadPosition")
    is_moving: StrictBool = Field(False, alias="fsIsMoving")
    right_head_actuator_motor_status: str = Field(
        "", alias="fsRightHeadActuatorMotorStatus"
    )
    status_summary: str = Field("", alias="fsStatusSummary")
    timer_position_preset: str = Field("", alias="fsTimerPositionPreset")
    left_foot_position: str = Field("", alias="fsLeftFootPosition")
    right_position_timer_lsb: str = Field("", alias="fsRightPositionTimerLSB")
    timed_outlets_on: StrictBool = Field(False, alias="fsTimedOutletsOn")
    right_head_position: str = Field("", alias="fsRightHeadPosition")
    configured: StrictBool = Field(False, alias="fsConfigured")
    right_position_timer_msb: str = Field("", alias="fsRightPositionTimerMSB")
    left_head_actuator_motor_status: str = Field(
        "", alias="fsLeftHeadActuatorMotorStatus"
    )
    left_foot_actuator_motor_status: str = Field(
        "", alias="fsLeftFootActuatorMotorStatus"
    )


class UnderbedLightOutletStatus(ServiceResponse):
    bed_id: str = ""
    outlet: StrictInt = 0
    setting: StrictInt = 0
    timer: Any = None


# ----------------------------------------------------------------------------
# Sleepers
# ----------------------------------------------------------------------------


class Sleeper(SleepIQModel):
    """Personal information about a sleeper."""

    first_name: str = ""
    active: StrictBool = False
    email_validated: StrictBool = False
    is_child: StrictBool = False
    bed_id: str = ""
    birth_year: str = ""
    zip_code: str = ""
    timezone: str = ""
    is_male: StrictBool = False
    weight: StrictInt = 0
    duration: Any = None
    sleeper_id: str = ""
    height: StrictInt = 0
    license_version: StrictInt = 0
    username: str = ""
    birth_month: StrictInt = 0
    sleep_goal: StrictInt = 0
    is_account_owner: StrictBool = False
    account_id: str = ""
    email: str = ""
    avatar: str = ""
    last_login: str = ""
    side: StrictInt = 0  # BED_SIDE_LEFT or BED_SIDE_RIGHT


class SleeperDetails(ServiceResponse):
    sleepers: list[Sleeper] = []


class SleepSession(SleepIQModel):
    start_date: str = ""
    longest: StrictBool = False
    sleep_iq_calculating: StrictBool = Field(False, alias="sleepIQCalculating")
    original_start_date: str = ""
    restful: StrictInt = 0
    original_end_date: str = ""
    sleep_number: StrictInt = 0
    total_sleep_session_time: StrictInt = 0
    avg_heart_rate: StrictInt = 0
    restless: StrictInt = 0
    avg_respiration_rate: StrictInt = 0
    is_finalized: StrictBool = False
    sleep_quotient: StrictInt = 0
    end_date: str = ""
    out_of_bed: StrictInt = 0
    in_bed: StrictInt = 0


class SleepDataDay(SleepIQModel):
    tip: str = ""
    message: str = ""
    date: str = ""
    sessions: list[SleepSession] = []
    goal_entry: Any = None
    tags: list[Any] = []


class SleeperActivity(SleepIQModel):
    sleeper_id: str = ""
    message: str = ""
    tip: str = ""
    avg_heart_rate: StrictInt = 0
    avg_respiration_rate: StrictInt = 0
    total_sleep_session_time: StrictInt = 0
    in_bed: StrictInt = 0
    out_of_bed: StrictInt = 0
    restful: StrictInt = 0
    restless: StrictInt = 0
    avg_sleep_iq: StrictInt = Field(0, alias="avgSleepIQ")
    sleep_data: list[SleepDataDay] = []


class SleeperActivityDetails(ServiceResponse):
    """Daily sleep quality for every sleeper."""

    sleepers: list[SleeperActivity] = []


class Preferences(SleepIQModel):
    notifications: list[Any] = []


class SleeperPreferences(ServiceResponse):
    preferences: Preferences = Field(default_factory=Preferences)
    sleeper_id: str = ""


class MonthDaySleeper(SleepIQModel):
    sleeper_id: str = ""
    name: str = ""
    session: SleepSession = Field(default_factory=SleepSession)


class MonthDay(SleepIQModel):
    date: str = ""
    sleepers: list[MonthDaySleeper] = []


class MonthSleeperSummary(SleepIQModel):
    sleeper_id: str = ""
    message: str = ""
    avg_sleep_iq: StrictInt = Field(0, alias="avgSleepIQ")
    restful: StrictInt = 0
    tip: str = ""
    total_sleep_session_time: StrictInt = 0
    avg_heart_rate: StrictInt = 0
    restless: StrictInt = 0
    avg_respiration_rate: StrictInt = 0
    out_of_bed: StrictInt = 0
    in_bed: StrictInt = 0


class MonthSleepData(SleepIQModel):
    date: str = ""
    days: list[MonthDay] = []
    sleepers: list[MonthSleeperSummary] = []


class SleeperMonthlySummary(ServiceResponse):
    """Monthly summary by day for each sleeper."""

    month_sleep_data: MonthSleepData = Field(default_factory=MonthSleepData)


class EditedSession(SleepIQModel):
    end_date: str = ""
    original_end_date: str = ""
    original_start_date: str = ""
    start_date: str = ""


class SleeperEditedSessions(SleepIQModel):
    edited_sleep_sessions: list[EditedSession] = []
    hidden_sleep_sessions: list[Any] = []
    sleeper_id: str = ""


class EditedSleepSessions(ServiceResponse):
    """Sleep sessions that have been manually edited or hidden."""

    sleepers: list[SleeperEditedSessions] = []


class SleepSlice(SleepIQModel):
    out_of_bed_time: StrictInt = 0
    restful_time: StrictInt = 0
    restless_time: StrictInt = 0
    type: StrictInt = 0


class SliceDay(SleepIQModel):
    date: str = ""
    slice_list: list[SleepSlice] = []


class SleeperSliceData(SleepIQModel):
    days: list[SliceDay] = []
    sleeper_id: str = ""
    slice_size: StrictInt = 0


class NightlyTimeSeriesActivity(ServiceResponse):
    """Nightly activity split into slices (600 per day, 2.4 minutes each)."""

    sleepers: list[SleeperSliceData] = []


# ----------------------------------------------------------------------------
# Insights
# ----------------------------------------------------------------------------


class NestPartner(SleepIQModel):
    summary_data: str = Field("", alias="summary_data")
    status: Any = None


class ApplePartner(SleepIQModel):
    summary_data: Any = Field(None, alias="summary_data")
    goal_steps: Any = Field(None, alias="goal_steps")
    daily_steps: Any = Field(None, alias="daily_steps")
    status: Any = None


class Partner(SleepIQModel):
    nest: NestPartner = Field(default_factory=NestPartner)
    apple: ApplePartner = Field(default_factory=ApplePartner)


class Activity(SleepIQModel):
    sleeper_id: str = ""
    activity_date: str = ""
    partner: Partner = Field(default_factory=Partner)


class ProviderStatuses(SleepIQModel):
    fitbit: StrictBool = False
    underarmour: StrictBool = False
    nest: StrictBool = False
    withings: StrictBool = False
    health: StrictBool = False
    apple: StrictBool = False
    honeywell: StrictBool = False
    google: StrictBool = False


class SleeperActivities(ServiceResponse):
    """Activities sourced from external monitors (watches, thermostats)."""

    activities: list[Activity] = []
    statuses: ProviderStatuses = Field(default_factory=ProviderStatuses)


class Provider(SleepIQModel):
    id: str = ""
    name: str = ""
    description: str = ""
    image: str = ""
    scope: list[str] = []
    platforms: list[str] = []
    data_types: list[str] = Field(default_factory=list, alias="data_types")
    connected: StrictBool = False
    order: StrictInt = 0
    connected_at: datetime | None = None
    last_sync: Any = Field(None, alias="last_sync")
    is_valid: Any = Field(None, alias="is_valid")
    permissions: list[Any] = []


class InsightProviders(ServiceResponse):
    providers: list[Provider] = []


class RelativeInsight(SleepIQModel):
    count: StrictInt = 0
    date: str = ""
    siq_score: StrictInt = 0
    sleep_number: StrictInt = 0
    time_in_bed: StrictInt = 0


class RelativeInsights(ServiceResponse):
    """Historical data relative to similar or nearby sleepers."""

    data: list[RelativeInsight] = []


class MyInsight(SleepIQModel):
    count: StrictInt = 0
    date: str = ""
    max_score: StrictInt = 0
    max_score_date: str = ""
    max_time_in_bed: StrictInt = 0
    max_time_in_bed_date: str = ""
    siq_score: StrictInt = 0
    sleep_number: StrictInt = 0
    time_in_bed: StrictInt = 0
    total_time_in_bed: StrictInt = 0


class MyInsights(ServiceResponse):
    data: list[MyInsight] = []
