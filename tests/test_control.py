"""Tests for the SleepIQ bed control operations."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from pytest_httpx import HTTPXMock

from sleepiq import (
    LIGHT_LEVEL_HIGH,
    LIGHT_LEVEL_MEDIUM,
    POSITION_ZERO_G,
    TEMP_LOW,
    SleepIQ,
    SleepIQServiceError,
    SleepIQTransportError,
    SleepIQValidationError,
)
from sleepiq.const import BASE_URL

from .conftest import BED_ID, TEST_COOKIE, TEST_KEY

BED_URL = f"{BASE_URL}/bed/{BED_ID}"
FOOT_WARMING_URL = f"{BED_URL}/foundation/footwarming?_k={TEST_KEY}"
FOUNDATION_STATUS_URL = f"{BED_URL}/foundation/status?_k={TEST_KEY}"
OUTLET_URL = f"{BED_URL}/foundation/outlet?_k={TEST_KEY}"
SYSTEM_URL = f"{BED_URL}/foundation/system?_k={TEST_KEY}"
FORCE_IDLE_URL = f"{BED_URL}/pump/forceIdle?_k={TEST_KEY}"
SLEEP_NUMBER_URL = f"{BED_URL}/sleepNumber?_k={TEST_KEY}"


def _bodies(httpx_mock: HTTPXMock) -> list[Any]:
    return [
        json.loads(request.content) if request.content else None
        for request in httpx_mock.get_requests()
    ]


class TestControlValidation:
    """Tests for parameter validation of control operations."""

    @pytest.mark.parametrize(
        ("call", "match"),
        [
            (lambda c: c.control_foot_warmer(BED_ID, "middle", TEMP_LOW, 30), "side"),
            (lambda c: c.control_foot_warmer(BED_ID, "left", 40, 30), "temperature"),
            (lambda c: c.control_foot_warmer(BED_ID, "left", TEMP_LOW, 0), "duration"),
            (
                lambda c: c.control_foot_warmer(BED_ID, "left", TEMP_LOW, 361),
                "duration",
            ),
            (
                lambda c: c.control_foot_warmer(BED_ID, "left", TEMP_LOW, True),
                "duration",
            ),
            (
                lambda c: c.control_foot_warmer(BED_ID, "left", 31.0, 30),
                "temperature",
            ),
            (
                lambda c: c.control_foot_warmer(BED_ID, "left", TEMP_LOW, 30.0),
                "duration",
            ),
            (lambda c: c.control_bed_position(BED_ID, "left", 0), "position"),
            (lambda c: c.control_bed_position(BED_ID, "left", 7), "position"),
            (lambda c: c.control_bed_position(BED_ID, "up", 1), "side"),
            (lambda c: c.control_underbed_light(BED_ID, 50, 10), "light_level"),
            (lambda c: c.control_underbed_light(BED_ID, 30.0, 10), "light_level"),
            (lambda c: c.control_underbed_light(BED_ID, 30, -1), "duration"),
            (lambda c: c.control_underbed_light(BED_ID, 30, 181), "duration"),
            (lambda c: c.control_responsive_air_mode(BED_ID, True, "top"), "side"),
            (lambda c: c.control_sleep_number(BED_ID, "left", 0), "sleep_number"),
            (lambda c: c.control_sleep_number(BED_ID, "left", 101), "sleep_number"),
            (lambda c: c.control_sleep_number(BED_ID, "left", 50.0), "sleep_number"),
            (lambda c: c.control_sleep_number(BED_ID, "both", 50), "side"),
        ],
    )
    def test_invalid_parameter_sends_nothing(
        self,
        httpx_mock: HTTPXMock,
        logged_in_client: SleepIQ,
        call: Callable[[SleepIQ], Any],
        match: str,
    ) -> None:
        """Test that invalid parameters raise before any request."""
        with pytest.raises(SleepIQValidationError, match=match):
            call(logged_in_client)

        assert httpx_mock.get_requests() == []

    def test_validation_precedes_login_check(
        self, httpx_mock: HTTPXMock, client: SleepIQ
    ) -> None:
        """Test that a bad parameter is reported even without a session."""
        with pytest.raises(SleepIQValidationError):
            client.control_sleep_number(BED_ID, "left", 0)

        assert httpx_mock.get_requests() == []

    def test_empty_bed_id_sends_nothing(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that an empty bed id is rejected before any request."""
        with pytest.raises(SleepIQValidationError, match="bed_id"):
            logged_in_client.control_pump_force_idle("")

        assert httpx_mock.get_requests() == []


class TestFootWarmer:
    """Tests for foot warmer control."""

    def test_control_foot_warmer_returns_status(
        self,
        httpx_mock: HTTPXMock,
        logged_in_client: SleepIQ,
        sample_control_response: dict[str, Any],
        sample_foot_warming_response: dict[str, Any],
    ) -> None:
        """Test that the status fetched after the change is returned."""
        httpx_mock.add_response(
            url=FOOT_WARMING_URL,
            method="PUT",
            json=sample_control_response,
            match_json={"footWarmingTempLeft": TEMP_LOW, "footWarmingTimerLeft": 30},
            match_headers={"Cookie": TEST_COOKIE},
        )
        httpx_mock.add_response(
            url=FOOT_WARMING_URL, method="GET", json=sample_foot_warming_response
        )

        result = logged_in_client.control_foot_warmer(BED_ID, "LEFT", TEMP_LOW, 30)

        assert result.foot_warming_status_left == TEMP_LOW
        assert result.foot_warming_timer_left == 3

    def test_control_foot_warmer_right_side(
        self,
        httpx_mock: HTTPXMock,
        logged_in_client: SleepIQ,
        sample_foot_warming_response: dict[str, Any],
    ) -> None:
        """Test that the right side uses the Right-suffixed keys."""
        httpx_mock.add_response(
            url=FOOT_WARMING_URL,
            method="PUT",
            json={},
            match_json={"footWarmingTempRight": 72, "footWarmingTimerRight": 360},
        )
        httpx_mock.add_response(
            url=FOOT_WARMING_URL, method="GET", json=sample_foot_warming_response
        )

        logged_in_client.control_foot_warmer(BED_ID, "right", 72, 360)

    def test_control_foot_warmer_service_error_skips_status(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that a rejected change raises without reading the status."""
        httpx_mock.add_response(
            url=FOOT_WARMING_URL,
            method="PUT",
            json={"Error": {"Code": 404, "Message": "Foundation not found"}},
        )

        with pytest.raises(SleepIQServiceError, match="Foundation not found"):
            logged_in_client.control_foot_warmer(BED_ID, "left", TEMP_LOW, 30)

        assert len(httpx_mock.get_requests()) == 1

    def test_control_foot_warmer_off_turns_off_both_sides(
        self,
        httpx_mock: HTTPXMock,
        logged_in_client: SleepIQ,
        sample_foot_warming_response: dict[str, Any],
    ) -> None:
        """Test that both sides are switched off in order."""
        for _ in range(2):
            httpx_mock.add_response(url=FOOT_WARMING_URL, method="PUT", json={})
            httpx_mock.add_response(
                url=FOOT_WARMING_URL, method="GET", json=sample_foot_warming_response
            )

        logged_in_client.control_foot_warmer_off(BED_ID)

        puts = [body for body in _bodies(httpx_mock) if body is not None]
        assert puts == [
            {"footWarmingTempLeft": 0, "footWarmingTimerLeft": 120},
            {"footWarmingTempRight": 0, "footWarmingTimerRight": 120},
        ]


class TestBedPosition:
    """Tests for bed position control."""

    def test_control_bed_position_returns_foundation_status(
        self,
        httpx_mock: HTTPXMock,
        logged_in_client: SleepIQ,
        sample_foundation_status_response: dict[str, Any],
    ) -> None:
        """Test that the preset is sent and the new status returned."""
        httpx_mock.add_response(
            url=f"{BED_URL}/foundation/preset?_k={TEST_KEY}",
            method="PUT",
            json={},
            match_json={"preset": POSITION_ZERO_G, "side": "L", "speed": 0},
        )
        httpx_mock.add_response(
            url=FOUNDATION_STATUS_URL,
            method="GET",
            json=sample_foundation_status_response,
        )

        result = logged_in_client.control_bed_position(BED_ID, "left", POSITION_ZERO_G)

        assert result.current_position_preset_left == "Zero G"
        assert result.is_moving is True

    def test_control_bed_position_right_side(
        self,
        httpx_mock: HTTPXMock,
        logged_in_client: SleepIQ,
        sample_foundation_status_response: dict[str, Any],
    ) -> None:
        """Test that the right side is sent as R."""
        httpx_mock.add_response(
            url=f"{BED_URL}/foundation/preset?_k={TEST_KEY}",
            method="PUT",
            json={},
            match_json={"preset": 1, "side": "R", "speed": 0},
        )
        httpx_mock.add_response(
            url=FOUNDATION_STATUS_URL,
            method="GET",
            json=sample_foundation_status_response,
        )

        logged_in_client.control_bed_position(BED_ID, "Right", 1)


class TestUnderbedLight:
    """Tests for underbed light control."""

    def test_control_underbed_light_sets_level_then_outlet(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that the light level is set before the outlet is switched on."""
        httpx_mock.add_response(url=SYSTEM_URL, method="PUT", json={})
        httpx_mock.add_response(url=OUTLET_URL, method="PUT", json={})

        logged_in_client.control_underbed_light(BED_ID, LIGHT_LEVEL_MEDIUM, 15)

        requests = httpx_mock.get_requests()
        assert [request.url.path for request in requests] == [
            f"/rest/bed/{BED_ID}/foundation/system",
            f"/rest/bed/{BED_ID}/foundation/outlet",
        ]
        assert _bodies(httpx_mock) == [
            {"rightUnderbedLightPWM": 30, "leftUnderbedLightPWM": 30},
            {"outletId": 3, "setting": "1", "timer": 15},
        ]

    def test_control_underbed_light_stops_after_level_failure(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that the outlet is not switched when the level change fails."""
        httpx_mock.add_response(
            url=SYSTEM_URL,
            method="PUT",
            json={"Error": {"Code": 1, "Message": "Busy"}},
        )

        with pytest.raises(SleepIQServiceError):
            logged_in_client.control_underbed_light(BED_ID, LIGHT_LEVEL_HIGH, 0)

        assert len(httpx_mock.get_requests()) == 1

    def test_control_underbed_light_off(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that the outlet is switched off."""
        httpx_mock.add_response(
            url=OUTLET_URL,
            method="PUT",
            json={},
            match_json={"outletId": 3, "setting": "0", "timer": 0},
        )

        assert logged_in_client.control_underbed_light_off(BED_ID) is None

    @pytest.mark.parametrize("enabled", [True, False])
    def test_control_underbed_light_auto_mode(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ, enabled: bool
    ) -> None:
        """Test that auto mode is switched on or off."""
        httpx_mock.add_response(
            url=f"{BED_URL}/foundation/underbedLight?_k={TEST_KEY}",
            method="PUT",
            json={},
            match_json={"enableAuto": enabled},
        )

        logged_in_client.control_underbed_light_auto_mode(BED_ID, enabled)


class TestResponsiveAir:
    """Tests for responsive air control."""

    def test_control_responsive_air_mode_both_sides(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that both sides are set when no side is given."""
        httpx_mock.add_response(
            url=f"{BED_URL}/responsiveAir?_k={TEST_KEY}",
            method="PUT",
            json={},
            match_json={"leftSideEnabled": True, "rightSideEnabled": True},
        )

        logged_in_client.control_responsive_air_mode(BED_ID, True)

    def test_control_responsive_air_mode_one_side(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that only the given side is set."""
        httpx_mock.add_response(
            url=f"{BED_URL}/responsiveAir?_k={TEST_KEY}",
            method="PUT",
            json={},
            match_json={"rightSideEnabled": False},
        )

        logged_in_client.control_responsive_air_mode(BED_ID, False, "RIGHT")


class TestSleepNumber:
    """Tests for sleep number and pump control."""

    def test_control_sleep_number_idles_pump_first(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that the pump is forced idle before the sleep number is set."""
        httpx_mock.add_response(url=FORCE_IDLE_URL, method="PUT", json={})
        httpx_mock.add_response(
            url=SLEEP_NUMBER_URL,
            method="PUT",
            json={},
            match_json={"side": "L", "sleepNumber": 45},
        )

        logged_in_client.control_sleep_number(BED_ID, "left", 45)

        paths = [request.url.path for request in httpx_mock.get_requests()]
        assert paths == [
            f"/rest/bed/{BED_ID}/pump/forceIdle",
            f"/rest/bed/{BED_ID}/sleepNumber",
        ]

    def test_control_sleep_number_aborts_when_idle_fails(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that the sleep number is not sent if the pump idle fails."""
        httpx_mock.add_exception(
            httpx.ConnectError("Connection refused"),
            url=FORCE_IDLE_URL,
            method="PUT",
        )

        with pytest.raises(SleepIQTransportError):
            logged_in_client.control_sleep_number(BED_ID, "right", 60)

        assert len(httpx_mock.get_requests()) == 1

    def test_control_pump_force_idle_sends_empty_body(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that force idle sends no body."""
        httpx_mock.add_response(url=FORCE_IDLE_URL, method="PUT", json={})

        logged_in_client.control_pump_force_idle(BED_ID)

        assert httpx_mock.get_requests()[0].content == b""


class TestControlCookies:
    """Tests for cookie handling on control calls."""

    def test_control_replaces_cookies_when_set(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that cookies set by a control response replace the session's."""
        httpx_mock.add_response(
            url=FORCE_IDLE_URL,
            method="PUT",
            json={},
            headers={"Set-Cookie": "JSESSIONID=rotated; Path=/"},
        )

        logged_in_client.control_pump_force_idle(BED_ID)

        assert logged_in_client.primary.cookies.get("JSESSIONID") == "rotated"

    def test_control_keeps_cookies_when_none_set(
        self, httpx_mock: HTTPXMock, logged_in_client: SleepIQ
    ) -> None:
        """Test that a response without cookies keeps the session's."""
        httpx_mock.add_response(url=FORCE_IDLE_URL, method="PUT", json={})

        logged_in_client.control_pump_force_idle(BED_ID)

        assert logged_in_client.primary.cookies.get("JSESSIONID") == "session-cookie"
