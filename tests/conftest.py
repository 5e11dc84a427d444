"""Pytest configuration and fixtures for SleepIQ tests."""

from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from sleepiq import SleepIQ

API_HOST = "prod-api.sleepiq.sleepnumber.com"
TEST_KEY = "test-session-key"
TEST_TOKEN = "test-insights-token"
TEST_COOKIE = "JSESSIONID=session-cookie"
BED_ID = "-9223372019941503354"
SLEEPER_ID = "-9223372019953519784"


@pytest.fixture
def session() -> Iterator[httpx.Client]:
    """Fixture providing an HTTP client that is closed after the test."""
    with httpx.Client() as client:
        yield client


@pytest.fixture
def client(session: httpx.Client) -> SleepIQ:
    """Fixture providing a client with no active session."""
    return SleepIQ(session)


@pytest.fixture
def logged_in_client(client: SleepIQ) -> SleepIQ:
    """Fixture providing a client with an active primary session."""
    client.primary.logged_in = True
    client.primary.key = TEST_KEY
    client.primary.cookies.set("JSESSIONID", "session-cookie", domain=API_HOST)
    return client


@pytest.fixture
def insights_client(client: SleepIQ) -> SleepIQ:
    """Fixture providing a client with an active Insights session."""
    client.insights.logged_in = True
    client.insights.token = TEST_TOKEN
    return client


@pytest.fixture
def sample_login_response() -> dict[str, Any]:
    """Fixture providing a sample login API response."""
    return {
        "userId": "-9223372019962358011",
        "key": TEST_KEY,
        "registrationState": 13,
        "edpLoginStatus": 200,
        "edpLoginMessage": "not used",
    }


@pytest.fixture
def sample_insights_login_response() -> dict[str, Any]:
    """Fixture providing a sample Insights login API response."""
    return {"token": TEST_TOKEN, "sleeperId": SLEEPER_ID}


@pytest.fixture
def sample_beds_response() -> dict[str, Any]:
    """Fixture providing a sample beds API response."""
    return {
        "beds": [
            {
                "registrationDate": "2016-12-28T03:05:41Z",
                "sleeperRightId": SLEEPER_ID,
                "base": "FlexFit",
                "returnRequestStatus": 0,
                "size": "KING",
                "name": "Bed",
                "serial": None,
                "isKidsBed": False,
                "dualSleep": True,
                "bedId": BED_ID,
                "status": 1,
                "sleeperLeftId": "-9223372019953519785",
                "version": "",
                "accountId": "-9223372019962358011",
                "timezone": "US/Central",
                "generation": "360",
                "model": "P6",
                "purchaseDate": "2016-12-27T00:00:00Z",
                "macAddress": "64DBA0000000",
                "sku": "QP6",
                "zipcode": "55401",
                "reference": "55555555555-1",
            },
        ],
    }


@pytest.fixture
def sample_foot_warming_response() -> dict[str, Any]:
    """Fixture providing a sample foot warming status API response."""
    return {
        "footWarmingStatusLeft": 31,
        "footWarmingStatusRight": 0,
        "footWarmingTimerLeft": 3,
        "footWarmingTimerRight": 0,
    }


@pytest.fixture
def sample_foundation_status_response() -> dict[str, Any]:
    """Fixture providing a sample foundation status API response."""
    return {
        "fsCurrentPositionPresetRight": "Flat",
        "fsNeedsHoming": False,
        "fsRightFootPosition": "00",
        "fsCurrentPositionPresetLeft": "Zero G",
        "fsType": "Split King",
        "fsIsMoving": True,
        "fsConfigured": True,
    }


@pytest.fixture
def sample_control_response() -> dict[str, Any]:
    """Fixture providing a sample control API response."""
    return {}
