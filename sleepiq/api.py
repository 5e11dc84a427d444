"""Low-level API helpers for the SleepIQ services.

This module provides the exception hierarchy, header builders, the
GET/PUT/POST transport helpers, and response validation and decoding
shared by every client operation.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from .const import (
    ACCEPT_INSIGHTS,
    ACCEPT_JSON,
    CONTENT_TYPE_JSON,
    INSIGHTS_SUBSCRIPTION_KEY,
    REQUEST_TIMEOUT,
    SUBSCRIPTION_KEY_HEADER,
)
from .models import SleepIQModel

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=SleepIQModel)

# HTTP status codes
HTTP_BAD_REQUEST = 400


class SleepIQApiClientError(Exception):
    """Base exception for SleepIQ client errors."""


class SleepIQNotLoggedInError(SleepIQApiClientError):
    """Exception raised when an operation needs a session that is not active."""


class SleepIQValidationError(SleepIQApiClientError):
    """Exception raised for a caller-supplied parameter outside its allowed values."""


class SleepIQTransportError(SleepIQApiClientError):
    """Exception raised when a request fails in transit or gets an HTTP error status."""


class SleepIQDecodeError(SleepIQApiClientError):
    """Exception raised when a response body does not have the expected shape."""


class SleepIQServiceError(SleepIQApiClientError):
    """Exception raised for an error reported inside a response body."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"Error #{code}: {message}")
        self.code = code
        self.message = message


class SleepIQApiAuthError(SleepIQServiceError):
    """Exception raised when a login is rejected by the service."""


def create_headers(cookies: httpx.Cookies | None = None) -> dict[str, str]:
    """Create HTTP headers for primary SleepIQ API requests.

    Args:
        cookies: Optional session cookies to send with the request.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    headers = {"Accept": ACCEPT_JSON}
    cookie_header = create_cookie_header(cookies)
    if cookie_header:
        headers["Cookie"] = cookie_header
    return headers


def create_insights_headers(
    subscription_key: str = INSIGHTS_SUBSCRIPTION_KEY,
) -> dict[str, str]:
    """Create HTTP headers for Insights API requests.

    Args:
        subscription_key: Subscription key required on every Insights call.

    Returns:
        Dictionary containing HTTP headers for Insights requests.

    """
    return {
        "Accept": ACCEPT_INSIGHTS,
        "Content-Type": CONTENT_TYPE_JSON,
        SUBSCRIPTION_KEY_HEADER: subscription_key,
    }


def create_cookie_header(cookies: httpx.Cookies | None) -> str:
    """Render session cookies as a ``Cookie`` header value."""
    if not cookies:
        return ""
    return "; ".join(f"{cookie.name}={cookie.value}" for cookie in cookies.jar)


def create_session_client(timeout: float = REQUEST_TIMEOUT) -> httpx.Client:
    """Create the HTTP client used to talk to the SleepIQ services.

    Args:
        timeout: Per-request timeout in seconds.

    Returns:
        Configured httpx Client.

    """
    return httpx.Client(timeout=timeout)


def is_http_error(status: int) -> bool:
    """Check if HTTP status code indicates an error.

    Args:
        status: HTTP status code to check.

    Returns:
        True if status code is 400 or higher, False otherwise.

    """
    return status >= HTTP_BAD_REQUEST


def is_service_error(data: dict[str, Any]) -> bool:
    """Check if a response body carries a service error.

    Args:
        data: Decoded response body.

    Returns:
        True if the embedded ``Error.Code`` is greater than 0, False otherwise.

    """
    error = data.get("Error") or {}
    if not isinstance(error, dict):
        return False
    code = error.get("Code", 0)
    return isinstance(code, int) and code > 0


def validate_response(response: httpx.Response) -> dict[str, Any]:
    """Validate HTTP response and return parsed JSON data.

    A service error embedded in the body takes precedence over the HTTP
    status, so the vendor's message reaches the caller.

    Args:
        response: HTTP response object to validate.

    Returns:
        Parsed JSON data from response.

    Raises:
        SleepIQServiceError: If the body reports an error.
        SleepIQDecodeError: If the body is not a JSON object.
        SleepIQTransportError: If the HTTP status indicates an error and the
            body carries no service error.

    """
    try:
        data = response.json()
    except ValueError as err:
        _validate_http_status(response)
        error_msg = f"Response is not valid JSON: {err}"
        raise SleepIQDecodeError(error_msg) from err

    if not isinstance(data, dict):
        _validate_http_status(response)
        error_msg = f"Expected a JSON object, got {type(data).__name__}"
        raise SleepIQDecodeError(error_msg)

    _validate_service_error(data)
    _validate_http_status(response)
    return data


def _validate_http_status(response: httpx.Response) -> None:
    if not is_http_error(response.status_code):
        return

    error_msg = f"Request failed: {response.status_code}"
    raise SleepIQTransportError(error_msg)


def _validate_service_error(data: dict[str, Any]) -> None:
    if not is_service_error(data):
        return

    error = data["Error"]
    raise SleepIQServiceError(error["Code"], str(error.get("Message", "")))


def decode_response(model: type[T], data: dict[str, Any]) -> T:
    """Decode validated response data into a response model.

    Args:
        model: Response model to build.
        data: Validated response data.

    Returns:
        Populated response model.

    Raises:
        SleepIQDecodeError: If the data does not match the model.

    """
    try:
        return model.model_validate(data)
    except ValidationError as err:
        error_msg = f"Could not read {model.__name__} response: {err}"
        raise SleepIQDecodeError(error_msg) from err


def http_get(
    session: httpx.Client,
    url: str,
    *,
    params: dict[str, Any],
    headers: dict[str, str],
) -> httpx.Response:
    """Send a GET request.

    Args:
        session: HTTP client session.
        url: Request URL without query string.
        params: Query parameters.
        headers: Request headers.

    Returns:
        The HTTP response.

    Raises:
        SleepIQTransportError: If the request fails.

    """
    try:
        return session.get(url, params=params, headers=headers)
    except httpx.HTTPError as err:
        error_msg = f"GET {url} failed: {err}"
        raise SleepIQTransportError(error_msg) from err


def http_put(
    session: httpx.Client,
    url: str,
    payload: dict[str, Any] | None,
    *,
    params: dict[str, Any],
    cookies: httpx.Cookies | None = None,
) -> tuple[httpx.Response, httpx.Cookies]:
    """Send a PUT request with a JSON body.

    Args:
        session: HTTP client session.
        url: Request URL without query string.
        payload: JSON body, or None for an empty body.
        params: Query parameters.
        cookies: Session cookies to send.

    Returns:
        Tuple of (response, cookies set by the response).

    Raises:
        SleepIQTransportError: If the request fails.

    """
    headers = create_headers(cookies)
    headers["Content-Type"] = CONTENT_TYPE_JSON
    try:
        if payload is None:
            response = session.put(url, params=params, headers=headers, content=b"")
        else:
            response = session.put(url, params=params, headers=headers, json=payload)
    except httpx.HTTPError as err:
        error_msg = f"PUT {url} failed: {err}"
        raise SleepIQTransportError(error_msg) from err
    return response, response.cookies


def http_post(
    session: httpx.Client,
    url: str,
    payload: dict[str, Any],
    *,
    headers: dict[str, str],
) -> httpx.Response:
    """Send a POST request with a JSON body.

    Args:
        session: HTTP client session.
        url: Request URL.
        payload: JSON body.
        headers: Request headers.

    Returns:
        The HTTP response.

    Raises:
        SleepIQTransportError: If the request fails.

    """
    try:
        return session.post(url, headers=headers, json=payload)
    except httpx.HTTPError as err:
        error_msg = f"POST {url} failed: {err}"
        raise SleepIQTransportError(error_msg) from err
