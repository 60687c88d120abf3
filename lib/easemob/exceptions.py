"""
Easemob API Exceptions

This module contains custom exception classes for handling Easemob REST API errors.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

if TYPE_CHECKING:
    from .models import Envelope

logger = logging.getLogger(__name__)


class EasemobError(Exception):
    """Base exception class for all Easemob client errors, dood!

    All other exceptions in this module inherit from this base class.

    Attributes:
        message: Human-readable error message
        code: API error code (if available)
        response: Raw API response data (if available)
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response
        logger.debug(f"EasemobError: {message} (code: {code})")

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (code: {self.code})"
        return self.message


class ApiError(EasemobError):
    """Raised when the API answers with a status outside 200-299.

    Carries the request method and URL together with the status code so the
    string form points at the exact failing call:

        POST https://a1.easemob.com/org/app/users: 400 duplicate_unique_property_exists

    Attributes:
        method: HTTP method of the failed request
        url: Absolute URL of the failed request
        statusCode: HTTP status code returned by the API
        envelope: Decoded error body (may be empty)
        httpResponse: Raw httpx response
    """

    def __init__(
        self,
        method: str,
        url: str,
        statusCode: int,
        message: str = "",
        code: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None,
        envelope: Optional["Envelope"] = None,
        httpResponse: Optional[httpx.Response] = None,
    ) -> None:
        super().__init__(message, code, response)
        self.method = method
        self.url = url
        self.statusCode = statusCode
        self.envelope = envelope
        self.httpResponse = httpResponse

    def __str__(self) -> str:
        return f"{self.method} {self.url}: {self.statusCode} {self.message}"


class AuthenticationError(ApiError):
    """Raised on 401: the bearer token is missing, invalid or expired.

    The client never refreshes tokens on its own, call getToken() again.
    """


class NotFoundError(ApiError):
    """Raised on 404: user, group or application does not exist."""


class RateLimitError(ApiError):
    """Raised on 429, or on 503 once the retry budget is spent."""


class ServiceUnavailableError(ApiError):
    """Raised on 5xx responses other than 503."""


class NetworkError(EasemobError):
    """Raised when network-related errors occur.

    This includes connection failures, DNS resolution failures and
    transport timeouts. These are not retried.
    """

    def __init__(
        self,
        message: str = "Network error occurred.",
        code: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code, response)


class EncodingError(EasemobError):
    """Raised when a request body cannot be serialized to JSON."""


class DecodeError(EasemobError):
    """Raised when a successful response body is not valid JSON."""


class ConfigurationError(EasemobError):
    """Raised when there's a configuration error.

    This occurs when the client is misconfigured, such as missing
    org/app names or client credentials.
    """


def extractErrorMessage(responseData: Dict[str, Any]) -> str:
    """Pick the most descriptive error text from an error body."""
    for key in ("message", "error_description", "error"):
        value = responseData.get(key)
        if value:
            return str(value)
    return ""


def parseApiError(
    method: str,
    url: str,
    statusCode: int,
    responseData: Dict[str, Any],
    envelope: Optional["Envelope"] = None,
    httpResponse: Optional[httpx.Response] = None,
) -> ApiError:
    """Parse API error response and return appropriate exception.

    Args:
        method: HTTP method of the request
        url: Absolute request URL
        statusCode: HTTP status code
        responseData: Parsed JSON error body (empty dict if not JSON)
        envelope: Decoded envelope of the error body
        httpResponse: Raw httpx response

    Returns:
        ApiError (or subclass) based on status code
    """
    errorCode = responseData.get("error")
    kwargs: Dict[str, Any] = {
        "method": method,
        "url": url,
        "statusCode": statusCode,
        "message": extractErrorMessage(responseData),
        "code": errorCode,
        "response": responseData,
        "envelope": envelope,
        "httpResponse": httpResponse,
    }

    if statusCode == 401:
        return AuthenticationError(**kwargs)
    elif statusCode == 404:
        return NotFoundError(**kwargs)
    elif statusCode in (429, 503):
        return RateLimitError(**kwargs)
    elif 500 <= statusCode < 600:
        return ServiceUnavailableError(**kwargs)

    return ApiError(**kwargs)
