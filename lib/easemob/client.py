"""
Easemob Async Client

This module provides the main EasemobClient class for interacting with
the Easemob IM REST API using httpx: request building, bearer-token
authentication, JSON encoding/decoding and retries on transient failures.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import urljoin

import httpx

from . import paths
from .constants import (
    API_BASE_URL,
    AUTH_HEADER,
    AUTH_SCHEME,
    CONTENT_TYPE_JSON,
    DEFAULT_TIMEOUT,
    HTTP_POST,
    MAX_RETRIES,
    RATE_LIMIT_DELAY,
    STATUS_REQUEST_TIMEOUT,
    STATUS_SERVICE_UNAVAILABLE,
    VERSION,
)
from .exceptions import ConfigurationError, DecodeError, EncodingError, NetworkError, parseApiError
from .models import ApiResult, BaseEasemobModel, Credentials, Envelope, ListOptions, TokenResult, omitEmpty
from .services import GroupsService, MessagesService, UsersService

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=ApiResult)

RETRYABLE_STATUSES = (STATUS_REQUEST_TIMEOUT, STATUS_SERVICE_UNAVAILABLE)


def maskToken(token: str) -> str:
    """Shorten a token for log output."""
    if not token:
        return "<empty>"
    if len(token) <= 8:
        return "***"
    return f"{token[:6]}...{token[-2:]}"


def _toJsonable(value: Any) -> Any:
    if hasattr(value, "toDict"):
        return value.toDict()
    if isinstance(value, BaseEasemobModel):
        return value.to_dict(recursive=True)
    if isinstance(value, Mapping):
        return {k: _toJsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_toJsonable(v) for v in value]
    return value


class EasemobClient:
    """Async client for the Easemob IM REST API, dood!

    Every request goes to `{baseUrl}{orgName}/{appName}/{path}`. Authenticated
    requests carry `Authorization: Bearer <token>` with whatever token is
    currently stored, call getToken() to obtain or renew it.

    Example:
        >>> from lib.easemob import EasemobClient
        >>>
        >>> async with EasemobClient("client_id", "client_secret", "org", "app") as client:
        ...     await client.getToken()
        ...     result = await client.users.get("alice")
        ...     print(result.users[0].nickname)

    Attributes:
        baseUrl: Base URL for the API, always ends with "/"
        orgName: Easemob organization name
        appName: Easemob application name
        credentials: Client-credentials grant payload
        token: Current bearer token
        expires: Lifetime of the current token in seconds, as returned by the API
        timeout: Request timeout in seconds
        maxRetries: How many times a 408/503 answer is retried within one call
        rateLimitDelay: Pause before retrying a 503, in seconds
        users: Users endpoints
        groups: Chat groups endpoints
        messages: Messages endpoints
    """

    __slots__ = (
        "baseUrl",
        "orgName",
        "appName",
        "credentials",
        "token",
        "expires",
        "timeout",
        "maxRetries",
        "rateLimitDelay",
        "users",
        "groups",
        "messages",
        "_httpClient",
    )

    def __init__(
        self,
        clientId: str,
        clientSecret: str,
        orgName: str,
        appName: str,
        token: str = "",
        baseUrl: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        maxRetries: int = MAX_RETRIES,
        rateLimitDelay: float = RATE_LIMIT_DELAY,
    ) -> None:
        """Initialize the Easemob client.

        Args:
            clientId: Application client id
            clientSecret: Application client secret
            orgName: Organization name (first path segment)
            appName: Application name (second path segment)
            token: Previously issued bearer token (default: none, call getToken())
            baseUrl: Base URL for the API (default: https://a1.easemob.com/)
            timeout: Request timeout in seconds (default: 30)
            maxRetries: Retries of 408/503 answers per call (default: 3)
            rateLimitDelay: Pause before retrying a 503, seconds (default: 0.5)
        """
        self.baseUrl = baseUrl.rstrip("/") + "/"
        self.orgName = orgName
        self.appName = appName
        self.credentials = Credentials(client_id=clientId, client_secret=clientSecret)
        self.token = token
        self.expires = 0
        self.timeout = timeout
        self.maxRetries = maxRetries
        self.rateLimitDelay = rateLimitDelay
        self._httpClient: Optional[httpx.AsyncClient] = None

        self.users = UsersService(self)
        self.groups = GroupsService(self)
        self.messages = MessagesService(self)

        logger.debug(f"EasemobClient initialized for {self.baseUrl}{self.orgName}/{self.appName}")

    @classmethod
    def fromConfig(cls, config: Mapping[str, Any]) -> "EasemobClient":
        """Create client from the `[easemob]` configuration section.

        Args:
            config: Section dict with org-name, app-name, client-id, client-secret
                and optional base-url, timeout, max-retries, rate-limit-delay, token

        Raises:
            ConfigurationError: If a required key is missing or empty
        """
        missing = [key for key in ("org-name", "app-name", "client-id", "client-secret") if not config.get(key)]
        if missing:
            raise ConfigurationError(f"Missing easemob configuration: {', '.join(missing)}")

        return cls(
            clientId=config["client-id"],
            clientSecret=config["client-secret"],
            orgName=config["org-name"],
            appName=config["app-name"],
            token=config.get("token", ""),
            baseUrl=config.get("base-url", API_BASE_URL),
            timeout=config.get("timeout", DEFAULT_TIMEOUT),
            maxRetries=int(config.get("max-retries", MAX_RETRIES)),
            rateLimitDelay=float(config.get("rate-limit-delay", RATE_LIMIT_DELAY)),
        )

    async def __aenter__(self) -> "EasemobClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _getHttpClient(self) -> httpx.AsyncClient:
        """Get or create the HTTP client.

        Returns:
            Configured httpx.AsyncClient instance
        """
        if self._httpClient is None or self._httpClient.is_closed:
            self._httpClient = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "User-Agent": f"easemob-client/{VERSION}",
                    "Accept": CONTENT_TYPE_JSON,
                },
            )
            logger.debug("Created new HTTP client")

        return self._httpClient

    async def aclose(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._httpClient and not self._httpClient.is_closed:
            await self._httpClient.aclose()
            logger.debug("HTTP client closed")

    def buildUrl(self, path: str) -> str:
        """Build absolute URL for an endpoint path.

        Args:
            path: Endpoint path relative to org/app (e.g., "users/alice")

        Returns:
            `{baseUrl}{org}/{app}/{path}`
        """
        relative = f"{paths.escapeSegment(self.orgName)}/{paths.escapeSegment(self.appName)}/{path.lstrip('/')}"
        return urljoin(self.baseUrl, relative)

    @staticmethod
    def _encodeBody(body: Any) -> bytes:
        try:
            return json.dumps(_toJsonable(body), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.error(f"Unable to encode request body: {type(e).__name__}#{e}")
            raise EncodingError(f"Unable to encode request body: {type(e).__name__}#{e}") from e

    @staticmethod
    def _queryParams(params: Union[ListOptions, Mapping[str, Any], None]) -> Optional[Dict[str, Any]]:
        if params is None:
            return None
        if isinstance(params, ListOptions):
            ret = params.toDict()
        else:
            ret = omitEmpty(params)
        return ret or None

    def buildRequest(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Union[ListOptions, Mapping[str, Any], None] = None,
        auth: bool = True,
    ) -> httpx.Request:
        """Build an API request.

        Args:
            method: HTTP method
            path: Endpoint path relative to org/app
            body: Request body: options object, model, list or plain JSON-able value.
                None means no body.
            params: Query parameters, empty values are dropped
            auth: Whether to add the bearer token header

        Returns:
            httpx.Request ready to be passed to do()

        Raises:
            EncodingError: If the body cannot be serialized
        """
        url = self.buildUrl(path)
        headers = {"Content-Type": CONTENT_TYPE_JSON}
        if auth:
            headers[AUTH_HEADER] = f"{AUTH_SCHEME} {self.token}"

        content = self._encodeBody(body) if body is not None else None

        return self._getHttpClient().build_request(
            method,
            url,
            params=self._queryParams(params),
            content=content,
            headers=headers,
        )

    def newRequest(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Union[ListOptions, Mapping[str, Any], None] = None,
    ) -> httpx.Request:
        """Build an authenticated API request."""
        return self.buildRequest(method, path, body, params, auth=True)

    def newRequestWithoutAuth(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Union[ListOptions, Mapping[str, Any], None] = None,
    ) -> httpx.Request:
        """Build an API request without the Authorization header."""
        return self.buildRequest(method, path, body, params, auth=False)

    async def do(self, request: httpx.Request, resultType: Type[ResultT] = ApiResult) -> ResultT:  # type: ignore[assignment]
        """Send an API request and decode the response.

        408 (request timeout) and 503 (rate limited) answers are resent as-is
        up to maxRetries times; a 503 retry waits rateLimitDelay seconds first.
        The retry budget belongs to this call only.

        Args:
            request: Request from buildRequest()
            resultType: Result class to build from the decoded envelope

        Returns:
            Result instance of resultType

        Raises:
            ApiError: Status outside 200-299 (after retries for 408/503)
            NetworkError: Transport failure
            DecodeError: Successful response with invalid JSON body
        """
        client = self._getHttpClient()
        method = request.method
        url = str(request.url)
        logger.debug(f"Making {method} request to {url}")

        retries = 0
        while True:
            try:
                response = await client.send(request)
            except httpx.RequestError as e:
                logger.error(f"Network error on {method} {url}: {type(e).__name__}#{e}")
                raise NetworkError(f"Network error: {type(e).__name__}#{e}") from e

            statusCode = response.status_code
            if statusCode not in RETRYABLE_STATUSES or retries >= self.maxRetries:
                break

            if statusCode == STATUS_SERVICE_UNAVAILABLE:
                await asyncio.sleep(self.rateLimitDelay)
            retries += 1
            logger.warning(f"Got {statusCode} on {method} {url}, retrying ({retries}/{self.maxRetries})")

        body = response.content

        if not 200 <= statusCode <= 299:
            errorData = self._decodeErrorBody(response)
            error = parseApiError(
                method,
                url,
                statusCode,
                errorData,
                envelope=Envelope.from_dict(errorData),
                httpResponse=response,
            )
            logger.warning(f"API error: {error}")
            raise error

        try:
            data = json.loads(body) if body.strip() else {}
        except ValueError as e:
            logger.error(f"Invalid JSON in {statusCode} response to {method} {url}: {e}")
            raise DecodeError(f"Invalid JSON response: {e}") from e

        logger.debug(f"Request successful: {method} {url} ({statusCode})")
        return resultType.fromEnvelope(Envelope.from_dict(data), response)  # type: ignore[return-value]

    @staticmethod
    def _decodeErrorBody(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            return data
        return {"message": response.text} if response.text else {}

    async def getToken(self) -> TokenResult:
        """Get an access token with the client-credentials grant.

        Posts the credentials to `token` without the Authorization header and
        stores the returned token and its lifetime on the client.

        Returns:
            TokenResult with accessToken and expiresIn

        Raises:
            ApiError: If the API rejects the credentials
        """
        request = self.newRequestWithoutAuth(HTTP_POST, paths.TOKEN, self.credentials)
        result = await self.do(request, TokenResult)

        self.token = result.accessToken
        self.expires = result.expiresIn

        logger.debug(f"token: {maskToken(self.token)}, expires: {self.expires}")
        return result
