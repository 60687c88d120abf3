"""
Per-endpoint result types.

Each service method picks the result type matching its endpoint, the
executor decodes the common envelope and hands it to `fromEnvelope()`.
All results keep the envelope and the raw httpx response.
"""

from typing import Any, List, Optional

import httpx

from .envelope import Envelope
from .group import Group
from .user import User


class ApiResult:
    """Generic result for endpoints without a dedicated payload type"""

    __slots__ = ("envelope", "httpResponse")

    def __init__(self, envelope: Envelope, httpResponse: Optional[httpx.Response] = None):
        self.envelope: Envelope = envelope
        self.httpResponse: Optional[httpx.Response] = httpResponse

    @property
    def statusCode(self) -> Optional[int]:
        return self.httpResponse.status_code if self.httpResponse is not None else None

    @classmethod
    def fromEnvelope(cls, envelope: Envelope, httpResponse: Optional[httpx.Response] = None) -> "ApiResult":
        return cls(envelope, httpResponse)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status={self.statusCode}, envelope={self.envelope!r})"


class TokenResult(ApiResult):
    """Result of the `token` endpoint"""

    __slots__ = ("accessToken", "expiresIn", "application")

    def __init__(self, envelope: Envelope, httpResponse: Optional[httpx.Response] = None):
        super().__init__(envelope, httpResponse)
        self.accessToken: str = envelope.access_token or ""
        self.expiresIn: int = envelope.expires_in or 0
        """Token lifetime in seconds"""
        self.application: Optional[str] = envelope.application


class UserListResult(ApiResult):
    """Result of user endpoints returning `entities`"""

    __slots__ = ("users", "cursor", "count")

    def __init__(self, envelope: Envelope, httpResponse: Optional[httpx.Response] = None):
        super().__init__(envelope, httpResponse)
        self.users: List[User] = [User.from_dict(entity) for entity in envelope.entities if isinstance(entity, dict)]
        self.cursor: Optional[str] = envelope.cursor
        self.count: int = envelope.count if envelope.count is not None else len(self.users)

    @property
    def hasMore(self) -> bool:
        """True if the API returned a cursor for the next page."""
        return bool(self.cursor)


class GroupListResult(ApiResult):
    """Result of chatgroups endpoints returning group objects in `data`"""

    __slots__ = ("groups",)

    def __init__(self, envelope: Envelope, httpResponse: Optional[httpx.Response] = None):
        super().__init__(envelope, httpResponse)
        data = envelope.data
        if isinstance(data, dict):
            data = [data]
        self.groups: List[Group] = [Group.from_dict(item) for item in (data or []) if isinstance(item, dict)]


class DataResult(ApiResult):
    """Result of endpoints whose payload is an arbitrary `data` value"""

    __slots__ = ("data",)

    def __init__(self, envelope: Envelope, httpResponse: Optional[httpx.Response] = None):
        super().__init__(envelope, httpResponse)
        self.data: Any = envelope.data
