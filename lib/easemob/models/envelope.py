"""
Common response envelope of the Easemob REST API.

Every endpoint answers with the same JSON object shape, only the set of
populated keys differs. The envelope keeps that shape as-is, typed results
in results.py pick the parts they need.
"""

from typing import Any, Dict, List, Optional

from .base import BaseEasemobModel


class Envelope(BaseEasemobModel):
    """
    Decoded JSON body of any Easemob API response
    """

    __slots__ = (
        # token endpoint
        "access_token",
        "expires_in",
        "application",
        # request echo
        "action",
        "params",
        "path",
        "uri",
        "timestamp",
        "duration",
        "organization",
        "applicationName",
        # payload & pagination
        "cursor",
        "count",
        "entities",
        "data",
        # errors
        "error",
        "exception",
        "error_description",
    )

    def __init__(
        self,
        *,
        access_token: Optional[str] = None,
        expires_in: Optional[int] = None,
        application: Optional[str] = None,
        action: Optional[str] = None,
        params: Optional[Dict[str, List[str]]] = None,
        path: Optional[str] = None,
        uri: Optional[str] = None,
        timestamp: Optional[int] = None,
        duration: Optional[int] = None,
        organization: Optional[str] = None,
        applicationName: Optional[str] = None,
        cursor: Optional[str] = None,
        count: Optional[int] = None,
        entities: Optional[List[Dict[str, Any]]] = None,
        data: Any = None,
        error: Optional[str] = None,
        exception: Optional[str] = None,
        error_description: Optional[str] = None,
        api_kwargs: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(api_kwargs=api_kwargs)
        self.access_token: Optional[str] = access_token
        self.expires_in: Optional[int] = expires_in
        """Token lifetime in seconds"""
        self.application: Optional[str] = application
        """Application UUID"""
        self.action: Optional[str] = action
        self.params: Optional[Dict[str, List[str]]] = params
        """Echo of query parameters, every value is a list"""
        self.path: Optional[str] = path
        self.uri: Optional[str] = uri
        self.timestamp: Optional[int] = timestamp
        self.duration: Optional[int] = duration
        self.organization: Optional[str] = organization
        self.applicationName: Optional[str] = applicationName
        self.cursor: Optional[str] = cursor
        """Pagination cursor, pass it to the next list call"""
        self.count: Optional[int] = count
        self.entities: List[Dict[str, Any]] = entities or []
        self.data: Any = data
        self.error: Optional[str] = error
        self.exception: Optional[str] = exception
        self.error_description: Optional[str] = error_description

    @property
    def isError(self) -> bool:
        """True if the body carries error fields."""
        return bool(self.error or self.exception)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Envelope":
        """Create Envelope instance from a decoded JSON body.

        Args:
            data: Decoded JSON object (non-object bodies are kept in `data`)

        Returns:
            Envelope: New Envelope instance
        """
        if not isinstance(data, dict):
            return cls(data=data)

        return cls(
            access_token=data.get("access_token", None),
            expires_in=data.get("expires_in", None),
            application=data.get("application", None),
            action=data.get("action", None),
            params=data.get("params", None),
            path=data.get("path", None),
            uri=data.get("uri", None),
            timestamp=data.get("timestamp", None),
            duration=data.get("duration", None),
            organization=data.get("organization", None),
            applicationName=data.get("applicationName", None),
            cursor=data.get("cursor", None),
            count=data.get("count", None),
            entities=data.get("entities", None),
            data=data.get("data", None),
            error=data.get("error", None),
            exception=data.get("exception", None),
            error_description=data.get("error_description", None),
            api_kwargs=cls._getExtraKwargs(data),
        )
