"""
Easemob REST API Constants

This module contains all constants and enums for the Easemob IM REST API.
"""

from enum import StrEnum
from typing import Final

VERSION: Final[str] = "0.1.0"

# API Configuration
API_BASE_URL: Final[str] = "https://a1.easemob.com/"
DEFAULT_TIMEOUT: Final[int] = 30
MAX_RETRIES: Final[int] = 3
RATE_LIMIT_DELAY: Final[float] = 0.5  # seconds to wait before retrying a 503

# HTTP Methods
HTTP_GET: Final[str] = "GET"
HTTP_POST: Final[str] = "POST"
HTTP_PUT: Final[str] = "PUT"
HTTP_DELETE: Final[str] = "DELETE"

# Retryable status codes
STATUS_REQUEST_TIMEOUT: Final[int] = 408
STATUS_SERVICE_UNAVAILABLE: Final[int] = 503

# Authentication
GRANT_TYPE: Final[str] = "client_credentials"
AUTH_HEADER: Final[str] = "Authorization"
AUTH_SCHEME: Final[str] = "Bearer"

# Content Types
CONTENT_TYPE_JSON: Final[str] = "application/json"


class TargetType(StrEnum):
    """Message target type"""

    USERS = "users"
    CHATGROUPS = "chatgroups"


class MessageKind(StrEnum):
    """Message body type"""

    TEXT = "txt"
    IMAGE = "img"
    AUDIO = "audio"
    VIDEO = "video"
    COMMAND = "cmd"
