"""
Easemob Client Library

An async Python client for the Easemob IM REST API: user management,
chat group management and message sending.

Basic usage:
    >>> from lib.easemob import EasemobClient
    >>>
    >>> async with EasemobClient("client_id", "client_secret", "org", "app") as client:
    ...     await client.getToken()
    ...     await client.users.register("alice", "secret")
    ...     await client.messages.sendTextMessagesToUsers("admin", "Hello!", "alice")
"""

from .client import EasemobClient
from .constants import API_BASE_URL, MAX_RETRIES, RATE_LIMIT_DELAY, MessageKind, TargetType
from .exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    EasemobError,
    EncodingError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
)
from .models import (
    ApiResult,
    Credentials,
    DataResult,
    Envelope,
    Group,
    GroupListResult,
    ListOptions,
    MessagePutOptions,
    MessageType,
    PutOptions,
    TokenResult,
    User,
    UserListResult,
)

# Public API
__all__ = [
    # Main client
    "EasemobClient",
    # Constants
    "API_BASE_URL",
    "MAX_RETRIES",
    "RATE_LIMIT_DELAY",
    # Enums
    "TargetType",
    "MessageKind",
    # Exceptions
    "EasemobError",
    "ApiError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ServiceUnavailableError",
    "NetworkError",
    "EncodingError",
    "DecodeError",
    "ConfigurationError",
    # Models
    "Credentials",
    "ListOptions",
    "PutOptions",
    "MessageType",
    "MessagePutOptions",
    "Envelope",
    "User",
    "Group",
    "ApiResult",
    "TokenResult",
    "UserListResult",
    "GroupListResult",
    "DataResult",
]
