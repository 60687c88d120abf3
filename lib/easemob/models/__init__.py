"""
Models for the Easemob REST API.
"""

from .base import BaseEasemobModel
from .envelope import Envelope
from .group import Group
from .options import Credentials, ListOptions, MessagePutOptions, MessageType, PutOptions, omitEmpty
from .results import ApiResult, DataResult, GroupListResult, TokenResult, UserListResult
from .user import User

__all__ = [
    "BaseEasemobModel",
    "Envelope",
    "User",
    "Group",
    # Requests
    "Credentials",
    "ListOptions",
    "PutOptions",
    "MessageType",
    "MessagePutOptions",
    "omitEmpty",
    # Results
    "ApiResult",
    "TokenResult",
    "UserListResult",
    "GroupListResult",
    "DataResult",
]
