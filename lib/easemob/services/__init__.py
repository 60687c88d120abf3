"""
Resource services of the Easemob client.
"""

from .base import BaseService
from .groups import GroupsService
from .messages import MessagesService
from .users import UsersService

__all__ = [
    "BaseService",
    "UsersService",
    "GroupsService",
    "MessagesService",
]
