"""
User models for the Easemob REST API.
"""

from typing import Any, Dict, Optional

from .base import BaseEasemobModel


class User(BaseEasemobModel):
    """
    IM user entity as returned in the `entities` list of user endpoints
    """

    __slots__ = (
        "uuid",
        "type",
        "created",
        "modified",
        "username",
        "activated",
        "nickname",
        "notifier_name",
        "notification_display_style",
        "notification_no_disturbing",
    )

    def __init__(
        self,
        *,
        uuid: str = "",
        type: str = "user",
        created: int = 0,
        modified: int = 0,
        username: str = "",
        activated: bool = False,
        nickname: Optional[str] = None,
        notifier_name: Optional[str] = None,
        notification_display_style: int = 0,
        notification_no_disturbing: bool = False,
        api_kwargs: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(api_kwargs=api_kwargs)
        self.uuid: str = uuid
        self.type: str = type
        self.created: int = created
        """Creation time (Unix time in milliseconds)"""
        self.modified: int = modified
        """Last modification time (Unix time in milliseconds)"""
        self.username: str = username
        self.activated: bool = activated
        self.nickname: Optional[str] = nickname
        self.notifier_name: Optional[str] = notifier_name
        """Push certificate name"""
        self.notification_display_style: int = notification_display_style
        """0 - show "you have a new message", 1 - show message text"""
        self.notification_no_disturbing: bool = notification_no_disturbing

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create User instance from API response dictionary.

        Args:
            data: Dictionary containing API response data

        Returns:
            User: New User instance
        """
        return cls(
            uuid=data.get("uuid", ""),
            type=data.get("type", "user"),
            created=data.get("created", 0),
            modified=data.get("modified", 0),
            username=data.get("username", ""),
            activated=data.get("activated", False),
            nickname=data.get("nickname", None),
            notifier_name=data.get("notifier_name", None),
            notification_display_style=data.get("notification_display_style", 0),
            notification_no_disturbing=data.get("notification_no_disturbing", False),
            api_kwargs=cls._getExtraKwargs(data),
        )
