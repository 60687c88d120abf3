"""
Request option models for the Easemob REST API.

Request bodies and query strings drop empty values the same way the API's
reference clients do: empty strings, zeros, empty lists and None are not sent.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..constants import GRANT_TYPE, MessageKind, TargetType


def omitEmpty(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop None, empty strings, zeros and empty containers."""
    return {k: v for k, v in data.items() if v not in (None, "", 0, [], {})}


@dataclass(frozen=True, slots=True)
class Credentials:
    """Client-credentials grant payload for the `token` endpoint"""

    client_id: str
    client_secret: str
    grant_type: str = GRANT_TYPE

    def toDict(self) -> Dict[str, Any]:
        return {
            "grant_type": self.grant_type,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }

    def __repr__(self) -> str:
        return f"Credentials(grant_type={self.grant_type!r}, client_id={self.client_id!r}, client_secret='***')"


@dataclass(slots=True)
class ListOptions:
    """Optional query parameters of list endpoints supporting pagination"""

    limit: int = 0
    """Page size"""
    cursor: str = ""
    """Cursor from the previous page"""
    ql: str = ""
    """Query language filter, e.g. `order by created desc`"""

    def toDict(self) -> Dict[str, Any]:
        return omitEmpty({"limit": self.limit, "cursor": self.cursor, "ql": self.ql})


@dataclass(slots=True)
class PutOptions:
    """Body of user and group create/update calls"""

    username: str = ""
    nickname: str = ""
    password: str = ""
    newpassword: str = ""
    usernames: List[str] = field(default_factory=list)
    groupname: str = ""
    description: str = ""
    maxusers: int = 0

    def toDict(self) -> Dict[str, Any]:
        return omitEmpty(
            {
                "username": self.username,
                "nickname": self.nickname,
                "password": self.password,
                "newpassword": self.newpassword,
                "usernames": list(self.usernames),
                "groupname": self.groupname,
                "description": self.description,
                "maxusers": self.maxusers,
            }
        )


@dataclass(slots=True)
class MessageType:
    """Message body, see `bodies` in chat history docs"""

    msg: str
    type: str = MessageKind.TEXT

    def toDict(self) -> Dict[str, Any]:
        return {"type": str(self.type), "msg": self.msg}


@dataclass(slots=True)
class MessagePutOptions:
    """Body of the `messages` endpoint.

    Attributes:
        target_type: `users` to message users, `chatgroups` to message groups
        target: Usernames or group ids. Always a list, even for one
            recipient. Keep it under 20 entries.
        msg: Message body
        sender: Sender username, the API shows `admin` if empty
        ext: App-defined extension attributes. Omitted when empty, the API
            rejects `"ext": null`.
    """

    target_type: str
    target: List[str]
    msg: MessageType
    sender: str = ""
    ext: Optional[Dict[str, str]] = None

    def toDict(self) -> Dict[str, Any]:
        ret: Dict[str, Any] = {
            "target_type": str(self.target_type),
            "target": list(self.target),
            "msg": self.msg.toDict(),
        }
        if self.sender:
            ret["from"] = self.sender
        if self.ext:
            ret["ext"] = dict(self.ext)
        return ret

    @classmethod
    def text(cls, targetType: TargetType, sender: str, text: str, targets: List[str]) -> "MessagePutOptions":
        return cls(
            target_type=targetType,
            target=list(targets),
            msg=MessageType(msg=text, type=MessageKind.TEXT),
            sender=sender,
        )
