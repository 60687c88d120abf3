"""
Endpoint path templates and path building helpers.

Paths are relative to `{org}/{app}/`. Identifiers are percent-escaped before
substitution so user-controlled names cannot add path segments or queries.
"""

from typing import Any, Iterable
from urllib.parse import quote

TOKEN = "token"
MESSAGES = "messages"

USERS = "users"
USER = "users/%s"
USER_STATUS = "users/%s/status"
USER_DISCONNECT = "users/%s/disconnect"
USER_PASSWORD = "users/%s/password"
USER_CONTACTS = "users/%s/contacts/users"
USER_CONTACT = "users/%s/contacts/users/%s"
USER_BLOCKS = "users/%s/blocks/users"
USER_BLOCK = "users/%s/blocks/users/%s"
USER_OFFLINE_MSG_COUNT = "users/%s/offline_msg_count"
USER_JOINED_GROUPS = "users/%s/joined_chatgroups"

GROUPS = "chatgroups"
GROUP = "chatgroups/%s"
GROUP_USERS = "chatgroups/%s/users"
GROUP_USER = "chatgroups/%s/users/%s"


def escapeSegment(segment: Any) -> str:
    """Percent-escape a single identifier, `/` included."""
    return quote(str(segment), safe="")


def buildPath(template: str, *segments: Any) -> str:
    """Substitute escaped identifiers into a path template.

    Args:
        template: One of the templates above
        *segments: Identifiers, one per `%s` placeholder

    Returns:
        Relative endpoint path
    """
    return template % tuple(escapeSegment(s) for s in segments)


def joinIds(ids: Iterable[Any]) -> str:
    """Join identifiers for multi-id lookups.

    Every id is prefixed with a comma, so the result starts with one:
    ["g1", "g2"] -> ",g1,g2"
    """
    return "".join(f",{escapeSegment(i)}" for i in ids)
