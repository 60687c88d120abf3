"""
Messages service.

Easemob API docs: http://docs.easemob.com/doku.php?id=start:100serverintegration:50messages
"""

from .. import paths
from ..constants import HTTP_POST, TargetType
from ..models import DataResult, MessagePutOptions
from .base import BaseService


class MessagesService(BaseService):
    """Message sending methods of the Easemob API"""

    __slots__ = ()

    async def send(self, options: MessagePutOptions) -> DataResult:
        """Send a message, data maps every target to "success" or an error text."""
        return await self._call(HTTP_POST, paths.MESSAGES, DataResult, body=options)

    async def sendTextMessagesToUsers(self, sender: str, text: str, *userIds: str) -> DataResult:
        """Send a text message to users.

        Args:
            sender: Username shown as the author, empty for `admin`
            text: Message text
            *userIds: Recipient usernames
        """
        return await self.send(MessagePutOptions.text(TargetType.USERS, sender, text, list(userIds)))

    async def sendTextMessagesToGroups(self, sender: str, text: str, *groupIds: str) -> DataResult:
        """Send a text message to chat groups."""
        return await self.send(MessagePutOptions.text(TargetType.CHATGROUPS, sender, text, list(groupIds)))
