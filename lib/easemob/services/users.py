"""
Users service: registration, profile, contacts and blocklist endpoints.

Easemob API docs: http://www.easemob.com/docs/rest/userapi/
"""

import logging
from typing import Dict, List, Optional

from .. import paths
from ..constants import HTTP_DELETE, HTTP_GET, HTTP_POST, HTTP_PUT
from ..models import ApiResult, DataResult, ListOptions, PutOptions, UserListResult
from .base import BaseService

logger = logging.getLogger(__name__)


class UsersService(BaseService):
    """User related methods of the Easemob API"""

    __slots__ = ()

    async def registerWithoutAuth(self, username: str, password: str, nickname: str = "") -> UserListResult:
        """Register a user in an app with open registration (no Authorization header)."""
        put = PutOptions(username=username, password=password, nickname=nickname)
        return await self._call(HTTP_POST, paths.USERS, UserListResult, body=put, auth=False)

    async def register(self, username: str, password: str) -> UserListResult:
        """Register a single user."""
        put = PutOptions(username=username, password=password)
        return await self._call(HTTP_POST, paths.USERS, UserListResult, body=put)

    async def registers(self, usernames: List[str], password: str) -> UserListResult:
        """Register several users sharing one password."""
        puts = [PutOptions(username=username, password=password) for username in usernames]
        return await self._call(HTTP_POST, paths.USERS, UserListResult, body=puts)

    async def registerGroup(self, users: Dict[str, str]) -> UserListResult:
        """Register several users at once.

        Args:
            users: username -> password
        """
        puts = [PutOptions(username=username, password=password) for username, password in users.items()]
        logger.debug(f"Registering {len(puts)} users")
        return await self._call(HTTP_POST, paths.USERS, UserListResult, body=puts)

    async def userStatus(self, username: str) -> DataResult:
        """Online status of a user, data is {username: "online"|"offline"}."""
        # Sent with an empty JSON object body
        return await self._call(HTTP_GET, paths.buildPath(paths.USER_STATUS, username), DataResult, body=PutOptions())

    async def disconnect(self, username: str) -> DataResult:
        """Force a user offline."""
        return await self._call(
            HTTP_GET, paths.buildPath(paths.USER_DISCONNECT, username), DataResult, body=PutOptions()
        )

    async def get(self, username: str) -> UserListResult:
        """Fetch a user.

        Easemob API docs: http://www.easemob.com/docs/rest/userapi/#im-2
        """
        return await self._call(HTTP_GET, paths.buildPath(paths.USER, username), UserListResult)

    async def listAll(self, options: Optional[ListOptions] = None) -> UserListResult:
        """List users page by page.

        Pass `result.cursor` back in `options.cursor` to get the next page.

        Easemob API docs: http://www.easemob.com/docs/rest/userapi/#im-3
        """
        return await self._call(HTTP_GET, paths.USERS, UserListResult, params=options)

    async def delete(self, username: str) -> UserListResult:
        """Delete a user."""
        return await self._call(HTTP_DELETE, paths.buildPath(paths.USER, username), UserListResult)

    async def resetPassword(self, username: str, password: str) -> ApiResult:
        """Set a new password for a user.

        Easemob API docs: http://www.easemob.com/docs/rest/userapi/#resetpassword
        """
        put = PutOptions(newpassword=password)
        return await self._call(HTTP_PUT, paths.buildPath(paths.USER_PASSWORD, username), ApiResult, body=put)

    async def editNickname(self, username: str, nickname: str) -> UserListResult:
        """Change the push nickname of a user."""
        put = PutOptions(nickname=nickname)
        return await self._call(HTTP_PUT, paths.buildPath(paths.USER, username), UserListResult, body=put)

    async def addFriend(self, owner: str, friend: str) -> UserListResult:
        """Add `friend` to the contacts of `owner`."""
        return await self._call(HTTP_POST, paths.buildPath(paths.USER_CONTACT, owner, friend), UserListResult)

    async def deleteFriend(self, owner: str, friend: str) -> UserListResult:
        return await self._call(HTTP_DELETE, paths.buildPath(paths.USER_CONTACT, owner, friend), UserListResult)

    async def getFriends(self, owner: str) -> DataResult:
        """Contacts of `owner`, data is a list of usernames."""
        return await self._call(HTTP_GET, paths.buildPath(paths.USER_CONTACTS, owner), DataResult)

    async def getBlocks(self, owner: str) -> DataResult:
        """Blocklist of `owner`, data is a list of usernames."""
        return await self._call(HTTP_GET, paths.buildPath(paths.USER_BLOCKS, owner), DataResult)

    async def addBlocks(self, owner: str, usernames: List[str]) -> DataResult:
        put = PutOptions(usernames=usernames)
        return await self._call(HTTP_POST, paths.buildPath(paths.USER_BLOCKS, owner), DataResult, body=put)

    async def deleteBlock(self, owner: str, blocked: str) -> UserListResult:
        return await self._call(HTTP_DELETE, paths.buildPath(paths.USER_BLOCK, owner, blocked), UserListResult)

    async def status(self, username: str) -> DataResult:
        """Online status of a user, without a request body."""
        return await self._call(HTTP_GET, paths.buildPath(paths.USER_STATUS, username), DataResult)

    async def offlineMsgCount(self, username: str) -> DataResult:
        """Number of undelivered messages, data is {username: count}."""
        return await self._call(HTTP_GET, paths.buildPath(paths.USER_OFFLINE_MSG_COUNT, username), DataResult)
