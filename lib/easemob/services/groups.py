"""
Groups service: chat group management endpoints.

Easemob API docs: http://www.easemob.com/docs/rest/groups/
"""

import logging
from typing import Optional

from .. import paths
from ..constants import HTTP_DELETE, HTTP_GET, HTTP_POST, HTTP_PUT
from ..models import DataResult, GroupListResult, PutOptions
from .base import BaseService

logger = logging.getLogger(__name__)


class GroupsService(BaseService):
    """Chat group related methods of the Easemob API"""

    __slots__ = ()

    async def listAll(self) -> GroupListResult:
        """List all groups of the app."""
        return await self._call(HTTP_GET, paths.GROUPS, GroupListResult)

    async def get(self, *groupIds: str) -> GroupListResult:
        """Fetch details of one or more groups.

        The ids are comma-joined with a leading comma:
        get("g1", "g2") requests `chatgroups/,g1,g2`.
        """
        path = f"{paths.GROUPS}/{paths.joinIds(groupIds)}"
        return await self._call(HTTP_GET, path, GroupListResult)

    async def create(self, options: Optional[PutOptions] = None) -> DataResult:
        """Create a group, data is {"groupid": ...}."""
        return await self._call(HTTP_POST, paths.GROUPS, DataResult, body=options)

    async def update(self, groupId: str, name: str = "", description: str = "", maxusers: int = 0) -> DataResult:
        """Edit group info. Empty name/description and non-positive maxusers are left unchanged."""
        put = PutOptions(groupname=name, description=description, maxusers=max(maxusers, 0))
        return await self._call(HTTP_PUT, paths.buildPath(paths.GROUP, groupId), DataResult, body=put)

    async def delete(self, groupId: str) -> DataResult:
        return await self._call(HTTP_DELETE, paths.buildPath(paths.GROUP, groupId), DataResult)

    async def members(self, groupId: str) -> DataResult:
        """Group members, data is a list of {"owner"|"member": username}."""
        return await self._call(HTTP_GET, paths.buildPath(paths.GROUP_USERS, groupId), DataResult)

    async def addMember(self, groupId: str, username: str) -> DataResult:
        return await self._call(HTTP_POST, paths.buildPath(paths.GROUP_USER, groupId, username), DataResult)

    async def deleteMember(self, groupId: str, username: str) -> DataResult:
        return await self._call(HTTP_DELETE, paths.buildPath(paths.GROUP_USER, groupId, username), DataResult)

    async def addMembers(self, *usernames: str, groupId: Optional[str] = None) -> DataResult:
        """Add several members to a group.

        Without `groupId` the group placeholder is left unfilled and the
        request goes to the literal path `chatgroups/%s/users`, which the API
        rejects. Pass `groupId` to address a real group.
        """
        if groupId is None:
            # Known defect: group id placeholder stays unsubstituted
            logger.warning("addMembers() called without groupId, request path has no group id")
            path = paths.GROUP_USERS
        else:
            path = paths.buildPath(paths.GROUP_USERS, groupId)

        put = PutOptions(usernames=list(usernames))
        return await self._call(HTTP_POST, path, DataResult, body=put)

    async def userGroups(self, username: str) -> GroupListResult:
        """Groups a user has joined.

        Easemob API docs: http://www.easemob.com/docs/rest/groups/#joinedchatgroups
        """
        return await self._call(HTTP_GET, paths.buildPath(paths.USER_JOINED_GROUPS, username), GroupListResult)
