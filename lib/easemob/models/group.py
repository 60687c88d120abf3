"""
Chat group models for the Easemob REST API.
"""

from typing import Any, Dict, List, Optional

from .base import BaseEasemobModel


class Group(BaseEasemobModel):
    """
    Chat group as returned in the `data` list of chatgroups endpoints.

    The list endpoint returns a short form (groupid, groupname, owner,
    affiliations count), details endpoint returns the full one with
    `affiliations`.
    """

    __slots__ = (
        "groupid",
        "groupname",
        "description",
        "public",
        "membersonly",
        "allowinvites",
        "maxusers",
        "owner",
        "created",
        "affiliations_count",
        "affiliations",
    )

    def __init__(
        self,
        *,
        groupid: str = "",
        groupname: str = "",
        description: Optional[str] = None,
        public: bool = False,
        membersonly: bool = False,
        allowinvites: bool = False,
        maxusers: int = 0,
        owner: Optional[str] = None,
        created: int = 0,
        affiliations_count: int = 0,
        affiliations: Optional[List[Dict[str, str]]] = None,
        api_kwargs: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(api_kwargs=api_kwargs)
        self.groupid: str = groupid
        self.groupname: str = groupname
        self.description: Optional[str] = description
        self.public: bool = public
        self.membersonly: bool = membersonly
        """Joining requires owner approval"""
        self.allowinvites: bool = allowinvites
        """Members may invite other users"""
        self.maxusers: int = maxusers
        self.owner: Optional[str] = owner
        self.created: int = created
        self.affiliations_count: int = affiliations_count
        self.affiliations: List[Dict[str, str]] = affiliations or []
        """List of {"owner": name} / {"member": name} entries"""

    @property
    def members(self) -> List[str]:
        """Usernames of all affiliations, owner included."""
        ret: List[str] = []
        for affiliation in self.affiliations:
            ret.extend(affiliation.values())
        return ret

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        """Create Group instance from API response dictionary."""
        # List endpoint returns affiliations as a count, details endpoint as a list
        affiliationsData = data.get("affiliations", None)
        affiliations: Optional[List[Dict[str, str]]] = None
        affiliationsCount = data.get("affiliations_count", 0)
        if isinstance(affiliationsData, list):
            affiliations = affiliationsData
            affiliationsCount = affiliationsCount or len(affiliationsData)
        elif isinstance(affiliationsData, int):
            affiliationsCount = affiliationsData

        return cls(
            groupid=data.get("groupid", data.get("id", "")),
            groupname=data.get("groupname", data.get("name", "")),
            description=data.get("description", None),
            public=data.get("public", False),
            membersonly=data.get("membersonly", False),
            allowinvites=data.get("allowinvites", False),
            maxusers=data.get("maxusers", 0),
            owner=data.get("owner", None),
            created=data.get("created", 0),
            affiliations_count=affiliationsCount,
            affiliations=affiliations,
            api_kwargs=cls._getExtraKwargs(data),
        )
