"""
Base class of Easemob resource services.
"""

from typing import TYPE_CHECKING, Any, Mapping, Optional, Type, TypeVar, Union

from ..models import ApiResult, ListOptions

if TYPE_CHECKING:
    from ..client import EasemobClient

ResultT = TypeVar("ResultT", bound=ApiResult)


class BaseService:
    """Holds the client reference and the build-then-send shortcut"""

    __slots__ = ("client",)

    def __init__(self, client: "EasemobClient") -> None:
        self.client = client

    async def _call(
        self,
        method: str,
        path: str,
        resultType: Type[ResultT],
        body: Any = None,
        params: Optional[Union[ListOptions, Mapping[str, Any]]] = None,
        auth: bool = True,
    ) -> ResultT:
        request = self.client.buildRequest(method, path, body, params, auth=auth)
        return await self.client.do(request, resultType)
