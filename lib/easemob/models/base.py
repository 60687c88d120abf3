"""
Base class for models decoded from Easemob responses.

Models declare their fields in `__slots__`. Keys the model doesn't know
about are kept in `api_kwargs`, so nothing the API returns gets lost.
"""

from typing import Any, Dict, Optional, Tuple


def _toPlain(value: Any) -> Any:
    if isinstance(value, BaseEasemobModel):
        return value.to_dict(recursive=True)
    if isinstance(value, list):
        return [_toPlain(v) for v in value]
    if isinstance(value, dict):
        return {k: _toPlain(v) for k, v in value.items()}
    return value


class BaseEasemobModel:
    """
    Base Class for all models decoded from Easemob API responses
    """

    __slots__ = ("api_kwargs",)

    api_kwargs: Dict[str, Any]
    """Raw API response data not mapped to attributes"""

    def __init__(self, *, api_kwargs: Optional[Dict[str, Any]] = None):
        self.api_kwargs = api_kwargs if api_kwargs is not None else {}

    @classmethod
    def _fieldNames(cls) -> Tuple[str, ...]:
        """Slot names across the class hierarchy, base class first."""
        names = []
        for klass in reversed(cls.__mro__[:-1]):
            names.extend(name for name in klass.__dict__.get("__slots__", ()) if not name.startswith("_"))
        return tuple(names)

    def to_dict(self, recursive: bool = False, skipNone: bool = False) -> Dict[str, Any]:
        """Convert model to dict keyed by field name.

        Args:
            recursive: Convert nested models (also inside lists and dicts) to dicts
            skipNone: Leave out fields whose value is None

        Empty `api_kwargs` is always left out.
        """
        data: Dict[str, Any] = {}
        for name in self._fieldNames():
            value = getattr(self, name, None)
            if name == "api_kwargs" and not value:
                continue
            if value is None and skipNone:
                continue
            data[name] = _toPlain(value) if recursive else value
        return data

    def __repr__(self) -> str:
        fields = self.to_dict(skipNone=True)
        fields.pop("api_kwargs", None)
        contents = ", ".join(f"{k}={fields[k]!r}" for k in sorted(fields))
        return f"{self.__class__.__name__}({contents})"

    @classmethod
    def _getExtraKwargs(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Keys of `data` with no matching field, kept as `api_kwargs`."""
        known = set(cls._fieldNames())
        return {k: v for k, v in data.items() if k not in known}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseEasemobModel":
        return cls(api_kwargs=data)
