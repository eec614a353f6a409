"""
Report bodies: a typed handle for registered report types, and a bare
fallback that keeps the raw JSON for everything else.
"""

import copy
import json
from typing import Any, Optional, TypeVar, Union

from reporting_api.errors import BodySchemaMismatchError
from reporting_api.strategy import BodyStrategy

T = TypeVar("T")


class BodyHandle:
    """Type-erased decoded body.

    The concrete value is only reachable through downcast(), which succeeds
    for exactly the type registered under this handle's tag.
    """

    __slots__ = ("_tag", "_value", "_strategy")

    def __init__(self, tag: str, value: Any, strategy: BodyStrategy):
        if not isinstance(value, strategy.body_type):
            raise TypeError(
                f"{type(value).__name__} is not {strategy.body_type.__name__} (registered for {tag!r})"
            )
        self._tag = tag
        self._value = value
        self._strategy = strategy

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def body_type(self) -> type:
        return self._strategy.body_type

    @property
    def recognized(self) -> bool:
        return True

    def downcast(self, cls: type[T]) -> Optional[T]:
        if cls is self._strategy.body_type:
            return self._value
        return None

    def equals(self, other: Any) -> bool:
        if not isinstance(other, BodyHandle):
            return False
        if self._tag != other._tag or self.body_type is not other.body_type:
            return False
        return self._strategy.equals(self._value, other._value)

    def encode(self) -> dict[str, Any]:
        return self._strategy.encode(self._value)

    def debug_repr(self) -> str:
        return self._strategy.debug_repr(self._value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (BodyHandle, BareBody)):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BodyHandle(tag={self._tag!r}, value={self.debug_repr()})"


class BareBody:
    """Raw JSON body for an unknown tag or a body that failed its schema."""

    __slots__ = ("_tag", "_raw", "_error")

    def __init__(self, tag: str, raw: dict[str, Any], error: Optional[BodySchemaMismatchError] = None):
        self._tag = tag
        self._raw = copy.deepcopy(raw)
        self._error = error

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def raw(self) -> dict[str, Any]:
        return copy.deepcopy(self._raw)

    @property
    def error(self) -> Optional[BodySchemaMismatchError]:
        """The schema mismatch that caused the fallback, None for an unknown tag."""
        return self._error

    @property
    def recognized(self) -> bool:
        return False

    def downcast(self, cls: type[T]) -> Optional[T]:
        return None

    def equals(self, other: Any) -> bool:
        return isinstance(other, BareBody) and self._tag == other._tag and self._raw == other._raw

    def encode(self) -> dict[str, Any]:
        return copy.deepcopy(self._raw)

    def debug_repr(self) -> str:
        return json.dumps(self._raw, separators=(",", ":"), ensure_ascii=False)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (BodyHandle, BareBody)):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BareBody(tag={self._tag!r}, raw={self.debug_repr()})"


Body = Union[BodyHandle, BareBody]
