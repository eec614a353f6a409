"""
Report envelope: the fields every report carries, around a type-specific body.
"""

from datetime import timedelta
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from reporting_api.body import BareBody, BodyHandle

T = TypeVar("T")


class RawEnvelope(BaseModel):
    """One wire element before its body is decoded."""

    model_config = ConfigDict(strict=True, extra="allow")

    type: str = Field(min_length=1)
    url: str = ""
    user_agent: str = ""
    age: int = Field(default=0, ge=0)  # milliseconds
    destination: Optional[str] = None
    body: dict[str, Any]


class Envelope(BaseModel):
    """A decoded report. Immutable; use rebuild() to derive a changed copy."""

    model_config = ConfigDict(frozen=True, extra="allow", arbitrary_types_allowed=True)

    type: str
    url: str = ""
    user_agent: str = ""
    age: int = Field(default=0, ge=0)  # milliseconds
    destination: Optional[str] = None
    body: Union[BodyHandle, BareBody]

    # Frozen but unhashable: bodies compare by value and define no hash.
    __hash__ = None  # type: ignore[assignment]

    @model_validator(mode="after")
    def _body_matches_type(self) -> "Envelope":
        if self.body.tag != self.type:
            raise ValueError(f"body tag {self.body.tag!r} does not match report type {self.type!r}")
        return self

    @classmethod
    def for_body(cls, body: Union[BodyHandle, BareBody], **fields: Any) -> "Envelope":
        """Build an outgoing envelope; the report type comes from the body."""
        return cls(type=body.tag, body=body, **fields)

    @property
    def age_delta(self) -> timedelta:
        return timedelta(milliseconds=self.age)

    def body_as(self, cls: type[T]) -> Optional[T]:
        return self.body.downcast(cls)

    def rebuild(self, **changes: Any) -> "Envelope":
        data = {name: getattr(self, name) for name in self.__class__.model_fields}
        data.update(self.model_extra or {})
        data.update(changes)
        if "body" in changes and "type" not in changes:
            data["type"] = changes["body"].tag
        return self.__class__(**data)
