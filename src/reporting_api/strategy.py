"""
Body strategies: the decode/encode/equals/debug operations for one report type.

A strategy is registered under a tag in a SchemaRegistry. The codec never
looks at concrete body types; it only calls the strategy found for the tag.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ValidationError

from reporting_api.errors import BodySchemaMismatchError


class BodyStrategy(ABC):
    """Capability interface implemented once per concrete body type."""

    #: The concrete type produced by decode(); downcasts are checked against it.
    body_type: type

    @abstractmethod
    def decode(self, tag: str, raw: dict[str, Any]) -> Any:
        """Decode a raw JSON body. Raises BodySchemaMismatchError if it does not fit."""

    @abstractmethod
    def encode(self, value: Any) -> dict[str, Any]:
        """Encode a value of body_type back to a JSON object."""

    def equals(self, a: Any, b: Any) -> bool:
        return a == b

    def debug_repr(self, value: Any) -> str:
        return repr(value)


class ModelStrategy(BodyStrategy):
    """Strategy for a pydantic model body."""

    def __init__(self, model: type[BaseModel], exclude_unset: bool = True):
        self.body_type = model
        self._exclude_unset = exclude_unset

    def decode(self, tag: str, raw: dict[str, Any]) -> BaseModel:
        try:
            return self.body_type.model_validate(raw)
        except ValidationError as e:
            raise BodySchemaMismatchError(
                tag,
                f"body does not match {self.body_type.__name__}: {e.error_count()} error(s)",
                {"errors": e.errors(include_url=False, include_context=False, include_input=False)},
            ) from e

    def encode(self, value: BaseModel) -> dict[str, Any]:
        return value.model_dump(mode="json", by_alias=True, exclude_unset=self._exclude_unset)

    def __repr__(self) -> str:
        return f"ModelStrategy({self.body_type.__name__})"
