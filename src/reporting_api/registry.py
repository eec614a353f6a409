"""
Schema registry: append-only mapping from report type tag to body strategy.

Populate it during startup, optionally freeze() it, then share it between
any number of decoding threads or tasks. Lookups never lock.
"""

import threading
from typing import Any, Optional

from pydantic import BaseModel

from reporting_api.body import BodyHandle
from reporting_api.errors import DuplicateTagError, RegistryFrozenError
from reporting_api.logging import get_logger
from reporting_api.strategy import BodyStrategy, ModelStrategy

logger = get_logger(__name__)


class SchemaRegistry:
    def __init__(self) -> None:
        self._strategies: dict[str, BodyStrategy] = {}
        self._lock = threading.Lock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, tag: str, strategy: BodyStrategy) -> None:
        """Register a strategy for a tag. Duplicates are rejected, the first one stays."""
        if not isinstance(tag, str) or not tag:
            raise ValueError("tag must be a non-empty string")
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(tag)
            if tag in self._strategies:
                raise DuplicateTagError(tag)
            # Copy-on-write: lookup() always reads a complete dict.
            strategies = dict(self._strategies)
            strategies[tag] = strategy
            self._strategies = strategies
        logger.debug("report_type_registered", tag=tag, strategy=repr(strategy))

    def register_model(self, model: type[BaseModel], tag: Optional[str] = None) -> BodyStrategy:
        """Register a pydantic model body. The tag defaults to model.report_type."""
        tag = tag or getattr(model, "report_type", None)
        if not tag:
            raise ValueError(f"{model.__name__} has no report_type; pass tag explicitly")
        strategy = ModelStrategy(model)
        self.register(tag, strategy)
        return strategy

    def lookup(self, tag: str) -> Optional[BodyStrategy]:
        return self._strategies.get(tag)

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    def tags(self) -> list[str]:
        return list(self._strategies)

    def wrap(self, value: Any, tag: Optional[str] = None) -> BodyHandle:
        """Build a handle for an outgoing body value."""
        if tag is None:
            matches = [t for t, s in self._strategies.items() if type(value) is s.body_type]
            if len(matches) != 1:
                raise LookupError(
                    f"cannot infer report type for {type(value).__name__}: "
                    f"{'no' if not matches else 'ambiguous'} registration"
                )
            tag = matches[0]
        strategy = self.lookup(tag)
        if strategy is None:
            raise LookupError(f"report type {tag!r} is not registered")
        return BodyHandle(tag, value, strategy)

    def __contains__(self, tag: object) -> bool:
        return tag in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def __repr__(self) -> str:
        return f"SchemaRegistry(tags={self.tags()!r}, frozen={self._frozen})"


def create_registry(builtin: bool = True) -> SchemaRegistry:
    """New registry, with the built-in report types registered unless builtin=False."""
    registry = SchemaRegistry()
    if builtin:
        from reporting_api.models import register_builtin_types
        register_builtin_types(registry)
    return registry
