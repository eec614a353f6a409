"""
Batch codec: JSON upload payload <-> envelopes with polymorphic bodies.

Decoding policy:
- Invalid JSON, a non-array payload or a non-object element fails the batch
  (MalformedBatchError).
- An element with missing or mistyped envelope fields is skipped and recorded
  (MalformedEnvelopeError), or raised when fail_fast is set.
- A registered type whose body does not fit its schema keeps the raw body
  (BareBody) and is recorded (BodySchemaMismatchError).
- An unregistered type keeps the raw body; nothing is recorded.
"""

import asyncio
import json
from typing import Any, Iterable, Iterator, Optional, TypeVar, Union

from pydantic import ValidationError

from reporting_api.body import BareBody, Body, BodyHandle
from reporting_api.config import ReportingSettings, get_settings
from reporting_api.errors import (
    BodySchemaMismatchError,
    MalformedBatchError,
    MalformedEnvelopeError,
    ReportingError,
)
from reporting_api.logging import get_logger
from reporting_api.models.envelope import Envelope, RawEnvelope
from reporting_api.registry import SchemaRegistry

logger = get_logger(__name__)

T = TypeVar("T")


class Diagnostic:
    """A recoverable problem with one element of a batch."""

    __slots__ = ("index", "error", "tag")

    def __init__(self, index: int, error: ReportingError, tag: Optional[str] = None):
        self.index = index
        self.error = error
        self.tag = tag

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    def __repr__(self) -> str:
        return f"Diagnostic(index={self.index}, code={self.code!r}, tag={self.tag!r})"


class DecodedBatch:
    __slots__ = ("envelopes", "diagnostics")

    def __init__(self, envelopes: list[Envelope], diagnostics: list[Diagnostic]):
        self.envelopes = envelopes
        self.diagnostics = diagnostics

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def with_tag(self, tag: str) -> list[Envelope]:
        return [e for e in self.envelopes if e.type == tag]

    def bodies(self, cls: type[T]) -> Iterator[T]:
        """Yield every body that downcasts to cls, in batch order."""
        for envelope in self.envelopes:
            value = envelope.body.downcast(cls)
            if value is not None:
                yield value

    def __iter__(self) -> Iterator[Envelope]:
        return iter(self.envelopes)

    def __len__(self) -> int:
        return len(self.envelopes)

    def __getitem__(self, index: int) -> Envelope:
        return self.envelopes[index]

    def __repr__(self) -> str:
        return f"DecodedBatch(envelopes={len(self.envelopes)}, diagnostics={self.diagnostics!r})"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON number")


def _validation_details(e: ValidationError) -> dict[str, Any]:
    return {"errors": e.errors(include_url=False, include_context=False, include_input=False)}


class ReportCodec:
    def __init__(
        self,
        registry: SchemaRegistry,
        settings: Optional[ReportingSettings] = None,
        *,
        fail_fast: Optional[bool] = None,
    ):
        settings = settings or get_settings()
        self._registry = registry
        self._fail_fast = settings.fail_fast if fail_fast is None else fail_fast

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    @property
    def fail_fast(self) -> bool:
        return self._fail_fast

    def decode_batch(self, data: Union[bytes, bytearray, str]) -> DecodedBatch:
        items = self._parse(data)
        envelopes: list[Envelope] = []
        diagnostics: list[Diagnostic] = []
        for index, item in enumerate(items):
            try:
                envelope, diagnostic = self.decode_envelope(item, index)
            except MalformedEnvelopeError as e:
                if self._fail_fast:
                    raise
                tag = item.get("type")
                logger.warning("malformed_envelope", index=index, error=e.message)
                diagnostics.append(Diagnostic(index, e, tag if isinstance(tag, str) else None))
                continue
            envelopes.append(envelope)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        logger.debug("batch_decoded", reports=len(envelopes), diagnostics=len(diagnostics))
        return DecodedBatch(envelopes, diagnostics)

    async def decode_batch_async(self, data: Union[bytes, bytearray, str]) -> DecodedBatch:
        """decode_batch() in a worker thread, for use from an event loop."""
        return await asyncio.to_thread(self.decode_batch, data)

    def decode_envelope(self, item: Any, index: int = 0) -> tuple[Envelope, Optional[Diagnostic]]:
        """Decode one wire element. Raises MalformedEnvelopeError."""
        try:
            raw = RawEnvelope.model_validate(item)
        except ValidationError as e:
            raise MalformedEnvelopeError(
                f"report {index} has invalid envelope fields: {e.error_count()} error(s)",
                index,
                _validation_details(e),
            ) from e

        body, diagnostic = self._decode_body(raw.type, raw.body, index)
        fields = raw.model_dump(exclude={"body"})
        return Envelope(**fields, body=body), diagnostic

    def _decode_body(self, tag: str, raw: dict[str, Any], index: int) -> tuple[Body, Optional[Diagnostic]]:
        strategy = self._registry.lookup(tag)
        if strategy is None:
            logger.debug("unknown_report_type", index=index, tag=tag)
            return BareBody(tag, raw), None

        try:
            value = strategy.decode(tag, raw)
        except BodySchemaMismatchError as e:
            error = e
        except Exception as e:
            # A failing third-party strategy only costs its own body.
            error = BodySchemaMismatchError(tag, f"{type(e).__name__}: {e}")
            error.__cause__ = e
        else:
            return BodyHandle(tag, value, strategy), None

        error.details["index"] = index
        logger.warning("body_schema_mismatch", index=index, tag=tag, error=error.message)
        return BareBody(tag, raw, error), Diagnostic(index, error, tag)

    def encode_envelope(self, envelope: Envelope) -> dict[str, Any]:
        return encode_envelope(envelope)

    def encode_batch(self, envelopes: Iterable[Envelope]) -> bytes:
        return encode_batch(envelopes)

    @staticmethod
    def _parse(data: Union[bytes, bytearray, str]) -> list[dict[str, Any]]:
        try:
            items = json.loads(data, parse_constant=_reject_constant)
        except ValueError as e:
            raise MalformedBatchError(f"payload is not valid JSON: {e}") from e
        except RecursionError as e:
            raise MalformedBatchError("payload is nested too deeply") from e
        if not isinstance(items, list):
            raise MalformedBatchError(
                f"payload must be a JSON array of reports, got {type(items).__name__}"
            )
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise MalformedBatchError(
                    f"report {index} is not a JSON object", {"index": index}
                )
        return items


def encode_envelope(envelope: Envelope) -> dict[str, Any]:
    out: dict[str, Any] = {
        "type": envelope.type,
        "url": envelope.url,
        "user_agent": envelope.user_agent,
        "age": envelope.age,
    }
    if envelope.destination is not None:
        out["destination"] = envelope.destination
    out.update(envelope.model_extra or {})
    out["body"] = envelope.body.encode()
    return out


def encode_batch(envelopes: Iterable[Envelope]) -> bytes:
    """Encode envelopes as a compact UTF-8 JSON array."""
    payload = [encode_envelope(e) for e in envelopes]
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")


def decode_batch(
    data: Union[bytes, bytearray, str],
    registry: SchemaRegistry,
    *,
    fail_fast: Optional[bool] = None,
) -> DecodedBatch:
    return ReportCodec(registry, fail_fast=fail_fast).decode_batch(data)
