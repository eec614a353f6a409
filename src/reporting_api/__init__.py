"""
reporting-api: Reporting API upload batches for Python.

Decode a JSON batch of reports into envelopes whose bodies are typed through
an extensible registry of report types (NEL, CSP, crash, deprecation,
intervention, or your own), and encode them back.
"""

from reporting_api.body import BareBody, BodyHandle
from reporting_api.codec import DecodedBatch, Diagnostic, ReportCodec, decode_batch, encode_batch
from reporting_api.config import ReportingSettings, get_settings
from reporting_api.errors import (
    BodySchemaMismatchError,
    DuplicateTagError,
    MalformedBatchError,
    MalformedEnvelopeError,
    RegistryFrozenError,
    ReportingError,
)
from reporting_api.logging import setup_logging
from reporting_api.models import NEL, CSPViolation, Crash, Deprecation, Envelope, Intervention
from reporting_api.registry import SchemaRegistry, create_registry
from reporting_api.strategy import BodyStrategy, ModelStrategy

__version__ = "0.1.0"
__all__ = [
    "BareBody",
    "BodyHandle",
    "BodySchemaMismatchError",
    "BodyStrategy",
    "CSPViolation",
    "Crash",
    "DecodedBatch",
    "Deprecation",
    "Diagnostic",
    "DuplicateTagError",
    "Envelope",
    "Intervention",
    "MalformedBatchError",
    "MalformedEnvelopeError",
    "ModelStrategy",
    "NEL",
    "RegistryFrozenError",
    "ReportCodec",
    "ReportingError",
    "ReportingSettings",
    "SchemaRegistry",
    "create_registry",
    "decode_batch",
    "encode_batch",
    "get_settings",
    "setup_logging",
]
